"""CLI entrypoints for bundlestats commands."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict

from .config import (
    BUNDLE_SIZE_THRESHOLD,
    FAIL_ON_THRESHOLD_EXCEED,
    STATS_PATH,
    TOTAL_SIZE_THRESHOLD,
    load_config,
)
from .errors import BundleStatsError, ErrorCode, create_error
from .github.comments import CommentManager
from .github.context import PRContext, resolve_pr_context, resolve_token
from .logging import configure_logging, get_logger
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bundlestats",
        description="Report webpack bundle sizes against configured thresholds.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze a webpack stats file and publish the report to the pull request.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    analyze_parser.add_argument(
        "--config",
        default=".",
        help="Path to .bundlestats.yml or the directory containing it (defaults to current directory).",
    )
    analyze_parser.add_argument("--stats-path", help="Path to webpack-stats.json.")
    analyze_parser.add_argument(
        "--bundle-size-threshold",
        help="Individual file size threshold in bytes.",
    )
    analyze_parser.add_argument(
        "--total-size-threshold",
        help="Total bundle size threshold in bytes.",
    )
    analyze_parser.add_argument(
        "--fail-on-threshold-exceed",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Exit non-zero when a threshold is exceeded.",
    )
    analyze_parser.add_argument(
        "--no-comment",
        action="store_true",
        help="Skip posting the PR comment even inside a pull request run.",
    )
    analyze_parser.add_argument("--report-file", help="Also write the markdown report to this file.")
    analyze_parser.add_argument("--badge-file", help="Also write the size badge SVG to this file.")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP analysis service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for bundlestats commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    verbose = bool(args.verbose) or os.environ.get("RUNNER_DEBUG") == "1"
    configure_logging(
        verbose=verbose,
        github_actions=os.environ.get("GITHUB_ACTIONS") == "true",
    )
    logger = get_logger("cli")

    if args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
        return

    try:
        config = load_config(Path(args.config), overrides=_overrides_from_args(args))
        context = None if args.no_comment else resolve_pr_context()
        orchestrator = Orchestrator(comment_manager_factory=_comment_manager_factory(context))
        outcome = orchestrator.run(config, context, publish=not args.no_comment)
    except BundleStatsError as exc:
        _report_error(logger, exc, verbose=verbose)
        parser.exit(1, f"{exc.message}\n")
    except Exception as exc:
        error = create_error(
            ErrorCode.UNKNOWN_ERROR,
            str(exc) or type(exc).__name__,
            "fatal",
            {"type": type(exc).__name__},
        )
        _report_error(logger, error, verbose=verbose)
        logger.debug("Original exception", exc_info=exc)
        parser.exit(
            1,
            f"bundlestats analyze failed: {error.message}\nRun with --verbose for more details.\n",
        )

    if args.report_file:
        Path(args.report_file).write_text(outcome.report.comment_body, encoding="utf-8")
    if args.badge_file:
        Path(args.badge_file).write_text(outcome.report.badge_svg, encoding="utf-8")

    if outcome.failed:
        parser.exit(1, "Bundle size thresholds exceeded\n")
    print(f"Total size: {outcome.report.result.summary.total_size_text}")


def _overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        STATS_PATH: args.stats_path,
        BUNDLE_SIZE_THRESHOLD: args.bundle_size_threshold,
        TOTAL_SIZE_THRESHOLD: args.total_size_threshold,
        FAIL_ON_THRESHOLD_EXCEED: args.fail_on_threshold_exceed,
    }


def _comment_manager_factory(context: PRContext | None):
    if context is None:
        return None
    token = resolve_token()

    def _factory(ctx: PRContext) -> CommentManager:
        return CommentManager(ctx, token=token)

    return _factory


def _report_error(logger, exc: BundleStatsError, *, verbose: bool) -> None:
    logger.error(exc.to_user_message())
    if exc.is_fatal:
        logger.error(exc.message)
    else:
        logger.warning(exc.message)
    if verbose:
        if exc.details is not None:
            logger.debug("Error details: %s", json.dumps(exc.details, indent=2, default=str))
        logger.debug("Stack trace", exc_info=exc)


if __name__ == "__main__":
    main(sys.argv[1:])
