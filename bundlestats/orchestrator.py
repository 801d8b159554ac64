"""Pipeline orchestration for a single bundle size run."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Protocol

from .analyzers import BundleAnalyzer
from .config import BundleStatsConfig
from .errors import BundleStatsError
from .github.comments import CommentManager
from .github.context import PRContext
from .github.outputs import write_outputs
from .logging import get_logger
from .models import AnalysisResult
from .parser import Manifest, StatsParser
from .postproc.badges import BadgeRenderer
from .postproc.report import ReportFormatter


class CommentPublisher(Protocol):
    """The subset of CommentManager the orchestrator relies on."""

    def post_processing_comment(self, body: str) -> int: ...

    def delete_processing_comments(self) -> int: ...

    def post_comment(self, body: str) -> int: ...


@dataclass(frozen=True)
class BundleReport:
    """Rendered artifacts for one analysis."""

    result: AnalysisResult
    comment_body: str
    badge_svg: str
    status_badge_svg: str

    @property
    def exceeded(self) -> bool:
        return self.result.threshold.any_exceeded


@dataclass(frozen=True)
class RunOutcome:
    """Result of a full run, including publishing."""

    report: BundleReport
    failed: bool
    comment_id: Optional[int] = None

    @property
    def outputs(self) -> Dict[str, str]:
        return {
            "comment-body": self.report.comment_body,
            "exceeded": "true" if self.report.exceeded else "false",
            "badge-svg": self.report.badge_svg,
        }


class Orchestrator:
    """Coordinates parse -> analyze -> render -> publish."""

    def __init__(
        self,
        parser: StatsParser | None = None,
        analyzer: BundleAnalyzer | None = None,
        formatter: ReportFormatter | None = None,
        badge_renderer: BadgeRenderer | None = None,
        comment_manager_factory: Callable[[PRContext], CommentPublisher] | None = None,
        output_writer: Callable[[Mapping[str, str]], object] | None = None,
    ) -> None:
        self.parser = parser or StatsParser()
        self.analyzer = analyzer or BundleAnalyzer()
        self.formatter = formatter or ReportFormatter()
        self.badge_renderer = badge_renderer or BadgeRenderer()
        self._comment_manager_factory = comment_manager_factory or CommentManager
        self._output_writer = output_writer or write_outputs
        self.logger = get_logger("orchestrator")

    def run(
        self,
        config: BundleStatsConfig,
        context: PRContext | None = None,
        *,
        publish: bool = True,
    ) -> RunOutcome:
        """Run the full pipeline; comment publishing only happens with a PR context."""
        self.logger.debug("Config: %s", config.as_dict())

        manager: CommentPublisher | None = None
        if publish and context is not None:
            manager = self._comment_manager_factory(context)
        elif publish:
            self.logger.info("Not running in a pull request context, skipping PR comment")

        # A failed placeholder post can still leave a comment behind; cleanup
        # below runs whenever a manager exists.
        if manager is not None:
            try:
                processing_id = manager.post_processing_comment(self.formatter.format_processing())
            except BundleStatsError as exc:
                self.logger.warning("Failed to post processing comment, continuing... (%s)", exc)
            else:
                self.logger.debug("Posted processing comment: %s", processing_id)

        try:
            report = self.build_report(self.load_manifest(config.stats_path), config)
        except BundleStatsError:
            if manager is not None:
                self._cleanup_placeholders(manager)
            raise

        comment_id = None
        if manager is not None:
            self._cleanup_placeholders(manager)
            comment_id = manager.post_comment(report.comment_body)
            self.logger.info("Successfully posted bundle size report")

        failed = report.exceeded and config.fail_on_threshold_exceed
        outcome = RunOutcome(report=report, failed=failed, comment_id=comment_id)
        self._output_writer(outcome.outputs)

        if failed:
            self.logger.error("Bundle size thresholds exceeded")
        return outcome

    def load_manifest(self, stats_path: Path) -> Manifest:
        self.logger.info("Reading stats from: %s", stats_path)
        manifest = asyncio.run(self.parser.parse_file(stats_path))
        self.logger.info("Found %d assets", len(manifest.assets))
        if manifest.skipped_assets:
            self.logger.warning("Skipped %d malformed asset entries", manifest.skipped_assets)
        return manifest

    def build_report(self, manifest: Manifest, config: BundleStatsConfig) -> BundleReport:
        """Analyze a manifest and render both outputs."""
        result = self.analyzer.analyze(manifest, config)
        summary = result.summary
        self.logger.info("Analysis complete:")
        self.logger.info("  Total size: %s", summary.total_size_text)
        self.logger.info("  File count: %d", summary.file_count)
        self.logger.info("  Files exceeding limit: %d", summary.exceeded_file_count)

        return BundleReport(
            result=result,
            comment_body=self.formatter.format(result, config),
            badge_svg=self.badge_renderer.generate(result),
            status_badge_svg=self.badge_renderer.generate_status(result),
        )

    def _cleanup_placeholders(self, manager: CommentPublisher) -> None:
        try:
            deleted = manager.delete_processing_comments()
        except BundleStatsError as exc:
            self._log_exception("Failed to delete processing comments", exc, level=logging.WARNING)
        else:
            self.logger.debug("Deleted %d processing comment(s)", deleted)

    def _log_exception(self, message: str, exc: Exception, *, level: int = logging.ERROR) -> None:
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.log(level, "%s: %s", message, exc, exc_info=exc)
        else:
            self.logger.log(level, "%s: %s", message, exc)


__all__ = ["BundleReport", "Orchestrator", "RunOutcome"]
