"""PR comment management through the GitHub CLI."""

from __future__ import annotations

import json
import os
import subprocess
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from ..errors import BundleStatsError, ErrorCode, create_error
from ..logging import get_logger
from ..postproc.report import COMMENT_IDENTIFIER, PROCESSING_IDENTIFIER
from .context import PRContext

Runner = Callable[..., str]


class CommentManager:
    """Creates, updates and cleans up the bundle size comment on a pull request."""

    PER_PAGE = 100

    def __init__(
        self,
        context: PRContext,
        *,
        token: str | None = None,
        runner: Runner | None = None,
    ) -> None:
        self.context = context
        self._token = token
        self._runner = runner or self._default_runner
        self.logger = get_logger("comments")

    def post_comment(self, body: str) -> int:
        """Update the existing report comment, or create one if none exists."""
        existing = self.find_comment()
        if existing is not None:
            self.logger.debug("Updating existing comment %s", existing["id"])
            data = self._api(
                f"{self._repo_path}/issues/comments/{existing['id']}",
                method="PATCH",
                payload={"body": body},
                action="Failed to post comment",
            )
        else:
            self.logger.debug("Creating new comment")
            data = self._api(
                f"{self._issue_path}/comments",
                method="POST",
                payload={"body": body},
                action="Failed to post comment",
            )
        return _comment_id(data)

    def post_processing_comment(self, body: str) -> int:
        """Always create a fresh placeholder comment."""
        data = self._api(
            f"{self._issue_path}/comments",
            method="POST",
            payload={"body": body},
            action="Failed to post processing comment",
        )
        return _comment_id(data)

    def delete_processing_comments(self) -> int:
        """Delete every placeholder comment on the PR; returns how many were removed."""
        deleted = 0
        for comment in self.list_comments():
            if PROCESSING_IDENTIFIER not in (comment.get("body") or ""):
                continue
            self.logger.debug("Deleting processing comment %s", comment["id"])
            self._api(
                f"{self._repo_path}/issues/comments/{comment['id']}",
                method="DELETE",
                action="Failed to delete processing comment",
            )
            deleted += 1
        return deleted

    def find_comment(self) -> Optional[Dict[str, Any]]:
        for comment in self.list_comments():
            if COMMENT_IDENTIFIER in (comment.get("body") or ""):
                return comment
        return None

    def list_comments(self) -> List[Dict[str, Any]]:
        data = self._api(
            f"{self._issue_path}/comments?per_page={self.PER_PAGE}",
            action="Failed to list comments",
        )
        if not isinstance(data, list):
            return []
        return [item for item in data if isinstance(item, dict) and "id" in item]

    # ------------------------------------------------------------------
    # Helpers

    @property
    def _repo_path(self) -> str:
        return f"repos/{self.context.owner}/{self.context.repo}"

    @property
    def _issue_path(self) -> str:
        return f"{self._repo_path}/issues/{self.context.pull_number}"

    def _api(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        payload: Mapping[str, Any] | None = None,
        action: str,
    ) -> Any:
        args = [
            "gh",
            "api",
            endpoint,
            "--method",
            method,
            "-H",
            "Accept: application/vnd.github+json",
        ]
        stdin = None
        if payload is not None:
            args.extend(["--input", "-"])
            stdin = json.dumps(payload)

        env = None
        if self._token:
            env = os.environ.copy()
            env["GH_TOKEN"] = self._token

        try:
            output = self._runner(args, env=env, input=stdin, capture_output=True)
        except (subprocess.CalledProcessError, OSError) as exc:
            raise self._handle_api_error(exc, action) from exc

        if not output or not output.strip():
            return None
        try:
            return json.loads(output)
        except json.JSONDecodeError as exc:
            raise create_error(
                ErrorCode.GITHUB_API_ERROR,
                f"{action}: unexpected response from gh api",
                details={"endpoint": endpoint, "output": output[:500]},
            ) from exc

    @staticmethod
    def _handle_api_error(exc: Exception, action: str) -> BundleStatsError:
        if isinstance(exc, subprocess.CalledProcessError):
            detail = (exc.stderr or exc.stdout or "").strip() or str(exc)
        elif isinstance(exc, FileNotFoundError):
            detail = "gh CLI not found on PATH"
        else:
            detail = str(exc)

        if "rate limit" in detail.lower():
            return create_error(
                ErrorCode.RATE_LIMIT_ERROR,
                f"{action}: GitHub API rate limit exceeded",
                "error",
                {"stderr": detail},
            )
        if "Resource not accessible" in detail:
            return create_error(
                ErrorCode.GITHUB_API_ERROR,
                f"{action}: Insufficient permissions. Ensure GITHUB_TOKEN has "
                "'pull-requests: write' permission",
                "fatal",
                {"stderr": detail},
            )
        return create_error(
            ErrorCode.GITHUB_API_ERROR,
            f"{action}: {detail}",
            "error",
            {"stderr": detail},
        )

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        env: dict[str, str] | None = None,
        input: str | None = None,
        capture_output: bool = False,
    ) -> str:
        completed = subprocess.run(
            list(args),
            env=env,
            input=input,
            check=True,
            text=True,
            capture_output=capture_output,
        )
        if capture_output:
            return completed.stdout
        return ""


def _comment_id(data: Any) -> int:
    if isinstance(data, dict) and isinstance(data.get("id"), int):
        return data["id"]
    raise create_error(
        ErrorCode.COMMENT_NOT_FOUND,
        "GitHub API response did not include a comment id",
        "error",
        {"response": data},
    )


__all__ = ["CommentManager"]
