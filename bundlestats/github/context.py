"""Pull request context resolution from the GitHub Actions environment."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ..errors import ErrorCode, create_error
from ..logging import get_logger

_PR_EVENTS = {"pull_request", "pull_request_target"}

_LOGGER = get_logger("github")


@dataclass(frozen=True)
class PRContext:
    """Identifies the pull request the report belongs to."""

    owner: str
    repo: str
    pull_number: int

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.repo}"


def resolve_pr_context(env: Mapping[str, str] | None = None) -> Optional[PRContext]:
    """Return the PR context, or None when the run was not triggered by a pull request."""
    environ = os.environ if env is None else env

    event_name = environ.get("GITHUB_EVENT_NAME", "")
    if event_name not in _PR_EVENTS:
        _LOGGER.debug("Event %r is not a pull request event", event_name or None)
        return None

    owner, _, repo = environ.get("GITHUB_REPOSITORY", "").partition("/")
    if not owner or not repo:
        _LOGGER.debug("GITHUB_REPOSITORY is missing or malformed")
        return None

    event_path = environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        return None
    try:
        payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        _LOGGER.warning("Could not read event payload %s: %s", event_path, exc)
        return None

    pull_request = payload.get("pull_request") if isinstance(payload, dict) else None
    number = pull_request.get("number") if isinstance(pull_request, dict) else None
    if isinstance(number, bool) or not isinstance(number, int):
        return None

    return PRContext(owner=owner, repo=repo, pull_number=number)


def resolve_token(env: Mapping[str, str] | None = None) -> str:
    """Return the API token, preferring GITHUB_TOKEN over the github-token input."""
    environ = os.environ if env is None else env
    for key in ("GITHUB_TOKEN", "INPUT_GITHUB-TOKEN", "INPUT_GITHUB_TOKEN"):
        value = environ.get(key, "").strip()
        if value:
            return value
    raise create_error(
        ErrorCode.INVALID_CONFIG,
        "GITHUB_TOKEN is required",
        details={"checked": ["GITHUB_TOKEN", "INPUT_GITHUB-TOKEN"]},
    )


__all__ = ["PRContext", "resolve_pr_context", "resolve_token"]
