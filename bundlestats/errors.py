"""Classified errors shared by the parser, analyzer, config and publishing layers."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Literal, Optional

ErrorLevel = Literal["fatal", "error", "warning", "info"]


class ErrorCode(str, Enum):
    """Closed set of failure codes."""

    # File handling
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    FILE_READ_ERROR = "FILE_READ_ERROR"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"

    # Stats decoding
    JSON_PARSE_ERROR = "JSON_PARSE_ERROR"
    INVALID_STATS_FORMAT = "INVALID_STATS_FORMAT"

    # GitHub API
    GITHUB_API_ERROR = "GITHUB_API_ERROR"
    RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"

    # Configuration
    INVALID_CONFIG = "INVALID_CONFIG"
    INVALID_THRESHOLD = "INVALID_THRESHOLD"

    # Runtime
    MEMORY_LIMIT_ERROR = "MEMORY_LIMIT_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


_DEFAULT_LEVELS: Dict[ErrorCode, ErrorLevel] = {
    ErrorCode.FILE_NOT_FOUND: "fatal",
    ErrorCode.FILE_READ_ERROR: "fatal",
    ErrorCode.FILE_TOO_LARGE: "fatal",
    ErrorCode.JSON_PARSE_ERROR: "fatal",
    ErrorCode.INVALID_STATS_FORMAT: "fatal",
    ErrorCode.INVALID_CONFIG: "fatal",
    ErrorCode.INVALID_THRESHOLD: "fatal",
    ErrorCode.MEMORY_LIMIT_ERROR: "fatal",
}

_USER_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.FILE_NOT_FOUND: (
        "📁 Could not find the stats file. Please ensure the webpack build has completed "
        "and the file exists at the specified path."
    ),
    ErrorCode.FILE_READ_ERROR: (
        "📁 The stats file exists but could not be read. Check file permissions and encoding (UTF-8)."
    ),
    ErrorCode.FILE_TOO_LARGE: (
        "📏 The stats file is too large to process. Consider using webpack's stats options "
        "to reduce file size."
    ),
    ErrorCode.JSON_PARSE_ERROR: (
        "❌ Failed to parse the stats file. Please ensure it contains valid JSON."
    ),
    ErrorCode.INVALID_STATS_FORMAT: (
        "⚠️  The stats file format is invalid. Please ensure it's a webpack-stats.json file "
        "with an 'assets' array."
    ),
    ErrorCode.GITHUB_API_ERROR: (
        "🔌 Failed to communicate with GitHub API. Please check your GITHUB_TOKEN permissions."
    ),
    ErrorCode.RATE_LIMIT_ERROR: "⏱️  GitHub API rate limit exceeded. Please try again later.",
    ErrorCode.COMMENT_NOT_FOUND: (
        "🔎 The bundle size comment could not be found. It may have been deleted; "
        "re-run the job to post a new one."
    ),
    ErrorCode.INVALID_CONFIG: (
        "⚙️  Invalid configuration. Check the action inputs and .bundlestats.yml for typos "
        "and unsupported values."
    ),
    ErrorCode.INVALID_THRESHOLD: (
        "⚙️  Invalid threshold configuration. Please ensure threshold values are positive numbers."
    ),
    ErrorCode.MEMORY_LIMIT_ERROR: (
        "💾 Ran out of memory while processing the stats file. Reduce the stats output "
        "(for example `stats: { modules: false }`)."
    ),
}


class BundleStatsError(RuntimeError):
    """Error carrying a code, a severity level and optional structured context."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        level: ErrorLevel = "error",
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.level = level
        self.details = details

    @property
    def is_fatal(self) -> bool:
        return self.level == "fatal"

    def to_user_message(self) -> str:
        """Return remediation text suitable for CI logs."""
        known = _USER_MESSAGES.get(self.code)
        if known is not None:
            return known
        return f"❌ An unexpected error occurred: {self.message}"

    def __repr__(self) -> str:
        return f"BundleStatsError(code={self.code.value!r}, level={self.level!r}, message={self.message!r})"


def create_error(
    code: ErrorCode,
    message: str,
    level: Optional[ErrorLevel] = None,
    details: Optional[Any] = None,
) -> BundleStatsError:
    """Build a BundleStatsError, defaulting the level from the code."""
    resolved = level or _DEFAULT_LEVELS.get(code, "error")
    return BundleStatsError(message, code, resolved, details)


__all__ = ["BundleStatsError", "ErrorCode", "ErrorLevel", "create_error"]
