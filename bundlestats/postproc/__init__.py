"""Renderers for the PR comment and status badge."""

from .badges import BadgeRenderer
from .report import COMMENT_IDENTIFIER, PROCESSING_IDENTIFIER, ReportFormatter

__all__ = ["BadgeRenderer", "COMMENT_IDENTIFIER", "PROCESSING_IDENTIFIER", "ReportFormatter"]
