"""GitHub integration: PR context, comment publishing and step outputs."""

from .comments import CommentManager
from .context import PRContext, resolve_pr_context, resolve_token
from .outputs import write_outputs

__all__ = ["CommentManager", "PRContext", "resolve_pr_context", "resolve_token", "write_outputs"]
