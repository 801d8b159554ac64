"""Markdown building blocks for PR comments."""

from __future__ import annotations

from typing import Literal, Optional, Sequence

Alignment = Literal["left", "center", "right"]

# Order matters: "|" first, and the entity replacements must not be re-escaped.
_ESCAPES = (
    ("|", "\\|"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)

_ALIGN_MARKERS = {"left": ":---", "center": ":---:", "right": "---:"}


def escape_markdown(text: str) -> str:
    """Escape characters that break markdown table cells or inject HTML."""
    for needle, replacement in _ESCAPES:
        text = text.replace(needle, replacement)
    return text


def create_details_section(summary: str, content: str, *, open: bool = False) -> str:
    """Wrap ``content`` in a collapsible ``<details>`` block."""
    open_attr = " open" if open else ""
    return f"<details{open_attr}>\n<summary>{escape_markdown(summary)}</summary>\n\n{content}\n</details>"


def create_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    alignment: Optional[Sequence[Alignment]] = None,
) -> str:
    alignment = alignment or ()
    markers = [
        _ALIGN_MARKERS.get(alignment[index] if index < len(alignment) else "left", ":---")
        for index in range(len(headers))
    ]
    header_row = f"| {' | '.join(headers)} |"
    align_row = f"| {' | '.join(markers)} |"
    data_rows = "\n".join(f"| {' | '.join(row)} |" for row in rows)
    return f"{header_row}\n{align_row}\n{data_rows}"


def status_emoji(is_good: bool, good: str = "✅", bad: str = "❌") -> str:
    return good if is_good else bad


__all__ = ["create_details_section", "create_table", "escape_markdown", "status_emoji"]
