"""SVG status badges for bundle size results."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..models import AnalysisResult

_CHAR_WIDTH = 7
_PADDING = 10


@dataclass(frozen=True)
class BadgePalette:
    background: str
    text: str
    value_background: str
    value_text: str


PALETTES: Dict[str, BadgePalette] = {
    "success": BadgePalette("#555", "#fff", "#4c1", "#fff"),
    "warning": BadgePalette("#555", "#fff", "#fe7d37", "#fff"),
    "error": BadgePalette("#555", "#fff", "#e05d44", "#fff"),
}


class BadgeRenderer:
    """Renders shields-style two-box badges from an analysis result."""

    TEMPLATE = "badge.svg.j2"

    def __init__(self, templates_dir: Path | None = None) -> None:
        directories = [str(templates_dir)] if templates_dir else []
        directories.append(str(Path(__file__).with_name("templates")))
        self._env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=select_autoescape(default=True),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def generate(self, result: AnalysisResult) -> str:
        """Badge showing the total bundle size."""
        return self.render("bundle size", result.summary.total_size_text, self.palette_for(result))

    def generate_status(self, result: AnalysisResult) -> str:
        """Badge showing passing/failing."""
        value = "failing" if result.threshold.any_exceeded else "passing"
        return self.render("bundle", value, self.palette_for(result))

    @staticmethod
    def palette_for(result: AnalysisResult) -> BadgePalette:
        if result.threshold.any_exceeded:
            return PALETTES["error"]
        # Unreachable while any_exceeded covers individual violations; kept for
        # an aggregate-only warning state.
        if result.summary.exceeded_file_count > 0:
            return PALETTES["warning"]
        return PALETTES["success"]

    def render(self, label: str, value: str, palette: BadgePalette) -> str:
        label_width = len(label) * _CHAR_WIDTH + _PADDING
        value_width = len(value) * _CHAR_WIDTH + _PADDING
        boxes: List[Dict[str, object]] = [
            {
                "text": label,
                "x": label_width * 5 + 5,
                "text_length": (label_width - _PADDING) * 10,
                "color": palette.text,
            },
            {
                "text": value,
                "x": label_width * 10 + value_width * 5 - 5,
                "text_length": (value_width - _PADDING) * 10,
                "color": palette.value_text,
            },
        ]
        template = self._env.get_template(self.TEMPLATE)
        return template.render(
            label=label,
            value=value,
            palette=palette,
            label_width=label_width,
            value_width=value_width,
            total_width=label_width + value_width,
            boxes=boxes,
        )


__all__ = ["BadgePalette", "BadgeRenderer", "PALETTES"]
