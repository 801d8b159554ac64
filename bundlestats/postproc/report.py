"""PR comment rendering for analysis results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ..config import BundleStatsConfig
from ..models import AnalysisResult, AnalyzedAsset
from ..sizes import format_file_size
from .markdown import create_details_section, create_table, escape_markdown, status_emoji

# Shared with the comment manager: these locate our comments on the PR.
COMMENT_IDENTIFIER = "<!-- bundle-stats-action -->"
PROCESSING_IDENTIFIER = "<!-- bundle-stats-action-processing -->"


@dataclass
class ReportFormatter:
    """Formats analysis results into the bundle size PR comment."""

    visible_files: int = 20
    listed_violations: int = 5

    def format(self, result: AnalysisResult, config: BundleStatsConfig) -> str:
        parts: List[str] = [
            COMMENT_IDENTIFIER,
            self._header(result),
            "",
            self._summary(result, config),
            "",
        ]

        if result.threshold.any_exceeded:
            parts.append(self._threshold_warnings(result, config))
            parts.append("")

        parts.append(self._file_list(result))
        return "\n".join(parts)

    def format_processing(self) -> str:
        """Placeholder posted while the analysis runs."""
        return f"{PROCESSING_IDENTIFIER}\n## 📊 Bundle Size Report\n\n⏳ Analyzing bundle size..."

    @staticmethod
    def _header(result: AnalysisResult) -> str:
        emoji = "⚠️" if result.threshold.any_exceeded else "✅"
        return f"## {emoji} Bundle Size Report"

    @staticmethod
    def _summary(result: AnalysisResult, config: BundleStatsConfig) -> str:
        summary = result.summary
        threshold = result.threshold
        rows = [
            [
                "**Total Size**",
                summary.total_size_text,
                status_emoji(not threshold.total_exceeded),
                (
                    f"Exceeds limit of {format_file_size(config.total_size_threshold)}"
                    if threshold.total_exceeded
                    else "Within limit"
                ),
            ],
            [
                "**Files**",
                str(summary.file_count),
                status_emoji(summary.exceeded_file_count == 0),
                (
                    f"{summary.exceeded_file_count} file(s) exceed individual limit"
                    if summary.exceeded_file_count > 0
                    else "All within limit"
                ),
            ],
        ]
        return create_table(
            ["Metric", "Value", "Status", "Details"],
            rows,
            ["left", "right", "center", "left"],
        )

    def _threshold_warnings(self, result: AnalysisResult, config: BundleStatsConfig) -> str:
        warnings: List[str] = []
        threshold = result.threshold

        if threshold.total_exceeded:
            warnings.append(
                f"❌ **Total bundle size ({result.summary.total_size_text}) exceeds limit of "
                f"{format_file_size(config.total_size_threshold)}**"
            )

        if threshold.individual_exceeded:
            names = threshold.individual_exceeded
            file_list = "\n".join(
                f"  - {escape_markdown(name)}" for name in names[: self.listed_violations]
            )
            hidden = len(names) - self.listed_violations
            more = f"\n  - ...and {hidden} more" if hidden > 0 else ""
            warnings.append(
                f"❌ **Files exceeding {format_file_size(config.bundle_size_threshold)} limit:**\n"
                f"{file_list}{more}"
            )

        return "### ⚠️ Threshold Warnings\n\n" + "\n\n".join(warnings)

    def _file_list(self, result: AnalysisResult) -> str:
        top_files = result.assets[: self.visible_files]
        remaining = result.assets[self.visible_files :]

        content = "### 📦 File Sizes\n\n" + self._file_table(top_files)
        if remaining:
            content += "\n\n" + create_details_section(
                f"Show {len(remaining)} more files",
                self._file_table(remaining),
            )
        return content

    def _file_table(self, assets: Sequence[AnalyzedAsset]) -> str:
        rows = [
            [self._asset_name(asset), asset.size_text, status_emoji(not asset.exceeded)]
            for asset in assets
        ]
        return create_table(["File", "Size", "Status"], rows, ["left", "right", "center"])

    @staticmethod
    def _asset_name(asset: AnalyzedAsset) -> str:
        file_name = escape_markdown(asset.name)
        if asset.chunk_names:
            chunks = ", ".join(f"`{escape_markdown(name)}`" for name in asset.chunk_names)
            return f"{file_name} ({chunks})"
        return file_name


__all__ = ["COMMENT_IDENTIFIER", "PROCESSING_IDENTIFIER", "ReportFormatter"]
