"""Tests for the PR comment report formatter."""

from __future__ import annotations

from pathlib import Path

from bundlestats.analyzers import BundleAnalyzer
from bundlestats.config import BundleStatsConfig
from bundlestats.models import AnalysisResult
from bundlestats.parser import StatsParser
from bundlestats.postproc import COMMENT_IDENTIFIER, PROCESSING_IDENTIFIER, ReportFormatter
from tests._fixtures.stats_builder import MIB, example_assets, stats


def _result(data, config: BundleStatsConfig) -> AnalysisResult:
    return BundleAnalyzer().analyze(StatsParser().parse_data(data), config)


def test_report_for_example_manifest(config: BundleStatsConfig) -> None:
    body = ReportFormatter().format(_result(stats(*example_assets()), config), config)

    assert body == "\n".join(
        [
            "<!-- bundle-stats-action -->",
            "## ⚠️ Bundle Size Report",
            "",
            "| Metric | Value | Status | Details |",
            "| :--- | ---: | :---: | :--- |",
            "| **Total Size** | 4.50 MB | ✅ | Within limit |",
            "| **Files** | 3 | ❌ | 1 file(s) exceed individual limit |",
            "",
            "### ⚠️ Threshold Warnings",
            "",
            "❌ **Files exceeding 2.00 MB limit:**",
            "  - vendor.js",
            "",
            "### 📦 File Sizes",
            "",
            "| File | Size | Status |",
            "| :--- | ---: | :---: |",
            "| vendor.js | 3.00 MB | ❌ |",
            "| main.js | 1.00 MB | ✅ |",
            "| styles.css | 512 KB | ✅ |",
        ]
    )


def test_report_within_limits_has_no_warnings(config: BundleStatsConfig) -> None:
    body = ReportFormatter().format(_result(stats(("app.js", 1024)), config), config)

    assert body.startswith(f"{COMMENT_IDENTIFIER}\n## ✅ Bundle Size Report\n")
    assert "Threshold Warnings" not in body
    assert "| **Files** | 1 | ✅ | All within limit |" in body


def test_report_total_exceeded(config: BundleStatsConfig) -> None:
    data = stats(("a.js", 4 * MIB), ("b.js", 4 * MIB), ("c.js", 4 * MIB))
    relaxed = BundleStatsConfig(
        stats_path=Path("webpack-stats.json"),
        bundle_size_threshold=5 * MIB,
        total_size_threshold=10 * MIB,
    )

    body = ReportFormatter().format(_result(data, relaxed), relaxed)

    assert "| **Total Size** | 12.0 MB | ❌ | Exceeds limit of 10.0 MB |" in body
    assert "❌ **Total bundle size (12.0 MB) exceeds limit of 10.0 MB**" in body
    assert "Files exceeding" not in body


def test_report_truncates_violation_list(config: BundleStatsConfig) -> None:
    data = stats(*[(f"chunk{index}.js", 3 * MIB - index) for index in range(8)])

    body = ReportFormatter().format(_result(data, config), config)

    assert "  - chunk4.js\n  - ...and 3 more" in body
    assert "  - chunk5.js" not in body


def test_report_collapses_files_beyond_visible_limit(config: BundleStatsConfig) -> None:
    data = stats(*[(f"file{index:02d}.js", 1000 - index) for index in range(25)])

    body = ReportFormatter().format(_result(data, config), config)

    visible, hidden = body.split("<details>")
    assert "file19.js" in visible
    assert "file20.js" not in visible
    assert hidden.startswith("\n<summary>Show 5 more files</summary>\n\n| File | Size | Status |")
    assert body.endswith("| file24.js | 976 B | ✅ |\n</details>")


def test_report_escapes_names_and_lists_chunks(config: BundleStatsConfig) -> None:
    data = stats(
        ("a|b<c>.js", 10),
        assetsByChunkName={"main": "a|b<c>.js"},
        namedChunkGroups={"app": {"assets": ["a|b<c>.js"]}},
    )

    body = ReportFormatter().format(_result(data, config), config)

    assert "| a\\|b&lt;c&gt;.js (`main`, `app`) | 10 B | ✅ |" in body


def test_report_for_empty_manifest(config: BundleStatsConfig) -> None:
    body = ReportFormatter().format(_result(stats(), config), config)

    assert "| **Total Size** | 0 B | ✅ | Within limit |" in body
    assert "| **Files** | 0 | ✅ | All within limit |" in body
    assert body.endswith("| File | Size | Status |\n| :--- | ---: | :---: |\n")


def test_processing_placeholder() -> None:
    body = ReportFormatter().format_processing()

    assert body.startswith(PROCESSING_IDENTIFIER)
    assert COMMENT_IDENTIFIER not in body
    assert body.endswith("⏳ Analyzing bundle size...")
