"""Tests for the webpack stats parser."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import pytest

from bundlestats.errors import BundleStatsError, ErrorCode
from bundlestats.parser import Manifest, StatsParser
from tests._fixtures.stats_builder import FIXTURES_DIR, stats, write_stats


def test_parse_file_reads_valid_fixture(stats_parser: StatsParser) -> None:
    manifest = asyncio.run(stats_parser.parse_file(FIXTURES_DIR / "webpack-stats-valid.json"))

    assert isinstance(manifest, Manifest)
    assert manifest.version == "5.89.0"
    assert len(manifest.assets) == 5
    assert manifest.assets[0].name == "main.a1b2c3.js"
    assert manifest.assets[0].size == 1048576
    assert [chunk.names for chunk in manifest.chunks] == [["main"], ["vendor"]]
    assert dict(manifest.chunk_assets())["vendor"] == ["vendor.d4e5f6.js"]
    assert manifest.named_chunk_groups["main"].assets == ["vendor.d4e5f6.js", "main.a1b2c3.js"]


def test_parse_file_missing(tmp_path: Path, stats_parser: StatsParser) -> None:
    with pytest.raises(BundleStatsError) as excinfo:
        asyncio.run(stats_parser.parse_file(tmp_path / "nope.json"))

    assert excinfo.value.code is ErrorCode.FILE_NOT_FOUND
    assert excinfo.value.is_fatal


def test_parse_file_rejects_oversized_files(tmp_path: Path) -> None:
    path = write_stats(tmp_path, stats(("main.js", 10)))
    parser = StatsParser(max_file_size=8)

    with pytest.raises(BundleStatsError) as excinfo:
        asyncio.run(parser.parse_file(path))

    assert excinfo.value.code is ErrorCode.FILE_TOO_LARGE
    assert excinfo.value.details == {"size": path.stat().st_size, "max_size": 8}


def test_parse_file_rejects_undecodable_bytes(tmp_path: Path, stats_parser: StatsParser) -> None:
    path = tmp_path / "webpack-stats.json"
    path.write_bytes(b'{"assets": ["\xff\xfe"]}')

    with pytest.raises(BundleStatsError) as excinfo:
        asyncio.run(stats_parser.parse_file(path))

    assert excinfo.value.code is ErrorCode.FILE_READ_ERROR


def test_parse_file_without_assets_is_invalid(stats_parser: StatsParser) -> None:
    with pytest.raises(BundleStatsError) as excinfo:
        asyncio.run(stats_parser.parse_file(FIXTURES_DIR / "webpack-stats-invalid.json"))

    assert excinfo.value.code is ErrorCode.INVALID_STATS_FORMAT
    assert excinfo.value.details["type"] == "object"


def test_parse_reports_json_position(stats_parser: StatsParser) -> None:
    with pytest.raises(BundleStatsError) as excinfo:
        stats_parser.parse('{"assets": [\n  {"name": "a.js",}\n]}')

    error = excinfo.value
    assert error.code is ErrorCode.JSON_PARSE_ERROR
    assert error.details["line"] == 2
    assert "line 2" in error.message


@pytest.mark.parametrize("payload", ["[]", "null", '{"assets": {}}', '"assets"'])
def test_parse_requires_assets_array(stats_parser: StatsParser, payload: str) -> None:
    with pytest.raises(BundleStatsError) as excinfo:
        stats_parser.parse(payload)

    assert excinfo.value.code is ErrorCode.INVALID_STATS_FORMAT


def test_parse_accepts_empty_assets(stats_parser: StatsParser) -> None:
    manifest = stats_parser.parse('{"assets": []}')

    assert manifest.assets == ()
    assert manifest.chunks is None
    assert list(manifest.chunk_assets()) == []


def test_parse_data_skips_assets_without_name_or_size(
    stats_parser: StatsParser, caplog: pytest.LogCaptureFixture
) -> None:
    data = {
        "assets": [
            {"name": "main.js", "size": 100},
            {"name": "broken.js"},
            "not-an-object",
            {"name": 42, "size": 10},
            {"name": "flag.js", "size": True},
            {"name": "nan.js", "size": float("nan")},
            {"name": "vendor.js", "size": 200, "isOverSizeLimit": True},
        ]
    }

    with caplog.at_level(logging.WARNING, logger="bundlestats"):
        manifest = stats_parser.parse_data(data)

    assert [asset.name for asset in manifest.assets] == ["main.js", "vendor.js"]
    assert manifest.assets[1].is_over_size_limit is True
    assert manifest.skipped_assets == 5
    assert "Skipping asset entry #1 without a usable name/size" in caplog.text


def test_parse_data_drops_malformed_optional_sections(stats_parser: StatsParser) -> None:
    data = stats(
        ("main.js", 100),
        chunks="not-a-list",
        assetsByChunkName={"main": ["main.js"]},
        namedChunkGroups={"main": {"assets": [{"name": "main.js", "size": 100}]}},
        version=5,
        time="fast",
    )

    manifest = stats_parser.parse_data(data)

    assert manifest.chunks is None
    assert manifest.assets_by_chunk_name == {"main": ["main.js"]}
    assert manifest.named_chunk_groups["main"].assets == ["main.js"]
    assert manifest.version == "5"
    assert manifest.time is None


def test_parse_ignores_unknown_fields(stats_parser: StatsParser) -> None:
    content = json.dumps(
        stats(("main.js", 100), modules=[{"id": 1}], errors=[], outputPath="/dist")
    )

    manifest = stats_parser.parse(content)

    assert manifest.assets[0].emitted is True
    assert manifest.skipped_assets == 0


def test_parse_data_keeps_assets_with_odd_hint_fields(stats_parser: StatsParser) -> None:
    data = {
        "assets": [
            {"name": "big.js", "size": 1500.5},
            {"name": "hinted.js", "size": 5000, "chunks": None, "emitted": "yes"},
            {"name": "mixed.js", "size": "64", "chunks": [0, "main", None, {"id": 1}]},
            {"name": "flagged.js", "size": 7, "isOverSizeLimit": "no"},
        ]
    }

    manifest = stats_parser.parse_data(data)

    assert manifest.skipped_assets == 0
    big, hinted, mixed, flagged = manifest.assets
    assert big.size == 1500.5
    assert hinted.chunks == []
    assert hinted.emitted is None
    assert mixed.size == 64
    assert mixed.chunks == [0, "main"]
    assert flagged.is_over_size_limit is None


def test_parse_data_decodes_chunk_records_individually(stats_parser: StatsParser) -> None:
    data = stats(
        ("main.js", 10),
        ("x.js", 5),
        chunks=[
            {"id": 0, "names": ["main"], "files": ["main.js"], "size": 12.5},
            {"names": ["orphan"], "files": ["orphan.js"]},
            {"id": "x", "names": ["x", 3], "files": ["x.js"], "size": "big", "hash": 9},
        ],
    )

    manifest = stats_parser.parse_data(data)

    assert [chunk.id for chunk in manifest.chunks] == [0, "x"]
    assert manifest.chunks[0].size == 12.5
    assert manifest.chunks[1].names == ["x"]
    assert manifest.chunks[1].size == 0
    assert manifest.chunks[1].hash is None


def test_parse_data_decodes_chunk_name_sections_per_entry(stats_parser: StatsParser) -> None:
    data = stats(
        ("main.js", 10),
        assetsByChunkName={"main": ["main.js", 3], "vendor": "vendor.js", "odd": 5},
        namedChunkGroups={
            "app": {"chunks": [0, None], "assets": [{"size": 1}, {"name": "main.js"}, 7]},
            "broken": "not-a-group",
        },
    )

    manifest = stats_parser.parse_data(data)

    assert manifest.assets_by_chunk_name == {"main": ["main.js"], "vendor": "vendor.js"}
    assert list(manifest.named_chunk_groups) == ["app"]
    assert manifest.named_chunk_groups["app"].assets == ["main.js"]
    assert manifest.named_chunk_groups["app"].chunks == [0]


def test_parse_reports_memory_exhaustion(
    stats_parser: StatsParser, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _exhausted(_content: str):
        raise MemoryError

    monkeypatch.setattr("bundlestats.parser.stats_parser.json.loads", _exhausted)

    with pytest.raises(BundleStatsError) as excinfo:
        stats_parser.parse('{"assets": []}')

    assert excinfo.value.code is ErrorCode.MEMORY_LIMIT_ERROR
    assert excinfo.value.is_fatal
