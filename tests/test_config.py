"""Tests for bundlestats.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from bundlestats.config import BundleStatsConfig, build_config, load_config
from bundlestats.errors import BundleStatsError, ErrorCode


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path, env={})

    assert isinstance(config, BundleStatsConfig)
    assert config.stats_path == Path("webpack-stats.json")
    assert config.bundle_size_threshold == 2097152
    assert config.total_size_threshold == 10485760
    assert config.fail_on_threshold_exceed is True


def test_load_config_parses_yaml_file(tmp_path: Path) -> None:
    (tmp_path / ".bundlestats.yml").write_text(
        """
stats-path: dist/webpack-stats.json
bundle_size_threshold: 1048576
total-size-threshold: "5242880"
fail-on-threshold-exceed: no
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path, env={})

    assert config.stats_path == Path("dist/webpack-stats.json")
    assert config.bundle_size_threshold == 1048576
    assert config.total_size_threshold == 5242880
    assert config.fail_on_threshold_exceed is False


def test_action_inputs_override_config_file(tmp_path: Path) -> None:
    config_file = tmp_path / ".bundlestats.yml"
    config_file.write_text("bundle-size-threshold: 1000\n", encoding="utf-8")
    env = {
        "INPUT_BUNDLE-SIZE-THRESHOLD": "2000",
        "INPUT_TOTAL_SIZE_THRESHOLD": "3000",
        "INPUT_STATS-PATH": "",
    }

    config = load_config(config_file, env=env)

    assert config.bundle_size_threshold == 2000
    assert config.total_size_threshold == 3000
    assert config.stats_path == Path("webpack-stats.json")


def test_overrides_take_precedence_and_ignore_unset(tmp_path: Path) -> None:
    env = {"INPUT_BUNDLE-SIZE-THRESHOLD": "2000", "INPUT_FAIL-ON-THRESHOLD-EXCEED": "true"}

    config = load_config(
        tmp_path,
        env=env,
        overrides={
            "bundle_size_threshold": "4000",
            "total-size-threshold": None,
            "fail-on-threshold-exceed": False,
        },
    )

    assert config.bundle_size_threshold == 4000
    assert config.total_size_threshold == 10485760
    assert config.fail_on_threshold_exceed is False


@pytest.mark.parametrize("value", ["abc", "0", "-5", 1.5, True, "2.5MB"])
def test_invalid_thresholds_are_fatal(value: object) -> None:
    with pytest.raises(BundleStatsError) as excinfo:
        build_config({"bundle-size-threshold": value})

    assert excinfo.value.code is ErrorCode.INVALID_THRESHOLD
    assert excinfo.value.level == "fatal"
    assert excinfo.value.details["input"] == "bundle-size-threshold"


def test_integral_float_threshold_is_accepted() -> None:
    assert build_config({"total-size-threshold": 2e6}).total_size_threshold == 2000000


def test_invalid_boolean_input_is_config_error() -> None:
    with pytest.raises(BundleStatsError) as excinfo:
        build_config({"fail-on-threshold-exceed": "sometimes"})

    assert excinfo.value.code is ErrorCode.INVALID_CONFIG


def test_config_rejects_non_positive_thresholds_at_construction() -> None:
    with pytest.raises(BundleStatsError) as excinfo:
        BundleStatsConfig(stats_path=Path("stats.json"), total_size_threshold=0)

    assert excinfo.value.code is ErrorCode.INVALID_THRESHOLD


def test_non_mapping_config_file_is_rejected(tmp_path: Path) -> None:
    config_file = tmp_path / ".bundlestats.yml"
    config_file.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(BundleStatsError) as excinfo:
        load_config(config_file, env={})

    assert excinfo.value.code is ErrorCode.INVALID_CONFIG


def test_malformed_yaml_is_rejected(tmp_path: Path) -> None:
    config_file = tmp_path / ".bundlestats.yml"
    config_file.write_text("stats-path: [unclosed\n", encoding="utf-8")

    with pytest.raises(BundleStatsError) as excinfo:
        load_config(config_file, env={})

    assert excinfo.value.code is ErrorCode.INVALID_CONFIG
    assert excinfo.value.is_fatal


def test_empty_config_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / ".bundlestats.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path, env={}).bundle_size_threshold == 2097152
