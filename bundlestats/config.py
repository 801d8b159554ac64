"""Configuration loading for bundlestats (.bundlestats.yml, action inputs, CLI flags)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ErrorCode, create_error

CONFIG_FILENAME = ".bundlestats.yml"

DEFAULT_STATS_PATH = "webpack-stats.json"
DEFAULT_BUNDLE_SIZE_THRESHOLD = 2 * 1024 * 1024
DEFAULT_TOTAL_SIZE_THRESHOLD = 10 * 1024 * 1024
DEFAULT_FAIL_ON_THRESHOLD_EXCEED = True

# Input names as exposed by action.yml.
STATS_PATH = "stats-path"
BUNDLE_SIZE_THRESHOLD = "bundle-size-threshold"
TOTAL_SIZE_THRESHOLD = "total-size-threshold"
FAIL_ON_THRESHOLD_EXCEED = "fail-on-threshold-exceed"

_INPUT_NAMES = (STATS_PATH, BUNDLE_SIZE_THRESHOLD, TOTAL_SIZE_THRESHOLD, FAIL_ON_THRESHOLD_EXCEED)


@dataclass(frozen=True)
class BundleStatsConfig:
    """Validated settings for a single analysis run."""

    stats_path: Path
    bundle_size_threshold: int = DEFAULT_BUNDLE_SIZE_THRESHOLD
    total_size_threshold: int = DEFAULT_TOTAL_SIZE_THRESHOLD
    fail_on_threshold_exceed: bool = DEFAULT_FAIL_ON_THRESHOLD_EXCEED

    def __post_init__(self) -> None:
        _require_positive(BUNDLE_SIZE_THRESHOLD, self.bundle_size_threshold)
        _require_positive(TOTAL_SIZE_THRESHOLD, self.total_size_threshold)

    def as_dict(self) -> Dict[str, Any]:
        return {
            STATS_PATH: str(self.stats_path),
            BUNDLE_SIZE_THRESHOLD: self.bundle_size_threshold,
            TOTAL_SIZE_THRESHOLD: self.total_size_threshold,
            FAIL_ON_THRESHOLD_EXCEED: self.fail_on_threshold_exceed,
        }


def load_config(
    config_path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> BundleStatsConfig:
    """Resolve configuration from defaults, the config file, action inputs and overrides.

    Later sources win: ``.bundlestats.yml`` < ``INPUT_*`` environment < ``overrides``.
    Empty values are treated as unset so that blank action inputs fall back.
    """
    environ = os.environ if env is None else env
    raw: Dict[str, Any] = {}

    if config_path is not None:
        config_file = _resolve_config_path(config_path)
        if config_file.exists():
            raw.update(_normalise_keys(_read_config(config_file)))

    raw.update(_read_action_inputs(environ))

    if overrides:
        raw.update(
            {key: value for key, value in _normalise_keys(overrides).items() if not _is_unset(value)}
        )

    return build_config(raw)


def build_config(values: Mapping[str, Any]) -> BundleStatsConfig:
    """Coerce a mapping keyed by input name into a validated config."""
    stats_path = _as_str(values.get(STATS_PATH)) or DEFAULT_STATS_PATH

    bundle_threshold = _as_threshold(
        BUNDLE_SIZE_THRESHOLD, values.get(BUNDLE_SIZE_THRESHOLD), DEFAULT_BUNDLE_SIZE_THRESHOLD
    )
    total_threshold = _as_threshold(
        TOTAL_SIZE_THRESHOLD, values.get(TOTAL_SIZE_THRESHOLD), DEFAULT_TOTAL_SIZE_THRESHOLD
    )

    fail_value = values.get(FAIL_ON_THRESHOLD_EXCEED)
    if _is_unset(fail_value):
        fail_on_exceed = DEFAULT_FAIL_ON_THRESHOLD_EXCEED
    else:
        parsed = _as_bool(fail_value)
        if parsed is None:
            raise create_error(
                ErrorCode.INVALID_CONFIG,
                f"{FAIL_ON_THRESHOLD_EXCEED} must be a boolean (true/false), got {fail_value!r}",
                details={"input": FAIL_ON_THRESHOLD_EXCEED, "value": fail_value},
            )
        fail_on_exceed = parsed

    return BundleStatsConfig(
        stats_path=Path(stats_path).expanduser(),
        bundle_size_threshold=bundle_threshold,
        total_size_threshold=total_threshold,
        fail_on_threshold_exceed=fail_on_exceed,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise create_error(
            ErrorCode.INVALID_CONFIG,
            f"Failed to read {path.name}: {exc}",
            details={"path": str(path)},
        ) from exc
    if not text.strip():
        return {}

    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise create_error(
            ErrorCode.INVALID_CONFIG,
            f"Failed to parse {path.name}: {exc}",
            details={"path": str(path)},
        ) from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise create_error(
            ErrorCode.INVALID_CONFIG,
            f"{path.name} must contain a mapping at the root",
            details={"path": str(path), "type": type(loaded).__name__},
        )
    return loaded


def _read_action_inputs(env: Mapping[str, str]) -> Dict[str, Any]:
    # The runner exports inputs as INPUT_<NAME> upper-cased; hyphens are kept,
    # but some wrappers (docker, composite) substitute underscores.
    inputs: Dict[str, Any] = {}
    for name in _INPUT_NAMES:
        for key in (f"INPUT_{name.upper()}", f"INPUT_{name.upper().replace('-', '_')}"):
            value = env.get(key)
            if not _is_unset(value):
                inputs[name] = value
                break
    return inputs


def _normalise_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {str(key).strip().lower().replace("_", "-"): value for key, value in data.items()}


def _require_positive(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise create_error(
            ErrorCode.INVALID_THRESHOLD,
            f"{name} must be a positive number",
            details={"input": name, "value": value},
        )


def _is_unset(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value.strip() or None
    return str(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else None


def _as_threshold(name: str, value: Any, default: int) -> int:
    if _is_unset(value):
        return default
    parsed = _as_int(value)
    if parsed is None or parsed <= 0:
        raise create_error(
            ErrorCode.INVALID_THRESHOLD,
            f"{name} must be a positive number",
            details={"input": name, "value": value},
        )
    return parsed


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "BundleStatsConfig",
    "CONFIG_FILENAME",
    "DEFAULT_BUNDLE_SIZE_THRESHOLD",
    "DEFAULT_STATS_PATH",
    "DEFAULT_TOTAL_SIZE_THRESHOLD",
    "build_config",
    "load_config",
]
