"""Webpack stats JSON parser."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from ..errors import ErrorCode, create_error
from ..logging import get_logger
from .schema import Asset, Chunk, ChunkGroup, Manifest

MAX_FILE_SIZE = 50 * 1024 * 1024


class StatsParser:
    """Reads and validates webpack-stats.json documents."""

    def __init__(self, max_file_size: int = MAX_FILE_SIZE) -> None:
        self.max_file_size = max_file_size
        self.logger = get_logger("parser")

    async def parse_file(self, file_path: Union[str, Path]) -> Manifest:
        """Read and parse a stats file.

        Raises ``BundleStatsError`` (fatal) when the file is missing, larger than
        ``max_file_size``, unreadable, not JSON, or lacks an ``assets`` array.
        """
        path = Path(file_path)
        if not path.exists():
            raise create_error(
                ErrorCode.FILE_NOT_FOUND,
                f"Stats file not found: {path}",
                details={"path": str(path)},
            )

        size = path.stat().st_size
        if size > self.max_file_size:
            raise create_error(
                ErrorCode.FILE_TOO_LARGE,
                f"Stats file too large: {size} bytes (max: {self.max_file_size} bytes)",
                details={"size": size, "max_size": self.max_file_size},
            )

        loop = asyncio.get_running_loop()
        try:
            content = await loop.run_in_executor(None, _read_text, path)
        except (OSError, UnicodeDecodeError) as exc:
            raise create_error(
                ErrorCode.FILE_READ_ERROR,
                f"Failed to read stats file: {exc}",
                details={"path": str(path)},
            ) from exc

        return self.parse(content)

    def parse(self, content: str) -> Manifest:
        """Parse stats from a JSON string."""
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise create_error(
                ErrorCode.JSON_PARSE_ERROR,
                f"Invalid JSON in stats file: {exc.msg} (line {exc.lineno}, column {exc.colno})",
                details={"line": exc.lineno, "column": exc.colno},
            ) from exc
        except MemoryError as exc:
            raise create_error(
                ErrorCode.MEMORY_LIMIT_ERROR,
                "Ran out of memory while decoding the stats file",
                details={"length": len(content)},
            ) from exc
        return self.parse_data(data)

    def parse_data(self, data: Any) -> Manifest:
        """Validate an already-decoded stats object."""
        if not isinstance(data, dict) or not isinstance(data.get("assets"), list):
            raise create_error(
                ErrorCode.INVALID_STATS_FORMAT,
                'Invalid webpack stats format: missing required "assets" array',
                details=_describe_shape(data),
            )

        assets: List[Asset] = []
        skipped = 0
        for index, raw in enumerate(data["assets"]):
            try:
                assets.append(Asset.model_validate(raw))
            except ValidationError as exc:
                skipped += 1
                self.logger.warning(
                    "Skipping asset entry #%d without a usable name/size: %s",
                    index,
                    _first_error(exc),
                )

        return Manifest(
            assets=tuple(assets),
            chunks=self._chunks(data.get("chunks")),
            assets_by_chunk_name=self._assets_by_chunk_name(data.get("assetsByChunkName")),
            named_chunk_groups=self._named_chunk_groups(data.get("namedChunkGroups")),
            version=_as_str(data.get("version")),
            hash=_as_str(data.get("hash")),
            time=_as_float(data.get("time")),
            skipped_assets=skipped,
        )

    # ------------------------------------------------------------------
    # Optional sections: each record is decoded on its own so one bad entry
    # only loses its own attribution.

    def _chunks(self, raw: Any) -> Optional[Tuple[Chunk, ...]]:
        if raw is None:
            return None
        if not isinstance(raw, list):
            self.logger.warning("Ignoring 'chunks' section: expected a list")
            return None
        chunks: List[Chunk] = []
        for index, record in enumerate(raw):
            try:
                chunks.append(Chunk.model_validate(record))
            except ValidationError as exc:
                self.logger.warning("Skipping chunk record #%d: %s", index, _first_error(exc))
        return tuple(chunks)

    def _assets_by_chunk_name(self, raw: Any) -> Optional[Dict[str, Union[str, List[str]]]]:
        if raw is None:
            return None
        if not isinstance(raw, dict):
            self.logger.warning("Ignoring 'assetsByChunkName' section: expected an object")
            return None
        mapping: Dict[str, Union[str, List[str]]] = {}
        for chunk_name, assets in raw.items():
            if isinstance(assets, str):
                mapping[str(chunk_name)] = assets
            elif isinstance(assets, list):
                mapping[str(chunk_name)] = [name for name in assets if isinstance(name, str)]
            else:
                self.logger.warning("Skipping assetsByChunkName entry %r", chunk_name)
        return mapping

    def _named_chunk_groups(self, raw: Any) -> Optional[Dict[str, ChunkGroup]]:
        if raw is None:
            return None
        if not isinstance(raw, dict):
            self.logger.warning("Ignoring 'namedChunkGroups' section: expected an object")
            return None
        groups: Dict[str, ChunkGroup] = {}
        for group_name, group in raw.items():
            try:
                groups[str(group_name)] = ChunkGroup.model_validate(group)
            except ValidationError as exc:
                self.logger.warning(
                    "Skipping namedChunkGroups entry %r: %s", group_name, _first_error(exc)
                )
        return groups


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    return f"{location}: {first.get('msg', 'invalid value')}"


def _describe_shape(data: Any) -> Dict[str, Any]:
    if isinstance(data, dict):
        return {"type": "object", "keys": sorted(str(key) for key in data)[:20]}
    return {"type": type(data).__name__}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    return float(value) if isinstance(value, (int, float)) else None


__all__ = ["MAX_FILE_SIZE", "StatsParser"]
