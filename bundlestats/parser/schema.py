"""Typed view of the webpack stats JSON.

Only ``Asset.name``/``Asset.size`` and ``Chunk.id`` are load-bearing. The
remaining fields are hints: values of the wrong shape fall back to their
defaults instead of failing the record.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

ChunkId = Union[int, str]
Size = Union[int, float]


class _StatsModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


def _names(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _chunk_ids(value: Any) -> List[ChunkId]:
    if not isinstance(value, list):
        return []
    return [
        item
        for item in value
        if isinstance(item, (int, str)) and not isinstance(item, bool)
    ]


def _flag(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _finite(value: Size) -> Size:
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("size must be a finite number")
    return value


class Asset(_StatsModel):
    """A single emitted (or skipped) output file."""

    name: str
    size: Size
    emitted: Optional[bool] = None
    chunks: List[ChunkId] = Field(default_factory=list)
    is_over_size_limit: Optional[bool] = Field(default=None, alias="isOverSizeLimit")

    @field_validator("emitted", "is_over_size_limit", mode="before")
    @classmethod
    def _optional_flag(cls, value: Any) -> Optional[bool]:
        return _flag(value)

    @field_validator("chunks", mode="before")
    @classmethod
    def _chunk_refs(cls, value: Any) -> List[ChunkId]:
        return _chunk_ids(value)

    @field_validator("size", mode="before")
    @classmethod
    def _numeric_size(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("size must be a number")
        return value

    @field_validator("size")
    @classmethod
    def _finite_size(cls, value: Size) -> Size:
        return _finite(value)


class Chunk(_StatsModel):
    """Bundler chunk and the files it produced."""

    id: ChunkId
    names: List[str] = Field(default_factory=list)
    size: Size = 0
    files: List[str] = Field(default_factory=list)
    hash: Optional[str] = None

    @field_validator("names", "files", mode="before")
    @classmethod
    def _string_lists(cls, value: Any) -> List[str]:
        return _names(value)

    @field_validator("size", mode="before")
    @classmethod
    def _hint_size(cls, value: Any) -> Any:
        # Never read by the analyzer; anything unusable becomes 0.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 0
        return value if math.isfinite(value) else 0

    @field_validator("hash", mode="before")
    @classmethod
    def _optional_hash(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None


class ChunkGroup(_StatsModel):
    """Named chunk group (entry point or async group)."""

    chunks: List[ChunkId] = Field(default_factory=list)
    assets: List[str] = Field(default_factory=list)

    @field_validator("chunks", mode="before")
    @classmethod
    def _chunk_refs(cls, value: Any) -> List[ChunkId]:
        return _chunk_ids(value)

    @field_validator("assets", mode="before")
    @classmethod
    def _asset_names(cls, value: Any) -> List[str]:
        # webpack 5 reports group assets as {"name": ..., "size": ...} objects.
        if not isinstance(value, list):
            return []
        return _names([item.get("name") if isinstance(item, dict) else item for item in value])


class Manifest(_StatsModel):
    """Decoded stats document consumed by the analyzer."""

    assets: Tuple[Asset, ...]
    chunks: Optional[Tuple[Chunk, ...]] = None
    assets_by_chunk_name: Optional[Dict[str, Union[str, List[str]]]] = Field(
        default=None, alias="assetsByChunkName"
    )
    named_chunk_groups: Optional[Dict[str, ChunkGroup]] = Field(
        default=None, alias="namedChunkGroups"
    )
    version: Optional[str] = None
    hash: Optional[str] = None
    time: Optional[float] = None
    skipped_assets: int = 0

    def chunk_assets(self) -> Iterator[Tuple[str, List[str]]]:
        """Yield ``(chunk name, asset names)`` with single names widened to lists."""
        if not self.assets_by_chunk_name:
            return
        for chunk_name, assets in self.assets_by_chunk_name.items():
            yield chunk_name, [assets] if isinstance(assets, str) else list(assets)


__all__ = ["Asset", "Chunk", "ChunkGroup", "Manifest", "Size"]
