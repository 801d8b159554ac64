"""Stats parsing and the typed manifest schema."""

from .schema import Asset, Chunk, ChunkGroup, Manifest
from .stats_parser import MAX_FILE_SIZE, StatsParser

__all__ = ["Asset", "Chunk", "ChunkGroup", "MAX_FILE_SIZE", "Manifest", "StatsParser"]
