"""Bundle size analyzer implementation."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from ..config import BundleStatsConfig
from ..models import AnalysisResult, AnalysisSummary, AnalyzedAsset, ThresholdVerdict
from ..parser.schema import Asset, Manifest
from ..sizes import format_file_size

_EXCLUDED_SUFFIXES = (".map", ".LICENSE.txt")


class BundleAnalyzer:
    """Evaluates webpack assets against the configured size thresholds."""

    def analyze(self, manifest: Manifest, config: BundleStatsConfig) -> AnalysisResult:
        chunk_mapping = self.build_chunk_mapping(manifest)
        assets = self._analyze_assets(
            manifest.assets, config.bundle_size_threshold, chunk_mapping
        )

        total_size = sum(asset.size for asset in assets)
        individual_exceeded = tuple(asset.name for asset in assets if asset.exceeded)

        return AnalysisResult(
            assets=assets,
            summary=AnalysisSummary(
                total_size=total_size,
                total_size_text=format_file_size(total_size),
                file_count=len(assets),
                exceeded_file_count=len(individual_exceeded),
            ),
            threshold=ThresholdVerdict(
                individual_exceeded=individual_exceeded,
                total_exceeded=total_size > config.total_size_threshold,
            ),
        )

    @staticmethod
    def is_reportable(asset: Asset) -> bool:
        """Source maps, license banners and non-emitted files are not reported."""
        return not asset.name.endswith(_EXCLUDED_SUFFIXES) and asset.emitted is not False

    def build_chunk_mapping(self, manifest: Manifest) -> Dict[str, List[str]]:
        """Map asset names to chunk/group names in first-discovered order."""
        mapping: Dict[str, List[str]] = {}

        def _attribute(asset_name: str, chunk_names: Iterable[str]) -> None:
            existing = mapping.setdefault(asset_name, [])
            for chunk_name in chunk_names:
                if chunk_name not in existing:
                    existing.append(chunk_name)

        for chunk_name, asset_names in manifest.chunk_assets():
            for asset_name in asset_names:
                _attribute(asset_name, [chunk_name])

        for chunk in manifest.chunks or ():
            for file_name in chunk.files:
                _attribute(file_name, chunk.names)

        for group_name, group in (manifest.named_chunk_groups or {}).items():
            for asset_name in group.assets:
                _attribute(asset_name, [group_name])

        return mapping

    @staticmethod
    def get_top_assets(assets: Sequence[AnalyzedAsset], limit: int) -> List[AnalyzedAsset]:
        return list(assets[:limit])

    def group_by_extension(self, assets: Iterable[AnalyzedAsset]) -> Dict[str, List[AnalyzedAsset]]:
        groups: Dict[str, List[AnalyzedAsset]] = {}
        for asset in assets:
            groups.setdefault(self._extension(asset.name), []).append(asset)
        return groups

    def _analyze_assets(
        self,
        assets: Iterable[Asset],
        threshold: int,
        chunk_mapping: Dict[str, List[str]],
    ) -> Tuple[AnalyzedAsset, ...]:
        analyzed = [
            AnalyzedAsset(
                name=asset.name,
                size=asset.size,
                size_text=format_file_size(asset.size),
                exceeded=asset.size > threshold,
                chunk_names=tuple(chunk_mapping.get(asset.name, ())),
                is_initial=(
                    not asset.is_over_size_limit if asset.is_over_size_limit is not None else None
                ),
            )
            for asset in assets
            if self.is_reportable(asset)
        ]
        # sorted() is stable, so equal sizes keep manifest order.
        return tuple(sorted(analyzed, key=lambda item: item.size, reverse=True))

    @staticmethod
    def _extension(filename: str) -> str:
        last_dot = filename.rfind(".")
        if last_dot == -1:
            return ""
        second_last_dot = filename.rfind(".", 0, last_dot)
        if second_last_dot != -1 and filename[second_last_dot:last_dot] == ".min":
            return filename[second_last_dot:]
        return filename[last_dot:]
