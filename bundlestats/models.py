"""Core data models produced by the bundle analyzer."""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class AnalyzedAsset:
    """A reportable asset with its formatted size and threshold verdict."""

    name: str
    size: Union[int, float]
    size_text: str
    exceeded: bool
    chunk_names: Tuple[str, ...] = ()
    is_initial: Optional[bool] = None


@dataclass(frozen=True)
class AnalysisSummary:
    """Aggregate figures across all reportable assets."""

    total_size: Union[int, float]
    total_size_text: str
    file_count: int
    exceeded_file_count: int


@dataclass(frozen=True)
class ThresholdVerdict:
    """Which thresholds were crossed."""

    individual_exceeded: Tuple[str, ...] = ()
    total_exceeded: bool = False

    @property
    def any_exceeded(self) -> bool:
        return bool(self.individual_exceeded) or self.total_exceeded


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one analysis pass, shared read-only by the renderers."""

    assets: Tuple[AnalyzedAsset, ...]
    summary: AnalysisSummary
    threshold: ThresholdVerdict = field(default_factory=ThresholdVerdict)
