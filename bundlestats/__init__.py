"""Webpack bundle size reporting for pull requests."""

from .analyzers import BundleAnalyzer
from .config import BundleStatsConfig, load_config
from .errors import BundleStatsError, ErrorCode
from .models import AnalysisResult, AnalysisSummary, AnalyzedAsset, ThresholdVerdict
from .parser import Manifest, StatsParser
from .postproc import COMMENT_IDENTIFIER, PROCESSING_IDENTIFIER, BadgeRenderer, ReportFormatter
from .sizes import calculate_percentage_change, format_file_size, format_size_diff

__version__ = "1.0.0"

__all__ = [
    "AnalysisResult",
    "AnalysisSummary",
    "AnalyzedAsset",
    "BadgeRenderer",
    "BundleAnalyzer",
    "BundleStatsConfig",
    "BundleStatsError",
    "COMMENT_IDENTIFIER",
    "ErrorCode",
    "Manifest",
    "PROCESSING_IDENTIFIER",
    "ReportFormatter",
    "StatsParser",
    "ThresholdVerdict",
    "calculate_percentage_change",
    "format_file_size",
    "format_size_diff",
    "load_config",
]
