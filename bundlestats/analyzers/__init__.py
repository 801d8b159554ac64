"""Analyzers that turn a parsed manifest into an analysis result."""

from .bundle import BundleAnalyzer

__all__ = ["BundleAnalyzer"]
