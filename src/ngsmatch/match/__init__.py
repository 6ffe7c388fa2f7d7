"""
Sample matching: allele-fraction extraction, masked correlation,
depth-aware classification and all-pairs comparison.
"""

from ngsmatch.match.extract import extract_all, extract_samples, extract_source
from ngsmatch.match.correlate import pearson_masked, correlate_samples
from ngsmatch.match.classify import (
    DepthModel,
    DepthStats,
    DEFAULT_DEPTH_MODEL,
    STRICT_DEPTH_MODEL,
    classify_correlation,
    depth_stats,
)
from ngsmatch.match.pairwise import compare_all, compare_pair, MIN_SHARED_LOCI

__all__ = [
    "extract_all",
    "extract_samples",
    "extract_source",
    "pearson_masked",
    "correlate_samples",
    "DepthModel",
    "DepthStats",
    "DEFAULT_DEPTH_MODEL",
    "STRICT_DEPTH_MODEL",
    "classify_correlation",
    "depth_stats",
    "compare_all",
    "compare_pair",
    "MIN_SHARED_LOCI",
]
