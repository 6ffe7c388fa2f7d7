"""
Output writers: correlation matrix, pairwise tables and heatmap.
"""

from ngsmatch.report.writer import (
    write_results,
    read_correlation_matrix,
    read_pair_table,
    correlation_frame,
    pairs_frame,
)
from ngsmatch.report.heatmap import plot_heatmap

__all__ = [
    "write_results",
    "read_correlation_matrix",
    "read_pair_table",
    "correlation_frame",
    "pairs_frame",
    "plot_heatmap",
]
