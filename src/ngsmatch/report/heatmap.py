"""
Correlation heatmap rendering.

Rows and columns are sorted by sample name; no clustering is applied.
"""

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from ngsmatch.core.errors import OutputError
from ngsmatch.core.result import Result, Ok, Err
from ngsmatch.report.writer import read_correlation_matrix

logger = logging.getLogger(__name__)

HEATMAP_COLORS = ["#eff15e", "#FFFFFF", "#B2182B"]
HEATMAP_TITLE = "Sample Correlation heatmap"


def sort_matrix(df: pd.DataFrame) -> pd.DataFrame:
    """Restrict to labels present as both row and column, sorted ascending."""
    common = sorted(set(df.index) & set(df.columns))
    if not common:
        raise ValueError("No common row/column labels in correlation matrix")
    if list(df.index) != list(df.columns):
        logger.warning("Row and column labels differ; plotting their intersection")
    return df.loc[common, common]


def plot_heatmap(
    matrix: Union[pd.DataFrame, str, Path],
    output_path: Union[str, Path],
    width: float = 8.0,
    height: float = 8.0,
) -> Result[Path, OutputError]:
    """
    Render a correlation matrix as a heatmap (format from output suffix).

    Args:
        matrix: Correlation DataFrame, or path of a written matrix file
        output_path: Image path (.pdf, .png, .svg, ...)
        width: Figure width in inches
        height: Figure height in inches

    Returns:
        Ok(output_path) or Err(OutputError)
    """
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from matplotlib.colors import LinearSegmentedColormap
        import seaborn as sns
    except ImportError:
        return Err(OutputError("Plotting requires matplotlib and seaborn. Install with: pip install ngsmatch"))

    output_path = Path(output_path)

    if not isinstance(matrix, pd.DataFrame):
        read_result = read_correlation_matrix(matrix)
        if read_result.is_err():
            return read_result
        matrix = read_result.unwrap()

    try:
        sorted_matrix = sort_matrix(matrix)
    except ValueError as e:
        return Err(OutputError(f"Cannot plot heatmap: {e}"))

    n = len(sorted_matrix)
    cmap = LinearSegmentedColormap.from_list("ngsmatch", HEATMAP_COLORS, N=50)

    fig, ax = plt.subplots(figsize=(width, height))
    sns.heatmap(
        sorted_matrix,
        cmap=cmap,
        square=True,
        linewidths=0,
        xticklabels=True,
        yticklabels=True,
        ax=ax,
    )
    fontsize = max(3, min(10, 400 // max(n, 1)))
    ax.tick_params(labelsize=fontsize)
    ax.set_xlabel("")
    ax.set_ylabel("")
    ax.set_title(HEATMAP_TITLE)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, bbox_inches='tight')
    except (OSError, ValueError) as e:
        return Err(OutputError(f"Failed to save heatmap {output_path}: {e}", output_path))
    finally:
        plt.close(fig)

    logger.info(f"Saved heatmap: {output_path}")
    return Ok(output_path)
