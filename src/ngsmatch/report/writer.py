"""
Result tables.

Writes the correlation matrix and the pairwise comparison tables:
  {prefix}_output_corr_matrix.txt  - square matrix, 4 decimals
  {prefix}_all.txt                 - every pair
  {prefix}_matched.txt             - matched pairs only

All files are written to temporary names first and moved into place
together, so a failed write leaves no partial output.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Union

import pandas as pd

from ngsmatch.core.config import result_paths
from ngsmatch.core.errors import OutputError
from ngsmatch.core.models import PairResult, PairwiseComparison
from ngsmatch.core.result import Result, Ok, Err

logger = logging.getLogger(__name__)

MATRIX_INDEX_NAME = "sample_ID"
PAIR_COLUMNS = ["sample_A", "label", "sample_B", "correlation", "depth", "shared_count"]
TABLE_KINDS = ("matrix", "all", "matched")


def correlation_frame(comparison: PairwiseComparison) -> pd.DataFrame:
    """Correlation matrix as a DataFrame indexed and labelled by sample."""
    df = pd.DataFrame(comparison.correlation, index=comparison.samples, columns=comparison.samples)
    df.index.name = MATRIX_INDEX_NAME
    return df


def pairs_frame(pairs: Iterable[PairResult]) -> pd.DataFrame:
    """
    Pairwise table with display formatting applied.

    Correlation (true masked value) uses 4 decimals, depth 2 decimals.
    """
    rows = [
        {
            "sample_A": p.sample_a,
            "label": p.label.value,
            "sample_B": p.sample_b,
            "correlation": f"{p.correlation:.4f}",
            "depth": f"{p.depth:.2f}",
            "shared_count": p.shared_count,
        }
        for p in pairs
    ]
    return pd.DataFrame(rows, columns=PAIR_COLUMNS)


def _remove_quietly(paths: Iterable[Path]) -> None:
    for path in paths:
        if not path.parent.is_dir():
            continue
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove {path}: {e}")


def write_results(
    comparison: PairwiseComparison,
    outdir: Union[str, Path],
    out_prefix: str = "output",
) -> Result[Dict[str, Path], OutputError]:
    """
    Write matrix, all-pairs and matched-pairs tables.

    Args:
        comparison: Completed pairwise comparison
        outdir: Output directory (created if needed)
        out_prefix: File name prefix

    Returns:
        Ok(dict of kind -> path) or Err(OutputError)
    """
    outdir = Path(outdir)
    paths = {kind: path for kind, path in result_paths(outdir, out_prefix).items() if kind in TABLE_KINDS}
    frames = {
        "matrix": (correlation_frame(comparison), {"float_format": "%.4f"}),
        "all": (pairs_frame(comparison.pairs), {"index": False}),
        "matched": (pairs_frame(comparison.matched_pairs()), {"index": False}),
    }

    temp_paths = {kind: path.with_name(path.name + ".tmp") for kind, path in paths.items()}
    moved = []
    try:
        outdir.mkdir(parents=True, exist_ok=True)
        for kind, (df, options) in frames.items():
            df.to_csv(temp_paths[kind], sep="\t", **options)
        for kind, path in paths.items():
            temp_paths[kind].replace(path)
            moved.append(path)
    except OSError as e:
        # Leave neither temporary files nor a partial set of results
        _remove_quietly(list(temp_paths.values()) + moved)
        return Err(OutputError(f"Failed to write results to {outdir}: {e}", outdir))

    for kind, path in paths.items():
        logger.info(f"Saved {kind} table: {path}")
    return Ok(paths)


def read_correlation_matrix(matrix_path: Union[str, Path]) -> Result[pd.DataFrame, OutputError]:
    """Read a correlation matrix written by write_results."""
    matrix_path = Path(matrix_path)
    try:
        df = pd.read_csv(matrix_path, sep="\t", index_col=0, dtype={MATRIX_INDEX_NAME: str})
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        return Err(OutputError(f"Failed to read correlation matrix {matrix_path}: {e}", matrix_path))
    return Ok(df)


def read_pair_table(table_path: Union[str, Path]) -> Result[pd.DataFrame, OutputError]:
    """Read an all-pairs or matched-pairs table."""
    table_path = Path(table_path)
    try:
        df = pd.read_csv(table_path, sep="\t", dtype={"sample_A": str, "sample_B": str})
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        return Err(OutputError(f"Failed to read pair table {table_path}: {e}", table_path))

    missing = set(PAIR_COLUMNS) - set(df.columns)
    if missing:
        return Err(OutputError(f"Missing columns in {table_path}: {sorted(missing)}", table_path))
    return Ok(df)
