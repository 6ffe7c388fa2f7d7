"""
End-to-end sample matching run.

Steps:
  1. Load the SNP panel
  2. Extract allele fractions from every variant-call file (parallel)
  3. Correlate and classify every sample pair (parallel)
  4. Write the matrix and pair tables (and optionally a heatmap)

Any failure before step 4 aborts the run with no output written.
"""

import logging
import time
from typing import Any, Dict

from ngsmatch.core.config import MatchConfig
from ngsmatch.core.errors import NgsMatchError
from ngsmatch.core.models import PairLabel
from ngsmatch.core.panel import load_panel
from ngsmatch.core.result import Result, Ok, Err
from ngsmatch.match.extract import extract_all
from ngsmatch.match.pairwise import compare_all
from ngsmatch.report.heatmap import plot_heatmap
from ngsmatch.report.writer import correlation_frame, write_results

logger = logging.getLogger(__name__)


def run_match(config: MatchConfig, verbose: bool = False) -> Result[Dict[str, Any], NgsMatchError]:
    """
    Run sample matching for one configuration.

    Args:
        config: Validated run configuration
        verbose: Enable debug logging for this module

    Returns:
        Result containing run statistics and output paths
    """
    if verbose:
        logger.setLevel(logging.DEBUG)

    started = time.monotonic()
    logger.info(f"Starting sample matching: {len(config.vcf_paths)} files, panel {config.panel_path}")

    panel_result = load_panel(config.panel_path)
    if panel_result.is_err():
        return panel_result
    panel = panel_result.unwrap()

    samples_result = extract_all(config.vcf_paths, panel, threads=config.threads)
    if samples_result.is_err():
        return samples_result
    samples = samples_result.unwrap()

    comparison = compare_all(
        samples,
        panel_size=len(panel),
        strict=config.family_cutoff,
        nonzero=config.nonzero,
        threads=config.threads,
    )

    write_result = write_results(comparison, config.outdir, config.out_prefix)
    if write_result.is_err():
        return write_result
    outputs = dict(write_result.unwrap())

    if config.heatmap:
        heatmap_result = plot_heatmap(correlation_frame(comparison), config.output_paths["heatmap"])
        # Tables are already in place; a failed plot does not fail the run
        if heatmap_result.is_err():
            logger.warning(f"Heatmap skipped: {heatmap_result.unwrap_err()}")
        else:
            outputs["heatmap"] = heatmap_result.unwrap()

    label_counts = {label.value: 0 for label in PairLabel}
    for pair in comparison.pairs:
        label_counts[pair.label.value] += 1

    stats = {
        "panel_loci": len(panel),
        "n_files": len(config.vcf_paths),
        "n_samples": len(samples),
        "n_pairs": len(comparison.pairs),
        "matched": label_counts[PairLabel.MATCHED.value],
        "unmatched": label_counts[PairLabel.UNMATCHED.value],
        "insufficient": label_counts[PairLabel.INSUFFICIENT.value],
        "depth_model": "strict" if config.family_cutoff else "default",
        "outputs": {kind: str(path) for kind, path in outputs.items()},
        "elapsed_seconds": time.monotonic() - started,
    }
    return Ok(stats)
