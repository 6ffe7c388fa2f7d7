"""
All-pairs comparison.

Every unordered pair (i, j), i < j, is correlated over its shared loci and
classified against the depth model. Work is split by outer index i: the
task for row i owns cells (i, j) and (j, i) for all j > i, so the shared
matrices are written without locking.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Sequence

import numpy as np

from ngsmatch.core.models import PairLabel, PairResult, PairwiseComparison, SampleVector
from ngsmatch.match.classify import DepthModel, classify_with_model, select_depth_model
from ngsmatch.match.correlate import correlate_samples

logger = logging.getLogger(__name__)

# Pairs sharing fewer observed loci are not classified
MIN_SHARED_LOCI = 5


def pair_depth(a: SampleVector, b: SampleVector, panel_size: int, nonzero: bool = False) -> float:
    """Representative depth of a pair: the lower of the two sample depths."""
    return min(a.mean_depth(panel_size, nonzero), b.mean_depth(panel_size, nonzero))


def compare_pair(
    a: SampleVector,
    b: SampleVector,
    panel_size: int,
    model: DepthModel,
    nonzero: bool = False,
    min_shared: int = MIN_SHARED_LOCI,
) -> PairResult:
    """
    Correlate and classify one sample pair.

    Pairs below min_shared loci are labelled insufficient with score 0;
    their true correlation is still reported.
    """
    correlation, shared = correlate_samples(a, b)
    depth = pair_depth(a, b, panel_size, nonzero)

    if shared < min_shared:
        label, score = PairLabel.INSUFFICIENT, 0.0
    else:
        label, score = classify_with_model(correlation, model.lookup(depth))

    return PairResult(
        sample_a=a.name,
        sample_b=b.name,
        correlation=correlation,
        shared_count=shared,
        depth=depth,
        label=label,
        score=score,
    )


def _compare_row(
    i: int,
    samples: Sequence[SampleVector],
    correlation: np.ndarray,
    labels: np.ndarray,
    panel_size: int,
    model: DepthModel,
    nonzero: bool,
    min_shared: int,
) -> List[PairResult]:
    """Compare sample i with every later sample and fill its cells."""
    row = []
    for j in range(i + 1, len(samples)):
        pair = compare_pair(samples[i], samples[j], panel_size, model, nonzero, min_shared)
        correlation[i, j] = correlation[j, i] = pair.matrix_correlation
        labels[i, j] = labels[j, i] = pair.label.code
        row.append(pair)
    return row


def compare_all(
    samples: Sequence[SampleVector],
    panel_size: int,
    strict: bool = False,
    nonzero: bool = False,
    threads: int = 1,
    model: Optional[DepthModel] = None,
    min_shared: int = MIN_SHARED_LOCI,
) -> PairwiseComparison:
    """
    Build the correlation and label matrices over all samples.

    The diagonal is fixed to correlation 1.0 and label matched.

    Args:
        samples: Extracted sample vectors; matrix order follows this order
        panel_size: Number of panel loci
        strict: Use the family-aware depth model
        nonzero: Average depth over nonzero-depth observations only
        threads: Number of worker threads (1 = serial)
        model: Explicit depth model, overrides strict
        min_shared: Minimum shared loci for classification

    Returns:
        PairwiseComparison with pairs listed in (i, j) row order
    """
    model = model or select_depth_model(strict)
    n = len(samples)
    n_pairs = n * (n - 1) // 2
    logger.info(f"→ Comparing {n_pairs} sample pairs ({model.name} model, {threads} threads)")

    correlation = np.zeros((n, n), dtype=np.float64)
    labels = np.zeros((n, n), dtype=np.int8)
    rows: List[List[PairResult]] = [[] for _ in range(n)]

    args = (samples, correlation, labels, panel_size, model, nonzero, min_shared)
    if threads == 1 or n < 3:
        for i in range(n):
            rows[i] = _compare_row(i, *args)
    else:
        with ThreadPoolExecutor(max_workers=threads) as executor:
            futures = {executor.submit(_compare_row, i, *args): i for i in range(n - 1)}
            for future in as_completed(futures):
                rows[futures[future]] = future.result()

    np.fill_diagonal(correlation, 1.0)
    np.fill_diagonal(labels, PairLabel.MATCHED.code)

    pairs = [pair for row in rows for pair in row]
    comparison = PairwiseComparison(
        samples=[s.name for s in samples],
        correlation=correlation,
        labels=labels,
        pairs=pairs,
    )

    n_matched = len(comparison.matched_pairs())
    n_insufficient = sum(1 for p in pairs if p.label is PairLabel.INSUFFICIENT)
    logger.info(f"✓ {n_matched} matched, {n_pairs - n_matched - n_insufficient} unmatched, "
                f"{n_insufficient} insufficient")
    return comparison
