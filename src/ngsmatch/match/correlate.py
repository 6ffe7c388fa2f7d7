"""
Masked Pearson correlation.

Correlation is computed only over loci observed in both samples. Means,
variances and covariance come from the plain sums (Σa, Σb, Σa², Σb², Σab)
divided by the number of shared loci.
"""

import math
from typing import Tuple

import numpy as np

from ngsmatch.core.models import SampleVector


def shared_mask(a: SampleVector, b: SampleVector) -> np.ndarray:
    """Loci observed in both samples."""
    return a.observed & b.observed


def pearson_masked(a: np.ndarray, b: np.ndarray, mask: np.ndarray) -> float:
    """
    Pearson correlation of a and b restricted to mask.

    Returns 0.0 when the mask is empty. When either masked vector is
    constant (zero variance), returns 1.0 if every masked value of both
    vectors is the same constant and 0.0 otherwise. The result is not
    clamped to [-1, 1].

    The constant case is detected from the sum-based variances, not by
    comparing values. A constant that is not exactly representable
    (e.g. 1/3 at every locus) can leave a tiny positive variance. It then
    takes the general formula, and the result is dominated by rounding.

    Args:
        a: First value vector
        b: Second value vector, same length as a
        mask: Boolean vector selecting the positions to use

    Returns:
        Correlation coefficient
    """
    n = int(np.count_nonzero(mask))
    if n == 0:
        return 0.0

    av = a[mask]
    bv = b[mask]

    mean_a = float(av.sum()) / n
    mean_b = float(bv.sum()) / n
    cov = float((av * bv).sum()) / n - mean_a * mean_b
    var_a = float((av * av).sum()) / n - mean_a * mean_a
    var_b = float((bv * bv).sum()) / n - mean_b * mean_b

    # Rounding can leave a tiny negative product for constant vectors
    denom_sq = var_a * var_b
    if denom_sq <= 0.0:
        first = av[0]
        all_equal = bool(np.all(av == first) and np.all(bv == av))
        return 1.0 if all_equal else 0.0

    return cov / math.sqrt(denom_sq)


def correlate_samples(a: SampleVector, b: SampleVector) -> Tuple[float, int]:
    """
    Masked correlation between two samples.

    Returns:
        (correlation, shared locus count)
    """
    mask = shared_mask(a, b)
    return pearson_masked(a.fraction, b.fraction, mask), int(np.count_nonzero(mask))
