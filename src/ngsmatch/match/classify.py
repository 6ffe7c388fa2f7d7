"""
Depth-aware matched/unmatched classification.

Expected correlation of matched and unmatched pairs is looked up per
depth band; the observed value is assigned to whichever distribution it
sits closer to.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Tuple

from ngsmatch.core.models import PairLabel


@dataclass(frozen=True, slots=True)
class DepthStats:
    """Expected correlation (mean, sd) for matched and unmatched pairs."""
    matched_mean: float
    matched_sd: float
    unmatched_mean: float
    unmatched_sd: float

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.matched_mean, self.matched_sd, self.unmatched_mean, self.unmatched_sd)


@dataclass(frozen=True, slots=True)
class DepthBand:
    """Statistics used for depths strictly above min_depth."""
    min_depth: float
    stats: DepthStats


@dataclass(frozen=True, slots=True)
class DepthModel:
    """
    Immutable depth -> DepthStats lookup table.

    Bands are checked from the highest min_depth down; depths at or below
    every band's threshold use the floor statistics.
    """
    name: str
    bands: Tuple[DepthBand, ...]
    floor: DepthStats

    def lookup(self, depth: float) -> DepthStats:
        for band in self.bands:
            if depth > band.min_depth:
                return band.stats
        return self.floor


def _model(name: str, rows) -> DepthModel:
    bands = tuple(DepthBand(threshold, DepthStats(*values)) for threshold, values in rows)
    return DepthModel(name=name, bands=bands, floor=bands[-1].stats)


# Calibrated (matched mean, matched sd, unmatched mean, unmatched sd) per depth band.
# The <=0.5 floor repeats the >0.5 row.
DEFAULT_DEPTH_MODEL = _model("default", (
    (10.0, (0.874546, 0.022211, 0.310549, 0.060058)),
    (5.0, (0.785249, 0.021017, 0.279778, 0.054104)),
    (2.0, (0.650573, 0.018699, 0.238972, 0.047196)),
    (1.0, (0.578386, 0.018526, 0.222322, 0.041186)),
    (0.5, (0.529327, 0.025785, 0.217839, 0.040334)),
))

# Family-aware table, tighter matched/unmatched separation
STRICT_DEPTH_MODEL = _model("strict", (
    (10.0, (0.874611, 0.022596, 0.644481, 0.020908)),
    (5.0, (0.785312, 0.021318, 0.596133, 0.022502)),
    (2.0, (0.650299, 0.019252, 0.5346, 0.020694)),
    (1.0, (0.578582, 0.018379, 0.495017, 0.021652)),
    (0.5, (0.524757, 0.023218, 0.465653, 0.027378)),
))


def select_depth_model(strict: bool) -> DepthModel:
    """Depth model for the run: strict (family cutoff) or default."""
    return STRICT_DEPTH_MODEL if strict else DEFAULT_DEPTH_MODEL


def depth_stats(depth: float, strict: bool = False) -> DepthStats:
    return select_depth_model(strict).lookup(depth)


def classify_correlation(
    obs: float,
    unmatched_mean: float,
    unmatched_sd: float,
    matched_mean: float,
    matched_sd: float,
) -> Tuple[PairLabel, float]:
    """
    Assign an observed correlation to the matched or unmatched distribution.

    Each distance is |mean - obs| minus that distribution's sd. The pair is
    matched when the unmatched distance is the larger one.

    Returns:
        (label, score) where score = |dist_unmatched / dist_matched|; the
        score is inf (or nan) when dist_matched is zero
    """
    dist_unmatched = abs(unmatched_mean - obs) - unmatched_sd
    dist_matched = abs(matched_mean - obs) - matched_sd

    label = PairLabel.MATCHED if dist_unmatched > dist_matched else PairLabel.UNMATCHED

    if dist_matched == 0.0:
        score = math.nan if dist_unmatched == 0.0 else math.inf
    else:
        score = abs(dist_unmatched / dist_matched)
    return label, score


def classify_with_model(obs: float, stats: DepthStats) -> Tuple[PairLabel, float]:
    return classify_correlation(
        obs,
        stats.unmatched_mean,
        stats.unmatched_sd,
        stats.matched_mean,
        stats.matched_sd,
    )
