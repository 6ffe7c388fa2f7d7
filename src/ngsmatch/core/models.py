"""
Core data models for ngsmatch.

Defines the panel index, per-sample feature vectors and pairwise
comparison results shared by extraction, correlation and reporting.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Sequence

import numpy as np


def normalize_chrom(chrom: str) -> str:
    """Strip a leading 'chr' so 'chr1' and '1' join to the same locus."""
    return chrom[3:] if chrom.startswith("chr") else chrom


@dataclass(frozen=True, slots=True)
class Locus:
    """
    Normalized (chromosome, position) join key.

    Attributes:
        chrom: Chromosome name without 'chr' prefix
        pos: 1-based position
    """
    chrom: str
    pos: int

    @classmethod
    def from_record(cls, chrom: str, pos: int) -> Locus:
        """Create Locus from a raw VCF or panel chromosome name."""
        return cls(chrom=normalize_chrom(str(chrom)), pos=int(pos))

    @property
    def key(self) -> str:
        """Text form of the key: {chrom}_{pos}."""
        return f"{self.chrom}_{self.pos}"

    def __str__(self) -> str:
        return self.key


class PanelIndex:
    """
    Immutable locus -> zero-based slot mapping built from the SNP panel.

    Slots are assigned in first-seen order; duplicate loci collapse to the
    slot of their first occurrence.
    """

    __slots__ = ("_loci", "_slots")

    def __init__(self, loci: Sequence[Locus]) -> None:
        slots: dict[Locus, int] = {}
        ordered: list[Locus] = []
        for locus in loci:
            if locus not in slots:
                slots[locus] = len(ordered)
                ordered.append(locus)
        self._loci = tuple(ordered)
        self._slots = MappingProxyType(slots)

    def __len__(self) -> int:
        return len(self._loci)

    def __iter__(self) -> Iterator[Locus]:
        return iter(self._loci)

    def __contains__(self, locus: object) -> bool:
        return locus in self._slots

    @property
    def loci(self) -> tuple[Locus, ...]:
        return self._loci

    @property
    def slots(self) -> Mapping[Locus, int]:
        """Read-only view of the locus -> slot mapping."""
        return self._slots

    def slot(self, locus: Locus) -> Optional[int]:
        """Slot for locus, or None when the locus is not on the panel."""
        return self._slots.get(locus)

    def __repr__(self) -> str:
        return f"PanelIndex({len(self)} loci)"


@dataclass
class SampleVector:
    """
    Allele-fraction feature vector for one sample.

    ``fraction[i]`` is only meaningful where ``observed[i]`` is True; the
    zero default elsewhere must never be read on its own.

    Attributes:
        name: Sample name, unique within a run
        fraction: Alt allele fraction per panel slot
        observed: True where any record gave evidence at that slot
        depth_sum: Total read depth accumulated over observed slots
        observed_depth_count: Number of observations with depth > 0
        source: Variant-call source the sample came from
    """
    name: str
    fraction: np.ndarray
    observed: np.ndarray
    depth_sum: float = 0.0
    observed_depth_count: int = 0
    source: Optional[str] = None

    @classmethod
    def empty(cls, name: str, panel_size: int, source: Optional[str] = None) -> SampleVector:
        """Create an all-unobserved vector sized to the panel."""
        return cls(
            name=name,
            fraction=np.zeros(panel_size, dtype=np.float64),
            observed=np.zeros(panel_size, dtype=bool),
            source=source,
        )

    def record(self, slot: int, fraction: float, depth: float) -> None:
        """Store one observation at a slot and accumulate its depth."""
        self.fraction[slot] = fraction
        self.observed[slot] = True
        self.depth_sum += depth
        if depth > 0:
            self.observed_depth_count += 1

    @property
    def n_observed(self) -> int:
        return int(np.count_nonzero(self.observed))

    def mean_depth(self, panel_size: int, nonzero: bool = False) -> float:
        """
        Average depth of this sample.

        Args:
            panel_size: Number of panel loci (denominator in default mode)
            nonzero: Average only over observations with depth > 0
        """
        if nonzero:
            if self.observed_depth_count == 0:
                return 0.0
            return self.depth_sum / self.observed_depth_count
        if panel_size == 0:
            return 0.0
        return self.depth_sum / panel_size


class PairLabel(str, Enum):
    """Verdict for a sample pair."""
    MATCHED = "matched"
    UNMATCHED = "unmatched"
    INSUFFICIENT = "insufficient"

    @property
    def code(self) -> int:
        """Integer code stored in the label matrix."""
        return _LABEL_CODES[self]

    @classmethod
    def from_code(cls, code: int) -> PairLabel:
        for label, value in _LABEL_CODES.items():
            if value == code:
                return label
        raise ValueError(f"Unknown label code: {code}")


_LABEL_CODES = {
    PairLabel.MATCHED: 1,
    PairLabel.UNMATCHED: 0,
    PairLabel.INSUFFICIENT: -1,
}


@dataclass(frozen=True, slots=True)
class PairResult:
    """
    Comparison of one unordered sample pair.

    ``correlation`` is the true masked correlation; the value stored in
    the correlation matrix is ``matrix_correlation``.
    """
    sample_a: str
    sample_b: str
    correlation: float
    shared_count: int
    depth: float
    label: PairLabel
    score: float = 0.0

    @property
    def matrix_correlation(self) -> float:
        """Correlation as stored in the matrix (0.0 unless matched)."""
        return self.correlation if self.label is PairLabel.MATCHED else 0.0

    @property
    def is_matched(self) -> bool:
        return self.label is PairLabel.MATCHED


@dataclass
class PairwiseComparison:
    """
    Symmetric correlation and label matrices over all samples.

    Row/column i of both matrices corresponds to ``samples[i]``.
    """
    samples: list[str]
    correlation: np.ndarray
    labels: np.ndarray
    pairs: list[PairResult] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._index = {name: i for i, name in enumerate(self.samples)}
        self._pairs = {frozenset((p.sample_a, p.sample_b)): p for p in self.pairs}

    def __len__(self) -> int:
        return len(self.samples)

    def index(self, name: str) -> int:
        """Row/column index of a sample."""
        try:
            return self._index[name]
        except KeyError:
            raise KeyError(f"Unknown sample: {name}") from None

    def correlation_between(self, a: str, b: str) -> float:
        """Matrix correlation between two named samples."""
        return float(self.correlation[self.index(a), self.index(b)])

    def label_between(self, a: str, b: str) -> PairLabel:
        return PairLabel.from_code(int(self.labels[self.index(a), self.index(b)]))

    def pair(self, a: str, b: str) -> PairResult:
        """Detailed result for a pair of distinct samples (either order)."""
        try:
            return self._pairs[frozenset((a, b))]
        except KeyError:
            raise KeyError(f"No comparison for pair: {a}, {b}") from None

    def matched_pairs(self) -> list[PairResult]:
        return [p for p in self.pairs if p.is_matched]
