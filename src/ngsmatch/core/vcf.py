"""
Variant-call source access.

Wraps cyvcf2 so the extractor only sees, per panel locus, the read-depth
evidence it needs: an aggregate DP4 tuple (samtools mpileup style) or
per-sample AD/DP FORMAT fields (GATK style).

Note: cyvcf2 reports missing integer FORMAT values as large negative
sentinels and missing floats as NaN; both are treated as absent.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union
import logging
import math

from cyvcf2 import VCF

from ngsmatch.core.errors import InputError
from ngsmatch.core.models import Locus, PanelIndex
from ngsmatch.core.result import Result, Ok, Err

logger = logging.getLogger(__name__)

# INFO key carrying ref-forward, ref-reverse, alt-forward, alt-reverse depths
AGGREGATE_DEPTH_KEY = "DP4"
ALLELIC_DEPTH_KEY = "AD"
TOTAL_DEPTH_KEY = "DP"

DepthTuple = Tuple[float, float, float, float]
SampleDepth = Tuple[Tuple[float, ...], Optional[float]]


@dataclass(frozen=True, slots=True)
class DepthRecord:
    """
    Depth evidence of one variant record at a panel locus.

    Attributes:
        locus: Normalized locus of the record
        aggregate: DP4 tuple, or None when the record has no usable DP4
        per_sample: Per sample (allelic depth components, total depth);
            None when AD or DP is not present on the record
    """
    locus: Locus
    aggregate: Optional[DepthTuple] = None
    per_sample: Optional[List[SampleDepth]] = None


def _is_present(value: float) -> bool:
    return math.isfinite(value) and value >= 0


def parse_depth_tuple(value) -> Optional[DepthTuple]:
    """
    Normalize a DP4 value into four floats.

    Accepts a numeric sequence or a comma separated string. Components
    that do not parse are dropped; fewer than four numbers gives None.
    """
    if value is None:
        return None

    if isinstance(value, bytes):
        value = value.decode()
    if isinstance(value, str):
        parts = value.split(',')
    else:
        try:
            parts = list(value)
        except TypeError:
            parts = [value]

    numbers = []
    for part in parts:
        try:
            numbers.append(float(part))
        except (TypeError, ValueError):
            continue

    if len(numbers) < 4:
        return None
    return (numbers[0], numbers[1], numbers[2], numbers[3])


def _format_values(variant, key: str):
    try:
        return variant.format(key)
    except KeyError:
        return None


def per_sample_depths(variant) -> Optional[List[SampleDepth]]:
    """Extract (AD components, DP) for every sample of a cyvcf2 variant."""
    allelic = _format_values(variant, ALLELIC_DEPTH_KEY)
    total = _format_values(variant, TOTAL_DEPTH_KEY)
    if allelic is None or total is None:
        return None

    depths = []
    for ad_row, dp_row in zip(allelic, total):
        # Components stay in allele order; a missing ref or first alt voids the call
        row = [float(x) for x in ad_row]
        if len(row) >= 2 and _is_present(row[0]) and _is_present(row[1]):
            components = tuple(row)
        else:
            components = ()
        depth = float(dp_row[0]) if len(dp_row) else math.nan
        depths.append((components, depth if _is_present(depth) else None))
    return depths


class VariantSource:
    """
    One opened variant-call file.

    Usage:
        >>> with open_variant_source(path).unwrap() as source:
        ...     for record in source.records(panel):
        ...         ...
    """

    def __init__(self, path: Path, vcf: VCF) -> None:
        self.path = path
        self._vcf = vcf

    @property
    def name(self) -> str:
        return str(self.path)

    @property
    def samples(self) -> List[str]:
        return list(self._vcf.samples)

    def records(self, panel: PanelIndex) -> Iterator[DepthRecord]:
        """Yield depth evidence for records that fall on panel loci."""
        for variant in self._vcf:
            locus = Locus.from_record(variant.CHROM, variant.POS)
            if locus not in panel:
                continue

            aggregate = parse_depth_tuple(variant.INFO.get(AGGREGATE_DEPTH_KEY))
            if aggregate is not None:
                yield DepthRecord(locus=locus, aggregate=aggregate)
            else:
                yield DepthRecord(locus=locus, per_sample=per_sample_depths(variant))

    def close(self) -> None:
        self._vcf.close()

    def __enter__(self) -> VariantSource:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def open_variant_source(vcf_path: Union[str, Path]) -> Result[VariantSource, InputError]:
    """
    Open a VCF/BCF file (plain or bgzip compressed) with cyvcf2.

    Returns:
        Ok(VariantSource), or Err(InputError) naming the file
    """
    vcf_path = Path(vcf_path)
    if not vcf_path.is_file():
        return Err(InputError(f"Variant file not found: {vcf_path}", vcf_path))

    try:
        vcf = VCF(str(vcf_path))
    except Exception as e:
        return Err(InputError(f"Failed to open variant file {vcf_path}: {e}", vcf_path))

    return Ok(VariantSource(vcf_path, vcf))
