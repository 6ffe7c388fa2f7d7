"""
Per-sample allele-fraction extraction.

Architecture:
- One task per variant-call source (thread pool, cyvcf2 releases the GIL
  while decoding)
- Each task builds private SampleVectors for the samples its source declares
- The controller merges task buffers in source-list order once all tasks
  have finished; the first failing source aborts the run

Two depth encodings are understood per record:
- DP4 (INFO): aggregate ref/alt forward/reverse depths. The same fraction
  is applied to every sample of the source. DP4 is not per-sample, so in
  multi-sample files every sample gets the pooled signal.
- AD + DP (FORMAT): per-sample allelic and total depth.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ngsmatch.core.errors import InputError
from ngsmatch.core.models import PanelIndex, SampleVector
from ngsmatch.core.result import Result, Ok, Err, collect_results
from ngsmatch.core.vcf import DepthRecord, DepthTuple, open_variant_source

logger = logging.getLogger(__name__)

# Below this ref+alt count the fraction is forced to 0
MIN_ALLELE_SUM = 0.5


def fraction_from_aggregate(depths: DepthTuple) -> Tuple[float, float]:
    """
    Alt fraction and total depth from a DP4 tuple.

    Returns:
        (fraction, total) with fraction 0.0 when total is 0
    """
    ref_f, ref_r, alt_f, alt_r = depths
    total = ref_f + ref_r + alt_f + alt_r
    fraction = (alt_f + alt_r) / total if total > 0 else 0.0
    return fraction, total


def fraction_from_allelic_depth(ref_count: float, alt_count: float) -> float:
    """Alt fraction from AD counts, 0.0 when ref+alt is below MIN_ALLELE_SUM."""
    allele_sum = ref_count + alt_count
    if allele_sum < MIN_ALLELE_SUM:
        return 0.0
    return alt_count / allele_sum


def apply_record(record: DepthRecord, slot: int, samples: Sequence[SampleVector]) -> int:
    """
    Apply one record's evidence at a panel slot.

    Returns:
        Number of samples updated
    """
    if record.aggregate is not None:
        fraction, total = fraction_from_aggregate(record.aggregate)
        for sample in samples:
            sample.record(slot, fraction, total)
        return len(samples)

    if record.per_sample is None:
        return 0

    updated = 0
    for sample, (allelic, depth) in zip(samples, record.per_sample):
        if len(allelic) < 2 or depth is None:
            continue
        sample.record(slot, fraction_from_allelic_depth(allelic[0], allelic[1]), depth)
        updated += 1
    return updated


def extract_samples(
    sample_names: Sequence[str],
    records: Iterable[DepthRecord],
    panel: PanelIndex,
    source: Optional[str] = None,
) -> List[SampleVector]:
    """
    Build one SampleVector per declared sample from a record stream.

    Records off the panel or without usable depth fields are skipped.

    Args:
        sample_names: Samples declared by the source, in column order
        records: Depth records of the source
        panel: Shared, read-only panel index
        source: Source name stored on each vector

    Returns:
        List of SampleVectors in sample_names order
    """
    samples = [SampleVector.empty(name, len(panel), source=source) for name in sample_names]

    used = 0
    skipped = 0
    for record in records:
        slot = panel.slot(record.locus)
        if slot is None:
            continue
        if apply_record(record, slot, samples):
            used += 1
        else:
            skipped += 1
            logger.debug(f"{source}: no usable depth at {record.locus}")

    logger.debug(f"{source}: {used} panel records used, {skipped} skipped")
    return samples


def extract_source(vcf_path: Union[str, Path], panel: PanelIndex) -> Result[List[SampleVector], InputError]:
    """
    Extract SampleVectors from one variant-call file.

    Returns:
        Ok(list of SampleVectors), or Err(InputError) naming the file
    """
    open_result = open_variant_source(vcf_path)
    if open_result.is_err():
        return open_result

    try:
        with open_result.unwrap() as source:
            names = source.samples
            if not names:
                logger.warning(f"! {source.name} declares no samples")
            samples = extract_samples(names, source.records(panel), panel, source=source.name)
    except Exception as e:
        return Err(InputError(f"Failed to read variant records from {vcf_path}: {e}", vcf_path))

    for sample in samples:
        logger.info(f"✓ {sample.name}: {sample.n_observed}/{len(panel)} panel loci observed")
    return Ok(samples)


def check_unique_names(samples: Sequence[SampleVector]) -> Result[List[SampleVector], InputError]:
    """Reject runs where two vectors share a sample name."""
    seen = {}
    for sample in samples:
        if sample.name in seen:
            return Err(InputError(
                f"Duplicate sample name '{sample.name}' in {seen[sample.name]} and {sample.source}",
                sample.source,
            ))
        seen[sample.name] = sample.source
    return Ok(list(samples))


def extract_all(
    vcf_paths: Sequence[Union[str, Path]],
    panel: PanelIndex,
    threads: int = 1,
) -> Result[List[SampleVector], InputError]:
    """
    Extract SampleVectors from every source, in parallel.

    Each task owns its vectors until the controller merges them; results
    are merged in vcf_paths order regardless of completion order.

    Args:
        vcf_paths: Variant-call files
        panel: Shared, read-only panel index
        threads: Number of worker threads (1 = serial)

    Returns:
        Ok(all SampleVectors), or the Err of the first source that failed
    """
    logger.info(f"→ Extracting allele fractions from {len(vcf_paths)} files ({threads} threads)")

    if threads == 1 or len(vcf_paths) == 1:
        per_source = []
        for path in vcf_paths:
            result = extract_source(path, panel)
            if result.is_err():
                return result
            per_source.append(result)
    else:
        per_source = [None] * len(vcf_paths)
        with ThreadPoolExecutor(max_workers=threads) as executor:
            futures = {
                executor.submit(extract_source, path, panel): i
                for i, path in enumerate(vcf_paths)
            }
            for future in as_completed(futures):
                result = future.result()
                if result.is_err():
                    for pending in futures:
                        pending.cancel()
                    logger.error(f"✗ {result.unwrap_err()}")
                    return result
                per_source[futures[future]] = result

    merged = collect_results(per_source)
    if merged.is_err():
        return merged

    samples = [sample for group in merged.unwrap() for sample in group]
    logger.info(f"✓ Extracted {len(samples)} samples")
    return check_unique_names(samples)
