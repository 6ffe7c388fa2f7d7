"""
ngsmatch: sample identity QC for sequencing cohorts.

Decides which samples come from the same individual by correlating
read-depth allele fractions at a panel of known SNP loci:
- extract per-sample allele fractions from VCF files
- compute masked Pearson correlation over jointly observed loci
- classify each pair against depth-calibrated matched/unmatched models
"""

__version__ = "1.0.0"

from ngsmatch.core.result import Result, Ok, Err

__all__ = [
    "__version__",
    "Result",
    "Ok",
    "Err",
]
