"""
Core module for ngsmatch.

Contains the result type, error taxonomy, data models, panel and
variant-source access, and run configuration.
"""

from ngsmatch.core.result import Result, Ok, Err
from ngsmatch.core.errors import NgsMatchError, ConfigError, InputError, OutputError
from ngsmatch.core.models import (
    Locus,
    PanelIndex,
    SampleVector,
    PairLabel,
    PairResult,
    PairwiseComparison,
)
from ngsmatch.core.panel import load_panel
from ngsmatch.core.config import MatchConfig, build_config, load_vcf_list

__all__ = [
    "Result",
    "Ok",
    "Err",
    "NgsMatchError",
    "ConfigError",
    "InputError",
    "OutputError",
    "Locus",
    "PanelIndex",
    "SampleVector",
    "PairLabel",
    "PairResult",
    "PairwiseComparison",
    "load_panel",
    "MatchConfig",
    "build_config",
    "load_vcf_list",
]
