"""
Run configuration.

A run is described by a ``MatchConfig``. It is normally assembled by the
CLI, optionally on top of a YAML file:

    vcf_list: vcfs.txt        # or `vcfs:` with an inline list
    bed: panel.bed
    outdir: results
    out_prefix: cohort
    family_cutoff: false
    nonzero: false
    threads: 8
    heatmap: true
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ngsmatch.core.errors import ConfigError
from ngsmatch.core.result import Result, Ok, Err

logger = logging.getLogger(__name__)

# Output file name suffixes by kind
OUTPUT_SUFFIXES = {
    "matrix": "_output_corr_matrix.txt",
    "all": "_all.txt",
    "matched": "_matched.txt",
    "heatmap": "_heatmap.pdf",
}

# YAML key aliases -> MatchConfig field
CONFIG_KEYS = {
    "vcf_list": "vcf_list",
    "vcfs": "vcf_paths",
    "vcf_paths": "vcf_paths",
    "bed": "panel_path",
    "panel": "panel_path",
    "panel_path": "panel_path",
    "outdir": "outdir",
    "out_prefix": "out_prefix",
    "family_cutoff": "family_cutoff",
    "nonzero": "nonzero",
    "threads": "threads",
    "heatmap": "heatmap",
}


@dataclass
class MatchConfig:
    """
    Everything needed for one sample-matching run.

    Attributes:
        vcf_paths: Variant-call sources, one or more samples each
        panel_path: SNP panel (BED) file
        outdir: Output directory
        out_prefix: Prefix for output file names
        family_cutoff: Use the stricter (family-aware) depth model
        nonzero: Average depth only over loci with nonzero depth
        threads: Worker threads for extraction and pairwise comparison
        heatmap: Also render a correlation heatmap
    """
    vcf_paths: List[Path]
    panel_path: Path
    outdir: Path = Path(".")
    out_prefix: str = "output"
    family_cutoff: bool = False
    nonzero: bool = False
    threads: int = 1
    heatmap: bool = False

    def validate(self) -> Result[MatchConfig, ConfigError]:
        """Check the configuration before any work starts."""
        if not self.vcf_paths:
            return Err(ConfigError("No variant-call files given"))
        if not self.panel_path:
            return Err(ConfigError("No panel file given"))
        if self.threads < 1:
            return Err(ConfigError(f"threads must be >= 1, got {self.threads}"))
        if not self.out_prefix:
            return Err(ConfigError("out_prefix must not be empty"))
        return Ok(self)

    @property
    def output_paths(self) -> Dict[str, Path]:
        """Output files keyed by kind."""
        return result_paths(self.outdir, self.out_prefix)


def result_paths(outdir: Union[str, Path], out_prefix: str) -> Dict[str, Path]:
    """Result file paths for a run, keyed by kind."""
    outdir = Path(outdir)
    return {kind: outdir / f"{out_prefix}{suffix}" for kind, suffix in OUTPUT_SUFFIXES.items()}


def load_vcf_list(list_path: Union[str, Path]) -> Result[List[Path], ConfigError]:
    """
    Load variant-call file paths from a single-column text file.

    Blank lines and '#' comments are skipped; relative paths are resolved
    against the list file's directory.
    """
    list_path = Path(list_path)
    if not list_path.is_file():
        return Err(ConfigError(f"VCF list not found: {list_path}", list_path))

    paths = []
    try:
        with open(list_path) as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                path = Path(line)
                if not path.is_absolute():
                    path = list_path.parent / path
                paths.append(path)
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"Failed to read VCF list {list_path}: {e}", list_path))

    if not paths:
        return Err(ConfigError(f"VCF list is empty: {list_path}", list_path))

    logger.info(f"Loaded {len(paths)} variant-call paths from {list_path}")
    return Ok(paths)


def load_config_file(config_path: Union[str, Path]) -> Result[Dict[str, Any], ConfigError]:
    """
    Load run settings from a YAML file.

    Keys are mapped onto MatchConfig field names (see CONFIG_KEYS);
    relative paths are resolved against the config file's directory.
    """
    config_path = Path(config_path)
    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        return Err(ConfigError(f"Failed to load config {config_path}: {e}", config_path))

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        return Err(ConfigError(f"Config must be a mapping: {config_path}", config_path))

    unknown = sorted(set(raw) - set(CONFIG_KEYS))
    if unknown:
        return Err(ConfigError(f"Unknown config keys in {config_path}: {', '.join(unknown)}", config_path))

    base = config_path.parent
    settings: Dict[str, Any] = {}
    for key, value in raw.items():
        name = CONFIG_KEYS[key]
        if name in ("vcf_list", "panel_path", "outdir"):
            value = _resolve(base, value)
        elif name == "vcf_paths":
            if isinstance(value, str):
                value = [value]
            value = [_resolve(base, v) for v in value]
        settings[name] = value

    return Ok(settings)


def _resolve(base: Path, value: Any) -> Path:
    path = Path(str(value))
    return path if path.is_absolute() else base / path


def build_config(
    settings: Optional[Dict[str, Any]] = None,
    **overrides: Any,
) -> Result[MatchConfig, ConfigError]:
    """
    Assemble a validated MatchConfig.

    ``overrides`` (typically CLI options) take precedence over
    ``settings`` (typically from a YAML file); None values are ignored.
    A ``vcf_list`` entry is expanded with load_vcf_list.
    """
    merged: Dict[str, Any] = dict(settings or {})
    merged.update({k: v for k, v in overrides.items() if v is not None})

    vcf_list = merged.pop("vcf_list", None)
    if vcf_list is not None:
        list_result = load_vcf_list(vcf_list)
        if list_result.is_err():
            return list_result
        merged["vcf_paths"] = list_result.unwrap()

    if not merged.get("vcf_paths"):
        return Err(ConfigError("No variant-call files given (use --vcf-list)"))
    if not merged.get("panel_path"):
        return Err(ConfigError("No panel file given (use --bed)"))

    allowed = {f.name for f in fields(MatchConfig)}
    unknown = sorted(set(merged) - allowed)
    if unknown:
        return Err(ConfigError(f"Unknown settings: {', '.join(unknown)}"))

    merged["vcf_paths"] = [Path(p) for p in merged["vcf_paths"]]
    merged["panel_path"] = Path(merged["panel_path"])
    if "outdir" in merged:
        merged["outdir"] = Path(merged["outdir"])
    try:
        if "threads" in merged:
            merged["threads"] = int(merged["threads"])
    except (TypeError, ValueError):
        return Err(ConfigError(f"threads must be an integer, got {merged['threads']!r}"))

    return MatchConfig(**merged).validate()
