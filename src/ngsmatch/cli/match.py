"""
Sample matching CLI commands.

  run      - Extract, correlate, classify and write results
  heatmap  - Plot a correlation matrix written by `run`
"""

import click
from pathlib import Path
from typing import Optional

from ngsmatch.cli.utils import (
    echo_success,
    echo_error,
    echo_warning,
    echo_info,
    echo_step,
    format_number,
    format_duration,
)


@click.command()
@click.option(
    "-l", "--vcf-list",
    type=click.Path(path_type=Path),
    help="Text file with one VCF path per line.",
)
@click.option(
    "-b", "--bed",
    type=click.Path(path_type=Path),
    help="SNP panel BED file (end column = 1-based SNP position).",
)
@click.option(
    "-o", "--outdir",
    type=click.Path(path_type=Path),
    help="Output directory (default: .).",
)
@click.option(
    "-p", "--out-prefix",
    type=str,
    help="Output file prefix (default: output).",
)
@click.option(
    "--family-cutoff",
    is_flag=True,
    default=None,
    help="Apply stricter thresholds for cohorts with related individuals.",
)
@click.option(
    "--nonzero",
    is_flag=True,
    default=None,
    help="Average depth over loci with nonzero depth only.",
)
@click.option(
    "-t", "--threads",
    type=int,
    help="Number of worker threads (default: 1).",
)
@click.option(
    "-c", "--config",
    type=click.Path(exists=True, path_type=Path),
    help="YAML file with run settings; command-line options take precedence.",
)
@click.option(
    "--heatmap/--no-heatmap",
    default=None,
    help="Also plot a correlation heatmap (default: no).",
)
@click.pass_context
def run(
    ctx: click.Context,
    vcf_list: Optional[Path],
    bed: Optional[Path],
    outdir: Optional[Path],
    out_prefix: Optional[str],
    family_cutoff: Optional[bool],
    nonzero: Optional[bool],
    threads: Optional[int],
    config: Optional[Path],
    heatmap: Optional[bool],
) -> None:
    """
    Match samples across VCF files at SNP panel loci.

    Every pair of samples is labelled matched, unmatched or insufficient
    (fewer than 5 shared loci).

    \b
    Output files:
      {prefix}_output_corr_matrix.txt  - Correlation matrix (unmatched pairs = 0)
      {prefix}_all.txt                 - All pairwise comparisons
      {prefix}_matched.txt             - Matched pairs only
      {prefix}_heatmap.pdf             - Heatmap (with --heatmap)
    """
    from ngsmatch.core.config import build_config, load_config_file
    from ngsmatch.pipeline.runner import run_match

    verbose = ctx.obj.get("verbose", False) if ctx.obj else False

    settings = {}
    if config:
        echo_info(f"Loading settings from {config}")
        settings_result = load_config_file(config)
        if settings_result.is_err():
            echo_error(str(settings_result.unwrap_err()))
            raise SystemExit(1)
        settings = settings_result.unwrap()

    config_result = build_config(
        settings,
        vcf_list=vcf_list,
        panel_path=bed,
        outdir=outdir,
        out_prefix=out_prefix,
        family_cutoff=family_cutoff,
        nonzero=nonzero,
        threads=threads,
        heatmap=heatmap,
    )
    if config_result.is_err():
        echo_error(f"Invalid configuration: {config_result.unwrap_err()}")
        raise SystemExit(1)
    match_config = config_result.unwrap()

    echo_step(1, 2, f"Matching {len(match_config.vcf_paths)} VCF files against {match_config.panel_path}")
    if match_config.family_cutoff:
        echo_info("Using family cutoff thresholds")

    result = run_match(match_config, verbose=verbose)

    if result.is_err():
        echo_error(f"Matching failed: {result.unwrap_err()}")
        raise SystemExit(1)

    stats = result.unwrap()
    echo_step(2, 2, "Results")
    echo_success(f"{stats['n_samples']} samples, {format_number(stats['n_pairs'])} pairs "
                 f"({stats['panel_loci']} panel loci)")
    echo_info(f"  ├─ Matched: {format_number(stats['matched'])}")
    echo_info(f"  ├─ Unmatched: {format_number(stats['unmatched'])}")
    echo_info(f"  └─ Insufficient: {format_number(stats['insufficient'])}")
    for kind, path in stats["outputs"].items():
        echo_info(f"{kind}: {path}")
    if match_config.heatmap and "heatmap" not in stats["outputs"]:
        echo_warning("Heatmap was not written; tables are complete")
    echo_success(f"Completed in {format_duration(stats['elapsed_seconds'])}")


@click.command()
@click.option(
    "-i", "--input",
    "input_path",
    required=True,
    type=click.Path(exists=True, path_type=Path),
    help="Correlation matrix file written by `ngsmatch run`.",
)
@click.option(
    "-o", "--output",
    required=True,
    type=click.Path(path_type=Path),
    help="Output image (.pdf, .png, .svg).",
)
@click.option(
    "--width",
    default=8.0,
    type=float,
    help="Figure width in inches (default: 8).",
)
@click.option(
    "--height",
    default=8.0,
    type=float,
    help="Figure height in inches (default: 8).",
)
def heatmap(input_path: Path, output: Path, width: float, height: float) -> None:
    """
    Plot a correlation matrix as a heatmap, samples sorted by name.
    """
    from ngsmatch.report.heatmap import plot_heatmap

    result = plot_heatmap(input_path, output, width=width, height=height)
    if result.is_err():
        echo_error(f"Heatmap failed: {result.unwrap_err()}")
        raise SystemExit(1)

    echo_success(f"Saved heatmap to {result.unwrap()}")
