"""
Main CLI entry point for ngsmatch.

Defines the root command group and registers all subcommands.
Uses Click framework for argument parsing and help generation.
"""

import logging
from typing import Optional

import click

from ngsmatch import __version__


# Custom Click context settings for consistent behavior
CONTEXT_SETTINGS = dict(
    help_option_names=["-h", "--help"],
    max_content_width=120,
)


class AliasedGroup(click.Group):
    """
    Click group that accepts unambiguous command prefixes and treats
    underscores and hyphens as equivalent.
    """

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        normalized_name = cmd_name.replace("_", "-")

        rv = click.Group.get_command(self, ctx, normalized_name)
        if rv is not None:
            return rv

        matches = [x for x in self.list_commands(ctx) if x.startswith(normalized_name)]
        if not matches:
            return None
        elif len(matches) == 1:
            return click.Group.get_command(self, ctx, matches[0])
        else:
            ctx.fail(f"Ambiguous command '{cmd_name}': could be {', '.join(sorted(matches))}")
            return None


@click.group(cls=AliasedGroup, context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "-V", "--version", prog_name="ngsmatch")
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output with detailed logging.",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    help="Suppress all output except errors.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool) -> None:
    """
    ngsmatch: sample identity QC for sequencing cohorts.

    Finds samples that come from the same individual by correlating
    read-depth allele fractions at a panel of known SNP loci.

    \b
    Commands:
      run      - Match all samples of a set of VCF files
      heatmap  - Plot a correlation matrix written by `run`
      info     - Show version and dependency information

    \b
    Quick start:
      ngsmatch run --vcf-list vcfs.txt --bed snp_panel.bed -o results -p cohort
    """
    ctx.ensure_object(dict)

    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    if verbose and not quiet:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    elif quiet:
        logging.basicConfig(level=logging.ERROR)


# Import and register subcommands
from ngsmatch.cli.match import run, heatmap

cli.add_command(run)
cli.add_command(heatmap)


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """
    Display version and environment information.
    """
    import sys
    import platform

    click.echo(f"ngsmatch version: {__version__}")
    click.echo(f"Python version: {sys.version}")
    click.echo(f"Platform: {platform.platform()}")

    click.echo("\nInstalled dependencies:")

    # Map distribution names to import names
    dependencies = {
        "cyvcf2": "cyvcf2",
        "numpy": "numpy",
        "pandas": "pandas",
        "click": "click",
        "pyyaml": "yaml",
        "matplotlib": "matplotlib",
        "seaborn": "seaborn",
    }

    for name, import_name in dependencies.items():
        try:
            module = __import__(import_name)
            version = getattr(module, "__version__", "unknown")
            click.echo(f"  {name}: {version}")
        except ImportError:
            click.echo(f"  {name}: not installed")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
