"""
Test configuration and fixtures.
"""

import pytest
from pathlib import Path
import tempfile
import shutil

import numpy as np

from ngsmatch.core.models import Locus, PanelIndex, SampleVector


VCF_HEADER = (
    "##fileformat=VCFv4.2\n"
    "##contig=<ID=1,length=100000>\n"
    "##contig=<ID=2,length=100000>\n"
    "##contig=<ID=chr1,length=100000>\n"
    "##INFO=<ID=DP4,Number=4,Type=Integer,Description=\"Ref-forward, ref-reverse, alt-forward and alt-reverse bases\">\n"
    "##FORMAT=<ID=GT,Number=1,Type=String,Description=\"Genotype\">\n"
    "##FORMAT=<ID=AD,Number=R,Type=Integer,Description=\"Allelic depths\">\n"
    "##FORMAT=<ID=DP,Number=1,Type=Integer,Description=\"Read depth\">\n"
)

# Alt read counts (of 20) at the ten panel loci
INDIVIDUAL_A = [0, 10, 20, 5, 15, 0, 20, 10, 5, 15]
INDIVIDUAL_B = [20, 0, 10, 15, 5, 20, 0, 0, 20, 5]
PANEL_POSITIONS = [101, 201, 301, 401, 501, 601, 701, 801, 901, 1001]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir)


def write_vcf(path: Path, samples, lines) -> Path:
    """Write a plain-text VCF with the shared header."""
    columns = ["#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO"]
    if samples:
        columns += ["FORMAT"] + list(samples)
    path.write_text(VCF_HEADER + "\t".join(columns) + "\n" + "".join(line + "\n" for line in lines))
    return path


def ad_line(chrom: str, pos: int, calls) -> str:
    """VCF record with GT:AD:DP calls given as (ref, alt, depth) per sample."""
    fields = [chrom, str(pos), ".", "A", "G", "50", "PASS", ".", "GT:AD:DP"]
    for ref, alt, depth in calls:
        fields.append(f"0/1:{ref},{alt}:{depth}")
    return "\t".join(fields)


def dp4_line(chrom: str, pos: int, dp4, n_samples: int = 1) -> str:
    """VCF record carrying only an INFO DP4 tuple."""
    fields = [chrom, str(pos), ".", "A", "G", "50", "PASS", "DP4=" + ",".join(str(v) for v in dp4)]
    if n_samples:
        fields.append("GT")
        fields.extend(["0/1"] * n_samples)
    return "\t".join(fields)


@pytest.fixture
def panel_file(temp_dir):
    """Ten-locus panel on chromosome 1 (end column = SNP position)."""
    path = temp_dir / "panel.bed"
    path.write_text(
        "# SNP panel\n"
        + "".join(f"1\t{pos - 1}\t{pos}\n" for pos in PANEL_POSITIONS)
    )
    return path


@pytest.fixture
def panel():
    """In-memory ten-locus panel matching panel_file."""
    return PanelIndex([Locus("1", pos) for pos in PANEL_POSITIONS])


@pytest.fixture
def cohort_vcfs(temp_dir):
    """
    Two VCF files: a.vcf holds S1 (individual A) and S2 (individual B),
    b.vcf holds S1_rep (individual A again). Depth 20 everywhere.
    """
    a_lines = [
        ad_line("1", pos, [(20 - alt_a, alt_a, 20), (20 - alt_b, alt_b, 20)])
        for pos, alt_a, alt_b in zip(PANEL_POSITIONS, INDIVIDUAL_A, INDIVIDUAL_B)
    ]
    # Off-panel record is ignored
    a_lines.append(ad_line("2", 5000, [(10, 10, 20), (10, 10, 20)]))
    b_lines = [
        ad_line("chr1", pos, [(20 - alt, alt, 20)])
        for pos, alt in zip(PANEL_POSITIONS, INDIVIDUAL_A)
    ]
    return [
        write_vcf(temp_dir / "a.vcf", ["S1", "S2"], a_lines),
        write_vcf(temp_dir / "b.vcf", ["S1_rep"], b_lines),
    ]


def make_sample(name, fractions, observed=None, depth_sum=0.0, depth_count=0):
    """Build a SampleVector directly from fractions and an observed mask."""
    fractions = np.asarray(fractions, dtype=np.float64)
    if observed is None:
        observed = np.ones(len(fractions), dtype=bool)
    return SampleVector(
        name=name,
        fraction=fractions,
        observed=np.asarray(observed, dtype=bool),
        depth_sum=float(depth_sum),
        observed_depth_count=depth_count,
    )
