"""
Tests for the ngsmatch command-line interface.
"""

import pytest
from click.testing import CliRunner

from ngsmatch import __version__
from ngsmatch.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def vcf_list(temp_dir, cohort_vcfs):
    path = temp_dir / "vcfs.txt"
    path.write_text("".join(f"{p.name}\n" for p in cohort_vcfs))
    return path


class TestCli:
    """Tests for the root command group."""
    
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
    
    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("run", "heatmap", "info"):
            assert command in result.output
    
    def test_info(self, runner):
        result = runner.invoke(cli, ["info"])
        assert result.exit_code == 0
        assert "ngsmatch version" in result.output
        assert "cyvcf2" in result.output


class TestRunCommand:
    """Tests for `ngsmatch run`."""
    
    def test_run(self, runner, temp_dir, panel_file, vcf_list):
        outdir = temp_dir / "out"
        result = runner.invoke(cli, [
            "run", "-l", str(vcf_list), "-b", str(panel_file),
            "-o", str(outdir), "-p", "cohort", "-t", "2",
        ])
        
        assert result.exit_code == 0, result.output
        assert "Matched: 1" in result.output
        assert (outdir / "cohort_output_corr_matrix.txt").exists()
        assert (outdir / "cohort_all.txt").exists()
        assert (outdir / "cohort_matched.txt").exists()
    
    def test_command_prefix(self, runner, temp_dir, panel_file, vcf_list):
        result = runner.invoke(cli, ["ru", "-l", str(vcf_list), "-b", str(panel_file), "-o", str(temp_dir)])
        assert result.exit_code == 0, result.output
        assert (temp_dir / "output_all.txt").exists()
    
    def test_config_file(self, runner, temp_dir, panel_file, vcf_list):
        config_path = temp_dir / "run.yaml"
        config_path.write_text(f"vcf_list: {vcf_list.name}\nbed: {panel_file.name}\nout_prefix: fromyaml\n")
        
        result = runner.invoke(cli, ["run", "-c", str(config_path), "-o", str(temp_dir / "out")])
        
        assert result.exit_code == 0, result.output
        assert (temp_dir / "out" / "fromyaml_matched.txt").exists()
    
    def test_missing_panel_option(self, runner, vcf_list):
        result = runner.invoke(cli, ["run", "-l", str(vcf_list)])
        assert result.exit_code == 1
        assert "No panel file" in result.output
    
    def test_invalid_threads(self, runner, panel_file, vcf_list):
        result = runner.invoke(cli, ["run", "-l", str(vcf_list), "-b", str(panel_file), "-t", "0"])
        assert result.exit_code == 1
    
    def test_missing_panel_file(self, runner, temp_dir, vcf_list):
        result = runner.invoke(cli, [
            "run", "-l", str(vcf_list), "-b", str(temp_dir / "missing.bed"), "-o", str(temp_dir / "out"),
        ])
        assert result.exit_code == 1
        assert not (temp_dir / "out").exists()
    
    def test_unwritable_outdir_fails_cleanly(self, runner, temp_dir, panel_file, vcf_list):
        blocker = temp_dir / "blocker"
        blocker.write_text("not a directory")
        
        result = runner.invoke(cli, ["run", "-l", str(vcf_list), "-b", str(panel_file), "-o", str(blocker / "out")])
        
        assert result.exit_code == 1
        assert not isinstance(result.exception, NotADirectoryError)
        assert "Matching failed" in result.output


class TestHeatmapCommand:
    """Tests for `ngsmatch heatmap`."""
    
    def test_heatmap(self, runner, temp_dir, panel_file, vcf_list):
        pytest.importorskip("matplotlib")
        pytest.importorskip("seaborn")
        
        runner.invoke(cli, ["run", "-l", str(vcf_list), "-b", str(panel_file), "-o", str(temp_dir)])
        output = temp_dir / "heatmap.png"
        result = runner.invoke(cli, [
            "heatmap", "-i", str(temp_dir / "output_output_corr_matrix.txt"), "-o", str(output),
        ])
        
        assert result.exit_code == 0, result.output
        assert output.exists()
    
    def test_missing_input(self, runner, temp_dir):
        result = runner.invoke(cli, ["heatmap", "-i", str(temp_dir / "missing.txt"), "-o", "x.pdf"])
        assert result.exit_code != 0
