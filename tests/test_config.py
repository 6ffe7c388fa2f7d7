"""
Tests for ngsmatch.core.config module.
"""

from pathlib import Path

import pytest

from ngsmatch.core.config import MatchConfig, build_config, load_config_file, load_vcf_list
from ngsmatch.core.errors import ConfigError


class TestLoadVcfList:
    """Tests for VCF list loading."""
    
    def test_relative_and_absolute_paths(self, temp_dir):
        list_path = temp_dir / "vcfs.txt"
        list_path.write_text("# cohort\na.vcf\n\n/data/b.vcf\n  sub/c.vcf  \n")
        
        result = load_vcf_list(list_path)
        
        assert result.is_ok()
        assert result.unwrap() == [temp_dir / "a.vcf", Path("/data/b.vcf"), temp_dir / "sub" / "c.vcf"]
    
    def test_missing_list(self, temp_dir):
        result = load_vcf_list(temp_dir / "missing.txt")
        assert result.is_err()
        assert isinstance(result.unwrap_err(), ConfigError)
    
    def test_empty_list(self, temp_dir):
        list_path = temp_dir / "vcfs.txt"
        list_path.write_text("# nothing here\n\n")
        result = load_vcf_list(list_path)
        assert result.is_err()
        assert "empty" in str(result.unwrap_err())


class TestLoadConfigFile:
    """Tests for YAML settings."""
    
    def test_aliases_and_paths(self, temp_dir):
        config_path = temp_dir / "run.yaml"
        config_path.write_text(
            "vcfs:\n  - a.vcf\n  - /abs/b.vcf\n"
            "bed: panel.bed\n"
            "outdir: results\n"
            "family_cutoff: true\n"
            "threads: 4\n"
        )
        
        settings = load_config_file(config_path).unwrap()
        
        assert settings["vcf_paths"] == [temp_dir / "a.vcf", Path("/abs/b.vcf")]
        assert settings["panel_path"] == temp_dir / "panel.bed"
        assert settings["outdir"] == temp_dir / "results"
        assert settings["family_cutoff"] is True
        assert settings["threads"] == 4
    
    def test_single_vcf_string(self, temp_dir):
        config_path = temp_dir / "run.yaml"
        config_path.write_text("vcfs: a.vcf\n")
        settings = load_config_file(config_path).unwrap()
        assert settings["vcf_paths"] == [temp_dir / "a.vcf"]
    
    def test_empty_file(self, temp_dir):
        config_path = temp_dir / "run.yaml"
        config_path.write_text("")
        assert load_config_file(config_path).unwrap() == {}
    
    def test_unknown_key(self, temp_dir):
        config_path = temp_dir / "run.yaml"
        config_path.write_text("bed: panel.bed\ncolour: red\n")
        result = load_config_file(config_path)
        assert result.is_err()
        assert "colour" in str(result.unwrap_err())
    
    def test_not_a_mapping(self, temp_dir):
        config_path = temp_dir / "run.yaml"
        config_path.write_text("- a\n- b\n")
        assert load_config_file(config_path).is_err()
    
    def test_invalid_yaml(self, temp_dir):
        config_path = temp_dir / "run.yaml"
        config_path.write_text("bed: [unclosed\n")
        assert load_config_file(config_path).is_err()


class TestBuildConfig:
    """Tests for config assembly and validation."""
    
    def test_defaults(self):
        config = build_config(vcf_paths=["a.vcf"], panel_path="panel.bed").unwrap()
        
        assert isinstance(config, MatchConfig)
        assert config.vcf_paths == [Path("a.vcf")]
        assert config.panel_path == Path("panel.bed")
        assert config.outdir == Path(".")
        assert config.out_prefix == "output"
        assert config.threads == 1
        assert not config.family_cutoff
        assert not config.nonzero
        assert not config.heatmap
    
    def test_overrides_take_precedence(self):
        settings = {"vcf_paths": [Path("a.vcf")], "panel_path": Path("panel.bed"), "threads": 2}
        config = build_config(settings, threads=8, out_prefix=None).unwrap()
        assert config.threads == 8
        assert config.out_prefix == "output"
    
    def test_vcf_list_expanded(self, temp_dir):
        list_path = temp_dir / "vcfs.txt"
        list_path.write_text("a.vcf\nb.vcf\n")
        config = build_config(vcf_list=list_path, panel_path="panel.bed").unwrap()
        assert config.vcf_paths == [temp_dir / "a.vcf", temp_dir / "b.vcf"]
    
    def test_output_paths(self):
        config = build_config(vcf_paths=["a.vcf"], panel_path="p.bed", outdir="out", out_prefix="run1").unwrap()
        paths = config.output_paths
        assert paths["matrix"] == Path("out/run1_output_corr_matrix.txt")
        assert paths["all"] == Path("out/run1_all.txt")
        assert paths["matched"] == Path("out/run1_matched.txt")
        assert paths["heatmap"] == Path("out/run1_heatmap.pdf")
    
    @pytest.mark.parametrize("overrides", [
        {"panel_path": "panel.bed"},
        {"vcf_paths": ["a.vcf"]},
        {"vcf_paths": ["a.vcf"], "panel_path": "panel.bed", "threads": 0},
        {"vcf_paths": ["a.vcf"], "panel_path": "panel.bed", "threads": "many"},
        {"vcf_paths": ["a.vcf"], "panel_path": "panel.bed", "out_prefix": ""},
    ])
    def test_invalid(self, overrides):
        result = build_config(**overrides)
        assert result.is_err()
        assert isinstance(result.unwrap_err(), ConfigError)
    
    def test_missing_vcf_list(self, temp_dir):
        result = build_config(vcf_list=temp_dir / "missing.txt", panel_path="panel.bed")
        assert result.is_err()
