"""
Tests for ngsmatch.core.result module.
"""

import pytest
from ngsmatch.core.result import Ok, Err, collect_results
from ngsmatch.core.errors import ConfigError, InputError


class TestResult:
    """Tests for Result type."""
    
    def test_ok_is_ok(self):
        result = Ok(42)
        assert result.is_ok() is True
        assert result.is_err() is False
    
    def test_err_is_err(self):
        result = Err(ConfigError("bad panel"))
        assert result.is_err() is True
        assert result.is_ok() is False
    
    def test_err_unwrap_reraises_typed_error(self):
        """Unwrapping an Err carrying an ngsmatch error raises that error."""
        error = InputError("cannot open x.vcf", "x.vcf")
        with pytest.raises(InputError, match="x.vcf"):
            Err(error).unwrap()
    
    def test_err_unwrap_plain_payload(self):
        """Non-ngsmatch payloads raise ValueError."""
        with pytest.raises(ValueError, match="plain"):
            Err("plain").unwrap()
    
    def test_ok_unwrap_err_raises(self):
        with pytest.raises(ValueError):
            Ok(42).unwrap_err()
    
    def test_unwrap_or(self):
        assert Ok(42).unwrap_or(0) == 42
        assert Err("error").unwrap_or(0) == 0
    
    def test_map_and_then(self):
        assert Ok(5).map(lambda x: x * 2).unwrap() == 10
        assert Ok(5).and_then(lambda x: Ok(x + 1)).unwrap() == 6
        assert Err("e").map(lambda x: x * 2).unwrap_err() == "e"
        assert Err("e").and_then(lambda x: Ok(x)).unwrap_err() == "e"


class TestCollectResults:
    """Tests for collect_results function."""
    
    def test_all_ok(self):
        collected = collect_results([Ok(1), Ok(2), Ok(3)])
        assert collected.unwrap() == [1, 2, 3]
    
    def test_first_err_wins(self):
        first = InputError("a.vcf")
        collected = collect_results([Ok(1), Err(first), Err(InputError("b.vcf"))])
        assert collected.is_err()
        assert collected.unwrap_err() is first
    
    def test_empty_list(self):
        assert collect_results([]).unwrap() == []


class TestErrors:
    """Tests for the error taxonomy."""
    
    def test_path_attribute(self):
        error = ConfigError("Panel file not found: p.bed", "p.bed")
        assert error.path.name == "p.bed"
        assert "p.bed" in str(error)
    
    def test_path_optional(self):
        assert InputError("no path").path is None
