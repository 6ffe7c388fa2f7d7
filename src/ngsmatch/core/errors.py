"""
Error taxonomy for ngsmatch.

All fatal conditions are reported as one of these exceptions, usually
carried inside an ``Err``. Messages always name the offending path or
argument.
"""

from __future__ import annotations
from pathlib import Path
from typing import Optional, Union


class NgsMatchError(Exception):
    """Base class for all ngsmatch errors."""
    
    def __init__(self, message: str, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class ConfigError(NgsMatchError):
    """Panel file or run configuration is missing, empty or invalid."""


class InputError(NgsMatchError):
    """A variant-call source could not be opened or decoded."""


class OutputError(NgsMatchError):
    """Result files could not be written."""
