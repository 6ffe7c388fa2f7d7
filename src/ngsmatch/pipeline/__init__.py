"""
Pipeline execution: one call from configuration to written results.
"""

from ngsmatch.pipeline.runner import run_match

__all__ = ["run_match"]
