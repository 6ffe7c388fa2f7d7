"""
Command-line interface for ngsmatch.
"""
