"""
Core utilities for the Weissman score input preparation pipeline.

This package provides configuration constants, exceptions, input validation,
file handling and logging setup.
"""
