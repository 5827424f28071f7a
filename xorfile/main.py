"""Compatibility module for the historical single-module layout.

The implementation lives in `engine.py`; `xorfile.main` keeps older
imports working.
"""

from .engine import xorfile, cli, main

__all__ = ["xorfile", "cli", "main"]
