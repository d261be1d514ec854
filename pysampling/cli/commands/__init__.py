"""CLI commands for pysampling."""

from . import run, coverage

__all__ = ["run", "coverage"]
