"""Command-line interface for pysampling."""

from .app import app

__all__ = ["app"]
