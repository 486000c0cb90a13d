"""Command-line interface for Scale Explorer."""

from .main import cli, main

__all__ = ["cli", "main"]
