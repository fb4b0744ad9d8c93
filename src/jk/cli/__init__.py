"""Command-line and terminal entry points."""

from jk.cli.app import app

__all__ = ["app"]
