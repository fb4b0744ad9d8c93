"""jk - a log-first interactive front end for jj."""

from jk.app import App, Mode

__version__ = "0.1.0"

__all__ = ["App", "Mode"]
