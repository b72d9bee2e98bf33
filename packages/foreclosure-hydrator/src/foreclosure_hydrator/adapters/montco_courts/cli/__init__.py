"""Command-line interface for the Montgomery County courts adapter."""

from .commands import app

__all__ = ["app"]
