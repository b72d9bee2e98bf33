"""Data contracts for the foreclosure lead pipeline."""

__version__ = "1.0.0"
