"""Shared utilities for the foreclosure hydrator."""

from .logging_utils import pipeline_logger, setup_logging

__all__ = ["pipeline_logger", "setup_logging"]
