"""
Foreclosure hydrator: intake, enrichment and persistence around the lead-scoring core.

Adapters live under ``foreclosure_hydrator.adapters``; each adapter bundles its
document sources, normalization, use case, writer and CLI.
"""

__version__ = "1.0.0"
