"""Earthquake feed dashboard: normalization, projection, and summary statistics."""

__version__ = "0.1.0"
