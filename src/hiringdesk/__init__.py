"""Candidate review engine: validation, scoring, filtering and team selection."""

__version__ = "0.1.0"
