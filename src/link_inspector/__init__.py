"""Deterministic risk heuristics for URLs observed on a page."""

__version__ = "0.3.0"
