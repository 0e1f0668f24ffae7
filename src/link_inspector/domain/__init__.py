"""Domain models and parsing helpers."""
