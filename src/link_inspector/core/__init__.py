"""Shared core helpers."""
