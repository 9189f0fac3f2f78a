"""Shortest rail trips between stations, with distance accounting per analytic code."""

__version__ = "0.1.0"
