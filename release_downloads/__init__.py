"""Collect GitHub release download counts and turn them into chart data."""

__version__ = "0.1.0"
