"""Dishwasher control system."""

__version__ = "1.0.0"
