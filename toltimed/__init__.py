"""Toltimed booking wizard core."""

__version__ = "0.1.0"
