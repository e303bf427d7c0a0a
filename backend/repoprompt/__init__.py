"""Flatten a GitHub repository into a single readable text prompt."""

__version__ = "1.0.0"
