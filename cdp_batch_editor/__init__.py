"""Batch editing of CDP4 engineering models."""

__version__ = "0.1.0"
