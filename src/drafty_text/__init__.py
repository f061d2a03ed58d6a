"""Drafty - inline markup to formatted document conversion."""

__version__ = "0.1.0"
