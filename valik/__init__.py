"""Banded extension, X-drop splitting, match ordering, option validation and index preparation helpers for local alignment search between DNA sequences."""

__version__ = "1.0.0"