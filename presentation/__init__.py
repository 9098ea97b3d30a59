# presentation/__init__.py
"""Output formatting for comparison results and abundance tables."""

from .presenter import Presenter

__all__ = ["Presenter"]
