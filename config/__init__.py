# config/__init__.py
"""Configuration settings for the model comparison pipeline."""

from .settings import settings, Settings

__all__ = ["settings", "Settings"]
