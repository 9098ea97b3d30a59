# pipeline/__init__.py
"""Pipeline orchestration: coordinates data flow through all stages."""

from .orchestrator import ComparisonPipeline

__all__ = ["ComparisonPipeline"]
