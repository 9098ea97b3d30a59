# data/__init__.py
"""Data loading, validation and summary modules for observation tables."""

from .dataset import Dataset
from .data_loader import DataLoader
from .data_validator import DataValidator
from .abundance import abundance_by_year, add_year, top_sites

__all__ = [
    "Dataset",
    "DataLoader",
    "DataValidator",
    "abundance_by_year",
    "add_year",
    "top_sites",
]
