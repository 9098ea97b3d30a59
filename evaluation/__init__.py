# evaluation/__init__.py
"""Fold assignment, error metrics and cross-validation of model specifications."""

from .folds import FoldAssignment, assign_folds
from .metrics import rmse
from .cross_validation import CrossValidator, cross_validate, evaluate_fold, split_fold

__all__ = [
    "FoldAssignment",
    "assign_folds",
    "rmse",
    "CrossValidator",
    "cross_validate",
    "evaluate_fold",
    "split_fold",
]
