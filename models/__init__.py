# models/__init__.py
"""Linear model declarations and least-squares fitting."""

from .specification import ModelSpecification
from .linear import FittedLinearModel, fit_ols

__all__ = ["ModelSpecification", "FittedLinearModel", "fit_ols"]
