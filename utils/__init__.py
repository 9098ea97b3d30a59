# utils/__init__.py
"""Utility functions, custom exceptions, and logging setup."""

from .logger import get_logger
from .exceptions import (
    PipelineError,
    DataLoadError,
    DataValidationError,
    SchemaError,
    SpecificationError,
    EvaluationError,
    InvalidPartition,
    LengthMismatch,
    EmptyInput,
    EmptyFold,
    SingularDesign,
)
from .helpers import parse_assignments

__all__ = [
    "get_logger",
    "parse_assignments",
    "PipelineError",
    "DataLoadError",
    "DataValidationError",
    "SchemaError",
    "SpecificationError",
    "EvaluationError",
    "InvalidPartition",
    "LengthMismatch",
    "EmptyInput",
    "EmptyFold",
    "SingularDesign",
]
