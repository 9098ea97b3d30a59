# utils/exceptions.py
"""Custom exceptions for the model comparison pipeline."""

from typing import Optional


class PipelineError(Exception):
    """Base exception for all pipeline errors."""
    pass


class DataLoadError(PipelineError):
    """Raised when a data file cannot be read."""
    pass


class DataValidationError(PipelineError):
    """Raised when a table fails validation checks (e.g. missing values)."""
    pass


class SchemaError(DataValidationError):
    """Raised when a field is missing, misspelled or not numeric."""
    pass


class SpecificationError(PipelineError):
    """Raised when a model specification or formula is malformed."""
    pass


class EvaluationError(PipelineError):
    """
    Base exception for cross-validation failures.

    Carries the model specification name and fold index when known, so a
    failure can be diagnosed without re-running the evaluation.
    """

    def __init__(self, message: str, model_name: Optional[str] = None, fold: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.model_name = model_name
        self.fold = fold

    def with_context(self, model_name: str, fold: int) -> "EvaluationError":
        """Return a copy of this error (same class) tagged with model name and fold."""
        return type(self)(
            f"model '{model_name}', fold {fold}: {self.message}",
            model_name=model_name,
            fold=fold,
        )


class InvalidPartition(EvaluationError):
    """Raised when the fold count is invalid for the dataset size."""
    pass


class LengthMismatch(EvaluationError):
    """Raised when predicted and actual sequences differ in length."""
    pass


class EmptyInput(EvaluationError):
    """Raised when a metric receives empty sequences."""
    pass


class EmptyFold(EvaluationError):
    """Raised when a fold split leaves the training or test subset empty."""
    pass


class SingularDesign(EvaluationError):
    """Raised when the training design matrix is rank deficient."""
    pass
