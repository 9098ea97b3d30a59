"""
Data validation module for raw observation tables.
Coerces model fields to numbers and removes incomplete rows before
the table is frozen into a Dataset.
"""

from typing import Optional, Sequence

import pandas as pd

from config.settings import settings
from utils.exceptions import DataValidationError, SchemaError
from utils.logger import get_logger

logger = get_logger(__name__)


class DataValidator:
    """
    Validates and cleans a raw DataFrame for model fitting.
    Only the requested fields are checked; other columns are ignored.
    """

    def __init__(self, strict_mode: Optional[bool] = None):
        """
        Args:
            strict_mode: If True, raise on any missing or unparseable value.
                         If False, drop incomplete rows and log a warning.
                         Defaults to settings.strict_validation.
        """
        self.strict_mode = settings.strict_validation if strict_mode is None else strict_mode

    def validate(self, frame: pd.DataFrame, fields: Sequence[str]) -> pd.DataFrame:
        """
        Main entry point: returns a cleaned copy holding only ``fields``.

        Raises:
            SchemaError: If a field is not a column of ``frame``.
            DataValidationError: If no complete rows remain, or in strict mode
                                 if any value is missing.
        """
        fields = list(fields)
        self._validate_fields(frame, fields)

        data = frame[fields].copy()
        data = self._coerce_numeric(data)
        data = self._drop_missing(data)

        if data.empty:
            raise DataValidationError(f"No complete rows remain for fields {fields}")
        return data.reset_index(drop=True)

    def _validate_fields(self, frame: pd.DataFrame, fields: Sequence[str]) -> None:
        """Ensure every field exists."""
        if not fields:
            raise SchemaError("At least one field is required")
        missing = [f for f in fields if f not in frame.columns]
        if missing:
            raise SchemaError(f"Missing field(s) {missing}; available: {list(frame.columns)}")

    def _coerce_numeric(self, data: pd.DataFrame) -> pd.DataFrame:
        """Convert each field to a number; unparseable cells become NaN."""
        for field in data.columns:
            if pd.api.types.is_numeric_dtype(data[field]):
                continue
            coerced = pd.to_numeric(data[field], errors="coerce")
            n_bad = int(coerced.isna().sum() - data[field].isna().sum())
            if n_bad:
                message = f"Field '{field}' has {n_bad} non-numeric value(s)"
                if self.strict_mode:
                    raise DataValidationError(message)
                logger.warning(f"{message}; treating them as missing.")
            data[field] = coerced
        return data

    def _drop_missing(self, data: pd.DataFrame) -> pd.DataFrame:
        """Remove rows with a missing value in any field."""
        incomplete = data.isna().any(axis=1)
        n_dropped = int(incomplete.sum())
        if n_dropped:
            per_field = data.isna().sum()
            detail = ", ".join(f"{f}={int(c)}" for f, c in per_field.items() if c)
            if self.strict_mode:
                raise DataValidationError(f"{n_dropped} row(s) with missing values ({detail})")
            logger.info(f"Dropping {n_dropped} of {len(data)} row(s) with missing values ({detail})")
        return data.loc[~incomplete]
