"""
Immutable numeric observation table with an explicit field schema.

Field names are resolved to column indices once, at construction, so a
misspelled field fails when the data is loaded rather than deep inside a
model fit.
"""

from typing import Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from utils.exceptions import DataValidationError, SchemaError


class Dataset:
    """
    Column-indexed table of numeric observations.

    The values are copied into a read-only float array; subsets returned by
    :meth:`take` are new Dataset objects, so a Dataset is never mutated
    after construction.
    """

    def __init__(self, frame: pd.DataFrame, fields: Optional[Sequence[str]] = None):
        """
        Args:
            frame: Source table. Only ``fields`` are kept.
            fields: Ordered field names; defaults to every column of ``frame``.

        Raises:
            SchemaError: If a field is absent or not numeric.
            DataValidationError: If any kept value is missing.
        """
        fields = list(frame.columns if fields is None else fields)
        if not fields:
            raise SchemaError("Dataset requires at least one field")
        if len(set(fields)) != len(fields):
            raise SchemaError(f"Duplicate field names: {fields}")

        missing = [f for f in fields if f not in frame.columns]
        if missing:
            raise SchemaError(
                f"Unknown field(s) {missing}; available: {list(frame.columns)}"
            )

        non_numeric = [f for f in fields if not pd.api.types.is_numeric_dtype(frame[f])]
        if non_numeric:
            raise SchemaError(f"Field(s) {non_numeric} are not numeric")

        values = frame[fields].to_numpy(dtype=float, copy=True)
        if np.isnan(values).any():
            bad = [f for f, col in zip(fields, values.T) if np.isnan(col).any()]
            raise DataValidationError(
                f"Missing values in field(s) {bad}; drop them before building a Dataset"
            )

        values.setflags(write=False)
        self._values = values
        self._fields = tuple(fields)
        self._index: Dict[str, int] = {name: i for i, name in enumerate(fields)}

    @classmethod
    def from_columns(cls, columns: Dict[str, Sequence[float]]) -> "Dataset":
        """Build a Dataset from a mapping of field name to values."""
        return cls(pd.DataFrame(columns))

    @property
    def fields(self) -> tuple:
        return self._fields

    @property
    def n_rows(self) -> int:
        return self._values.shape[0]

    def __len__(self) -> int:
        return self.n_rows

    def __contains__(self, field: str) -> bool:
        return field in self._index

    def __repr__(self) -> str:
        return f"Dataset(n_rows={self.n_rows}, fields={list(self._fields)})"

    def require(self, fields: Sequence[str]) -> None:
        """Raise SchemaError unless every name in ``fields`` is present."""
        missing = [f for f in fields if f not in self._index]
        if missing:
            raise SchemaError(f"Unknown field(s) {missing}; available: {list(self._fields)}")

    def column(self, field: str) -> np.ndarray:
        """Return a read-only view of one field."""
        self.require([field])
        return self._values[:, self._index[field]]

    def matrix(self, fields: Sequence[str]) -> np.ndarray:
        """Return an (n_rows, len(fields)) array with columns in the given order."""
        self.require(fields)
        return self._values[:, [self._index[f] for f in fields]]

    def take(self, rows: Union[np.ndarray, List[int]]) -> "Dataset":
        """
        Return a new Dataset holding the selected rows.

        Args:
            rows: Integer row indices or a boolean mask of length n_rows.
        """
        rows = np.asarray(rows)
        if rows.dtype != bool:
            rows = rows.astype(int)
        if rows.dtype == bool and rows.shape != (self.n_rows,):
            raise ValueError(f"Boolean mask has shape {rows.shape}, expected ({self.n_rows},)")
        subset = object.__new__(Dataset)
        values = self._values[rows].copy()
        values.setflags(write=False)
        subset._values = values
        subset._fields = self._fields
        subset._index = self._index
        return subset

    def to_frame(self) -> pd.DataFrame:
        """Return a (writable) DataFrame copy of the table."""
        return pd.DataFrame(self._values.copy(), columns=list(self._fields))
