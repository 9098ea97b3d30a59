"""
Data loader for observation tables stored as CSV files.
Handles header normalisation, column renaming and field selection.
"""

from pathlib import Path
from typing import Dict, Optional, Sequence, Union

import pandas as pd

from utils.exceptions import DataLoadError, SchemaError
from utils.helpers import normalize_field_name
from utils.logger import get_logger
from .data_validator import DataValidator
from .dataset import Dataset

logger = get_logger(__name__)


class DataLoader:
    """
    Reads CSV tables into pandas and, on request, into validated Datasets.
    """

    def __init__(
        self,
        validator: Optional[DataValidator] = None,
        normalize_headers: bool = False,
        **read_options,
    ):
        """
        Args:
            validator: Cleans tables before they become Datasets.
            normalize_headers: If True, headers are converted to snake_case
                               (e.g. "T_degC" -> "t_degc") before renaming.
            **read_options: Extra keyword arguments for pandas.read_csv.
        """
        self.validator = validator or DataValidator()
        self.normalize_headers = normalize_headers
        self.read_options = read_options

    def load_frame(
        self,
        path: Union[str, Path],
        fields: Optional[Sequence[str]] = None,
        rename: Optional[Dict[str, str]] = None,
    ) -> pd.DataFrame:
        """
        Read a CSV file into a DataFrame.

        Args:
            path: CSV file path.
            fields: Optional columns to keep (after renaming), in this order.
            rename: Optional mapping of source column name to field name.

        Raises:
            DataLoadError: If the file is missing or cannot be parsed.
            SchemaError: If a requested field is not in the file.
        """
        path = Path(path)
        if not path.exists():
            raise DataLoadError(f"Data file not found: {path}")

        try:
            frame = pd.read_csv(path, **self.read_options)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise DataLoadError(f"Could not parse {path}: {e}") from e

        if self.normalize_headers:
            frame.columns = [normalize_field_name(str(c)) for c in frame.columns]
        if rename:
            frame = frame.rename(columns=rename)

        logger.info(f"Loaded {len(frame)} rows x {len(frame.columns)} columns from {path}")

        if fields is not None:
            missing = [f for f in fields if f not in frame.columns]
            if missing:
                raise SchemaError(
                    f"{path.name} has no column(s) {missing}; available: {list(frame.columns)}"
                )
            frame = frame[list(fields)]
        return frame

    def load_dataset(
        self,
        path: Union[str, Path],
        fields: Sequence[str],
        rename: Optional[Dict[str, str]] = None,
    ) -> Dataset:
        """
        Load, validate and freeze a table holding exactly ``fields``.

        Rows with missing values in any of the fields are handled by the
        validator (dropped, or rejected in strict mode).
        """
        frame = self.load_frame(path, fields=fields, rename=rename)
        cleaned = self.validator.validate(frame, fields)
        dataset = Dataset(cleaned, fields)
        logger.info(f"Dataset ready: {dataset.n_rows} complete rows, fields {list(dataset.fields)}")
        return dataset
