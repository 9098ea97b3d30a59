"""Abundance summaries for survey count tables (e.g. animals counted per site visit)."""

from typing import Dict, Iterable, Optional, Sequence

import pandas as pd

from config.settings import settings
from utils.exceptions import DataValidationError, SchemaError
from utils.logger import get_logger

logger = get_logger(__name__)


def _require(frame: pd.DataFrame, fields: Iterable[str]) -> None:
    missing = [f for f in fields if f not in frame.columns]
    if missing:
        raise SchemaError(f"Missing field(s) {missing}; available: {list(frame.columns)}")


def _matching_values(column: pd.Series, allowed: list) -> list:
    # Values given as text (e.g. from the command line) are parsed for numeric columns
    if not pd.api.types.is_numeric_dtype(column):
        return allowed
    values = []
    for value in allowed:
        if isinstance(value, str):
            value = pd.to_numeric(value, errors="coerce")
            if pd.isna(value):
                continue
        values.append(value)
    return values


def _apply_filters(frame: pd.DataFrame, filters: Optional[Dict[str, Sequence]]) -> pd.DataFrame:
    if not filters:
        return frame
    _require(frame, filters)
    mask = pd.Series(True, index=frame.index)
    for field, allowed in filters.items():
        if isinstance(allowed, (str, bytes)) or not isinstance(allowed, Iterable):
            allowed = [allowed]
        mask &= frame[field].isin(_matching_values(frame[field], list(allowed)))
    return frame.loc[mask]


def _numeric_counts(frame: pd.DataFrame, count_field: str, strict: Optional[bool]) -> pd.DataFrame:
    """
    Return ``frame`` with ``count_field`` parsed as numbers.

    Unparseable counts raise DataValidationError in strict mode; otherwise
    they become missing and are skipped by the summaries.
    """
    strict = settings.strict_validation if strict is None else strict
    counts = pd.to_numeric(frame[count_field], errors="coerce")
    n_bad = int((counts.isna() & frame[count_field].notna()).sum())
    if n_bad:
        message = f"Field '{count_field}' has {n_bad} non-numeric count(s)"
        if strict:
            raise DataValidationError(message)
        logger.warning(f"{message}; skipping them.")
    result = frame.copy()
    result[count_field] = counts
    return result


def add_year(frame: pd.DataFrame, date_field: str, year_field: str = "year") -> pd.DataFrame:
    """
    Return a copy of ``frame`` with a year column parsed from ``date_field``.
    Unparseable dates give a missing year.
    """
    _require(frame, [date_field])
    result = frame.copy()
    result[year_field] = pd.to_datetime(result[date_field], errors="coerce").dt.year.astype("Int64")
    return result


def abundance_by_year(
    frame: pd.DataFrame,
    count_field: str,
    year_field: str = "year",
    group_fields: Sequence[str] = (),
    filters: Optional[Dict[str, Sequence]] = None,
    strict: Optional[bool] = None,
) -> pd.DataFrame:
    """
    Total counts per year, optionally split by group fields.

    Args:
        frame: Survey table with one row per observation record.
        count_field: Column holding the number of individuals.
        year_field: Column holding the survey year.
        group_fields: Extra grouping columns (e.g. life stage).
        filters: Mapping of column -> allowed value(s); other rows are ignored.
        strict: Raise on non-numeric counts instead of skipping them.
                Defaults to settings.strict_validation.

    Returns:
        DataFrame with columns [year_field, *group_fields, count_field],
        sorted by year then groups. Rows with a missing year or count are skipped.
    """
    keys = [year_field, *group_fields]
    _require(frame, [count_field, *keys])
    data = _apply_filters(frame, filters)
    data = _numeric_counts(data, count_field, strict)
    data = data.dropna(subset=[count_field, year_field])

    summary = (
        data.groupby(keys, as_index=False)[count_field]
        .sum()
        .sort_values(keys)
        .reset_index(drop=True)
    )
    return summary


def top_sites(
    frame: pd.DataFrame,
    site_field: str,
    count_field: str,
    n: int = 5,
    filters: Optional[Dict[str, Sequence]] = None,
    strict: Optional[bool] = None,
) -> pd.DataFrame:
    """Return the ``n`` sites with the largest total counts, largest first."""
    if n < 1:
        raise ValueError(f"n must be positive, got {n}")
    _require(frame, [site_field, count_field])
    data = _apply_filters(frame, filters)
    data = _numeric_counts(data, count_field, strict)
    totals = (
        data.groupby(site_field, as_index=False)[count_field]
        .sum()
        .sort_values([count_field, site_field], ascending=[False, True])
        .head(n)
        .reset_index(drop=True)
    )
    return totals
