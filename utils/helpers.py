# utils/helpers.py
"""Miscellaneous helper functions used across the pipeline."""

import re
from typing import Dict, Iterable, List


def normalize_field_name(name: str) -> str:
    """
    Convert a raw column header to a snake_case field name.
    Example: "T_degC" -> "t_degc", "Salinity (PSU)" -> "salinity_psu"
    """
    name = name.lower().strip()
    name = re.sub(r"[^\w\s]", " ", name)  # Punctuation becomes a separator
    name = re.sub(r"\s+", "_", name.strip())
    return name


def parse_assignments(pairs: Iterable[str], option: str = "value") -> Dict[str, str]:
    """
    Parse "KEY=VALUE" strings (as given on the command line) into a dict.

    Raises:
        ValueError: If a pair has no '=' or an empty key.
    """
    result = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Expected {option} in KEY=VALUE form, got '{pair}'")
        result[key] = value.strip()
    return result


def unique_in_order(items: Iterable[str]) -> List[str]:
    """Drop duplicates while keeping first-seen order."""
    seen = set()
    ordered = []
    for item in items:
        if item not in seen:
            seen.add(item)
            ordered.append(item)
    return ordered
