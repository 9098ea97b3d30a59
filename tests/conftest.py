# tests/conftest.py
"""Shared fixtures for all tests."""

import numpy as np
import pandas as pd
import pytest

from data.dataset import Dataset
from models.specification import ModelSpecification


@pytest.fixture
def seawater_frame() -> pd.DataFrame:
    """Synthetic bottle samples: oxygen saturation driven by temperature, salinity, phosphate."""
    rng = np.random.default_rng(42)
    n = 120
    t_degc = rng.uniform(2, 20, n)
    salnty = rng.uniform(33.0, 34.8, n)
    po4um = rng.uniform(0.3, 3.2, n)
    depthm = rng.uniform(0, 500, n)
    o2sat = 160 + 1.8 * t_degc - 2.0 * salnty - 28 * po4um + rng.normal(0, 2.0, n)
    return pd.DataFrame(
        {"o2sat": o2sat, "t_degc": t_degc, "salnty": salnty, "po4um": po4um, "depthm": depthm}
    )


@pytest.fixture
def seawater_dataset(seawater_frame) -> Dataset:
    return Dataset(seawater_frame)


@pytest.fixture
def seawater_csv(tmp_path, seawater_frame):
    """CSV copy of the bottle samples with a few incomplete rows."""
    frame = seawater_frame.copy()
    frame.loc[[3, 17], "po4um"] = np.nan
    frame.loc[40, "t_degc"] = np.nan
    path = tmp_path / "bottle.csv"
    frame.to_csv(path, index=False)
    return path


@pytest.fixture
def exact_line_dataset() -> Dataset:
    """100 rows where y is an exact linear function of x."""
    x = np.arange(100, dtype=float)
    return Dataset.from_columns({"y": 3.0 * x + 2.0, "x": x})


@pytest.fixture
def nested_specs():
    """Three-predictor model and its four-predictor superset."""
    reduced = ModelSpecification("reduced", "o2sat", ("t_degc", "salnty", "po4um"))
    return [reduced, reduced.extend("full", ["depthm"])]


@pytest.fixture
def frog_frame() -> pd.DataFrame:
    """Small amphibian survey table: one row per lake visit and life stage."""
    return pd.DataFrame(
        {
            "lake_id": [10, 10, 20, 20, 30, 30, 10, 20, 30, 40],
            "survey_date": [
                "1995-07-01", "1995-07-01", "1995-08-12", "1996-07-20", "1996-07-20",
                "1996-08-02", "1997-06-30", "1997-07-15", "1997-07-15", "1997-08-01",
            ],
            "amphibian_species": ["RAMU"] * 9 + ["PSRE"],
            "amphibian_life_stage": [
                "Adult", "Tadpole", "Adult", "Adult", "SubAdult",
                "Tadpole", "Adult", "Adult", "Tadpole", "Adult",
            ],
            "amphibian_number": [4, 50, 2, 7, 3, 120, 5, 1, 80, 9],
        }
    )
