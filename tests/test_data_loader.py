# tests/test_data_loader.py
"""Tests for the Dataset type, the data loader and the data validator."""

import numpy as np
import pandas as pd
import pytest

from data.data_loader import DataLoader
from data.data_validator import DataValidator
from data.dataset import Dataset
from utils.exceptions import DataLoadError, DataValidationError, SchemaError


def test_dataset_schema(seawater_frame):
    dataset = Dataset(seawater_frame, fields=["o2sat", "t_degc"])
    assert dataset.fields == ("o2sat", "t_degc")
    assert len(dataset) == len(seawater_frame)
    assert "t_degc" in dataset
    assert "salnty" not in dataset
    np.testing.assert_array_equal(dataset.column("t_degc"), seawater_frame["t_degc"].to_numpy())
    assert dataset.matrix(["t_degc", "o2sat"]).shape == (len(seawater_frame), 2)


def test_dataset_unknown_field(seawater_frame):
    with pytest.raises(SchemaError, match="t_degC"):
        Dataset(seawater_frame, fields=["o2sat", "t_degC"])
    dataset = Dataset(seawater_frame)
    with pytest.raises(SchemaError):
        dataset.column("salinity")


def test_dataset_rejects_missing_and_text():
    with pytest.raises(DataValidationError):
        Dataset(pd.DataFrame({"y": [1.0, np.nan], "x": [1.0, 2.0]}))
    with pytest.raises(SchemaError):
        Dataset(pd.DataFrame({"y": [1.0, 2.0], "site": ["a", "b"]}))


def test_dataset_is_immutable(seawater_frame):
    dataset = Dataset(seawater_frame)
    with pytest.raises(ValueError):
        dataset.column("o2sat")[0] = 0.0
    seawater_frame.loc[0, "o2sat"] = -1.0
    assert dataset.column("o2sat")[0] != -1.0


def test_dataset_take(seawater_dataset):
    subset = seawater_dataset.take([0, 2, 4])
    assert len(subset) == 3
    assert subset.fields == seawater_dataset.fields
    assert subset.column("o2sat")[1] == seawater_dataset.column("o2sat")[2]
    mask = np.zeros(len(seawater_dataset), dtype=bool)
    mask[:10] = True
    assert len(seawater_dataset.take(mask)) == 10


def test_validator_drops_incomplete_rows():
    frame = pd.DataFrame({"y": [1.0, np.nan, 3.0, 4.0], "x": [1.0, 2.0, None, 4.0], "note": list("abcd")})
    cleaned = DataValidator(strict_mode=False).validate(frame, ["y", "x"])
    assert list(cleaned.columns) == ["y", "x"]
    assert cleaned["y"].tolist() == [1.0, 4.0]


def test_validator_strict_mode_raises():
    frame = pd.DataFrame({"y": [1.0, np.nan], "x": [1.0, 2.0]})
    with pytest.raises(DataValidationError):
        DataValidator(strict_mode=True).validate(frame, ["y", "x"])


def test_validator_coerces_numeric_text():
    frame = pd.DataFrame({"y": ["1.5", "2.5", "n/a"], "x": [1, 2, 3]})
    cleaned = DataValidator(strict_mode=False).validate(frame, ["y", "x"])
    assert cleaned["y"].tolist() == [1.5, 2.5]
    with pytest.raises(DataValidationError):
        DataValidator(strict_mode=True).validate(frame, ["y", "x"])


def test_validator_missing_field_and_empty_result():
    frame = pd.DataFrame({"y": [np.nan], "x": [1.0]})
    with pytest.raises(SchemaError):
        DataValidator().validate(frame, ["y", "z"])
    with pytest.raises(DataValidationError):
        DataValidator(strict_mode=False).validate(frame, ["y", "x"])


def test_load_dataset_drops_missing(seawater_csv):
    loader = DataLoader(validator=DataValidator(strict_mode=False))
    dataset = loader.load_dataset(seawater_csv, ["o2sat", "t_degc", "po4um"])
    assert len(dataset) == 117
    assert dataset.fields == ("o2sat", "t_degc", "po4um")


def test_load_frame_rename_and_normalize(tmp_path):
    path = tmp_path / "raw.csv"
    pd.DataFrame({"O2Sat": [90.0], "T_degC": [10.0], "Salnty": [33.5]}).to_csv(path, index=False)

    frame = DataLoader(normalize_headers=True).load_frame(path, rename={"salnty": "salinity"})
    assert list(frame.columns) == ["o2sat", "t_degc", "salinity"]

    frame = DataLoader().load_frame(path, fields=["T_degC"])
    assert list(frame.columns) == ["T_degC"]


def test_load_frame_errors(tmp_path, seawater_csv):
    with pytest.raises(DataLoadError):
        DataLoader().load_frame(tmp_path / "missing.csv")
    empty = tmp_path / "empty.csv"
    empty.write_text("")
    with pytest.raises(DataLoadError):
        DataLoader().load_frame(empty)
    with pytest.raises(SchemaError):
        DataLoader().load_frame(seawater_csv, fields=["oxygen"])
