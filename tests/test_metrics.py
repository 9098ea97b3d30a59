# tests/test_metrics.py
"""Tests for the RMSE metric."""

import math

import numpy as np
import pytest

from evaluation.metrics import rmse
from utils.exceptions import EmptyInput, LengthMismatch


def test_rmse_identical_is_zero():
    assert rmse([1, 2, 3], [1, 2, 3]) == 0.0


def test_rmse_known_value():
    assert rmse([2, 2, 2], [0, 2, 4]) == pytest.approx(math.sqrt(8 / 3))
    assert rmse([2, 2, 2], [0, 2, 4]) == pytest.approx(1.633, abs=1e-3)


def test_rmse_argument_order_does_not_change_value():
    predicted = np.array([1.5, -2.0, 4.0, 0.0])
    actual = np.array([1.0, 0.0, 3.0, 2.5])
    assert rmse(predicted, actual) == rmse(actual, predicted)
    assert rmse(predicted, actual) > 0


def test_rmse_length_mismatch():
    with pytest.raises(LengthMismatch):
        rmse([1, 2, 3], [1, 2])
    with pytest.raises(LengthMismatch):
        rmse([], [1.0])


def test_rmse_empty_input():
    with pytest.raises(EmptyInput):
        rmse([], [])
