"""Prediction error metrics."""

from typing import Sequence, Union

import numpy as np

from utils.exceptions import EmptyInput, LengthMismatch

ArrayLike = Union[Sequence[float], np.ndarray]


def rmse(predicted: ArrayLike, actual: ArrayLike) -> float:
    """
    Root-mean-square error between predictions and observed values.

    Raises:
        LengthMismatch: If the two sequences differ in length.
        EmptyInput: If both sequences are empty.
    """
    predicted = np.asarray(predicted, dtype=float).ravel()
    actual = np.asarray(actual, dtype=float).ravel()
    if predicted.shape != actual.shape:
        raise LengthMismatch(
            f"{len(predicted)} prediction(s) vs {len(actual)} observed value(s)"
        )
    if predicted.size == 0:
        raise EmptyInput("RMSE of empty sequences is undefined")
    errors = predicted - actual
    return float(np.sqrt(np.mean(errors * errors)))
