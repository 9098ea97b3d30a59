"""Ordinary least squares fitting and information criteria for linear models."""

import math
from dataclasses import dataclass
from typing import Dict

import numpy as np
from sklearn.linear_model import LinearRegression

from data.dataset import Dataset
from utils.exceptions import SingularDesign
from .specification import ModelSpecification


@dataclass(frozen=True)
class FittedLinearModel:
    """
    Coefficients and fit statistics of one OLS fit.

    Holds no reference to the training data, so it can be created per fold
    and discarded.
    """

    specification: ModelSpecification
    intercept: float
    coefficients: Dict[str, float]
    n_obs: int
    rss: float
    r_squared: float

    @property
    def n_params(self) -> int:
        """Estimated parameters: slopes, intercept and the residual variance."""
        return len(self.coefficients) + 2

    def predict(self, dataset: Dataset) -> np.ndarray:
        """Predict the response for every row of ``dataset``."""
        X = dataset.matrix(self.specification.predictors)
        slopes = np.array([self.coefficients[p] for p in self.specification.predictors])
        return self.intercept + X @ slopes

    def log_likelihood(self) -> float:
        """Gaussian log-likelihood at the maximum likelihood variance RSS/n."""
        n = self.n_obs
        if self.rss <= 0.0:
            return math.inf
        return -0.5 * n * (math.log(2 * math.pi) + math.log(self.rss / n) + 1)

    def aic(self) -> float:
        return -2 * self.log_likelihood() + 2 * self.n_params

    def bic(self) -> float:
        return -2 * self.log_likelihood() + math.log(self.n_obs) * self.n_params


def check_rank(X: np.ndarray, name: str = "model") -> None:
    """
    Raise SingularDesign unless the intercept-augmented design has full column rank.
    """
    n_rows, n_cols = X.shape
    design = np.column_stack([np.ones(n_rows), X])
    if n_rows < design.shape[1]:
        raise SingularDesign(
            f"{name}: {n_rows} training row(s) cannot identify {design.shape[1]} coefficients"
        )
    rank = np.linalg.matrix_rank(design)
    if rank < design.shape[1]:
        raise SingularDesign(
            f"{name}: design matrix has rank {rank} < {design.shape[1]} "
            f"(collinear or constant predictors)"
        )


def fit_ols(dataset: Dataset, specification: ModelSpecification) -> FittedLinearModel:
    """
    Fit ``specification`` to ``dataset`` by ordinary least squares.

    Raises:
        SchemaError: If a field of the specification is not in the dataset.
        SingularDesign: If the predictors are collinear or there are too few rows.
    """
    X = dataset.matrix(specification.predictors)
    y = dataset.column(specification.response)
    check_rank(X, specification.name)

    regression = LinearRegression().fit(X, y)
    residuals = y - regression.predict(X)
    rss = float(residuals @ residuals)
    tss = float(((y - y.mean()) ** 2).sum())
    r_squared = 1.0 - rss / tss if tss > 0 else 1.0

    return FittedLinearModel(
        specification=specification,
        intercept=float(regression.intercept_),
        coefficients={p: float(c) for p, c in zip(specification.predictors, regression.coef_)},
        n_obs=len(y),
        rss=rss,
        r_squared=r_squared,
    )
