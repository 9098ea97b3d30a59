# tests/test_model.py
"""Tests for model specifications and OLS fitting."""

import math

import numpy as np
import pytest

from data.dataset import Dataset
from models.linear import fit_ols
from models.specification import ModelSpecification
from utils.exceptions import SchemaError, SingularDesign, SpecificationError


def test_specification_from_formula():
    spec = ModelSpecification.from_formula("m1", "o2sat ~ t_degc + salnty +po4um")
    assert spec.response == "o2sat"
    assert spec.predictors == ("t_degc", "salnty", "po4um")
    assert spec.formula == "o2sat ~ t_degc + salnty + po4um"
    assert spec.fields == ("o2sat", "t_degc", "salnty", "po4um")


@pytest.mark.parametrize(
    "formula",
    ["o2sat", "o2sat ~ ", "~ t_degc", "o2sat ~ t_degc * salnty", "a ~ b ~ c", "y ~ log(x)"],
)
def test_specification_bad_formula(formula):
    with pytest.raises(SpecificationError):
        ModelSpecification.from_formula("bad", formula)


def test_specification_invariants():
    with pytest.raises(SpecificationError):
        ModelSpecification("m", "y", ())
    with pytest.raises(SpecificationError):
        ModelSpecification("m", "y", ("x", "x"))
    with pytest.raises(SpecificationError):
        ModelSpecification("m", "y", ("y", "x"))
    spec = ModelSpecification("m", "y", ["x"])
    assert spec.predictors == ("x",)
    with pytest.raises(AttributeError):
        spec.response = "z"


def test_specification_extend():
    spec = ModelSpecification("small", "y", ("a", "b"))
    bigger = spec.extend("big", ["c"])
    assert bigger.predictors == ("a", "b", "c")
    assert bigger.response == "y"
    assert spec.predictors == ("a", "b")


def test_fit_recovers_coefficients(seawater_dataset):
    spec = ModelSpecification("m", "o2sat", ("t_degc", "salnty", "po4um"))
    fit = fit_ols(seawater_dataset, spec)

    assert list(fit.coefficients) == ["t_degc", "salnty", "po4um"]
    assert fit.coefficients["t_degc"] == pytest.approx(1.8, abs=0.1)
    assert fit.coefficients["po4um"] == pytest.approx(-28, abs=1.0)
    assert fit.n_obs == len(seawater_dataset)
    assert 0.9 < fit.r_squared <= 1.0

    predictions = fit.predict(seawater_dataset)
    residuals = seawater_dataset.column("o2sat") - predictions
    assert fit.rss == pytest.approx(float(residuals @ residuals))


def test_information_criteria(seawater_dataset):
    spec = ModelSpecification("m", "o2sat", ("t_degc", "po4um"))
    fit = fit_ols(seawater_dataset, spec)
    n = fit.n_obs
    log_lik = -n / 2 * (math.log(2 * math.pi) + math.log(fit.rss / n) + 1)

    assert fit.n_params == 4
    assert fit.log_likelihood() == pytest.approx(log_lik)
    assert fit.aic() == pytest.approx(-2 * log_lik + 2 * 4)
    assert fit.bic() == pytest.approx(-2 * log_lik + math.log(n) * 4)


def test_informative_predictor_lowers_aic(seawater_dataset):
    without = fit_ols(seawater_dataset, ModelSpecification("a", "o2sat", ("t_degc", "salnty")))
    with_po4 = fit_ols(seawater_dataset, ModelSpecification("b", "o2sat", ("t_degc", "salnty", "po4um")))
    assert with_po4.aic() < without.aic()
    assert with_po4.bic() < without.bic()


def test_fit_singular_design():
    x = np.linspace(0, 1, 10)
    dataset = Dataset.from_columns({"y": x, "a": x, "b": 3 * x, "c": np.full(10, 5.0)})
    with pytest.raises(SingularDesign):
        fit_ols(dataset, ModelSpecification("m", "y", ("a", "b")))
    with pytest.raises(SingularDesign):
        fit_ols(dataset, ModelSpecification("m", "y", ("c",)))
    with pytest.raises(SingularDesign):
        fit_ols(dataset.take([0, 1]), ModelSpecification("m", "y", ("a", "c")))


def test_fit_unknown_field(seawater_dataset):
    with pytest.raises(SchemaError):
        fit_ols(seawater_dataset, ModelSpecification("m", "o2sat", ("temperature",)))
