"""Declarations of linear model candidates (response + ordered predictors)."""

import re
from dataclasses import dataclass
from typing import Iterable, Tuple

from utils.exceptions import SpecificationError

_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.]*$")


@dataclass(frozen=True)
class ModelSpecification:
    """
    Immutable linear model declaration.

    Attributes:
        name: Label used to report the model.
        response: Field predicted by the model.
        predictors: Ordered predictor fields. An intercept is always fitted.
    """

    name: str
    response: str
    predictors: Tuple[str, ...]

    def __post_init__(self):
        # Accept any iterable of predictors but store a tuple
        object.__setattr__(self, "predictors", tuple(self.predictors))
        if not self.name:
            raise SpecificationError("Model specification needs a name")
        if not self.response:
            raise SpecificationError(f"Model '{self.name}' has no response field")
        if not self.predictors:
            raise SpecificationError(f"Model '{self.name}' has no predictors")
        if len(set(self.predictors)) != len(self.predictors):
            raise SpecificationError(f"Model '{self.name}' repeats a predictor: {self.predictors}")
        if self.response in self.predictors:
            raise SpecificationError(
                f"Model '{self.name}' uses its response '{self.response}' as a predictor"
            )

    @classmethod
    def from_formula(cls, name: str, formula: str) -> "ModelSpecification":
        """
        Parse an R-style formula such as ``"o2sat ~ t_degc + salinity + po4"``.

        Only additive main effects are supported.
        """
        lhs, sep, rhs = formula.partition("~")
        if not sep or "~" in rhs:
            raise SpecificationError(f"Formula must contain exactly one '~': '{formula}'")
        response = lhs.strip()
        predictors = [term.strip() for term in rhs.split("+")]
        for term in [response, *predictors]:
            if not _FIELD_RE.match(term):
                raise SpecificationError(f"Unsupported term '{term}' in formula '{formula}'")
        return cls(name=name, response=response, predictors=tuple(predictors))

    @property
    def formula(self) -> str:
        return f"{self.response} ~ {' + '.join(self.predictors)}"

    @property
    def fields(self) -> Tuple[str, ...]:
        """Response followed by predictors."""
        return (self.response, *self.predictors)

    def extend(self, name: str, predictors: Iterable[str]) -> "ModelSpecification":
        """Return a nested superset model with extra predictors appended."""
        return ModelSpecification(name, self.response, (*self.predictors, *predictors))
