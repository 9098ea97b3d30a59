"""k-fold cross-validation of linear model specifications."""

from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
from joblib import Parallel, delayed

from config.settings import settings
from data.dataset import Dataset
from models.linear import fit_ols
from models.specification import ModelSpecification
from utils.exceptions import EmptyFold, EvaluationError, InvalidPartition
from utils.logger import get_logger
from .folds import FoldAssignment, assign_folds
from .metrics import rmse

logger = get_logger(__name__)


def split_fold(
    dataset: Dataset, assignment: FoldAssignment, fold: int
) -> Tuple[Dataset, Dataset]:
    """
    Split ``dataset`` into (train, test) for ``fold``.

    Raises:
        InvalidPartition: If the assignment does not cover the dataset row for row.
        EmptyFold: If the training or the test subset is empty.
    """
    if len(assignment) != len(dataset):
        raise InvalidPartition(
            f"Fold assignment covers {len(assignment)} row(s), dataset has {len(dataset)}"
        )
    train_rows, test_rows = assignment.split_indices(fold)
    if len(test_rows) == 0:
        raise EmptyFold(f"Fold {fold} has no test rows")
    if len(train_rows) == 0:
        raise EmptyFold(f"Fold {fold} leaves no training rows")
    return dataset.take(train_rows), dataset.take(test_rows)


def evaluate_fold(
    dataset: Dataset,
    assignment: FoldAssignment,
    fold: int,
    specification: ModelSpecification,
) -> float:
    """
    Fit ``specification`` on every fold except ``fold`` and return the RMSE
    of its predictions on ``fold``.

    Raises:
        EmptyFold: If the split leaves either side empty.
        SingularDesign: If the training predictors are rank deficient.
    """
    train, test = split_fold(dataset, assignment, fold)
    model = fit_ols(train, specification)
    return rmse(model.predict(test), test.column(specification.response))


class CrossValidator:
    """
    Compares model specifications by mean k-fold RMSE.

    Folds are assigned once per call to :meth:`evaluate` and shared by
    every specification, so the scores are directly comparable.
    """

    def __init__(
        self,
        n_folds: Optional[int] = None,
        seed: Optional[int] = None,
        n_jobs: Optional[int] = None,
    ):
        """
        Args:
            n_folds: Number of folds k (default from settings).
            seed: Seed of the fold shuffle (default from settings).
            n_jobs: Worker threads for fold evaluation; 1 runs sequentially.
        """
        self.n_folds = settings.n_folds if n_folds is None else n_folds
        self.seed = settings.random_seed if seed is None else seed
        self.n_jobs = settings.n_jobs if n_jobs is None else n_jobs
        self.assignment_: Optional[FoldAssignment] = None

    def _score_fold(
        self,
        dataset: Dataset,
        assignment: FoldAssignment,
        fold: int,
        specification: ModelSpecification,
    ) -> float:
        try:
            return evaluate_fold(dataset, assignment, fold, specification)
        except EvaluationError as e:
            raise e.with_context(specification.name, fold) from e

    def fold_scores(
        self,
        dataset: Dataset,
        assignment: FoldAssignment,
        specification: ModelSpecification,
    ) -> List[float]:
        """RMSE of each fold 1..k, in fold order."""
        dataset.require(specification.fields)
        folds = range(1, assignment.n_folds + 1)
        if self.n_jobs == 1:
            return [self._score_fold(dataset, assignment, f, specification) for f in folds]
        return Parallel(n_jobs=self.n_jobs, prefer="threads")(
            delayed(self._score_fold)(dataset, assignment, f, specification) for f in folds
        )

    def evaluate(
        self, dataset: Dataset, specifications: Iterable[ModelSpecification]
    ) -> Dict[str, float]:
        """
        Mean cross-validated RMSE per specification.

        Returns:
            Mapping of specification name to mean RMSE, in input order.

        Raises:
            ValueError: If two specifications share a name.
            InvalidPartition: If k is invalid for the dataset size.
            EmptyFold, SingularDesign: Tagged with the model name and fold
                that failed; no partial result is returned.
        """
        specifications = list(specifications)
        names = [s.name for s in specifications]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate model name(s): {duplicates}")

        assignment = assign_folds(len(dataset), self.n_folds, self.seed)
        self.assignment_ = assignment
        logger.info(
            f"Cross-validating {len(specifications)} model(s) with {self.n_folds} folds "
            f"on {len(dataset)} rows (seed={self.seed})"
        )

        results = {}
        for spec in specifications:
            scores = self.fold_scores(dataset, assignment, spec)
            results[spec.name] = float(np.mean(scores))
            logger.debug(f"{spec.name}: fold RMSE {np.round(scores, 4).tolist()}")
            logger.info(f"{spec.name} ({spec.formula}): mean RMSE {results[spec.name]:.4f}")
        return results


def cross_validate(
    dataset: Dataset,
    n_folds: int,
    seed: Optional[int],
    specifications: Iterable[ModelSpecification],
    n_jobs: int = 1,
) -> Dict[str, float]:
    """Functional form of :meth:`CrossValidator.evaluate`."""
    return CrossValidator(n_folds=n_folds, seed=seed, n_jobs=n_jobs).evaluate(
        dataset, specifications
    )
