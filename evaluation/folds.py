"""Balanced random fold assignment for k-fold cross-validation."""

from typing import Dict, Optional, Tuple

import numpy as np

from utils.exceptions import InvalidPartition


class FoldAssignment:
    """
    Immutable mapping from row index to a fold label in ``1..n_folds``.
    """

    def __init__(self, labels: np.ndarray, n_folds: int):
        labels = np.array(labels, dtype=int)
        labels.setflags(write=False)
        self._labels = labels
        self.n_folds = n_folds

    @property
    def labels(self) -> np.ndarray:
        return self._labels

    def __len__(self) -> int:
        return len(self._labels)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FoldAssignment):
            return NotImplemented
        return self.n_folds == other.n_folds and np.array_equal(self._labels, other._labels)

    def __repr__(self) -> str:
        return f"FoldAssignment(n_rows={len(self)}, n_folds={self.n_folds})"

    def counts(self) -> Dict[int, int]:
        """Number of rows carrying each label 1..n_folds."""
        return {fold: int((self._labels == fold).sum()) for fold in range(1, self.n_folds + 1)}

    def test_mask(self, fold: int) -> np.ndarray:
        return self._labels == fold

    def train_mask(self, fold: int) -> np.ndarray:
        return self._labels != fold

    def split_indices(self, fold: int) -> Tuple[np.ndarray, np.ndarray]:
        """Return (train_rows, test_rows); together they cover every row once."""
        mask = self.test_mask(fold)
        return np.flatnonzero(~mask), np.flatnonzero(mask)


def assign_folds(n_rows: int, n_folds: int, seed: Optional[int] = None) -> FoldAssignment:
    """
    Randomly assign ``n_rows`` observations to ``n_folds`` folds.

    The labels 1..k are repeated to length n and shuffled without
    replacement, so fold sizes differ by at most one. The shuffle uses a
    generator seeded with ``seed``; the same (n_rows, n_folds, seed) always
    gives the same assignment.

    Raises:
        InvalidPartition: If n_folds < 2 or n_folds > n_rows.
    """
    if n_folds < 2:
        raise InvalidPartition(f"Need at least 2 folds, got {n_folds}")
    if n_folds > n_rows:
        raise InvalidPartition(f"Cannot split {n_rows} row(s) into {n_folds} folds")

    balanced = np.resize(np.arange(1, n_folds + 1), n_rows)
    rng = np.random.default_rng(seed)
    return FoldAssignment(rng.permutation(balanced), n_folds)
