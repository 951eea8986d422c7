"""Fold partitions and the splitters that build them."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Literal

import numpy as np
from sklearn.model_selection import KFold, LeaveOneOut, StratifiedKFold, train_test_split

from screencv.api.exceptions import InvalidPartition, ScreenCVValidationError
from screencv.data.dataset import Dataset

PartitionKind = Literal["kfold", "stratified", "loo"]


class FoldPartition:
    """Disjoint cover of ``range(n_records)`` by validation folds ``1..K``.

    Every record belongs to exactly one fold. The training view of fold ``k``
    is the complement of its validation indices.
    """

    __slots__ = ("_folds", "_n_records")

    def __init__(self, folds: Mapping[int, Sequence[int] | np.ndarray], n_records: int) -> None:
        frozen: dict[int, np.ndarray] = {}
        for fold, indices in sorted(folds.items()):
            arr = np.sort(np.asarray(indices, dtype=int).reshape(-1))
            arr.setflags(write=False)
            frozen[int(fold)] = arr
        self._folds = MappingProxyType(frozen)
        self._n_records = int(n_records)
        self.validate()

    def validate(self) -> None:
        """Raise :class:`InvalidPartition` unless folds are a disjoint cover."""
        if self._n_records < 1:
            raise InvalidPartition("Partition must cover at least one record.")
        if len(self._folds) < 2:
            raise InvalidPartition(f"Partition needs at least 2 folds, got {len(self._folds)}.")
        expected = list(range(1, len(self._folds) + 1))
        if list(self._folds.keys()) != expected:
            raise InvalidPartition(
                f"Fold indices must be consecutive from 1, got {list(self._folds.keys())}."
            )

        counts = np.zeros(self._n_records, dtype=int)
        for fold, indices in self._folds.items():
            if indices.size == 0:
                raise InvalidPartition(f"Fold {fold} is empty.")
            if indices.min() < 0 or indices.max() >= self._n_records:
                raise InvalidPartition(
                    f"Fold {fold} references indices outside 0..{self._n_records - 1}."
                )
            np.add.at(counts, indices, 1)

        overlapping = np.flatnonzero(counts > 1)
        if overlapping.size:
            raise InvalidPartition(
                f"Folds overlap on {overlapping.size} record(s), e.g. index {int(overlapping[0])}."
            )
        missing = np.flatnonzero(counts == 0)
        if missing.size:
            raise InvalidPartition(
                f"Folds leave {missing.size} record(s) uncovered, e.g. index {int(missing[0])}."
            )

    def check_dataset(self, dataset: Dataset) -> None:
        if dataset.n_records != self._n_records:
            raise InvalidPartition(
                f"Partition covers {self._n_records} records but dataset has "
                f"{dataset.n_records}."
            )

    @property
    def n_records(self) -> int:
        return self._n_records

    @property
    def n_folds(self) -> int:
        return len(self._folds)

    @property
    def folds(self) -> Mapping[int, np.ndarray]:
        return self._folds

    def validation_indices(self, fold: int) -> np.ndarray:
        try:
            return self._folds[fold]
        except KeyError as exc:
            raise InvalidPartition(f"Unknown fold index {fold}.") from exc

    def train_indices(self, fold: int) -> np.ndarray:
        mask = np.ones(self._n_records, dtype=bool)
        mask[self.validation_indices(fold)] = False
        return np.flatnonzero(mask)

    def iter_splits(self) -> Iterator[tuple[int, np.ndarray, np.ndarray]]:
        for fold in self._folds:
            yield fold, self.train_indices(fold), self.validation_indices(fold)

    def fold_ids(self) -> np.ndarray:
        ids = np.zeros(self._n_records, dtype=int)
        for fold, indices in self._folds.items():
            ids[indices] = fold
        return ids

    @classmethod
    def from_fold_ids(cls, fold_ids: Sequence[int] | np.ndarray) -> "FoldPartition":
        ids = np.asarray(fold_ids, dtype=int)
        folds = {int(fold): np.flatnonzero(ids == fold) for fold in np.unique(ids)}
        return cls(folds, n_records=len(ids))

    @classmethod
    def from_splits(
        cls,
        splits: Iterable[tuple[np.ndarray, np.ndarray]],
        n_records: int,
    ) -> "FoldPartition":
        """Build from scikit-learn style ``(train_idx, valid_idx)`` pairs."""
        folds = {
            fold: np.asarray(valid_idx, dtype=int)
            for fold, (_, valid_idx) in enumerate(splits, start=1)
        }
        return cls(folds, n_records=n_records)

    def __repr__(self) -> str:
        sizes = [int(indices.size) for indices in self._folds.values()]
        return f"FoldPartition(n_records={self._n_records}, fold_sizes={sizes})"


def build_fold_partition(
    dataset: Dataset,
    n_folds: int = 5,
    kind: PartitionKind = "kfold",
    seed: int = 42,
) -> FoldPartition:
    """Build a :class:`FoldPartition` with the scikit-learn splitters."""
    n_records = dataset.n_records
    if kind == "loo":
        splits = LeaveOneOut().split(dataset.features)
        return FoldPartition.from_splits(splits, n_records)

    if n_folds < 2:
        raise ScreenCVValidationError("n_folds must be >= 2.")
    if n_folds > n_records:
        raise ScreenCVValidationError(
            f"n_folds={n_folds} exceeds the number of records ({n_records})."
        )
    if kind == "kfold":
        splitter = KFold(n_splits=n_folds, shuffle=True, random_state=seed)
        return FoldPartition.from_splits(splitter.split(dataset.features), n_records)
    if kind == "stratified":
        minority = int(np.bincount(dataset.labels, minlength=2).min())
        if minority < n_folds:
            raise ScreenCVValidationError(
                f"Stratified split needs at least {n_folds} records per class, "
                f"got {minority}."
            )
        splitter = StratifiedKFold(n_splits=n_folds, shuffle=True, random_state=seed)
        return FoldPartition.from_splits(
            splitter.split(dataset.features, dataset.labels), n_records
        )
    raise ScreenCVValidationError(f"Unsupported split type '{kind}'.")


def holdout_split(
    dataset: Dataset,
    test_size: float = 0.5,
    seed: int = 42,
    stratify: bool = True,
) -> tuple[np.ndarray, np.ndarray]:
    """Split record indices into one training and one validation set."""
    if not (0.0 < test_size < 1.0):
        raise ScreenCVValidationError("test_size must satisfy 0 < value < 1.")
    indices = np.arange(dataset.n_records)
    try:
        train_idx, valid_idx = train_test_split(
            indices,
            test_size=test_size,
            random_state=seed,
            stratify=dataset.labels if stratify else None,
        )
    except ValueError as exc:
        raise ScreenCVValidationError(f"Holdout split failed: {exc}") from exc
    return np.sort(train_idx), np.sort(valid_idx)
