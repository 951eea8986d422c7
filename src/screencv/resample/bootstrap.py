"""Nonparametric bootstrap and validation-set estimates."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from screencv.api.exceptions import ScreenCVValidationError
from screencv.data.dataset import Dataset
from screencv.modeling.classifiers import FitPredict
from screencv.modeling.harness import FoldResult, binarize, predict_fold
from screencv.screening import screen_features
from screencv.split.partition import holdout_split

Statistic = Callable[[Any, np.ndarray], float]


@dataclass(frozen=True, slots=True)
class BootstrapResult:
    """Bootstrap distribution of one statistic.

    Attributes
    ----------
    estimate
        Statistic on the original sample.
    std_error
        Standard deviation (``ddof=1``) of the replicates.
    replicates
        Statistic on each resample, in draw order.
    """

    estimate: float
    std_error: float
    replicates: np.ndarray

    @property
    def n_resamples(self) -> int:
        return int(self.replicates.size)

    @property
    def bias(self) -> float:
        return float(self.replicates.mean() - self.estimate)

    def percentile_interval(self, level: float = 0.95) -> tuple[float, float]:
        if not (0.0 < level < 1.0):
            raise ScreenCVValidationError("level must satisfy 0 < value < 1.")
        tail = (1.0 - level) / 2.0 * 100.0
        lower, upper = np.percentile(self.replicates, [tail, 100.0 - tail])
        return float(lower), float(upper)


def _n_rows(data: Any) -> int:
    if isinstance(data, (pd.DataFrame, pd.Series)):
        return len(data.index)
    return int(np.asarray(data).shape[0])


def bootstrap(
    statistic: Statistic,
    data: Any,
    n_resamples: int = 1000,
    seed: int = 42,
) -> BootstrapResult:
    """Resample rows with replacement and recompute ``statistic``.

    ``statistic(data, indices)`` receives the full data and the row indices of
    one sample; the original sample uses ``arange(n)``. This mirrors the
    ``boot(data, statistic, R)`` calling convention.
    """
    if n_resamples < 2:
        raise ScreenCVValidationError("n_resamples must be >= 2.")
    n = _n_rows(data)
    if n < 1:
        raise ScreenCVValidationError("bootstrap requires at least one row.")

    rng = np.random.default_rng(seed)
    estimate = float(statistic(data, np.arange(n)))
    replicates = np.empty(n_resamples, dtype=float)
    for draw in range(n_resamples):
        replicates[draw] = float(statistic(data, rng.integers(0, n, size=n)))
    replicates.setflags(write=False)
    return BootstrapResult(
        estimate=estimate,
        std_error=float(replicates.std(ddof=1)),
        replicates=replicates,
    )


@dataclass(frozen=True, slots=True)
class ValidationSetResult:
    """Single train/validation split estimate."""

    fold: FoldResult
    train_indices: np.ndarray
    valid_indices: np.ndarray
    correct: np.ndarray

    @property
    def accuracy(self) -> float:
        return self.fold.accuracy


def validation_set_accuracy(
    dataset: Dataset,
    screen_count: int,
    fit_predict: FitPredict,
    *,
    test_size: float = 0.5,
    seed: int = 42,
    stratify: bool = True,
    threshold: float = 0.5,
) -> ValidationSetResult:
    """Holdout accuracy with screening computed on the training part only."""
    train_idx, valid_idx = holdout_split(
        dataset, test_size=test_size, seed=seed, stratify=stratify
    )
    train_x, train_y = dataset.take(train_idx)
    valid_x, valid_y = dataset.take(valid_idx)
    screening = screen_features(train_x, train_y, screen_count)
    selected = screening.selected

    pred = predict_fold(fit_predict, train_x[:, selected], train_y, valid_x[:, selected])
    correct = (binarize(pred, threshold) == valid_y).astype(float)
    correct.setflags(write=False)
    fold = FoldResult(
        fold=1,
        n_train=int(train_idx.size),
        n_valid=int(valid_idx.size),
        accuracy=float(correct.mean()),
        selected=tuple(int(col) for col in selected),
        n_excluded=int(screening.excluded.size),
    )
    return ValidationSetResult(
        fold=fold,
        train_indices=train_idx,
        valid_indices=valid_idx,
        correct=correct,
    )


def _mean_statistic(data: np.ndarray, indices: np.ndarray) -> float:
    return float(np.mean(data[indices]))


def bootstrap_accuracy(
    holdout: ValidationSetResult,
    n_resamples: int = 1000,
    seed: int = 42,
) -> BootstrapResult:
    """Bootstrap standard error of holdout accuracy over validation rows."""
    return bootstrap(_mean_statistic, holdout.correct, n_resamples=n_resamples, seed=seed)
