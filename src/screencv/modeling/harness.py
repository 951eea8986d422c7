"""Fold-isolated cross-validation with per-fold feature screening."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd
from joblib import Parallel, delayed

from screencv.api.exceptions import DegenerateScreen, DimensionMismatch
from screencv.api.logging import log_event
from screencv.data.dataset import Dataset
from screencv.modeling.classifiers import FitPredict
from screencv.screening import ScreeningResult, screen_features
from screencv.split.partition import FoldPartition

LOGGER = logging.getLogger("screencv.modeling.harness")


@dataclass(frozen=True, slots=True)
class FoldResult:
    fold: int
    n_train: int
    n_valid: int
    accuracy: float
    selected: tuple[int, ...]
    n_excluded: int

    def to_record(self) -> dict[str, Any]:
        return {
            "fold": self.fold,
            "accuracy": self.accuracy,
            "n_train": self.n_train,
            "n_valid": self.n_valid,
            "n_selected": len(self.selected),
            "n_excluded": self.n_excluded,
        }


@dataclass(frozen=True, slots=True)
class HarnessResult:
    """Per-fold accuracies together with their mean.

    ``leaky`` is true only for the screen-then-validate baseline.
    """

    folds: tuple[FoldResult, ...]
    mean_accuracy: float
    std_accuracy: float
    screen_count: int
    leaky: bool = False

    @property
    def fold_accuracies(self) -> tuple[float, ...]:
        return tuple(fold.accuracy for fold in self.folds)

    @property
    def cv_results(self) -> pd.DataFrame:
        return pd.DataFrame.from_records([fold.to_record() for fold in self.folds])


def binarize(predictions: np.ndarray, threshold: float = 0.5) -> np.ndarray:
    return (np.asarray(predictions, dtype=float) >= threshold).astype(int)


def predict_fold(
    fit_predict: FitPredict,
    train_x: np.ndarray,
    train_y: np.ndarray,
    valid_x: np.ndarray,
) -> np.ndarray:
    if train_x.shape[1] != valid_x.shape[1]:
        raise DimensionMismatch(
            f"Training view has {train_x.shape[1]} features but validation view has "
            f"{valid_x.shape[1]}."
        )
    pred = np.asarray(fit_predict(train_x, train_y, valid_x))
    if pred.ndim != 1 or pred.shape[0] != valid_x.shape[0]:
        raise DimensionMismatch(
            f"fit_predict returned shape {pred.shape}, expected ({valid_x.shape[0]},)."
        )
    if np.isnan(pred.astype(float)).any():
        raise DimensionMismatch("fit_predict returned NaN predictions.")
    return pred


def score_fold(
    dataset: Dataset,
    fold: int,
    train_idx: np.ndarray,
    valid_idx: np.ndarray,
    selected: np.ndarray,
    fit_predict: FitPredict,
    threshold: float = 0.5,
    n_excluded: int = 0,
) -> FoldResult:
    """Fit on ``train_idx`` and score ``valid_idx`` over ``selected`` columns."""
    train_x, train_y = dataset.take(train_idx)
    valid_x, valid_y = dataset.take(valid_idx)
    pred = predict_fold(fit_predict, train_x[:, selected], train_y, valid_x[:, selected])
    accuracy = float(np.mean(binarize(pred, threshold) == valid_y))
    return FoldResult(
        fold=fold,
        n_train=int(train_idx.size),
        n_valid=int(valid_idx.size),
        accuracy=accuracy,
        selected=tuple(int(col) for col in selected),
        n_excluded=n_excluded,
    )


def fold_accuracy(
    dataset: Dataset,
    partition: FoldPartition,
    fold: int,
    screen_count: int,
    fit_predict: FitPredict,
    threshold: float = 0.5,
) -> tuple[FoldResult, ScreeningResult]:
    """Screen, fit and score one fold using only its training rows for screening."""
    train_idx = partition.train_indices(fold)
    valid_idx = partition.validation_indices(fold)
    train_x, train_y = dataset.take(train_idx)
    try:
        screening = screen_features(train_x, train_y, screen_count)
    except DegenerateScreen as exc:
        raise DegenerateScreen(f"Fold {fold}: {exc}") from exc
    result = score_fold(
        dataset,
        fold,
        train_idx,
        valid_idx,
        screening.selected,
        fit_predict,
        threshold=threshold,
        n_excluded=int(screening.excluded.size),
    )
    return result, screening


def check_inputs(dataset: Dataset, partition: FoldPartition, screen_count: int) -> None:
    partition.check_dataset(dataset)
    if screen_count < 1 or screen_count > dataset.n_features:
        raise DegenerateScreen(
            f"screen_count={screen_count} must be between 1 and the number of features "
            f"({dataset.n_features})."
        )


def aggregate(
    folds: list[FoldResult],
    screen_count: int,
    *,
    leaky: bool = False,
) -> HarnessResult:
    ordered = tuple(sorted(folds, key=lambda item: item.fold))
    accuracies = np.asarray([fold.accuracy for fold in ordered], dtype=float)
    return HarnessResult(
        folds=ordered,
        mean_accuracy=float(accuracies.mean()),
        std_accuracy=float(accuracies.std(ddof=1)) if accuracies.size > 1 else 0.0,
        screen_count=int(screen_count),
        leaky=leaky,
    )


def evaluate(
    dataset: Dataset,
    partition: FoldPartition,
    screen_count: int,
    fit_predict: FitPredict,
    *,
    n_jobs: int = 1,
    threshold: float = 0.5,
    run_id: str = "adhoc",
) -> HarnessResult:
    """Cross-validated accuracy with screening recomputed inside every fold.

    Parameters
    ----------
    dataset
        Labeled records.
    partition
        Disjoint cover of the dataset's indices.
    screen_count
        Number of columns kept per fold, ranked on the fold's training rows.
    fit_predict
        Classifier capability called once per fold.
    n_jobs
        Folds evaluated concurrently through joblib threads. Results do not
        depend on this value.
    threshold
        Cutoff applied to ``fit_predict`` output (``>=`` is positive).
    run_id
        Identifier attached to log events.

    Returns
    -------
    HarnessResult
        Per-fold accuracies in fold order and their mean. Any fold failure
        aborts the whole call.
    """
    check_inputs(dataset, partition, screen_count)

    def _run(fold: int) -> FoldResult:
        result, screening = fold_accuracy(
            dataset, partition, fold, screen_count, fit_predict, threshold
        )
        level = logging.WARNING if screening.is_short else logging.DEBUG
        log_event(
            LOGGER,
            level,
            "fold evaluated",
            run_id=run_id,
            artifact_path=None,
            stage="evaluate",
            fold=fold,
            accuracy=result.accuracy,
            n_selected=len(result.selected),
            n_requested=screen_count,
            n_excluded=result.n_excluded,
        )
        return result

    if n_jobs == 1:
        folds = [_run(fold) for fold in partition.folds]
    else:
        folds = Parallel(n_jobs=n_jobs, prefer="threads")(
            delayed(_run)(fold) for fold in partition.folds
        )
    return aggregate(list(folds), screen_count)
