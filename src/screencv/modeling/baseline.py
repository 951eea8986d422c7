"""Screen-then-validate baseline kept for contrast with the isolated harness.

Screening here sees every record, including each fold's validation rows, so
the resulting accuracy is optimistic. Never use it as an estimate.
"""

from __future__ import annotations

from dataclasses import dataclass

from screencv.data.dataset import Dataset
from screencv.modeling.classifiers import FitPredict
from screencv.modeling.harness import (
    HarnessResult,
    aggregate,
    check_inputs,
    evaluate,
    score_fold,
)
from screencv.screening import screen_features
from screencv.split.partition import FoldPartition


@dataclass(frozen=True, slots=True)
class ScreeningComparison:
    isolated: HarnessResult
    leaky: HarnessResult

    @property
    def optimism(self) -> float:
        """How much the leaky estimate overstates the isolated one."""
        return self.leaky.mean_accuracy - self.isolated.mean_accuracy


def screen_then_validate(
    dataset: Dataset,
    partition: FoldPartition,
    screen_count: int,
    fit_predict: FitPredict,
    *,
    threshold: float = 0.5,
) -> HarnessResult:
    check_inputs(dataset, partition, screen_count)
    screening = screen_features(dataset.features, dataset.labels, screen_count)
    folds = [
        score_fold(
            dataset,
            fold,
            train_idx,
            valid_idx,
            screening.selected,
            fit_predict,
            threshold=threshold,
            n_excluded=int(screening.excluded.size),
        )
        for fold, train_idx, valid_idx in partition.iter_splits()
    ]
    return aggregate(folds, screen_count, leaky=True)


def compare_screening(
    dataset: Dataset,
    partition: FoldPartition,
    screen_count: int,
    fit_predict: FitPredict,
    *,
    n_jobs: int = 1,
    threshold: float = 0.5,
    run_id: str = "adhoc",
) -> ScreeningComparison:
    isolated = evaluate(
        dataset,
        partition,
        screen_count,
        fit_predict,
        n_jobs=n_jobs,
        threshold=threshold,
        run_id=run_id,
    )
    leaky = screen_then_validate(
        dataset, partition, screen_count, fit_predict, threshold=threshold
    )
    return ScreeningComparison(isolated=isolated, leaky=leaky)
