"""Stable runner API entrypoints."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from uuid import uuid4

import optuna

from screencv.api.exceptions import ScreenCVValidationError
from screencv.api.logging import log_event
from screencv.api.types import BootstrapSummary, ComparisonResult, CVResult, TuneResult
from screencv.config.io import parse_run_config
from screencv.config.models import RunConfig
from screencv.data import Dataset, load_tabular_data, make_null_dataset
from screencv.modeling import (
    HarnessResult,
    build_fit_predict,
    build_study_name,
    compare_screening,
    evaluate as evaluate_harness,
    run_tuning,
)
from screencv.resample import bootstrap_accuracy, validation_set_accuracy
from screencv.split import FoldPartition, build_fold_partition

LOGGER = logging.getLogger("screencv")

_LOG_LEVEL_MAP: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}
_OPTUNA_LOG_LEVEL_MAP: dict[str, int] = {
    "DEBUG": optuna.logging.DEBUG,
    "INFO": optuna.logging.INFO,
    "WARNING": optuna.logging.WARNING,
    "ERROR": optuna.logging.ERROR,
}


def load_dataset(config: RunConfig) -> Dataset:
    """Materialize the configured dataset (file-backed or synthetic)."""
    if config.synthetic is not None:
        synthetic = config.synthetic
        return make_null_dataset(
            n_records=synthetic.n_records,
            n_features=synthetic.n_features,
            n_blocks=synthetic.n_blocks,
            seed=synthetic.seed,
        )
    if config.data is None:
        raise ScreenCVValidationError("data or synthetic must be configured.")
    frame = load_tabular_data(config.data.path)
    return Dataset.from_frame(frame, config.data.target, config.data.drop_cols)


def _build_partition(config: RunConfig, dataset: Dataset) -> FoldPartition:
    return build_fold_partition(
        dataset,
        n_folds=config.split.n_splits,
        kind=config.split.type,
        seed=config.split.seed,
    )


def _to_cv_result(run_id: str, result: HarnessResult, config: RunConfig) -> CVResult:
    return CVResult(
        run_id=run_id,
        fold_accuracies=list(result.fold_accuracies),
        mean_accuracy=result.mean_accuracy,
        std_accuracy=result.std_accuracy,
        metadata={
            "n_folds": len(result.folds),
            "split_type": config.split.type,
            "screen_count": result.screen_count,
            "model_type": config.model.type,
            "leaky": result.leaky,
            "fold_records": [fold.to_record() for fold in result.folds],
        },
    )


def evaluate(config: RunConfig | dict[str, Any]) -> CVResult:
    """Cross-validated accuracy with screening recomputed inside every fold."""
    parsed = parse_run_config(config)
    dataset = load_dataset(parsed)
    partition = _build_partition(parsed, dataset)
    run_id = uuid4().hex
    result = evaluate_harness(
        dataset,
        partition,
        parsed.screening.screen_count,
        build_fit_predict(parsed.model),
        n_jobs=parsed.execution.n_jobs,
        threshold=parsed.execution.threshold,
        run_id=run_id,
    )
    log_event(
        LOGGER,
        logging.INFO,
        "evaluate completed",
        run_id=run_id,
        artifact_path=None,
        stage="evaluate",
        n_records=dataset.n_records,
        n_features=dataset.n_features,
        n_folds=partition.n_folds,
        mean_accuracy=result.mean_accuracy,
        fold_accuracies=list(result.fold_accuracies),
    )
    return _to_cv_result(run_id, result, parsed)


def compare(config: RunConfig | dict[str, Any]) -> ComparisonResult:
    """Fold-isolated estimate next to the leaky screen-then-validate one."""
    parsed = parse_run_config(config)
    dataset = load_dataset(parsed)
    partition = _build_partition(parsed, dataset)
    run_id = uuid4().hex
    comparison = compare_screening(
        dataset,
        partition,
        parsed.screening.screen_count,
        build_fit_predict(parsed.model),
        n_jobs=parsed.execution.n_jobs,
        threshold=parsed.execution.threshold,
        run_id=run_id,
    )
    log_event(
        LOGGER,
        logging.INFO,
        "compare completed",
        run_id=run_id,
        artifact_path=None,
        stage="compare",
        isolated_mean_accuracy=comparison.isolated.mean_accuracy,
        leaky_mean_accuracy=comparison.leaky.mean_accuracy,
        optimism=comparison.optimism,
    )
    return ComparisonResult(
        run_id=run_id,
        isolated=_to_cv_result(run_id, comparison.isolated, parsed),
        leaky=_to_cv_result(run_id, comparison.leaky, parsed),
        optimism=comparison.optimism,
        metadata={"n_records": dataset.n_records, "n_features": dataset.n_features},
    )


def bootstrap(config: RunConfig | dict[str, Any]) -> BootstrapSummary:
    """Validation-set accuracy with a bootstrap standard error."""
    parsed = parse_run_config(config)
    dataset = load_dataset(parsed)
    boot_cfg = parsed.bootstrap
    run_id = uuid4().hex
    holdout = validation_set_accuracy(
        dataset,
        parsed.screening.screen_count,
        build_fit_predict(parsed.model),
        test_size=boot_cfg.test_size,
        seed=boot_cfg.seed,
        stratify=boot_cfg.stratify,
        threshold=parsed.execution.threshold,
    )
    boot = bootstrap_accuracy(holdout, n_resamples=boot_cfg.n_resamples, seed=boot_cfg.seed)
    interval = boot.percentile_interval(boot_cfg.confidence_level)
    log_event(
        LOGGER,
        logging.INFO,
        "bootstrap completed",
        run_id=run_id,
        artifact_path=None,
        stage="bootstrap",
        accuracy=holdout.accuracy,
        std_error=boot.std_error,
        n_resamples=boot.n_resamples,
    )
    return BootstrapSummary(
        run_id=run_id,
        accuracy=holdout.accuracy,
        std_error=boot.std_error,
        interval=interval,
        metadata={
            "n_train": holdout.fold.n_train,
            "n_valid": holdout.fold.n_valid,
            "n_resamples": boot.n_resamples,
            "confidence_level": boot_cfg.confidence_level,
            "bias": boot.bias,
            "screen_count": parsed.screening.screen_count,
        },
    )


def tune(config: RunConfig | dict[str, Any]) -> TuneResult:
    parsed = parse_run_config(config)
    if not parsed.tuning.enabled:
        raise ScreenCVValidationError("tuning.enabled must be true to run tune().")

    log_level = _LOG_LEVEL_MAP[parsed.tuning.log_level]
    optuna.logging.set_verbosity(_OPTUNA_LOG_LEVEL_MAP[parsed.tuning.log_level])

    dataset = load_dataset(parsed)
    partition = _build_partition(parsed, dataset)
    run_id = uuid4().hex
    study_name = build_study_name(parsed)
    tuning_path = Path(parsed.export.artifact_dir) / "tuning" / study_name
    tuning_path.mkdir(parents=True, exist_ok=True)
    storage_url = f"sqlite:///{(tuning_path / 'study.db').resolve()}"

    def _trial_progress(payload: dict[str, Any]) -> None:
        log_event(
            LOGGER,
            log_level,
            "tune trial completed",
            run_id=run_id,
            artifact_path=str(tuning_path),
            stage="tune",
            **payload,
        )

    tuning_output = run_tuning(
        parsed,
        dataset,
        partition,
        run_id=run_id,
        study_name=study_name,
        storage_url=storage_url,
        resume=parsed.tuning.resume,
        output_dir=tuning_path,
        on_trial_complete=_trial_progress,
    )
    log_event(
        LOGGER,
        log_level,
        "tune completed",
        run_id=run_id,
        artifact_path=str(tuning_path),
        stage="tune",
        n_trials=tuning_output.n_trials,
        best_score=tuning_output.best_score,
        study_name=study_name,
        resume=parsed.tuning.resume,
    )
    return TuneResult(
        run_id=run_id,
        best_params=tuning_output.best_params,
        best_score=tuning_output.best_score,
        metadata={
            "n_trials": tuning_output.n_trials,
            "metric_name": tuning_output.metric_name,
            "direction": tuning_output.direction,
            "tuning_path": str(tuning_path),
            "summary_path": str(tuning_path / "study_summary.json"),
            "trials_path": str(tuning_path / "trials.parquet"),
            "study_name": study_name,
            "storage_url": storage_url,
            "resume": parsed.tuning.resume,
            "objective_components": tuning_output.best_components,
        },
    )
