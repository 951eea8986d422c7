"""Screen-size tuning scored by the fold-isolated harness."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import optuna
import pandas as pd
from optuna.exceptions import DuplicatedStudyError

from screencv.api.exceptions import ScreenCVValidationError
from screencv.config.models import RunConfig
from screencv.data.dataset import Dataset
from screencv.modeling.classifiers import build_fit_predict
from screencv.modeling.harness import evaluate
from screencv.split.partition import FoldPartition

METRIC_NAME = "mean_accuracy"
DIRECTION = "maximize"
_TRIAL_ATTRS = ("number", "value", "state", "params", "user_attrs")


@dataclass(slots=True)
class TuningOutput:
    best_params: dict[str, Any]
    best_score: float
    metric_name: str
    direction: str
    n_trials: int
    trials: pd.DataFrame
    study_name: str
    storage_url: str
    best_components: dict[str, Any]


def build_study_name(config: RunConfig) -> str:
    if config.tuning.study_name:
        return config.tuning.study_name
    payload = config.model_dump(mode="json", exclude_none=True)
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    suffix = hashlib.sha256(encoded.encode("utf-8")).hexdigest()[:12]
    return f"screen_tune_{suffix}"


def _search_bounds(config: RunConfig, n_features: int) -> tuple[int, int]:
    low = config.tuning.screen_count_low
    high = config.tuning.screen_count_high or n_features
    if high > n_features:
        raise ScreenCVValidationError(
            f"tuning.screen_count_high={high} exceeds the number of features ({n_features})."
        )
    if low > high:
        raise ScreenCVValidationError(
            f"tuning.screen_count_low={low} exceeds the resolved upper bound {high}."
        )
    return low, high


def _build_trial_config(config: RunConfig, trial_params: dict[str, Any]) -> RunConfig:
    trial_cfg = config.model_copy(deep=True)
    trial_cfg.screening.screen_count = int(trial_params["screen_count"])
    if "C" in trial_params:
        trial_cfg.model.C = float(trial_params["C"])
    return trial_cfg


def _study_summary(
    study: optuna.Study,
    *,
    run_id: str,
    study_name: str,
    storage_url: str,
    seed: int,
) -> dict[str, Any]:
    """Best-so-far snapshot of ``study``; best fields are empty until a trial completes."""
    completed = study.get_trials(deepcopy=False, states=(optuna.trial.TrialState.COMPLETE,))
    best = max(completed, key=lambda trial: trial.value, default=None)
    return {
        "run_id": run_id,
        "study_name": study_name,
        "storage_url": storage_url,
        "metric_name": METRIC_NAME,
        "direction": DIRECTION,
        "best_score": None if best is None else float(best.value),
        "best_params": {} if best is None else dict(best.params),
        "objective_components": {} if best is None else dict(best.user_attrs),
        "n_trials": len(study.trials),
        "seed": seed,
    }


def _persist_study(output_dir: Path, study: optuna.Study, summary: dict[str, Any]) -> pd.DataFrame:
    """Write ``study_summary.json`` and ``trials.parquet`` and return the trials frame."""
    output_dir.mkdir(parents=True, exist_ok=True)
    trials = study.trials_dataframe(attrs=_TRIAL_ATTRS)
    (output_dir / "study_summary.json").write_text(
        json.dumps(summary, indent=2, sort_keys=True), encoding="utf-8"
    )
    trials.to_parquet(output_dir / "trials.parquet", index=False)
    return trials


def run_tuning(
    config: RunConfig,
    dataset: Dataset,
    partition: FoldPartition,
    *,
    run_id: str,
    study_name: str,
    storage_url: str,
    resume: bool,
    output_dir: Path,
    on_trial_complete: Callable[[dict[str, Any]], None] | None = None,
) -> TuningOutput:
    """Search ``screen_count`` (and ``C`` for logistic models) with Optuna.

    Every trial is scored by :func:`screencv.modeling.harness.evaluate` on the
    same fixed partition, so screening stays inside each training fold.
    """
    low, high = _search_bounds(config, dataset.n_features)
    tune_c = config.model.type == "logistic"
    sampler = optuna.samplers.TPESampler(seed=config.model.seed)

    try:
        study = optuna.create_study(
            study_name=study_name,
            direction=DIRECTION,
            sampler=sampler,
            storage=storage_url,
            load_if_exists=resume,
        )
    except DuplicatedStudyError as exc:
        raise ScreenCVValidationError(
            f"Study '{study_name}' already exists. Set tuning.resume=true to continue or use "
            "a different tuning.study_name."
        ) from exc

    def _summary(study_obj: optuna.Study) -> dict[str, Any]:
        return _study_summary(
            study_obj,
            run_id=run_id,
            study_name=study_name,
            storage_url=storage_url,
            seed=config.model.seed,
        )

    def callback(study_obj: optuna.Study, trial: optuna.trial.FrozenTrial) -> None:
        summary = _summary(study_obj)
        _persist_study(output_dir, study_obj, summary)
        if on_trial_complete is not None:
            payload = {
                "trial_number": int(trial.number),
                "trial_value": None if trial.value is None else float(trial.value),
                "best_value": summary["best_score"],
                "n_trials_done": summary["n_trials"],
            }
            payload.update({f"param_{key}": value for key, value in trial.params.items()})
            on_trial_complete(payload)

    def objective(trial: optuna.Trial) -> float:
        params: dict[str, Any] = {"screen_count": trial.suggest_int("screen_count", low, high)}
        if tune_c:
            params["C"] = trial.suggest_float(
                "C", config.tuning.C_low, config.tuning.C_high, log=True
            )
        trial_cfg = _build_trial_config(config, params)
        result = evaluate(
            dataset,
            partition,
            trial_cfg.screening.screen_count,
            build_fit_predict(trial_cfg.model),
            n_jobs=trial_cfg.execution.n_jobs,
            threshold=trial_cfg.execution.threshold,
            run_id=run_id,
        )
        trial.set_user_attr("std_accuracy", result.std_accuracy)
        trial.set_user_attr("n_folds", len(result.folds))
        return result.mean_accuracy

    study.optimize(objective, n_trials=config.tuning.n_trials, callbacks=[callback])

    summary = _summary(study)
    if summary["best_score"] is None:
        raise ScreenCVValidationError("Tuning finished without a completed trial.")

    trials = _persist_study(output_dir, study, summary)
    return TuningOutput(
        best_params=summary["best_params"],
        best_score=summary["best_score"],
        metric_name=METRIC_NAME,
        direction=DIRECTION,
        n_trials=summary["n_trials"],
        trials=trials,
        study_name=study_name,
        storage_url=storage_url,
        best_components=summary["objective_components"],
    )
