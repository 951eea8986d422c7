"""Fit/predict capabilities plugged into the resampling harnesses."""

from __future__ import annotations

from typing import Any, Protocol

import lightgbm as lgb
import numpy as np
from sklearn.linear_model import LogisticRegression
from sklearn.neighbors import NearestCentroid

from screencv.api.exceptions import ScreenCVValidationError
from screencv.config.models import ModelConfig


class FitPredict(Protocol):
    """Fit on training rows and score validation rows.

    Returns one value per validation row: a positive-class probability or a
    0/1 label. Both are binarized by the caller.
    """

    def __call__(
        self,
        train_x: np.ndarray,
        train_y: np.ndarray,
        valid_x: np.ndarray,
    ) -> np.ndarray: ...


def logistic_fit_predict(C: float = 1.0, max_iter: int = 1000, seed: int = 42) -> FitPredict:
    def _fit_predict(train_x: np.ndarray, train_y: np.ndarray, valid_x: np.ndarray) -> np.ndarray:
        model = LogisticRegression(
            C=C,
            solver="lbfgs",
            max_iter=max_iter,
            random_state=seed,
        )
        model.fit(train_x, train_y)
        return model.predict_proba(valid_x)[:, 1]

    return _fit_predict


def lightgbm_fit_predict(
    params: dict[str, Any] | None = None,
    num_boost_round: int = 100,
    seed: int = 42,
) -> FitPredict:
    """Gradient-boosted binary classifier.

    Threading defaults to one thread and deterministic histograms so fold
    results do not depend on scheduling.
    """
    resolved = {
        "objective": "binary",
        "metric": "binary_logloss",
        "verbosity": -1,
        "seed": seed,
        "num_threads": 1,
        "deterministic": True,
        "force_col_wise": True,
        **(params or {}),
    }

    def _fit_predict(train_x: np.ndarray, train_y: np.ndarray, valid_x: np.ndarray) -> np.ndarray:
        train_set = lgb.Dataset(train_x, label=train_y, free_raw_data=False)
        booster = lgb.train(
            params=resolved,
            train_set=train_set,
            num_boost_round=num_boost_round,
        )
        return np.asarray(booster.predict(valid_x), dtype=float)

    return _fit_predict


def nearest_centroid_fit_predict() -> FitPredict:
    def _fit_predict(train_x: np.ndarray, train_y: np.ndarray, valid_x: np.ndarray) -> np.ndarray:
        model = NearestCentroid()
        model.fit(train_x, train_y)
        return np.asarray(model.predict(valid_x), dtype=float)

    return _fit_predict


def build_fit_predict(config: ModelConfig) -> FitPredict:
    """Resolve the configured model into a fit/predict capability."""
    if config.type == "logistic":
        return logistic_fit_predict(C=config.C, max_iter=config.max_iter, seed=config.seed)
    if config.type == "lightgbm":
        return lightgbm_fit_predict(
            params=config.lgb_params,
            num_boost_round=config.num_boost_round,
            seed=config.seed,
        )
    if config.type == "nearest_centroid":
        return nearest_centroid_fit_predict()
    raise ScreenCVValidationError(f"Unsupported model type '{config.type}'.")
