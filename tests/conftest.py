"""Pytest shared setup."""

from __future__ import annotations

import shutil
import sys
from copy import deepcopy
from pathlib import Path
from uuid import uuid4

import numpy as np
import pandas as pd
import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "slow: full-size leakage scenarios.")


@pytest.fixture
def tmp_path() -> Path:
    """Workspace-local tmp_path to avoid permission issues in this environment."""
    temp_root = REPO_ROOT / ".pytest_tmp" / "cases"
    temp_root.mkdir(parents=True, exist_ok=True)
    created = temp_root / f"case_{uuid4().hex}"
    created.mkdir(parents=True, exist_ok=False)
    try:
        yield created
    finally:
        shutil.rmtree(created, ignore_errors=True)


def _deep_merge(base: dict, overrides: dict) -> dict:
    merged = deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@pytest.fixture
def binary_frame():
    def _build(
        rows: int = 120,
        seed: int = 11,
        coef1: float = 1.8,
        coef2: float = -1.2,
        noise: float = 0.4,
        n_noise: int = 6,
    ) -> pd.DataFrame:
        rng = np.random.default_rng(seed)
        x1 = rng.normal(size=rows)
        x2 = rng.normal(size=rows)
        score = coef1 * x1 + coef2 * x2 + rng.normal(scale=noise, size=rows)
        y = (score > np.median(score)).astype(int)
        frame = pd.DataFrame({"x1": x1, "x2": x2})
        for idx in range(n_noise):
            frame[f"noise{idx}"] = rng.normal(size=rows)
        frame["target"] = y
        return frame

    return _build


@pytest.fixture
def config_payload():
    def _build(**overrides: object) -> dict:
        base: dict = {
            "config_version": 1,
            "synthetic": {"n_records": 40, "n_features": 30, "n_blocks": 4, "seed": 3},
            "split": {"type": "kfold", "n_splits": 4, "seed": 7},
            "screening": {"screen_count": 5},
            "model": {"type": "logistic"},
        }
        if "data" in overrides:
            base.pop("synthetic")
        return _deep_merge(base, overrides)

    return _build


@pytest.fixture
def mean_label_fit_predict():
    """Predicts the training-label mean for every validation row."""

    def _fit_predict(train_x: np.ndarray, train_y: np.ndarray, valid_x: np.ndarray) -> np.ndarray:
        _ = train_x
        return np.full(valid_x.shape[0], float(np.mean(train_y)), dtype=float)

    return _fit_predict
