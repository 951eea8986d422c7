"""Synthetic datasets for leakage demonstrations."""

from __future__ import annotations

import numpy as np

from screencv.api.exceptions import ScreenCVValidationError
from screencv.data.dataset import Dataset


def _block_labels(n_records: int, n_blocks: int) -> np.ndarray:
    if n_blocks < 2 or n_blocks % 2 != 0:
        raise ScreenCVValidationError("n_blocks must be an even number >= 2.")
    if n_records % n_blocks != 0:
        raise ScreenCVValidationError("n_records must be divisible by n_blocks.")
    block_size = n_records // n_blocks
    return np.repeat(np.arange(n_blocks) % 2, block_size)


def make_null_dataset(
    n_records: int = 400,
    n_features: int = 5000,
    n_blocks: int = 4,
    seed: int = 0,
) -> Dataset:
    """Features are i.i.d. standard normal noise, labels alternate by block.

    With the defaults this is 400 records in blocks of 100 labelled
    ``0, 1, 0, 1``. No feature carries information about the label, so an
    honest accuracy estimate sits near 0.5.
    """
    if n_features < 1:
        raise ScreenCVValidationError("n_features must be >= 1.")
    labels = _block_labels(n_records, n_blocks)
    rng = np.random.default_rng(seed)
    features = rng.standard_normal(size=(n_records, n_features))
    return Dataset(features, labels)


def make_signal_dataset(
    n_records: int = 200,
    n_features: int = 50,
    n_informative: int = 5,
    effect: float = 1.5,
    seed: int = 0,
) -> Dataset:
    """Balanced labels where the first ``n_informative`` columns shift with the class."""
    if not (0 <= n_informative <= n_features):
        raise ScreenCVValidationError("n_informative must satisfy 0 <= value <= n_features.")
    rng = np.random.default_rng(seed)
    labels = rng.permutation(np.arange(n_records) % 2)
    features = rng.standard_normal(size=(n_records, n_features))
    features[:, :n_informative] += effect * (labels[:, None] - 0.5)
    return Dataset(features, labels)
