"""Univariate correlation screening."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from screencv.api.exceptions import DegenerateScreen, DimensionMismatch, ScreenCVValidationError


@dataclass(frozen=True, slots=True)
class ScreeningResult:
    """Columns kept by one screening pass.

    Attributes
    ----------
    selected
        Column indices ordered by absolute correlation, strongest first.
    correlations
        Pearson correlation of every column with the label. ``NaN`` marks
        zero-variance columns.
    excluded
        Zero-variance column indices left out of the ranking.
    requested
        The screen count asked for. ``len(selected)`` is smaller only when
        fewer usable columns exist.
    """

    selected: np.ndarray
    correlations: np.ndarray
    excluded: np.ndarray
    requested: int

    @property
    def is_short(self) -> bool:
        return int(self.selected.size) < self.requested


def feature_correlations(features: np.ndarray, labels: np.ndarray) -> np.ndarray:
    """Pearson correlation of each column of ``features`` with ``labels``.

    Constant columns return ``NaN``. A constant label makes every correlation
    undefined and raises :class:`DegenerateScreen`.
    """
    x = np.asarray(features, dtype=float)
    y = np.asarray(labels, dtype=float)
    if x.ndim != 2:
        raise DimensionMismatch("features must be a 2-D matrix.")
    if y.ndim != 1 or y.shape[0] != x.shape[0]:
        raise DimensionMismatch(
            f"labels must be a vector of length {x.shape[0]}, got shape {y.shape}."
        )
    if not (np.isfinite(x).all() and np.isfinite(y).all()):
        raise ScreenCVValidationError("Screening inputs contain non-finite values.")
    if x.shape[0] < 2:
        raise DegenerateScreen("Correlation screening needs at least 2 training records.")
    if np.ptp(y) == 0:
        raise DegenerateScreen("Label is constant within the training rows.")

    constant = np.ptp(x, axis=0) == 0
    x_centered = x - x.mean(axis=0)
    y_centered = y - y.mean()
    sxx = np.einsum("ij,ij->j", x_centered, x_centered)
    syy = float(y_centered @ y_centered)
    sxy = y_centered @ x_centered

    correlations = np.full(x.shape[1], np.nan, dtype=float)
    usable = ~constant
    correlations[usable] = sxy[usable] / np.sqrt(sxx[usable] * syy)
    return np.clip(correlations, -1.0, 1.0)


def rank_features(correlations: np.ndarray) -> np.ndarray:
    """Order usable columns by ``|r|`` descending, ties by column index."""
    corr = np.asarray(correlations, dtype=float)
    usable = np.flatnonzero(~np.isnan(corr))
    # lexsort sorts by the last key first.
    order = np.lexsort((usable, -np.abs(corr[usable])))
    return usable[order]


def screen_features(
    features: np.ndarray,
    labels: np.ndarray,
    screen_count: int,
) -> ScreeningResult:
    """Select the ``screen_count`` columns most correlated with the label."""
    x = np.asarray(features, dtype=float)
    n_features = x.shape[1] if x.ndim == 2 else 0
    if screen_count < 1:
        raise DegenerateScreen(f"screen_count must be >= 1, got {screen_count}.")
    if screen_count > n_features:
        raise DegenerateScreen(
            f"screen_count={screen_count} exceeds the number of features ({n_features})."
        )

    correlations = feature_correlations(x, labels)
    ranked = rank_features(correlations)
    if ranked.size == 0:
        raise DegenerateScreen("Every feature column is constant within the training rows.")

    selected = ranked[:screen_count].copy()
    excluded = np.flatnonzero(np.isnan(correlations))
    for arr in (selected, correlations, excluded):
        arr.setflags(write=False)
    return ScreeningResult(
        selected=selected,
        correlations=correlations,
        excluded=excluded,
        requested=int(screen_count),
    )
