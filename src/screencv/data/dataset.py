"""Immutable labeled dataset used by the resampling harnesses."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd

from screencv.api.exceptions import DimensionMismatch, ScreenCVValidationError


def _to_python_scalar(value: Any) -> Any:
    if hasattr(value, "item"):
        return value.item()
    return value


def _readonly(values: np.ndarray) -> np.ndarray:
    copied = np.array(values, copy=True)
    copied.setflags(write=False)
    return copied


@dataclass(frozen=True, slots=True)
class Dataset:
    """Binary-labeled records with a fixed feature dimensionality.

    Attributes
    ----------
    features
        Float matrix of shape ``(n_records, n_features)``. Read-only.
    labels
        Integer 0/1 vector of length ``n_records``. Read-only.
    feature_names
        Column names, one per feature.
    """

    features: np.ndarray
    labels: np.ndarray
    feature_names: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        features = np.asarray(self.features, dtype=float)
        labels = np.asarray(self.labels)
        if features.ndim != 2:
            raise DimensionMismatch(
                f"features must be a 2-D matrix, got {features.ndim} dimension(s)."
            )
        if labels.ndim != 1:
            raise DimensionMismatch("labels must be a 1-D vector.")
        if features.shape[0] != labels.shape[0]:
            raise DimensionMismatch(
                f"features has {features.shape[0]} rows but labels has {labels.shape[0]}."
            )
        if features.shape[0] == 0:
            raise ScreenCVValidationError("Dataset must contain at least one record.")
        if features.shape[1] == 0:
            raise ScreenCVValidationError("Dataset must contain at least one feature.")
        if not np.isfinite(features).all():
            raise ScreenCVValidationError("features contain non-finite values.")
        if labels.dtype.kind == "f" and np.isnan(labels).any():
            raise ScreenCVValidationError("labels contain null values.")
        if not np.isin(labels, (0, 1)).all():
            raise ScreenCVValidationError("labels must be binary 0/1 values.")

        names = tuple(str(name) for name in self.feature_names)
        if not names:
            names = tuple(f"x{idx}" for idx in range(features.shape[1]))
        if len(names) != features.shape[1]:
            raise DimensionMismatch(
                f"feature_names has {len(names)} entries for {features.shape[1]} features."
            )

        object.__setattr__(self, "features", _readonly(features))
        object.__setattr__(self, "labels", _readonly(labels.astype(int)))
        object.__setattr__(self, "feature_names", names)

    @property
    def n_records(self) -> int:
        return int(self.features.shape[0])

    @property
    def n_features(self) -> int:
        return int(self.features.shape[1])

    def take(self, indices: Sequence[int] | np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Return ``(features, labels)`` for the given record indices."""
        idx = np.asarray(indices, dtype=int)
        return self.features[idx], self.labels[idx]

    def with_overrides(
        self,
        indices: Sequence[int] | np.ndarray,
        *,
        features: np.ndarray | None = None,
        labels: np.ndarray | None = None,
    ) -> "Dataset":
        """Return a copy where the given rows carry replacement values."""
        idx = np.asarray(indices, dtype=int)
        new_features = np.array(self.features, copy=True)
        new_labels = np.array(self.labels, copy=True)
        if features is not None:
            new_features[idx] = features
        if labels is not None:
            new_labels[idx] = labels
        return Dataset(new_features, new_labels, self.feature_names)

    def to_frame(self, target: str = "target") -> pd.DataFrame:
        frame = pd.DataFrame(self.features, columns=list(self.feature_names))
        frame[target] = self.labels
        return frame

    @classmethod
    def from_records(
        cls,
        records: Iterable[tuple[int, Sequence[float]]],
        feature_names: Sequence[str] = (),
    ) -> "Dataset":
        """Build a dataset from ``(label, features)`` pairs."""
        labels: list[int] = []
        rows: list[list[float]] = []
        width: int | None = None
        for position, (label, row) in enumerate(records):
            values = [float(v) for v in row]
            if width is None:
                width = len(values)
            elif len(values) != width:
                raise DimensionMismatch(
                    f"Record {position} has {len(values)} features, expected {width}."
                )
            labels.append(int(label))
            rows.append(values)
        if width is None:
            raise ScreenCVValidationError("Dataset must contain at least one record.")
        return cls(np.asarray(rows, dtype=float), np.asarray(labels), tuple(feature_names))

    @classmethod
    def from_frame(
        cls,
        data: pd.DataFrame,
        target: str,
        drop_cols: Sequence[str] = (),
    ) -> "Dataset":
        """Build a dataset from a DataFrame holding a two-class target column."""
        if target not in data.columns:
            raise ScreenCVValidationError(f"Target column '{target}' was not found in input data.")
        if data.empty:
            raise ScreenCVValidationError("Input data is empty.")

        y = data[target]
        if y.isna().any():
            raise ScreenCVValidationError("Target column contains null values.")
        unique = pd.unique(y)
        if len(unique) != 2:
            raise ScreenCVValidationError(
                f"Binary screening requires exactly two target classes, got {len(unique)}."
            )
        classes = sorted((_to_python_scalar(v) for v in unique), key=lambda v: str(v))
        y_encoded = y.map({classes[0]: 0, classes[1]: 1})

        excluded = set(drop_cols) | {target}
        feature_cols = [col for col in data.columns if col not in excluded]
        if not feature_cols:
            raise ScreenCVValidationError(
                "No features remain after applying drop/target columns."
            )
        x = data.loc[:, feature_cols]
        non_numeric = [col for col in feature_cols if not pd.api.types.is_numeric_dtype(x[col])]
        if non_numeric:
            raise ScreenCVValidationError(f"Feature columns must be numeric: {non_numeric}")
        if x.isna().any().any():
            raise ScreenCVValidationError("Feature columns contain null values.")
        return cls(
            x.to_numpy(dtype=float),
            y_encoded.to_numpy(dtype=int),
            tuple(str(col) for col in feature_cols),
        )
