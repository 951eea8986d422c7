"""Stable public API exports.

Attributes resolve lazily so importing lightweight submodules (for example
``screencv.api.exceptions``) does not pull LightGBM/Optuna into memory.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

from screencv.api.exceptions import (
    DegenerateScreen,
    DimensionMismatch,
    InvalidPartition,
    ScreenCVError,
    ScreenCVValidationError,
)

__all__ = [
    "BootstrapSummary",
    "CVResult",
    "ComparisonResult",
    "DegenerateScreen",
    "DimensionMismatch",
    "InvalidPartition",
    "ScreenCVError",
    "ScreenCVValidationError",
    "TuneResult",
    "bootstrap",
    "compare",
    "evaluate",
    "tune",
]


def __getattr__(name: str) -> Any:
    if name in {"bootstrap", "compare", "evaluate", "tune"}:
        return getattr(import_module("screencv.api.runner"), name)
    if name in {"BootstrapSummary", "CVResult", "ComparisonResult", "TuneResult"}:
        return getattr(import_module("screencv.api.types"), name)
    raise AttributeError(f"module 'screencv.api' has no attribute '{name}'")
