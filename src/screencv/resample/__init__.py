"""Resampling estimates beyond k-fold cross-validation."""

from screencv.resample.bootstrap import (
    BootstrapResult,
    ValidationSetResult,
    bootstrap,
    bootstrap_accuracy,
    validation_set_accuracy,
)

__all__ = [
    "BootstrapResult",
    "ValidationSetResult",
    "bootstrap",
    "bootstrap_accuracy",
    "validation_set_accuracy",
]
