"""Config package exports."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "BootstrapConfig",
    "DataConfig",
    "ExecutionConfig",
    "ExportConfig",
    "ModelConfig",
    "RunConfig",
    "ScreeningConfig",
    "SplitConfig",
    "SyntheticConfig",
    "TuningConfig",
    "load_run_config",
    "parse_run_config",
    "save_run_config",
]


def __getattr__(name: str) -> Any:
    if name in {"load_run_config", "parse_run_config", "save_run_config"}:
        return getattr(import_module("screencv.config.io"), name)
    if name in {
        "BootstrapConfig",
        "DataConfig",
        "ExecutionConfig",
        "ExportConfig",
        "ModelConfig",
        "RunConfig",
        "ScreeningConfig",
        "SplitConfig",
        "SyntheticConfig",
        "TuningConfig",
    }:
        return getattr(import_module("screencv.config.models"), name)
    raise AttributeError(f"module 'screencv.config' has no attribute '{name}'")
