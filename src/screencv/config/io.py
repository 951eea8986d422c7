"""RunConfig YAML persistence."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from screencv.api.exceptions import ScreenCVValidationError
from screencv.config.models import RunConfig


def parse_run_config(config: RunConfig | dict[str, Any]) -> RunConfig:
    """Return ``config`` as a validated :class:`RunConfig`."""
    if isinstance(config, RunConfig):
        return config
    try:
        return RunConfig.model_validate(config)
    except ValidationError as exc:
        raise ScreenCVValidationError(f"Invalid RunConfig: {exc}") from exc


def load_run_config(path: str | Path) -> RunConfig:
    config_path = Path(path)
    if not config_path.is_file():
        raise ScreenCVValidationError(f"RunConfig file not found: '{config_path}'.")
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ScreenCVValidationError(f"RunConfig YAML could not be parsed: {exc}") from exc
    if not isinstance(raw, dict):
        raise ScreenCVValidationError("RunConfig YAML must deserialize to a mapping object.")
    return parse_run_config(raw)


def save_run_config(config: RunConfig, path: str | Path) -> Path:
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload: dict[str, Any] = config.model_dump(mode="json", exclude_none=True)
    config_path.write_text(
        yaml.safe_dump(payload, sort_keys=False, allow_unicode=True),
        encoding="utf-8",
    )
    return config_path
