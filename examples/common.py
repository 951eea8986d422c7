"""Common helpers for example scripts."""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pandas as pd
import yaml

from screencv.api.types import ComparisonResult

EXAMPLES_DIR = Path(__file__).resolve().parent
DEFAULT_OUT_DIR = EXAMPLES_DIR / "out"


def make_timestamp_dir(root: str | Path) -> Path:
    """Create a timestamped output directory and return it."""
    base = Path(root)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    candidate = base / stamp
    suffix = 1
    while candidate.exists():
        candidate = base / f"{stamp}_{suffix:02d}"
        suffix += 1
    candidate.mkdir(parents=True, exist_ok=False)
    return candidate


def to_jsonable(value: Any) -> Any:
    """Convert result dataclasses and numpy values into JSON-serializable values."""
    if is_dataclass(value) and not isinstance(value, type):
        return to_jsonable(asdict(value))
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if hasattr(value, "tolist"):
        return value.tolist()
    return value


def fold_accuracy_table(comparison: ComparisonResult) -> pd.DataFrame:
    """One row per fold with isolated and leaky accuracy and their gap."""
    isolated = comparison.isolated.fold_accuracies
    leaky = comparison.leaky.fold_accuracies
    return pd.DataFrame(
        {
            "fold": range(1, len(isolated) + 1),
            "isolated": isolated,
            "leaky": leaky,
            "gap": [high - low for low, high in zip(isolated, leaky)],
        }
    )


def save_json(path: str | Path, payload: Any) -> None:
    """Write JSON payload with deterministic formatting."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(
        json.dumps(to_jsonable(payload), indent=2, sort_keys=True),
        encoding="utf-8",
    )


def save_yaml(path: str | Path, payload: dict[str, Any]) -> None:
    """Write YAML payload preserving key order."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(
        yaml.safe_dump(payload, sort_keys=False, allow_unicode=True),
        encoding="utf-8",
    )


def format_error(error: Exception, hint: str) -> str:
    """Format a user-facing error with a concrete next action."""
    return f"{error}\nHint: {hint}"
