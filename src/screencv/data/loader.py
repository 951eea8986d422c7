"""Tabular data loading helpers."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from screencv.api.exceptions import ScreenCVValidationError

_READERS = {
    ".csv": pd.read_csv,
    ".parquet": pd.read_parquet,
}


def load_tabular_data(path: str | Path) -> pd.DataFrame:
    """Load CSV/Parquet into a DataFrame based on file extension."""
    source = Path(path)
    reader = _READERS.get(source.suffix.lower())
    if reader is None:
        raise ScreenCVValidationError(
            f"Unsupported data format: '{source.suffix.lower()}'. "
            "Supported formats are .csv and .parquet."
        )
    if not source.is_file():
        raise ScreenCVValidationError(f"Data file not found: '{source}'.")
    return reader(source)
