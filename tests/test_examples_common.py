from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np
import yaml

from examples import common
from screencv.api.types import ComparisonResult, CVResult


@dataclass
class _Payload:
    name: str
    values: tuple[float, ...]


def test_make_timestamp_dir_uses_suffix_when_name_collides(tmp_path, monkeypatch) -> None:
    class _Now:
        @staticmethod
        def strftime(_: str) -> str:
            return "20260210_010203"

    class _DatetimeMock:
        @staticmethod
        def now(_: object) -> _Now:
            return _Now()

    monkeypatch.setattr(common, "datetime", _DatetimeMock)
    (tmp_path / "20260210_010203").mkdir()

    created = common.make_timestamp_dir(tmp_path)

    assert created.name == "20260210_010203_01"
    assert created.exists()


def test_to_jsonable_handles_dataclass_path_and_numpy() -> None:
    payload = {
        "result": _Payload(name="fold", values=(0.5, 0.75)),
        "path": Path("a/b"),
        "array": np.array([1, 2]),
        1: np.float64(0.25),
    }

    converted = common.to_jsonable(payload)

    assert converted == {
        "result": {"name": "fold", "values": [0.5, 0.75]},
        "path": "a/b",
        "array": [1, 2],
        "1": 0.25,
    }


def test_save_json_and_yaml_create_parents(tmp_path) -> None:
    common.save_json(tmp_path / "nested" / "out.json", {"b": 1, "a": (2, 3)})
    common.save_yaml(tmp_path / "nested" / "out.yaml", {"b": 1, "a": [2, 3]})

    text = (tmp_path / "nested" / "out.json").read_text(encoding="utf-8")
    assert text.index('"a"') < text.index('"b"')
    assert yaml.safe_load((tmp_path / "nested" / "out.yaml").read_text(encoding="utf-8")) == {
        "b": 1,
        "a": [2, 3],
    }


def test_format_error_appends_hint() -> None:
    assert common.format_error(ValueError("bad"), "fix it") == "bad\nHint: fix it"


def test_fold_accuracy_table_reports_gap_per_fold() -> None:
    comparison = ComparisonResult(
        run_id="run-1",
        isolated=CVResult("run-1", [0.5, 0.25], 0.375, 0.17),
        leaky=CVResult("run-1", [0.75, 1.0], 0.875, 0.17),
        optimism=0.5,
    )

    table = common.fold_accuracy_table(comparison)

    assert table["fold"].tolist() == [1, 2]
    assert table["gap"].tolist() == [0.25, 0.75]
