from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from screencv.api.exceptions import ScreenCVValidationError
from screencv.config import RunConfig, load_run_config, parse_run_config, save_run_config


def test_defaults_are_filled(config_payload) -> None:
    config = RunConfig.model_validate(config_payload())

    assert config.execution.n_jobs == 1
    assert config.execution.threshold == 0.5
    assert config.bootstrap.n_resamples == 1000
    assert config.tuning.enabled is False
    assert config.data is None


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"synthetic": {"n_blocks": 3}}, "even number"),
        ({"synthetic": {"n_records": 42}}, "divisible"),
        ({"split": {"type": "loo", "n_splits": 3}}, "customized only"),
        ({"split": {"n_splits": 1}}, "n_splits must be >= 2"),
        ({"split": {"n_splits": 80}}, "n_splits must be <= synthetic.n_records"),
        ({"screening": {"screen_count": 0}}, "screen_count must be >= 1"),
        ({"screening": {"screen_count": 31}}, "screen_count must be <= synthetic.n_features"),
        ({"model": {"type": "nearest_centroid", "C": 0.5}}, "model.C can be customized"),
        ({"model": {"lgb_params": {"num_leaves": 7}}}, "lgb_params can be set only"),
        ({"execution": {"n_jobs": 0}}, "non-zero"),
        ({"execution": {"threshold": 1.0}}, "threshold"),
        ({"bootstrap": {"n_resamples": 1}}, "n_resamples must be >= 2"),
        ({"tuning": {"screen_count_low": 5, "screen_count_high": 2}}, ">= tuning.screen_count_low"),
        ({"tuning": {"screen_count_high": 99}}, "<= synthetic.n_features"),
        ({"tuning": {"C_low": 1.0, "C_high": 0.1}}, "C_low < C_high"),
        ({"unknown": 1}, "Extra inputs"),
    ],
)
def test_run_config_rejects_invalid_fields(config_payload, overrides, message) -> None:
    with pytest.raises(ValidationError, match=message):
        RunConfig.model_validate(config_payload(**overrides))


def test_data_and_synthetic_are_exclusive(config_payload) -> None:
    payload = config_payload()
    payload["data"] = {"path": "train.csv", "target": "target"}
    with pytest.raises(ValidationError, match="exactly one of data or synthetic"):
        RunConfig.model_validate(payload)

    payload.pop("data")
    payload.pop("synthetic")
    with pytest.raises(ValidationError, match="exactly one of data or synthetic"):
        RunConfig.model_validate(payload)


def test_parallel_lightgbm_requires_single_thread_boosters(config_payload) -> None:
    payload = config_payload(
        model={"type": "lightgbm", "lgb_params": {"num_threads": 4}},
        execution={"n_jobs": 2},
    )
    with pytest.raises(ValidationError, match="num_threads must be 1"):
        RunConfig.model_validate(payload)

    payload["execution"]["n_jobs"] = 1
    assert RunConfig.model_validate(payload).model.lgb_params == {"num_threads": 4}


def test_parse_run_config_wraps_validation_errors(config_payload) -> None:
    config = RunConfig.model_validate(config_payload())
    assert parse_run_config(config) is config

    with pytest.raises(ScreenCVValidationError, match="Invalid RunConfig"):
        parse_run_config(config_payload(screening={"screen_count": 0}))


def test_save_then_load_run_config_roundtrip(tmp_path: Path, config_payload) -> None:
    config = RunConfig.model_validate(
        config_payload(data={"path": str(tmp_path / "train.csv"), "target": "target"})
    )
    path = save_run_config(config, tmp_path / "configs" / "run.yaml")

    assert path.exists()
    loaded = load_run_config(path)
    assert loaded.model_dump(mode="json") == config.model_dump(mode="json")


def test_load_run_config_rejects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ScreenCVValidationError, match="not found"):
        load_run_config(tmp_path / "missing.yaml")


def test_load_run_config_rejects_non_mapping_yaml(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ScreenCVValidationError, match="mapping object"):
        load_run_config(path)


def test_load_run_config_raises_for_malformed_yaml(tmp_path: Path) -> None:
    path = tmp_path / "malformed.yaml"
    path.write_text("config_version: [1\n", encoding="utf-8")
    with pytest.raises(ScreenCVValidationError, match="could not be parsed"):
        load_run_config(path)


def test_load_run_config_validates_content(tmp_path: Path, config_payload) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(
        yaml.safe_dump(config_payload(split={"type": "holdout"})), encoding="utf-8"
    )
    with pytest.raises(ScreenCVValidationError, match="Invalid RunConfig"):
        load_run_config(path)
