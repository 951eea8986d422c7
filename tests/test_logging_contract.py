import logging

import numpy as np

from screencv.api.logging import build_log_payload, log_event


def test_structured_logging_contract(caplog) -> None:
    logger = logging.getLogger("screencv.test")

    with caplog.at_level(logging.INFO):
        payload = log_event(
            logger=logger,
            level=logging.INFO,
            message="contract check",
            run_id="run-1",
            artifact_path="artifacts/run-1",
            stage="evaluate",
            screen_count=25,
        )

    assert payload["run_id"] == "run-1"
    assert payload["artifact_path"] == "artifacts/run-1"
    assert payload["stage"] == "evaluate"
    assert payload["screen_count"] == 25

    record = caplog.records[-1]
    assert record.run_id == "run-1"
    assert record.artifact_path == "artifacts/run-1"
    assert record.stage == "evaluate"
    assert record.event_message == "contract check"
    assert '"screen_count": 25' in record.getMessage()


def test_log_payload_converts_numpy_values() -> None:
    payload = build_log_payload(
        run_id="run-2",
        artifact_path=None,
        stage="compare",
        selected=np.array([3, 1]),
        accuracy=np.float64(0.5),
        folds=(1, 2),
    )

    assert payload["selected"] == [3, 1]
    assert isinstance(payload["accuracy"], float)
    assert payload["folds"] == [1, 2]


def test_disabled_level_skips_emit(caplog) -> None:
    logger = logging.getLogger("screencv.quiet")

    with caplog.at_level(logging.WARNING, logger="screencv.quiet"):
        payload = log_event(logger, logging.DEBUG, "skipped", "run-3", None, "evaluate")

    assert payload["stage"] == "evaluate"
    assert not [r for r in caplog.records if r.name == "screencv.quiet"]
