"""Structured logging helpers."""

from __future__ import annotations

import json
import logging
from typing import Any


def _jsonable(value: Any) -> Any:
    if hasattr(value, "tolist"):
        return value.tolist()
    if isinstance(value, (tuple, set, frozenset)):
        return [_jsonable(item) for item in value]
    return value


def build_log_payload(
    run_id: str,
    artifact_path: str | None,
    stage: str,
    **extra: Any,
) -> dict[str, Any]:
    """Build structured log payload with mandatory keys.

    Parameters
    ----------
    run_id
        Run identifier.
    artifact_path
        Output path linked to the event, if available.
    stage
        Pipeline stage emitting the event (``evaluate``, ``compare``, ...).
    **extra
        Additional fields to include. numpy values are converted to
        plain Python values.

    Returns
    -------
    dict[str, Any]
        JSON-serializable payload with mandatory and extra fields.
    """
    payload: dict[str, Any] = {
        "run_id": run_id,
        "artifact_path": artifact_path,
        "stage": stage,
    }
    payload.update({key: _jsonable(value) for key, value in extra.items()})
    return payload


def log_event(
    logger: logging.Logger,
    level: int,
    message: str,
    run_id: str,
    artifact_path: str | None,
    stage: str,
    **extra: Any,
) -> dict[str, Any]:
    """Emit one structured log event.

    The JSON payload is the log message; the mandatory keys are also attached
    to the record so handlers can filter on them.

    Returns
    -------
    dict[str, Any]
        Payload that was emitted.
    """
    payload = build_log_payload(
        run_id=run_id,
        artifact_path=artifact_path,
        stage=stage,
        **extra,
    )
    if not logger.isEnabledFor(level):
        return payload
    logger.log(
        level,
        json.dumps(payload, sort_keys=True, default=str),
        extra={
            "run_id": payload["run_id"],
            "artifact_path": payload["artifact_path"],
            "stage": payload["stage"],
            "payload": payload,
            "event_message": message,
        },
    )
    return payload
