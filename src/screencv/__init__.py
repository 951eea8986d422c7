"""screencv package root."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from typing import Sequence

__version__ = "0.1.0"

LOGGER = logging.getLogger("screencv.cli")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_COMMANDS = {
    "evaluate": "Fold-isolated cross-validated accuracy.",
    "compare": "Isolated screening next to the leaky screen-then-validate estimate.",
    "bootstrap": "Validation-set accuracy with a bootstrap standard error.",
    "tune": "Optuna search over the screen size.",
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="screencv",
        description="Leakage-safe resampling estimates for screened classifiers.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=_LOG_LEVELS,
        help="Root logging level.",
    )
    subparsers = parser.add_subparsers(dest="command")
    for name, help_text in _COMMANDS.items():
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--config", required=True, help="RunConfig YAML path.")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    from screencv import api
    from screencv.api.exceptions import ScreenCVError
    from screencv.api.logging import log_event
    from screencv.config.io import load_run_config

    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command not in _COMMANDS:
        parser.print_help()
        return

    logging.basicConfig(level=args.log_level)
    try:
        config = load_run_config(args.config)
        result = getattr(api, args.command)(config)
    except ScreenCVError as exc:
        raise SystemExit(f"ERROR: {exc}") from exc

    log_event(
        LOGGER,
        logging.INFO,
        f"{args.command} completed",
        run_id=result.run_id,
        artifact_path=None,
        stage=args.command,
        config_path=args.config,
    )
    print(json.dumps(asdict(result), ensure_ascii=False, indent=2, default=str))
