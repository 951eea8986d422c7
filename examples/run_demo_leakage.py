"""Compare fold-isolated screening with screen-then-validate on pure-noise data."""

from __future__ import annotations

import argparse
from typing import Any

try:  # pragma: no cover - import path depends on launch style
    from examples.common import (
        DEFAULT_OUT_DIR,
        fold_accuracy_table,
        format_error,
        make_timestamp_dir,
        save_json,
        save_yaml,
    )
except ModuleNotFoundError:  # pragma: no cover
    from common import (
        DEFAULT_OUT_DIR,
        fold_accuracy_table,
        format_error,
        make_timestamp_dir,
        save_json,
        save_yaml,
    )

from screencv.api import bootstrap, compare
from screencv.api.exceptions import ScreenCVError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--out-dir",
        default=str(DEFAULT_OUT_DIR),
        help="Output root directory (default: examples/out).",
    )
    parser.add_argument("--n-records", type=int, default=400, help="Synthetic record count.")
    parser.add_argument("--n-features", type=int, default=5000, help="Synthetic feature count.")
    parser.add_argument("--screen-count", type=int, default=25, help="Features kept per fold.")
    parser.add_argument("--n-splits", type=int, default=5, help="CV fold count.")
    parser.add_argument("--seed", type=int, default=42, help="Random seed.")
    parser.add_argument(
        "--model",
        default="logistic",
        choices=["logistic", "lightgbm", "nearest_centroid"],
        help="Classifier fitted on the screened features.",
    )
    parser.add_argument("--n-jobs", type=int, default=1, help="Folds evaluated in parallel.")
    return parser.parse_args(argv)


def build_run_config(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "config_version": 1,
        "synthetic": {
            "n_records": args.n_records,
            "n_features": args.n_features,
            "n_blocks": 4,
            "seed": args.seed,
        },
        "split": {"type": "stratified", "n_splits": args.n_splits, "seed": args.seed},
        "screening": {"screen_count": args.screen_count},
        "model": {"type": args.model, "seed": args.seed},
        "execution": {"n_jobs": args.n_jobs},
        "bootstrap": {"n_resamples": 500, "seed": args.seed},
    }


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config = build_run_config(args)

    try:
        comparison = compare(config)
        holdout = bootstrap(config)
    except ScreenCVError as exc:  # pragma: no cover - CLI failure path
        raise SystemExit(
            format_error(
                exc,
                "Check that n_records divides into 4 blocks and screen_count <= n_features.",
            )
        ) from exc

    run_dir = make_timestamp_dir(args.out_dir)
    fold_accuracy_table(comparison).to_csv(run_dir / "fold_accuracies.csv", index=False)
    save_json(run_dir / "comparison.json", comparison)
    save_json(run_dir / "bootstrap.json", holdout)
    save_yaml(run_dir / "used_config.yaml", config)

    print(f"run_id: {comparison.run_id}")
    print(f"isolated_accuracy: {comparison.isolated.mean_accuracy:.4f}")
    print(f"leaky_accuracy: {comparison.leaky.mean_accuracy:.4f}")
    print(f"optimism: {comparison.optimism:.4f}")
    print(f"holdout_accuracy: {holdout.accuracy:.4f} (se {holdout.std_error:.4f})")
    print(f"output_dir: {run_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
