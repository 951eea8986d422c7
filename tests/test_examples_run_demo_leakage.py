import json

import pandas as pd

from examples import common, run_demo_leakage


def test_run_demo_leakage_writes_expected_outputs(tmp_path, capsys) -> None:
    out_dir = tmp_path / "out"

    exit_code = run_demo_leakage.main(
        [
            "--out-dir",
            str(out_dir),
            "--n-records",
            "80",
            "--n-features",
            "300",
            "--screen-count",
            "10",
            "--n-splits",
            "4",
            "--seed",
            "3",
        ]
    )

    assert exit_code == 0
    run_dirs = [path for path in out_dir.iterdir() if path.is_dir()]
    assert len(run_dirs) == 1
    run_dir = run_dirs[0]

    folds = pd.read_csv(run_dir / "fold_accuracies.csv")
    assert list(folds.columns) == ["fold", "isolated", "leaky", "gap"]
    assert len(folds) == 4

    comparison = json.loads((run_dir / "comparison.json").read_text(encoding="utf-8"))
    assert comparison["optimism"] > 0.0
    assert (run_dir / "bootstrap.json").exists()
    assert (run_dir / "used_config.yaml").exists()
    assert "optimism:" in capsys.readouterr().out


def test_example_config_loads() -> None:
    from screencv.config import load_run_config

    config = load_run_config(common.EXAMPLES_DIR / "configs" / "null_leakage.yaml")
    assert config.synthetic is not None
    assert config.screening.screen_count == 25
