import pandas as pd
import pytest

from screencv.api.exceptions import ScreenCVValidationError
from screencv.data import load_tabular_data, make_null_dataset, make_signal_dataset


def test_load_tabular_data_csv_and_parquet(tmp_path) -> None:
    frame = pd.DataFrame({"x1": [1.0, 2.0], "target": [0, 1]})
    csv_path = tmp_path / "train.csv"
    parquet_path = tmp_path / "train.parquet"
    frame.to_csv(csv_path, index=False)
    frame.to_parquet(parquet_path, index=False)

    pd.testing.assert_frame_equal(load_tabular_data(csv_path), frame)
    pd.testing.assert_frame_equal(load_tabular_data(str(parquet_path)), frame)


def test_load_tabular_data_errors(tmp_path) -> None:
    with pytest.raises(ScreenCVValidationError, match="Unsupported data format"):
        load_tabular_data(tmp_path / "train.txt")
    with pytest.raises(ScreenCVValidationError, match="not found"):
        load_tabular_data(tmp_path / "missing.csv")


def test_make_null_dataset_block_labels() -> None:
    dataset = make_null_dataset(n_records=400, n_features=50, n_blocks=4, seed=1)

    assert dataset.features.shape == (400, 50)
    assert dataset.labels[:100].tolist() == [0] * 100
    assert dataset.labels[100:200].tolist() == [1] * 100
    assert dataset.labels[200:300].tolist() == [0] * 100
    assert dataset.labels[300:].tolist() == [1] * 100


def test_make_null_dataset_is_seeded() -> None:
    first = make_null_dataset(n_records=8, n_features=3, seed=5)
    second = make_null_dataset(n_records=8, n_features=3, seed=5)
    assert (first.features == second.features).all()


def test_make_null_dataset_rejects_uneven_blocks() -> None:
    with pytest.raises(ScreenCVValidationError):
        make_null_dataset(n_records=10, n_features=3, n_blocks=4)
    with pytest.raises(ScreenCVValidationError):
        make_null_dataset(n_records=12, n_features=3, n_blocks=3)


def test_make_signal_dataset_shifts_informative_columns() -> None:
    dataset = make_signal_dataset(n_records=400, n_features=10, n_informative=2, effect=2.0)
    positive = dataset.features[dataset.labels == 1]
    negative = dataset.features[dataset.labels == 0]

    assert positive[:, 0].mean() - negative[:, 0].mean() > 1.0
    assert abs(positive[:, 5].mean() - negative[:, 5].mean()) < 0.5
