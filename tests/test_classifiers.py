import numpy as np
import pytest

from screencv.api.exceptions import ScreenCVValidationError
from screencv.config.models import ModelConfig
from screencv.data import make_signal_dataset
from screencv.modeling import (
    build_fit_predict,
    lightgbm_fit_predict,
    logistic_fit_predict,
    nearest_centroid_fit_predict,
)


def _split():
    dataset = make_signal_dataset(n_records=120, n_features=4, n_informative=2, effect=2.5)
    x, y = dataset.features, dataset.labels
    return x[:80], y[:80], x[80:], y[80:]


@pytest.mark.parametrize(
    "fit_predict",
    [
        logistic_fit_predict(),
        lightgbm_fit_predict(params={"min_data_in_leaf": 5}, num_boost_round=30),
        nearest_centroid_fit_predict(),
    ],
)
def test_fit_predict_capabilities_score_validation_rows(fit_predict) -> None:
    train_x, train_y, valid_x, valid_y = _split()

    pred = np.asarray(fit_predict(train_x, train_y, valid_x))

    assert pred.shape == (40,)
    assert ((pred >= 0.0) & (pred <= 1.0)).all()
    assert np.mean((pred >= 0.5).astype(int) == valid_y) > 0.7


def test_nearest_centroid_returns_labels() -> None:
    train_x, train_y, valid_x, _ = _split()
    pred = nearest_centroid_fit_predict()(train_x, train_y, valid_x)
    assert set(np.unique(pred).tolist()) <= {0.0, 1.0}


def test_lightgbm_fit_predict_is_deterministic() -> None:
    train_x, train_y, valid_x, _ = _split()
    fit_predict = lightgbm_fit_predict(num_boost_round=20, seed=3)
    np.testing.assert_array_equal(
        fit_predict(train_x, train_y, valid_x),
        fit_predict(train_x, train_y, valid_x),
    )


def test_build_fit_predict_resolves_config() -> None:
    train_x, train_y, valid_x, _ = _split()
    for model_type in ("logistic", "lightgbm", "nearest_centroid"):
        fit_predict = build_fit_predict(ModelConfig(type=model_type, num_boost_round=10))
        assert fit_predict(train_x, train_y, valid_x).shape == (40,)

    config = ModelConfig()
    config.type = "svm"  # type: ignore[assignment]
    with pytest.raises(ScreenCVValidationError, match="Unsupported model type"):
        build_fit_predict(config)
