"""Modeling layer exports."""

from screencv.modeling.baseline import (
    ScreeningComparison,
    compare_screening,
    screen_then_validate,
)
from screencv.modeling.classifiers import (
    FitPredict,
    build_fit_predict,
    lightgbm_fit_predict,
    logistic_fit_predict,
    nearest_centroid_fit_predict,
)
from screencv.modeling.harness import FoldResult, HarnessResult, evaluate, fold_accuracy
from screencv.modeling.tuning import TuningOutput, build_study_name, run_tuning

__all__ = [
    "FitPredict",
    "FoldResult",
    "HarnessResult",
    "ScreeningComparison",
    "TuningOutput",
    "build_fit_predict",
    "build_study_name",
    "compare_screening",
    "evaluate",
    "fold_accuracy",
    "lightgbm_fit_predict",
    "logistic_fit_predict",
    "nearest_centroid_fit_predict",
    "run_tuning",
    "screen_then_validate",
]
