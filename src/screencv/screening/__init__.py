"""Feature screening."""

from screencv.screening.correlation import (
    ScreeningResult,
    feature_correlations,
    rank_features,
    screen_features,
)

__all__ = ["ScreeningResult", "feature_correlations", "rank_features", "screen_features"]
