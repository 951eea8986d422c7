"""Public result types used by stable API functions."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class CVResult:
    """Result payload returned by :func:`screencv.api.evaluate`.

    Attributes
    ----------
    run_id
        Unique identifier for the run.
    fold_accuracies
        Out-of-fold accuracy per fold, in fold order.
    mean_accuracy
        Mean of ``fold_accuracies``.
    std_accuracy
        Sample standard deviation of ``fold_accuracies``.
    metadata
        Partition, screening and model context.
    """

    run_id: str
    fold_accuracies: list[float]
    mean_accuracy: float
    std_accuracy: float
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ComparisonResult:
    """Result payload returned by :func:`screencv.api.compare`.

    Attributes
    ----------
    run_id
        Unique identifier for the run.
    isolated
        Fold-isolated screening estimate.
    leaky
        Screen-then-validate estimate on the same partition.
    optimism
        ``leaky.mean_accuracy - isolated.mean_accuracy``.
    """

    run_id: str
    isolated: CVResult
    leaky: CVResult
    optimism: float
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class BootstrapSummary:
    """Result payload returned by :func:`screencv.api.bootstrap`.

    Attributes
    ----------
    run_id
        Unique identifier for the run.
    accuracy
        Validation-set accuracy.
    std_error
        Bootstrap standard error of ``accuracy``.
    interval
        Percentile interval at ``bootstrap.confidence_level``.
    metadata
        Split sizes and resampling settings.
    """

    run_id: str
    accuracy: float
    std_error: float
    interval: tuple[float, float]
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class TuneResult:
    """Result payload returned by :func:`screencv.api.tune`.

    Attributes
    ----------
    run_id
        Unique identifier for the tuning run.
    best_params
        Best ``screen_count`` (and ``C``) found by the study.
    best_score
        Best mean fold-isolated accuracy.
    metadata
        Additional study metadata.
    """

    run_id: str
    best_params: dict[str, Any] = field(default_factory=dict)
    best_score: float | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
