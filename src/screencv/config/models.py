"""RunConfig models and validation."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

SplitType = Literal["kfold", "stratified", "loo"]
ModelType = Literal["logistic", "lightgbm", "nearest_centroid"]
TuningLogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

_DEFAULT_N_SPLITS = 5
_DEFAULT_C = 1.0


class DataConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    path: str
    target: str
    drop_cols: list[str] = Field(default_factory=list)


class SyntheticConfig(BaseModel):
    """Zero-signal dataset: i.i.d. normal features, block-alternating labels."""

    model_config = ConfigDict(extra="forbid")
    n_records: int = 400
    n_features: int = 5000
    n_blocks: int = 4
    seed: int = 0

    @model_validator(mode="after")
    def _validate_shape(self) -> "SyntheticConfig":
        if self.n_records < 2:
            raise ValueError("synthetic.n_records must be >= 2")
        if self.n_features < 1:
            raise ValueError("synthetic.n_features must be >= 1")
        if self.n_blocks < 2 or self.n_blocks % 2 != 0:
            raise ValueError("synthetic.n_blocks must be an even number >= 2")
        if self.n_records % self.n_blocks != 0:
            raise ValueError("synthetic.n_records must be divisible by synthetic.n_blocks")
        return self


class SplitConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    type: SplitType = "kfold"
    n_splits: int = _DEFAULT_N_SPLITS
    seed: int = 42

    @model_validator(mode="after")
    def _validate_split_fields(self) -> "SplitConfig":
        if self.type == "loo":
            if self.n_splits != _DEFAULT_N_SPLITS:
                raise ValueError(
                    "split.n_splits can be customized only when split.type is "
                    "'kfold' or 'stratified'"
                )
        elif self.n_splits < 2:
            raise ValueError("split.n_splits must be >= 2")
        return self


class ScreeningConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    screen_count: int = 25

    @model_validator(mode="after")
    def _validate_count(self) -> "ScreeningConfig":
        if self.screen_count < 1:
            raise ValueError("screening.screen_count must be >= 1")
        return self


class ModelConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    type: ModelType = "logistic"
    C: float = _DEFAULT_C
    max_iter: int = 1000
    lgb_params: dict[str, Any] = Field(default_factory=dict)
    num_boost_round: int = 100
    seed: int = 42

    @model_validator(mode="after")
    def _validate_model_fields(self) -> "ModelConfig":
        if self.C <= 0:
            raise ValueError("model.C must be > 0")
        if self.type != "logistic" and self.C != _DEFAULT_C:
            raise ValueError("model.C can be customized only when model.type='logistic'")
        if self.max_iter < 1:
            raise ValueError("model.max_iter must be >= 1")
        if self.num_boost_round < 1:
            raise ValueError("model.num_boost_round must be >= 1")
        if self.type != "lightgbm" and self.lgb_params:
            raise ValueError("model.lgb_params can be set only when model.type='lightgbm'")
        return self


class ExecutionConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    n_jobs: int = 1
    threshold: float = 0.5

    @model_validator(mode="after")
    def _validate_execution(self) -> "ExecutionConfig":
        if self.n_jobs == 0:
            raise ValueError("execution.n_jobs must be non-zero")
        if not (0.0 < self.threshold < 1.0):
            raise ValueError("execution.threshold must satisfy 0 < value < 1")
        return self


class BootstrapConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    n_resamples: int = 1000
    test_size: float = 0.5
    stratify: bool = True
    confidence_level: float = 0.95
    seed: int = 42

    @model_validator(mode="after")
    def _validate_bootstrap(self) -> "BootstrapConfig":
        if self.n_resamples < 2:
            raise ValueError("bootstrap.n_resamples must be >= 2")
        if not (0.0 < self.test_size < 1.0):
            raise ValueError("bootstrap.test_size must satisfy 0 < value < 1")
        if not (0.0 < self.confidence_level < 1.0):
            raise ValueError("bootstrap.confidence_level must satisfy 0 < value < 1")
        return self


class TuningConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    enabled: bool = False
    n_trials: int = 20
    screen_count_low: int = 1
    screen_count_high: int | None = None
    C_low: float = 1e-3
    C_high: float = 1e2
    study_name: str | None = None
    resume: bool = False
    log_level: TuningLogLevel = "INFO"

    @model_validator(mode="after")
    def _validate_tuning(self) -> "TuningConfig":
        if self.n_trials < 1:
            raise ValueError("tuning.n_trials must be >= 1")
        if self.screen_count_low < 1:
            raise ValueError("tuning.screen_count_low must be >= 1")
        if self.screen_count_high is not None and self.screen_count_high < self.screen_count_low:
            raise ValueError("tuning.screen_count_high must be >= tuning.screen_count_low")
        if not (0.0 < self.C_low < self.C_high):
            raise ValueError("tuning.C_low/C_high must satisfy 0 < C_low < C_high")
        return self


class ExportConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    artifact_dir: str = "artifacts"


class RunConfig(BaseModel):
    """Single shared entrypoint configuration for all adapters."""

    model_config = ConfigDict(extra="forbid")
    config_version: int
    data: DataConfig | None = None
    synthetic: SyntheticConfig | None = None
    split: SplitConfig = Field(default_factory=SplitConfig)
    screening: ScreeningConfig = Field(default_factory=ScreeningConfig)
    model: ModelConfig = Field(default_factory=ModelConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    bootstrap: BootstrapConfig = Field(default_factory=BootstrapConfig)
    tuning: TuningConfig = Field(default_factory=TuningConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)

    @model_validator(mode="after")
    def _validate_cross_fields(self) -> "RunConfig":
        if self.config_version < 1:
            raise ValueError("config_version must be >= 1")
        if (self.data is None) == (self.synthetic is None):
            raise ValueError("exactly one of data or synthetic must be configured")
        if self.synthetic is not None:
            if self.screening.screen_count > self.synthetic.n_features:
                raise ValueError(
                    "screening.screen_count must be <= synthetic.n_features"
                )
            if self.split.type != "loo" and self.split.n_splits > self.synthetic.n_records:
                raise ValueError("split.n_splits must be <= synthetic.n_records")
        if (
            self.tuning.screen_count_high is not None
            and self.synthetic is not None
            and self.tuning.screen_count_high > self.synthetic.n_features
        ):
            raise ValueError("tuning.screen_count_high must be <= synthetic.n_features")
        if (
            self.model.type == "lightgbm"
            and self.execution.n_jobs != 1
            and self.model.lgb_params.get("num_threads", 1) != 1
        ):
            raise ValueError(
                "model.lgb_params.num_threads must be 1 when execution.n_jobs runs folds "
                "in parallel"
            )
        return self
