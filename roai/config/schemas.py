"""Configuration schemas for the RoAI valuation engine."""

from __future__ import annotations

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


WEIGHT_SUM_TOLERANCE = 1e-6


class FloatRangeValidatorMixin:
    """Mixin that constrains float values to a configurable range."""

    @staticmethod
    def _coerce_float(
        value: Any,
        *,
        field_name: str,
        lower_bound: Optional[float] = None,
        upper_bound: Optional[float] = None,
    ) -> float:
        try:
            number = float(value)
        except (TypeError, ValueError) as exc:  # pragma: no cover
            raise ValueError(f"{field_name} must be numeric, got {value!r}") from exc

        if lower_bound is not None and number < lower_bound:
            raise ValueError(f"{field_name} must be >= {lower_bound}, got {number}")
        if upper_bound is not None and number > upper_bound:
            raise ValueError(f"{field_name} must be <= {upper_bound}, got {number}")

        return number


class ScoringWeights(FloatRangeValidatorMixin, BaseModel):
    """Weights blending the normalized metrics into the value index.

    The four weights must sum to 1.0.
    """

    model_config = ConfigDict(frozen=True)

    npv_weight: float = Field(default=0.40, description="Weight of the normalized NPV score")
    irr_weight: float = Field(default=0.30, description="Weight of the normalized IRR score")
    payback_weight: float = Field(default=0.15, description="Weight of the payback score")
    bcr_weight: float = Field(default=0.15, description="Weight of the normalized BCR score")

    @field_validator("npv_weight", "irr_weight", "payback_weight", "bcr_weight", mode="before")
    @classmethod
    def validate_weight(cls, value: Any, info: ValidationInfo) -> float:
        return cls._coerce_float(value, field_name=info.field_name, lower_bound=0.0, upper_bound=1.0)

    @model_validator(mode="after")
    def validate_sum(self) -> ScoringWeights:
        total = self.npv_weight + self.irr_weight + self.payback_weight + self.bcr_weight
        if not math.isclose(total, 1.0, abs_tol=WEIGHT_SUM_TOLERANCE):
            raise ValueError(f"Scoring weights must sum to 1.0, got {total:.6f}")
        return self

    def as_mapping(self) -> dict[str, float]:
        """Return the weights keyed by metric name (npv, irr, payback, bcr)."""
        return {
            "npv": self.npv_weight,
            "irr": self.irr_weight,
            "payback": self.payback_weight,
            "bcr": self.bcr_weight,
        }


class NormalizationConfig(BaseModel):
    """Saturation points used when normalizing metrics to [0, 1]."""

    irr_saturation: float = Field(default=0.5, gt=0.0, description="IRR treated as a full score")
    bcr_saturation: float = Field(default=3.0, gt=1.0, description="BCR treated as a full score")
    min_baseline_spend: float = Field(
        default=1.0, gt=0.0, description="Floor applied to the baseline spend divisor"
    )


class RecommendationThresholds(BaseModel):
    """Score thresholds for the expand/pilot/halt rule and the scalar confidence band."""

    expand_score: float = Field(default=70.0, ge=0.0, le=100.0)
    pilot_score: float = Field(default=40.0, ge=0.0, le=100.0)
    conservative_factor: float = Field(default=0.8, ge=0.0)
    aggressive_factor: float = Field(default=1.2, ge=0.0)

    @model_validator(mode="after")
    def validate_ordering(self) -> RecommendationThresholds:
        if self.pilot_score > self.expand_score:
            raise ValueError(
                f"pilot_score ({self.pilot_score}) must not exceed expand_score ({self.expand_score})"
            )
        return self


class IRRConfig(BaseModel):
    """Newton-Raphson settings for the internal rate of return."""

    initial_guess: float = 0.1
    max_iterations: int = Field(default=100, ge=1)
    tolerance: float = Field(default=1e-6, gt=0.0)
    rate_floor: float = Field(default=-0.99, gt=-1.0)


class SensitivityConfig(BaseModel):
    """One-at-a-time perturbation settings."""

    perturbation: float = Field(default=0.10, gt=0.0, le=1.0, description="Relative step, 0.10 = +10%")


class MonteCarloConfig(BaseModel):
    """Monte Carlo simulation settings."""

    trials: int = Field(default=1000, ge=1)
    variation_low: float = Field(default=0.8, ge=0.0)
    variation_high: float = Field(default=1.2, ge=0.0)
    random_seed: int | None = Field(default=None, description="None draws fresh OS entropy")
    max_workers: int = Field(default=1, ge=1, description="Worker threads; 1 runs trials inline")
    chunk_size: int = Field(default=250, ge=1, description="Trials per submitted work unit")

    @model_validator(mode="after")
    def validate_variation(self) -> MonteCarloConfig:
        if self.variation_low > self.variation_high:
            raise ValueError(
                f"variation_low ({self.variation_low}) must not exceed variation_high ({self.variation_high})"
            )
        return self


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "text"
    file_path: str | None = None
    max_file_size_mb: int = 100
    backup_count: int = 5
    include_stage: bool = True
    include_run_id: bool = True
    include_timestamps: bool = True

    @field_validator("format")
    @classmethod
    def _normalize_format(cls, value: str) -> str:
        lowered = value.lower()
        if lowered in {"pretty", "text", "plain"}:
            return "text"
        if lowered in {"json", "structured"}:
            return "json"
        return value


class EngineConfig(BaseModel):
    """Top-level configuration for the valuation engine."""

    environment: str = "development"
    baseline_spend: float = Field(default=1_000_000.0, description="Spend used to normalize NPV")
    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    recommendation: RecommendationThresholds = Field(default_factory=RecommendationThresholds)
    irr: IRRConfig = Field(default_factory=IRRConfig)
    sensitivity: SensitivityConfig = Field(default_factory=SensitivityConfig)
    monte_carlo: MonteCarloConfig = Field(default_factory=MonteCarloConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


__all__ = [
    "EngineConfig",
    "FloatRangeValidatorMixin",
    "IRRConfig",
    "LoggingConfig",
    "MonteCarloConfig",
    "NormalizationConfig",
    "RecommendationThresholds",
    "ScoringWeights",
    "SensitivityConfig",
]
