"""Tests for configuration schemas."""

import pytest
from pydantic import ValidationError

pytestmark = pytest.mark.fast

from roai.config.schemas import (
    EngineConfig,
    LoggingConfig,
    MonteCarloConfig,
    NormalizationConfig,
    RecommendationThresholds,
    ScoringWeights,
)


class TestScoringWeights:
    """Tests for ScoringWeights."""

    def test_defaults(self):
        """Test default weights and their mapping view."""
        weights = ScoringWeights()

        assert weights.as_mapping() == {"npv": 0.40, "irr": 0.30, "payback": 0.15, "bcr": 0.15}

    def test_weights_must_sum_to_one(self):
        """Test weight sets not summing to 1.0 are rejected."""
        with pytest.raises(ValidationError, match="sum to 1.0"):
            ScoringWeights(npv_weight=0.5, irr_weight=0.5, payback_weight=0.5, bcr_weight=0.0)

    def test_weight_out_of_range(self):
        """Test a negative weight is rejected."""
        with pytest.raises(ValidationError, match="npv_weight must be >= 0.0"):
            ScoringWeights(npv_weight=-0.1, irr_weight=0.6, payback_weight=0.25, bcr_weight=0.25)

    def test_string_weights_are_coerced(self):
        """Test numeric strings coming from YAML or env are accepted."""
        weights = ScoringWeights(npv_weight="0.25", irr_weight="0.25", payback_weight="0.25", bcr_weight="0.25")

        assert weights.npv_weight == 0.25

    def test_frozen(self):
        """Test weights are immutable."""
        weights = ScoringWeights()

        with pytest.raises(ValidationError):
            weights.npv_weight = 0.5


class TestThresholdSchemas:
    """Tests for normalization, recommendation and simulation settings."""

    def test_pilot_above_expand_rejected(self):
        """Test the pilot threshold cannot exceed the expand threshold."""
        with pytest.raises(ValidationError, match="pilot_score"):
            RecommendationThresholds(expand_score=30, pilot_score=40)

    def test_bcr_saturation_must_exceed_one(self):
        """Test BCR saturation of 1.0 would divide by zero."""
        with pytest.raises(ValidationError):
            NormalizationConfig(bcr_saturation=1.0)

    def test_variation_ordering(self):
        """Test variation_low may not exceed variation_high."""
        with pytest.raises(ValidationError, match="variation_low"):
            MonteCarloConfig(variation_low=1.3, variation_high=1.2)

    def test_trials_positive(self):
        with pytest.raises(ValidationError):
            MonteCarloConfig(trials=0)

    def test_runs_inline_by_default(self):
        """Test trials run on the calling thread unless workers are configured."""
        assert MonteCarloConfig().max_workers == 1

        with pytest.raises(ValidationError):
            MonteCarloConfig(max_workers=0)


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    @pytest.mark.parametrize("value,expected", [("pretty", "text"), ("TEXT", "text"), ("structured", "json")])
    def test_format_normalized(self, value, expected):
        """Test format aliases are normalized."""
        assert LoggingConfig(format=value).format == expected


class TestEngineConfig:
    """Tests for EngineConfig."""

    def test_defaults(self):
        """Test the defaults reproduce the standard engine constants."""
        config = EngineConfig()

        assert config.baseline_spend == 1_000_000
        assert config.normalization.irr_saturation == 0.5
        assert config.recommendation.expand_score == 70
        assert config.irr.rate_floor == -0.99
        assert config.sensitivity.perturbation == 0.10
        assert config.monte_carlo.trials == 1000
        assert config.monte_carlo.random_seed is None

    def test_nested_dicts(self):
        """Test nested sections can be given as plain dictionaries."""
        config = EngineConfig(monte_carlo={"trials": 50, "random_seed": 3})

        assert config.monte_carlo.trials == 50
        assert config.monte_carlo.random_seed == 3
