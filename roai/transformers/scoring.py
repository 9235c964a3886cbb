"""
Composite Return-on-AI scoring and the expand/pilot/halt decision.

The composite score blends four normalized valuation metrics into a value
index, scales it by the risk multiplier and bounds the result to [0, 100].
`calculate_roai` runs the whole pipeline: incremental cash flows, valuation
primitives, risk multiplier, score, recommendation and scalar band.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..config.schemas import EngineConfig, NormalizationConfig, RecommendationThresholds, ScoringWeights
from ..models.initiative import InitiativeData, RiskData
from ..models.results import ConfidenceBand, DecisionSummary, Recommendation, ROAIResults
from .cash_flows import build_incremental_cash_flows
from .risk import calculate_risk_multiplier
from .valuation import (
    calculate_bcr,
    calculate_irr,
    calculate_npv,
    calculate_payback_period,
    has_payback,
)

DEFAULT_BASELINE_SPEND = 1_000_000.0

_DEFAULT_CONFIG = EngineConfig()


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def _resolve_weights(weights: ScoringWeights | Mapping[str, float] | None) -> Mapping[str, float]:
    if weights is None:
        return _DEFAULT_CONFIG.weights.as_mapping()
    if isinstance(weights, ScoringWeights):
        return weights.as_mapping()
    return weights


def calculate_roai_score(
    npv: float,
    irr: float,
    payback_period: float,
    bcr: float,
    baseline_spend: float,
    risk_multiplier: float,
    weights: ScoringWeights | Mapping[str, float] | None = None,
    normalization: NormalizationConfig | None = None,
) -> float:
    """Calculate the composite RoAI score (0-100).

    Normalization (each clamped to [0, 1]):
        npv_score     = npv / max(baseline_spend, 1)
        irr_score     = irr / 0.5
        payback_score = 1 / (1 + payback_period)
        bcr_score     = (bcr - 1) / 2

    Args:
        npv: Net present value of incremental cash flows
        irr: Internal rate of return
        payback_period: Payback period in years
        bcr: Benefit-cost ratio
        baseline_spend: Spend used to normalize NPV
        risk_multiplier: Factor in [0, 1] from `calculate_risk_multiplier`
        weights: ScoringWeights or a mapping with keys npv, irr, payback, bcr.
            Plain mappings are not checked to sum to 1.0.
        normalization: Optional saturation overrides

    Returns:
        Score clamped to [0, 100]
    """
    norm = normalization or _DEFAULT_CONFIG.normalization
    w = _resolve_weights(weights)

    npv_score = _clamp(npv / max(baseline_spend, norm.min_baseline_spend), 0.0, 1.0)
    irr_score = _clamp(irr / norm.irr_saturation, 0.0, 1.0)
    payback_score = _clamp(1.0 / (1.0 + payback_period), 0.0, 1.0)
    bcr_score = _clamp((bcr - 1.0) / (norm.bcr_saturation - 1.0), 0.0, 1.0)

    value_index = (
        w["npv"] * npv_score
        + w["irr"] * irr_score
        + w["payback"] * payback_score
        + w["bcr"] * bcr_score
    )

    return _clamp(100.0 * value_index * risk_multiplier, 0.0, 100.0)


def recommend(
    roai_score: float, npv: float, thresholds: RecommendationThresholds | None = None
) -> Recommendation:
    """Map a score and NPV onto expand, pilot or halt."""
    t = thresholds or _DEFAULT_CONFIG.recommendation

    if roai_score >= t.expand_score and npv > 0:
        return Recommendation.EXPAND
    if roai_score >= t.pilot_score or npv > 0:
        return Recommendation.PILOT
    return Recommendation.HALT


def build_confidence_band(
    roai_score: float, thresholds: RecommendationThresholds | None = None
) -> ConfidenceBand:
    """Scale the score by fixed factors; no resampling is involved."""
    t = thresholds or _DEFAULT_CONFIG.recommendation
    return ConfidenceBand(
        conservative=roai_score * t.conservative_factor,
        base=roai_score,
        aggressive=roai_score * t.aggressive_factor,
    )


def calculate_roai(
    data: InitiativeData,
    risk: RiskData,
    baseline_spend: float | None = None,
    config: EngineConfig | None = None,
) -> ROAIResults:
    """Evaluate one initiative end to end.

    Args:
        data: AI plan and counterfactual cash flows
        risk: Risk inputs
        baseline_spend: Spend used to normalize NPV (default 1,000,000, or
            the configured value when ``config`` is given)
        config: Optional engine configuration; defaults reproduce the
            standard weights, thresholds and IRR settings

    Returns:
        ROAIResults for this evaluation
    """
    cfg = config or _DEFAULT_CONFIG
    if baseline_spend is None:
        baseline_spend = cfg.baseline_spend if config is not None else DEFAULT_BASELINE_SPEND

    incremental = build_incremental_cash_flows(data)
    npv = calculate_npv(incremental, data.discount_rate)
    irr = calculate_irr(
        incremental,
        max_iterations=cfg.irr.max_iterations,
        tolerance=cfg.irr.tolerance,
        initial_guess=cfg.irr.initial_guess,
        rate_floor=cfg.irr.rate_floor,
    )
    payback = calculate_payback_period(incremental)

    bcr = calculate_bcr(
        data.benefit_amounts,
        data.cost_amounts,
        data.cf_benefit_amounts,
        data.cf_cost_amounts,
        data.discount_rate,
    )
    risk_multiplier = calculate_risk_multiplier(risk)
    score = calculate_roai_score(
        npv,
        irr,
        payback,
        bcr,
        baseline_spend,
        risk_multiplier,
        weights=cfg.weights,
        normalization=cfg.normalization,
    )

    return ROAIResults(
        npv=npv,
        irr=irr,
        payback_period=payback,
        bcr=bcr,
        roai_score=score,
        recommendation=recommend(score, npv, cfg.recommendation),
        confidence_band=build_confidence_band(score, cfg.recommendation),
        risk_multiplier=risk_multiplier,
        payback_recovered=has_payback(incremental),
    )


_LABELS = {
    Recommendation.EXPAND: "EXPAND",
    Recommendation.PILOT: "PILOT",
    Recommendation.HALT: "HALT/REVISE",
}

_NEXT_STEPS = {
    Recommendation.EXPAND: (
        "Proceed with full implementation",
        "Allocate resources for scaling",
        "Set up monitoring and governance",
        "Plan for organizational change management",
    ),
    Recommendation.PILOT: (
        "Start with limited scope pilot",
        "Define success metrics and timeline",
        "Plan for gradual rollout",
        "Prepare for potential expansion",
    ),
    Recommendation.HALT: (
        "Reconsider project scope and assumptions",
        "Explore alternative approaches",
        "Review cost-benefit analysis",
        "Consider different time horizons",
    ),
}


def explain_recommendation(results: ROAIResults) -> DecisionSummary:
    """Describe why a recommendation was made and what to do next."""
    score = results.roai_score
    npv = results.npv

    if results.recommendation is Recommendation.EXPAND:
        rationale = (
            f"Strong RoAI score ({score:.1f}) and positive NPV ({npv:,.0f}) "
            "indicate high value with acceptable risk."
        )
    elif results.recommendation is Recommendation.PILOT:
        rationale = (
            f"Moderate RoAI score ({score:.1f}) suggests pilot approach "
            "to validate assumptions and reduce risk."
        )
    else:
        rationale = (
            f"Low RoAI score ({score:.1f}) and non-positive NPV ({npv:,.0f}) "
            "indicate high risk or poor returns."
        )

    return DecisionSummary(
        recommendation=results.recommendation,
        label=_LABELS[results.recommendation],
        rationale=rationale,
        next_steps=_NEXT_STEPS[results.recommendation],
    )


__all__ = [
    "DEFAULT_BASELINE_SPEND",
    "build_confidence_band",
    "calculate_roai",
    "calculate_roai_score",
    "explain_recommendation",
    "recommend",
]
