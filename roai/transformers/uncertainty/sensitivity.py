"""
One-at-a-time sensitivity analysis for the RoAI score.

Each variable group (AI plan costs, AI plan benefits, discount rate, success
probability) is scaled up by the configured perturbation (10% by default)
while everything else is held fixed. The full pipeline is re-run and the
change in score is expressed as an elasticity:

    elasticity = ((perturbed - base) / base) / perturbation
    impact     = |perturbed - base|

A baseline score of exactly zero yields an elasticity of 0.0 rather than a
division by zero; `impact` still reports the absolute change.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from loguru import logger

from ...config.schemas import EngineConfig
from ...models.initiative import InitiativeData, RiskData
from ...models.results import SensitivityResult
from ..scoring import calculate_roai

DEFAULT_PERTURBATION = 0.10

Perturbation = Callable[[InitiativeData, RiskData, float], tuple[InitiativeData, RiskData]]


@dataclass(frozen=True)
class VariableGroup:
    """A named set of inputs scaled together by one multiplier."""

    name: str
    apply: Perturbation


def _scale_costs(data: InitiativeData, risk: RiskData, multiplier: float):
    return data.with_changes(costs=[c.scaled(multiplier) for c in data.costs]), risk


def _scale_benefits(data: InitiativeData, risk: RiskData, multiplier: float):
    return data.with_changes(benefits=[b.scaled(multiplier) for b in data.benefits]), risk


def _scale_discount_rate(data: InitiativeData, risk: RiskData, multiplier: float):
    return data.with_changes(discount_rate=data.discount_rate * multiplier), risk


def _scale_success_probability(data: InitiativeData, risk: RiskData, multiplier: float):
    p_success = max(0.0, min(1.0, risk.p_success * multiplier))
    return data, risk.with_changes(p_success=p_success)


VARIABLE_GROUPS: tuple[VariableGroup, ...] = (
    VariableGroup("Costs", _scale_costs),
    VariableGroup("Benefits", _scale_benefits),
    VariableGroup("Discount Rate", _scale_discount_rate),
    VariableGroup("Success Probability", _scale_success_probability),
)


def calculate_elasticity(base_score: float, perturbed_score: float, perturbation: float) -> float:
    """Relative score change per relative input change; 0.0 for a zero base."""
    if base_score == 0:
        return 0.0
    return ((perturbed_score - base_score) / base_score) / perturbation


def calculate_sensitivity(
    data: InitiativeData,
    risk: RiskData,
    baseline_spend: float | None = None,
    config: EngineConfig | None = None,
    perturbation: float | None = None,
    groups: tuple[VariableGroup, ...] = VARIABLE_GROUPS,
) -> list[SensitivityResult]:
    """Rank variable groups by the elasticity of the RoAI score.

    Args:
        data: Initiative cash flows
        risk: Risk inputs
        baseline_spend: Spend used to normalize NPV
        config: Optional engine configuration
        perturbation: Relative step; defaults to the configured value or 0.10
        groups: Variable groups to perturb

    Returns:
        SensitivityResult list sorted by |elasticity|, largest first
    """
    if perturbation is None:
        perturbation = config.sensitivity.perturbation if config else DEFAULT_PERTURBATION
    multiplier = 1.0 + perturbation

    baseline = calculate_roai(data, risk, baseline_spend, config)
    base_score = baseline.roai_score
    if base_score == 0:
        logger.debug("Baseline RoAI score is zero; elasticities reported as 0.0")

    results = []
    for group in groups:
        perturbed_data, perturbed_risk = group.apply(data, risk, multiplier)
        perturbed = calculate_roai(perturbed_data, perturbed_risk, baseline_spend, config)
        results.append(
            SensitivityResult(
                variable=group.name,
                elasticity=calculate_elasticity(base_score, perturbed.roai_score, perturbation),
                impact=abs(perturbed.roai_score - base_score),
                perturbed_score=perturbed.roai_score,
            )
        )

    results.sort(key=lambda r: abs(r.elasticity), reverse=True)

    logger.info(
        f"Sensitivity ranking (+{perturbation:.0%}): "
        + ", ".join(f"{r.variable}={r.elasticity:.3f}" for r in results)
    )
    return results


__all__ = [
    "DEFAULT_PERTURBATION",
    "VARIABLE_GROUPS",
    "VariableGroup",
    "calculate_elasticity",
    "calculate_sensitivity",
]
