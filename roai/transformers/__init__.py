"""Valuation transformers: cash-flow building, primitives, risk and scoring."""

from .cash_flows import build_incremental_cash_flows
from .risk import calculate_risk_multiplier
from .scoring import (
    build_confidence_band,
    calculate_roai,
    calculate_roai_score,
    explain_recommendation,
    recommend,
)
from .valuation import (
    calculate_bcr,
    calculate_irr,
    calculate_npv,
    calculate_payback_period,
    has_payback,
)


__all__ = [
    "build_confidence_band",
    "build_incremental_cash_flows",
    "calculate_bcr",
    "calculate_irr",
    "calculate_npv",
    "calculate_payback_period",
    "calculate_risk_multiplier",
    "calculate_roai",
    "calculate_roai_score",
    "explain_recommendation",
    "has_payback",
    "recommend",
]
