"""Risk multiplier from success/adoption probabilities and 1-5 risk ratings."""

from __future__ import annotations

from ..models.initiative import RiskData

RATING_STEP = 0.1


def rating_multiplier(rating: float) -> float:
    """Map a 1-5 risk rating linearly onto [1.0, 0.6] (1 = no dampening)."""
    return 1.0 - (rating - 1) * RATING_STEP


def calculate_risk_multiplier(risk: RiskData) -> float:
    """Combine all risk inputs into one multiplicative factor.

    The five factors are treated as independent and simply multiplied. The
    result lies in [0, 1] for in-range inputs; it is not clamped.
    """
    return (
        risk.p_success
        * risk.p_adoption
        * rating_multiplier(risk.data_risk)
        * rating_multiplier(risk.regulatory_risk)
        * rating_multiplier(risk.vendor_risk)
    )


__all__ = ["calculate_risk_multiplier", "rating_multiplier"]
