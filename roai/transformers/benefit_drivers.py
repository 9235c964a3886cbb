"""Helpers that turn operational assumptions into yearly benefit amounts.

These produce inputs for `InitiativeData`; the engine never calls them.
"""

from __future__ import annotations

RAMP_UP_ADOPTION = (0.3, 0.6, 0.85)


def generate_adoption_curve(years: int, final_adoption: float = 0.85) -> list[float]:
    """Return per-year adoption rates ramping 30% -> 60% -> 85%, then flat.

    Years after the ramp use ``final_adoption``.
    """
    return [
        RAMP_UP_ADOPTION[year] if year < len(RAMP_UP_ADOPTION) else final_adoption
        for year in range(max(years, 0))
    ]


def calculate_productivity_benefits(
    hours_saved: float,
    loaded_labor_rate: float,
    adoption_rate: float,
    quality_factor: float = 0.7,
) -> float:
    """Value of hours saved, discounted by adoption and output quality."""
    return hours_saved * loaded_labor_rate * adoption_rate * quality_factor


def calculate_revenue_uplift(
    conversion_lift: float, baseline_revenue: float, gross_margin: float = 0.8
) -> float:
    """Margin earned on additional revenue from a conversion lift."""
    return conversion_lift * baseline_revenue * gross_margin


def calculate_quality_benefits(
    defect_rate_reduction: float, cost_of_poor_quality: float, volume: float
) -> float:
    return defect_rate_reduction * cost_of_poor_quality * volume


def calculate_risk_reduction(
    baseline_loss: float, risk_reduction_percent: float, probability: float
) -> float:
    """Expected loss avoided."""
    return baseline_loss * risk_reduction_percent * probability


__all__ = [
    "calculate_productivity_benefits",
    "calculate_quality_benefits",
    "calculate_revenue_uplift",
    "calculate_risk_reduction",
    "generate_adoption_curve",
]
