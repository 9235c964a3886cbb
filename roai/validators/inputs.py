"""Boundary validation for initiative and risk inputs.

The engine accepts any numbers and clamps where it must. These helpers let
the input-construction layer reject out-of-range values before evaluation
and flag inputs whose year labels disagree with their positions.
"""

from __future__ import annotations

import math
from typing import Any

from loguru import logger

from ..exceptions import InvalidInputError
from ..models.initiative import CashFlowEntry, InitiativeData, RiskData

MIN_RISK_RATING = 1
MAX_RISK_RATING = 5

_SEQUENCE_NAMES = ("costs", "benefits", "cf_costs", "cf_benefits")


def _check_entries(name: str, entries: tuple[CashFlowEntry, ...], errors: list[str], warnings: list[str]) -> None:
    mislabelled = 0
    for position, entry in enumerate(entries):
        if not math.isfinite(entry.amount):
            errors.append(f"{name}[{position}].amount must be finite, got {entry.amount}")
        if entry.year < 0:
            errors.append(f"{name}[{position}].year must be non-negative, got {entry.year}")
        elif entry.year != position:
            mislabelled += 1

    if mislabelled:
        warnings.append(
            f"{mislabelled} {name} entries carry a year label different from their position; "
            "amounts are aligned by position"
        )


def check_inputs(data: InitiativeData, risk: RiskData) -> dict[str, Any]:
    """Check inputs against the documented domains without raising.

    Returns:
        Dictionary with validation results:
        {
            "passed": bool,
            "errors": list[str],
            "warnings": list[str],
        }
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not (0.0 <= data.discount_rate < 1.0):
        errors.append(f"discount_rate must be within [0, 1), got {data.discount_rate}")
    if data.horizon_years < 1:
        errors.append(f"horizon_years must be a positive integer, got {data.horizon_years}")

    for name in _SEQUENCE_NAMES:
        _check_entries(name, getattr(data, name), errors, warnings)

    analysed_years = len(data.benefits)
    for name in ("costs", "cf_costs", "cf_benefits"):
        length = len(getattr(data, name))
        if length > analysed_years:
            warnings.append(
                f"{name} has {length} entries but only {analysed_years} benefit years are analysed"
            )
    if 0 < analysed_years < data.horizon_years:
        warnings.append(
            f"benefits cover {analysed_years} years, shorter than the {data.horizon_years}-year horizon"
        )

    for field_name in ("p_success", "p_adoption"):
        value = getattr(risk, field_name)
        if not (0.0 <= value <= 1.0):
            errors.append(f"risk.{field_name} must be within [0, 1], got {value}")

    for field_name in ("data_risk", "regulatory_risk", "vendor_risk"):
        value = getattr(risk, field_name)
        if not float(value).is_integer() or not (MIN_RISK_RATING <= value <= MAX_RISK_RATING):
            errors.append(
                f"risk.{field_name} must be an integer from {MIN_RISK_RATING} to {MAX_RISK_RATING}, got {value}"
            )

    for warning in warnings:
        logger.warning(warning)

    return {"passed": not errors, "errors": errors, "warnings": warnings}


def validate_inputs(data: InitiativeData, risk: RiskData) -> None:
    """Raise InvalidInputError listing every violation, if any."""
    report = check_inputs(data, risk)
    if not report["passed"]:
        raise InvalidInputError(
            f"Initiative inputs failed validation ({len(report['errors'])} errors)",
            violations=report["errors"],
            component="validator.inputs",
            operation="validate_inputs",
        )


def is_valid_inputs(data: InitiativeData, risk: RiskData) -> bool:
    return check_inputs(data, risk)["passed"]


__all__ = ["check_inputs", "is_valid_inputs", "validate_inputs"]
