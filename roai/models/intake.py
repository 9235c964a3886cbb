"""Pydantic intake records for initiatives submitted by the guided-entry layer.

These validate what a person typed in (labelled line items, profile fields,
risk sliders) and convert it into the positional engine inputs.
"""

from __future__ import annotations

import re
from collections import defaultdict
from enum import Enum
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import ErrorCode, InvalidInputError
from .initiative import CashFlowEntry, InitiativeData, RiskData

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class CounterfactualType(str, Enum):
    """What the organization would do without the AI initiative."""

    DO_NOTHING = "do-nothing"
    MANUAL_IMPROVEMENT = "manual-improvement"
    NON_AI_SOFTWARE = "non-ai-software"


class InitiativeProfile(BaseModel):
    """Descriptive and discounting parameters of an initiative."""

    name: str = Field(..., min_length=1, description="Initiative name")
    owner_email: str = Field(..., description="Accountable owner")
    summary: str = Field(..., min_length=10)
    strategic_objective: str = Field(..., min_length=10)
    primary_kpi: str = Field(..., min_length=1)
    currency: str = Field(default="USD")
    region: str = Field(default="US")
    horizon_years: int = Field(default=3, ge=1, le=5)
    discount_rate: float = Field(default=0.10, ge=0.0, le=1.0)
    counterfactual_type: CounterfactualType

    @field_validator("owner_email")
    @classmethod
    def validate_owner_email(cls, v: str) -> str:
        if not _EMAIL_PATTERN.match(v):
            raise ValueError("Valid email is required")
        return v


class LineItem(BaseModel):
    """One labelled cost or benefit amount for a given year."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    year: int = Field(..., ge=0, le=10)
    amount: float = Field(..., ge=0, description="Non-negative amount in the initiative currency")
    is_counterfactual: bool = False


class RiskInput(BaseModel):
    """Risk sliders: probabilities in [0, 1] and 1-5 ratings."""

    p_success: float = Field(..., ge=0.0, le=1.0)
    p_adoption: float = Field(..., ge=0.0, le=1.0)
    data_risk: int = Field(..., ge=1, le=5)
    regulatory_risk: int = Field(..., ge=1, le=5)
    vendor_risk: int = Field(..., ge=1, le=5)

    def to_risk_data(self) -> RiskData:
        return RiskData(**self.model_dump())


class InitiativeSubmission(BaseModel):
    """A complete initiative as captured by the intake form."""

    profile: InitiativeProfile
    costs: list[LineItem] = Field(default_factory=list)
    benefits: list[LineItem] = Field(default_factory=list)
    risk: RiskInput
    counterfactual_description: str | None = Field(default=None, min_length=10)

    @classmethod
    def from_mapping(cls, payload: dict[str, Any]) -> InitiativeSubmission:
        """Validate a raw mapping, raising InvalidInputError on failure."""
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            violations = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            ]
            raise InvalidInputError(
                f"Initiative submission failed validation ({len(violations)} errors)",
                violations=violations,
                component="models.intake",
                operation="from_mapping",
                status_code=ErrorCode.SCHEMA_MISMATCH,
                cause=e,
            ) from e

    def _select(self, items: list[LineItem], counterfactual: bool) -> list[LineItem]:
        return [item for item in items if item.is_counterfactual is counterfactual]

    def _collapse_by_year(self, items: list[LineItem], name: str) -> tuple[CashFlowEntry, ...]:
        horizon = self.profile.horizon_years
        totals: dict[int, float] = defaultdict(float)
        for item in items:
            if item.year >= horizon:
                logger.warning(
                    f"Dropping {name} item '{item.label}' in year {item.year}: "
                    f"outside the {horizon}-year horizon"
                )
                continue
            totals[item.year] += item.amount
        return tuple(CashFlowEntry(year=y, amount=totals.get(y, 0.0)) for y in range(horizon))

    def to_engine_inputs(self, aggregate_by_year: bool = True) -> tuple[InitiativeData, RiskData]:
        """Convert the submission into engine inputs.

        With ``aggregate_by_year`` (the default), line items are summed per
        year into exactly ``horizon_years`` entries so that position i holds
        year i. Without it, items are passed through in submission order and
        the engine's positional alignment applies to them as-is.
        """
        groups = {
            "costs": self._select(self.costs, False),
            "benefits": self._select(self.benefits, False),
            "cf_costs": self._select(self.costs, True),
            "cf_benefits": self._select(self.benefits, True),
        }

        if aggregate_by_year:
            sequences = {name: self._collapse_by_year(items, name) for name, items in groups.items()}
        else:
            sequences = {
                name: tuple(CashFlowEntry(year=i.year, amount=i.amount) for i in items)
                for name, items in groups.items()
            }

        data = InitiativeData(
            horizon_years=self.profile.horizon_years,
            discount_rate=self.profile.discount_rate,
            **sequences,
        )
        return data, self.risk.to_risk_data()


__all__ = [
    "CounterfactualType",
    "InitiativeProfile",
    "InitiativeSubmission",
    "LineItem",
    "RiskInput",
]
