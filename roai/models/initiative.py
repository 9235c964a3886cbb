"""Input entities for the valuation engine.

All four cash-flow sequences on `InitiativeData` are read positionally: the
i-th entry of each sequence is treated as year i, regardless of its `year`
label. Callers that hold labelled line items should collapse them per year
first (see `roai.models.intake`).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class CashFlowEntry:
    """One dated cost or benefit amount."""

    year: int
    amount: float

    def scaled(self, factor: float) -> CashFlowEntry:
        return replace(self, amount=self.amount * factor)


def _as_entries(values: Iterable[CashFlowEntry]) -> tuple[CashFlowEntry, ...]:
    return tuple(values)


@dataclass(frozen=True)
class InitiativeData:
    """AI plan and counterfactual cash flows plus discounting parameters.

    Attributes:
        costs: AI plan costs, one entry per year position
        benefits: AI plan benefits; its length sets the analysis length
        cf_costs: Counterfactual (non-AI) costs
        cf_benefits: Counterfactual (non-AI) benefits
        horizon_years: Planning horizon in years
        discount_rate: Annual discount rate, expected in [0, 1)
    """

    costs: tuple[CashFlowEntry, ...] = field(default_factory=tuple)
    benefits: tuple[CashFlowEntry, ...] = field(default_factory=tuple)
    cf_costs: tuple[CashFlowEntry, ...] = field(default_factory=tuple)
    cf_benefits: tuple[CashFlowEntry, ...] = field(default_factory=tuple)
    horizon_years: int = 3
    discount_rate: float = 0.10

    def __post_init__(self) -> None:
        # Accept lists from callers but store tuples so instances stay immutable
        for name in ("costs", "benefits", "cf_costs", "cf_benefits"):
            object.__setattr__(self, name, _as_entries(getattr(self, name)))

    @classmethod
    def from_amounts(
        cls,
        costs: Sequence[float],
        benefits: Sequence[float],
        cf_costs: Sequence[float] = (),
        cf_benefits: Sequence[float] = (),
        horizon_years: int | None = None,
        discount_rate: float = 0.10,
    ) -> InitiativeData:
        """Build an initiative from plain per-year amounts (index = year)."""

        def entries(amounts: Sequence[float]) -> tuple[CashFlowEntry, ...]:
            return tuple(CashFlowEntry(year=i, amount=float(a)) for i, a in enumerate(amounts))

        return cls(
            costs=entries(costs),
            benefits=entries(benefits),
            cf_costs=entries(cf_costs),
            cf_benefits=entries(cf_benefits),
            horizon_years=horizon_years if horizon_years is not None else max(len(benefits), 1),
            discount_rate=discount_rate,
        )

    @property
    def cost_amounts(self) -> list[float]:
        return [entry.amount for entry in self.costs]

    @property
    def benefit_amounts(self) -> list[float]:
        return [entry.amount for entry in self.benefits]

    @property
    def cf_cost_amounts(self) -> list[float]:
        return [entry.amount for entry in self.cf_costs]

    @property
    def cf_benefit_amounts(self) -> list[float]:
        return [entry.amount for entry in self.cf_benefits]

    def with_changes(self, **changes) -> InitiativeData:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class RiskData:
    """Qualitative risk inputs.

    Probabilities are expected in [0, 1] and ratings in 1..5 (1 = low risk).
    The engine does not enforce either range.
    """

    p_success: float
    p_adoption: float
    data_risk: int = 1
    regulatory_risk: int = 1
    vendor_risk: int = 1

    def with_changes(self, **changes) -> RiskData:
        return replace(self, **changes)


__all__ = ["CashFlowEntry", "InitiativeData", "RiskData"]
