"""Incremental cash-flow construction (AI plan minus counterfactual)."""

from __future__ import annotations

from collections.abc import Sequence

from ..models.initiative import CashFlowEntry, InitiativeData


def _amount_at(entries: Sequence[CashFlowEntry], index: int) -> float:
    return entries[index].amount if index < len(entries) else 0.0


def _net_flows(benefits: Sequence[CashFlowEntry], costs: Sequence[CashFlowEntry]) -> list[float]:
    return [benefit.amount - _amount_at(costs, i) for i, benefit in enumerate(benefits)]


def build_incremental_cash_flows(data: InitiativeData) -> list[float]:
    """Combine the four cash-flow sequences into one incremental net sequence.

    Sequences are aligned by position, not by their `year` labels. The result
    has one value per AI benefit entry; missing costs or counterfactual
    positions count as zero and counterfactual positions past the end of the
    AI benefits are ignored.

    Example:
        >>> data = InitiativeData.from_amounts(
        ...     costs=[100000, 50000, 50000], benefits=[0, 80000, 120000],
        ...     cf_costs=[20000, 20000, 20000], cf_benefits=[0, 30000, 40000])
        >>> build_incremental_cash_flows(data)
        [-80000.0, 20000.0, 50000.0]
    """
    ai_net = _net_flows(data.benefits, data.costs)
    cf_net = _net_flows(data.cf_benefits, data.cf_costs)

    return [ai - (cf_net[t] if t < len(cf_net) else 0.0) for t, ai in enumerate(ai_net)]


__all__ = ["build_incremental_cash_flows"]
