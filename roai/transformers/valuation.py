"""
Capital-budgeting primitives over yearly cash-flow sequences.

This module provides net present value, internal rate of return, payback
period and benefit-cost ratio. Every function is stateless, takes plain
sequences of yearly amounts (index 0 = today, undiscounted) and returns a
float. Degenerate inputs resolve to documented default values instead of
raising:

- empty sequences give an NPV of 0 and an IRR of 0
- an IRR that does not converge returns the last Newton-Raphson estimate
- a payback that never happens returns the sequence length
- a zero incremental cost present value gives a BCR of 0
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from loguru import logger

DEFAULT_IRR_GUESS = 0.1
DEFAULT_IRR_MAX_ITERATIONS = 100
DEFAULT_IRR_TOLERANCE = 1e-6
IRR_RATE_FLOOR = -0.99


def calculate_npv(cash_flows: Sequence[float], discount_rate: float) -> float:
    """Calculate net present value of yearly cash flows.

    Args:
        cash_flows: Amounts by year offset; year 0 is not discounted
        discount_rate: Annual discount rate (e.g., 0.10 for 10%). Must keep
            ``1 + discount_rate`` positive; this is not checked.

    Returns:
        Net present value (0.0 for an empty sequence)
    """
    return math.fsum(cf / (1.0 + discount_rate) ** year for year, cf in enumerate(cash_flows))


def _npv_and_derivative(cash_flows: Sequence[float], rate: float) -> tuple[float, float]:
    value = 0.0
    derivative = 0.0
    for year, cf in enumerate(cash_flows):
        discount_factor = (1.0 + rate) ** year
        value += cf / discount_factor
        derivative -= year * cf / (discount_factor * (1.0 + rate))
    return value, derivative


def calculate_irr(
    cash_flows: Sequence[float],
    max_iterations: int = DEFAULT_IRR_MAX_ITERATIONS,
    tolerance: float = DEFAULT_IRR_TOLERANCE,
    initial_guess: float = DEFAULT_IRR_GUESS,
    rate_floor: float = IRR_RATE_FLOOR,
) -> float:
    """Calculate the internal rate of return with Newton-Raphson.

    Starts from ``initial_guess`` and iterates ``r <- r - f(r) / f'(r)`` with
    ``r`` clamped to ``rate_floor`` after each step. The loop stops early when
    ``|f(r)| < tolerance`` (converged) or ``|f'(r)| < tolerance`` (flat
    derivative). There is no "undefined" outcome: when the iteration budget
    runs out, the last estimate is returned and should be read as approximate.

    Args:
        cash_flows: Amounts by year offset
        max_iterations: Newton-Raphson iteration budget
        tolerance: Convergence threshold on both f(r) and f'(r)
        initial_guess: Starting rate
        rate_floor: Lowest rate an update may produce

    Returns:
        IRR as a fraction (0.28 = 28%); 0.0 when every cash flow is zero
    """
    if not cash_flows or all(cf == 0 for cf in cash_flows):
        return 0.0

    rate = initial_guess
    for _ in range(max_iterations):
        try:
            value, derivative = _npv_and_derivative(cash_flows, rate)
        except (OverflowError, ZeroDivisionError):
            logger.debug(f"IRR iteration left float range at rate={rate}; returning current estimate")
            return rate

        if abs(value) < tolerance:
            return rate

        if abs(derivative) < tolerance:
            logger.debug(f"IRR derivative vanished at rate={rate}; returning current estimate")
            return rate

        rate = rate - value / derivative
        if rate < rate_floor:
            rate = rate_floor

    logger.debug(f"IRR did not converge in {max_iterations} iterations; last estimate {rate}")
    return rate


def calculate_payback_period(cash_flows: Sequence[float]) -> float:
    """Calculate payback period in fractional years.

    Finds the first year where the cumulative cash flow turns non-negative and
    interpolates linearly inside that year. Returns 0.0 when year 0 alone is
    already non-negative, and ``len(cash_flows)`` when the outlay is never
    recovered (use `has_payback` to distinguish that sentinel).
    """
    cumulative = 0.0
    for year, cf in enumerate(cash_flows):
        previous = cumulative
        cumulative += cf
        if cumulative >= 0:
            if year == 0:
                return 0.0
            return year - 1 + (-previous / cf)

    return float(len(cash_flows))


def has_payback(cash_flows: Sequence[float]) -> bool:
    """Return True when cumulative cash flow reaches zero within the sequence."""
    cumulative = 0.0
    for cf in cash_flows:
        cumulative += cf
        if cumulative >= 0:
            return True
    return False


def calculate_bcr(
    ai_benefits: Sequence[float],
    ai_costs: Sequence[float],
    cf_benefits: Sequence[float],
    cf_costs: Sequence[float],
    discount_rate: float,
) -> float:
    """Calculate the incremental benefit-cost ratio.

    Each sequence is discounted on its own; the ratio divides the incremental
    benefit present value by the absolute incremental cost present value.

    Returns:
        BCR, or 0.0 when the incremental cost present value is exactly zero
    """
    incremental_benefits_pv = calculate_npv(ai_benefits, discount_rate) - calculate_npv(
        cf_benefits, discount_rate
    )
    incremental_costs_pv = calculate_npv(ai_costs, discount_rate) - calculate_npv(
        cf_costs, discount_rate
    )

    if incremental_costs_pv == 0:
        return 0.0

    return incremental_benefits_pv / abs(incremental_costs_pv)


__all__ = [
    "calculate_bcr",
    "calculate_irr",
    "calculate_npv",
    "calculate_payback_period",
    "has_payback",
]
