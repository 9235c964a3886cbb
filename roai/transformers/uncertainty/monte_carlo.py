"""
Monte Carlo uncertainty estimation for NPV and the RoAI score.

SINGLE RESPONSIBILITY:
- Run N independent trials, each re-evaluating the full pipeline on a
  perturbed copy of the inputs
- Reduce the collected NPV and score values to percentile summaries

Every trial draws one uniform factor in [0.8, 1.2] for each cash-flow
amount across all four sequences, one for the discount rate, and one each
for the success and adoption probabilities (clamped back to [0, 1]).

Each trial gets its own generator spawned from a single root SeedSequence,
so a given seed reproduces identical summaries no matter how trials are
spread across workers.
"""

from __future__ import annotations

import math
import threading
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

import numpy as np
from loguru import logger

from ...config.schemas import EngineConfig
from ...exceptions import InvalidInputError, SimulationCancelledError, SimulationError
from ...models.initiative import InitiativeData, RiskData
from ...models.results import MonteCarloResult, MonteCarloSummary
from ..scoring import calculate_roai

DEFAULT_TRIALS = 1000
DEFAULT_VARIATION_LOW = 0.8
DEFAULT_VARIATION_HIGH = 1.2
PERCENTILES = (0.10, 0.50, 0.90)

RandomSource = np.random.Generator | np.random.SeedSequence | int | None


def _root_seed_sequence(rng: RandomSource) -> np.random.SeedSequence:
    if isinstance(rng, np.random.SeedSequence):
        return rng
    if isinstance(rng, np.random.Generator):
        return np.random.SeedSequence(int(rng.integers(0, 2**63 - 1)))
    return np.random.SeedSequence(rng)


def _clamp_probability(value: float) -> float:
    return max(0.0, min(1.0, value))


def perturb_inputs(
    data: InitiativeData,
    risk: RiskData,
    generator: np.random.Generator,
    low: float = DEFAULT_VARIATION_LOW,
    high: float = DEFAULT_VARIATION_HIGH,
) -> tuple[InitiativeData, RiskData]:
    """Return copies of the inputs with every varied quantity scaled independently."""
    sequences = (data.costs, data.benefits, data.cf_costs, data.cf_benefits)
    sizes = [len(seq) for seq in sequences]
    factors = generator.uniform(low, high, size=sum(sizes) + 3).tolist()

    varied = []
    offset = 0
    for seq, size in zip(sequences, sizes):
        varied.append([entry.scaled(f) for entry, f in zip(seq, factors[offset : offset + size])])
        offset += size

    rate_factor, success_factor, adoption_factor = factors[offset : offset + 3]

    varied_data = data.with_changes(
        costs=varied[0],
        benefits=varied[1],
        cf_costs=varied[2],
        cf_benefits=varied[3],
        discount_rate=data.discount_rate * rate_factor,
    )
    varied_risk = risk.with_changes(
        p_success=_clamp_probability(risk.p_success * success_factor),
        p_adoption=_clamp_probability(risk.p_adoption * adoption_factor),
    )
    return varied_data, varied_risk


def summarize_trials(values: Sequence[float] | np.ndarray) -> MonteCarloResult:
    """Reduce trial values to nearest-rank percentiles, mean and population std dev.

    Percentile p is read from the sorted values at index floor(n * p).
    """
    arr = np.asarray(values, dtype=float)
    n = arr.size
    if n == 0:
        raise SimulationError("Cannot summarize an empty set of trial values", operation="summarize_trials")

    ordered = np.sort(arr)
    p10, p50, p90 = (float(ordered[min(math.floor(n * p), n - 1)]) for p in PERCENTILES)

    return MonteCarloResult(
        p10=p10,
        p50=p50,
        p90=p90,
        mean=float(arr.mean()),
        std_dev=float(arr.std(ddof=0)),
    )


def run_monte_carlo(
    data: InitiativeData,
    risk: RiskData,
    baseline_spend: float | None = None,
    trials: int | None = None,
    rng: RandomSource = None,
    config: EngineConfig | None = None,
    max_workers: int | None = None,
    cancel_event: threading.Event | None = None,
) -> MonteCarloSummary:
    """Simulate NPV and RoAI score distributions.

    Args:
        data: Initiative cash flows
        risk: Risk inputs
        baseline_spend: Spend used to normalize NPV
        trials: Number of trials (default 1000, or the configured value)
        rng: Seed, SeedSequence or Generator. None draws fresh entropy
            (or uses the configured ``monte_carlo.random_seed``).
        config: Optional engine configuration
        max_workers: Worker threads; 1 runs every trial inline. Threads share
            the GIL, so extra workers only overlap the numpy sampling and mostly
            let a cancel request from another thread land between chunks.
        cancel_event: When set, no further trials start and
            SimulationCancelledError is raised instead of a summary

    Returns:
        MonteCarloSummary with NPV and score distributions

    Raises:
        InvalidInputError: If trials < 1
        SimulationCancelledError: If cancel_event was set before completion
    """
    mc = config.monte_carlo if config is not None else None
    if trials is None:
        trials = mc.trials if mc else DEFAULT_TRIALS
    if rng is None and mc is not None:
        rng = mc.random_seed
    if max_workers is None:
        max_workers = mc.max_workers if mc else 1
    low = mc.variation_low if mc else DEFAULT_VARIATION_LOW
    high = mc.variation_high if mc else DEFAULT_VARIATION_HIGH
    chunk_size = mc.chunk_size if mc else 250

    if trials < 1:
        raise InvalidInputError(
            f"Monte Carlo requires at least one trial, got {trials}",
            component="uncertainty.monte_carlo",
            operation="run_monte_carlo",
            details={"trials": trials},
        )

    root = _root_seed_sequence(rng)
    trial_seeds = root.spawn(trials)

    npv_values = np.empty(trials)
    roai_values = np.empty(trials)
    completed = np.zeros(trials, dtype=bool)

    def run_chunk(indices: range) -> None:
        for idx in indices:
            if cancel_event is not None and cancel_event.is_set():
                return
            generator = np.random.default_rng(trial_seeds[idx])
            varied_data, varied_risk = perturb_inputs(data, risk, generator, low, high)
            result = calculate_roai(varied_data, varied_risk, baseline_spend, config)
            npv_values[idx] = result.npv
            roai_values[idx] = result.roai_score
            completed[idx] = True

    chunks = [range(start, min(start + chunk_size, trials)) for start in range(0, trials, chunk_size)]
    started = time.perf_counter()

    if max_workers <= 1 or len(chunks) == 1:
        for chunk in chunks:
            if cancel_event is not None and cancel_event.is_set():
                break
            run_chunk(chunk)
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = []
            for chunk in chunks:
                if cancel_event is not None and cancel_event.is_set():
                    break
                futures.append(executor.submit(run_chunk, chunk))
            for future in as_completed(futures):
                future.result()

    completed_count = int(completed.sum())
    if completed_count < trials:
        raise SimulationCancelledError(
            f"Monte Carlo cancelled after {completed_count} of {trials} trials",
            completed_trials=completed_count,
            operation="run_monte_carlo",
        )

    seed_used = root.entropy
    summary = MonteCarloSummary(
        npv=summarize_trials(npv_values),
        roai=summarize_trials(roai_values),
        trials=trials,
        random_seed=seed_used,
    )

    logger.info(
        f"Monte Carlo completed {trials} trials in {time.perf_counter() - started:.2f}s "
        f"(seed={seed_used}, workers={max_workers}): "
        f"NPV P50={summary.npv.p50:,.0f}, RoAI P50={summary.roai.p50:.1f}"
    )
    return summary


__all__ = [
    "DEFAULT_TRIALS",
    "PERCENTILES",
    "perturb_inputs",
    "run_monte_carlo",
    "summarize_trials",
]
