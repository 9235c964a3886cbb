"""Result entities produced by the valuation engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class Recommendation(str, Enum):
    """Categorical investment recommendation."""

    EXPAND = "expand"
    PILOT = "pilot"
    HALT = "halt"


@dataclass(frozen=True)
class ConfidenceBand:
    """Deterministic scalar spread around a score.

    This is not a statistical interval; see `MonteCarloResult` for the
    simulated distribution.
    """

    conservative: float
    base: float
    aggressive: float


@dataclass(frozen=True)
class ROAIResults:
    """Outcome of a single evaluation.

    `payback_period` equals the number of analysed years when the initiative
    never recovers its outlay; check `payback_recovered` to tell that sentinel
    apart from a payback landing exactly on the horizon.
    """

    npv: float
    irr: float
    payback_period: float
    bcr: float
    roai_score: float
    recommendation: Recommendation
    confidence_band: ConfidenceBand
    risk_multiplier: float = 1.0
    payback_recovered: bool = True

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["recommendation"] = self.recommendation.value
        return data


@dataclass(frozen=True)
class SensitivityResult:
    """Score response to a +perturbation step in one variable group."""

    variable: str
    elasticity: float
    impact: float
    perturbed_score: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MonteCarloResult:
    """Empirical distribution summary of one metric across trials."""

    p10: float
    p50: float
    p90: float
    mean: float
    std_dev: float

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class MonteCarloSummary:
    """Distribution summaries for NPV and the RoAI score."""

    npv: MonteCarloResult
    roai: MonteCarloResult
    trials: int
    random_seed: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "npv": self.npv.to_dict(),
            "roai": self.roai.to_dict(),
            "trials": self.trials,
            "random_seed": self.random_seed,
        }


@dataclass(frozen=True)
class DecisionSummary:
    """Human-readable explanation of a recommendation."""

    recommendation: Recommendation
    label: str
    rationale: str
    next_steps: tuple[str, ...]


__all__ = [
    "ConfidenceBand",
    "DecisionSummary",
    "MonteCarloResult",
    "MonteCarloSummary",
    "ROAIResults",
    "Recommendation",
    "SensitivityResult",
]
