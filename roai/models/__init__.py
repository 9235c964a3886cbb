"""Data models for the RoAI valuation engine."""

from .initiative import CashFlowEntry, InitiativeData, RiskData
from .results import (
    ConfidenceBand,
    DecisionSummary,
    MonteCarloResult,
    MonteCarloSummary,
    Recommendation,
    ROAIResults,
    SensitivityResult,
)


__all__ = [
    "CashFlowEntry",
    "ConfidenceBand",
    "DecisionSummary",
    "InitiativeData",
    "MonteCarloResult",
    "MonteCarloSummary",
    "ROAIResults",
    "Recommendation",
    "RiskData",
    "SensitivityResult",
]
