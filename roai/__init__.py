"""Return-on-AI (RoAI) valuation engine.

Scores AI initiatives against a counterfactual on NPV, IRR, payback and
benefit-cost ratio, dampens the result by delivery risk, and recommends
whether to expand, pilot or halt.
"""

from .models import InitiativeData, RiskData, ROAIResults, Recommendation
from .transformers import calculate_roai, explain_recommendation
from .transformers.uncertainty import calculate_sensitivity, run_monte_carlo

__version__ = "0.1.0"

__all__ = [
    "InitiativeData",
    "ROAIResults",
    "Recommendation",
    "RiskData",
    "__version__",
    "calculate_roai",
    "calculate_sensitivity",
    "explain_recommendation",
    "run_monte_carlo",
]
