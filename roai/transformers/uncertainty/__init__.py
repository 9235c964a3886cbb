"""Uncertainty analysis: Monte Carlo resampling and one-at-a-time sensitivity."""

from .monte_carlo import run_monte_carlo, summarize_trials
from .sensitivity import calculate_sensitivity


__all__ = ["calculate_sensitivity", "run_monte_carlo", "summarize_trials"]
