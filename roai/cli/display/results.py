"""Rich tables and panels for evaluation results."""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ...models.results import (
    DecisionSummary,
    MonteCarloSummary,
    Recommendation,
    ROAIResults,
    SensitivityResult,
)

RECOMMENDATION_STYLES = {
    Recommendation.EXPAND: "bold green",
    Recommendation.PILOT: "bold yellow",
    Recommendation.HALT: "bold red",
}


def format_currency(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.0f}"


def format_payback(results: ROAIResults) -> str:
    if not results.payback_recovered:
        return f"not recovered (> {results.payback_period:g} yrs)"
    return f"{results.payback_period:.2f} yrs"


def create_results_table(results: ROAIResults, title: str = "RoAI Evaluation") -> Table:
    """Create a table of the headline financial metrics and score."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("NPV", format_currency(results.npv))
    table.add_row("IRR", f"{results.irr:.1%}")
    table.add_row("Payback", format_payback(results))
    table.add_row("BCR", f"{results.bcr:.2f}")
    table.add_row("Risk multiplier", f"{results.risk_multiplier:.3f}")
    table.add_row("RoAI score", f"{results.roai_score:.1f}")

    band = results.confidence_band
    table.add_row(
        "Confidence band",
        f"{band.conservative:.1f} / {band.base:.1f} / {band.aggressive:.1f}",
    )

    style = RECOMMENDATION_STYLES.get(results.recommendation, "bold")
    table.add_row("Recommendation", Text(results.recommendation.value.upper(), style=style))
    return table


def create_sensitivity_table(sensitivities: list[SensitivityResult], perturbation: float) -> Table:
    """Create a table of variable groups ranked by elasticity."""
    table = Table(
        title=f"Sensitivity (+{perturbation:.0%} per variable)",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Rank", justify="right", style="dim")
    table.add_column("Variable", style="cyan")
    table.add_column("Elasticity", justify="right")
    table.add_column("Score change", justify="right")

    for rank, item in enumerate(sensitivities, 1):
        elasticity_style = "green" if item.elasticity > 0 else "red" if item.elasticity < 0 else "dim"
        table.add_row(
            str(rank),
            item.variable,
            Text(f"{item.elasticity:+.3f}", style=elasticity_style),
            f"{item.impact:.2f}",
        )
    return table


def create_monte_carlo_table(summary: MonteCarloSummary) -> Table:
    """Create a table of simulated NPV and score distributions."""
    table = Table(
        title=f"Monte Carlo ({summary.trials:,} trials)",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Metric", style="cyan")
    table.add_column("P10", justify="right")
    table.add_column("P50", justify="right")
    table.add_column("P90", justify="right")
    table.add_column("Mean", justify="right")
    table.add_column("Std Dev", justify="right")

    npv = summary.npv
    table.add_row(
        "NPV",
        format_currency(npv.p10),
        format_currency(npv.p50),
        format_currency(npv.p90),
        format_currency(npv.mean),
        format_currency(npv.std_dev),
    )
    roai = summary.roai
    table.add_row(
        "RoAI score",
        f"{roai.p10:.1f}",
        f"{roai.p50:.1f}",
        f"{roai.p90:.1f}",
        f"{roai.mean:.1f}",
        f"{roai.std_dev:.2f}",
    )

    if summary.random_seed is not None:
        table.caption = f"seed={summary.random_seed}"
    return table


def create_decision_panel(decision: DecisionSummary) -> Panel:
    """Create a panel explaining the recommendation and next steps."""
    style = RECOMMENDATION_STYLES.get(decision.recommendation, "bold")

    content = Text()
    content.append(f"{decision.label}\n\n", style=style)
    content.append(decision.rationale)
    content.append("\n\nNext steps:", style="bold")
    for i, step in enumerate(decision.next_steps, 1):
        content.append(f"\n  {i}. {step}")

    return Panel(content, title="Decision", border_style=style.replace("bold ", ""))
