"""Evaluate command: score an initiative submission file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
import yaml

from ...exceptions import ErrorCode, InvalidInputError, ROAIError, wrap_exception
from ...models.intake import InitiativeSubmission
from ...transformers.scoring import calculate_roai, explain_recommendation
from ...transformers.uncertainty import calculate_sensitivity, run_monte_carlo
from ...utils.logging_config import log_stage
from ...validators.inputs import validate_inputs
from ..context import CommandContext
from ..display.errors import handle_error
from ..display.results import (
    create_decision_panel,
    create_monte_carlo_table,
    create_results_table,
    create_sensitivity_table,
)


def load_submission(path: Path) -> InitiativeSubmission:
    """Read a YAML or JSON initiative file into an InitiativeSubmission."""
    try:
        with path.open(encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                payload = json.load(f)
            else:
                payload = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidInputError(
            f"Could not parse initiative file {path}: {e}",
            component="cli.evaluate",
            operation="load_submission",
            status_code=ErrorCode.SCHEMA_MISMATCH,
            cause=e,
        ) from e
    except OSError as e:
        raise wrap_exception(
            e,
            InvalidInputError,
            f"Could not read initiative file {path}",
            component="cli.evaluate",
            operation="load_submission",
        ) from e

    if not isinstance(payload, dict):
        raise InvalidInputError(
            f"Initiative file {path} must contain a mapping at the top level",
            component="cli.evaluate",
            operation="load_submission",
            status_code=ErrorCode.SCHEMA_MISMATCH,
        )
    return InitiativeSubmission.from_mapping(payload)


def evaluate(
    ctx: typer.Context,
    path: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Initiative file (YAML or JSON)"
    ),
    baseline_spend: float | None = typer.Option(
        None, "--baseline-spend", "-b", help="Spend used to normalize NPV"
    ),
    sensitivity: bool = typer.Option(
        False, "--sensitivity", "-s", help="Rank input variables by score elasticity"
    ),
    monte_carlo: bool = typer.Option(
        False, "--monte-carlo", "-m", help="Simulate NPV and score distributions"
    ),
    trials: int | None = typer.Option(None, "--trials", "-n", help="Monte Carlo trial count"),
    seed: int | None = typer.Option(None, "--seed", help="Monte Carlo random seed"),
    positional: bool = typer.Option(
        False,
        "--positional",
        help="Pass line items through in submission order instead of summing them per year",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print raw results as JSON"),
) -> None:
    """Evaluate an AI initiative and recommend expand, pilot or halt."""
    context: CommandContext = ctx.obj

    try:
        with log_stage("evaluate", context.run_id):
            submission = load_submission(path)
            data, risk = submission.to_engine_inputs(aggregate_by_year=not positional)
            validate_inputs(data, risk)

            config = context.config
            context.logger.debug(f"Evaluating '{submission.profile.name}' from {path}")
            results = calculate_roai(data, risk, baseline_spend, config)
            decision = explain_recommendation(results)

            sensitivities = (
                calculate_sensitivity(data, risk, baseline_spend, config) if sensitivity else None
            )
            simulation = (
                run_monte_carlo(data, risk, baseline_spend, trials=trials, rng=seed, config=config)
                if monte_carlo
                else None
            )

            if as_json:
                payload: dict[str, Any] = {
                    "initiative": submission.profile.name,
                    "results": results.to_dict(),
                    "decision": {
                        "label": decision.label,
                        "rationale": decision.rationale,
                        "next_steps": list(decision.next_steps),
                    },
                }
                if sensitivities is not None:
                    payload["sensitivity"] = [s.to_dict() for s in sensitivities]
                if simulation is not None:
                    payload["monte_carlo"] = simulation.to_dict()
                context.console.print_json(data=payload)
                return

            context.console.print(
                create_results_table(results, title=f"RoAI Evaluation: {submission.profile.name}")
            )
            if sensitivities is not None:
                context.console.print(
                    create_sensitivity_table(sensitivities, config.sensitivity.perturbation)
                )
            if simulation is not None:
                context.console.print(create_monte_carlo_table(simulation))
            context.console.print(create_decision_panel(decision))

    except ROAIError as e:
        handle_error(e, context)


def register_command(main_app: typer.Typer) -> None:
    """Register evaluate command with main app."""
    main_app.command(name="evaluate")(evaluate)
