"""Central exception hierarchy for the RoAI valuation engine.

The numeric pipeline itself never raises on malformed numeric input; it uses
clamping and documented default values instead. The exceptions below are
raised at the edges: configuration loading, boundary validation of caller
input, and the simulation driver.

Exception Hierarchy:
    ROAIError (base)
    ├── ConfigurationError
    ├── InvalidInputError
    └── SimulationError
        └── SimulationCancelledError

Usage:
    from roai.exceptions import InvalidInputError

    try:
        validate_inputs(data, risk)
    except InvalidInputError as e:
        logger.error(f"Rejected initiative: {e.message}", extra=e.to_dict())
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Error codes for programmatic handling.

    Categories:
        1xxx - Configuration errors
        2xxx - Input validation errors
        5xxx - Engine errors
    """

    # Configuration errors (1xxx)
    CONFIG_LOAD_FAILED = 1001
    CONFIG_VALIDATION_FAILED = 1002

    # Input validation errors (2xxx)
    VALIDATION_FAILED = 2001
    SCHEMA_MISMATCH = 2003

    # Engine errors (5xxx)
    SIMULATION_FAILED = 5002
    SIMULATION_CANCELLED = 5003


class ROAIError(Exception):
    """Base exception for all RoAI engine errors.

    Attributes:
        message: Human-readable error description
        component: Engine component (e.g., "uncertainty.monte_carlo")
        operation: Operation being performed (e.g., "run_monte_carlo")
        details: Additional context as dictionary
        status_code: Numeric error code from ErrorCode enum
        cause: Original exception if wrapping another error
    """

    def __init__(
        self,
        message: str,
        component: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
        status_code: ErrorCode | None = None,
        cause: Exception | None = None,
    ):
        self.message = message
        self.component = component or self.__class__.__module__
        self.operation = operation
        self.details = details or {}
        self.status_code = status_code
        self.cause = cause

        parts = [message]
        if component:
            parts.append(f"[component={component}]")
        if operation:
            parts.append(f"[operation={operation}]")
        if status_code:
            parts.append(f"[code={status_code}]")

        super().__init__(" ".join(parts))

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "component": self.component,
            "operation": self.operation,
            "details": self.details,
            "status_code": self.status_code.value if self.status_code else None,
            "cause": str(self.cause) if self.cause else None,
        }


class ConfigurationError(ROAIError):
    """Configuration could not be loaded or failed validation.

    Example:
        raise ConfigurationError(
            "Scoring weights must sum to 1.0",
            operation="get_config",
            details={"environment": "development"}
        )
    """

    def __init__(self, message: str, **kwargs: Any):
        super().__init__(
            message,
            status_code=kwargs.pop("status_code", ErrorCode.CONFIG_LOAD_FAILED),
            **kwargs,
        )


class InvalidInputError(ROAIError):
    """Caller-supplied initiative or risk data failed boundary validation.

    Raised by the intake layer and by ``validate_inputs``; the engine
    functions themselves stay permissive.

    Example:
        raise InvalidInputError(
            "Initiative inputs failed validation",
            component="validator.inputs",
            details={"violations": ["risk.p_success must be within [0, 1], got 1.4"]}
        )
    """

    def __init__(self, message: str, violations: list[str] | None = None, **kwargs: Any):
        details = kwargs.pop("details", {})
        if violations is not None:
            details["violations"] = list(violations)

        super().__init__(
            message,
            details=details,
            status_code=kwargs.pop("status_code", ErrorCode.VALIDATION_FAILED),
            **kwargs,
        )

    @property
    def violations(self) -> list[str]:
        return list(self.details.get("violations", []))


class SimulationError(ROAIError):
    """Monte Carlo simulation failed."""

    def __init__(self, message: str, **kwargs: Any):
        component = kwargs.pop("component", "uncertainty.monte_carlo")
        super().__init__(
            message,
            component=component,
            status_code=kwargs.pop("status_code", ErrorCode.SIMULATION_FAILED),
            **kwargs,
        )


class SimulationCancelledError(SimulationError):
    """Simulation was cancelled before all trials completed.

    No partial summary is produced; ``details`` records how many trials had
    finished when the cancellation was observed.
    """

    def __init__(self, message: str, completed_trials: int | None = None, **kwargs: Any):
        details = kwargs.pop("details", {})
        if completed_trials is not None:
            details["completed_trials"] = completed_trials

        super().__init__(
            message,
            details=details,
            status_code=ErrorCode.SIMULATION_CANCELLED,
            **kwargs,
        )


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def wrap_exception(
    original: Exception,
    error_class: type[ROAIError],
    message: str | None = None,
    **kwargs: Any,
) -> ROAIError:
    """Wrap a generic exception in a structured RoAI exception.

    Example:
        try:
            submission = InitiativeSubmission.model_validate(payload)
        except pydantic.ValidationError as e:
            raise wrap_exception(e, InvalidInputError, operation="parse_submission")
    """
    return error_class(message or str(original), cause=original, **kwargs)


def get_error_code(exc: Exception) -> int | None:
    """Get error code from exception if available."""
    if isinstance(exc, ROAIError) and exc.status_code:
        return exc.status_code.value
    return None
