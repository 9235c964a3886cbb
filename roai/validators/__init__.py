"""Input validation for the RoAI engine boundary."""

from .inputs import check_inputs, is_valid_inputs, validate_inputs


__all__ = ["check_inputs", "is_valid_inputs", "validate_inputs"]
