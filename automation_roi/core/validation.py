"""
Input validation for ROI scenarios.

Checks type and range of every input field before computation.
"""

import logging
from decimal import Decimal
from numbers import Real
from typing import Any, Dict, Optional

from .models import INPUT_FIELDS, PERCENT_FIELD, PartialInputs, ValidationResult

logger = logging.getLogger(__name__)

REASON_REQUIRED = "is required."
REASON_NOT_A_NUMBER = "must be a number."
REASON_NAN = "cannot be NaN."
REASON_NEGATIVE = "cannot be negative."
REASON_PERCENT_RANGE = "must be between 0 and 100."


def is_number(value: Any) -> bool:
    """Return True for real numbers, excluding booleans."""
    if isinstance(value, bool):
        return False
    return isinstance(value, (Real, Decimal))


def is_nan(value: Any) -> bool:
    """Return True for a NaN of any real number type."""
    if isinstance(value, Decimal):
        return value.is_nan()
    if isinstance(value, Real):
        # NaN is the only value unequal to itself
        return value != value
    return False


def _field_reason(name: str, value: Any) -> Optional[str]:
    # Precedence: missing, not a number, NaN, negative, out of range
    if value is None:
        return REASON_REQUIRED
    if not is_number(value):
        return REASON_NOT_A_NUMBER
    if is_nan(value):
        return REASON_NAN
    if value < 0:
        return REASON_NEGATIVE
    if name == PERCENT_FIELD and value > 100:
        return REASON_PERCENT_RANGE
    return None


def validate_inputs(inputs: PartialInputs) -> ValidationResult:
    """Validate a candidate input record.

    Every field is checked independently and reports at most one reason.
    Failures are returned as data; this function never raises for bad
    values.

    Args:
        inputs: Mapping keyed by contract field names. Keys may be missing
            and values may be of any type.

    Returns:
        ValidationResult with ok set when no field failed
    """
    errors: Dict[str, str] = {}
    for name in INPUT_FIELDS:
        reason = _field_reason(name, inputs.get(name))
        if reason is not None:
            errors[name] = reason

    if errors:
        logger.debug("Validation failed for fields: %s", sorted(errors))
    return ValidationResult(ok=not errors, errors=errors)
