"""
Host session for interactive ROI calculation.

Parses raw text input, runs the validate-then-compute cycle and owns the
snapshot of the last valid calculation.
"""

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from automation_roi.config.loader import EXAMPLE_INPUTS
from automation_roi.core.calculator import compute
from automation_roi.core.models import INPUT_FIELDS, PERCENT_FIELD, RoiInputs, RoiOutputs
from automation_roi.core.validation import is_nan, is_number, validate_inputs

logger = logging.getLogger(__name__)

MSG_REQUIRED = "This field is required."
MSG_INVALID_NUMBER = "Enter a valid number."

STATUS_PARSE_ERRORS = "Please complete all required fields with valid numbers."
STATUS_INVALID = "Please correct the highlighted fields."
STATUS_OK = "Results updated. All inputs are valid."

_INFINITY_LITERALS = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


def parse_number(raw: str) -> Optional[float]:
    """Parse trimmed text as a number, returning None when it is not one.

    Accepts decimal and exponent notation plus the literals Infinity and
    -Infinity. "nan", "inf" and digit separators are rejected.
    """
    text = raw.strip()
    if text in _INFINITY_LITERALS:
        return _INFINITY_LITERALS[text]
    if not text or "_" in text or any(c.isalpha() and c not in "eE" for c in text):
        return None
    try:
        return float(text)
    except ValueError:
        return None


@dataclass(frozen=True)
class ParsedInputs:
    """Numbers parsed from raw text, with per-field parse errors."""
    values: Dict[str, float]
    errors: Dict[str, str]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except OverflowError:
        # Integers beyond float range
        return math.inf if value > 0 else -math.inf


def parse_raw_inputs(raw: Mapping[str, Any]) -> ParsedInputs:
    """Parse raw field text into numbers.

    Args:
        raw: Mapping of contract field names to text. Numbers (for example
            from a YAML scenario) are taken as they are, including NaN and
            infinity; other non-string values are converted with str().
            None and blank text count as missing.

    Returns:
        ParsedInputs holding the numbers that parsed and a message for
        every field that did not
    """
    values: Dict[str, float] = {}
    errors: Dict[str, str] = {}
    for name in INPUT_FIELDS:
        value = raw.get(name)
        if is_number(value):
            values[name] = _to_float(value)
            continue
        text = "" if value is None else str(value).strip()
        if not text:
            errors[name] = MSG_REQUIRED
            continue
        number = parse_number(text)
        if number is None:
            errors[name] = MSG_INVALID_NUMBER
            continue
        values[name] = number
    return ParsedInputs(values=values, errors=errors)


def _clamp_number(name: str, number: float) -> float:
    clamped = max(0.0, number)
    if name == PERCENT_FIELD:
        clamped = min(100.0, clamped)
    return clamped


def clamp_input_value(name: str, raw: str) -> str:
    """Clamp raw field text into the allowed range.

    Blank and unparseable text is returned unchanged so that the parser
    can report it. Negative numbers become 0 and the percentage field is
    limited to [0, 100].
    """
    number = parse_number(raw)
    if number is None:
        return raw

    clamped = _clamp_number(name, number)
    if clamped == number:
        return raw
    return f"{clamped:g}"


def clamp_raw_inputs(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Clamp every field of a raw record, leaving unparseable values alone."""
    clamped: Dict[str, Any] = dict(raw)
    for name in INPUT_FIELDS:
        value = raw.get(name)
        if isinstance(value, str):
            clamped[name] = clamp_input_value(name, value)
        elif is_number(value) and not is_nan(value):
            clamped[name] = _clamp_number(name, _to_float(value))
    return clamped


@dataclass(frozen=True)
class Snapshot:
    """Inputs and outputs of the last valid calculation."""
    inputs: RoiInputs
    outputs: RoiOutputs


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of one validate-then-compute cycle."""
    ok: bool
    status: str
    field_errors: Mapping[str, str] = field(default_factory=dict)
    snapshot: Optional[Snapshot] = None


class RoiSession:
    """Stateful host for repeated calculations.

    The session holds a single snapshot: set on every successful update,
    cleared on every failed one. Core functions stay stateless.
    """

    def __init__(self):
        self._snapshot: Optional[Snapshot] = None

    @property
    def snapshot(self) -> Optional[Snapshot]:
        """Last valid calculation, or None."""
        return self._snapshot

    def update(self, raw: Mapping[str, Any], clamp: bool = False) -> UpdateResult:
        """Parse, validate and compute from raw field text.

        Args:
            raw: Mapping of contract field names to text
            clamp: Clamp negatives to 0 and the percentage to [0, 100]
                before parsing, as an input form does while typing

        Returns:
            UpdateResult with either field errors or the new snapshot
        """
        if clamp:
            raw = clamp_raw_inputs(raw)
        parsed = parse_raw_inputs(raw)
        if parsed.has_errors:
            return self._fail(STATUS_PARSE_ERRORS, parsed.errors)

        validation = validate_inputs(parsed.values)
        if not validation.ok:
            messages = {
                name: f"Value {reason}" for name, reason in validation.errors.items()
            }
            return self._fail(STATUS_INVALID, messages)

        inputs = RoiInputs.from_mapping(parsed.values)
        self._snapshot = Snapshot(inputs=inputs, outputs=compute(inputs))
        logger.debug("Snapshot updated")
        return UpdateResult(ok=True, status=STATUS_OK, snapshot=self._snapshot)

    def reset(self) -> UpdateResult:
        """Recalculate from the example scenario."""
        return self.update({name: str(value) for name, value in EXAMPLE_INPUTS.items()})

    def _fail(self, status: str, errors: Dict[str, str]) -> UpdateResult:
        self._snapshot = None
        logger.debug("Snapshot cleared: %s", status)
        return UpdateResult(
            ok=False,
            status=status,
            field_errors=MappingProxyType(dict(errors)),
        )
