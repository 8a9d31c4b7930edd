"""
Core modules for Automation ROI.

This package contains input validation, sanitation, the fixed ROI
formulas and display formatting.
"""

from .calculator import compute, sanitize_inputs
from .models import INPUT_FIELDS, OUTPUT_FIELDS, RoiInputs, RoiOutputs, ValidationResult
from .validation import validate_inputs

__all__ = [
    "INPUT_FIELDS",
    "OUTPUT_FIELDS",
    "RoiInputs",
    "RoiOutputs",
    "ValidationResult",
    "compute",
    "sanitize_inputs",
    "validate_inputs",
]
