"""
ROI computation.

Maps an input record to the fixed set of single-year ROI metrics.

Inputs are sanitized before use, so compute() never fails, even on
malformed data. Callers run validate_inputs() first and must not present
results computed from invalid inputs as meaningful.
"""

import logging
import math
from typing import Any, Union

from .models import PERCENT_FIELD, PartialInputs, RoiInputs, RoiOutputs, INPUT_FIELDS
from .validation import is_nan, is_number

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def _clamp(name: str, value: Any) -> float:
    if not is_number(value) or is_nan(value):
        return 0.0
    try:
        number = float(value)
    except OverflowError:
        # Integers beyond float range
        number = math.inf if value > 0 else -math.inf
    clamped = max(0.0, number)
    if name == PERCENT_FIELD:
        clamped = min(100.0, clamped)
    return clamped


def sanitize_inputs(inputs: Union[RoiInputs, PartialInputs]) -> RoiInputs:
    """Clamp every field to a safe value.

    Missing, non-numeric and NaN values become 0, negatives are floored
    at 0 and errorReductionPct is capped at 100. Never raises.
    """
    if isinstance(inputs, RoiInputs):
        inputs = inputs.to_dict()
    return RoiInputs.from_mapping(
        {name: _clamp(name, inputs.get(name)) for name in INPUT_FIELDS}
    )


def compute(inputs: Union[RoiInputs, PartialInputs]) -> RoiOutputs:
    """Compute ROI metrics for one scenario.

    Args:
        inputs: Validated RoiInputs, or a mapping keyed by contract field
            names. Either form is sanitized before use.

    Returns:
        RoiOutputs. roi is +inf when the annual cost is zero and
        payback_months is +inf when the net monthly benefit is not positive.
    """
    i = sanitize_inputs(inputs)

    labor_savings_monthly = i.units_per_month * i.hours_saved_per_unit * i.wage_eur_per_hour
    error_savings_monthly = (
        i.baseline_errors_per_month * (i.error_reduction_pct / 100) * i.cost_per_error_eur
    )
    gross_benefit_monthly = labor_savings_monthly + error_savings_monthly
    net_benefit_monthly = gross_benefit_monthly - i.monthly_recurring_cost_eur
    annual_gross_benefit = MONTHS_PER_YEAR * gross_benefit_monthly
    annual_total_cost = i.one_time_cost_eur + MONTHS_PER_YEAR * i.monthly_recurring_cost_eur
    annual_net_benefit = annual_gross_benefit - annual_total_cost

    # Cost terms are non-negative after sanitation, so only zero needs handling
    if annual_total_cost > 0:
        roi = annual_net_benefit / annual_total_cost
    else:
        roi = math.inf

    if net_benefit_monthly > 0:
        payback_months = i.one_time_cost_eur / net_benefit_monthly
    else:
        payback_months = math.inf

    outputs = RoiOutputs(
        labor_savings_monthly=labor_savings_monthly,
        error_savings_monthly=error_savings_monthly,
        gross_benefit_monthly=gross_benefit_monthly,
        net_benefit_monthly=net_benefit_monthly,
        annual_gross_benefit=annual_gross_benefit,
        annual_total_cost=annual_total_cost,
        annual_net_benefit=annual_net_benefit,
        roi=roi,
        payback_months=payback_months,
        annualized_benefit_eur=annual_net_benefit,
    )
    logger.debug("Computed ROI %.4f, payback %.2f months", outputs.roi, outputs.payback_months)
    return outputs
