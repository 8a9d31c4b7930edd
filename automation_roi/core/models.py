"""
Data models for ROI inputs and outputs.

Defines the field vocabulary shared with callers and the value types
passed between validation, computation and the host layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

# Contract names, in display and export order
INPUT_FIELDS: Tuple[str, ...] = (
    "wageEurPerHour",
    "hoursSavedPerUnit",
    "unitsPerMonth",
    "baselineErrorsPerMonth",
    "errorReductionPct",
    "costPerErrorEur",
    "oneTimeCostEur",
    "monthlyRecurringCostEur",
)

OUTPUT_FIELDS: Tuple[str, ...] = (
    "laborSavingsMonthly",
    "errorSavingsMonthly",
    "grossBenefitMonthly",
    "netBenefitMonthly",
    "annualGrossBenefit",
    "annualTotalCost",
    "annualNetBenefit",
    "roi",
    "paybackMonths",
    "annualizedBenefitEur",
)

PERCENT_FIELD = "errorReductionPct"

# Any-shaped record as supplied by a caller; values may be absent or mistyped
PartialInputs = Mapping[str, Any]

_INPUT_ATTRS: Dict[str, str] = {
    "wageEurPerHour": "wage_eur_per_hour",
    "hoursSavedPerUnit": "hours_saved_per_unit",
    "unitsPerMonth": "units_per_month",
    "baselineErrorsPerMonth": "baseline_errors_per_month",
    "errorReductionPct": "error_reduction_pct",
    "costPerErrorEur": "cost_per_error_eur",
    "oneTimeCostEur": "one_time_cost_eur",
    "monthlyRecurringCostEur": "monthly_recurring_cost_eur",
}

_OUTPUT_ATTRS: Dict[str, str] = {
    "laborSavingsMonthly": "labor_savings_monthly",
    "errorSavingsMonthly": "error_savings_monthly",
    "grossBenefitMonthly": "gross_benefit_monthly",
    "netBenefitMonthly": "net_benefit_monthly",
    "annualGrossBenefit": "annual_gross_benefit",
    "annualTotalCost": "annual_total_cost",
    "annualNetBenefit": "annual_net_benefit",
    "roi": "roi",
    "paybackMonths": "payback_months",
    "annualizedBenefitEur": "annualized_benefit_eur",
}


@dataclass(frozen=True)
class RoiInputs:
    """Complete set of business inputs for one ROI scenario.

    All amounts are in EUR. Instances are expected to hold non-negative
    values with error_reduction_pct in [0, 100]; use the validator before
    building one from user data.
    """
    wage_eur_per_hour: float
    hours_saved_per_unit: float
    units_per_month: float
    baseline_errors_per_month: float
    error_reduction_pct: float  # % of baseline errors avoided
    cost_per_error_eur: float
    one_time_cost_eur: float
    monthly_recurring_cost_eur: float

    @classmethod
    def from_mapping(cls, data: PartialInputs) -> "RoiInputs":
        """Build inputs from a mapping keyed by contract field names.

        Raises:
            KeyError: If a field is missing
        """
        return cls(**{attr: float(data[name]) for name, attr in _INPUT_ATTRS.items()})

    def to_dict(self) -> Dict[str, float]:
        """Return the inputs keyed by contract field names."""
        return {name: getattr(self, attr) for name, attr in _INPUT_ATTRS.items()}


@dataclass(frozen=True)
class RoiOutputs:
    """Derived ROI metrics for a single-year snapshot.

    roi and payback_months may be positive infinity: no annual cost and
    no positive net monthly benefit, respectively.
    """
    labor_savings_monthly: float
    error_savings_monthly: float
    gross_benefit_monthly: float
    net_benefit_monthly: float
    annual_gross_benefit: float
    annual_total_cost: float
    annual_net_benefit: float
    roi: float
    payback_months: float
    annualized_benefit_eur: float

    def to_dict(self) -> Dict[str, float]:
        """Return the outputs keyed by contract field names."""
        return {name: getattr(self, attr) for name, attr in _OUTPUT_ATTRS.items()}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of input validation.

    errors maps each failing field to a single human-readable reason.
    """
    ok: bool
    errors: Dict[str, str] = field(default_factory=dict)
