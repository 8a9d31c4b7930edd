"""
CLI interface for Automation ROI.

Provides command-line access to validation, calculation and export.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from automation_roi.config.loader import EXAMPLE_INPUTS, dump_scenario, load_scenario
from automation_roi.core.formatting import DEFAULT_LOCALE, LOCALE_TABLE, to_money, to_months, to_pct
from automation_roi.core.models import INPUT_FIELDS
from automation_roi.core.validation import validate_inputs
from automation_roi.host.export import write_csv
from automation_roi.host.session import RoiSession, Snapshot, clamp_raw_inputs, parse_raw_inputs

app = typer.Typer()
console = Console()

EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1

# Display labels, in the order results are shown
RESULT_LABELS = {
    "laborSavingsMonthly": "Labor savings / month",
    "errorSavingsMonthly": "Error savings / month",
    "grossBenefitMonthly": "Gross benefit / month",
    "netBenefitMonthly": "Net benefit / month",
    "annualGrossBenefit": "Annual gross benefit",
    "annualTotalCost": "Annual total cost",
    "annualNetBenefit": "Annual net benefit",
    "roi": "ROI (year 1)",
    "paybackMonths": "Payback period",
    "annualizedBenefitEur": "Annualized benefit",
}

WageOption = typer.Option(None, "--wage-eur-per-hour", help="Wage in EUR per hour")
HoursOption = typer.Option(None, "--hours-saved-per-unit", help="Hours saved per unit of work")
UnitsOption = typer.Option(None, "--units-per-month", help="Units of work per month")
ErrorsOption = typer.Option(None, "--baseline-errors-per-month", help="Errors per month before automation")
ReductionOption = typer.Option(None, "--error-reduction-pct", help="Percent of baseline errors avoided (0-100)")
CostPerErrorOption = typer.Option(None, "--cost-per-error-eur", help="Cost per error in EUR")
OneTimeOption = typer.Option(None, "--one-time-cost-eur", help="One-time implementation cost in EUR")
RecurringOption = typer.Option(None, "--monthly-recurring-cost-eur", help="Recurring cost per month in EUR")
ScenarioOption = typer.Option(None, "--scenario", "-s", help="YAML scenario file")
ClampOption = typer.Option(
    False,
    "--clamp",
    help="Clamp negative values to 0 and the error reduction to 0-100 instead of rejecting them"
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Automation ROI CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        console.print("Automation ROI - Use --help to see available commands")


def _collect_raw_inputs(scenario: Optional[str], overrides: Dict[str, Optional[str]]):
    """Merge scenario (or example) inputs with per-field overrides.

    Returns:
        Tuple of raw inputs and the locale from the scenario
    """
    if scenario:
        config = load_scenario(scenario)
        raw: Dict[str, Any] = dict(config.inputs)
        locale = config.locale
    else:
        raw = dict(EXAMPLE_INPUTS)
        locale = DEFAULT_LOCALE
    for name, value in overrides.items():
        if value is not None:
            raw[name] = value
    return raw, locale


def _overrides(*values: Optional[str]) -> Dict[str, Optional[str]]:
    return dict(zip(INPUT_FIELDS, values))


def _print_field_errors(errors) -> None:
    for name in INPUT_FIELDS:
        if name in errors:
            console.print(f"[red]✗[/] {name}: {escape(errors[name])}")


def _format_output(name: str, value: float, locale: str) -> str:
    if name == "roi":
        return to_pct(value, locale)
    if name == "paybackMonths":
        return to_months(value)
    return to_money(value, locale)


def _display_snapshot(snapshot: Snapshot, locale: str) -> None:
    """Display results in a two-column financial table."""
    table = Table(title="Automation ROI Result")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for name, value in snapshot.outputs.to_dict().items():
        table.add_row(RESULT_LABELS[name], _format_output(name, value, locale))
    console.print(table)


@app.command()
def calculate(
    wage_eur_per_hour: Optional[str] = WageOption,
    hours_saved_per_unit: Optional[str] = HoursOption,
    units_per_month: Optional[str] = UnitsOption,
    baseline_errors_per_month: Optional[str] = ErrorsOption,
    error_reduction_pct: Optional[str] = ReductionOption,
    cost_per_error_eur: Optional[str] = CostPerErrorOption,
    one_time_cost_eur: Optional[str] = OneTimeOption,
    monthly_recurring_cost_eur: Optional[str] = RecurringOption,
    scenario: Optional[str] = ScenarioOption,
    clamp: bool = ClampOption,
    locale: Optional[str] = typer.Option(
        None,
        "--locale",
        "-l",
        help="Display locale (de-DE or en-US), overrides the scenario"
    ),
    csv_dir: Optional[str] = typer.Option(
        None,
        "--csv",
        help="Directory to write a CSV export of the result to"
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print raw numeric results as JSON"
    ),
):
    """
    Calculate ROI metrics for one scenario.

    Values come from the example scenario, or from --scenario when given,
    and individual fields can be overridden with options.
    """
    try:
        raw, scenario_locale = _collect_raw_inputs(scenario, _overrides(
            wage_eur_per_hour,
            hours_saved_per_unit,
            units_per_month,
            baseline_errors_per_month,
            error_reduction_pct,
            cost_per_error_eur,
            one_time_cost_eur,
            monthly_recurring_cost_eur,
        ))
        display_locale = locale or scenario_locale
        LOCALE_TABLE.get_format(display_locale)

        session = RoiSession()
        result = session.update(raw, clamp=clamp)
        if not result.ok:
            console.print(f"[yellow]{result.status}[/]")
            _print_field_errors(result.field_errors)
            sys.exit(EXIT_CODE_FAIL)

        snapshot = session.snapshot
        if as_json:
            payload = {
                "inputs": snapshot.inputs.to_dict(),
                "outputs": snapshot.outputs.to_dict(),
            }
            typer.echo(json.dumps(payload, indent=2))
        else:
            _display_snapshot(snapshot, display_locale)
            console.print(f"[green]✓[/] {result.status}")

        if csv_dir is not None:
            path = write_csv(snapshot, csv_dir)
            console.print(f"[green]✓[/] CSV written to {escape(str(path))}")

        sys.exit(EXIT_CODE_PASS)

    except (FileNotFoundError, ValueError, yaml.YAMLError, OSError) as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(EXIT_CODE_FAIL)


@app.command()
def validate(
    wage_eur_per_hour: Optional[str] = WageOption,
    hours_saved_per_unit: Optional[str] = HoursOption,
    units_per_month: Optional[str] = UnitsOption,
    baseline_errors_per_month: Optional[str] = ErrorsOption,
    error_reduction_pct: Optional[str] = ReductionOption,
    cost_per_error_eur: Optional[str] = CostPerErrorOption,
    one_time_cost_eur: Optional[str] = OneTimeOption,
    monthly_recurring_cost_eur: Optional[str] = RecurringOption,
    scenario: Optional[str] = ScenarioOption,
    clamp: bool = ClampOption,
):
    """Check scenario inputs without computing results."""
    try:
        raw, _ = _collect_raw_inputs(scenario, _overrides(
            wage_eur_per_hour,
            hours_saved_per_unit,
            units_per_month,
            baseline_errors_per_month,
            error_reduction_pct,
            cost_per_error_eur,
            one_time_cost_eur,
            monthly_recurring_cost_eur,
        ))
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(EXIT_CODE_FAIL)

    if clamp:
        raw = clamp_raw_inputs(raw)
    parsed = parse_raw_inputs(raw)
    errors = dict(validate_inputs(parsed.values).errors)
    # Parse errors replace "is required." for fields that did not parse
    errors.update(parsed.errors)
    if errors:
        _print_field_errors(errors)
        sys.exit(EXIT_CODE_FAIL)

    console.print("[green]✓[/] All inputs are valid")
    sys.exit(EXIT_CODE_PASS)


@app.command()
def example(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the example scenario to this file instead of printing it"
    ),
):
    """Print the example scenario as YAML."""
    text = dump_scenario(EXAMPLE_INPUTS)
    if output is None:
        typer.echo(text, nl=False)
        return
    Path(output).write_text(text, encoding="utf-8")
    console.print(f"[green]✓[/] Example scenario written to {escape(output)}")


if __name__ == "__main__":
    app()
