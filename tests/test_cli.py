"""
Tests for the CLI interface.
"""
import json
import os

import pytest
from typer.testing import CliRunner

from automation_roi.cli.main import app, EXIT_CODE_PASS, EXIT_CODE_FAIL
from automation_roi.config.loader import EXAMPLE_INPUTS, dump_scenario

runner = CliRunner()


@pytest.fixture
def scenario_file(tmp_path):
    """Write the example scenario with an English locale."""
    path = tmp_path / "scenario.yaml"
    path.write_text(dump_scenario(EXAMPLE_INPUTS, locale="en-US"), encoding="utf-8")
    return str(path)


class TestCalculate:
    """Test the calculate command."""

    def test_calculate_example_defaults(self):
        """Without options the example scenario is calculated."""
        result = runner.invoke(app, ["calculate"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Automation ROI Result" in result.output
        assert "Annual net benefit" in result.output
        assert "940,63" in result.output
        assert "0.7 months" in result.output
        assert "All inputs are valid" in result.output

    def test_calculate_with_scenario_locale(self, scenario_file):
        """Scenario locale controls number formatting."""
        result = runner.invoke(app, ["calculate", "--scenario", scenario_file])

        assert result.exit_code == EXIT_CODE_PASS
        assert "€120,400" in result.output
        assert "940.63%" in result.output

    def test_locale_option_overrides_scenario(self, scenario_file):
        result = runner.invoke(
            app, ["calculate", "--scenario", scenario_file, "--locale", "de-DE"]
        )
        assert result.exit_code == EXIT_CODE_PASS
        assert "940,63" in result.output

    def test_field_override(self):
        """Single fields can be overridden."""
        result = runner.invoke(app, ["calculate", "--one-time-cost-eur", "0",
                                     "--monthly-recurring-cost-eur", "0", "--json"])

        assert result.exit_code == EXIT_CODE_PASS
        payload = json.loads(result.output)
        assert payload["inputs"]["oneTimeCostEur"] == 0
        assert payload["outputs"]["paybackMonths"] == 0
        assert payload["outputs"]["roi"] == float("inf")

    def test_json_output(self):
        result = runner.invoke(app, ["calculate", "--json"])

        assert result.exit_code == EXIT_CODE_PASS
        payload = json.loads(result.output)
        assert payload["outputs"]["laborSavingsMonthly"] == 10500
        assert payload["outputs"]["annualTotalCost"] == 12800

    def test_validation_failure_exits_with_error(self):
        result = runner.invoke(app, [
            "calculate",
            "--wage-eur-per-hour=-5",
            "--error-reduction-pct", "150",
        ])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Please correct the highlighted fields." in result.output
        assert "wageEurPerHour: Value cannot be negative." in result.output
        assert "errorReductionPct: Value must be between 0 and 100." in result.output

    def test_parse_failure_exits_with_error(self):
        result = runner.invoke(app, ["calculate", "--units-per-month", "lots"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Please complete all required fields with valid numbers." in result.output
        assert "unitsPerMonth: Enter a valid number." in result.output

    def test_missing_scenario_file(self):
        result = runner.invoke(app, ["calculate", "--scenario", "nonexistent.yaml"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Scenario file not found" in result.output

    def test_unsupported_locale(self):
        result = runner.invoke(app, ["calculate", "--locale", "fr-FR"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Unsupported locale: fr-FR" in result.output

    def test_csv_export(self, tmp_path):
        target = tmp_path / "exports"
        result = runner.invoke(app, ["calculate", "--csv", str(target)])

        assert result.exit_code == EXIT_CODE_PASS
        files = os.listdir(target)
        assert len(files) == 1
        assert files[0].startswith("automation-roi-")
        content = (target / files[0]).read_text(encoding="utf-8")
        assert content.startswith("Type,Metric,Value\n")
        assert "Output,annualNetBenefit,120400" in content

    def test_no_csv_on_failure(self, tmp_path):
        target = tmp_path / "exports"
        result = runner.invoke(app, ["calculate", "--cost-per-error-eur", "",
                                     "--csv", str(target)])

        assert result.exit_code == EXIT_CODE_FAIL
        assert not target.exists()


class TestValidate:
    """Test the validate command."""

    def test_valid_example(self):
        result = runner.invoke(app, ["validate"])
        assert result.exit_code == EXIT_CODE_PASS
        assert "All inputs are valid" in result.output

    def test_reports_reasons(self):
        result = runner.invoke(app, [
            "validate",
            "--error-reduction-pct", "150",
            "--units-per-month", "x",
        ])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "errorReductionPct: must be between 0 and 100." in result.output
        assert "unitsPerMonth: Enter a valid number." in result.output

    def test_scenario_missing_field(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("inputs:\n  wageEurPerHour: 35\n", encoding="utf-8")

        result = runner.invoke(app, ["validate", "--scenario", str(path)])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "unitsPerMonth: This field is required." in result.output


class TestExample:
    """Test the example command."""

    def test_prints_yaml(self):
        result = runner.invoke(app, ["example"])
        assert result.exit_code == EXIT_CODE_PASS
        assert "wageEurPerHour: 35" in result.output
        assert "locale: de-DE" in result.output

    def test_writes_file(self, tmp_path):
        path = tmp_path / "example.yaml"
        result = runner.invoke(app, ["example", "--output", str(path)])

        assert result.exit_code == EXIT_CODE_PASS
        assert "wageEurPerHour: 35" in path.read_text(encoding="utf-8")


def test_no_command_prints_hint():
    result = runner.invoke(app, [])
    assert result.exit_code == EXIT_CODE_PASS
    assert "Use --help" in result.output


class TestExtremeInputs:
    """Test inputs that drive outputs toward the float limit."""

    def test_tiny_cost_gives_huge_roi(self):
        result = runner.invoke(app, [
            "calculate",
            "--one-time-cost-eur", "5e-302",
            "--monthly-recurring-cost-eur", "0",
        ])

        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert result.exit_code == EXIT_CODE_PASS
        assert "All inputs are valid" in result.output


class TestClamp:
    """Test the --clamp option."""

    def test_calculate_clamps_negative_and_percentage(self):
        result = runner.invoke(app, [
            "calculate",
            "--wage-eur-per-hour=-5",
            "--error-reduction-pct", "150",
            "--clamp",
            "--json",
        ])

        assert result.exit_code == EXIT_CODE_PASS
        payload = json.loads(result.output)
        assert payload["inputs"]["wageEurPerHour"] == 0
        assert payload["inputs"]["errorReductionPct"] == 100
        assert payload["outputs"]["laborSavingsMonthly"] == 0

    def test_calculate_rejects_without_clamp(self):
        result = runner.invoke(app, ["calculate", "--wage-eur-per-hour=-5"])
        assert result.exit_code == EXIT_CODE_FAIL
        assert "wageEurPerHour: Value cannot be negative." in result.output

    def test_validate_with_clamp(self):
        result = runner.invoke(app, ["validate", "--error-reduction-pct", "150", "--clamp"])
        assert result.exit_code == EXIT_CODE_PASS
        assert "All inputs are valid" in result.output

    def test_clamp_does_not_fix_text(self):
        result = runner.invoke(app, ["calculate", "--units-per-month", "lots", "--clamp"])
        assert result.exit_code == EXIT_CODE_FAIL
        assert "unitsPerMonth: Enter a valid number." in result.output
