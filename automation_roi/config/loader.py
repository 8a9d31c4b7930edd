"""
Scenario configuration loading.

Reads ROI scenarios from YAML files and provides the example scenario.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

from automation_roi.core.formatting import DEFAULT_LOCALE, LOCALE_TABLE
from automation_roi.core.models import INPUT_FIELDS

logger = logging.getLogger(__name__)

# Example scenario used for defaults and reset
EXAMPLE_INPUTS: Dict[str, float] = {
    "wageEurPerHour": 35,
    "hoursSavedPerUnit": 0.25,
    "unitsPerMonth": 1200,
    "baselineErrorsPerMonth": 60,
    "errorReductionPct": 40,
    "costPerErrorEur": 25,
    "oneTimeCostEur": 8000,
    "monthlyRecurringCostEur": 400,
}


@dataclass(frozen=True)
class ScenarioConfig:
    """ROI scenario read from a configuration file.

    Input values are kept as written; they are checked by the validator,
    not by the loader.
    """
    inputs: Dict[str, Any] = field(default_factory=dict)
    locale: str = DEFAULT_LOCALE


def load_scenario(path: str) -> ScenarioConfig:
    """Load a scenario from a YAML file.

    Structure is validated strictly so that typos in field names surface
    as errors instead of silently falling back to defaults.

    Args:
        path: Path to YAML scenario file

    Returns:
        ScenarioConfig with the raw input values

    Raises:
        FileNotFoundError: If scenario file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If the scenario structure is invalid
    """
    scenario_path = Path(path)
    if not scenario_path.exists():
        raise FileNotFoundError(f"Scenario file not found: {path}")

    with open(scenario_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in scenario file {path}: {e}")

    if not raw_config:
        raise ValueError("Scenario file is empty")
    if not isinstance(raw_config, dict):
        raise ValueError("Scenario file must contain a mapping")

    allowed_top_keys = {'inputs', 'locale'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown scenario keys: {unknown_keys}")

    if 'inputs' not in raw_config:
        raise ValueError("Missing required 'inputs' section")

    inputs_data = raw_config['inputs']
    if not isinstance(inputs_data, dict):
        raise ValueError("'inputs' must be a dictionary")

    unknown_inputs = set(inputs_data.keys()) - set(INPUT_FIELDS)
    if unknown_inputs:
        raise ValueError(f"Unknown input fields: {unknown_inputs}")

    locale = raw_config.get('locale', DEFAULT_LOCALE)
    if not isinstance(locale, str):
        raise ValueError("'locale' must be a string")
    if locale not in LOCALE_TABLE.locales:
        raise ValueError(
            f"'locale' must be one of: {sorted(LOCALE_TABLE.locales)}"
        )

    logger.info("Loaded scenario from %s", scenario_path)
    return ScenarioConfig(inputs=dict(inputs_data), locale=locale)


def dump_scenario(inputs: Dict[str, Any], locale: str = DEFAULT_LOCALE) -> str:
    """Render a scenario as YAML in the format load_scenario() reads."""
    ordered = {name: inputs[name] for name in INPUT_FIELDS if name in inputs}
    return yaml.safe_dump(
        {'inputs': ordered, 'locale': locale},
        sort_keys=False,
        allow_unicode=True,
    )
