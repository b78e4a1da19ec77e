"""
Scenario configuration loading.

Reads optional YAML scenario files that override the default budget,
prices and usage figures.
"""

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from firebase_cost_estimator.core.calculator import CalculatorState, CostCalculator
from firebase_cost_estimator.core.prices import PriceKey, resolve_price_key
from firebase_cost_estimator.core.usage import Category, UsageProfile, resolve_category, usage_field_names


@dataclass(frozen=True)
class Scenario:
    """Validated overrides from a scenario file.

    Anything not listed keeps its hardcoded default.
    """
    budget: Optional[float] = None
    prices: Dict[PriceKey, float] = field(default_factory=dict)
    usage: Dict[Category, Dict[str, float]] = field(default_factory=dict)

    def to_state(self) -> CalculatorState:
        """Build a calculator state from defaults plus these overrides."""
        calculator = CostCalculator()
        self.apply_to(calculator)
        return calculator.state

    def apply_to(self, calculator: CostCalculator) -> None:
        """Push these overrides through a calculator's update path."""
        if self.prices:
            calculator.set_prices(self.prices)
        for category, values in self.usage.items():
            for name, value in values.items():
                calculator.set_usage(category, name, value)
        if self.budget is not None:
            calculator.set_budget(self.budget)


def load_scenario(path: str) -> Scenario:
    """Load and validate a scenario from a YAML file.

    Validation is strict: a misspelled key is an error rather than a
    silently ignored override.

    Args:
        path: Path to YAML scenario file

    Returns:
        Validated Scenario

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If the scenario is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Scenario file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in scenario file {path}: {e}")

    if not raw_config:
        raise ValueError("Scenario file is empty")

    return parse_scenario(raw_config)


def parse_scenario(raw_config: Any) -> Scenario:
    """Validate an already-parsed scenario mapping.

    Raises:
        ValueError: If the scenario is invalid
    """
    if not isinstance(raw_config, dict):
        raise ValueError("Scenario must be a dictionary")

    allowed_top_keys = {'budget', 'prices', 'usage'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown scenario keys: {unknown_keys}")

    budget = None
    if 'budget' in raw_config:
        budget = _parse_amount(raw_config['budget'], "budget")

    prices_data = raw_config.get('prices') or {}
    if not isinstance(prices_data, dict):
        raise ValueError("'prices' must be a dictionary")

    prices = {}
    for key, value in prices_data.items():
        try:
            price_key = resolve_price_key(str(key))
        except ValueError:
            raise ValueError(f"Unknown price key at 'prices.{key}'")
        prices[price_key] = _parse_amount(value, f"prices.{key}")

    usage_data = raw_config.get('usage') or {}
    if not isinstance(usage_data, dict):
        raise ValueError("'usage' must be a dictionary")

    usage = {}
    defaults = UsageProfile()
    for category_name, values in usage_data.items():
        try:
            category = resolve_category(str(category_name))
        except ValueError:
            raise ValueError(f"Unknown category at 'usage.{category_name}'")
        if not isinstance(values, dict):
            raise ValueError(f"Usage for '{category_name}' must be a dictionary")
        allowed_fields = set(usage_field_names(defaults.record(category)))
        unknown_fields = set(values.keys()) - allowed_fields
        if unknown_fields:
            raise ValueError(f"Unknown fields in usage.{category_name}: {unknown_fields}")
        usage[category] = {
            name: _parse_amount(value, f"usage.{category_name}.{name}")
            for name, value in values.items()
        }

    return Scenario(budget=budget, prices=prices, usage=usage)


def _parse_amount(value: Any, path: str) -> float:
    """Validate a non-negative number from a scenario file.

    Raises:
        ValueError: If value is not a number or is negative
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{path}' must be a number")
    if not math.isfinite(value):
        raise ValueError(f"'{path}' must be a finite number")
    if value < 0:
        raise ValueError(f"'{path}' must be >= 0")
    return float(value)
