"""
Cost calculator state and recalculation.

Holds the current prices, usage and budget as one immutable state value.
Every update replaces the state and derives a fresh estimate from it;
nothing is recomputed incrementally.

Update flow:
1. Raw input is parsed and clamped to the field minimum (see fields, inputs)
2. A new state is built by copy-on-write replacement
3. The estimate is derived from the new state in full
4. Listeners are notified with the new estimate
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Mapping, Optional, Union

from .budget import DEFAULT_BUDGET, months_covered
from .fields import BUDGET_FIELD, PRICE_FIELDS, USAGE_SECTIONS
from .inputs import parse_number
from .prices import DEFAULT_PRICE_TABLE, PriceKey, PriceTable, resolve_price_key
from .pricing import CostBreakdown, calculate_breakdown
from .usage import Category, UsageProfile, resolve_category

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculatorState:
    """Everything the user can edit on the form."""
    prices: PriceTable = DEFAULT_PRICE_TABLE
    usage: UsageProfile = field(default_factory=UsageProfile)
    budget: float = DEFAULT_BUDGET


@dataclass(frozen=True)
class Estimate:
    """Outputs derived from a CalculatorState."""
    breakdown: CostBreakdown
    months_covered: float

    @property
    def total(self) -> float:
        return self.breakdown.total


def derive_estimate(state: CalculatorState) -> Estimate:
    """Derive the breakdown and budget coverage from a state.

    Pure: the same state always yields the same estimate.
    """
    breakdown = calculate_breakdown(state.prices, state.usage)
    return Estimate(
        breakdown=breakdown,
        months_covered=months_covered(state.budget, breakdown.total),
    )


Listener = Callable[[Estimate], None]


class CostCalculator:
    """Form-facing calculator that recalculates on every change.

    There is no recalculate call: each setter derives the estimate
    immediately and passes it to subscribed listeners.
    """

    def __init__(self, state: Optional[CalculatorState] = None):
        """Initialize the calculator.

        Args:
            state: Starting state (defaults to hardcoded prices, usage and budget)
        """
        self._state = state or CalculatorState()
        self._estimate = derive_estimate(self._state)
        self._listeners: List[Listener] = []

    @property
    def state(self) -> CalculatorState:
        return self._state

    @property
    def estimate(self) -> Estimate:
        return self._estimate

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with each new estimate.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_price(self, key: Union[PriceKey, str], raw: Any) -> Estimate:
        """Override one unit price from raw form input.

        Raises:
            ValueError: If the key is not a known price key
        """
        key = resolve_price_key(key)
        value = parse_number(raw, minimum=PRICE_FIELDS[key].minimum)
        return self._apply(replace(self._state, prices=self._state.prices.with_price(key, value)))

    def set_prices(self, overrides: Mapping[Union[PriceKey, str], Any]) -> Estimate:
        """Override several unit prices in one state transition."""
        parsed = {}
        for key, raw in overrides.items():
            key = resolve_price_key(key)
            parsed[key] = parse_number(raw, minimum=PRICE_FIELDS[key].minimum)
        return self._apply(replace(self._state, prices=self._state.prices.with_overrides(parsed)))

    def set_usage(self, category: Union[Category, str], name: str, raw: Any) -> Estimate:
        """Set one usage quantity from raw form input.

        Raises:
            ValueError: If the category or field is unknown
        """
        category = resolve_category(category)
        spec = USAGE_SECTIONS[category].get_field(name)
        value = parse_number(raw, minimum=spec.minimum)
        usage = self._state.usage.with_value(category, name, value)
        return self._apply(replace(self._state, usage=usage))

    def set_budget(self, raw: Any) -> Estimate:
        """Set the budget from raw form input."""
        return self._apply(replace(self._state, budget=parse_number(raw, minimum=BUDGET_FIELD.minimum)))

    def reset(self) -> Estimate:
        """Restore hardcoded defaults."""
        return self._apply(CalculatorState())

    def _apply(self, state: CalculatorState) -> Estimate:
        self._state = state
        self._estimate = derive_estimate(state)
        log.debug(
            "Recalculated: total=%.6f months_covered=%s",
            self._estimate.total,
            self._estimate.months_covered,
        )
        for listener in list(self._listeners):
            listener(self._estimate)
        return self._estimate
