"""Penalty, bonus and net profit for a single delivery."""

from __future__ import annotations

from dataclasses import dataclass

from ...models.domain import Order, Route
from .costs import fuel_cost

LATE_PENALTY = 50
HIGH_VALUE_THRESHOLD = 1000
HIGH_VALUE_BONUS_RATE = 0.10


@dataclass(slots=True)
class ProfitBreakdown:
    penalty: float
    bonus: float
    fuel_cost: float
    net_profit: float


def late_penalty(is_on_time: bool) -> float:
    return 0 if is_on_time else LATE_PENALTY


def high_value_bonus(value: float, is_on_time: bool) -> float:
    # Only strictly-above-threshold orders delivered on time earn the bonus.
    if value > HIGH_VALUE_THRESHOLD and is_on_time:
        return value * HIGH_VALUE_BONUS_RATE
    return 0


def calculate_profit(order: Order, route: Route, is_on_time: bool) -> ProfitBreakdown:
    penalty = late_penalty(is_on_time)
    bonus = high_value_bonus(order.value_rs, is_on_time)
    cost = fuel_cost(route)
    return ProfitBreakdown(
        penalty=penalty,
        bonus=bonus,
        fuel_cost=cost,
        net_profit=order.value_rs + bonus - penalty - cost,
    )
