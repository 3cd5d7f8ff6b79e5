"""Simulation engine models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from ...models.domain import Driver, Order, Route


@dataclass(slots=True)
class Assignment:
    order: Order
    driver: Driver
    route: Route
    is_fatigued: bool
    actual_delivery_time: int
    is_on_time: bool
    penalty: float
    bonus: float
    fuel_cost: float
    net_profit: float


@dataclass(slots=True)
class ScheduleResult:
    assignments: List[Assignment]
    driver_hours: Dict[str, float]
    unassigned_order_ids: List[str] = field(default_factory=list)
    skipped_order_ids: List[str] = field(default_factory=list)
