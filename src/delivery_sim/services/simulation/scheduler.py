"""Greedy first-fit assignment of orders to drivers."""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, Optional, Sequence

from ...errors import RouteNotFound
from ...models.domain import Driver, Order, Route
from .fatigue import FATIGUE_TIME_MULTIPLIER, driver_is_fatigued
from .models import Assignment, ScheduleResult
from .profit import calculate_profit
from .timeutils import time_to_minutes

logger = logging.getLogger(__name__)

GRACE_PERIOD_MIN = 10


def actual_delivery_time(base_time_min: int, fatigued: bool) -> int:
    """Fatigued drivers need 30% more time, rounded up to the whole minute."""
    if fatigued:
        return math.ceil(base_time_min * FATIGUE_TIME_MULTIPLIER)
    return base_time_min


def is_delivery_on_time(actual_time_min: int, base_time_min: int) -> bool:
    return actual_time_min <= base_time_min + GRACE_PERIOD_MIN


def sort_orders_by_deadline(orders: Iterable[Order]) -> list[Order]:
    # sorted() is stable, so equal deadlines keep their backlog order.
    return sorted(orders, key=lambda order: time_to_minutes(order.delivery_time))


def _first_fit(
    drivers: Sequence[Driver],
    driver_hours: Dict[str, float],
    route_hours: float,
    max_hours_per_day: float,
) -> Optional[Driver]:
    for driver in drivers:
        if driver_hours[driver.driver_id] + route_hours <= max_hours_per_day:
            return driver
    return None


def assign_orders(
    drivers: Sequence[Driver],
    orders: Sequence[Order],
    routes: Sequence[Route],
    max_hours_per_day: float,
) -> ScheduleResult:
    """Assign each order, earliest deadline first, to the first driver with capacity.

    The inputs are treated as snapshots: nothing is written back to the driver,
    order or route records. Per-driver hours are tracked only for this call and
    returned in the result.
    """
    pool = tuple(drivers)
    route_lookup = {route.route_id: route for route in routes}
    driver_hours: Dict[str, float] = {driver.driver_id: 0.0 for driver in pool}
    result = ScheduleResult(assignments=[], driver_hours=driver_hours)

    for order in sort_orders_by_deadline(orders):
        route = route_lookup.get(order.route_id)
        if route is None:
            logger.warning(str(RouteNotFound(order.order_id, order.route_id)))
            result.skipped_order_ids.append(order.order_id)
            continue

        route_hours = route.base_time_min / 60
        driver = _first_fit(pool, driver_hours, route_hours, max_hours_per_day)
        if driver is None:
            logger.debug(f"No driver has capacity for order {order.order_id} ({route_hours:.2f}h)")
            result.unassigned_order_ids.append(order.order_id)
            continue

        driver_hours[driver.driver_id] += route_hours

        fatigued = driver_is_fatigued(driver)
        actual_time = actual_delivery_time(route.base_time_min, fatigued)
        on_time = is_delivery_on_time(actual_time, route.base_time_min)
        profit = calculate_profit(order, route, on_time)

        result.assignments.append(
            Assignment(
                order=order,
                driver=driver,
                route=route,
                is_fatigued=fatigued,
                actual_delivery_time=actual_time,
                is_on_time=on_time,
                penalty=profit.penalty,
                bonus=profit.bonus,
                fuel_cost=profit.fuel_cost,
                net_profit=profit.net_profit,
            )
        )

    logger.info(
        f"Created {len(result.assignments)} assignments "
        f"({len(result.unassigned_order_ids)} unassigned, {len(result.skipped_order_ids)} skipped)"
    )
    return result
