"""Fuel cost model for routes."""

from __future__ import annotations

from ...models.domain import Route

BASE_FUEL_COST_PER_KM = 5
HIGH_TRAFFIC_SURCHARGE_PER_KM = 2


def fuel_cost(route: Route) -> float:
    base_cost = route.distance_km * BASE_FUEL_COST_PER_KM
    surcharge = route.distance_km * HIGH_TRAFFIC_SURCHARGE_PER_KM if route.traffic_level == "High" else 0
    return base_cost + surcharge
