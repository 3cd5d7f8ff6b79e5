"""Conversion of raw store rows (CSV or database) into domain records."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..models.domain import WEEK_LENGTH, Driver, Order, Route
from ..services.simulation.fatigue import is_fatigued
from ..services.simulation.timeutils import is_valid_time

DEFAULT_PAST_WEEK_HOURS = (8,) * WEEK_LENGTH


def _coerce_float(value: Any, field_name: str, default: Optional[float] = None) -> float:
    if value is None or (isinstance(value, str) and value.strip() == ""):
        if default is None:
            raise ValueError(f"Missing value for '{field_name}'")
        return default
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).replace(",", ""))
    except ValueError as exc:
        raise ValueError(f"Unable to parse float for '{field_name}' from value '{value}'") from exc


def _coerce_bool(value: Any) -> Optional[bool]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "y"}


def parse_past_week_hours(value: Any) -> tuple[float, ...]:
    """Parse ``"7|10|7|7|9|9|8"`` (or a list) into seven daily hour figures."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return tuple(float(h) for h in DEFAULT_PAST_WEEK_HOURS)
    if isinstance(value, str):
        parts = [part.strip() for part in value.split("|")]
    else:
        parts = list(value)
    hours = tuple(_coerce_float(part, "past_week_hours") for part in parts)
    if len(hours) != WEEK_LENGTH:
        raise ValueError(f"past_week_hours must have {WEEK_LENGTH} entries, got {len(hours)}: {value!r}")
    return hours


def driver_from_record(row: Mapping[str, Any], fallback_id: str) -> Driver:
    name = str(row.get("name") or "").strip()
    if not name:
        raise ValueError(f"Driver record {fallback_id} is missing a name")
    driver_id = str(row.get("driver_id") or row.get("id") or fallback_id).strip()
    past_week_hours = parse_past_week_hours(row.get("past_week_hours"))
    # any stored is_fatigued column is ignored; the flag always follows the week
    return Driver(
        driver_id=driver_id,
        name=name,
        shift_hours=_coerce_float(row.get("shift_hours"), "shift_hours", default=8.0),
        past_week_hours=past_week_hours,
        current_day_hours=_coerce_float(row.get("current_day_hours"), "current_day_hours", default=0.0),
        is_fatigued=is_fatigued(past_week_hours),
    )


def route_from_record(row: Mapping[str, Any]) -> Route:
    route_id = row.get("route_id")
    if route_id is None or str(route_id).strip() == "":
        raise ValueError("Route record is missing route_id")
    base_time = _coerce_float(row.get("base_time_min"), "base_time_min")
    distance = _coerce_float(row.get("distance_km"), "distance_km")
    if base_time < 0 or distance < 0:
        raise ValueError(f"Route {route_id} has negative distance or base time")
    return Route(
        route_id=route_id,
        distance_km=distance,
        traffic_level=str(row.get("traffic_level") or "Medium").strip().capitalize(),
        base_time_min=int(base_time),
    )


def order_from_record(row: Mapping[str, Any]) -> Order:
    order_id = str(row.get("order_id") or "").strip()
    if not order_id:
        raise ValueError("Order record is missing order_id")
    delivery_time = str(row.get("delivery_time") or "").strip()
    if not is_valid_time(delivery_time):
        raise ValueError(f"Order {order_id} has invalid delivery_time '{delivery_time}'")
    if row.get("route_id") in (None, ""):
        raise ValueError(f"Order {order_id} is missing route_id")
    assigned = row.get("assigned_driver")
    return Order(
        order_id=order_id,
        value_rs=_coerce_float(row.get("value_rs"), "value_rs"),
        route_id=row.get("route_id"),
        delivery_time=delivery_time,
        assigned_driver=str(assigned) if assigned not in (None, "") else None,
        is_delivered=bool(_coerce_bool(row.get("is_delivered"))),
        is_on_time=_coerce_bool(row.get("is_on_time")),
        penalty_applied=_coerce_float(row.get("penalty_applied"), "penalty_applied", default=0.0),
        bonus_applied=_coerce_float(row.get("bonus_applied"), "bonus_applied", default=0.0),
    )
