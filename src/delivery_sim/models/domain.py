"""Domain models for drivers, routes, orders and simulation runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, Optional, Sequence

TrafficLevel = Literal["Low", "Medium", "High"]
TRAFFIC_LEVELS: tuple[str, ...] = ("Low", "Medium", "High")
WEEK_LENGTH = 7


def normalize_route_id(value: Any) -> str:
    """Return the canonical string form of a route identifier.

    ``7``, ``7.0``, ``"7"`` and ``" 7 "`` all map to ``"7"``.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid route identifier: {value!r}")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Invalid route identifier: {value!r}")
        return str(int(value))
    text = str(value).strip()
    if not text:
        raise ValueError("Route identifier must not be empty")
    try:
        number = float(text)
    except ValueError:
        return text
    if number.is_integer():
        return str(int(number))
    return text


@dataclass(slots=True)
class Driver:
    """A driver together with the trailing week of worked hours."""

    driver_id: str
    name: str
    shift_hours: float
    past_week_hours: Sequence[float]
    current_day_hours: float = 0.0
    is_fatigued: bool = False

    def __post_init__(self) -> None:
        hours = tuple(float(h) for h in self.past_week_hours)
        if len(hours) != WEEK_LENGTH:
            raise ValueError(
                f"Driver {self.driver_id} must have exactly {WEEK_LENGTH} past week hour entries, got {len(hours)}"
            )
        if any(h < 0 for h in hours):
            raise ValueError(f"Driver {self.driver_id} has negative past week hours: {hours}")
        self.past_week_hours = hours


@dataclass(slots=True)
class Route:
    route_id: str
    distance_km: float
    traffic_level: TrafficLevel
    base_time_min: int

    def __post_init__(self) -> None:
        self.route_id = normalize_route_id(self.route_id)
        if self.traffic_level not in TRAFFIC_LEVELS:
            raise ValueError(
                f"Route {self.route_id} has invalid traffic level '{self.traffic_level}'. "
                f"Expected one of {', '.join(TRAFFIC_LEVELS)}."
            )


@dataclass(slots=True)
class Order:
    """A backlog order. Outcome fields are overwritten by each run that assigns it."""

    order_id: str
    value_rs: float
    route_id: str
    delivery_time: str
    assigned_driver: Optional[str] = None
    is_delivered: bool = False
    is_on_time: Optional[bool] = None
    penalty_applied: float = 0.0
    bonus_applied: float = 0.0

    def __post_init__(self) -> None:
        self.route_id = normalize_route_id(self.route_id)


@dataclass(slots=True)
class OrderOutcome:
    """Outcome fields written back onto an order after it is assigned."""

    assigned_driver: str
    is_delivered: bool
    is_on_time: bool
    penalty_applied: float
    bonus_applied: float


@dataclass(slots=True)
class SimulationInputs:
    available_drivers: int
    start_time: str
    max_hours_per_day: int


@dataclass(slots=True)
class SimulationKPIs:
    total_profit: float
    efficiency_score: float
    on_time_deliveries: int
    late_deliveries: int
    total_fuel_cost: float
    total_penalties: float
    total_bonuses: float
    total_orders: int


@dataclass(slots=True)
class ProcessedOrder:
    order_id: str
    driver_assigned: str
    delivery_status: Literal["On Time", "Late"]
    profit_contribution: float


@dataclass(slots=True)
class AssignmentSummary:
    order_id: str
    driver_name: str
    route_id: str
    is_on_time: bool
    profit_contribution: float
    fuel_cost: float
    penalty: float
    bonus: float


@dataclass(frozen=True, slots=True)
class SimulationRun:
    """Immutable record of one completed simulation."""

    simulation_id: str
    inputs: SimulationInputs
    results: SimulationKPIs
    orders_processed: list[ProcessedOrder]
    assignments: list[AssignmentSummary]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
