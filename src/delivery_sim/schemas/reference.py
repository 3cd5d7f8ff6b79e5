"""Reference data API schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class DriverModel(BaseModel):
    driver_id: str
    name: str
    shift_hours: float
    past_week_hours: List[float]
    current_day_hours: float
    average_daily_hours: float
    is_fatigued: bool


class RouteModel(BaseModel):
    route_id: str
    distance_km: float
    traffic_level: str
    base_time_min: int
    fuel_cost: float


class OrderModel(BaseModel):
    order_id: str
    value_rs: float
    route_id: str
    delivery_time: str
    assigned_driver: Optional[str] = None
    is_delivered: bool
    is_on_time: Optional[bool] = None
    penalty_applied: float
    bonus_applied: float
