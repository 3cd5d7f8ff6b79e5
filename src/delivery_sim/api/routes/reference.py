"""Read-only reference data endpoints."""

from __future__ import annotations

import logging
from typing import Callable, List, TypeVar

from fastapi import APIRouter, HTTPException, status

from ...persistence.stores import get_reference_store
from ...schemas.reference import DriverModel, OrderModel, RouteModel
from ...services.simulation.costs import fuel_cost
from ...services.simulation.fatigue import average_daily_hours, is_fatigued

router = APIRouter(tags=["reference"])

T = TypeVar("T")


def _load(label: str, loader: Callable[[], List[T]]) -> List[T]:
    try:
        return loader()
    except Exception as exc:
        logging.exception(f"Error loading {label}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Failed to load {label}: {str(exc)}",
        ) from exc


@router.get("/drivers", response_model=List[DriverModel], status_code=status.HTTP_200_OK)
def list_drivers() -> List[DriverModel]:
    drivers = _load("drivers", lambda: get_reference_store().drivers.list_all())
    return [
        DriverModel(
            driver_id=driver.driver_id,
            name=driver.name,
            shift_hours=driver.shift_hours,
            past_week_hours=list(driver.past_week_hours),
            current_day_hours=driver.current_day_hours,
            average_daily_hours=round(average_daily_hours(driver.past_week_hours), 2),
            is_fatigued=is_fatigued(driver.past_week_hours),
        )
        for driver in drivers
    ]


@router.get("/routes", response_model=List[RouteModel], status_code=status.HTTP_200_OK)
def list_routes() -> List[RouteModel]:
    routes = _load("routes", lambda: get_reference_store().routes.list_all())
    return [
        RouteModel(
            route_id=route.route_id,
            distance_km=route.distance_km,
            traffic_level=route.traffic_level,
            base_time_min=route.base_time_min,
            fuel_cost=fuel_cost(route),
        )
        for route in routes
    ]


@router.get("/orders", response_model=List[OrderModel], status_code=status.HTTP_200_OK)
def list_orders() -> List[OrderModel]:
    orders = _load("orders", lambda: get_reference_store().orders.list_all())
    return [
        OrderModel(
            order_id=order.order_id,
            value_rs=order.value_rs,
            route_id=order.route_id,
            delivery_time=order.delivery_time,
            assigned_driver=order.assigned_driver,
            is_delivered=order.is_delivered,
            is_on_time=order.is_on_time,
            penalty_applied=order.penalty_applied,
            bonus_applied=order.bonus_applied,
        )
        for order in orders
    ]
