"""Simulation orchestration service."""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict
from typing import Any, Callable, List, Mapping, TypeVar

from ...errors import OutcomeWriteError, RepositoryFetchError, ValidationError
from ...models.domain import (
    AssignmentSummary,
    OrderOutcome,
    ProcessedOrder,
    SimulationInputs,
    SimulationRun,
)
from ...persistence.stores import OrderStore, SimulationStores, get_default_stores
from ...schemas.simulation import (
    AssignmentModel,
    SimulationRequest,
    SimulationResponse,
    SimulationResultsModel,
)
from .kpis import aggregate_kpis
from .models import Assignment
from .scheduler import assign_orders
from .timeutils import is_valid_time

MIN_DRIVERS, MAX_DRIVERS = 1, 100
MIN_HOURS_PER_DAY, MAX_HOURS_PER_DAY = 1, 24

T = TypeVar("T")


def _require_int(value: Any, low: int, high: int, message: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise ValidationError(message)
    return value


def validate_inputs(payload: SimulationRequest | Mapping[str, Any]) -> SimulationInputs:
    """Check simulation parameters. Raises ``ValidationError`` before any store is touched."""
    data = payload.model_dump() if isinstance(payload, SimulationRequest) else dict(payload)

    available_drivers = _require_int(
        data.get("available_drivers"),
        MIN_DRIVERS,
        MAX_DRIVERS,
        f"Available drivers must be between {MIN_DRIVERS} and {MAX_DRIVERS}",
    )
    start_time = data.get("start_time")
    if not is_valid_time(start_time):
        raise ValidationError("Start time must be in HH:MM format")
    max_hours = _require_int(
        data.get("max_hours_per_day"),
        MIN_HOURS_PER_DAY,
        MAX_HOURS_PER_DAY,
        f"Max hours per day must be between {MIN_HOURS_PER_DAY} and {MAX_HOURS_PER_DAY}",
    )
    return SimulationInputs(
        available_drivers=available_drivers,
        start_time=start_time,
        max_hours_per_day=max_hours,
    )


def _fetch(label: str, loader: Callable[[], List[T]]) -> List[T]:
    try:
        records = loader()
    except RepositoryFetchError:
        raise
    except Exception as exc:
        raise RepositoryFetchError(f"Failed to load {label}: {exc}") from exc
    logging.info(f"Found {len(records)} {label} for simulation")
    return records


def _record_outcomes(orders: OrderStore, assignments: List[Assignment]) -> int:
    """Write each outcome back onto its order. Failures are logged and skipped."""
    failures = 0
    for assignment in assignments:
        outcome = OrderOutcome(
            assigned_driver=assignment.driver.driver_id,
            is_delivered=True,
            is_on_time=assignment.is_on_time,
            penalty_applied=assignment.penalty,
            bonus_applied=assignment.bonus,
        )
        try:
            orders.record_outcome(assignment.order.order_id, outcome)
        except Exception as exc:
            failures += 1
            logging.warning(
                f"{OutcomeWriteError.kind}: order {assignment.order.order_id} update failed, "
                f"continuing simulation: {exc}"
            )
    return failures


def new_simulation_id() -> str:
    return f"sim_{uuid.uuid4().hex}"


def build_simulation_run(inputs: SimulationInputs, assignments: List[Assignment]) -> SimulationRun:
    return SimulationRun(
        simulation_id=new_simulation_id(),
        inputs=inputs,
        results=aggregate_kpis(assignments),
        orders_processed=[
            ProcessedOrder(
                order_id=a.order.order_id,
                driver_assigned=a.driver.name,
                delivery_status="On Time" if a.is_on_time else "Late",
                profit_contribution=a.net_profit,
            )
            for a in assignments
        ],
        assignments=[
            AssignmentSummary(
                order_id=a.order.order_id,
                driver_name=a.driver.name,
                route_id=a.route.route_id,
                is_on_time=a.is_on_time,
                profit_contribution=a.net_profit,
                fuel_cost=a.fuel_cost,
                penalty=a.penalty,
                bonus=a.bonus,
            )
            for a in assignments
        ],
    )


def simulation_run_to_response(run: SimulationRun) -> SimulationResponse:
    return SimulationResponse(
        simulation_id=run.simulation_id,
        inputs=SimulationRequest(**asdict(run.inputs)),
        results=SimulationResultsModel(**asdict(run.results)),
        assignments=[AssignmentModel(**asdict(entry)) for entry in run.assignments],
    )


def run_simulation(
    payload: SimulationRequest | Mapping[str, Any],
    stores: SimulationStores | None = None,
) -> SimulationResponse:
    """Run one simulated delivery day and persist the result.

    The start time is validated and echoed but does not shift any delivery
    computation: deadlines are only used to order the backlog.

    Outcomes are written back to the order store once the whole schedule is
    built, one order at a time in assignment order. The scheduler itself
    never touches a store, so a write failure cannot change which driver
    later orders get.
    """
    inputs = validate_inputs(payload)
    if stores is None:
        try:
            stores = get_default_stores()
        except RepositoryFetchError:
            raise
        except Exception as exc:
            raise RepositoryFetchError(f"Failed to open reference data: {exc}") from exc

    drivers = _fetch("drivers", lambda: stores.drivers.list_first(inputs.available_drivers))
    orders = _fetch("orders", stores.orders.list_all)
    routes = _fetch("routes", stores.routes.list_all)

    schedule = assign_orders(
        drivers=tuple(drivers),
        orders=tuple(orders),
        routes=tuple(routes),
        max_hours_per_day=inputs.max_hours_per_day,
    )

    failed_writes = _record_outcomes(stores.orders, schedule.assignments)
    if failed_writes:
        logging.warning(f"{failed_writes} order outcome update(s) failed during simulation")

    run = build_simulation_run(inputs, schedule.assignments)
    stores.simulations.save(run)
    logging.info(
        f"Simulation {run.simulation_id} completed: {run.results.total_orders} orders, "
        f"efficiency {run.results.efficiency_score}%, profit {run.results.total_profit}"
    )
    return simulation_run_to_response(run)
