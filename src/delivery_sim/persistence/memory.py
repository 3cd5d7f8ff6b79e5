"""In-process stores for reference data and simulation runs."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Tuple

from ..errors import OutcomeWriteError, SimulationNotFound
from ..models.domain import Driver, Order, OrderOutcome, Route, SimulationRun


class InMemoryDriverStore:
    def __init__(self, drivers: Iterable[Driver] = ()) -> None:
        self._drivers: List[Driver] = [replace(driver) for driver in drivers]

    def list_first(self, n: int) -> List[Driver]:
        return [replace(driver) for driver in self._drivers[:n]]

    def list_all(self) -> List[Driver]:
        return self.list_first(len(self._drivers))


class InMemoryRouteStore:
    def __init__(self, routes: Iterable[Route] = ()) -> None:
        self._routes: List[Route] = [replace(route) for route in routes]

    def list_all(self) -> List[Route]:
        return [replace(route) for route in self._routes]


class InMemoryOrderStore:
    """Order backlog keyed by order id, in insertion order.

    Reads return copies, so a running simulation works on a snapshot that its
    own outcome writes cannot change underneath it.
    """

    def __init__(self, orders: Iterable[Order] = ()) -> None:
        self._orders: Dict[str, Order] = {order.order_id: replace(order) for order in orders}

    def list_all(self) -> List[Order]:
        return [replace(order) for order in self._orders.values()]

    def get(self, order_id: str) -> Order:
        return replace(self._orders[order_id])

    def record_outcome(self, order_id: str, outcome: OrderOutcome) -> None:
        order = self._orders.get(order_id)
        if order is None:
            raise OutcomeWriteError(f"Order {order_id} does not exist")
        order.assigned_driver = outcome.assigned_driver
        order.is_delivered = outcome.is_delivered
        order.is_on_time = outcome.is_on_time
        order.penalty_applied = outcome.penalty_applied
        order.bonus_applied = outcome.bonus_applied


class InMemoryReferenceStore:
    """Groups the driver, route and order stores over one in-memory dataset."""

    def __init__(
        self,
        drivers: Iterable[Driver] = (),
        routes: Iterable[Route] = (),
        orders: Iterable[Order] = (),
    ) -> None:
        self.drivers = InMemoryDriverStore(drivers)
        self.routes = InMemoryRouteStore(routes)
        self.orders = InMemoryOrderStore(orders)


class InMemorySimulationStore:
    def __init__(self) -> None:
        self._runs: Dict[str, SimulationRun] = {}

    def save(self, run: SimulationRun) -> None:
        if run.simulation_id in self._runs:
            raise ValueError(f"Simulation {run.simulation_id} already exists")
        self._runs[run.simulation_id] = run

    def find_by_id(self, simulation_id: str) -> SimulationRun:
        run = self._runs.get(simulation_id)
        if run is None:
            raise SimulationNotFound(simulation_id)
        return run

    def list(self, page: int, page_size: int) -> Tuple[List[SimulationRun], int]:
        return paginate_newest_first(self._runs.values(), page, page_size)


def paginate_newest_first(
    runs: Iterable[SimulationRun], page: int, page_size: int
) -> Tuple[List[SimulationRun], int]:
    if page < 1 or page_size < 1:
        raise ValueError("page and page_size must be >= 1")
    ordered = sorted(runs, key=lambda run: run.created_at, reverse=True)
    offset = (page - 1) * page_size
    return ordered[offset : offset + page_size], len(ordered)
