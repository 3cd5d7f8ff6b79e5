"""Store interfaces the simulation engine depends on, and the configured defaults."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Protocol, Tuple

from ..config import settings
from ..models.domain import Driver, Order, OrderOutcome, Route, SimulationRun


class DriverStore(Protocol):
    def list_first(self, n: int) -> List[Driver]:
        """Return the first ``n`` drivers in a stable enumeration order."""

    def list_all(self) -> List[Driver]:
        ...


class RouteStore(Protocol):
    def list_all(self) -> List[Route]:
        ...


class OrderStore(Protocol):
    def list_all(self) -> List[Order]:
        ...

    def record_outcome(self, order_id: str, outcome: OrderOutcome) -> None:
        """Write outcome fields onto an order. Raises ``OutcomeWriteError`` on failure."""


class SimulationStore(Protocol):
    def save(self, run: SimulationRun) -> None:
        ...

    def find_by_id(self, simulation_id: str) -> SimulationRun:
        """Raises ``SimulationNotFound`` when no run has the identifier."""

    def list(self, page: int, page_size: int) -> Tuple[List[SimulationRun], int]:
        """Return one page of runs, newest first, and the total run count."""


@dataclass(slots=True)
class SimulationStores:
    drivers: DriverStore
    routes: RouteStore
    orders: OrderStore
    simulations: SimulationStore


def get_reference_store():
    if settings.reference_backend == "supabase":
        from .database import SupabaseReferenceStore

        return SupabaseReferenceStore()

    from ..data.reference_repository import get_csv_reference_store

    return get_csv_reference_store()


def get_simulation_store() -> SimulationStore:
    if settings.simulation_backend == "supabase":
        from .database import SupabaseSimulationStore

        return SupabaseSimulationStore()

    from .filesystem import FileSimulationStore

    return FileSimulationStore()


def get_default_stores() -> SimulationStores:
    reference = get_reference_store()
    logging.debug(
        f"Using {settings.reference_backend} reference data and {settings.simulation_backend} simulation storage"
    )
    return SimulationStores(
        drivers=reference.drivers,
        routes=reference.routes,
        orders=reference.orders,
        simulations=get_simulation_store(),
    )
