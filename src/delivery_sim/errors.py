"""Error types raised by the simulation engine and its stores."""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for engine errors. ``kind`` is stable across releases."""

    kind = "simulation_error"


class ValidationError(SimulationError):
    """Simulation parameters are missing, malformed or out of range."""

    kind = "validation_error"


class TimeFormatError(ValidationError):
    """A clock-time string is not HH:MM."""

    kind = "format_error"


class RouteNotFound(SimulationError):
    """An order references a route that is not in the route set."""

    kind = "route_not_found"

    def __init__(self, order_id: str, route_id: str) -> None:
        super().__init__(f"Route not found for order {order_id}, route_id: {route_id}")
        self.order_id = order_id
        self.route_id = route_id


class OutcomeWriteError(SimulationError):
    """Writing an assignment outcome back onto its order failed."""

    kind = "outcome_write_error"


class RepositoryFetchError(SimulationError):
    """Loading drivers, routes or orders from the reference store failed."""

    kind = "repository_fetch_error"


class SimulationNotFound(SimulationError):
    kind = "simulation_not_found"

    def __init__(self, simulation_id: str) -> None:
        super().__init__(f"Simulation not found: {simulation_id}")
        self.simulation_id = simulation_id
