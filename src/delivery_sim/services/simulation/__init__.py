"""Delivery simulation engine."""

from .history import get_simulation, get_simulation_history, summarize_simulations
from .service import run_simulation, validate_inputs

__all__ = [
    "run_simulation",
    "validate_inputs",
    "get_simulation",
    "get_simulation_history",
    "summarize_simulations",
]
