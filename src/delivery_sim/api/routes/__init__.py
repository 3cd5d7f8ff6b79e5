"""Route group exports."""

from . import health, reference, simulation

__all__ = ["health", "reference", "simulation"]
