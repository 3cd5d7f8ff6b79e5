"""Fleet-level KPIs computed from a run's assignments."""

from __future__ import annotations

import math
from typing import Sequence

from ...models.domain import SimulationKPIs
from .models import Assignment


def round_half_up(value: float) -> float:
    """Round to 2 decimals with halves going up, e.g. 3.125 -> 3.13 and -0.125 -> -0.12."""
    return math.floor(value * 100 + 0.5) / 100


def aggregate_kpis(assignments: Sequence[Assignment]) -> SimulationKPIs:
    """Reduce assignments to summary KPIs. Unassigned and skipped orders never reach here."""
    total_orders = len(assignments)
    on_time = sum(1 for a in assignments if a.is_on_time)
    efficiency = (on_time / total_orders) * 100 if total_orders > 0 else 0.0

    return SimulationKPIs(
        total_profit=round_half_up(sum(a.net_profit for a in assignments)),
        efficiency_score=round_half_up(efficiency),
        on_time_deliveries=on_time,
        late_deliveries=total_orders - on_time,
        total_fuel_cost=round_half_up(sum(a.fuel_cost for a in assignments)),
        total_penalties=sum(a.penalty for a in assignments),
        total_bonuses=round_half_up(sum(a.bonus for a in assignments)),
        total_orders=total_orders,
    )
