"""Lookup, paging and cross-run statistics for stored simulations."""

from __future__ import annotations

import math
from dataclasses import asdict

from ...config import settings
from ...models.domain import SimulationRun
from ...persistence.stores import SimulationStore, get_simulation_store
from ...schemas.simulation import (
    SimulationHistoryResponse,
    SimulationRecordModel,
    SimulationStatsResponse,
)
from .kpis import round_half_up

STATS_SAMPLE_LIMIT = 1000


def simulation_run_to_record(run: SimulationRun) -> SimulationRecordModel:
    return SimulationRecordModel(
        simulation_id=run.simulation_id,
        created_at=run.created_at,
        inputs=asdict(run.inputs),
        results=asdict(run.results),
        orders_processed=[asdict(entry) for entry in run.orders_processed],
        assignments=[asdict(entry) for entry in run.assignments],
    )


def get_simulation(simulation_id: str, store: SimulationStore | None = None) -> SimulationRecordModel:
    store = store or get_simulation_store()
    return simulation_run_to_record(store.find_by_id(simulation_id))


def get_simulation_history(
    page: int = 1,
    page_size: int | None = None,
    store: SimulationStore | None = None,
) -> SimulationHistoryResponse:
    store = store or get_simulation_store()
    page_size = page_size or settings.history_page_size
    runs, total = store.list(page, page_size)
    return SimulationHistoryResponse(
        simulations=[simulation_run_to_record(run) for run in runs],
        total_pages=math.ceil(total / page_size),
        current_page=page,
        total=total,
    )


def summarize_simulations(
    store: SimulationStore | None = None,
    limit: int = STATS_SAMPLE_LIMIT,
) -> SimulationStatsResponse:
    """Average and best/worst figures across the most recent ``limit`` runs."""
    store = store or get_simulation_store()
    runs, _ = store.list(1, limit)
    if not runs:
        return SimulationStatsResponse(
            total_simulations=0,
            average_profit=0,
            average_efficiency=0,
            best_efficiency=0,
            worst_efficiency=0,
        )

    efficiencies = [run.results.efficiency_score for run in runs]
    return SimulationStatsResponse(
        total_simulations=len(runs),
        average_profit=round_half_up(sum(run.results.total_profit for run in runs) / len(runs)),
        average_efficiency=round_half_up(sum(efficiencies) / len(runs)),
        best_efficiency=max(efficiencies),
        worst_efficiency=min(efficiencies),
    )
