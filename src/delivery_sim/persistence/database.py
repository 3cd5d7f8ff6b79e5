"""Supabase persistence for reference data and simulation runs.

Tables: ``drivers``, ``routes``, ``orders`` (reference data) and
``simulations`` (one row per completed run, JSON columns for inputs, results,
orders_processed and assignments).
"""

from __future__ import annotations

import logging
from typing import Any, List, Tuple

from ..data.records import driver_from_record, order_from_record, route_from_record
from ..db.supabase import require_supabase_client
from ..errors import OutcomeWriteError, RepositoryFetchError, SimulationNotFound
from ..models.domain import Driver, Order, OrderOutcome, Route, SimulationRun
from ..services.outputs.simulation_formatter import simulation_run_from_json, simulation_run_to_json

PAGE_FETCH_SIZE = 1000


def _fetch_all(table: str, order_column: str) -> list[dict[str, Any]]:
    """Fetch every row of a table in ``order_column`` order, one PostgREST page at a time."""
    supabase = require_supabase_client()
    rows: list[dict[str, Any]] = []
    start = 0
    while True:
        response = (
            supabase.table(table)
            .select("*")
            .order(order_column)
            .range(start, start + PAGE_FETCH_SIZE - 1)
            .execute()
        )
        batch = response.data or []
        rows.extend(batch)
        if len(batch) < PAGE_FETCH_SIZE:
            return rows
        start += PAGE_FETCH_SIZE


class SupabaseDriverStore:
    def list_first(self, n: int) -> List[Driver]:
        supabase = require_supabase_client()
        response = supabase.table("drivers").select("*").order("id").limit(n).execute()
        return [driver_from_record(row, fallback_id=str(row.get("id"))) for row in response.data or []]

    def list_all(self) -> List[Driver]:
        return [driver_from_record(row, fallback_id=str(row.get("id"))) for row in _fetch_all("drivers", "id")]


class SupabaseRouteStore:
    def list_all(self) -> List[Route]:
        return [route_from_record(row) for row in _fetch_all("routes", "route_id")]


class SupabaseOrderStore:
    def list_all(self) -> List[Order]:
        return [order_from_record(row) for row in _fetch_all("orders", "id")]

    def record_outcome(self, order_id: str, outcome: OrderOutcome) -> None:
        try:
            supabase = require_supabase_client()
            response = (
                supabase.table("orders")
                .update(
                    {
                        "assigned_driver": outcome.assigned_driver,
                        "is_delivered": outcome.is_delivered,
                        "is_on_time": outcome.is_on_time,
                        "penalty_applied": outcome.penalty_applied,
                        "bonus_applied": outcome.bonus_applied,
                    }
                )
                .eq("order_id", order_id)
                .execute()
            )
        except Exception as exc:
            raise OutcomeWriteError(f"Failed to update order {order_id}: {exc}") from exc
        if not response.data:
            raise OutcomeWriteError(f"Order {order_id} was not updated (no matching row)")


class SupabaseReferenceStore:
    def __init__(self) -> None:
        self.drivers = SupabaseDriverStore()
        self.routes = SupabaseRouteStore()
        self.orders = SupabaseOrderStore()


class SupabaseSimulationStore:
    def save(self, run: SimulationRun) -> None:
        supabase = require_supabase_client()
        supabase.table("simulations").insert(simulation_run_to_json(run)).execute()
        logging.info(f"Saved simulation {run.simulation_id} to database")

    def find_by_id(self, simulation_id: str) -> SimulationRun:
        supabase = require_supabase_client()
        try:
            response = (
                supabase.table("simulations").select("*").eq("simulation_id", simulation_id).limit(1).execute()
            )
        except Exception as exc:
            raise RepositoryFetchError(f"Failed to fetch simulation {simulation_id}: {exc}") from exc
        if not response.data:
            raise SimulationNotFound(simulation_id)
        return simulation_run_from_json(response.data[0])

    def list(self, page: int, page_size: int) -> Tuple[List[SimulationRun], int]:
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be >= 1")
        supabase = require_supabase_client()
        start = (page - 1) * page_size
        try:
            response = (
                supabase.table("simulations")
                .select("*", count="exact")
                .order("created_at", desc=True)
                .range(start, start + page_size - 1)
                .execute()
            )
        except Exception as exc:
            raise RepositoryFetchError(f"Failed to list simulations: {exc}") from exc
        runs = [simulation_run_from_json(row) for row in response.data or []]
        return runs, response.count or 0
