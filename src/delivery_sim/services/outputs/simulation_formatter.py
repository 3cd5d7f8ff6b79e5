"""Serializers for simulation runs."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Mapping

from ...models.domain import (
    AssignmentSummary,
    ProcessedOrder,
    SimulationInputs,
    SimulationKPIs,
    SimulationRun,
)


def simulation_run_to_json(run: SimulationRun) -> dict:
    return {
        "simulation_id": run.simulation_id,
        "created_at": run.created_at.isoformat(),
        "inputs": asdict(run.inputs),
        "results": asdict(run.results),
        "orders_processed": [asdict(entry) for entry in run.orders_processed],
        "assignments": [asdict(entry) for entry in run.assignments],
    }


def _parse_created_at(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif value:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    else:
        return datetime.now(timezone.utc)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def simulation_run_from_json(payload: Mapping[str, Any]) -> SimulationRun:
    results = dict(payload["results"])
    # Runs stored before total_orders was recorded can derive it.
    results.setdefault("total_orders", results["on_time_deliveries"] + results["late_deliveries"])
    return SimulationRun(
        simulation_id=payload["simulation_id"],
        inputs=SimulationInputs(**payload["inputs"]),
        results=SimulationKPIs(**results),
        orders_processed=[ProcessedOrder(**entry) for entry in payload.get("orders_processed") or []],
        assignments=[AssignmentSummary(**entry) for entry in payload.get("assignments") or []],
        created_at=_parse_created_at(payload.get("created_at")),
    )


def simulation_run_to_csv(run: SimulationRun) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "order_id",
        "driver_name",
        "route_id",
        "is_on_time",
        "profit_contribution",
        "fuel_cost",
        "penalty",
        "bonus",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for entry in run.assignments:
        writer.writerow(asdict(entry))
    return buffer.getvalue()
