"""Data access helpers for loading drivers, routes and orders from seed CSV files."""

from __future__ import annotations

import csv
import functools
import logging
from pathlib import Path
from typing import Callable, Optional, TypeVar

from ..config import settings
from ..models.domain import Driver, Order, Route
from ..persistence.memory import InMemoryReferenceStore
from .records import driver_from_record, order_from_record, route_from_record

T = TypeVar("T")


def _read_rows(csv_path: Path, label: str, parse: Callable[[dict, int], T]) -> tuple[T, ...]:
    if not csv_path.exists():
        raise FileNotFoundError(f"{label.capitalize()} file not found: {csv_path}")

    records: list[T] = []
    with csv_path.open(mode="r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise ValueError(f"{label.capitalize()} file '{csv_path}' is missing a header row.")
        for line_number, row in enumerate(reader, start=2):
            try:
                records.append(parse(row, line_number))
            except ValueError as exc:
                raise ValueError(f"{csv_path.name} line {line_number}: {exc}") from exc
    logging.info(f"Loaded {len(records)} {label} from {csv_path}")
    return tuple(records)


def _reject_duplicates(ids: list[str], field_name: str, label: str) -> None:
    seen: set[str] = set()
    for value in ids:
        if value in seen:
            raise ValueError(f"Duplicate {field_name} '{value}' in {label} file")
        seen.add(value)


@functools.lru_cache(maxsize=1)
def load_drivers(source: Optional[Path] = None) -> tuple[Driver, ...]:
    """Load drivers in file order; the row position is the stable driver id."""
    return _read_rows(
        source or settings.drivers_file,
        "drivers",
        lambda row, line: driver_from_record(row, fallback_id=f"D{line - 1:03d}"),
    )


@functools.lru_cache(maxsize=1)
def load_routes(source: Optional[Path] = None) -> tuple[Route, ...]:
    routes = _read_rows(source or settings.routes_file, "routes", lambda row, _: route_from_record(row))
    _reject_duplicates([route.route_id for route in routes], "route_id", "routes")
    return routes


@functools.lru_cache(maxsize=1)
def load_orders(source: Optional[Path] = None) -> tuple[Order, ...]:
    orders = _read_rows(source or settings.orders_file, "orders", lambda row, _: order_from_record(row))
    _reject_duplicates([order.order_id for order in orders], "order_id", "orders")
    return orders


class CsvReferenceStore(InMemoryReferenceStore):
    """Reference data seeded from CSV files.

    The files are read-only; outcomes written by simulation runs live on the
    in-process order records for the lifetime of the store.
    """

    def __init__(
        self,
        drivers_file: Optional[Path] = None,
        routes_file: Optional[Path] = None,
        orders_file: Optional[Path] = None,
    ) -> None:
        super().__init__(
            drivers=load_drivers(drivers_file),
            routes=load_routes(routes_file),
            orders=load_orders(orders_file),
        )


@functools.lru_cache(maxsize=1)
def get_csv_reference_store() -> CsvReferenceStore:
    return CsvReferenceStore()
