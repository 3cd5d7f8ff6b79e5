"""File-based persistence for simulation runs."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Tuple

from ..config import settings
from ..errors import SimulationNotFound
from ..models.domain import SimulationRun
from ..services.outputs.simulation_formatter import (
    simulation_run_from_json,
    simulation_run_to_csv,
    simulation_run_to_json,
)
from .memory import paginate_newest_first


class FileStorage:
    """Thin wrapper around the data root for storing JSON and CSV outputs."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.output_root = self.root / "outputs"
        self.output_root.mkdir(parents=True, exist_ok=True)

    def make_run_directory(self, name: str) -> Path:
        path = self.output_root / name
        path.mkdir(parents=True, exist_ok=False)
        return path

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent)

    def read_json(self, path: Path) -> Any:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    def write_csv(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)


class FileSimulationStore:
    """Stores each run as ``outputs/<simulation_id>/summary.json`` plus ``assignments.csv``."""

    SUMMARY_FILE = "summary.json"
    ASSIGNMENTS_FILE = "assignments.csv"

    def __init__(self, storage: FileStorage | None = None) -> None:
        self.storage = storage or FileStorage()

    def save(self, run: SimulationRun) -> None:
        run_dir = self.storage.make_run_directory(run.simulation_id)
        self.storage.write_json(run_dir / self.SUMMARY_FILE, simulation_run_to_json(run))
        self.storage.write_csv(run_dir / self.ASSIGNMENTS_FILE, simulation_run_to_csv(run))

    def find_by_id(self, simulation_id: str) -> SimulationRun:
        # Identifiers are used as directory names; reject anything path-like.
        if not simulation_id or "/" in simulation_id or "\\" in simulation_id or simulation_id.startswith("."):
            raise SimulationNotFound(simulation_id)
        summary_path = self.storage.output_root / simulation_id / self.SUMMARY_FILE
        if not summary_path.exists():
            raise SimulationNotFound(simulation_id)
        return simulation_run_from_json(self.storage.read_json(summary_path))

    def list(self, page: int, page_size: int) -> Tuple[List[SimulationRun], int]:
        runs: List[SimulationRun] = []
        for summary_path in self.storage.output_root.glob(f"*/{self.SUMMARY_FILE}"):
            try:
                runs.append(simulation_run_from_json(self.storage.read_json(summary_path)))
            except (ValueError, KeyError, TypeError) as exc:
                logging.warning(f"Skipping unreadable simulation record {summary_path}: {exc}")
        return paginate_newest_first(runs, page, page_size)
