"""Simulation endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status

from ...config import settings
from ...errors import RepositoryFetchError, SimulationNotFound, ValidationError
from ...schemas.simulation import (
    SimulationHistoryResponse,
    SimulationRecordModel,
    SimulationRequest,
    SimulationRunResponse,
    SimulationStatsResponse,
)
from ...services.simulation import (
    get_simulation,
    get_simulation_history,
    run_simulation,
    summarize_simulations,
)

router = APIRouter(prefix="/simulation", tags=["simulation"])


@router.post("/run", response_model=SimulationRunResponse, status_code=status.HTTP_200_OK)
def run(payload: SimulationRequest) -> SimulationRunResponse:
    logging.info(f"Simulation inputs: {payload.model_dump()}")
    try:
        result = run_simulation(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except RepositoryFetchError as exc:
        logging.error(f"Simulation aborted, reference data unavailable: {exc}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Simulation failed: {exc}",
        ) from exc
    except Exception as exc:
        logging.exception(f"Simulation error: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Simulation failed: {str(exc)}",
        ) from exc
    return SimulationRunResponse(**result.model_dump())


@router.get("/history", response_model=SimulationHistoryResponse, status_code=status.HTTP_200_OK)
def history(
    page: int = Query(default=1, ge=1, description="1-based page index"),
    limit: int = Query(
        default=settings.history_page_size,
        ge=1,
        le=settings.history_max_page_size,
        description="Number of simulations per page",
    ),
) -> SimulationHistoryResponse:
    try:
        return get_simulation_history(page=page, page_size=limit)
    except Exception as exc:
        logging.exception(f"Error fetching simulation history: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch simulation history: {str(exc)}",
        ) from exc


@router.get("/stats/summary", response_model=SimulationStatsResponse, status_code=status.HTTP_200_OK)
def stats_summary() -> SimulationStatsResponse:
    try:
        return summarize_simulations()
    except Exception as exc:
        logging.exception(f"Error fetching simulation stats: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch simulation statistics: {str(exc)}",
        ) from exc


@router.get("/{simulation_id}", response_model=SimulationRecordModel, status_code=status.HTTP_200_OK)
def get_one(simulation_id: str) -> SimulationRecordModel:
    try:
        return get_simulation(simulation_id)
    except SimulationNotFound as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No simulation found with the provided ID",
        ) from exc
    except Exception as exc:
        logging.exception(f"Error fetching simulation: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch simulation: {str(exc)}",
        ) from exc
