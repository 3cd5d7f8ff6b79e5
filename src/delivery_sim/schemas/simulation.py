"""Simulation request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

START_TIME_PATTERN = r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$"


class SimulationRequest(BaseModel):
    available_drivers: int = Field(..., ge=1, le=100, description="Number of drivers taken from the roster.")
    start_time: str = Field(..., pattern=START_TIME_PATTERN, description="Shift start time in HH:MM format.")
    max_hours_per_day: int = Field(..., ge=1, le=24, description="Per-driver cap on route hours for the day.")


class SimulationResultsModel(BaseModel):
    total_profit: float
    efficiency_score: float
    on_time_deliveries: int
    late_deliveries: int
    total_fuel_cost: float
    total_penalties: float
    total_bonuses: float
    total_orders: int


class AssignmentModel(BaseModel):
    order_id: str
    driver_name: str
    route_id: str
    is_on_time: bool
    profit_contribution: float
    fuel_cost: float
    penalty: float
    bonus: float


class ProcessedOrderModel(BaseModel):
    order_id: str
    driver_assigned: str
    delivery_status: Literal["On Time", "Late"]
    profit_contribution: float


class SimulationResponse(BaseModel):
    simulation_id: str
    inputs: SimulationRequest
    results: SimulationResultsModel
    assignments: List[AssignmentModel]


class SimulationRunResponse(SimulationResponse):
    message: str = "Simulation completed successfully"


class SimulationRecordModel(BaseModel):
    simulation_id: str
    created_at: Optional[datetime] = None
    inputs: SimulationRequest
    results: SimulationResultsModel
    orders_processed: List[ProcessedOrderModel]
    assignments: List[AssignmentModel] = Field(default_factory=list)


class SimulationHistoryResponse(BaseModel):
    simulations: List[SimulationRecordModel]
    total_pages: int
    current_page: int
    total: int


class SimulationStatsResponse(BaseModel):
    total_simulations: int
    average_profit: float
    average_efficiency: float
    best_efficiency: float
    worst_efficiency: float
