from datetime import datetime, timedelta, timezone

import pytest

from src.delivery_sim.errors import (
    OutcomeWriteError,
    RepositoryFetchError,
    SimulationNotFound,
    ValidationError,
)
from src.delivery_sim.models.domain import (
    Driver,
    Order,
    Route,
    SimulationInputs,
    SimulationKPIs,
    SimulationRun,
)
from src.delivery_sim.persistence.memory import InMemoryReferenceStore, InMemorySimulationStore
from src.delivery_sim.persistence.stores import SimulationStores
from src.delivery_sim.schemas.simulation import SimulationRequest
from src.delivery_sim.services.simulation import history as history_service
from src.delivery_sim.services.simulation import service as simulation_service


def _reference_data() -> InMemoryReferenceStore:
    drivers = [
        Driver(driver_id="D1", name="Amit", shift_hours=8, past_week_hours=[7, 10, 7, 7, 9, 9, 8]),
        Driver(driver_id="D2", name="Priya", shift_hours=8, past_week_hours=[6, 7, 8, 7, 6, 8, 7]),
        Driver(driver_id="D3", name="Rohit", shift_hours=8, past_week_hours=[8] * 7),
    ]
    routes = [
        Route(route_id=1, distance_km=25, traffic_level="High", base_time_min=125),
        Route(route_id=2, distance_km=8, traffic_level="Low", base_time_min=30),
        Route(route_id=3, distance_km=12, traffic_level="Medium", base_time_min=300),
    ]
    orders = [
        Order(order_id="O1", value_rs=2594, route_id="2", delivery_time="02:07"),
        Order(order_id="O2", value_rs=1835, route_id="1", delivery_time="01:19"),
        Order(order_id="O3", value_rs=766, route_id="3", delivery_time="01:06"),
        Order(order_id="O4", value_rs=572, route_id="42", delivery_time="00:30"),
        Order(order_id="O5", value_rs=1500, route_id="3", delivery_time="03:00"),
    ]
    return InMemoryReferenceStore(drivers=drivers, routes=routes, orders=orders)


def _stores(reference: InMemoryReferenceStore | None = None) -> SimulationStores:
    reference = reference or _reference_data()
    return SimulationStores(
        drivers=reference.drivers,
        routes=reference.routes,
        orders=reference.orders,
        simulations=InMemorySimulationStore(),
    )


class UntouchableStore:
    def __getattr__(self, name):
        raise AssertionError(f"store accessed before validation: {name}")


@pytest.mark.parametrize(
    "payload",
    [
        {"available_drivers": 0, "start_time": "09:00", "max_hours_per_day": 8},
        {"available_drivers": 101, "start_time": "09:00", "max_hours_per_day": 8},
        {"available_drivers": True, "start_time": "09:00", "max_hours_per_day": 8},
        {"available_drivers": 3, "start_time": "25:00", "max_hours_per_day": 8},
        {"available_drivers": 3, "start_time": "nine", "max_hours_per_day": 8},
        {"available_drivers": 3, "start_time": "09:00", "max_hours_per_day": 0},
        {"available_drivers": 3, "start_time": "09:00", "max_hours_per_day": 25},
        {"start_time": "09:00", "max_hours_per_day": 8},
    ],
)
def test_invalid_inputs_fail_before_stores_are_touched(payload):
    untouchable = UntouchableStore()
    stores = SimulationStores(drivers=untouchable, routes=untouchable, orders=untouchable, simulations=untouchable)

    with pytest.raises(ValidationError):
        simulation_service.run_simulation(payload, stores=stores)


def test_run_simulation_assigns_and_persists():
    stores = _stores()

    response = simulation_service.run_simulation(
        SimulationRequest(available_drivers=2, start_time="09:00", max_hours_per_day=8),
        stores=stores,
    )

    assert response.simulation_id.startswith("sim_")
    assert response.inputs.available_drivers == 2
    # O4 references a missing route; O5 no longer fits in Amit's remaining hours.
    assert [a.order_id for a in response.assignments] == ["O3", "O2", "O1", "O5"]
    assert [a.driver_name for a in response.assignments] == ["Amit", "Amit", "Amit", "Priya"]
    assert [a.route_id for a in response.assignments] == ["3", "1", "2", "3"]

    results = response.results
    assert results.total_orders == 4
    assert results.on_time_deliveries + results.late_deliveries == results.total_orders
    assert 0 <= results.efficiency_score <= 100
    assert results.total_penalties == 100  # Amit's two long routes run late

    stored = stores.simulations.find_by_id(response.simulation_id)
    assert stored.results.total_profit == results.total_profit
    assert [entry.delivery_status for entry in stored.orders_processed] == ["Late", "Late", "On Time", "On Time"]


def test_run_simulation_records_outcomes_on_orders():
    reference = _reference_data()

    simulation_service.run_simulation(
        {"available_drivers": 2, "start_time": "09:00", "max_hours_per_day": 8},
        stores=_stores(reference),
    )

    o1 = reference.orders.get("O1")
    assert o1.assigned_driver == "D1"
    assert o1.is_delivered is True
    assert o1.is_on_time is True
    assert o1.bonus_applied == pytest.approx(259.4)
    skipped = reference.orders.get("O4")
    assert skipped.assigned_driver is None
    assert skipped.is_delivered is False
    assert reference.orders.get("O5").assigned_driver == "D2"


def test_outcome_write_failures_do_not_abort_run(caplog):
    reference = _reference_data()

    class FailingOrders:
        def list_all(self):
            return reference.orders.list_all()

        def record_outcome(self, order_id, outcome):
            raise OutcomeWriteError("database unavailable")

    stores = SimulationStores(
        drivers=reference.drivers,
        routes=reference.routes,
        orders=FailingOrders(),
        simulations=InMemorySimulationStore(),
    )

    response = simulation_service.run_simulation(
        {"available_drivers": 2, "start_time": "09:00", "max_hours_per_day": 8},
        stores=stores,
    )

    assert response.results.total_orders == 4
    assert len(response.assignments) == 4
    assert "outcome_write_error" in caplog.text


def test_fetch_failure_is_fatal_and_nothing_is_saved():
    reference = _reference_data()
    simulations = InMemorySimulationStore()

    class BrokenRoutes:
        def list_all(self):
            raise ConnectionError("connection reset")

    stores = SimulationStores(
        drivers=reference.drivers,
        routes=BrokenRoutes(),
        orders=reference.orders,
        simulations=simulations,
    )

    with pytest.raises(RepositoryFetchError) as excinfo:
        simulation_service.run_simulation(
            {"available_drivers": 2, "start_time": "09:00", "max_hours_per_day": 8},
            stores=stores,
        )

    assert isinstance(excinfo.value.__cause__, ConnectionError)
    assert simulations.list(1, 10) == ([], 0)


def test_no_resolvable_routes_gives_zero_efficiency():
    reference = InMemoryReferenceStore(
        drivers=[Driver(driver_id="D1", name="Amit", shift_hours=8, past_week_hours=[8] * 7)],
        routes=[],
        orders=[Order(order_id="O1", value_rs=100, route_id="1", delivery_time="10:00")],
    )

    response = simulation_service.run_simulation(
        {"available_drivers": 1, "start_time": "09:00", "max_hours_per_day": 8},
        stores=_stores(reference),
    )

    assert response.results.total_orders == 0
    assert response.results.efficiency_score == 0
    assert response.assignments == []


def test_identical_inputs_give_identical_results():
    payload = {"available_drivers": 3, "start_time": "08:00", "max_hours_per_day": 6}

    first = simulation_service.run_simulation(payload, stores=_stores())
    second = simulation_service.run_simulation(payload, stores=_stores())

    assert first.simulation_id != second.simulation_id
    assert first.results == second.results
    assert first.assignments == second.assignments


def test_default_stores_failure_is_reported_as_fetch_error(monkeypatch):
    def broken():
        raise FileNotFoundError("drivers.csv")

    monkeypatch.setattr(simulation_service, "get_default_stores", broken)

    with pytest.raises(RepositoryFetchError):
        simulation_service.run_simulation({"available_drivers": 1, "start_time": "09:00", "max_hours_per_day": 8})


def _run(simulation_id: str, created_at: datetime, efficiency: float, profit: float) -> SimulationRun:
    return SimulationRun(
        simulation_id=simulation_id,
        inputs=SimulationInputs(available_drivers=1, start_time="09:00", max_hours_per_day=8),
        results=SimulationKPIs(
            total_profit=profit,
            efficiency_score=efficiency,
            on_time_deliveries=1,
            late_deliveries=0,
            total_fuel_cost=0,
            total_penalties=0,
            total_bonuses=0,
            total_orders=1,
        ),
        orders_processed=[],
        assignments=[],
        created_at=created_at,
    )


def test_history_is_paginated_newest_first():
    store = InMemorySimulationStore()
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for i in range(3):
        store.save(_run(f"sim_{i}", start + timedelta(minutes=i), 50, 100))

    first_page = history_service.get_simulation_history(page=1, page_size=2, store=store)
    second_page = history_service.get_simulation_history(page=2, page_size=2, store=store)

    assert first_page.total == 3
    assert first_page.total_pages == 2
    assert [s.simulation_id for s in first_page.simulations] == ["sim_2", "sim_1"]
    assert [s.simulation_id for s in second_page.simulations] == ["sim_0"]
    assert second_page.current_page == 2


def test_get_simulation_raises_for_unknown_id():
    with pytest.raises(SimulationNotFound):
        history_service.get_simulation("sim_missing", store=InMemorySimulationStore())


def test_summary_statistics():
    store = InMemorySimulationStore()
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    store.save(_run("sim_a", start, 50, 1000))
    store.save(_run("sim_b", start + timedelta(minutes=1), 100, 2001))

    summary = history_service.summarize_simulations(store=store)

    assert summary.total_simulations == 2
    assert summary.average_profit == pytest.approx(1500.5)
    assert summary.average_efficiency == pytest.approx(75)
    assert summary.best_efficiency == 100
    assert summary.worst_efficiency == 50


def test_summary_statistics_without_runs():
    summary = history_service.summarize_simulations(store=InMemorySimulationStore())

    assert summary.total_simulations == 0
    assert summary.average_profit == 0


def test_summary_averages_round_halves_up():
    store = InMemorySimulationStore()
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    store.save(_run("sim_a", start, 50, 1000))
    store.save(_run("sim_b", start + timedelta(minutes=1), 50.25, 1000.25))

    summary = history_service.summarize_simulations(store=store)

    assert summary.average_efficiency == 50.13
    assert summary.average_profit == 1000.13
