import pytest

from src.delivery_sim.errors import TimeFormatError, ValidationError
from src.delivery_sim.models.domain import Driver, Order, Route, normalize_route_id
from src.delivery_sim.services.simulation.costs import fuel_cost
from src.delivery_sim.services.simulation.fatigue import average_daily_hours, is_fatigued
from src.delivery_sim.services.simulation.profit import calculate_profit
from src.delivery_sim.services.simulation.timeutils import minutes_to_time, time_to_minutes


def _order(order_id: str, value: float, route_id: str = "1", delivery_time: str = "10:00") -> Order:
    return Order(order_id=order_id, value_rs=value, route_id=route_id, delivery_time=delivery_time)


@pytest.mark.parametrize(
    "value, expected",
    [("00:00", 0), ("09:05", 545), ("9:05", 545), ("23:59", 1439)],
)
def test_time_to_minutes(value, expected):
    assert time_to_minutes(value) == expected


@pytest.mark.parametrize("value", ["24:00", "12:60", "1200", "ab:cd", "", "12:5"])
def test_time_to_minutes_rejects_malformed_times(value):
    with pytest.raises(TimeFormatError):
        time_to_minutes(value)


def test_time_format_error_is_a_validation_error():
    with pytest.raises(ValidationError):
        time_to_minutes("7pm")


def test_minutes_to_time_zero_pads():
    assert minutes_to_time(5) == "00:05"
    assert minutes_to_time(545) == "09:05"
    assert minutes_to_time(1439) == "23:59"
    with pytest.raises(ValueError):
        minutes_to_time(1440)


def test_fatigue_uses_trailing_week_average():
    week = [7, 10, 7, 7, 9, 9, 8]

    assert average_daily_hours(week) == pytest.approx(57 / 7)
    assert is_fatigued(week) is True


def test_fatigue_threshold_is_strict():
    assert is_fatigued([8] * 7) is False
    assert is_fatigued([8, 8, 8, 8, 8, 8, 9]) is True
    # A long last day alone does not make the average exceed 8.
    assert is_fatigued([6, 6, 6, 6, 6, 6, 12]) is False


def test_fatigue_requires_seven_days():
    with pytest.raises(ValueError):
        average_daily_hours([8] * 6)


def test_fuel_cost_adds_high_traffic_surcharge():
    assert fuel_cost(Route(route_id="1", distance_km=10, traffic_level="High", base_time_min=60)) == 70
    assert fuel_cost(Route(route_id="2", distance_km=10, traffic_level="Medium", base_time_min=60)) == 50
    assert fuel_cost(Route(route_id="3", distance_km=10, traffic_level="Low", base_time_min=60)) == 50


def test_profit_for_high_value_on_time_order():
    route = Route(route_id="1", distance_km=8, traffic_level="Low", base_time_min=30)

    breakdown = calculate_profit(_order("O1", 1500), route, is_on_time=True)

    assert breakdown.fuel_cost == 40
    assert breakdown.bonus == pytest.approx(150)
    assert breakdown.penalty == 0
    assert breakdown.net_profit == pytest.approx(1610)


def test_profit_for_late_order_has_penalty_and_no_bonus():
    route = Route(route_id="1", distance_km=8, traffic_level="Low", base_time_min=30)

    breakdown = calculate_profit(_order("O1", 1500), route, is_on_time=False)

    assert breakdown.bonus == 0
    assert breakdown.penalty == 50
    assert breakdown.net_profit == pytest.approx(1500 - 50 - 40)


def test_bonus_requires_value_strictly_above_threshold():
    route = Route(route_id="1", distance_km=2, traffic_level="Low", base_time_min=30)

    assert calculate_profit(_order("O1", 1000), route, is_on_time=True).bonus == 0
    assert calculate_profit(_order("O2", 1000.5), route, is_on_time=True).bonus == pytest.approx(100.05)


def test_driver_requires_seven_non_negative_days():
    with pytest.raises(ValueError):
        Driver(driver_id="D1", name="Amit", shift_hours=8, past_week_hours=[8] * 6)
    with pytest.raises(ValueError):
        Driver(driver_id="D1", name="Amit", shift_hours=8, past_week_hours=[8, 8, 8, -1, 8, 8, 8])


def test_route_rejects_unknown_traffic_level():
    with pytest.raises(ValueError):
        Route(route_id="1", distance_km=5, traffic_level="Extreme", base_time_min=20)


def test_route_ids_are_normalized_to_one_form():
    assert normalize_route_id(7) == "7"
    assert normalize_route_id(7.0) == "7"
    assert normalize_route_id(" 7 ") == "7"
    assert normalize_route_id("R-7") == "R-7"
    assert Route(route_id=7, distance_km=5, traffic_level="Low", base_time_min=20).route_id == "7"
    assert _order("O1", 100, route_id=7.0).route_id == "7"
