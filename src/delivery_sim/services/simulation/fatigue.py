"""Driver fatigue derived from the trailing week of worked hours."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import WEEK_LENGTH, Driver

FATIGUE_THRESHOLD_HOURS = 8.0
FATIGUE_TIME_MULTIPLIER = 1.3


def average_daily_hours(past_week_hours: Sequence[float]) -> float:
    if len(past_week_hours) != WEEK_LENGTH:
        raise ValueError(f"Expected {WEEK_LENGTH} daily hour entries, got {len(past_week_hours)}")
    return sum(past_week_hours) / WEEK_LENGTH


def is_fatigued(past_week_hours: Sequence[float]) -> bool:
    """A driver is fatigued when the trailing-week average exceeds 8 hours/day."""
    return average_daily_hours(past_week_hours) > FATIGUE_THRESHOLD_HOURS


def driver_is_fatigued(driver: Driver) -> bool:
    return is_fatigued(driver.past_week_hours)
