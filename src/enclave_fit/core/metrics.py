"""
Progress metrics derived from stored logs.

Pure helpers over ProgressEntry and WorkoutLog lists; the CLI feeds them
records loaded from the store.
"""

import calendar
from collections.abc import Sequence
from datetime import datetime, timedelta

from .config import (
    CALORIE_CHART_DAYS,
    DEFAULT_RANGE,
    RANGE_MONTHS,
    RANGE_WEEK_DAYS,
    RANGES,
    STRENGTH_CHART_LIFTS,
    STRENGTH_CHART_PREVIOUS,
    STRENGTH_CHART_TARGET,
)
from .evaluation import round_half_up
from .models import MealLog, ProgressEntry, UserProfile, WorkoutLog


def _parse_date(date_str: str) -> datetime:
    return datetime.strptime(date_str, "%Y-%m-%d")


def range_start(today: str, range_name: str = DEFAULT_RANGE) -> str:
    """
    First ISO date included in a named display range ending on ``today``.

    Raises:
        ValueError: If range_name is not one of RANGES
    """
    if range_name not in RANGES:
        valid = ", ".join(RANGES)
        raise ValueError(f"Unknown range '{range_name}'. Valid ranges: {valid}")
    end = _parse_date(today)
    if range_name in RANGE_MONTHS:
        start = _months_before(end, RANGE_MONTHS[range_name])
    else:
        start = end - timedelta(days=RANGE_WEEK_DAYS)
    return start.strftime("%Y-%m-%d")


def _months_before(day: datetime, months: int) -> datetime:
    """Same day-of-month ``months`` calendar months earlier, clamped to month end."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


def weight_series(entries: list[ProgressEntry]) -> list[tuple[datetime, float]]:
    """Date-sorted (date, weight) pairs, skipping entries without a weight."""
    points = [(_parse_date(e.date), e.weight) for e in entries if e.weight is not None]
    points.sort(key=lambda p: p[0])
    return points  # type: ignore[return-value]


def linear_trend(points: Sequence[tuple[float, float]]) -> tuple[float, float]:
    """
    Least-squares fit y = a + b*x.

    Args:
        points: (x, y) pairs

    Returns:
        Tuple (intercept a, slope b); slope 0 for fewer than two distinct x
    """
    if len(points) < 2:
        if len(points) == 1:
            return (float(points[0][1]), 0.0)
        return (0.0, 0.0)

    n = len(points)
    sum_x = sum(p[0] for p in points)
    sum_y = sum(p[1] for p in points)
    sum_xy = sum(p[0] * p[1] for p in points)
    sum_x2 = sum(p[0] ** 2 for p in points)

    denominator = n * sum_x2 - sum_x**2
    if abs(denominator) < 1e-10:
        return (sum_y / n, 0.0)

    b = (n * sum_xy - sum_x * sum_y) / denominator
    a = (sum_y - b * sum_x) / n
    return (a, b)


def weight_trend_per_week(entries: list[ProgressEntry]) -> float:
    """Body-weight change in kg per week over the given entries."""
    series = weight_series(entries)
    if len(series) < 2:
        return 0.0
    first = series[0][0]
    points = [((d - first).days, w) for d, w in series]
    _, slope_per_day = linear_trend(points)
    return slope_per_day * 7


def weekly_workout_counts(
    logs: list[WorkoutLog],
    weeks: int = 4,
    today: str | None = None,
) -> list[int]:
    """
    Completed workouts per 7-day bucket ending on ``today``.

    Returns:
        ``weeks`` counts, oldest first (last element is the current week)
    """
    end = _parse_date(today) if today else datetime.now()
    counts = [0] * weeks
    for log in logs:
        if not log.completed:
            continue
        weeks_ago = (end - _parse_date(log.date)).days // 7
        if 0 <= weeks_ago < weeks:
            counts[weeks - 1 - weeks_ago] += 1
    return counts


def strength_chart_rows(profile: UserProfile) -> list[tuple[str, int, int, int]]:
    """
    (lift, previous, current, target) in kg for the four main lifts.

    A lift left at 0 is shown at a body-weight multiple instead.
    """
    rows = []
    for label, field_name, bodyweight_factor in STRENGTH_CHART_LIFTS:
        current = getattr(profile, field_name) or profile.weight * bodyweight_factor
        rows.append((
            label,
            int(round_half_up(current * STRENGTH_CHART_PREVIOUS)),
            int(round_half_up(current)),
            int(round_half_up(current * STRENGTH_CHART_TARGET)),
        ))
    return rows


def daily_calories(
    meal_logs: list[MealLog],
    today: str,
    days: int = CALORIE_CHART_DAYS,
) -> list[tuple[str, float]]:
    """
    Logged calories per day for the ``days`` days ending on ``today``.

    Returns:
        (ISO date, kcal) pairs, oldest first; days without logs are 0
    """
    end = _parse_date(today)
    dates = [(end - timedelta(days=i)).strftime("%Y-%m-%d") for i in range(days - 1, -1, -1)]
    totals = dict.fromkeys(dates, 0.0)
    for log in meal_logs:
        if log.date in totals:
            totals[log.date] += log.total_calories
    return list(totals.items())
