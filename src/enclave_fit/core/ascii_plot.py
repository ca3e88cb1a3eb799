"""
ASCII plotting for body-weight progress and workout frequency.

Creates terminal-friendly charts from stored progress entries and logs.
"""

from datetime import datetime

from .metrics import weekly_workout_counts, weight_series
from .models import ProgressEntry, WorkoutLog


def create_weight_plot(
    entries: list[ProgressEntry],
    width: int = 60,
    height: int = 16,
) -> str:
    """
    Create an ASCII plot of body weight over time.

    Args:
        entries: Progress entries (entries without weight are ignored)
        width: Plot width in characters, including the y-axis labels
        height: Plot height in lines, including title and x-axis

    Returns:
        ASCII art string
    """
    points = weight_series(entries)
    if not points:
        return "No weight entries recorded yet. Use 'log-progress --weight' to add one."

    min_date = points[0][0]
    max_date = points[-1][0]
    date_range = (max_date - min_date).days or 1

    weights = [w for _, w in points]
    y_min = min(weights) - 1.0
    y_max = max(weights) + 1.0
    y_range = y_max - y_min

    label_width = 8  # "  80.5 ┤"
    plot_width = width - label_width
    plot_height = height - 3

    grid = [[" " for _ in range(plot_width)] for _ in range(plot_height)]

    plot_points: list[tuple[int, int]] = []
    for date, weight in points:
        x = int(((date - min_date).days / date_range) * (plot_width - 1))
        y = int(((weight - y_min) / y_range) * (plot_height - 1))
        plot_points.append((x, plot_height - 1 - y))

    # Connect consecutive points with straight segments
    for (x1, y1), (x2, y2) in zip(plot_points, plot_points[1:]):
        steps = max(abs(x2 - x1), abs(y2 - y1))
        for s in range(1, steps):
            x = x1 + round((x2 - x1) * s / steps)
            y = y1 + round((y2 - y1) * s / steps)
            if grid[y][x] == " ":
                grid[y][x] = "·"

    for x, y in plot_points:
        grid[y][x] = "●"

    lines = ["Body Weight Progress (kg)", "─" * width]
    for i, row in enumerate(grid):
        y_val = y_max - (i / (plot_height - 1)) * y_range if plot_height > 1 else y_max
        lines.append(f"{y_val:6.1f} ┤" + "".join(row))
    lines.append("─" * width)

    label_line = [" "] * plot_width
    mid_date = min_date + (max_date - min_date) / 2
    for x_pos, date in ((0, min_date), (plot_width // 2, mid_date), (plot_width - 6, max_date)):
        for j, c in enumerate(date.strftime("%b %d")):
            if 0 <= x_pos + j < plot_width:
                label_line[x_pos + j] = c
    lines.append(" " * label_width + "".join(label_line))

    return "\n".join(lines)


def create_simple_bar_chart(
    labels: list[str],
    values: list[float],
    width: int = 40,
    title: str = "",
) -> str:
    """
    Create a simple horizontal bar chart.

    Args:
        labels: Labels for each bar
        values: Values for each bar
        width: Maximum bar width
        title: Chart title

    Returns:
        ASCII bar chart string
    """
    if not values:
        return "No data to display."

    max_val = max(values)
    max_label_len = max(len(label) for label in labels) if labels else 0

    lines = []

    if title:
        lines.append(title)
        lines.append("─" * (max_label_len + width + 5))

    for label, value in zip(labels, values):
        bar_len = int((value / max_val) * width) if max_val > 0 else 0
        bar = "█" * bar_len
        lines.append(f"{label:>{max_label_len}} │{bar} {value:.0f}")

    return "\n".join(lines)


def create_weekly_workout_chart(
    logs: list[WorkoutLog],
    weeks: int = 4,
    today: str | None = None,
) -> str:
    """
    Create a chart of completed workouts per week.

    Args:
        logs: Workout logs
        weeks: Number of weeks to show
        today: ISO date the last bucket ends on (default: now)

    Returns:
        ASCII chart string
    """
    if not logs:
        return "No workouts logged."

    counts = weekly_workout_counts(logs, weeks, today or datetime.now().strftime("%Y-%m-%d"))

    labels = []
    for i in range(weeks - 1, -1, -1):
        if i == 0:
            labels.append("This week")
        elif i == 1:
            labels.append("Last week")
        else:
            labels.append(f"{i} weeks ago")

    return create_simple_bar_chart(
        labels, [float(c) for c in counts], title="Workouts Completed per Week"
    )


def create_strength_chart(rows: list[tuple[str, int, int, int]], width: int = 40) -> str:
    """
    Create a chart of previous, current and target weight per lift.

    Args:
        rows: (lift, previous, current, target) tuples from strength_chart_rows()
        width: Maximum bar width
    """
    if not rows:
        return "No lifts to display."

    labels: list[str] = []
    values: list[float] = []
    for lift, previous, current, target in rows:
        labels += [f"{lift} prev", f"{lift} now", f"{lift} goal"]
        values += [float(previous), float(current), float(target)]

    return create_simple_bar_chart(labels, values, width, title="Strength: Current vs Previous (kg)")


def create_calorie_chart(
    daily: list[tuple[str, float]],
    target: int,
    width: int = 40,
) -> str:
    """
    Create a chart of logged calories per day against the daily target.

    Args:
        daily: (ISO date, kcal) pairs from daily_calories()
        target: Daily calorie target
        width: Maximum bar width
    """
    if not daily:
        return "No meals logged."

    labels = [datetime.strptime(day, "%Y-%m-%d").strftime("%a %m-%d") for day, _ in daily]
    values = [kcal for _, kcal in daily]
    labels.append("Target")
    values.append(float(target))

    chart = create_simple_bar_chart(labels, values, width, title="Calorie Intake (kcal)")
    logged = [kcal for kcal in values[:-1] if kcal > 0]
    if logged:
        chart += f"\nAverage on logged days: {sum(logged) / len(logged):.0f} kcal"
    return chart
