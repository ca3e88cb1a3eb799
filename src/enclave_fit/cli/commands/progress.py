"""Logging and progress commands: log-workout, log-meals, log-progress, progress, today, sync-queue."""

from typing import Annotated, Optional

import typer

from ...core.config import DEFAULT_RANGE, RANGE_LABELS, RANGES
from ...core.evaluation import create_personalized_plan
from ...core.metrics import range_start
from ...core.models import MealLog, ProgressEntry
from ...core.records import build_completed_workout_log, meal_totals
from ...io.serializers import ValidationError, validate_date, validate_range
from .. import views
from ..app import DataDirOption, DateOption, app, get_store, load_profile_or_exit, today_str


def _date_or_exit(date: str | None) -> str:
    try:
        return validate_date(date or today_str())
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


@app.command("log-workout")
def log_workout(
    plan_id: Annotated[
        Optional[int],
        typer.Option("--plan-id", help="Saved workout plan id (default: latest)"),
    ] = None,
    duration: Annotated[
        Optional[int],
        typer.Option("--duration", help="Duration in minutes"),
    ] = None,
    notes: Annotated[Optional[str], typer.Option("--notes", help="Free-text notes")] = None,
    date: DateOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """Log a saved workout plan as completed."""
    store = get_store(data_dir)
    load_profile_or_exit(store)
    day = _date_or_exit(date)

    try:
        plans = store.list_workout_plans()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if not plans:
        views.print_error("No saved workout plan. Run 'workout --save' first.")
        raise typer.Exit(1)

    if plan_id is None:
        plan = max(plans, key=lambda p: p.id or 0)
    else:
        found = [p for p in plans if p.id == plan_id]
        if not found:
            views.print_error(f"No workout plan with id {plan_id}")
            raise typer.Exit(1)
        plan = found[0]

    log = build_completed_workout_log(plan, day)
    log.duration = duration
    log.notes = notes
    try:
        log_id = store.add_workout_log(log)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Logged workout #{log_id} ({plan.name}) on {day}")


@app.command("log-meals")
def log_meals(
    meal_type: Annotated[
        Optional[list[str]],
        typer.Option("--meal", "-m", help="Meal type to log (repeatable); default all"),
    ] = None,
    date: DateOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """Log meals from the latest saved meal plan as eaten."""
    store = get_store(data_dir)
    profile = load_profile_or_exit(store)
    day = _date_or_exit(date)

    try:
        plans = store.list_meal_plans()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if not plans:
        views.print_error("No saved meal plan. Run 'nutrition --save' first.")
        raise typer.Exit(1)
    plan = max(plans, key=lambda p: p.id or 0)

    meals = [m for m in plan.meals if not meal_type or m.meal_type in meal_type]
    if not meals:
        views.print_error(f"No meals of type {', '.join(meal_type or [])} in '{plan.name}'")
        raise typer.Exit(1)

    totals = meal_totals(meals)
    log = MealLog(
        date=day,
        meals=meals,
        total_calories=totals["calories"],
        total_protein=totals["protein"],
        total_carbs=totals["carbs"],
        total_fat=totals["fat"],
    )
    try:
        log_id = store.add_meal_log(log)
        eaten = sum(m.total_calories for m in store.get_meal_logs(day, day))
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(
        f"Logged {len(meals)} meal(s) #{log_id} on {day}: {totals['calories']:.0f} kcal"
    )
    target = create_personalized_plan(profile).nutrition_plan.total_calories
    if eaten > target:
        views.print_warning(f"{eaten:.0f} kcal logged on {day}, above the {target} kcal target")


@app.command("log-progress")
def log_progress(
    weight: Annotated[Optional[float], typer.Option("--weight", "-w", help="Body weight in kg")] = None,
    body_fat: Annotated[Optional[float], typer.Option("--body-fat", help="Body fat percent")] = None,
    waist: Annotated[Optional[float], typer.Option("--waist", help="Waist circumference in cm")] = None,
    chest: Annotated[Optional[float], typer.Option("--chest", help="Chest circumference in cm")] = None,
    neck: Annotated[Optional[float], typer.Option("--neck", help="Neck circumference in cm")] = None,
    notes: Annotated[Optional[str], typer.Option("--notes", help="Free-text notes")] = None,
    date: DateOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """Record body weight, body fat and measurements for a day."""
    measurements = {
        site: value
        for site, value in (("waist", waist), ("chest", chest), ("neck", neck))
        if value is not None
    }
    if weight is None and body_fat is None and not measurements and not notes:
        views.print_error("Nothing to log. Give --weight, --body-fat, a measurement or --notes")
        raise typer.Exit(1)

    store = get_store(data_dir)
    load_profile_or_exit(store)
    day = _date_or_exit(date)

    try:
        if weight is not None:
            validate_range(weight, 0.1, 1000, "weight")
        if body_fat is not None:
            validate_range(body_fat, 0, 100, "body_fat")
        for site, value in measurements.items():
            validate_range(value, 0.1, 1000, site)

        entry = ProgressEntry(
            date=day,
            weight=weight,
            body_fat=body_fat,
            measurements=measurements,
            notes=notes,
        )
        entry_id = store.add_progress_entry(entry)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Logged progress entry #{entry_id} on {day}")


@app.command()
def progress(
    range_name: Annotated[
        str,
        typer.Option("--range", "-r", help=f"Display range ({'/'.join(RANGES)})"),
    ] = DEFAULT_RANGE,
    data_dir: DataDirOption = None,
) -> None:
    """Show progress entries and weight, strength, workout and calorie charts."""
    store = get_store(data_dir)
    profile = load_profile_or_exit(store)

    today = today_str()
    try:
        start = range_start(today, range_name)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    try:
        entries = store.get_progress_entries(start, today)
        logs = store.get_workout_logs(start, today)
        meal_logs = store.get_meal_logs(start, today)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_progress(
        profile,
        create_personalized_plan(profile),
        entries,
        logs,
        meal_logs,
        today,
        f"{RANGE_LABELS[range_name]}: {start} → {today}",
    )


@app.command()
def today(
    date: DateOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """Show today's goal, targets and what has been logged."""
    store = get_store(data_dir)
    profile = load_profile_or_exit(store)
    day = _date_or_exit(date)

    try:
        data = store.get_today_data(day)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_today(profile, create_personalized_plan(profile), data)


@app.command("sync-queue")
def sync_queue(
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-n", help="Show only the last N entries"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """List recorded store changes waiting for sync."""
    store = get_store(data_dir)
    load_profile_or_exit(store)

    try:
        entries = store.load_sync_queue()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if limit is not None and limit >= 0:
        entries = entries[-limit:] if limit else []
    views.print_sync_queue(entries)
