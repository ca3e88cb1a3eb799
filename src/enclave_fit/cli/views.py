"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of plans, records and progress.
"""

from rich.console import Console
from rich.table import Table

from ..core.ascii_plot import (
    create_calorie_chart,
    create_strength_chart,
    create_weekly_workout_chart,
    create_weight_plot,
)
from ..core.evaluation import compute_bmr, compute_tdee
from ..core.metrics import daily_calories, strength_chart_rows, weight_trend_per_week
from ..core.models import (
    MealLog,
    MealPlan,
    NutritionPlan,
    PersonalizedPlan,
    ProgressEntry,
    StrengthAssessment,
    SyncQueueEntry,
    UserProfile,
    WorkoutLog,
    WorkoutPlan,
    WorkoutProgram,
)

console = Console()

LEVEL_STYLES = {
    "beginner": "red",
    "novice": "yellow",
    "intermediate": "cyan",
    "advanced": "green",
}


def _level(level: str) -> str:
    style = LEVEL_STYLES.get(level, "white")
    return f"[{style}]{level}[/{style}]"


def _aim_label(fitness_aim: str) -> str:
    """'lose_fat' → 'LOSE FAT'."""
    return fitness_aim.replace("_", " ").upper()


def print_profile(profile: UserProfile) -> None:
    """Print the stored profile with derived BMR and TDEE."""
    title = f"Profile: {profile.name}" if profile.name else "Profile"
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Weight", f"{profile.weight:.1f} kg")
    table.add_row("Height", f"{profile.height:.0f} cm")
    table.add_row("Age", str(profile.age))
    table.add_row("Gender", profile.gender)
    table.add_row("Goal", _aim_label(profile.fitness_aim))
    table.add_row("Bench press", f"{profile.bench_press:.1f} kg")
    table.add_row("Squat", f"{profile.squat:.1f} kg")
    table.add_row("Deadlift", f"{profile.deadlift:.1f} kg")
    table.add_row("Overhead press", f"{profile.overhead_press:.1f} kg")
    table.add_row("BMR", f"{compute_bmr(profile):.0f} kcal")
    table.add_row("TDEE", f"{compute_tdee(profile):.0f} kcal")

    console.print(table)


def print_strength(strength: StrengthAssessment) -> None:
    """Print per-lift strength tiers."""
    table = Table(title="Strength Level")
    table.add_column("Lift", style="cyan")
    table.add_column("Tier")

    table.add_row("Bench press", _level(strength.bench))
    table.add_row("Squat", _level(strength.squat))
    table.add_row("Deadlift", _level(strength.deadlift))
    table.add_row("[bold]Overall[/bold]", _level(strength.overall))

    console.print(table)


def print_nutrition(nutrition: NutritionPlan) -> None:
    """Print calorie and macro targets."""
    table = Table(title=f"Daily Targets: {nutrition.total_calories} kcal")
    table.add_column("Macro", style="cyan")
    table.add_column("Grams", justify="right", style="bold")
    table.add_column("Share", justify="right")

    table.add_row("Protein", f"{nutrition.protein} g", f"{nutrition.protein_percent}%")
    table.add_row("Carbs", f"{nutrition.carbs} g", f"{nutrition.carbs_percent}%")
    table.add_row("Fat", f"{nutrition.fat} g", f"{nutrition.fat_percent}%")

    console.print(table)
    console.print(f"Meals per day: {nutrition.meals_per_day}")


def print_program_overview(program: WorkoutProgram) -> None:
    """Print program name, schedule and day list."""
    console.print(
        f"[bold]{program.name}[/bold] ({program.type}) — "
        f"{program.frequency} days/week for {program.duration} weeks"
    )
    for i, day in enumerate(program.workouts, 1):
        console.print(f"  {i}. {day.name} ({len(day.exercises)} exercises)")


def print_workout_day(program: WorkoutProgram, day_index: int) -> None:
    """Print the exercises of one program day (0-based index)."""
    day = program.workouts[day_index]
    table = Table(title=day.name)
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Exercise", style="cyan")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right", style="bold")
    table.add_column("Rest(s)", justify="right")
    table.add_column("Notes", style="dim")

    for i, ex in enumerate(day.exercises, 1):
        table.add_row(str(i), ex.name, str(ex.sets), ex.reps, str(ex.rest_time), ex.notes or "")

    console.print(table)


def print_recommendations(recommendations: tuple[str, ...]) -> None:
    console.print("[bold]Recommendations[/bold]")
    for line in recommendations:
        console.print(f"  • {line}")


def print_personalized_plan(profile: UserProfile, plan: PersonalizedPlan) -> None:
    """Print every part of a personalized plan."""
    console.print()
    console.print(f"[bold cyan]Goal: {_aim_label(profile.fitness_aim)}[/bold cyan]")
    console.print(
        f"BMR {compute_bmr(profile):.0f} kcal · TDEE {compute_tdee(profile):.0f} kcal"
    )
    console.print()
    print_strength(plan.strength)
    print_nutrition(plan.nutrition_plan)
    console.print()
    print_program_overview(plan.workout_program)
    console.print()
    print_recommendations(plan.recommendations)


def print_meal_plan(plan: MealPlan, show_ids: bool = False) -> None:
    """Print a meal plan's meals against its targets."""
    title = f"#{plan.id} {plan.name}" if show_ids else plan.name
    table = Table(title=title)
    if show_ids:
        table.add_column("Id", justify="right", style="dim", width=3)
    table.add_column("Meal", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("kcal", justify="right", style="bold")
    table.add_column("Protein", justify="right")
    table.add_column("Carbs", justify="right")
    table.add_column("Fat", justify="right")

    lead = [""] if show_ids else []
    for meal in plan.meals:
        table.add_row(
            *([str(meal.id or "")] if show_ids else []),
            meal.name,
            meal.meal_type,
            f"{meal.calories:.0f}",
            f"{meal.protein:.1f}",
            f"{meal.carbs:.1f}",
            f"{meal.fat:.1f}",
        )
    table.add_row(
        *lead,
        "[bold]Target[/bold]",
        "",
        str(plan.target_calories),
        str(plan.target_protein),
        str(plan.target_carbs),
        str(plan.target_fat),
    )

    console.print(table)


def format_progress_table(entries: list[ProgressEntry]) -> Table:
    """
    Create a Rich table of progress entries.

    Args:
        entries: Date-sorted progress entries

    Returns:
        Rich Table object
    """
    table = Table(title="Progress")
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Date", style="cyan")
    table.add_column("Weight(kg)", justify="right", style="bold")
    table.add_column("Body fat(%)", justify="right")
    table.add_column("Measurements")
    table.add_column("Notes", style="dim")

    for entry in entries:
        measurements = ", ".join(f"{k} {v:g}" for k, v in sorted(entry.measurements.items()))
        table.add_row(
            str(entry.id or ""),
            entry.date,
            f"{entry.weight:.1f}" if entry.weight is not None else "-",
            f"{entry.body_fat:.1f}" if entry.body_fat is not None else "-",
            measurements or "-",
            entry.notes or "",
        )
    return table


def print_progress(
    profile: UserProfile,
    plan: PersonalizedPlan,
    entries: list[ProgressEntry],
    logs: list[WorkoutLog],
    meal_logs: list[MealLog],
    today: str,
    range_label: str,
) -> None:
    """Print progress table, weight chart and trend, then strength, workout and calorie charts."""
    console.print(f"[bold]{range_label}[/bold]")
    if entries:
        console.print(format_progress_table(entries))
    else:
        console.print("[yellow]No progress entries in this range.[/yellow]")

    console.print()
    console.print(create_weight_plot(entries))

    if sum(1 for e in entries if e.weight is not None) >= 2:
        console.print(f"Trend: {weight_trend_per_week(entries):+.2f} kg/week")

    console.print()
    console.print(create_strength_chart(strength_chart_rows(profile)))
    console.print()
    console.print(create_weekly_workout_chart(logs, weeks=4, today=today))
    console.print()
    console.print(
        create_calorie_chart(daily_calories(meal_logs, today), plan.nutrition_plan.total_calories)
    )


def print_saved_plans(workout_plans: list[WorkoutPlan], meal_plans: list[MealPlan]) -> None:
    """List stored workout and meal plans with their ids."""
    table = Table(title="Saved Plans")
    table.add_column("Kind", style="magenta")
    table.add_column("#", justify="right", style="dim", width=4)
    table.add_column("Name", style="cyan")
    table.add_column("Items", justify="right")
    table.add_column("Updated")

    for wp in workout_plans:
        table.add_row("workout", str(wp.id), wp.name, str(len(wp.exercises)), wp.updated_at)
    for mp in meal_plans:
        table.add_row("meals", str(mp.id), mp.name, str(len(mp.meals)), mp.updated_at)

    console.print(table)


def print_saved_workout_plan(plan: WorkoutPlan) -> None:
    """Print the exercises of a stored workout plan with their ids."""
    table = Table(title=f"#{plan.id} {plan.name}")
    table.add_column("Id", justify="right", style="dim", width=3)
    table.add_column("Exercise", style="cyan")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right", style="bold")
    table.add_column("Rest(s)", justify="right")
    table.add_column("kg", justify="right")

    for ex in plan.exercises:
        table.add_row(
            str(ex.id or ""), ex.name, str(ex.sets), ex.reps, str(ex.rest_time), f"{ex.weight:g}"
        )

    console.print(table)


def print_today(profile: UserProfile, plan: PersonalizedPlan, data: dict[str, list]) -> None:
    """Print the daily overview: goal, targets and what was logged today."""
    workout_logs = data["workout_logs"]
    meal_logs = data["meal_logs"]
    progress = data["progress_entries"]

    done = any(log.completed for log in workout_logs)
    eaten = sum(log.total_calories for log in meal_logs)

    console.print(f"[bold]Current goal:[/bold] {_aim_label(profile.fitness_aim)}")
    console.print(f"[bold]Daily calories:[/bold] {plan.nutrition_plan.total_calories}")
    console.print(f"[bold]Strength level:[/bold] {_level(plan.strength.overall)}")
    console.print(
        "[bold]Workout:[/bold] "
        + ("[green]completed[/green]" if done else "[yellow]not completed[/yellow]")
    )
    console.print(f"[bold]Calories logged:[/bold] {eaten:.0f}")
    if progress:
        latest = progress[-1]
        if latest.weight is not None:
            console.print(f"[bold]Weight today:[/bold] {latest.weight:.1f} kg")


def print_sync_queue(entries: list[SyncQueueEntry]) -> None:
    """Print pending store mutations."""
    if not entries:
        console.print("[yellow]Sync queue is empty.[/yellow]")
        return

    table = Table(title="Sync Queue")
    table.add_column("#", justify="right", style="dim", width=4)
    table.add_column("Time", style="cyan")
    table.add_column("Table", style="magenta")
    table.add_column("Operation")
    table.add_column("Record", justify="right")
    table.add_column("Synced", justify="center")

    for entry in entries:
        table.add_row(
            str(entry.id or ""),
            entry.timestamp,
            entry.table_name,
            entry.operation,
            str(entry.record_id),
            "yes" if entry.synced else "no",
        )
    console.print(table)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} [y/N]: ")
    return response.lower() in ("y", "yes")
