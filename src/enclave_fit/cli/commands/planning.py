"""Planning commands: plan, workout, nutrition, one-rm."""

import json
from typing import Annotated, Optional

import typer

from ...core.evaluation import (
    compute_nutrition_plan,
    create_personalized_plan,
    estimate_one_rep_max,
    select_workout_program,
)
from ...core.records import build_meal_plan, build_workout_plan
from ...io.serializers import ValidationError, personalized_plan_to_dict
from .. import views
from ..app import DataDirOption, app, get_store, load_profile_or_exit

# Percent-of-1RM rows shown by one-rm
_ONE_RM_PERCENTAGES = (95, 90, 85, 80, 75, 70, 65, 60)


@app.command()
def plan(
    json_out: Annotated[
        bool,
        typer.Option("--json", help="Output the plan as JSON"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """Show the personalized plan: strength, nutrition, program and tips."""
    store = get_store(data_dir)
    profile = load_profile_or_exit(store)
    result = create_personalized_plan(profile)

    if json_out:
        typer.echo(json.dumps(personalized_plan_to_dict(result), indent=2))
        return

    views.print_personalized_plan(profile, result)


@app.command()
def workout(
    day: Annotated[
        Optional[int],
        typer.Option("--day", help="Program day to show (1-based); default all days"),
    ] = None,
    save: Annotated[
        bool,
        typer.Option("--save", help="Store the day as a workout plan"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """
    Show the workout program chosen for your fitness aim.

    With --save, the selected day (day 1 if --day is omitted) is stored as
    an editable workout plan that 'log-workout' can log against.
    """
    store = get_store(data_dir)
    profile = load_profile_or_exit(store)
    program = select_workout_program(profile)

    if day is not None and not 1 <= day <= len(program.workouts):
        views.print_error(f"--day must be between 1 and {len(program.workouts)}, got {day}")
        raise typer.Exit(1)

    views.print_program_overview(program)
    if day is None:
        for i in range(len(program.workouts)):
            views.print_workout_day(program, i)
    else:
        views.print_workout_day(program, day - 1)

    if save:
        record = build_workout_plan(program, (day or 1) - 1)
        try:
            plan_id = store.add_workout_plan(record)
        except (FileNotFoundError, ValidationError) as e:
            views.print_error(str(e))
            raise typer.Exit(1)
        views.print_success(f"Saved workout plan #{plan_id}: {record.name}")


@app.command()
def nutrition(
    save: Annotated[
        bool,
        typer.Option("--save", help="Store the targets and sample meals as a meal plan"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """Show daily calorie and macro targets with sample meals."""
    store = get_store(data_dir)
    profile = load_profile_or_exit(store)
    targets = compute_nutrition_plan(profile)
    meal_plan = build_meal_plan(targets)

    views.print_nutrition(targets)
    views.print_meal_plan(meal_plan)

    if save:
        try:
            plan_id = store.add_meal_plan(meal_plan)
        except (FileNotFoundError, ValidationError) as e:
            views.print_error(str(e))
            raise typer.Exit(1)
        views.print_success(f"Saved meal plan #{plan_id}: {meal_plan.name}")


@app.command("one-rm")
def one_rm(
    weight: Annotated[float, typer.Argument(help="Weight lifted in kg")],
    reps: Annotated[int, typer.Argument(help="Repetitions completed")],
) -> None:
    """
    Estimate a one-rep max with the Epley formula.

    weight × (1 + reps / 30), plus a table of training percentages.
    """
    if weight < 0 or reps < 0:
        views.print_error("weight and reps must be non-negative")
        raise typer.Exit(1)

    estimate = estimate_one_rep_max(weight, reps)
    views.console.print(f"Estimated 1RM: [bold]{estimate:.1f} kg[/bold]")
    for pct in _ONE_RM_PERCENTAGES:
        views.console.print(f"  {pct:>3}%  {estimate * pct / 100:6.1f} kg")
