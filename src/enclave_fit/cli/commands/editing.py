"""
Saved-plan editing commands.

plans, add-exercise, update-exercise, remove-exercise, delete-plan,
add-meal, update-meal, remove-meal, delete-meal-plan.
"""

from typing import Annotated, Any, Optional

import typer

from ...core.models import Exercise, Meal, MealPlan, WorkoutPlan
from ...core.records import (
    add_exercise,
    add_meal,
    remove_exercise,
    remove_meal,
    update_exercise,
    update_meal,
)
from ...io.record_store import RecordStore
from ...io.serializers import ValidationError
from .. import views
from ..app import DataDirOption, app, get_store, load_profile_or_exit

PlanIdArg = Annotated[int, typer.Argument(help="Saved plan id (see 'plans')")]


def _workout_plan_or_exit(store: RecordStore, plan_id: int) -> WorkoutPlan:
    load_profile_or_exit(store)
    try:
        plan = store.get_workout_plan(plan_id)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    if plan is None:
        views.print_error(f"No workout plan with id {plan_id}")
        raise typer.Exit(1)
    return plan


def _meal_plan_or_exit(store: RecordStore, plan_id: int) -> MealPlan:
    load_profile_or_exit(store)
    try:
        plan = store.get_meal_plan(plan_id)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    if plan is None:
        views.print_error(f"No meal plan with id {plan_id}")
        raise typer.Exit(1)
    return plan


def _changes(**fields: Any) -> dict[str, Any]:
    """Keep only the options that were given."""
    return {k: v for k, v in fields.items() if v is not None}


@app.command()
def plans(
    workout_id: Annotated[
        Optional[int],
        typer.Option("--workout", help="Show the exercises of one saved workout plan"),
    ] = None,
    meal_plan_id: Annotated[
        Optional[int],
        typer.Option("--meals", help="Show the meals of one saved meal plan"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """List saved workout and meal plans, or the items of one plan."""
    store = get_store(data_dir)
    if workout_id is not None:
        views.print_saved_workout_plan(_workout_plan_or_exit(store, workout_id))
        return
    if meal_plan_id is not None:
        views.print_meal_plan(_meal_plan_or_exit(store, meal_plan_id), show_ids=True)
        return

    load_profile_or_exit(store)
    try:
        workout_plans = store.list_workout_plans()
        meal_plans = store.list_meal_plans()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    views.print_saved_plans(workout_plans, meal_plans)


# =============================================================================
# Workout plans
# =============================================================================


@app.command("add-exercise")
def add_exercise_cmd(
    plan_id: PlanIdArg,
    name: Annotated[str, typer.Argument(help="Exercise name")],
    sets: Annotated[int, typer.Option("--sets", help="Number of sets")] = 3,
    reps: Annotated[str, typer.Option("--reps", help="Reps per set, e.g. 8-10")] = "10",
    rest: Annotated[int, typer.Option("--rest", help="Rest between sets in seconds")] = 90,
    weight: Annotated[float, typer.Option("--weight", help="Working weight in kg")] = 0.0,
    notes: Annotated[Optional[str], typer.Option("--notes", help="Notes")] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Add an exercise to a saved workout plan."""
    store = get_store(data_dir)
    plan = _workout_plan_or_exit(store, plan_id)

    try:
        exercise = add_exercise(
            plan,
            Exercise(name=name, sets=sets, reps=reps, rest_time=rest, weight=weight, notes=notes),
        )
        store.update_workout_plan(plan)
    except (FileNotFoundError, ValidationError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Added exercise #{exercise.id} {exercise.name} to '{plan.name}'")


@app.command("update-exercise")
def update_exercise_cmd(
    plan_id: PlanIdArg,
    exercise_id: Annotated[int, typer.Argument(help="Exercise id (see 'plans --workout')")],
    name: Annotated[Optional[str], typer.Option("--name", help="Exercise name")] = None,
    sets: Annotated[Optional[int], typer.Option("--sets", help="Number of sets")] = None,
    reps: Annotated[Optional[str], typer.Option("--reps", help="Reps per set")] = None,
    rest: Annotated[Optional[int], typer.Option("--rest", help="Rest in seconds")] = None,
    weight: Annotated[Optional[float], typer.Option("--weight", help="Working weight in kg")] = None,
    notes: Annotated[Optional[str], typer.Option("--notes", help="Notes")] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Change fields of one exercise in a saved workout plan."""
    changes = _changes(name=name, sets=sets, reps=reps, rest_time=rest, weight=weight, notes=notes)
    if not changes:
        views.print_error("Nothing to update. Give at least one field option.")
        raise typer.Exit(1)

    store = get_store(data_dir)
    plan = _workout_plan_or_exit(store, plan_id)

    try:
        exercise = update_exercise(plan, exercise_id, **changes)
        store.update_workout_plan(plan)
    except KeyError as e:
        views.print_error(e.args[0])
        raise typer.Exit(1)
    except (FileNotFoundError, ValidationError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Updated exercise #{exercise.id} {exercise.name}")


@app.command("remove-exercise")
def remove_exercise_cmd(
    plan_id: PlanIdArg,
    exercise_id: Annotated[int, typer.Argument(help="Exercise id (see 'plans --workout')")],
    data_dir: DataDirOption = None,
) -> None:
    """Remove one exercise from a saved workout plan."""
    store = get_store(data_dir)
    plan = _workout_plan_or_exit(store, plan_id)

    try:
        removed = remove_exercise(plan, exercise_id)
        store.update_workout_plan(plan)
    except KeyError as e:
        views.print_error(e.args[0])
        raise typer.Exit(1)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Removed exercise #{removed.id} {removed.name}")


@app.command("delete-plan")
def delete_plan(
    plan_id: PlanIdArg,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Delete without prompting"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """Delete a saved workout plan."""
    store = get_store(data_dir)
    plan = _workout_plan_or_exit(store, plan_id)

    if not force and not views.confirm_action(f"Delete workout plan #{plan_id} '{plan.name}'?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    try:
        store.delete_workout_plan(plan_id)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Deleted workout plan #{plan_id}")


# =============================================================================
# Meal plans
# =============================================================================


@app.command("add-meal")
def add_meal_cmd(
    plan_id: PlanIdArg,
    name: Annotated[str, typer.Argument(help="Meal name")],
    meal_type: Annotated[
        str,
        typer.Option("--type", help="breakfast/lunch/dinner/snack"),
    ] = "snack",
    calories: Annotated[float, typer.Option("--calories", help="kcal")] = 0.0,
    protein: Annotated[float, typer.Option("--protein", help="Protein in g")] = 0.0,
    carbs: Annotated[float, typer.Option("--carbs", help="Carbs in g")] = 0.0,
    fat: Annotated[float, typer.Option("--fat", help="Fat in g")] = 0.0,
    data_dir: DataDirOption = None,
) -> None:
    """Add a meal to a saved meal plan."""
    store = get_store(data_dir)
    plan = _meal_plan_or_exit(store, plan_id)

    try:
        meal = add_meal(
            plan,
            Meal(
                name=name,
                meal_type=meal_type,  # type: ignore[arg-type]
                calories=calories,
                protein=protein,
                carbs=carbs,
                fat=fat,
            ),
        )
        store.update_meal_plan(plan)
    except (FileNotFoundError, ValidationError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Added meal #{meal.id} {meal.name} to '{plan.name}'")


@app.command("update-meal")
def update_meal_cmd(
    plan_id: PlanIdArg,
    meal_id: Annotated[int, typer.Argument(help="Meal id (see 'plans --meals')")],
    name: Annotated[Optional[str], typer.Option("--name", help="Meal name")] = None,
    meal_type: Annotated[Optional[str], typer.Option("--type", help="breakfast/lunch/dinner/snack")] = None,
    calories: Annotated[Optional[float], typer.Option("--calories", help="kcal")] = None,
    protein: Annotated[Optional[float], typer.Option("--protein", help="Protein in g")] = None,
    carbs: Annotated[Optional[float], typer.Option("--carbs", help="Carbs in g")] = None,
    fat: Annotated[Optional[float], typer.Option("--fat", help="Fat in g")] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Change fields of one meal in a saved meal plan."""
    changes = _changes(
        name=name, meal_type=meal_type, calories=calories, protein=protein, carbs=carbs, fat=fat
    )
    if not changes:
        views.print_error("Nothing to update. Give at least one field option.")
        raise typer.Exit(1)

    store = get_store(data_dir)
    plan = _meal_plan_or_exit(store, plan_id)

    try:
        meal = update_meal(plan, meal_id, **changes)
        store.update_meal_plan(plan)
    except KeyError as e:
        views.print_error(e.args[0])
        raise typer.Exit(1)
    except (FileNotFoundError, ValidationError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Updated meal #{meal.id} {meal.name}")


@app.command("remove-meal")
def remove_meal_cmd(
    plan_id: PlanIdArg,
    meal_id: Annotated[int, typer.Argument(help="Meal id (see 'plans --meals')")],
    data_dir: DataDirOption = None,
) -> None:
    """Remove one meal from a saved meal plan."""
    store = get_store(data_dir)
    plan = _meal_plan_or_exit(store, plan_id)

    try:
        removed = remove_meal(plan, meal_id)
        store.update_meal_plan(plan)
    except KeyError as e:
        views.print_error(e.args[0])
        raise typer.Exit(1)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Removed meal #{removed.id} {removed.name}")


@app.command("delete-meal-plan")
def delete_meal_plan(
    plan_id: PlanIdArg,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Delete without prompting"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """Delete a saved meal plan."""
    store = get_store(data_dir)
    plan = _meal_plan_or_exit(store, plan_id)

    if not force and not views.confirm_action(f"Delete meal plan #{plan_id} '{plan.name}'?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    try:
        store.delete_meal_plan(plan_id)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Deleted meal plan #{plan_id}")
