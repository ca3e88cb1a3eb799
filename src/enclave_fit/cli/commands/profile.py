"""Profile management commands: init, show-profile, update-weight, update-lifts."""

from dataclasses import replace
from typing import Annotated, Optional

import typer

from ...core.config import DEFAULT_FITNESS_AIM
from ...core.evaluation import assess_strength_level, create_personalized_plan
from ...core.models import ProgressEntry, UserProfile
from ...io.serializers import ValidationError, validate_date, validate_profile
from .. import views
from ..app import DataDirOption, DateOption, app, get_store, load_profile_or_exit, today_str


@app.command()
def init(
    weight: Annotated[
        float,
        typer.Option("--weight", "-w", help="Body weight in kg"),
    ] = 80.0,
    height: Annotated[
        float,
        typer.Option("--height", "-h", help="Height in centimeters"),
    ] = 175.0,
    age: Annotated[
        int,
        typer.Option("--age", "-a", help="Age in years"),
    ] = 30,
    gender: Annotated[
        str,
        typer.Option("--gender", "-g", help="Gender (male/female)"),
    ] = "male",
    aim: Annotated[
        str,
        typer.Option("--aim", help="Fitness aim (gain_muscle/lose_fat/maintain)"),
    ] = DEFAULT_FITNESS_AIM,
    bench: Annotated[float, typer.Option("--bench", help="Bench press 1RM in kg")] = 0.0,
    squat: Annotated[float, typer.Option("--squat", help="Squat 1RM in kg")] = 0.0,
    deadlift: Annotated[float, typer.Option("--deadlift", help="Deadlift 1RM in kg")] = 0.0,
    ohp: Annotated[float, typer.Option("--ohp", help="Overhead press 1RM in kg")] = 0.0,
    name: Annotated[str, typer.Option("--name", "-n", help="Display name")] = "",
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Force overwrite without prompting"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """
    Create the user profile and the empty record tables.

    Prints the personalized plan for the new profile.  Existing records are
    kept; only profile.json is replaced.
    """
    store = get_store(data_dir)

    profile = UserProfile(
        weight=weight,
        height=height,
        age=age,
        gender=gender,  # type: ignore[arg-type]
        fitness_aim=aim,  # type: ignore[arg-type]
        bench_press=bench,
        squat=squat,
        deadlift=deadlift,
        overhead_press=ohp,
        name=name,
    )
    try:
        validate_profile(profile)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if store.exists() and not force:
        if not views.confirm_action(f"Profile already exists in {store.data_dir}. Overwrite?"):
            views.print_info("Cancelled.")
            raise typer.Exit(0)

    try:
        store.init()
        store.save_profile(profile)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    views.print_success(f"Profile saved to {store.profile_path}")

    if not (bench or squat or deadlift):
        views.print_warning(
            "No bench, squat or deadlift entered: strength level will show as beginner. "
            "Add them later with 'update-lifts'."
        )

    views.print_personalized_plan(profile, create_personalized_plan(profile))


@app.command("show-profile")
def show_profile(data_dir: DataDirOption = None) -> None:
    """Show the stored profile with BMR and TDEE."""
    store = get_store(data_dir)
    views.print_profile(load_profile_or_exit(store))


@app.command("update-weight")
def update_weight(
    weight: Annotated[float, typer.Argument(help="New body weight in kg")],
    date: DateOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Set a new body weight.

    Also records a progress entry for the day so the weight shows up in
    'progress'.
    """
    store = get_store(data_dir)
    profile = load_profile_or_exit(store)

    updated = replace(profile, weight=weight)
    try:
        validate_profile(updated)
        day = validate_date(date or today_str())
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    try:
        store.save_profile(updated)
        store.add_progress_entry(ProgressEntry(date=day, weight=weight))
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Weight updated: {profile.weight:.1f} → {weight:.1f} kg")
    plan = create_personalized_plan(updated)
    views.print_info(f"New daily calorie target: {plan.nutrition_plan.total_calories} kcal")


@app.command("update-lifts")
def update_lifts(
    bench: Annotated[Optional[float], typer.Option("--bench", help="Bench press 1RM in kg")] = None,
    squat: Annotated[Optional[float], typer.Option("--squat", help="Squat 1RM in kg")] = None,
    deadlift: Annotated[Optional[float], typer.Option("--deadlift", help="Deadlift 1RM in kg")] = None,
    ohp: Annotated[Optional[float], typer.Option("--ohp", help="Overhead press 1RM in kg")] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Update one-rep maxes and show the new strength assessment."""
    if bench is None and squat is None and deadlift is None and ohp is None:
        views.print_error("Give at least one of --bench, --squat, --deadlift, --ohp")
        raise typer.Exit(1)

    store = get_store(data_dir)
    profile = load_profile_or_exit(store)

    changes: dict[str, float] = {}
    if bench is not None:
        changes["bench_press"] = bench
    if squat is not None:
        changes["squat"] = squat
    if deadlift is not None:
        changes["deadlift"] = deadlift
    if ohp is not None:
        changes["overhead_press"] = ohp

    updated = replace(profile, **changes)
    try:
        validate_profile(updated)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    try:
        store.save_profile(updated)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    views.print_success("Lifts updated.")
    views.print_strength(assess_strength_level(updated))
