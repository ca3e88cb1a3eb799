"""
JSON serialization and input validation for enclave-fit models.

Handles conversion between dataclasses and JSON-compatible dicts, and the
onboarding range checks that the evaluation engine itself never performs.
"""

import re
from dataclasses import asdict
from datetime import datetime
from typing import Any

from ..core.config import (
    AGE_MAX,
    AGE_MIN,
    FITNESS_AIMS,
    GENDERS,
    HEIGHT_MAX_CM,
    HEIGHT_MIN_CM,
    WEIGHT_MAX_KG,
    WEIGHT_MIN_KG,
)
from ..core.models import (
    Exercise,
    ExerciseLog,
    Ingredient,
    Meal,
    MealLog,
    MealPlan,
    PersonalizedPlan,
    ProgressEntry,
    SetLog,
    SyncQueueEntry,
    UserProfile,
    WorkoutLog,
    WorkoutPlan,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


# =============================================================================
# Field validators
# =============================================================================


def validate_date(date_str: str) -> str:
    """
    Validate an ISO date string.

    Returns:
        The same YYYY-MM-DD string

    Raises:
        ValidationError: If the format or the date itself is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def validate_non_negative(value: int | float, name: str) -> int | float:
    """Raise ValidationError if value is negative."""
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def validate_positive(value: int | float, name: str) -> int | float:
    """Raise ValidationError if value is not positive."""
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def validate_range(value: int | float, low: float, high: float, name: str) -> int | float:
    """Raise ValidationError if value lies outside [low, high]."""
    if not low <= value <= high:
        raise ValidationError(f"{name} must be between {low:g} and {high:g}, got {value}")
    return value


def validate_choice(value: str, choices: tuple[str, ...], name: str) -> str:
    """Raise ValidationError if value is not one of choices."""
    if value not in choices:
        raise ValidationError(f"Invalid {name}: {value}. Must be one of {choices}")
    return value


def validate_profile(profile: UserProfile) -> UserProfile:
    """
    Check onboarding input before it reaches the engine.

    Age 13-100, weight 30-300 kg, height 100-250 cm, known gender and
    fitness aim, non-negative lifts.

    Raises:
        ValidationError: On the first failing field
    """
    validate_range(profile.age, AGE_MIN, AGE_MAX, "age")
    validate_range(profile.weight, WEIGHT_MIN_KG, WEIGHT_MAX_KG, "weight")
    validate_range(profile.height, HEIGHT_MIN_CM, HEIGHT_MAX_CM, "height")
    validate_choice(profile.gender, GENDERS, "gender")
    validate_choice(profile.fitness_aim, FITNESS_AIMS, "fitness_aim")
    validate_non_negative(profile.bench_press, "bench_press")
    validate_non_negative(profile.squat, "squat")
    validate_non_negative(profile.deadlift, "deadlift")
    validate_non_negative(profile.overhead_press, "overhead_press")
    return profile


# =============================================================================
# Profile
# =============================================================================


def user_profile_to_dict(profile: UserProfile) -> dict[str, Any]:
    """Convert UserProfile to a JSON-compatible dict."""
    return {
        "name": profile.name,
        "weight": profile.weight,
        "height": profile.height,
        "age": profile.age,
        "gender": profile.gender,
        "fitness_aim": profile.fitness_aim,
        "bench_press": profile.bench_press,
        "squat": profile.squat,
        "deadlift": profile.deadlift,
        "overhead_press": profile.overhead_press,
    }


def dict_to_user_profile(data: dict[str, Any]) -> UserProfile:
    """
    Convert dict to UserProfile.

    Missing lifts default to 0.  Values are type-converted but not range
    checked; call validate_profile() for that.

    Raises:
        ValidationError: If a required field is missing or not numeric
    """
    try:
        return UserProfile(
            weight=float(data["weight"]),
            height=float(data["height"]),
            age=int(data["age"]),
            gender=str(data["gender"]),
            fitness_aim=str(data["fitness_aim"]),
            bench_press=float(data.get("bench_press") or 0.0),
            squat=float(data.get("squat") or 0.0),
            deadlift=float(data.get("deadlift") or 0.0),
            overhead_press=float(data.get("overhead_press") or 0.0),
            name=str(data.get("name", "")),
        )
    except KeyError as e:
        raise ValidationError(f"Profile missing field: {e.args[0]}") from e
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid profile value: {e}") from e


# =============================================================================
# Workout plans and logs
# =============================================================================


def exercise_to_dict(exercise: Exercise) -> dict[str, Any]:
    return asdict(exercise)


def dict_to_exercise(data: dict[str, Any]) -> Exercise:
    validate_positive(data.get("sets", 0), "sets")
    validate_non_negative(data.get("rest_time", 0), "rest_time")
    validate_non_negative(data.get("weight") or 0, "weight")
    return Exercise(
        name=data["name"],
        sets=int(data["sets"]),
        reps=str(data["reps"]),
        rest_time=int(data["rest_time"]),
        weight=float(data.get("weight") or 0.0),
        notes=data.get("notes"),
        id=data.get("id"),
    )


def workout_plan_to_dict(plan: WorkoutPlan) -> dict[str, Any]:
    return {
        "id": plan.id,
        "name": plan.name,
        "description": plan.description,
        "exercises": [exercise_to_dict(e) for e in plan.exercises],
        "frequency": plan.frequency,
        "created_at": plan.created_at,
        "updated_at": plan.updated_at,
    }


def dict_to_workout_plan(data: dict[str, Any]) -> WorkoutPlan:
    return WorkoutPlan(
        name=data["name"],
        description=data.get("description", ""),
        exercises=[dict_to_exercise(e) for e in data.get("exercises", [])],
        frequency=int(data.get("frequency", 3)),
        id=data.get("id"),
        created_at=data.get("created_at", ""),
        updated_at=data.get("updated_at", ""),
    )


def workout_log_to_dict(log: WorkoutLog) -> dict[str, Any]:
    return asdict(log)


def dict_to_workout_log(data: dict[str, Any]) -> WorkoutLog:
    validate_date(data["date"])
    exercises = [
        ExerciseLog(
            exercise_id=int(e["exercise_id"]),
            sets=[
                SetLog(
                    reps=int(s["reps"]),
                    weight=float(s["weight"]),
                    completed=bool(s.get("completed", False)),
                    rpe=s.get("rpe"),
                )
                for s in e.get("sets", [])
            ],
            notes=e.get("notes"),
        )
        for e in data.get("exercises", [])
    ]
    return WorkoutLog(
        workout_plan_id=int(data["workout_plan_id"]),
        date=data["date"],
        exercises=exercises,
        duration=data.get("duration"),
        notes=data.get("notes"),
        completed=bool(data.get("completed", False)),
        id=data.get("id"),
        created_at=data.get("created_at", ""),
    )


# =============================================================================
# Meal plans and logs
# =============================================================================


def meal_to_dict(meal: Meal) -> dict[str, Any]:
    return asdict(meal)


def dict_to_meal(data: dict[str, Any]) -> Meal:
    try:
        return Meal(
            name=data["name"],
            meal_type=data["meal_type"],
            ingredients=[Ingredient(**i) for i in data.get("ingredients", [])],
            calories=float(data.get("calories", 0.0)),
            protein=float(data.get("protein", 0.0)),
            carbs=float(data.get("carbs", 0.0)),
            fat=float(data.get("fat", 0.0)),
            id=data.get("id"),
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


def meal_plan_to_dict(plan: MealPlan) -> dict[str, Any]:
    return asdict(plan)


def dict_to_meal_plan(data: dict[str, Any]) -> MealPlan:
    return MealPlan(
        name=data["name"],
        meals=[dict_to_meal(m) for m in data.get("meals", [])],
        target_calories=int(data.get("target_calories", 0)),
        target_protein=int(data.get("target_protein", 0)),
        target_carbs=int(data.get("target_carbs", 0)),
        target_fat=int(data.get("target_fat", 0)),
        id=data.get("id"),
        created_at=data.get("created_at", ""),
        updated_at=data.get("updated_at", ""),
    )


def meal_log_to_dict(log: MealLog) -> dict[str, Any]:
    return asdict(log)


def dict_to_meal_log(data: dict[str, Any]) -> MealLog:
    validate_date(data["date"])
    return MealLog(
        date=data["date"],
        meals=[dict_to_meal(m) for m in data.get("meals", [])],
        total_calories=float(data.get("total_calories", 0.0)),
        total_protein=float(data.get("total_protein", 0.0)),
        total_carbs=float(data.get("total_carbs", 0.0)),
        total_fat=float(data.get("total_fat", 0.0)),
        id=data.get("id"),
        created_at=data.get("created_at", ""),
    )


# =============================================================================
# Progress and sync queue
# =============================================================================


def progress_entry_to_dict(entry: ProgressEntry) -> dict[str, Any]:
    return asdict(entry)


def dict_to_progress_entry(data: dict[str, Any]) -> ProgressEntry:
    validate_date(data["date"])
    weight = data.get("weight")
    body_fat = data.get("body_fat")
    if weight is not None:
        validate_positive(weight, "weight")
    if body_fat is not None:
        validate_range(body_fat, 0, 100, "body_fat")
    return ProgressEntry(
        date=data["date"],
        weight=float(weight) if weight is not None else None,
        body_fat=float(body_fat) if body_fat is not None else None,
        measurements={k: float(v) for k, v in (data.get("measurements") or {}).items()},
        notes=data.get("notes"),
        id=data.get("id"),
        created_at=data.get("created_at", ""),
    )


def sync_entry_to_dict(entry: SyncQueueEntry) -> dict[str, Any]:
    return asdict(entry)


def dict_to_sync_entry(data: dict[str, Any]) -> SyncQueueEntry:
    validate_choice(data["operation"], ("create", "update", "delete"), "operation")
    return SyncQueueEntry(
        table_name=data["table_name"],
        operation=data["operation"],
        record_id=int(data["record_id"]),
        data=data.get("data"),
        timestamp=data["timestamp"],
        synced=bool(data.get("synced", False)),
        id=data.get("id"),
    )


# =============================================================================
# Engine output
# =============================================================================


def personalized_plan_to_dict(plan: PersonalizedPlan) -> dict[str, Any]:
    """
    Convert a PersonalizedPlan to a JSON-compatible dict.

    Tuples become lists; key names follow the dataclass fields.
    """
    data = asdict(plan)
    data["recommendations"] = list(plan.recommendations)
    program = data["workout_program"]
    program["workouts"] = [
        {"name": day["name"], "exercises": list(day["exercises"])}
        for day in program["workouts"]
    ]
    return data
