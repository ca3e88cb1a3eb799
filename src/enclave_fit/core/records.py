"""
Conversion of engine outputs into storable records.

The engine returns immutable templates and targets; the record store keeps
editable copies.  These helpers bridge the two without touching storage.
"""

from dataclasses import replace
from typing import Any, TypeVar

from .models import (
    Exercise,
    ExerciseLog,
    Ingredient,
    Meal,
    MealPlan,
    NutritionPlan,
    SetLog,
    WorkoutLog,
    WorkoutPlan,
    WorkoutProgram,
)

DEFAULT_MEAL_PLAN_NAME = "Personalized Meal Plan"

T = TypeVar("T", Exercise, Meal)


def build_workout_plan(program: WorkoutProgram, day: int = 0) -> WorkoutPlan:
    """
    Copy one day of a program into a WorkoutPlan record.

    Exercise ids are 1-based positions within the day; weight defaults to 0
    when the template has none.

    Raises:
        IndexError: If ``day`` is outside the program's workout days
    """
    if not 0 <= day < len(program.workouts):
        raise IndexError(
            f"Day {day + 1} out of range: '{program.name}' has {len(program.workouts)} days"
        )
    workout_day = program.workouts[day]
    exercises = [
        Exercise(
            name=ex.name,
            sets=ex.sets,
            reps=ex.reps,
            rest_time=ex.rest_time,
            weight=ex.weight or 0.0,
            notes=ex.notes,
            id=i,
        )
        for i, ex in enumerate(workout_day.exercises, 1)
    ]
    return WorkoutPlan(
        name=program.name,
        description=f"Personalized {program.type} program",
        exercises=exercises,
        frequency=program.frequency,
    )


def _sample_meals() -> list[Meal]:
    """The four default meals offered with a new meal plan."""
    return [
        Meal(
            id=1,
            name="Power Breakfast",
            meal_type="breakfast",
            ingredients=[
                Ingredient("Oatmeal", 80, "g", 312, 10.6, 54.8, 6.2),
                Ingredient("Banana", 150, "g", 134, 1.6, 34.3, 0.4),
                Ingredient("Protein Powder", 30, "g", 120, 25, 2, 1),
            ],
            calories=566,
            protein=37.2,
            carbs=91.1,
            fat=7.6,
        ),
        Meal(
            id=2,
            name="Elite Lunch",
            meal_type="lunch",
            ingredients=[
                Ingredient("Chicken Breast", 200, "g", 330, 62, 0, 7.4),
                Ingredient("Brown Rice", 100, "g", 112, 2.6, 23, 0.9),
                Ingredient("Broccoli", 150, "g", 51, 5.4, 10.1, 0.6),
                Ingredient("Olive Oil", 15, "ml", 135, 0, 0, 15),
            ],
            calories=628,
            protein=70,
            carbs=33.1,
            fat=24,
        ),
        Meal(
            id=3,
            name="Victory Dinner",
            meal_type="dinner",
            ingredients=[
                Ingredient("Salmon", 180, "g", 367, 55.2, 0, 15.3),
                Ingredient("Sweet Potato", 200, "g", 172, 3.8, 40, 0.2),
                Ingredient("Spinach", 100, "g", 23, 2.9, 3.6, 0.4),
                Ingredient("Avocado", 80, "g", 128, 1.6, 6.8, 11.6),
            ],
            calories=690,
            protein=63.5,
            carbs=50.4,
            fat=27.5,
        ),
        Meal(
            id=4,
            name="Recovery Snack",
            meal_type="snack",
            ingredients=[
                Ingredient("Greek Yogurt", 200, "g", 130, 20, 9, 0.4),
                Ingredient("Almonds", 30, "g", 174, 6.4, 6.1, 15.2),
                Ingredient("Berries", 100, "g", 43, 1.4, 9.6, 0.5),
            ],
            calories=347,
            protein=27.8,
            carbs=24.7,
            fat=16.1,
        ),
    ]


def build_meal_plan(nutrition: NutritionPlan) -> MealPlan:
    """MealPlan with the sample meals and the nutrition plan's targets."""
    return MealPlan(
        name=DEFAULT_MEAL_PLAN_NAME,
        meals=_sample_meals(),
        target_calories=nutrition.total_calories,
        target_protein=nutrition.protein,
        target_carbs=nutrition.carbs,
        target_fat=nutrition.fat,
    )


def build_completed_workout_log(plan: WorkoutPlan, date: str) -> WorkoutLog:
    """
    Mark a saved plan as done for ``date``.

    Each exercise gets one placeholder set (0 reps, 0 kg, completed).

    Raises:
        ValueError: If the plan has not been stored yet (no id)
    """
    if plan.id is None:
        raise ValueError("Workout plan must be saved before it can be logged")
    return WorkoutLog(
        workout_plan_id=plan.id,
        date=date,
        exercises=[
            ExerciseLog(
                exercise_id=ex.id or 0,
                sets=[SetLog(reps=0, weight=0.0, completed=True)],
            )
            for ex in plan.exercises
        ],
        completed=True,
    )


def meal_totals(meals: list[Meal]) -> dict[str, float]:
    """Summed calories and macros over a list of meals."""
    return {
        "calories": sum(m.calories for m in meals),
        "protein": sum(m.protein for m in meals),
        "carbs": sum(m.carbs for m in meals),
        "fat": sum(m.fat for m in meals),
    }


# ---------------------------------------------------------------------------
# Editing saved plans
# ---------------------------------------------------------------------------


def _next_item_id(items: list[T]) -> int:
    return max((item.id or 0 for item in items), default=0) + 1


def _item_index(items: list[T], item_id: int, kind: str) -> int:
    for i, item in enumerate(items):
        if item.id == item_id:
            return i
    raise KeyError(f"No {kind} with id {item_id}")


def add_exercise(plan: WorkoutPlan, exercise: Exercise) -> Exercise:
    """Append an exercise with the next free id; returns the stored copy."""
    added = replace(exercise, id=_next_item_id(plan.exercises))
    plan.exercises.append(added)
    return added


def update_exercise(plan: WorkoutPlan, exercise_id: int, **changes: Any) -> Exercise:
    """
    Apply field changes to one exercise of a plan.

    Raises:
        KeyError: If the plan has no exercise with that id
        ValueError: If the changed exercise is invalid (e.g. sets < 1)
    """
    i = _item_index(plan.exercises, exercise_id, "exercise")
    plan.exercises[i] = replace(plan.exercises[i], **changes)
    return plan.exercises[i]


def remove_exercise(plan: WorkoutPlan, exercise_id: int) -> Exercise:
    """Remove one exercise; raises KeyError if it is not in the plan."""
    return plan.exercises.pop(_item_index(plan.exercises, exercise_id, "exercise"))


def add_meal(plan: MealPlan, meal: Meal) -> Meal:
    """Append a meal with the next free id; returns the stored copy."""
    added = replace(meal, id=_next_item_id(plan.meals))
    plan.meals.append(added)
    return added


def update_meal(plan: MealPlan, meal_id: int, **changes: Any) -> Meal:
    """
    Apply field changes to one meal of a plan.

    Raises:
        KeyError: If the plan has no meal with that id
        ValueError: If meal_type is changed to an unknown type
    """
    i = _item_index(plan.meals, meal_id, "meal")
    plan.meals[i] = replace(plan.meals[i], **changes)
    return plan.meals[i]


def remove_meal(plan: MealPlan, meal_id: int) -> Meal:
    """Remove one meal; raises KeyError if it is not in the plan."""
    return plan.meals.pop(_item_index(plan.meals, meal_id, "meal"))
