"""
Data models for enclave-fit.

Two families live here:

- Engine value objects (UserProfile in; StrengthAssessment, NutritionPlan,
  WorkoutProgram and PersonalizedPlan out).  These are frozen dataclasses
  holding tuples, so every engine output is immutable and compares by value.
- Store records (WorkoutPlan, MealPlan, logs, progress entries, sync queue).
  These are ordinary mutable dataclasses persisted by io.record_store.
"""

from dataclasses import dataclass, field
from typing import Literal

Gender = Literal["male", "female", "other"]
FitnessAim = Literal["lose_fat", "gain_muscle", "maintain"]
StrengthLevel = Literal["beginner", "novice", "intermediate", "advanced"]
ProgramType = Literal["strength", "hypertrophy", "fat_loss"]
MealType = Literal["breakfast", "lunch", "dinner", "snack"]
SyncOperation = Literal["create", "update", "delete"]


# =============================================================================
# Engine input
# =============================================================================


@dataclass(frozen=True)
class UserProfile:
    """
    Physical stats, goal and current lifts of the user.

    Values are not validated here: the engine accepts anything and
    propagates it through its arithmetic.  Onboarding input is checked by
    ``io.serializers.validate_profile`` before a profile is built.

    Lifts are one-rep values in kg; 0 means "not entered".
    """

    weight: float  # kg
    height: float  # cm
    age: int
    gender: str  # Gender
    fitness_aim: str  # FitnessAim; unknown values behave like "maintain"
    bench_press: float = 0.0
    squat: float = 0.0
    deadlift: float = 0.0
    overhead_press: float = 0.0
    name: str = ""


# =============================================================================
# Engine outputs
# =============================================================================


@dataclass(frozen=True)
class StrengthAssessment:
    """Per-lift strength tiers and the weakest of them as ``overall``."""

    bench: StrengthLevel
    squat: StrengthLevel
    deadlift: StrengthLevel
    overall: StrengthLevel


@dataclass(frozen=True)
class NutritionPlan:
    """Daily energy and macro targets.  Gram fields are rounded independently."""

    total_calories: int
    protein: int  # g
    carbs: int  # g
    fat: int  # g
    protein_percent: int
    carbs_percent: int
    fat_percent: int
    meals_per_day: int


@dataclass(frozen=True)
class ProgramExercise:
    """One prescribed exercise inside a workout day."""

    name: str
    sets: int
    reps: str  # free-form: "5", "8-10 each", "AMRAP", "60s"
    rest_time: int  # seconds
    weight: float | None = None  # relative-weight multiplier, unused by bundled templates
    notes: str | None = None


@dataclass(frozen=True)
class WorkoutDay:
    name: str
    exercises: tuple[ProgramExercise, ...]


@dataclass(frozen=True)
class WorkoutProgram:
    """A hand-authored program template (one per ProgramType)."""

    name: str
    type: ProgramType
    frequency: int  # days per week
    duration: int  # weeks
    workouts: tuple[WorkoutDay, ...]

    @property
    def total_exercises(self) -> int:
        """Number of exercise slots across all days."""
        return sum(len(day.exercises) for day in self.workouts)


@dataclass(frozen=True)
class PersonalizedPlan:
    """Everything the engine derives from one UserProfile."""

    workout_program: WorkoutProgram
    nutrition_plan: NutritionPlan
    strength: StrengthAssessment
    recommendations: tuple[str, ...]


# =============================================================================
# Store records
# =============================================================================


@dataclass
class Exercise:
    """An exercise inside a saved WorkoutPlan (editable copy of a template row)."""

    name: str
    sets: int
    reps: str
    rest_time: int
    weight: float = 0.0
    notes: str | None = None
    id: int | None = None

    def __post_init__(self) -> None:
        if self.sets < 1:
            raise ValueError("sets must be at least 1")
        if self.rest_time < 0:
            raise ValueError("rest_time must be non-negative")
        if self.weight < 0:
            raise ValueError("weight must be non-negative")


@dataclass
class WorkoutPlan:
    name: str
    description: str
    exercises: list[Exercise] = field(default_factory=list)
    frequency: int = 3  # days per week
    id: int | None = None
    created_at: str = ""
    updated_at: str = ""


@dataclass
class Ingredient:
    name: str
    amount: float
    unit: str
    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass
class Meal:
    name: str
    meal_type: MealType
    ingredients: list[Ingredient] = field(default_factory=list)
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    id: int | None = None

    def __post_init__(self) -> None:
        if self.meal_type not in ("breakfast", "lunch", "dinner", "snack"):
            raise ValueError(f"Invalid meal_type: {self.meal_type}")


@dataclass
class MealPlan:
    name: str
    meals: list[Meal] = field(default_factory=list)
    target_calories: int = 0
    target_protein: int = 0
    target_carbs: int = 0
    target_fat: int = 0
    id: int | None = None
    created_at: str = ""
    updated_at: str = ""


@dataclass
class SetLog:
    reps: int
    weight: float
    completed: bool = False
    rpe: int | None = None  # Rate of Perceived Exertion (1-10)

    def __post_init__(self) -> None:
        if self.reps < 0:
            raise ValueError("reps must be non-negative")
        if self.weight < 0:
            raise ValueError("weight must be non-negative")
        if self.rpe is not None and not 1 <= self.rpe <= 10:
            raise ValueError("rpe must be between 1 and 10")


@dataclass
class ExerciseLog:
    exercise_id: int
    sets: list[SetLog] = field(default_factory=list)
    notes: str | None = None


@dataclass
class WorkoutLog:
    """A logged workout against a saved WorkoutPlan."""

    workout_plan_id: int
    date: str  # ISO format: YYYY-MM-DD
    exercises: list[ExerciseLog] = field(default_factory=list)
    duration: int | None = None  # minutes
    notes: str | None = None
    completed: bool = False
    id: int | None = None
    created_at: str = ""


@dataclass
class MealLog:
    date: str  # ISO format: YYYY-MM-DD
    meals: list[Meal] = field(default_factory=list)
    total_calories: float = 0.0
    total_protein: float = 0.0
    total_carbs: float = 0.0
    total_fat: float = 0.0
    id: int | None = None
    created_at: str = ""


@dataclass
class ProgressEntry:
    """
    Body measurements for one day.

    ``measurements`` maps a body site (neck, chest, waist, ...) to cm.
    """

    date: str  # ISO format: YYYY-MM-DD
    weight: float | None = None
    body_fat: float | None = None  # percent
    measurements: dict[str, float] = field(default_factory=dict)
    notes: str | None = None
    id: int | None = None
    created_at: str = ""


@dataclass
class SyncQueueEntry:
    """
    One mutation of the record store.

    The queue is append-only; nothing flushes or merges it, so ``synced``
    stays False.
    """

    table_name: str
    operation: SyncOperation
    record_id: int
    data: dict | None
    timestamp: str
    synced: bool = False
    id: int | None = None
