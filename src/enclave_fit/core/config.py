"""
Configuration constants for the evaluation engine.

All model parameters are centralized here. They are fixed: the engine does
not read any of them from user configuration.
"""

from typing import Final

# =============================================================================
# ENERGY EXPENDITURE
# =============================================================================

# Mifflin-St Jeor: 10*kg + 6.25*cm - 5*years + offset
BMR_WEIGHT_COEF: Final[float] = 10.0
BMR_HEIGHT_COEF: Final[float] = 6.25
BMR_AGE_COEF: Final[float] = 5.0
BMR_MALE_OFFSET: Final[float] = 5.0
BMR_FEMALE_OFFSET: Final[float] = -161.0  # also used for "other"

ACTIVITY_MULTIPLIER: Final[float] = 1.55  # Moderately active (3-5 days/week)

# =============================================================================
# ONE-REP MAX (Epley)
# =============================================================================

EPLEY_DIVISOR: Final[float] = 30.0  # 1RM = w * (1 + reps / 30)

# =============================================================================
# STRENGTH STANDARDS (body-weight ratios)
# =============================================================================

# Ascending ordinal ranking; "overall" is the lowest index of the three lifts.
STRENGTH_LEVELS: Final[tuple[str, ...]] = ("beginner", "novice", "intermediate", "advanced")

ASSESSED_LIFTS: Final[tuple[str, ...]] = ("bench", "squat", "deadlift")

MALE_STANDARDS: Final[dict[str, dict[str, float]]] = {
    "bench":    {"beginner": 0.5, "novice": 0.8, "intermediate": 1.2, "advanced": 1.5},
    "squat":    {"beginner": 0.8, "novice": 1.2, "intermediate": 1.8, "advanced": 2.2},
    "deadlift": {"beginner": 1.0, "novice": 1.5, "intermediate": 2.0, "advanced": 2.5},
}

# Shared by "female" and "other"
FEMALE_STANDARDS: Final[dict[str, dict[str, float]]] = {
    "bench":    {"beginner": 0.3, "novice": 0.5, "intermediate": 0.8, "advanced": 1.0},
    "squat":    {"beginner": 0.6, "novice": 0.9, "intermediate": 1.3, "advanced": 1.6},
    "deadlift": {"beginner": 0.8, "novice": 1.2, "intermediate": 1.6, "advanced": 2.0},
}

# =============================================================================
# NUTRITION
# =============================================================================

# fitness_aim -> (calorie factor, protein %, carbs %, fat %)
NUTRITION_SPLITS: Final[dict[str, tuple[float, int, int, int]]] = {
    "lose_fat":    (0.80, 40, 30, 30),  # 20% deficit
    "gain_muscle": (1.15, 25, 50, 25),  # 15% surplus
    "maintain":    (1.00, 30, 40, 30),
}
DEFAULT_FITNESS_AIM: Final[str] = "maintain"

KCAL_PER_G_PROTEIN: Final[int] = 4
KCAL_PER_G_CARBS: Final[int] = 4
KCAL_PER_G_FAT: Final[int] = 9

MEALS_PER_DAY: Final[int] = 4

# =============================================================================
# PROGRAM SELECTION
# =============================================================================

# fitness_aim -> program type; anything unlisted falls back to strength
PROGRAM_FOR_AIM: Final[dict[str, str]] = {
    "gain_muscle": "hypertrophy",
    "lose_fat": "fat_loss",
}
DEFAULT_PROGRAM_TYPE: Final[str] = "strength"

# =============================================================================
# ONBOARDING RANGES (validated by io.serializers, never by the engine)
# =============================================================================

GENDERS: Final[tuple[str, ...]] = ("male", "female", "other")
FITNESS_AIMS: Final[tuple[str, ...]] = ("lose_fat", "gain_muscle", "maintain")

AGE_MIN: Final[int] = 13
AGE_MAX: Final[int] = 100
WEIGHT_MIN_KG: Final[float] = 30.0
WEIGHT_MAX_KG: Final[float] = 300.0
HEIGHT_MIN_CM: Final[float] = 100.0
HEIGHT_MAX_CM: Final[float] = 250.0

# =============================================================================
# PROGRESS DISPLAY
# =============================================================================

# "week" steps back 7 days; the others step back whole calendar months,
# clamped to the last day of a shorter month (Mar 31 - 1 month = Feb 28).
RANGE_WEEK_DAYS: Final[int] = 7
RANGE_MONTHS: Final[dict[str, int]] = {
    "month": 1,
    "3months": 3,
    "6months": 6,
}
RANGES: Final[tuple[str, ...]] = ("week", "month", "3months", "6months")
RANGE_LABELS: Final[dict[str, str]] = {
    "week": "Last 7 Days",
    "month": "Last Month",
    "3months": "Last 3 Months",
    "6months": "Last 6 Months",
}
DEFAULT_RANGE: Final[str] = "month"

CALORIE_CHART_DAYS: Final[int] = 7

# Strength chart: lifts left at 0 are shown at a body-weight multiple;
# "previous" and "target" bars are fixed fractions of the current value.
STRENGTH_CHART_LIFTS: Final[tuple[tuple[str, str, float], ...]] = (
    ("Bench Press", "bench_press", 0.8),
    ("Squat", "squat", 1.2),
    ("Deadlift", "deadlift", 1.5),
    ("Overhead Press", "overhead_press", 0.6),
)
STRENGTH_CHART_PREVIOUS: Final[float] = 0.9
STRENGTH_CHART_TARGET: Final[float] = 1.1
