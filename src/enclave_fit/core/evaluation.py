"""
Personalization engine.

Turns a UserProfile into a PersonalizedPlan using a handful of fixed
formulas:

  BMR: Mifflin-St Jeor
  TDEE: BMR × 1.55 (moderately active, not configurable)
  1RM: Epley: w × (1 + reps/30), with reps == 1 returning w
  Tiers: lift / bodyweight ratio against gendered standards
  Macros: calorie factor and percentage split per fitness aim

Every function is pure and total.  Nothing here validates its input or
raises: invalid profiles produce deterministic (possibly meaningless)
numbers.  A bodyweight of 0 follows IEEE arithmetic (0/0 → nan, x/0 → ±inf)
instead of raising ZeroDivisionError.
"""

from __future__ import annotations

import math

from .config import (
    ACTIVITY_MULTIPLIER,
    ASSESSED_LIFTS,
    BMR_AGE_COEF,
    BMR_FEMALE_OFFSET,
    BMR_HEIGHT_COEF,
    BMR_MALE_OFFSET,
    BMR_WEIGHT_COEF,
    DEFAULT_FITNESS_AIM,
    DEFAULT_PROGRAM_TYPE,
    EPLEY_DIVISOR,
    FEMALE_STANDARDS,
    KCAL_PER_G_CARBS,
    KCAL_PER_G_FAT,
    KCAL_PER_G_PROTEIN,
    MALE_STANDARDS,
    MEALS_PER_DAY,
    NUTRITION_SPLITS,
    PROGRAM_FOR_AIM,
    STRENGTH_LEVELS,
)
from .models import (
    NutritionPlan,
    PersonalizedPlan,
    StrengthAssessment,
    UserProfile,
    WorkoutProgram,
)
from .programs.registry import get_program

STATIC_RECOMMENDATIONS: tuple[str, ...] = (
    "Track your workouts and adjust weights progressively.",
    "Stay consistent with your nutrition and training schedule.",
    "Take progress photos and measurements weekly.",
)


# ---------------------------------------------------------------------------
# Numeric helpers
# ---------------------------------------------------------------------------


def round_half_up(value: float) -> int | float:
    """
    Round to the nearest integer with .5 going towards +inf.

    Python's round() uses banker's rounding (2.5 → 2); calorie and macro
    targets use half-up (2.5 → 3).  Non-finite values are returned as-is.
    """
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5)


def _ratio(lift: float, bodyweight: float) -> float:
    """lift / bodyweight with IEEE semantics for a zero divisor."""
    if bodyweight == 0:
        if lift == 0 or math.isnan(lift):
            return math.nan
        return math.copysign(math.inf, lift) * math.copysign(1.0, bodyweight)
    return lift / bodyweight


# ---------------------------------------------------------------------------
# Energy expenditure
# ---------------------------------------------------------------------------


def compute_bmr(profile: UserProfile) -> float:
    """
    Basal metabolic rate (kcal/day), Mifflin-St Jeor.

    male:         10·kg + 6.25·cm − 5·age + 5
    female/other: 10·kg + 6.25·cm − 5·age − 161
    """
    offset = BMR_MALE_OFFSET if profile.gender == "male" else BMR_FEMALE_OFFSET
    return (
        BMR_WEIGHT_COEF * profile.weight
        + BMR_HEIGHT_COEF * profile.height
        - BMR_AGE_COEF * profile.age
        + offset
    )


def compute_tdee(profile: UserProfile) -> float:
    """Total daily energy expenditure: BMR × fixed activity multiplier."""
    return compute_bmr(profile) * ACTIVITY_MULTIPLIER


def estimate_one_rep_max(weight: float, reps: float) -> float:
    """
    Epley one-rep-max estimate.

    A single rep is already a 1RM and is returned unchanged.  reps <= 0 is
    not guarded.
    """
    if reps == 1:
        return weight
    return weight * (1 + reps / EPLEY_DIVISOR)


# ---------------------------------------------------------------------------
# Strength tiers
# ---------------------------------------------------------------------------


def _strength_standards(gender: str) -> dict[str, dict[str, float]]:
    return MALE_STANDARDS if gender == "male" else FEMALE_STANDARDS


def classify_lift(lift_weight: float, bodyweight: float, standard: dict[str, float]) -> str:
    """
    Tier of one lift: the highest threshold the ratio meets, else beginner.

    nan ratios fail every comparison and therefore land on beginner.
    """
    ratio = _ratio(lift_weight, bodyweight)
    if ratio >= standard["advanced"]:
        return "advanced"
    if ratio >= standard["intermediate"]:
        return "intermediate"
    if ratio >= standard["novice"]:
        return "novice"
    return "beginner"


def assess_strength_level(profile: UserProfile) -> StrengthAssessment:
    """
    Classify bench, squat and deadlift against body-weight standards.

    ``overall`` is the weakest of the three, so any lift left at 0 pulls
    overall down to beginner.
    """
    standards = _strength_standards(profile.gender)
    lifts = {
        "bench": profile.bench_press,
        "squat": profile.squat,
        "deadlift": profile.deadlift,
    }
    levels = {
        lift: classify_lift(lifts[lift], profile.weight, standards[lift])
        for lift in ASSESSED_LIFTS
    }
    overall_index = min(STRENGTH_LEVELS.index(level) for level in levels.values())

    return StrengthAssessment(
        bench=levels["bench"],  # type: ignore[arg-type]
        squat=levels["squat"],  # type: ignore[arg-type]
        deadlift=levels["deadlift"],  # type: ignore[arg-type]
        overall=STRENGTH_LEVELS[overall_index],  # type: ignore[arg-type]
    )


# ---------------------------------------------------------------------------
# Program selection
# ---------------------------------------------------------------------------


def program_type_for_aim(fitness_aim: str) -> str:
    """gain_muscle → hypertrophy, lose_fat → fat_loss, anything else → strength."""
    return PROGRAM_FOR_AIM.get(fitness_aim, DEFAULT_PROGRAM_TYPE)


def select_workout_program(profile: UserProfile) -> WorkoutProgram:
    """
    Pick the program template for the profile's fitness aim.

    Only ``fitness_aim`` matters; the strength tier is shown alongside the
    program but does not change which template is returned.
    """
    return get_program(program_type_for_aim(profile.fitness_aim))


# ---------------------------------------------------------------------------
# Nutrition
# ---------------------------------------------------------------------------


def macro_split(fitness_aim: str) -> tuple[int, int, int]:
    """(protein %, carbs %, fat %) for a fitness aim."""
    _, protein_pct, carbs_pct, fat_pct = NUTRITION_SPLITS.get(
        fitness_aim, NUTRITION_SPLITS[DEFAULT_FITNESS_AIM]
    )
    return protein_pct, carbs_pct, fat_pct


def compute_nutrition_plan(profile: UserProfile) -> NutritionPlan:
    """
    Daily calorie and macro targets.

    calories = TDEE × factor(aim); each gram target is derived from the
    unrounded calories (protein and carbs at 4 kcal/g, fat at 9 kcal/g)
    and rounded on its own, so the grams need not add back up exactly.
    """
    factor, protein_pct, carbs_pct, fat_pct = NUTRITION_SPLITS.get(
        profile.fitness_aim, NUTRITION_SPLITS[DEFAULT_FITNESS_AIM]
    )
    calories = compute_tdee(profile) * factor

    protein = (calories * protein_pct / 100) / KCAL_PER_G_PROTEIN
    carbs = (calories * carbs_pct / 100) / KCAL_PER_G_CARBS
    fat = (calories * fat_pct / 100) / KCAL_PER_G_FAT

    return NutritionPlan(
        total_calories=round_half_up(calories),  # type: ignore[arg-type]
        protein=round_half_up(protein),  # type: ignore[arg-type]
        carbs=round_half_up(carbs),  # type: ignore[arg-type]
        fat=round_half_up(fat),  # type: ignore[arg-type]
        protein_percent=protein_pct,
        carbs_percent=carbs_pct,
        fat_percent=fat_pct,
        meals_per_day=MEALS_PER_DAY,
    )


def percentages_from_grams(plan: NutritionPlan) -> tuple[int, int, int]:
    """
    Re-derive the (protein %, carbs %, fat %) split from gram targets.

    Shares are snapped to the nearest 5% to absorb per-field rounding; for
    any realistic calorie target this reproduces the split table exactly.
    """
    total = plan.total_calories
    if not total:
        return 0, 0, 0

    def _pct(kcal: float) -> int:
        return int(round_half_up(kcal / total * 100 / 5) * 5)

    return (
        _pct(plan.protein * KCAL_PER_G_PROTEIN),
        _pct(plan.carbs * KCAL_PER_G_CARBS),
        _pct(plan.fat * KCAL_PER_G_FAT),
    )


# ---------------------------------------------------------------------------
# Full plan
# ---------------------------------------------------------------------------


def build_recommendations(
    strength: StrengthAssessment,
    program: WorkoutProgram,
    tdee: float,
    nutrition: NutritionPlan,
) -> tuple[str, ...]:
    """Interpolated summary lines followed by the fixed coaching lines."""
    return (
        f"Based on your strength level ({strength.overall}), "
        f"we've designed a {program.type} program.",
        f"Your estimated TDEE is {round_half_up(tdee)} calories per day.",
        f"Target {nutrition.protein}g protein, {nutrition.carbs}g carbs, "
        f"{nutrition.fat}g fat daily.",
    ) + STATIC_RECOMMENDATIONS


def create_personalized_plan(profile: UserProfile) -> PersonalizedPlan:
    """Compose strength assessment, program, nutrition and recommendations."""
    workout_program = select_workout_program(profile)
    nutrition_plan = compute_nutrition_plan(profile)
    strength = assess_strength_level(profile)

    return PersonalizedPlan(
        workout_program=workout_program,
        nutrition_plan=nutrition_plan,
        strength=strength,
        recommendations=build_recommendations(
            strength, workout_program, compute_tdee(profile), nutrition_plan
        ),
    )
