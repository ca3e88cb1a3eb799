"""
Formula-focused unit tests for the evaluation engine.

Values are hand-computed from the formulas so the tests double as worked
examples:

  BMR  = 10·kg + 6.25·cm − 5·age + (5 | −161)
  TDEE = BMR × 1.55
  1RM  = w × (1 + reps/30)
"""

import math
from dataclasses import replace

import pytest

from enclave_fit.core.config import (
    ACTIVITY_MULTIPLIER,
    FEMALE_STANDARDS,
    MALE_STANDARDS,
    NUTRITION_SPLITS,
    STRENGTH_LEVELS,
)
from enclave_fit.core.evaluation import (
    STATIC_RECOMMENDATIONS,
    assess_strength_level,
    classify_lift,
    compute_bmr,
    compute_nutrition_plan,
    compute_tdee,
    create_personalized_plan,
    estimate_one_rep_max,
    macro_split,
    percentages_from_grams,
    program_type_for_aim,
    round_half_up,
    select_workout_program,
)
from enclave_fit.core.models import UserProfile

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _profile(**overrides) -> UserProfile:
    """80 kg, 180 cm, 30 y male: BMR 1780, TDEE 2759."""
    base = UserProfile(
        weight=80.0,
        height=180.0,
        age=30,
        gender="male",
        fitness_aim="lose_fat",
        bench_press=100.0,
        squat=140.0,
        deadlift=200.0,
        overhead_press=60.0,
    )
    return replace(base, **overrides)


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------


class TestRoundHalfUp:
    def test_half_goes_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4

    def test_negative_half_goes_towards_positive_infinity(self):
        assert round_half_up(-2.5) == -2

    def test_ordinary_values(self):
        assert round_half_up(220.72) == 221
        assert round_half_up(165.4) == 165

    def test_non_finite_passthrough(self):
        assert math.isnan(round_half_up(math.nan))
        assert round_half_up(math.inf) == math.inf


# ---------------------------------------------------------------------------
# Energy expenditure
# ---------------------------------------------------------------------------


class TestBMR:
    def test_male(self):
        # 800 + 1125 - 150 + 5
        assert compute_bmr(_profile()) == pytest.approx(1780.0)

    def test_female(self):
        # 600 + 1031.25 - 125 - 161
        p = _profile(weight=60.0, height=165.0, age=25, gender="female")
        assert compute_bmr(p) == pytest.approx(1345.25)

    def test_other_uses_female_offset(self):
        male = compute_bmr(_profile())
        other = compute_bmr(_profile(gender="other"))
        assert male - other == pytest.approx(166.0)

    def test_zero_inputs_do_not_raise(self):
        p = _profile(weight=0.0, height=0.0, age=0)
        assert compute_bmr(p) == pytest.approx(5.0)


class TestTDEE:
    def test_fixed_multiplier(self):
        assert ACTIVITY_MULTIPLIER == 1.55
        assert compute_tdee(_profile()) == pytest.approx(2759.0)


# ---------------------------------------------------------------------------
# One-rep max
# ---------------------------------------------------------------------------


class TestEpley:
    def test_five_reps(self):
        assert estimate_one_rep_max(100, 5) == pytest.approx(116.6667, rel=1e-4)

    def test_ten_reps(self):
        assert estimate_one_rep_max(60, 10) == pytest.approx(80.0)

    def test_ten_reps_hundred_kg(self):
        assert estimate_one_rep_max(100, 10) == pytest.approx(133.3333, rel=1e-4)

    def test_negative_reps_not_guarded(self):
        # 100 × (1 − 3/30)
        assert estimate_one_rep_max(100, -3) == pytest.approx(90.0)

    def test_single_rep_is_identity(self):
        assert estimate_one_rep_max(142.5, 1) == 142.5

    def test_zero_reps_not_guarded(self):
        assert estimate_one_rep_max(100, 0) == pytest.approx(100.0)

    def test_zero_weight(self):
        assert estimate_one_rep_max(0, 8) == 0


# ---------------------------------------------------------------------------
# Strength tiers
# ---------------------------------------------------------------------------


class TestStrengthLevel:
    def test_per_lift_tiers(self):
        # bench 1.25 → intermediate, squat 1.75 → novice, deadlift 2.5 → advanced
        s = assess_strength_level(_profile())
        assert s.bench == "intermediate"
        assert s.squat == "novice"
        assert s.deadlift == "advanced"

    def test_overall_is_weakest_lift(self):
        assert assess_strength_level(_profile()).overall == "novice"

    def test_missing_lift_pulls_overall_to_beginner(self):
        s = assess_strength_level(_profile(squat=0.0))
        assert s.squat == "beginner"
        assert s.overall == "beginner"

    def test_threshold_is_inclusive(self):
        assert classify_lift(96.0, 80.0, MALE_STANDARDS["bench"]) == "intermediate"
        assert classify_lift(95.9, 80.0, MALE_STANDARDS["bench"]) == "novice"

    def test_bench_at_advanced_ratio(self):
        # 120 / 80 = 1.5 exactly
        assert assess_strength_level(_profile(bench_press=120.0)).bench == "advanced"

    def test_female_standards_are_lower(self):
        # bench 0.8 → intermediate for women, novice for men
        assert classify_lift(48.0, 60.0, FEMALE_STANDARDS["bench"]) == "intermediate"
        assert classify_lift(48.0, 60.0, MALE_STANDARDS["bench"]) == "novice"

    def test_overhead_press_is_not_assessed(self):
        a = assess_strength_level(_profile(overhead_press=0.0))
        b = assess_strength_level(_profile(overhead_press=500.0))
        assert a == b

    def test_zero_bodyweight_zero_lift_is_beginner(self):
        s = assess_strength_level(_profile(weight=0.0, bench_press=0.0, squat=0.0, deadlift=0.0))
        assert s.overall == "beginner"

    def test_zero_bodyweight_positive_lift_is_advanced(self):
        s = assess_strength_level(_profile(weight=0.0))
        assert (s.bench, s.squat, s.deadlift) == ("advanced", "advanced", "advanced")
        assert s.overall == "advanced"

    def test_levels_are_ordered(self):
        assert STRENGTH_LEVELS == ("beginner", "novice", "intermediate", "advanced")


# ---------------------------------------------------------------------------
# Program selection
# ---------------------------------------------------------------------------


class TestProgramSelection:
    @pytest.mark.parametrize(
        "aim,expected",
        [("gain_muscle", "hypertrophy"), ("lose_fat", "fat_loss"), ("maintain", "strength")],
    )
    def test_aim_mapping(self, aim, expected):
        assert program_type_for_aim(aim) == expected
        assert select_workout_program(_profile(fitness_aim=aim)).type == expected

    def test_unknown_aim_falls_back_to_strength(self):
        assert select_workout_program(_profile(fitness_aim="bulk")).type == "strength"

    def test_strength_level_does_not_change_program(self):
        weak = select_workout_program(_profile(bench_press=0.0, squat=0.0, deadlift=0.0))
        strong = select_workout_program(_profile(bench_press=300.0, squat=400.0, deadlift=500.0))
        assert weak is strong

    def test_same_template_each_call(self):
        assert select_workout_program(_profile()) == select_workout_program(_profile())


# ---------------------------------------------------------------------------
# Nutrition
# ---------------------------------------------------------------------------


class TestNutrition:
    def test_lose_fat(self):
        # calories 2759 × 0.8 = 2207.2
        n = compute_nutrition_plan(_profile())
        assert n.total_calories == 2207
        assert (n.protein, n.carbs, n.fat) == (221, 166, 74)
        assert (n.protein_percent, n.carbs_percent, n.fat_percent) == (40, 30, 30)
        assert n.meals_per_day == 4

    def test_gain_muscle(self):
        # calories 2759 × 1.15 = 3172.85
        n = compute_nutrition_plan(_profile(fitness_aim="gain_muscle"))
        assert n.total_calories == 3173
        assert (n.protein, n.carbs, n.fat) == (198, 397, 88)

    def test_maintain(self):
        n = compute_nutrition_plan(_profile(fitness_aim="maintain"))
        assert n.total_calories == 2759
        assert (n.protein, n.carbs, n.fat) == (207, 276, 92)

    def test_unknown_aim_uses_maintain_split(self):
        assert compute_nutrition_plan(_profile(fitness_aim="bulk")) == compute_nutrition_plan(
            _profile(fitness_aim="maintain")
        )

    @pytest.mark.parametrize("aim", sorted(NUTRITION_SPLITS))
    def test_splits_sum_to_100(self, aim):
        assert sum(macro_split(aim)) == 100

    @pytest.mark.parametrize("aim", sorted(NUTRITION_SPLITS))
    def test_percentages_recoverable_from_grams(self, aim):
        n = compute_nutrition_plan(_profile(fitness_aim=aim))
        assert percentages_from_grams(n) == macro_split(aim)

    @pytest.mark.parametrize("aim", sorted(NUTRITION_SPLITS))
    def test_macro_calories_add_back_up(self, aim):
        # Each gram target is rounded alone: at most 0.5 g off per macro
        n = compute_nutrition_plan(_profile(fitness_aim=aim))
        macro_kcal = n.protein * 4 + n.carbs * 4 + n.fat * 9
        assert abs(macro_kcal - n.total_calories) <= 0.5 * (4 + 4 + 9)

    def test_percentages_from_zero_calories(self):
        n = replace(compute_nutrition_plan(_profile()), total_calories=0)
        assert percentages_from_grams(n) == (0, 0, 0)


# ---------------------------------------------------------------------------
# Personalized plan
# ---------------------------------------------------------------------------


class TestPersonalizedPlan:
    def test_recommendations(self):
        plan = create_personalized_plan(_profile())
        assert len(plan.recommendations) == 6
        assert plan.recommendations[0] == (
            "Based on your strength level (novice), we've designed a fat_loss program."
        )
        assert plan.recommendations[1] == "Your estimated TDEE is 2759 calories per day."
        assert plan.recommendations[2] == "Target 221g protein, 166g carbs, 74g fat daily."
        assert plan.recommendations[3:] == STATIC_RECOMMENDATIONS

    def test_deterministic(self):
        assert create_personalized_plan(_profile()) == create_personalized_plan(_profile())

    def test_parts_match_individual_operations(self):
        p = _profile(fitness_aim="gain_muscle")
        plan = create_personalized_plan(p)
        assert plan.workout_program == select_workout_program(p)
        assert plan.nutrition_plan == compute_nutrition_plan(p)
        assert plan.strength == assess_strength_level(p)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"weight": -80.0},
            {"weight": math.nan},
            {"height": -10.0, "age": -5},
            {"bench_press": -100.0, "squat": math.nan},
        ],
    )
    def test_nonsense_inputs_do_not_raise(self, overrides):
        plan = create_personalized_plan(_profile(**overrides))
        assert len(plan.recommendations) == 6
        assert plan.strength.overall in STRENGTH_LEVELS

    def test_negative_weight_is_beginner(self):
        plan = create_personalized_plan(_profile(weight=-80.0))
        assert plan.strength.overall == "beginner"

    def test_nan_weight_propagates(self):
        plan = create_personalized_plan(_profile(weight=math.nan))
        assert math.isnan(plan.nutrition_plan.total_calories)

    def test_outputs_are_immutable(self):
        plan = create_personalized_plan(_profile())
        with pytest.raises(AttributeError):
            plan.nutrition_plan.total_calories = 0  # type: ignore[misc]
        assert isinstance(plan.recommendations, tuple)
        assert isinstance(plan.workout_program.workouts, tuple)
