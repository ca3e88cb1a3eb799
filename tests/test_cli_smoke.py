"""
Smoke tests for the enclave-fit CLI.

Tests basic functionality:
- App runs and shows help
- init creates the profile and tables
- Plans, workouts and nutrition are shown and saved
- Workouts, meals and progress can be logged
- Errors exit with code 1
"""

import json
import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from enclave_fit.cli.main import app


runner = CliRunner()


@pytest.fixture
def temp_data_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "data"


def _init(data_dir: Path, *extra: str):
    return runner.invoke(app, [
        "init",
        "--data-dir", str(data_dir),
        "--weight", "80",
        "--height", "180",
        "--age", "30",
        "--gender", "male",
        "--aim", "lose_fat",
        "--bench", "100",
        "--squat", "140",
        "--deadlift", "200",
        *extra,
    ])


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "init" in result.output
        assert "log-progress" in result.output

    def test_init_creates_store(self, temp_data_dir):
        result = _init(temp_data_dir)

        assert result.exit_code == 0, result.output
        assert (temp_data_dir / "profile.json").exists()
        assert (temp_data_dir / "workout_plans.jsonl").exists()
        assert (temp_data_dir / "sync_queue.jsonl").exists()
        assert "2207" in result.output

    def test_init_rejects_out_of_range_age(self, temp_data_dir):
        result = _init(temp_data_dir, "--age", "12")
        assert result.exit_code == 1
        assert "Error" in result.output
        assert not (temp_data_dir / "profile.json").exists()

    def test_init_existing_profile_cancel(self, temp_data_dir):
        _init(temp_data_dir)
        result = runner.invoke(
            app,
            ["init", "--data-dir", str(temp_data_dir), "--weight", "90"],
            input="n\n",
        )
        assert result.exit_code == 0
        assert "Cancelled" in result.output
        profile = json.loads((temp_data_dir / "profile.json").read_text())
        assert profile["weight"] == 80.0

    def test_init_force_overwrites(self, temp_data_dir):
        _init(temp_data_dir)
        result = _init(temp_data_dir, "--weight", "90", "--force")
        assert result.exit_code == 0
        profile = json.loads((temp_data_dir / "profile.json").read_text())
        assert profile["weight"] == 90.0

    def test_plan_without_profile(self, temp_data_dir):
        result = runner.invoke(app, ["plan", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 1
        assert "init" in result.output

    def test_plan_json(self, temp_data_dir):
        _init(temp_data_dir)
        result = runner.invoke(app, ["plan", "--json", "--data-dir", str(temp_data_dir)])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["nutrition_plan"]["protein"] == 221
        assert data["workout_program"]["type"] == "fat_loss"
        assert data["strength"]["overall"] == "novice"

    def test_plan_table(self, temp_data_dir):
        _init(temp_data_dir)
        result = runner.invoke(app, ["plan", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0
        assert "Recommendations" in result.output

    def test_show_profile(self, temp_data_dir):
        _init(temp_data_dir)
        result = runner.invoke(app, ["show-profile", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0
        assert "1780" in result.output

    def test_workout_day_and_save(self, temp_data_dir):
        _init(temp_data_dir)
        result = runner.invoke(
            app, ["workout", "--day", "2", "--save", "--data-dir", str(temp_data_dir)]
        )
        assert result.exit_code == 0, result.output
        assert "Saved workout plan #1" in result.output

        lines = (temp_data_dir / "workout_plans.jsonl").read_text().splitlines()
        assert len(lines) == 1
        assert len(json.loads(lines[0])["exercises"]) == 10

    def test_workout_bad_day(self, temp_data_dir):
        _init(temp_data_dir)
        result = runner.invoke(app, ["workout", "--day", "4", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 1

    def test_nutrition_save(self, temp_data_dir):
        _init(temp_data_dir)
        result = runner.invoke(app, ["nutrition", "--save", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0, result.output
        assert "Saved meal plan #1" in result.output

    def test_one_rm(self):
        result = runner.invoke(app, ["one-rm", "100", "5"])
        assert result.exit_code == 0
        assert "116.7" in result.output

    def test_update_weight_logs_progress(self, temp_data_dir):
        _init(temp_data_dir)
        result = runner.invoke(
            app, ["update-weight", "78.5", "--data-dir", str(temp_data_dir)]
        )
        assert result.exit_code == 0, result.output

        profile = json.loads((temp_data_dir / "profile.json").read_text())
        assert profile["weight"] == 78.5
        entries = (temp_data_dir / "progress_entries.jsonl").read_text().splitlines()
        assert json.loads(entries[0])["weight"] == 78.5

    def test_update_lifts(self, temp_data_dir):
        _init(temp_data_dir)
        result = runner.invoke(
            app, ["update-lifts", "--squat", "150", "--data-dir", str(temp_data_dir)]
        )
        assert result.exit_code == 0, result.output
        profile = json.loads((temp_data_dir / "profile.json").read_text())
        assert profile["squat"] == 150.0
        assert profile["bench_press"] == 100.0

    def test_update_lifts_requires_a_value(self, temp_data_dir):
        _init(temp_data_dir)
        result = runner.invoke(app, ["update-lifts", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 1

    def test_log_workout_requires_saved_plan(self, temp_data_dir):
        _init(temp_data_dir)
        result = runner.invoke(app, ["log-workout", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 1
        assert "workout --save" in result.output

    def test_log_workout_and_today(self, temp_data_dir):
        _init(temp_data_dir)
        runner.invoke(app, ["workout", "--save", "--data-dir", str(temp_data_dir)])
        result = runner.invoke(
            app, ["log-workout", "--duration", "50", "--data-dir", str(temp_data_dir)]
        )
        assert result.exit_code == 0, result.output

        result = runner.invoke(app, ["today", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0
        assert "completed" in result.output
        assert "not completed" not in result.output

    def test_log_meals(self, temp_data_dir):
        _init(temp_data_dir)
        runner.invoke(app, ["nutrition", "--save", "--data-dir", str(temp_data_dir)])
        result = runner.invoke(
            app,
            ["log-meals", "--meal", "breakfast", "--meal", "snack", "--data-dir", str(temp_data_dir)],
        )
        assert result.exit_code == 0, result.output
        # 566 + 347
        assert "913 kcal" in result.output

        log = json.loads((temp_data_dir / "meal_logs.jsonl").read_text().splitlines()[0])
        assert [m["meal_type"] for m in log["meals"]] == ["breakfast", "snack"]

    def test_log_progress_and_progress_view(self, temp_data_dir):
        _init(temp_data_dir)
        result = runner.invoke(app, [
            "log-progress",
            "--weight", "79.2",
            "--body-fat", "18.5",
            "--waist", "84",
            "--data-dir", str(temp_data_dir),
        ])
        assert result.exit_code == 0, result.output

        result = runner.invoke(app, ["progress", "--range", "week", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0, result.output
        assert "79.2" in result.output
        assert "Body Weight Progress" in result.output

    def test_log_progress_nothing_to_log(self, temp_data_dir):
        _init(temp_data_dir)
        result = runner.invoke(app, ["log-progress", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 1

    def test_log_progress_bad_date(self, temp_data_dir):
        _init(temp_data_dir)
        result = runner.invoke(app, [
            "log-progress", "--weight", "80", "--date", "2026-02-30",
            "--data-dir", str(temp_data_dir),
        ])
        assert result.exit_code == 1

    def test_progress_bad_range(self, temp_data_dir):
        _init(temp_data_dir)
        result = runner.invoke(app, ["progress", "--range", "decade", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 1
        assert "Unknown range" in result.output

    def test_sync_queue(self, temp_data_dir):
        _init(temp_data_dir)
        runner.invoke(app, ["workout", "--save", "--data-dir", str(temp_data_dir)])
        result = runner.invoke(app, ["sync-queue", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0, result.output
        assert "workout_plans" in result.output
        assert "user_profiles" in result.output

    def test_init_without_lifts_warns(self, temp_data_dir):
        result = runner.invoke(app, ["init", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0, result.output
        assert "Warning" in result.output

    def test_log_meals_over_target_warns(self, temp_data_dir):
        _init(temp_data_dir)
        runner.invoke(app, ["nutrition", "--save", "--data-dir", str(temp_data_dir)])
        # all four sample meals: 2231 kcal against a 2207 kcal target
        result = runner.invoke(app, ["log-meals", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0, result.output
        assert "Warning" in result.output

    def test_no_command_uses_data_dir(self, temp_data_dir):
        _init(temp_data_dir)
        result = runner.invoke(app, ["-p", str(temp_data_dir)])
        assert result.exit_code == 0, result.output
        assert "Current goal" in result.output

    def test_no_command_without_profile(self, temp_data_dir):
        result = runner.invoke(app, ["--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0
        assert "No profile yet" in result.output

    def test_progress_shows_strength_and_calorie_charts(self, temp_data_dir):
        _init(temp_data_dir)
        runner.invoke(app, ["nutrition", "--save", "--data-dir", str(temp_data_dir)])
        runner.invoke(app, ["log-meals", "--data-dir", str(temp_data_dir)])

        result = runner.invoke(app, ["progress", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0, result.output
        assert "Strength" in result.output
        assert "Calorie Intake" in result.output
        assert "Bench Press" in result.output


class TestCLIStoreErrors:
    """Broken or missing record tables end in an error message, not a traceback."""

    def test_corrupt_table_on_progress(self, temp_data_dir):
        _init(temp_data_dir)
        (temp_data_dir / "progress_entries.jsonl").write_text("{not json\n")

        result = runner.invoke(app, ["progress", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 1
        assert "Error" in result.output
        assert not isinstance(result.exception, ValueError)

    def test_missing_table_on_log_workout(self, temp_data_dir):
        _init(temp_data_dir)
        (temp_data_dir / "workout_plans.jsonl").unlink()

        result = runner.invoke(app, ["log-workout", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 1
        assert "Error" in result.output
        assert not isinstance(result.exception, FileNotFoundError)

    def test_missing_table_on_workout_save(self, temp_data_dir):
        _init(temp_data_dir)
        (temp_data_dir / "workout_plans.jsonl").unlink()

        result = runner.invoke(app, ["workout", "--save", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_corrupt_meal_plans_on_log_meals(self, temp_data_dir):
        _init(temp_data_dir)
        (temp_data_dir / "meal_plans.jsonl").write_text('{"id": 1, "name": \n')

        result = runner.invoke(app, ["log-meals", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 1
        assert "Error" in result.output


def _plan_file(data_dir: Path, table: str) -> dict:
    return json.loads((data_dir / f"{table}.jsonl").read_text().splitlines()[0])


class TestCLIPlanEditing:
    """Editing saved workout and meal plans."""

    @pytest.fixture
    def saved_dir(self, temp_data_dir):
        _init(temp_data_dir)
        runner.invoke(app, ["workout", "--save", "--data-dir", str(temp_data_dir)])
        runner.invoke(app, ["nutrition", "--save", "--data-dir", str(temp_data_dir)])
        return temp_data_dir

    def test_plans_lists_saved(self, saved_dir):
        result = runner.invoke(app, ["plans", "--data-dir", str(saved_dir)])
        assert result.exit_code == 0, result.output
        assert "workout" in result.output
        assert "Saved Plans" in result.output
        assert "meals" in result.output

    def test_plans_shows_one_workout_plan(self, saved_dir):
        result = runner.invoke(app, ["plans", "--workout", "1", "--data-dir", str(saved_dir)])
        assert result.exit_code == 0, result.output
        assert "#1" in result.output

    def test_plans_shows_one_meal_plan(self, saved_dir):
        result = runner.invoke(app, ["plans", "--meals", "1", "--data-dir", str(saved_dir)])
        assert result.exit_code == 0, result.output
        assert "Recovery Snack" in result.output

    def test_plans_unknown_id(self, saved_dir):
        result = runner.invoke(app, ["plans", "--workout", "9", "--data-dir", str(saved_dir)])
        assert result.exit_code == 1
        assert "No workout plan with id 9" in result.output

    def test_add_exercise(self, saved_dir):
        before = len(_plan_file(saved_dir, "workout_plans")["exercises"])
        result = runner.invoke(app, [
            "add-exercise", "1", "Farmer Carry",
            "--sets", "4", "--reps", "40m", "--weight", "32",
            "--data-dir", str(saved_dir),
        ])
        assert result.exit_code == 0, result.output

        exercises = _plan_file(saved_dir, "workout_plans")["exercises"]
        assert len(exercises) == before + 1
        assert exercises[-1]["name"] == "Farmer Carry"
        assert exercises[-1]["id"] == before + 1
        assert exercises[-1]["weight"] == 32.0

    def test_add_exercise_invalid_sets(self, saved_dir):
        result = runner.invoke(app, [
            "add-exercise", "1", "Plank", "--sets", "0", "--data-dir", str(saved_dir),
        ])
        assert result.exit_code == 1
        assert "sets must be at least 1" in result.output

    def test_update_exercise(self, saved_dir):
        result = runner.invoke(app, [
            "update-exercise", "1", "1", "--sets", "5", "--weight", "60",
            "--data-dir", str(saved_dir),
        ])
        assert result.exit_code == 0, result.output

        first = _plan_file(saved_dir, "workout_plans")["exercises"][0]
        assert first["sets"] == 5
        assert first["weight"] == 60.0

        queue = (saved_dir / "sync_queue.jsonl").read_text().splitlines()
        assert json.loads(queue[-1])["operation"] == "update"

    def test_update_exercise_unknown_id(self, saved_dir):
        result = runner.invoke(app, [
            "update-exercise", "1", "99", "--sets", "4", "--data-dir", str(saved_dir),
        ])
        assert result.exit_code == 1
        assert "No exercise with id 99" in result.output

    def test_update_exercise_needs_a_field(self, saved_dir):
        result = runner.invoke(app, ["update-exercise", "1", "1", "--data-dir", str(saved_dir)])
        assert result.exit_code == 1
        assert "Nothing to update" in result.output

    def test_remove_exercise(self, saved_dir):
        before = _plan_file(saved_dir, "workout_plans")["exercises"]
        result = runner.invoke(app, ["remove-exercise", "1", "1", "--data-dir", str(saved_dir)])
        assert result.exit_code == 0, result.output

        after = _plan_file(saved_dir, "workout_plans")["exercises"]
        assert len(after) == len(before) - 1
        assert 1 not in [ex["id"] for ex in after]

    def test_delete_plan(self, saved_dir):
        result = runner.invoke(app, ["delete-plan", "1", "--force", "--data-dir", str(saved_dir)])
        assert result.exit_code == 0, result.output
        assert (saved_dir / "workout_plans.jsonl").read_text() == ""

        queue = (saved_dir / "sync_queue.jsonl").read_text().splitlines()
        last = json.loads(queue[-1])
        assert (last["table_name"], last["operation"], last["record_id"]) == (
            "workout_plans", "delete", 1
        )

    def test_delete_plan_cancel(self, saved_dir):
        result = runner.invoke(
            app, ["delete-plan", "1", "--data-dir", str(saved_dir)], input="n\n"
        )
        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert (saved_dir / "workout_plans.jsonl").read_text() != ""

    def test_add_meal(self, saved_dir):
        result = runner.invoke(app, [
            "add-meal", "1", "Casein Shake",
            "--type", "snack", "--calories", "240", "--protein", "40",
            "--data-dir", str(saved_dir),
        ])
        assert result.exit_code == 0, result.output

        meals = _plan_file(saved_dir, "meal_plans")["meals"]
        assert len(meals) == 5
        assert meals[-1]["id"] == 5
        assert meals[-1]["name"] == "Casein Shake"

    def test_add_meal_bad_type(self, saved_dir):
        result = runner.invoke(app, [
            "add-meal", "1", "Brunch", "--type", "brunch", "--data-dir", str(saved_dir),
        ])
        assert result.exit_code == 1
        assert "Invalid meal_type" in result.output

    def test_update_meal(self, saved_dir):
        result = runner.invoke(app, [
            "update-meal", "1", "2", "--calories", "700", "--data-dir", str(saved_dir),
        ])
        assert result.exit_code == 0, result.output
        assert _plan_file(saved_dir, "meal_plans")["meals"][1]["calories"] == 700.0

    def test_remove_meal(self, saved_dir):
        result = runner.invoke(app, ["remove-meal", "1", "4", "--data-dir", str(saved_dir)])
        assert result.exit_code == 0, result.output
        meals = _plan_file(saved_dir, "meal_plans")["meals"]
        assert [m["id"] for m in meals] == [1, 2, 3]

    def test_remove_meal_unknown_id(self, saved_dir):
        result = runner.invoke(app, ["remove-meal", "1", "8", "--data-dir", str(saved_dir)])
        assert result.exit_code == 1
        assert "No meal with id 8" in result.output

    def test_delete_meal_plan(self, saved_dir):
        result = runner.invoke(
            app, ["delete-meal-plan", "1", "--force", "--data-dir", str(saved_dir)]
        )
        assert result.exit_code == 0, result.output
        assert (saved_dir / "meal_plans.jsonl").read_text() == ""

        result = runner.invoke(app, ["log-meals", "--data-dir", str(saved_dir)])
        assert result.exit_code == 1
        assert "nutrition --save" in result.output
