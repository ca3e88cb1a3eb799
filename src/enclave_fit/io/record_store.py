"""
File-based record store for enclave-fit.

Layout of a data directory:

    profile.json            current user profile (+ created_at/updated_at)
    workout_plans.jsonl     one JSON record per line, per table
    meal_plans.jsonl
    workout_logs.jsonl
    meal_logs.jsonl
    progress_entries.jsonl
    sync_queue.jsonl        append-only log of every mutation above
"""

import json
import os
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any, TypeVar

from ..core.models import (
    MealLog,
    MealPlan,
    ProgressEntry,
    SyncQueueEntry,
    UserProfile,
    WorkoutLog,
    WorkoutPlan,
)
from .serializers import (
    ValidationError,
    dict_to_meal_log,
    dict_to_meal_plan,
    dict_to_progress_entry,
    dict_to_sync_entry,
    dict_to_user_profile,
    dict_to_workout_log,
    dict_to_workout_plan,
    meal_log_to_dict,
    meal_plan_to_dict,
    progress_entry_to_dict,
    sync_entry_to_dict,
    user_profile_to_dict,
    validate_date,
    workout_log_to_dict,
    workout_plan_to_dict,
)

T = TypeVar("T")

TABLES: tuple[str, ...] = (
    "workout_plans",
    "meal_plans",
    "workout_logs",
    "meal_logs",
    "progress_entries",
)
SYNC_QUEUE = "sync_queue"


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


class RecordStore:
    """
    Manages the user's records as JSON/JSONL files in one directory.

    Every create, update and delete on a table is mirrored into the sync
    queue with ``synced=False``.  Nothing reads the queue back apart from
    ``load_sync_queue``.
    """

    def __init__(self, data_dir: str | Path):
        """
        Initialize the record store.

        Args:
            data_dir: Directory holding profile.json and the table files
        """
        self.data_dir = Path(data_dir)
        self.profile_path = self.data_dir / "profile.json"

    def table_path(self, table: str) -> Path:
        return self.data_dir / f"{table}.jsonl"

    def exists(self) -> bool:
        """Check if the store has been initialised (profile present)."""
        return self.profile_path.exists()

    def init(self) -> None:
        """
        Create the data directory and empty table files.

        Existing files are left untouched.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        for table in TABLES + (SYNC_QUEUE,):
            path = self.table_path(table)
            if not path.exists():
                path.touch()

    def _require_init(self) -> None:
        if not self.exists():
            raise FileNotFoundError(
                f"Profile not found: {self.profile_path}. Run 'init' first."
            )

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def load_profile(self) -> UserProfile | None:
        """
        Load the user profile.

        Returns:
            UserProfile if profile.json exists and is valid, None otherwise
        """
        if not self.profile_path.exists():
            return None
        try:
            with open(self.profile_path, "r") as f:
                data = json.load(f)
            return dict_to_user_profile(data)
        except (json.JSONDecodeError, ValidationError):
            return None

    def save_profile(self, profile: UserProfile) -> None:
        """
        Write profile.json, keeping the original created_at.

        The first save is queued as a create, later saves as updates.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)

        created_at = None
        if self.profile_path.exists():
            try:
                with open(self.profile_path, "r") as f:
                    created_at = json.load(f).get("created_at")
            except json.JSONDecodeError:
                created_at = None

        now = _now()
        data = user_profile_to_dict(profile)
        data["id"] = 1
        data["created_at"] = created_at or now
        data["updated_at"] = now

        with open(self.profile_path, "w") as f:
            json.dump(data, f, indent=2)

        self._queue("user_profiles", "update" if created_at else "create", 1, data)

    # ------------------------------------------------------------------
    # Generic table access
    # ------------------------------------------------------------------

    def _read_table(self, table: str) -> list[dict[str, Any]]:
        """
        Read all raw records of a table.

        Raises:
            FileNotFoundError: If the store was never initialised
            ValidationError: If a line is not valid JSON
        """
        path = self.table_path(table)
        if not path.exists():
            raise FileNotFoundError(f"Table file not found: {path}. Run 'init' first.")

        records: list[dict[str, Any]] = []
        with open(path, "r") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    records.append(json.loads(line))
                except json.JSONDecodeError as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {path}: {e}"
                    ) from e
        return records

    def _write_table(self, table: str, records: list[dict[str, Any]]) -> None:
        with open(self.table_path(table), "w") as f:
            for record in records:
                f.write(json.dumps(record) + "\n")

    def _load(self, table: str, convert: Callable[[dict[str, Any]], T]) -> list[T]:
        result: list[T] = []
        for i, raw in enumerate(self._read_table(table), 1):
            try:
                result.append(convert(raw))
            except (KeyError, TypeError, ValueError) as e:
                raise ValidationError(f"Invalid record #{i} in {table}: {e}") from e
        return result

    def _next_id(self, table: str) -> int:
        ids = [r.get("id") or 0 for r in self._read_table(table)]
        return max(ids, default=0) + 1

    def _insert(self, table: str, data: dict[str, Any]) -> int:
        record_id = self._next_id(table)
        data["id"] = record_id
        with open(self.table_path(table), "a") as f:
            f.write(json.dumps(data) + "\n")
        self._queue(table, "create", record_id, data)
        return record_id

    def _replace(self, table: str, record_id: int, data: dict[str, Any]) -> None:
        records = self._read_table(table)
        for i, r in enumerate(records):
            if r.get("id") == record_id:
                data["id"] = record_id
                records[i] = data
                self._write_table(table, records)
                self._queue(table, "update", record_id, data)
                return
        raise KeyError(f"No record with id {record_id} in {table}")

    def _delete(self, table: str, record_id: int) -> None:
        records = self._read_table(table)
        remaining = [r for r in records if r.get("id") != record_id]
        if len(remaining) == len(records):
            raise KeyError(f"No record with id {record_id} in {table}")
        self._write_table(table, remaining)
        self._queue(table, "delete", record_id, None)

    def _queue(
        self,
        table_name: str,
        operation: str,
        record_id: int,
        data: dict[str, Any] | None,
    ) -> None:
        """Append a mutation to the sync queue."""
        path = self.table_path(SYNC_QUEUE)
        queue_id = self._next_id(SYNC_QUEUE) if path.exists() else 1
        entry = SyncQueueEntry(
            table_name=table_name,
            operation=operation,  # type: ignore[arg-type]
            record_id=record_id,
            data=data,
            timestamp=_now(),
            synced=False,
            id=queue_id,
        )
        with open(path, "a") as f:
            f.write(json.dumps(sync_entry_to_dict(entry)) + "\n")

    # ------------------------------------------------------------------
    # Workout plans
    # ------------------------------------------------------------------

    def add_workout_plan(self, plan: WorkoutPlan) -> int:
        """Store a new workout plan; sets and returns its id."""
        self._require_init()
        plan.created_at = plan.updated_at = _now()
        plan.id = self._insert("workout_plans", workout_plan_to_dict(plan))
        return plan.id

    def update_workout_plan(self, plan: WorkoutPlan) -> None:
        """
        Overwrite a stored workout plan.

        Raises:
            ValueError: If the plan has no id
            KeyError: If no plan with that id exists
        """
        if plan.id is None:
            raise ValueError("Cannot update a workout plan without an id")
        plan.updated_at = _now()
        self._replace("workout_plans", plan.id, workout_plan_to_dict(plan))

    def delete_workout_plan(self, plan_id: int) -> None:
        self._delete("workout_plans", plan_id)

    def list_workout_plans(self) -> list[WorkoutPlan]:
        return self._load("workout_plans", dict_to_workout_plan)

    def get_workout_plan(self, plan_id: int) -> WorkoutPlan | None:
        for plan in self.list_workout_plans():
            if plan.id == plan_id:
                return plan
        return None

    # ------------------------------------------------------------------
    # Meal plans
    # ------------------------------------------------------------------

    def add_meal_plan(self, plan: MealPlan) -> int:
        """Store a new meal plan; sets and returns its id."""
        self._require_init()
        plan.created_at = plan.updated_at = _now()
        plan.id = self._insert("meal_plans", meal_plan_to_dict(plan))
        return plan.id

    def update_meal_plan(self, plan: MealPlan) -> None:
        if plan.id is None:
            raise ValueError("Cannot update a meal plan without an id")
        plan.updated_at = _now()
        self._replace("meal_plans", plan.id, meal_plan_to_dict(plan))

    def delete_meal_plan(self, plan_id: int) -> None:
        self._delete("meal_plans", plan_id)

    def list_meal_plans(self) -> list[MealPlan]:
        return self._load("meal_plans", dict_to_meal_plan)

    def get_meal_plan(self, plan_id: int) -> MealPlan | None:
        for plan in self.list_meal_plans():
            if plan.id == plan_id:
                return plan
        return None

    # ------------------------------------------------------------------
    # Logs and progress
    # ------------------------------------------------------------------

    def add_workout_log(self, log: WorkoutLog) -> int:
        self._require_init()
        validate_date(log.date)
        log.created_at = _now()
        log.id = self._insert("workout_logs", workout_log_to_dict(log))
        return log.id

    def add_meal_log(self, log: MealLog) -> int:
        self._require_init()
        validate_date(log.date)
        log.created_at = _now()
        log.id = self._insert("meal_logs", meal_log_to_dict(log))
        return log.id

    def add_progress_entry(self, entry: ProgressEntry) -> int:
        self._require_init()
        validate_date(entry.date)
        entry.created_at = _now()
        entry.id = self._insert("progress_entries", progress_entry_to_dict(entry))
        return entry.id

    @staticmethod
    def _in_range(date: str, start: str | None, end: str | None) -> bool:
        return (start is None or date >= start) and (end is None or date <= end)

    def get_workout_logs(self, start: str | None = None, end: str | None = None) -> list[WorkoutLog]:
        """Workout logs dated within [start, end] (inclusive, ISO dates), date-sorted."""
        logs = [
            log for log in self._load("workout_logs", dict_to_workout_log)
            if self._in_range(log.date, start, end)
        ]
        logs.sort(key=lambda log: log.date)
        return logs

    def get_meal_logs(self, start: str | None = None, end: str | None = None) -> list[MealLog]:
        """Meal logs dated within [start, end], date-sorted."""
        logs = [
            log for log in self._load("meal_logs", dict_to_meal_log)
            if self._in_range(log.date, start, end)
        ]
        logs.sort(key=lambda log: log.date)
        return logs

    def get_progress_entries(
        self, start: str | None = None, end: str | None = None
    ) -> list[ProgressEntry]:
        """Progress entries dated within [start, end], date-sorted."""
        entries = [
            e for e in self._load("progress_entries", dict_to_progress_entry)
            if self._in_range(e.date, start, end)
        ]
        entries.sort(key=lambda e: e.date)
        return entries

    def get_today_data(self, today: str | None = None) -> dict[str, list]:
        """
        Everything logged on one day.

        Returns:
            Dict with keys workout_logs, meal_logs, progress_entries
        """
        day = today or datetime.now().strftime("%Y-%m-%d")
        return {
            "workout_logs": self.get_workout_logs(day, day),
            "meal_logs": self.get_meal_logs(day, day),
            "progress_entries": self.get_progress_entries(day, day),
        }

    def load_sync_queue(self) -> list[SyncQueueEntry]:
        """All queued mutations, oldest first."""
        return self._load(SYNC_QUEUE, dict_to_sync_entry)


def get_default_data_dir() -> Path:
    """Return $HOME/.enclave-fit."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / ".enclave-fit"
