"""
YAML → WorkoutProgram loader.

Loads program templates from individual YAML files in the bundled
``src/enclave_fit/programs/`` directory.  Each file (e.g. strength.yaml)
holds one template: name, type, frequency, duration and a list of workout
days with their exercises.

Templates are fixed data; there is no user override directory.

Usage (internal, called by registry.py):
    from .loader import load_programs_from_yaml
    programs = load_programs_from_yaml()   # dict or None on failure
"""

from __future__ import annotations

import warnings
from pathlib import Path

import yaml

from ..models import ProgramExercise, WorkoutDay, WorkoutProgram

_REQUIRED_PROGRAM_FIELDS: frozenset[str] = frozenset(
    {"name", "type", "frequency", "duration", "workouts"}
)

_REQUIRED_EXERCISE_FIELDS: frozenset[str] = frozenset(
    {"name", "sets", "reps", "rest_time"}
)

_PROGRAM_TYPES: frozenset[str] = frozenset({"strength", "hypertrophy", "fat_loss"})


def _exercise_from_dict(d: dict) -> ProgramExercise:
    """Convert a raw exercise dict, raising ValueError on missing fields."""
    missing = _REQUIRED_EXERCISE_FIELDS - set(d)
    if missing:
        raise ValueError(f"exercise {d.get('name', '?')!r} missing fields: {sorted(missing)}")
    weight = d.get("weight")
    return ProgramExercise(
        name=str(d["name"]),
        sets=int(d["sets"]),
        reps=str(d["reps"]),
        rest_time=int(d["rest_time"]),
        weight=float(weight) if weight is not None else None,
        notes=str(d["notes"]) if d.get("notes") is not None else None,
    )


def _day_from_dict(d: dict) -> WorkoutDay:
    if "name" not in d:
        raise ValueError("workout day missing 'name'")
    exercises = d.get("exercises") or []
    if not exercises:
        raise ValueError(f"workout day {d['name']!r} has no exercises")
    return WorkoutDay(
        name=str(d["name"]),
        exercises=tuple(_exercise_from_dict(e) for e in exercises),
    )


def program_from_dict(d: dict) -> WorkoutProgram:
    """Convert a raw dict (from YAML) to a WorkoutProgram.

    Raises ValueError if any required field is absent or the type is unknown.
    """
    missing = _REQUIRED_PROGRAM_FIELDS - set(d)
    if missing:
        raise ValueError(f"WorkoutProgram missing fields: {sorted(missing)}")

    program_type = str(d["type"])
    if program_type not in _PROGRAM_TYPES:
        raise ValueError(
            f"Unknown program type {program_type!r}. "
            f"Valid types: {', '.join(sorted(_PROGRAM_TYPES))}"
        )

    return WorkoutProgram(
        name=str(d["name"]),
        type=program_type,  # type: ignore[arg-type]
        frequency=int(d["frequency"]),
        duration=int(d["duration"]),
        workouts=tuple(_day_from_dict(day) for day in d["workouts"]),
    )


def _load_yaml_file(path: Path) -> dict:
    """Load a YAML file; return {} when it is unreadable or not a mapping."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"enclave-fit: cannot read {path.name} ({exc})", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def get_bundled_programs_dir() -> Path | None:
    """Return path to the bundled programs/ data directory, or None if not found."""
    # loader.py lives at src/enclave_fit/core/programs/loader.py
    # three levels up → src/enclave_fit/
    candidate = Path(__file__).parent.parent.parent / "programs"
    return candidate if candidate.is_dir() else None


def load_programs_from_yaml(programs_dir: Path | None = None) -> dict[str, WorkoutProgram] | None:
    """Return {program_type: WorkoutProgram} loaded from per-program YAML files.

    Files that fail validation are skipped with a warning.  Returns None
    (rather than raising) when nothing could be loaded so the registry can
    report the failure in one place.
    """
    if programs_dir is None:
        programs_dir = get_bundled_programs_dir()
    if programs_dir is None:
        return None

    result: dict[str, WorkoutProgram] = {}
    for path in sorted(programs_dir.glob("*.yaml")):
        raw = _load_yaml_file(path)
        if not raw:
            continue
        try:
            program = program_from_dict(raw)
        except (ValueError, TypeError) as exc:
            warnings.warn(
                f"enclave-fit: skipping program '{path.stem}' — {exc}",
                stacklevel=2,
            )
            continue
        result[program.type] = program

    return result or None
