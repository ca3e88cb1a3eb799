"""
Program registry.

All workout program templates are registered here.  Use get_program() to
look up a WorkoutProgram by its type ("strength", "hypertrophy",
"fat_loss").

Templates are loaded from the bundled ``src/enclave_fit/programs/*.yaml``
files at import time.  If none can be loaded a RuntimeError is raised.
"""

from ..models import WorkoutProgram


def _build_registry() -> dict[str, WorkoutProgram]:
    from .loader import load_programs_from_yaml

    loaded = load_programs_from_yaml()
    if not loaded:
        raise RuntimeError(
            "enclave-fit: no workout program templates could be loaded from YAML. "
            "Check that src/enclave_fit/programs/*.yaml files are present and valid."
        )
    return loaded


PROGRAM_REGISTRY: dict[str, WorkoutProgram] = _build_registry()


def get_program(program_type: str) -> WorkoutProgram:
    """
    Return the WorkoutProgram template for the given type.

    Args:
        program_type: One of "strength", "hypertrophy", "fat_loss"

    Returns:
        The shared, immutable template

    Raises:
        ValueError: If program_type is not in the registry
    """
    if program_type not in PROGRAM_REGISTRY:
        valid = ", ".join(PROGRAM_REGISTRY)
        raise ValueError(f"Unknown program type '{program_type}'. Valid types: {valid}")
    return PROGRAM_REGISTRY[program_type]
