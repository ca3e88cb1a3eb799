"""
Workout program templates for enclave-fit.

One hand-authored WorkoutProgram exists per program type; the engine
selects among them by fitness aim.
"""

from .loader import program_from_dict
from .registry import PROGRAM_REGISTRY, get_program

__all__ = [
    "PROGRAM_REGISTRY",
    "get_program",
    "program_from_dict",
]
