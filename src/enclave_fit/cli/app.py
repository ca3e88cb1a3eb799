"""Shared Typer app object, shared option types, and store utilities."""

from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.models import UserProfile
from ..io.record_store import RecordStore, get_default_data_dir
from . import views

# Shared --data-dir option type used across all commands
DataDirOption = Annotated[
    Optional[Path],
    typer.Option("--data-dir", "-p", help="Data directory (default: ~/.enclave-fit)"),
]

# Shared --date option type for logging commands
DateOption = Annotated[
    Optional[str],
    typer.Option("--date", "-d", help="Date (YYYY-MM-DD), default today"),
]

app = typer.Typer(
    name="enclave-fit",
    help="Offline fitness planner: strength assessment, training program and nutrition targets.",
    no_args_is_help=False,
    invoke_without_command=True,
)


def get_store(data_dir: Path | None) -> RecordStore:
    """Get record store from path or default location."""
    if data_dir is None:
        data_dir = get_default_data_dir()
    return RecordStore(data_dir)


def today_str() -> str:
    return datetime.now().strftime("%Y-%m-%d")


def load_profile_or_exit(store: RecordStore) -> UserProfile:
    """Load the stored profile, or print an error and exit with code 1."""
    profile = store.load_profile()
    if profile is None:
        views.print_error(f"No profile found in {store.data_dir}. Run 'init' first.")
        raise typer.Exit(1)
    return profile
