"""
CLI entry point using Typer.

Provides commands for the offline fitness planner:
- init / show-profile / update-weight / update-lifts: profile management
- plan / workout / nutrition / one-rm: evaluation engine output
- plans / add-exercise / update-exercise / remove-exercise / delete-plan: saved workout plans
- add-meal / update-meal / remove-meal / delete-meal-plan: saved meal plans
- log-workout / log-meals / log-progress: record keeping
- progress / today / sync-queue: review stored records
"""

import typer

from . import views
from .app import DataDirOption, app, get_store
from .commands import editing, planning, profile, progress  # noqa: F401  (registers commands)


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context, data_dir: DataDirOption = None) -> None:
    """
    Offline fitness planner. Run without a command for today's overview.
    """
    if ctx.invoked_subcommand is not None:
        return

    views.console.print()
    views.console.print("[bold cyan]enclave-fit[/bold cyan]: offline fitness planner")
    views.console.print()

    store = get_store(data_dir)
    if not store.exists():
        views.print_info("No profile yet. Start with: enclave-fit init --help")
        return

    ctx.invoke(progress.today, data_dir=data_dir)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
