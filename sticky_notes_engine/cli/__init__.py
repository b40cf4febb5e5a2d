"""CLI commands for sticky-notes-engine."""

import typer

from sticky_notes_engine.cli.events import app as events_app

main_app = typer.Typer(
    name="sticky-notes",
    help="Sticky Notes skill engine CLI",
    no_args_is_help=True,
)
main_app.add_typer(events_app, name="events")


def main() -> None:
    """Entry point for the CLI."""
    main_app()


__all__ = ["main", "main_app"]
