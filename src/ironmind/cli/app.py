"""Shared Typer app object, shared option types, and store utility."""

from datetime import date
from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.dates import parse_date
from ..io.history_store import HistoryStore, get_default_history_path
from . import views

# Shared --history-path option type used across all commands
HistoryPathOption = Annotated[
    Optional[Path],
    typer.Option("--history-path", "-p", help="Path to sessions JSONL file"),
]

# Shared --date option type (defaults to today)
DateOption = Annotated[
    Optional[str],
    typer.Option("--date", "-d", help="Date (YYYY-MM-DD, default: today)"),
]

app = typer.Typer(
    name="ironmind",
    help="Workout split scheduler with Smart Target progression and nutrition tracking.",
    no_args_is_help=False,
    invoke_without_command=True,
)


def get_store(history_path: Path | None) -> HistoryStore:
    """Get history store from path or default location."""
    if history_path is None:
        history_path = get_default_history_path()
    return HistoryStore(history_path)


def require_store(history_path: Path | None) -> HistoryStore:
    """Store that must already be initialized; exits with an error otherwise."""
    store = get_store(history_path)
    if not store.exists():
        views.print_error(f"History file not found: {store.history_path}")
        views.print_info("Run 'init' first to create profile and history.")
        raise typer.Exit(1)
    return store


def resolve_date(value: str | None) -> date:
    """Parse a --date value, exiting on malformed input."""
    if value is None:
        return date.today()
    parsed = parse_date(value)
    if parsed is None:
        views.print_error(f"Invalid date: {value}. Expected YYYY-MM-DD")
        raise typer.Exit(1)
    return parsed
