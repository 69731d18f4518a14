"""
CLI entry point using Typer.

Provides commands for workout and nutrition tracking:
- init / set-split / show-profile: profile and rotation setup
- today: scheduled workout and starting exercises
- log-session / show-history / delete-record: workout log
- target: Smart Target suggestions
- report-data: progress-report payload
- log-food / log-water / nutrition / foods: nutrition tracking
"""

import typer

from . import views
from .app import app
from .commands import nutrition as nutrition_commands
from .commands import profile as profile_commands
from .commands import sessions as session_commands
from .commands import targets as target_commands


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context) -> None:
    """
    Workout split scheduler. Run without a command for interactive mode.
    """
    if ctx.invoked_subcommand is not None:
        return

    views.console.print()
    views.console.print("[bold cyan]ironmind[/bold cyan] - workout & nutrition tracker")
    views.console.print()

    menu = {
        "1": ("today", "Today's workout"),
        "2": ("log-session", "Log a workout"),
        "3": ("target", "Smart Targets"),
        "4": ("show-history", "Show full history"),
        "5": ("nutrition", "Today's nutrition"),
        "6": ("log-water", "Log a glass of water"),
        "s": ("set-split", "Choose workout split"),
        "i": ("init", "Setup / edit profile"),
        "d": ("delete-record", "Delete a session by ID"),
        "0": ("quit", "Quit"),
    }

    for key, (_, desc) in menu.items():
        views.console.print(f"  \\[{key}] {desc}")

    views.console.print()
    choice = views.console.input("Choose [1]: ").strip() or "1"

    if choice == "0":
        raise typer.Exit(0)

    chosen = menu.get(choice, (None,))[0]

    if chosen is None:
        views.print_error(f"Unknown choice: {choice}")
        raise typer.Exit(1)

    if chosen == "today":
        ctx.invoke(target_commands.today, days=7)
    elif chosen == "log-session":
        ctx.invoke(session_commands.log_session)
    elif chosen == "target":
        ctx.invoke(target_commands.target)
    elif chosen == "show-history":
        ctx.invoke(session_commands.show_history)
    elif chosen == "nutrition":
        ctx.invoke(nutrition_commands.nutrition)
    elif chosen == "log-water":
        ctx.invoke(nutrition_commands.log_water)
    elif chosen == "set-split":
        profile_commands._menu_set_split()
    elif chosen == "init":
        profile_commands._menu_init()
    elif chosen == "delete-record":
        session_commands._menu_delete_record()


if __name__ == "__main__":
    app()
