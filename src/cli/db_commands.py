"""Database CLI commands."""

import typer
from rich.markup import escape
from rich.table import Table

from src.bookclub.core.errors import MigrationError
from src.bookclub.runtime.init_db import init_db

from .utils import console


def migrate(
    path: str | None = typer.Option(
        None, "--path", help="Migrations directory (defaults to database.migrations_path)"
    ),
) -> None:
    """
    🗄️ Apply pending schema migrations.

    Scripts run in file name order, each inside its own transaction, and are
    recorded so running the command again is a no-op.
    """
    try:
        applied = init_db(path)
    except MigrationError as e:
        console.print(f"[red]❌ {escape(str(e))}: {escape(str(e.__cause__))}[/red]")
        raise typer.Exit(1) from e

    if not applied:
        console.print("[green]✅ Database is up to date[/green]")
        return

    table = Table(title="Applied migrations")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    for index, name in enumerate(applied, start=1):
        table.add_row(str(index), name)
    console.print(table)
