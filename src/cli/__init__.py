"""Main CLI application module."""

import typer

from .db_commands import migrate
from .server_commands import serve

app = typer.Typer(
    help="📚 Book Club CLI - run the API and manage its database",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="serve")(serve)
app.command(name="migrate")(migrate)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
