"""Main CLI application module."""

import typer

from .table_commands import table_app
from .user_commands import users_app

app = typer.Typer(
    help="User store CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register command groups
app.add_typer(users_app, name="users")
app.add_typer(table_app, name="table")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
