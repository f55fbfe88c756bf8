"""User management CLI commands.

These run the same operations as the HTTP API directly against the
configured table.
"""

import typer
from rich.table import Table

from src.user_service.cli.utils import console, get_user_service
from src.user_service.core.errors import USER_DELETED_MESSAGE, UserServiceError
from src.user_service.entities.user import User

users_app = typer.Typer(help="Manage users in the configured table")


def _fail(exc: UserServiceError) -> typer.Exit:
    console.print(f"[red]❌ {exc.message}[/red]")
    return typer.Exit(code=1)


def _print_user(user: User) -> None:
    console.print(f"[blue]{user.email}[/blue] {user.first_name} {user.last_name}")


@users_app.command("list")
def list_users() -> None:
    """List every user in the table."""
    try:
        users = get_user_service().list_users()
    except UserServiceError as e:
        raise _fail(e) from e

    if not users:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(title="Users")
    table.add_column("Email", style="blue")
    table.add_column("First Name", style="magenta")
    table.add_column("Last Name", style="magenta")
    for user in users:
        table.add_row(user.email, user.first_name, user.last_name)

    console.print(table)
    console.print(f"\n[green]Found {len(users)} users[/green]")


@users_app.command("get")
def get_user(email: str = typer.Argument(..., help="Email address of the user")) -> None:
    """Show a single user."""
    try:
        user = get_user_service().get_user(email)
    except UserServiceError as e:
        raise _fail(e) from e

    if user.is_empty:
        console.print(f"[yellow]No user found for {email}[/yellow]")
        return
    _print_user(user)


@users_app.command("create")
def create_user(
    email: str = typer.Argument(..., help="Email address of the new user"),
    first_name: str = typer.Option("", "--first-name", "-f", help="First name"),
    last_name: str = typer.Option("", "--last-name", "-l", help="Last name"),
) -> None:
    """Create a new user."""
    body = User(email=email, first_name=first_name, last_name=last_name)
    try:
        user = get_user_service().create_user(body.model_dump_json(by_alias=True))
    except UserServiceError as e:
        raise _fail(e) from e

    console.print("[green]✅ User created[/green]")
    _print_user(user)


@users_app.command("update")
def update_user(
    email: str = typer.Argument(..., help="Email address of the user"),
    first_name: str = typer.Option("", "--first-name", "-f", help="First name"),
    last_name: str = typer.Option("", "--last-name", "-l", help="Last name"),
) -> None:
    """Replace an existing user's names."""
    body = User(email=email, first_name=first_name, last_name=last_name)
    try:
        user = get_user_service().update_user(body.model_dump_json(by_alias=True))
    except UserServiceError as e:
        raise _fail(e) from e

    console.print("[green]✅ User updated[/green]")
    _print_user(user)


@users_app.command("delete")
def delete_user(email: str = typer.Argument(..., help="Email address of the user")) -> None:
    """Delete a user; unknown emails are not an error."""
    try:
        get_user_service().delete_user(email)
    except UserServiceError as e:
        raise _fail(e) from e

    console.print(f"[green]✅ {USER_DELETED_MESSAGE}[/green]")
