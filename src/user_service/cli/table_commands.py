"""Table provisioning commands for local development."""

import typer
from botocore.exceptions import BotoCoreError, ClientError

from src.user_service.cli.utils import console, get_dynamodb_client
from src.user_service.entities.user.repository import KEY_ATTRIBUTE
from src.user_service.runtime.context import get_config

table_app = typer.Typer(help="Manage the DynamoDB table")


@table_app.command("create")
def create_table() -> None:
    """Create the configured table keyed by email with on-demand billing."""
    table_name = get_config().store.table_name
    client = get_dynamodb_client()

    try:
        client.create_table(
            TableName=table_name,
            KeySchema=[{"AttributeName": KEY_ATTRIBUTE, "KeyType": "HASH"}],
            AttributeDefinitions=[
                {"AttributeName": KEY_ATTRIBUTE, "AttributeType": "S"}
            ],
            BillingMode="PAY_PER_REQUEST",
        )
    except ClientError as e:
        if e.response.get("Error", {}).get("Code") == "ResourceInUseException":
            console.print(f"[yellow]Table '{table_name}' already exists[/yellow]")
            return
        console.print(f"[red]❌ Failed to create table '{table_name}': {e}[/red]")
        raise typer.Exit(code=1) from e
    except BotoCoreError as e:
        console.print(f"[red]❌ Failed to create table '{table_name}': {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Created table '{table_name}'[/green]")
