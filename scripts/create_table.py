"""
Table provisioning script for the add-commitment function.

Creates the commitments table (hash key `id`, on-demand billing) for local
development, typically against DynamoDB Local:

    DYNAMODB_ENDPOINT_URL=http://localhost:8000 AWS_REGION=us-east-1 \
        python -m scripts.create_table --wait
"""

from __future__ import annotations

import sys
from typing import Any, Dict, Optional

import typer
from botocore.exceptions import ClientError

from add_commitment.config import get_settings
from add_commitment.infrastructure.dynamodb import get_dynamodb_client

app = typer.Typer(help="Create the DynamoDB table that stores payment commitments.")


def _table_definition(table_name: str) -> Dict[str, Any]:
    return {
        "TableName": table_name,
        "KeySchema": [{"AttributeName": "id", "KeyType": "HASH"}],
        "AttributeDefinitions": [{"AttributeName": "id", "AttributeType": "S"}],
        "BillingMode": "PAY_PER_REQUEST",
    }


def _create_table(client: Any, table_name: str, wait: bool = False) -> bool:
    """
    Create the table; return False if it already exists.
    """
    try:
        client.create_table(**_table_definition(table_name))
    except ClientError as exc:
        if exc.response.get("Error", {}).get("Code") == "ResourceInUseException":
            return False
        raise
    if wait:
        client.get_waiter("table_exists").wait(TableName=table_name)
    return True


@app.command()
def main(
    table: Optional[str] = typer.Option(
        None, "--table", "-t", help="Table name (defaults to COMMITMENTS_TABLE)."
    ),
    wait: bool = typer.Option(False, "--wait", help="Block until the table is ACTIVE."),
) -> None:
    table_name = table or get_settings().commitments_table
    try:
        created = _create_table(get_dynamodb_client(), table_name, wait=wait)
    except ClientError as exc:
        typer.echo(f"Failed to create table {table_name}: {exc}", err=True)
        sys.exit(1)

    if created:
        typer.echo(f"Created table {table_name}.")
    else:
        typer.echo(f"Table {table_name} already exists.")


if __name__ == "__main__":
    app()
