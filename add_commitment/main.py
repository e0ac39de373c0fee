from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from add_commitment.config import get_settings
from add_commitment.handler import handle_request
from add_commitment.utils.logging import configure_logging

app = typer.Typer(help="Add-commitment function CLI.")
console = Console()


def _render_response(response: dict) -> Table:
    payload = json.loads(response["body"])
    table = Table(
        title=f"Response {response['statusCode']}",
        box=box.SIMPLE_HEAVY,
        show_header=True,
        header_style="bold",
    )
    table.add_column("Field")
    table.add_column("Value", overflow="fold")
    for key, value in payload.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value)
        table.add_row(key, str(value))
    return table


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"table={settings.commitments_table} region={settings.aws_region or '<default>'} "
        f"endpoint={settings.dynamodb_endpoint_url or '<aws>'} | env={settings.app_env} "
        f"log_level={settings.log_level} lenient_body={settings.lenient_body_parsing}"
    )


@app.command()
def invoke(
    body: Optional[str] = typer.Option(
        None,
        "--body",
        "-b",
        help="Inline JSON request body.",
    ),
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Path to a JSON file holding the request body.",
    ),
    raw: bool = typer.Option(
        False,
        "--raw",
        help="Print the proxy response as JSON instead of a table.",
    ),
) -> None:
    """
    Run the handler locally against the configured table and print the response.
    """
    if (body is None) == (file is None):
        raise typer.BadParameter("Provide exactly one of --body or --file.")

    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=False)
    event_body = body if body is not None else file.read_text(encoding="utf-8")

    response = handle_request({"body": event_body}, settings=settings, request_id="local")
    if raw:
        typer.echo(json.dumps(response, indent=2))
    else:
        console.print(_render_response(response))
    if response["statusCode"] != 200:
        raise typer.Exit(code=1)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
