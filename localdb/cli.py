"""localdb CLI — the command-line entry point for the local data store."""

import json
import logging

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from localdb import __version__
from localdb.config import DEFAULT_CONFIG_FILE, ProjectConfig, load_config
from localdb.errors import LocalDBError
from localdb.utils.logger import set_level

console = Console()
err_console = Console(stderr=True)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    "config_path",
    default=DEFAULT_CONFIG_FILE,
    envvar="LOCALDB_CONFIG",
    show_default=True,
    help="Project file declaring servers and schemas",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """localdb — a minimal embedded local data store.

    Declare servers and schemas in a YAML project file, then validate,
    save and read records from the command line.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if verbose:
        set_level(logging.DEBUG)


def _load(ctx: click.Context) -> ProjectConfig:
    try:
        return load_config(ctx.obj["config_path"])
    except LocalDBError as e:
        _fail(str(e))


def _parse_data(raw: str):
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        _fail(f"DATA is not valid JSON: {e}")


def _fail(message: str):
    console.print(f"[red]Error:[/] {escape(message)}", highlight=False)
    raise SystemExit(1)


# ── Greet ────────────────────────────────────────────────────────────


@main.command()
@click.argument("name", required=False)
def greet(name: str | None):
    """Print a greeting."""
    from localdb.greeting import greet as say_hello

    say_hello(name)


# ── Servers ──────────────────────────────────────────────────────────


@main.command()
@click.pass_context
def servers(ctx: click.Context):
    """List the servers declared in the project file."""
    config = _load(ctx)

    if not config.servers:
        console.print("[yellow]No servers configured.[/]")
        return

    table = Table(title=f"Servers ({len(config.servers)})")
    table.add_column("Name", style="cyan")
    table.add_column("Directory")
    table.add_column("Autostart", justify="center")

    for server in config.servers:
        start = "[green]Y[/]" if server.start else "[red]N[/]"
        table.add_row(escape(server.name), escape(server.directory), start)

    console.print(table)


# ── Validate ─────────────────────────────────────────────────────────


@main.command()
@click.argument("schema_name")
@click.argument("data")
@click.pass_context
def validate(ctx: click.Context, schema_name: str, data: str):
    """Check JSON DATA against a configured schema without saving it."""
    from localdb.schema.validator import explain

    config = _load(ctx)
    try:
        schema = config.get_schema(schema_name)
    except LocalDBError as e:
        _fail(str(e))

    issue = explain(schema.node, _parse_data(data))
    if issue:
        console.print(f"  [red]x[/] {escape(issue)}", highlight=False)
        raise SystemExit(1)
    console.print(f"  [green]v[/] Valid against schema '{schema_name}'")


# ── Save ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("schema_name")
@click.argument("data")
@click.option("--server", "-s", "server_name", required=True, help="Target server")
@click.pass_context
def save(ctx: click.Context, schema_name: str, data: str, server_name: str):
    """Validate JSON DATA and append it to a server's collection."""
    config = _load(ctx)
    record = _parse_data(data)

    try:
        schema = config.get_schema(schema_name)
        db = config.build()
        server = db.get_server(server_name)
        if server is None:
            _fail(f"Unknown server '{server_name}'")
        if not server.is_running:
            _fail(f"Server '{server_name}' is not started")
        db.save_record(server, schema, record)
    except LocalDBError as e:
        _fail(str(e))

    console.print(f"  [green]Saved[/] to {server_name}/{schema_name}")


# ── Read ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("schema_name")
@click.option("--server", "-s", "server_name", required=True, help="Source server")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
@click.pass_context
def read(ctx: click.Context, schema_name: str, server_name: str, as_json: bool):
    """Print every record stored for a schema."""
    config = _load(ctx)

    try:
        schema = config.get_schema(schema_name)
        db = config.build()
        server = db.get_server(server_name)
        if server is None:
            _fail(f"Unknown server '{server_name}'")
        if not server.is_running:
            _fail(f"Server '{server_name}' is not started")
        result = db.load_records(server, schema)
    except LocalDBError as e:
        _fail(str(e))

    if result.is_corrupt:
        err_console.print(f"[yellow]Stored collection is corrupt:[/] {escape(result.reason)}")
    records = result.records

    if as_json:
        click.echo(json.dumps(records, indent=2, ensure_ascii=False))
        return

    if not records:
        console.print("[yellow]No records.[/]")
        return

    table = Table(title=f"{schema_name} ({len(records)} records)")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Record")
    for i, record in enumerate(records):
        table.add_row(str(i + 1), escape(json.dumps(record, ensure_ascii=False)))

    console.print(table)


if __name__ == "__main__":
    main()
