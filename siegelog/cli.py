#!/usr/bin/env python3
"""
Command-line interface for the guild siege log parser.
"""

import json
import click
import logging
from pathlib import Path
from rich.console import Console
from rich.logging import RichHandler

from .parser.parser import SiegeLogParser
from .analyzer.displays import DisplayBuilder
from .analyzer.timeline import build_life_timeline
from .config.loader import ConfigLoader
from .config.settings import get_settings
from .database.schema import DatabaseManager, create_tables
from .database.storage import LogStorage, normalize_log_date
from .models.results import SiegeResult


# Set up rich console for pretty output
console = Console()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
)
logger = logging.getLogger(__name__)


def _open_storage(db_path):
    db = DatabaseManager(db_path or get_settings().database.sqlite_path)
    create_tables(db)
    return db, LogStorage(db)


def _parse_file(ctx, log_file, quiet: bool = False) -> SiegeResult:
    parser = SiegeLogParser()
    result = parser.parse_file(log_file, ctx.obj["class_lookup"])
    stats = parser.get_stats()["tokenizer_stats"]
    if not quiet and (stats["malformed_entries"] or stats["short_entries"]):
        console.print(
            f"[yellow]Skipped {stats['malformed_entries']} malformed and "
            f"{stats['short_entries']} short entries[/yellow]"
        )
    return result


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--config", "config_path", type=click.Path(), help="Path to siegelog.yaml")
@click.pass_context
def cli(ctx, verbose, config_path):
    """Guild Siege Log Parser - player and guild rankings from siege combat logs"""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = ConfigLoader.load_config(config_path)
    ctx.ensure_object(dict)
    ctx.obj["class_lookup"] = ConfigLoader.class_lookup(config)
    ctx.obj["siege_end"] = ConfigLoader.siege_end_time(config, get_settings().siege.end_time)


@cli.command()
@click.argument("log_file", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Path(), help="Output file for results")
@click.option("--format", "output_format", type=click.Choice(["json", "summary"]), default="summary")
@click.option("--top", default=None, type=click.IntRange(min=1), help="Only show the top N players")
@click.pass_context
def parse(ctx, log_file, output, output_format, top):
    """Parse a siege log and show player and guild rankings."""
    log_path = Path(log_file)
    to_stdout = output_format == "json" and not output
    if not to_stdout:
        console.print(f"[bold green]Parsing siege log:[/bold green] {log_path.name}")

    result = _parse_file(ctx, log_path, quiet=to_stdout)

    if output_format == "json":
        document = json.dumps(result.to_dict(), indent=2)
        if output:
            Path(output).write_text(document, encoding="utf-8")
            console.print(f"[green]Results written to {output}[/green]")
        else:
            click.echo(document)
        return

    console.print(DisplayBuilder.create_summary(result))
    console.print(DisplayBuilder.create_player_table(result.player_results, top))
    console.print(DisplayBuilder.create_guild_table(result.guild_results))

    if output:
        Path(output).write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")
        console.print(f"[green]Results written to {output}[/green]")


@cli.command()
@click.argument("log_file", type=click.Path(exists=True))
@click.argument("player")
@click.pass_context
def timeline(ctx, log_file, player):
    """Show a player's lives with the siege clock."""
    result = _parse_file(ctx, Path(log_file))

    stat = result.get_player(player)
    if stat is None:
        raise click.ClickException(f"Player not found in log: {player}")

    rows = build_life_timeline(stat.lives, ctx.obj["siege_end"])
    if not rows:
        console.print("[dim]No data available.[/dim]")
        return

    console.print(DisplayBuilder.create_timeline_table(stat, rows))
    console.print(DisplayBuilder.create_lives_summary(stat))


@cli.command()
@click.argument("log_file", type=click.Path(exists=True))
@click.option("--date", "log_date", required=True, help="Siege date (YYYY-MM-DD)")
@click.option("--server", "server_name", required=True, help="Game server name")
@click.option("--db", "db_path", type=click.Path(), help="SQLite database path")
@click.pass_context
def save(ctx, log_file, log_date, server_name, db_path):
    """Parse a siege log and store it."""
    if normalize_log_date(log_date) is None:
        raise click.BadParameter(f"not a date: {log_date}", param_hint="--date")

    raw_log = Path(log_file).read_text(encoding="utf-8", errors="ignore")
    db, storage = _open_storage(db_path)
    try:
        class_lookup = dict(ctx.obj["class_lookup"])
        class_lookup.update(storage.class_lookup(server_name))

        parser = SiegeLogParser()
        result = parser.parse_text(raw_log, class_lookup)
        entry = storage.save_log(raw_log, log_date, server_name, result.to_dict())
    finally:
        db.close()

    console.print(
        f"[green]Stored log {entry.log_id}[/green] ({entry.server_name}, {entry.log_date}): "
        f"{len(result.player_results)} players, {len(result.guild_results)} guilds"
    )


@cli.command()
@click.option("--server", "server_name", help="Only logs of this server")
@click.option("--db", "db_path", type=click.Path(), help="SQLite database path")
def logs(server_name, db_path):
    """List stored logs."""
    db, storage = _open_storage(db_path)
    try:
        if server_name:
            console.print(DisplayBuilder.create_log_list(storage.list_logs(server_name)))
        else:
            console.print(DisplayBuilder.create_server_list(storage.list_servers()))
    finally:
        db.close()


@cli.command()
@click.argument("log_ref")
@click.option("--db", "db_path", type=click.Path(), help="SQLite database path")
@click.option("--top", default=None, type=click.IntRange(min=1), help="Only show the top N players")
def show(log_ref, db_path, top):
    """Show a stored log by ID or siege date."""
    db, storage = _open_storage(db_path)
    try:
        if normalize_log_date(log_ref) is not None:
            entry = storage.get_log_by_date(log_ref)
        else:
            entry = storage.get_log(log_ref)
    finally:
        db.close()

    if entry is None:
        raise click.ClickException(f"No log found for {log_ref}")

    result = SiegeResult.from_dict(entry.parsed_data)
    console.print(f"[bold]{entry.server_name}[/bold] - {entry.log_date}")
    console.print(DisplayBuilder.create_player_table(result.player_results, top))
    console.print(DisplayBuilder.create_guild_table(result.guild_results))


@cli.command()
@click.option("--host", default=None, help="Bind host")
@click.option("--port", default=None, type=int, help="Bind port")
@click.option("--db", "db_path", type=click.Path(), help="SQLite database path")
def serve(host, port, db_path):
    """Run the HTTP API."""
    import uvicorn
    from .api.app import create_app_from_settings

    settings = get_settings()
    if db_path:
        settings.database.sqlite_path = db_path

    app = create_app_from_settings(settings)
    uvicorn.run(
        app,
        host=host or settings.server.host,
        port=port or settings.server.port,
        log_level=settings.server.log_level,
    )


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
