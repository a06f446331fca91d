"""
Display component builders for siege results.
"""

from typing import Any, Dict, List, Optional
from rich.table import Table
from rich.panel import Panel
from rich.text import Text

from siegelog.models.results import GuildStat, PlayerStat, SiegeResult
from .timeline import TimelineRow, life_duration


def _format_tally(tally, limit: int = 3) -> str:
    parts = [f"{s.name} ({s.count})" for s in tally[:limit]]
    return ", ".join(parts) if parts else "-"


def _format_duration(seconds: Optional[int]) -> str:
    if seconds is None:
        return "-"
    minutes, secs = divmod(abs(seconds), 60)
    sign = "-" if seconds < 0 else ""
    return f"{sign}{minutes}m {secs}s"


class DisplayBuilder:
    """Builds rich display components for siege results."""

    @staticmethod
    def create_summary(result: SiegeResult) -> Panel:
        """Create overview panel of a parsed siege."""
        if not result.player_results:
            return Panel("No kills found in the log.", style="red")

        total_kills = sum(g.total_kills for g in result.guild_results)
        top_player = result.player_results[0]

        summary = Text()
        summary.append("═══ SIEGE OVERVIEW ═══\n\n", style="bold cyan")
        summary.append(f"Kills: {total_kills}\n", style="white")
        summary.append(f"Players: {len(result.player_results)}\n", style="white")
        summary.append(f"Guilds: {len(result.guild_results)}\n\n", style="white")
        summary.append(f"Top player: {top_player.name} ", style="green")
        summary.append(f"({top_player.total_points} pts)\n", style="dim")
        if result.guild_results:
            top_guild = result.guild_results[0]
            summary.append(f"Top guild: {top_guild.name} ", style="green")
            summary.append(f"({top_guild.total_points} pts)", style="dim")

        return Panel(summary, title="Summary", border_style="cyan")

    @staticmethod
    def create_player_table(players: List[PlayerStat], limit: Optional[int] = None) -> Table:
        """Create player ranking table."""
        table = Table(title="Player Rankings", show_header=True, header_style="bold magenta")
        table.add_column("#", width=4, justify="right")
        table.add_column("Player", style="cyan")
        table.add_column("Guild")
        table.add_column("Class", style="dim")
        table.add_column("Points", justify="right", style="green")
        table.add_column("K", justify="right")
        table.add_column("D", justify="right", style="red")
        table.add_column("Lives", justify="right")
        table.add_column("Most Killed")

        for player in players if limit is None else players[:limit]:
            table.add_row(
                str(player.rank),
                player.name,
                player.guild_name or "-",
                player.class_name or "-",
                str(player.total_points),
                str(player.total_kills),
                str(player.total_deaths),
                str(len(player.lives)),
                _format_tally(player.kills),
            )
        return table

    @staticmethod
    def create_guild_table(guilds: List[GuildStat]) -> Table:
        """Create guild ranking table."""
        table = Table(title="Guild Rankings", show_header=True, header_style="bold magenta")
        table.add_column("#", width=4, justify="right")
        table.add_column("Guild", style="cyan")
        table.add_column("Players", justify="right")
        table.add_column("Kill Pts", justify="right")
        table.add_column("Life Pts", justify="right")
        table.add_column("Total", justify="right", style="green")
        table.add_column("K", justify="right")
        table.add_column("D", justify="right", style="red")
        table.add_column("Killed Most")

        for guild in guilds:
            life_style = "red" if guild.total_extra_life_points < 0 else "white"
            table.add_row(
                str(guild.rank),
                guild.name,
                str(guild.player_count),
                str(guild.total_points_from_kills),
                Text(str(guild.total_extra_life_points), style=life_style),
                str(guild.total_points),
                str(guild.total_kills),
                str(guild.total_deaths),
                _format_tally(guild.kills),
            )
        return table

    @staticmethod
    def create_timeline_table(player: PlayerStat, rows: List[TimelineRow]) -> Table:
        """Create a player's life timeline table."""
        table = Table(
            title=f"Kill Timeline: {player.name} [{player.guild_name or '-'}]",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Life", width=5, justify="right")
        table.add_column("Time", width=9)
        table.add_column("Event", width=7)
        table.add_column("Opponent", style="cyan")
        table.add_column("Guild")
        table.add_column("Siege Clock", style="dim")

        for row in rows:
            style = "red" if row.kind == "death" else "green"
            table.add_row(
                str(row.life_number),
                row.timestamp,
                Text(row.kind, style=style),
                row.actor_name,
                row.guild_name,
                row.clock,
            )
        return table

    @staticmethod
    def create_lives_summary(player: PlayerStat) -> Table:
        """Create per-life kill counts and durations."""
        table = Table(title="Lives", show_header=True, header_style="bold magenta")
        table.add_column("Life", justify="right")
        table.add_column("Kills", justify="right")
        table.add_column("Killed By")
        table.add_column("Duration", justify="right")

        previous_death = None
        for number, life in enumerate(player.lives, start=1):
            table.add_row(
                str(number),
                str(len(life.kills)),
                life.death.actor_name if life.ended_by_death else "survived",
                _format_duration(life_duration(life, previous_death)),
            )
            previous_death = life.death
        return table

    @staticmethod
    def create_log_list(entries: List[Dict[str, Any]]) -> Table:
        """Create stored log list table."""
        table = Table(title="Stored Logs", show_header=True, header_style="bold magenta")
        table.add_column("ID", style="dim")
        table.add_column("Date", style="cyan")
        table.add_column("Server")

        for entry in entries:
            table.add_row(entry["id"], entry["logDate"], entry["serverName"])
        return table

    @staticmethod
    def create_server_list(servers: List[Dict[str, Any]]) -> Table:
        """Create server list table."""
        table = Table(title="Servers", show_header=True, header_style="bold magenta")
        table.add_column("Server", style="cyan")
        table.add_column("Logs", justify="right")

        for server in servers:
            table.add_row(server["name"], str(server["count"]))
        return table
