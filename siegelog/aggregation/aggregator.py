"""
Per-player and per-guild aggregation of siege kill records.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Set

from siegelog.parser.events import KillRecord, RawEvent
from siegelog.models.results import GuildStat, PlayerStat, SiegeResult
from .lives import reconstruct_lives, sort_chronologically
from .ranking import increment_tally, rank_guilds, rank_players, ranked_guild_tally, ranked_tally

logger = logging.getLogger(__name__)

# Points each guild member contributes to the guild's life pool
LIFE_POINTS_PER_MEMBER = 10


@dataclass
class PlayerAccumulator:
    """Running totals for one player while records are processed."""

    name: str
    guild_name: str = ""
    total_points: int = 0
    total_kills: int = 0
    total_deaths: int = 0
    events: List[RawEvent] = field(default_factory=list)


class SiegeAggregator:
    """
    Accumulates kill records into player and guild statistics.

    One aggregator serves one parse: names are registered first, then
    records are processed, then build_result() derives lives, tallies and
    ranks.
    """

    def __init__(self):
        self.players: Dict[str, PlayerAccumulator] = {}
        self.guilds: Dict[str, GuildStat] = {}
        self.guild_players: Dict[str, Set[str]] = {}
        self.records_processed = 0

    def _ensure_player(self, name: str) -> PlayerAccumulator:
        """Ensure a player exists in our tracking."""
        if name not in self.players:
            self.players[name] = PlayerAccumulator(name=name)
        return self.players[name]

    def _ensure_guild(self, name: str) -> GuildStat:
        """Ensure a guild exists in our tracking."""
        if name not in self.guilds:
            self.guilds[name] = GuildStat(name=name)
            self.guild_players[name] = set()
        return self.guilds[name]

    def register_names(self, names: Iterable[str]):
        """
        Give every discovered player a zero-stat record.

        Args:
            names: Player names found during name discovery
        """
        for name in names:
            self._ensure_player(name)

    def process_records(self, records: Iterable[KillRecord]):
        """
        Process a sequence of kill records.

        Args:
            records: Kill records in log order
        """
        for record in records:
            self.process_record(record)

    def process_record(self, record: KillRecord):
        """Apply one kill to the attacker, the defender and both guilds."""
        attacker_guild = self._ensure_guild(record.attacker_guild)
        self.guild_players[record.attacker_guild].add(record.attacker_name)

        defender_guild = self._ensure_guild(record.defender_guild)
        self.guild_players[record.defender_guild].add(record.defender_name)

        attacker = self._ensure_player(record.attacker_name)
        attacker.guild_name = record.attacker_guild
        attacker.total_points += record.points
        attacker.total_kills += 1
        attacker.events.append(record.attacker_event())

        attacker_guild.total_points_from_kills += record.points
        attacker_guild.total_kills += 1
        increment_tally(attacker_guild.kills, record.defender_guild)

        defender = self._ensure_player(record.defender_name)
        defender.guild_name = record.defender_guild
        defender.total_deaths += 1
        defender.events.append(record.defender_event())

        defender_guild.total_deaths += 1
        increment_tally(defender_guild.killed_by, record.attacker_guild)

        self.records_processed += 1

    def _build_player(self, acc: PlayerAccumulator, class_lookup: Mapping[str, str]) -> PlayerStat:
        events = sort_chronologically(acc.events)
        kills = [e.event for e in events if e.is_kill]
        deaths = [e.event for e in events if e.is_death]

        return PlayerStat(
            name=acc.name,
            guild_name=acc.guild_name,
            class_name=class_lookup.get(acc.name),
            total_points=acc.total_points,
            total_kills=acc.total_kills,
            total_deaths=acc.total_deaths,
            total_kills_each_guild=ranked_guild_tally(k.guild_name for k in kills),
            total_deaths_each_guild=ranked_guild_tally(d.guild_name for d in deaths),
            lives=reconstruct_lives(events),
            kills=ranked_tally(k.actor_name for k in kills),
            killed_by=ranked_tally(d.actor_name for d in deaths),
        )

    def _finalize_guild(self, guild: GuildStat) -> GuildStat:
        guild.player_count = len(self.guild_players[guild.name])
        max_life_points = guild.player_count * LIFE_POINTS_PER_MEMBER
        # Not clamped: deaths beyond the life pool are a penalty
        guild.total_extra_life_points = max_life_points - guild.total_deaths
        guild.total_points = guild.total_points_from_kills + guild.total_extra_life_points
        return guild

    def build_result(self, class_lookup: Optional[Mapping[str, str]] = None) -> SiegeResult:
        """
        Derive lives, tallies and rankings from the accumulated state.

        Args:
            class_lookup: Optional player name to class mapping

        Returns:
            Ranked SiegeResult
        """
        class_lookup = class_lookup or {}

        players = [self._build_player(acc, class_lookup) for acc in self.players.values()]
        guilds = [self._finalize_guild(guild) for guild in self.guilds.values()]

        return SiegeResult(player_results=rank_players(players), guild_results=rank_guilds(guilds))

    def get_summary(self) -> Dict[str, int]:
        """Get aggregation summary."""
        return {
            "kill_records": self.records_processed,
            "player_count": len(self.players),
            "guild_count": len(self.guilds),
            "total_points": sum(p.total_points for p in self.players.values()),
        }
