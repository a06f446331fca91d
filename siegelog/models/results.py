"""
Result models produced by the siege log parser.

All models serialize to the camelCase document stored by the API and
read back by presentation layers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from siegelog.parser.events import KillEvent


@dataclass
class KillStat:
    """Kill or death count against one opposing player or guild."""

    name: str
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "count": self.count}


@dataclass
class GuildCount:
    """Per-guild kill or death count on a player."""

    guild_name: str
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"guildName": self.guild_name, "count": self.count}


@dataclass
class Life:
    """
    One of a player's lives: the kills scored since the previous death
    and, unless the player survived to the end of the log, the death
    that ended it.
    """

    kills: List[KillEvent] = field(default_factory=list)
    death: Optional[KillEvent] = None

    @property
    def ended_by_death(self) -> bool:
        return self.death is not None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kills": [k.to_dict() for k in self.kills]}
        if self.death is not None:
            data["death"] = self.death.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Life":
        death = data.get("death")
        return cls(
            kills=[KillEvent.from_dict(k) for k in data.get("kills", [])],
            death=KillEvent.from_dict(death) if death else None,
        )


@dataclass
class PlayerStat:
    """Aggregated statistics for a single player."""

    name: str
    rank: int = 0
    guild_name: str = ""
    class_name: Optional[str] = None
    total_points: int = 0
    total_kills: int = 0
    total_deaths: int = 0
    total_kills_each_guild: List[GuildCount] = field(default_factory=list)
    total_deaths_each_guild: List[GuildCount] = field(default_factory=list)
    lives: List[Life] = field(default_factory=list)
    kills: List[KillStat] = field(default_factory=list)
    killed_by: List[KillStat] = field(default_factory=list)

    @property
    def kill_death_ratio(self) -> float:
        if self.total_deaths == 0:
            return float(self.total_kills)
        return self.total_kills / self.total_deaths

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "rank": self.rank,
            "guildName": self.guild_name,
        }
        if self.class_name is not None:
            data["class"] = self.class_name
        data.update(
            {
                "totalPoints": self.total_points,
                "totalKills": self.total_kills,
                "totalDeaths": self.total_deaths,
                "totalKillsEachGuild": [g.to_dict() for g in self.total_kills_each_guild],
                "totalDeathsEachGuild": [g.to_dict() for g in self.total_deaths_each_guild],
                "lives": [life.to_dict() for life in self.lives],
                "kills": [k.to_dict() for k in self.kills],
                "killedBy": [k.to_dict() for k in self.killed_by],
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerStat":
        return cls(
            name=data["name"],
            rank=data.get("rank", 0),
            guild_name=data.get("guildName", ""),
            class_name=data.get("class"),
            total_points=data.get("totalPoints", 0),
            total_kills=data.get("totalKills", 0),
            total_deaths=data.get("totalDeaths", 0),
            total_kills_each_guild=[
                GuildCount(g["guildName"], g["count"]) for g in data.get("totalKillsEachGuild", [])
            ],
            total_deaths_each_guild=[
                GuildCount(g["guildName"], g["count"]) for g in data.get("totalDeathsEachGuild", [])
            ],
            lives=[Life.from_dict(life) for life in data.get("lives", [])],
            kills=[KillStat(k["name"], k["count"]) for k in data.get("kills", [])],
            killed_by=[KillStat(k["name"], k["count"]) for k in data.get("killedBy", [])],
        )


@dataclass
class GuildStat:
    """Aggregated statistics for a single guild."""

    name: str
    rank: int = 0
    player_count: int = 0
    total_points_from_kills: int = 0
    total_extra_life_points: int = 0
    total_points: int = 0
    total_kills: int = 0
    total_deaths: int = 0
    kills: List[KillStat] = field(default_factory=list)
    killed_by: List[KillStat] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "rank": self.rank,
            "playerCount": self.player_count,
            "totalPointsFromKills": self.total_points_from_kills,
            "totalExtraLifePoints": self.total_extra_life_points,
            "totalPoints": self.total_points,
            "totalKills": self.total_kills,
            "totalDeaths": self.total_deaths,
            "kills": [k.to_dict() for k in self.kills],
            "killedBy": [k.to_dict() for k in self.killed_by],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GuildStat":
        return cls(
            name=data["name"],
            rank=data.get("rank", 0),
            player_count=data.get("playerCount", 0),
            total_points_from_kills=data.get("totalPointsFromKills", 0),
            total_extra_life_points=data.get("totalExtraLifePoints", 0),
            total_points=data.get("totalPoints", 0),
            total_kills=data.get("totalKills", 0),
            total_deaths=data.get("totalDeaths", 0),
            kills=[KillStat(k["name"], k["count"]) for k in data.get("kills", [])],
            killed_by=[KillStat(k["name"], k["count"]) for k in data.get("killedBy", [])],
        )


@dataclass
class SiegeResult:
    """Complete output of one parse: ranked players and guilds."""

    player_results: List[PlayerStat] = field(default_factory=list)
    guild_results: List[GuildStat] = field(default_factory=list)

    def get_player(self, name: str) -> Optional[PlayerStat]:
        for player in self.player_results:
            if player.name == name:
                return player
        return None

    def get_guild(self, name: str) -> Optional[GuildStat]:
        for guild in self.guild_results:
            if guild.name == name:
                return guild
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "playerResults": [p.to_dict() for p in self.player_results],
            "guildResults": [g.to_dict() for g in self.guild_results],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SiegeResult":
        return cls(
            player_results=[PlayerStat.from_dict(p) for p in data.get("playerResults", [])],
            guild_results=[GuildStat.from_dict(g) for g in data.get("guildResults", [])],
        )
