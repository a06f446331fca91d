"""
Event classes for guild siege combat log entries.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class EventKind(Enum):
    """Which side of a kill a player's event records."""

    KILL = "kill"
    DEATH = "death"


@dataclass(frozen=True)
class KillEvent:
    """
    A single combat fact seen from one player's point of view.

    ``actor_name`` and ``guild_name`` describe the player on the other
    side of the fight: the victim for a kill, the killer for a death.
    """

    actor_name: str
    guild_name: str
    timestamp: str  # HH:MM:SS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "actorName": self.actor_name,
            "guildName": self.guild_name,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KillEvent":
        return cls(
            actor_name=data.get("actorName", ""),
            guild_name=data.get("guildName", ""),
            timestamp=data.get("timestamp", ""),
        )


@dataclass(frozen=True)
class RawEvent:
    """Kill or death event attached to the player who owns it."""

    kind: EventKind
    event: KillEvent

    @property
    def is_kill(self) -> bool:
        return self.kind is EventKind.KILL

    @property
    def is_death(self) -> bool:
        return self.kind is EventKind.DEATH

    @classmethod
    def kill(cls, event: KillEvent) -> "RawEvent":
        return cls(kind=EventKind.KILL, event=event)

    @classmethod
    def death(cls, event: KillEvent) -> "RawEvent":
        return cls(kind=EventKind.DEATH, event=event)


@dataclass(frozen=True)
class KillRecord:
    """One successfully extracted attack entry."""

    timestamp: str
    attacker_guild: str
    attacker_name: str
    defender_guild: str
    defender_name: str
    points: int

    def attacker_event(self) -> RawEvent:
        """Event recorded on the attacker: a kill of the defender."""
        return RawEvent.kill(
            KillEvent(
                actor_name=self.defender_name,
                guild_name=self.defender_guild,
                timestamp=self.timestamp,
            )
        )

    def defender_event(self) -> RawEvent:
        """Event recorded on the defender: a death at the attacker's hands."""
        return RawEvent.death(
            KillEvent(
                actor_name=self.attacker_name,
                guild_name=self.attacker_guild,
                timestamp=self.timestamp,
            )
        )
