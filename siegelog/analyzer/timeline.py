"""
Siege clock and life timeline helpers.
"""

from dataclasses import dataclass
from typing import List, Optional

from siegelog.aggregation.lives import time_of_day_seconds
from siegelog.models.results import Life
from siegelog.parser.events import KillEvent


DEFAULT_SIEGE_END = "21:15:00"


def remaining_siege_time(timestamp: str, siege_end: str = DEFAULT_SIEGE_END) -> str:
    """
    Describe an event's distance to the end of the siege.

    Args:
        timestamp: Event time of day (HH:MM:SS)
        siege_end: Siege end time of day (HH:MM:SS)

    Returns:
        "12m 5s remaining" before or at the end, "3m 0s past end" after it,
        "unknown" when either time cannot be read
    """
    event_seconds = time_of_day_seconds(timestamp)
    end_seconds = time_of_day_seconds(siege_end)
    if event_seconds is None or end_seconds is None:
        return "unknown"

    total_seconds = end_seconds - event_seconds
    minutes, seconds = divmod(abs(total_seconds), 60)

    if total_seconds >= 0:
        return f"{minutes}m {seconds}s remaining"
    return f"{minutes}m {seconds}s past end"


def life_duration(life: Life, previous_death: Optional[KillEvent] = None) -> Optional[int]:
    """
    Seconds a life lasted.

    The life starts at the previous death (or its first kill for the first
    life) and ends at its own death (or its last kill if it never ended).
    """
    start = previous_death or (life.kills[0] if life.kills else None)
    end = life.death or (life.kills[-1] if life.kills else None)
    if start is None or end is None:
        return None

    start_seconds = time_of_day_seconds(start.timestamp)
    end_seconds = time_of_day_seconds(end.timestamp)
    if start_seconds is None or end_seconds is None:
        return None
    return end_seconds - start_seconds


@dataclass
class TimelineRow:
    """One kill or death on a player's life timeline."""

    life_number: int
    kind: str  # kill | death
    actor_name: str
    guild_name: str
    timestamp: str
    clock: str


def build_life_timeline(lives: List[Life], siege_end: str = DEFAULT_SIEGE_END) -> List[TimelineRow]:
    """
    Flatten lives into timeline rows with the siege clock attached.

    Args:
        lives: A player's lives in chronological order
        siege_end: Siege end time of day

    Returns:
        Rows in chronological order, each life's death after its kills
    """
    rows = []
    for number, life in enumerate(lives, start=1):
        for kill in life.kills:
            rows.append(
                TimelineRow(
                    life_number=number,
                    kind="kill",
                    actor_name=kill.actor_name,
                    guild_name=kill.guild_name,
                    timestamp=kill.timestamp,
                    clock=remaining_siege_time(kill.timestamp, siege_end),
                )
            )
        if life.death is not None:
            rows.append(
                TimelineRow(
                    life_number=number,
                    kind="death",
                    actor_name=life.death.actor_name,
                    guild_name=life.death.guild_name,
                    timestamp=life.death.timestamp,
                    clock=remaining_siege_time(life.death.timestamp, siege_end),
                )
            )
    return rows
