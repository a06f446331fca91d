"""
Life reconstruction from a player's kill and death events.
"""

import re
from typing import Iterable, List, Optional, Tuple

from siegelog.parser.events import RawEvent
from siegelog.models.results import Life


TIME_OF_DAY_PATTERN = re.compile(r"^([0-9]{1,2}):([0-9]{2}):([0-9]{2})$")


def time_of_day_seconds(timestamp: str) -> Optional[int]:
    """
    Convert an ``HH:MM:SS`` timestamp to seconds since midnight.

    Returns None when the value is not a valid time of day. There is no
    date component: every event is assumed to happen on the same day.
    """
    match = TIME_OF_DAY_PATTERN.match((timestamp or "").strip())
    if not match:
        return None

    hours, minutes, seconds = (int(part) for part in match.groups())
    if hours > 23 or minutes > 59 or seconds > 59:
        return None
    return hours * 3600 + minutes * 60 + seconds


def _chronological_key(event: RawEvent) -> Tuple[int, int]:
    seconds = time_of_day_seconds(event.event.timestamp)
    if seconds is None:
        # Unreadable timestamps go last, keeping their relative order
        return (1, 0)
    return (0, seconds)


def sort_chronologically(events: Iterable[RawEvent]) -> List[RawEvent]:
    """Stable sort of events by time of day."""
    return sorted(events, key=_chronological_key)


def reconstruct_lives(events: Iterable[RawEvent]) -> List[Life]:
    """
    Replay a player's events into lives.

    Kills accumulate on the current life; a death closes it. A trailing
    life is kept only when it holds at least one kill.

    Args:
        events: The player's events in any order

    Returns:
        Lives in chronological order
    """
    lives: List[Life] = []
    current = Life()

    for raw in sort_chronologically(events):
        if raw.is_kill:
            current.kills.append(raw.event)
        elif raw.is_death:
            current.death = raw.event
            lives.append(current)
            current = Life()

    if current.kills:
        lives.append(current)

    return lives
