"""
Ranking helpers: count tallies and points-ordered rank assignment.
"""

from typing import Callable, Dict, Iterable, List, TypeVar

from siegelog.models.results import GuildCount, GuildStat, KillStat, PlayerStat

T = TypeVar("T")


def count_first_seen(names: Iterable[str]) -> Dict[str, int]:
    """Count occurrences, keeping keys in order of first appearance."""
    counts: Dict[str, int] = {}
    for name in names:
        counts[name] = counts.get(name, 0) + 1
    return counts


def increment_tally(tally: List[KillStat], name: str) -> None:
    """Bump the count for ``name``, appending a new entry on first sight."""
    for stat in tally:
        if stat.name == name:
            stat.count += 1
            return
    tally.append(KillStat(name=name, count=1))


def ranked_tally(names: Iterable[str]) -> List[KillStat]:
    """
    Tally names into KillStats sorted by count, highest first.

    Ties keep the order in which names first appeared.
    """
    counts = count_first_seen(names)
    stats = [KillStat(name=name, count=count) for name, count in counts.items()]
    return sorted(stats, key=lambda s: s.count, reverse=True)


def ranked_guild_tally(guild_names: Iterable[str]) -> List[GuildCount]:
    """Same as ranked_tally, keyed by guild name."""
    counts = count_first_seen(guild_names)
    stats = [GuildCount(guild_name=name, count=count) for name, count in counts.items()]
    return sorted(stats, key=lambda s: s.count, reverse=True)


def rank_by_points(items: Iterable[T], points: Callable[[T], int]) -> List[T]:
    """
    Sort items by points descending and assign 1-based ranks.

    Every item gets its own position; tied items keep their input order
    and take consecutive ranks.
    """
    ordered = sorted(items, key=points, reverse=True)
    for position, item in enumerate(ordered, start=1):
        item.rank = position
    return ordered


def rank_players(players: Iterable[PlayerStat]) -> List[PlayerStat]:
    return rank_by_points(players, lambda p: p.total_points)


def rank_guilds(guilds: Iterable[GuildStat]) -> List[GuildStat]:
    return rank_by_points(guilds, lambda g: g.total_points)
