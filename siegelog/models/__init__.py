"""
Data models for guild siege log analysis.
"""

from .results import KillStat, GuildCount, Life, PlayerStat, GuildStat, SiegeResult

__all__ = [
    "KillStat",
    "GuildCount",
    "Life",
    "PlayerStat",
    "GuildStat",
    "SiegeResult",
]
