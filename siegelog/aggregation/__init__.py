"""
Aggregation module for building player and guild statistics.
"""

from .aggregator import SiegeAggregator, PlayerAccumulator, LIFE_POINTS_PER_MEMBER
from .lives import reconstruct_lives, sort_chronologically, time_of_day_seconds
from .ranking import rank_players, rank_guilds, ranked_tally

__all__ = [
    "SiegeAggregator",
    "PlayerAccumulator",
    "LIFE_POINTS_PER_MEMBER",
    "reconstruct_lives",
    "sort_chronologically",
    "time_of_day_seconds",
    "rank_players",
    "rank_guilds",
    "ranked_tally",
]
