"""
Presentation helpers: siege clock, life timelines and rich displays.
"""

from .timeline import build_life_timeline, life_duration, remaining_siege_time, TimelineRow
from .displays import DisplayBuilder

__all__ = [
    "build_life_timeline",
    "life_duration",
    "remaining_siege_time",
    "TimelineRow",
    "DisplayBuilder",
]
