"""
Guild Siege Combat Log Parser

Parses plain-text guild siege combat logs into ranked per-player and
per-guild statistics, life timelines and guild-vs-guild breakdowns.
"""

__version__ = "0.1.0"
__author__ = "Siegelog Team"
