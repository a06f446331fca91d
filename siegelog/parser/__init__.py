"""
Siege log parser module for processing guild siege combat logs.
"""

from .tokenizer import EntryTokenizer, EntryNames
from .events import EventKind, KillEvent, KillRecord, RawEvent

__all__ = ["EntryTokenizer", "EntryNames", "EventKind", "KillEvent", "KillRecord", "RawEvent"]
