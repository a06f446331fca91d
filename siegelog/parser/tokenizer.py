"""
Entry tokenizer for guild siege combat logs.

A log is a sequence of blank-line separated entries. Each entry carries
the attack description on its first line and the awarded point bonuses
on its second line:

    [20:41:07] [Alpha] Hero(Warrior) → Attack [Beta] Guild Master Villain
    Kill +100 Guild War +20
"""

import re
import logging
from dataclasses import dataclass
from typing import Dict, Any, List, Optional

from .events import KillRecord


logger = logging.getLogger(__name__)


@dataclass
class EntryNames:
    """Names found on an entry's first line during name discovery."""

    attacker_name: Optional[str] = None
    defender_name: Optional[str] = None

    def names(self) -> List[str]:
        return [n for n in (self.attacker_name, self.defender_name) if n]


class EntryTokenizer:
    """
    Splits raw log text into entries and extracts kill records from them.

    Malformed entries are counted and skipped, never raised.
    """

    # Blank line (optionally holding whitespace) between two entries
    ENTRY_SEPARATOR = re.compile(r"\n\s*\n")

    # "[<timestamp>] [<guild>] <name>(" with an optional "Guild Master" title
    ATTACK_PATTERN = re.compile(r"\[([^\]]+)\]\s+\[([^\]]+)\]\s+(?:Guild Master\s*)?([^\(]+)\s*\(")

    # Stricter attacker form used for name discovery: single-token names only
    DISCOVERY_ATTACK_PATTERN = re.compile(r"\[([^\]]+)\]\s+\[([^\]]+)\]\s+([^(\s]+)\s*\(")

    # "→ Attack [<guild>] <name>" with an optional defender title
    DEFENSE_PATTERN = re.compile(r"→ Attack \[([^\]]+)\](?: Guild Master| Defender)? (.+)$")

    # ASCII digits only
    POINTS_PATTERN = re.compile(r"\+([0-9]+)")

    # Entries shorter than this are truncated or system noise
    MIN_ENTRY_LINES = 2

    def __init__(self):
        self.entry_count = 0
        self.short_entry_count = 0
        self.error_count = 0
        self.record_count = 0

    def split_entries(self, text: str) -> List[List[str]]:
        """
        Split raw log text into entries of at least two lines.

        Args:
            text: Full raw log text

        Returns:
            Entries in source order, each as a list of lines
        """
        text = (text or "").strip()
        if not text:
            return []

        entries = []
        for block in self.ENTRY_SEPARATOR.split(text):
            self.entry_count += 1
            lines = block.split("\n")
            if len(lines) < self.MIN_ENTRY_LINES:
                self.short_entry_count += 1
                logger.debug(f"Skipping short entry: {block[:80]!r}")
                continue
            entries.append(lines)

        return entries

    def discover_names(self, lines: List[str]) -> EntryNames:
        """
        Find attacker and defender names independently of each other.

        Either side may be found without the other, so players mentioned
        in otherwise unusable entries still get a record.
        """
        found = EntryNames()
        if len(lines) < self.MIN_ENTRY_LINES:
            return found

        attack_line = lines[0].strip()

        attack_match = self.DISCOVERY_ATTACK_PATTERN.search(attack_line)
        if attack_match:
            found.attacker_name = attack_match.group(3).strip()

        defense_match = self.DEFENSE_PATTERN.search(attack_line)
        if defense_match:
            found.defender_name = defense_match.group(2).strip()

        return found

    def parse_entry(self, lines: List[str]) -> Optional[KillRecord]:
        """
        Extract a kill record from one entry.

        Args:
            lines: Lines of a single entry

        Returns:
            KillRecord, or None if the attacker or defender part is missing
        """
        if len(lines) < self.MIN_ENTRY_LINES:
            return None

        attack_line = lines[0].strip()
        points_line = lines[1].strip()

        attack_match = self.ATTACK_PATTERN.search(attack_line)
        defense_match = self.DEFENSE_PATTERN.search(attack_line)
        if not attack_match or not defense_match:
            self.error_count += 1
            logger.debug(f"Skipping malformed entry: {attack_line[:80]!r}")
            return None

        timestamp, attacker_guild, attacker_name = (g.strip() for g in attack_match.groups())
        defender_guild, defender_name = (g.strip() for g in defense_match.groups())

        self.record_count += 1
        return KillRecord(
            timestamp=timestamp,
            attacker_guild=attacker_guild,
            attacker_name=attacker_name,
            defender_guild=defender_guild,
            defender_name=defender_name,
            points=self.sum_points(points_line),
        )

    def sum_points(self, line: str) -> int:
        """Sum every "+<integer>" bonus found on a points line."""
        return sum(int(value) for value in self.POINTS_PATTERN.findall(line))

    def get_stats(self) -> Dict[str, Any]:
        return {
            "entries_seen": self.entry_count,
            "short_entries": self.short_entry_count,
            "malformed_entries": self.error_count,
            "kill_records": self.record_count,
        }
