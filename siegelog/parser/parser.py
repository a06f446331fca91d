"""
Main siege log parser that coordinates tokenization and aggregation.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
import logging

from .tokenizer import EntryTokenizer
from siegelog.aggregation.aggregator import SiegeAggregator
from siegelog.models.results import SiegeResult


logger = logging.getLogger(__name__)


class SiegeLogParser:
    """
    Parser for guild siege combat logs.

    Runs name discovery and accumulation as two passes over the same
    entries, then hands the aggregated state to the ranker.
    """

    def __init__(self):
        self.tokenizer = EntryTokenizer()
        self.aggregator = SiegeAggregator()
        self.current_file: Optional[Path] = None

    def parse_file(self, file_path: str, class_lookup: Optional[Mapping[str, str]] = None) -> SiegeResult:
        """
        Parse a siege log file.

        Args:
            file_path: Path to the log file
            class_lookup: Optional player name to class mapping

        Returns:
            Ranked SiegeResult
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Siege log file not found: {file_path}")

        self.current_file = file_path
        logger.info(f"Starting parse of {file_path.name} ({file_path.stat().st_size / 1024:.1f} KB)")

        with open(file_path, "r", encoding="utf-8", errors="ignore") as f:
            text = f.read()

        return self.parse_text(text, class_lookup)

    def parse_text(self, text: str, class_lookup: Optional[Mapping[str, str]] = None) -> SiegeResult:
        """
        Parse raw log text.

        Args:
            text: Full raw log text
            class_lookup: Optional player name to class mapping

        Returns:
            Ranked SiegeResult
        """
        entries = self.tokenizer.split_entries(text)

        # Pass 1: every player mentioned anywhere gets a record
        for lines in entries:
            self.aggregator.register_names(self.tokenizer.discover_names(lines).names())

        # Pass 2: accumulate valid kill records
        for lines in entries:
            record = self.tokenizer.parse_entry(lines)
            if record:
                self.aggregator.process_record(record)

        result = self.aggregator.build_result(class_lookup)

        stats = self.tokenizer.get_stats()
        logger.info(
            f"Parsed {stats['kill_records']} kills from {stats['entries_seen']} entries "
            f"({stats['short_entries']} short, {stats['malformed_entries']} malformed): "
            f"{len(result.player_results)} players, {len(result.guild_results)} guilds"
        )
        return result

    def get_stats(self) -> Dict[str, Any]:
        """
        Get parsing statistics.

        Returns:
            Dictionary with parsing stats
        """
        return {
            "file": str(self.current_file) if self.current_file else None,
            "tokenizer_stats": self.tokenizer.get_stats(),
            "aggregation": self.aggregator.get_summary(),
        }

    def reset(self):
        """Reset parser state for new input."""
        self.tokenizer = EntryTokenizer()
        self.aggregator = SiegeAggregator()
        self.current_file = None


def parse_log(raw_text: str, class_lookup: Optional[Mapping[str, str]] = None) -> SiegeResult:
    """
    Parse raw siege log text into ranked player and guild statistics.

    Never raises for malformed input; unusable entries are skipped.

    Args:
        raw_text: Full raw log text
        class_lookup: Optional player name to class mapping

    Returns:
        Ranked SiegeResult
    """
    return SiegeLogParser().parse_text(raw_text, class_lookup)


def parse_lines(lines: List[str], class_lookup: Optional[Mapping[str, str]] = None) -> SiegeResult:
    """Parse a log given as a list of lines."""
    return parse_log("\n".join(lines), class_lookup)
