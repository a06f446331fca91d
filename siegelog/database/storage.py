"""
Storage for parsed siege logs and the character class roster.
"""

import json
import uuid
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from .schema import DatabaseManager

logger = logging.getLogger(__name__)


def normalize_log_date(value: Any) -> Optional[str]:
    """
    Normalize a calendar date to ``YYYY-MM-DD``.

    Accepts date/datetime objects, ISO dates and ISO datetimes. Returns
    None when the value is not a date.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if len(text) > 10 and text[10] in "T ":
        text = text[:10]
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        return None


@dataclass
class LogEntry:
    """A stored siege log."""

    log_id: str
    log_date: str
    server_name: str
    parsed_data: Dict[str, Any]
    raw_log: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "LogEntry":
        return cls(
            log_id=row["log_id"],
            log_date=row["log_date"],
            server_name=row["server_name"],
            parsed_data=json.loads(row["parsed_data"]) if row.get("parsed_data") else {},
            raw_log=row.get("raw_log"),
            created_at=row.get("created_at"),
        )

    def to_dict(self, include_raw: bool = False) -> Dict[str, Any]:
        data = {
            "id": self.log_id,
            "logDate": self.log_date,
            "serverName": self.server_name,
            "parsedData": self.parsed_data,
        }
        if include_raw:
            data["rawLog"] = self.raw_log
        return data


class LogStorage:
    """Reads and writes siege logs and character classes."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    def save_log(
        self,
        raw_log: str,
        log_date: Any,
        server_name: str,
        parsed_data: Dict[str, Any],
    ) -> LogEntry:
        """
        Store a raw log with its parsed result document.

        Args:
            raw_log: Raw log text as uploaded
            log_date: Calendar date of the siege
            server_name: Game server the siege was fought on
            parsed_data: Serialized SiegeResult

        Returns:
            The stored LogEntry
        """
        normalized = normalize_log_date(log_date)
        if normalized is None:
            raise ValueError(f"Invalid log date: {log_date!r}")

        entry = LogEntry(
            log_id=uuid.uuid4().hex,
            log_date=normalized,
            server_name=server_name,
            parsed_data=parsed_data,
            raw_log=raw_log,
        )

        try:
            self.db.execute(
                """
                INSERT INTO log_entries (log_id, log_date, server_name, raw_log, parsed_data)
                VALUES (?, ?, ?, ?, ?)
            """,
                (entry.log_id, entry.log_date, entry.server_name, raw_log, json.dumps(parsed_data)),
                fetch_results=False,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Stored log {entry.log_id} for {server_name} on {entry.log_date}")
        return entry

    def get_log(self, log_id: str) -> Optional[LogEntry]:
        rows = self.db.execute("SELECT * FROM log_entries WHERE log_id = ?", (log_id,))
        return LogEntry.from_row(rows[0]) if rows else None

    def get_log_by_date(self, log_date: Any, server_name: Optional[str] = None) -> Optional[LogEntry]:
        """
        Get the first log stored for a calendar day.

        Args:
            log_date: Calendar date
            server_name: Optionally restrict to one server
        """
        normalized = normalize_log_date(log_date)
        if normalized is None:
            return None

        query = "SELECT * FROM log_entries WHERE log_date = ?"
        params: tuple = (normalized,)
        if server_name:
            query += " AND server_name = ?"
            params += (server_name,)
        query += " ORDER BY created_at, rowid LIMIT 1"

        rows = self.db.execute(query, params)
        return LogEntry.from_row(rows[0]) if rows else None

    def list_logs(self, server_name: Optional[str] = None) -> List[Dict[str, Any]]:
        """List stored logs newest date first, without their contents."""
        query = "SELECT log_id, log_date, server_name FROM log_entries"
        params: tuple = ()
        if server_name:
            query += " WHERE server_name = ?"
            params = (server_name,)
        query += " ORDER BY log_date DESC, rowid DESC"

        rows = self.db.execute(query, params) or []
        return [
            {"id": row["log_id"], "logDate": row["log_date"], "serverName": row["server_name"]}
            for row in rows
        ]

    def list_servers(self) -> List[Dict[str, Any]]:
        """Count stored logs per server."""
        counts: Dict[str, int] = {}
        for entry in self.list_logs():
            server = entry["serverName"] or "Unknown"
            counts[server] = counts.get(server, 0) + 1
        return [{"name": name, "count": count} for name, count in counts.items()]

    def upsert_character(self, name: str, server_name: str, class_name: str) -> Dict[str, Any]:
        """Register or update a character's class."""
        self.db.execute(
            """
            INSERT INTO characters (name, server_name, class_name)
            VALUES (?, ?, ?)
            ON CONFLICT(name, server_name) DO UPDATE SET
                class_name = excluded.class_name,
                updated_at = CURRENT_TIMESTAMP
        """,
            (name, server_name, class_name),
            fetch_results=False,
        )
        self.db.commit()
        logger.debug(f"Character {name}@{server_name} set to {class_name}")
        return {"name": name, "serverName": server_name, "class": class_name}

    def get_character(self, name: str, server_name: str) -> Optional[Dict[str, Any]]:
        rows = self.db.execute(
            "SELECT name, server_name, class_name FROM characters WHERE name = ? AND server_name = ?",
            (name, server_name),
        )
        if not rows:
            return None
        row = rows[0]
        return {"name": row["name"], "serverName": row["server_name"], "class": row["class_name"]}

    def list_characters(self, server_name: str) -> List[Dict[str, Any]]:
        rows = self.db.execute(
            "SELECT name, server_name, class_name FROM characters WHERE server_name = ? ORDER BY name ASC",
            (server_name,),
        ) or []
        return [{"name": r["name"], "serverName": r["server_name"], "class": r["class_name"]} for r in rows]

    def class_lookup(self, server_name: str) -> Dict[str, str]:
        """Name to class mapping for one server's roster."""
        return {c["name"]: c["class"] for c in self.list_characters(server_name)}
