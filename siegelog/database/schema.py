"""
Database schema for parsed siege log storage.

SQLite backend holding raw logs, their parsed result documents and the
character class roster used to decorate player results.
"""

import sqlite3
import logging
from pathlib import Path
from typing import Optional, Dict, Any, List

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION = 1


class DatabaseManager:
    """
    SQLite database manager.

    Provides a thin query interface with dict rows, transaction control
    and schema helpers.
    """

    def __init__(self, db_path: str = "siege_logs.db"):
        """
        Initialize database manager.

        Args:
            db_path: SQLite database path, or ":memory:"
        """
        self.db_path = db_path
        self.connection: Optional[sqlite3.Connection] = None
        self._setup_sqlite_database()

    def _setup_sqlite_database(self):
        """Open the SQLite connection with our pragmas."""
        in_memory = self.db_path == ":memory:"
        try:
            if not in_memory:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self.connection = sqlite3.connect(self.db_path, timeout=30.0, check_same_thread=False)
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Failed to setup database at {self.db_path}: {e}")
            raise

        if not in_memory:
            self.connection.execute("PRAGMA journal_mode=WAL")  # Write-Ahead Logging
            self.connection.execute("PRAGMA synchronous=NORMAL")
        self.connection.execute("PRAGMA foreign_keys=ON")

        # Set row factory for dict-like access
        self.connection.row_factory = sqlite3.Row

        logger.info(f"SQLite database initialized at {self.db_path}")

    def execute(self, query: str, params: tuple = (), fetch_results: bool = True) -> Optional[List[Dict[str, Any]]]:
        """Execute a single query."""
        cursor = self.connection.execute(query, params)
        if fetch_results and cursor.description:
            return [dict(row) for row in cursor.fetchall()]
        return None

    def commit(self):
        """Commit current transaction."""
        self.connection.commit()

    def rollback(self):
        """Rollback current transaction."""
        self.connection.rollback()

    def close(self):
        """Close database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    def health_check(self) -> bool:
        """Check database health."""
        try:
            self.execute("SELECT 1", fetch_results=True)
            return True
        except (sqlite3.Error, AttributeError):
            return False

    def table_exists(self, table_name: str) -> bool:
        """Check if table exists."""
        result = self.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            (table_name,)
        )
        return result is not None and len(result) > 0


def create_tables(db: DatabaseManager) -> None:
    """
    Create all tables and indices for siege log storage.

    Args:
        db: Database manager instance
    """
    db.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_version (
            version INTEGER PRIMARY KEY,
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """
    )

    # One uploaded siege log and its parsed result document
    db.execute(
        """
        CREATE TABLE IF NOT EXISTS log_entries (
            log_id TEXT PRIMARY KEY,
            log_date TEXT NOT NULL,
            server_name TEXT NOT NULL,
            raw_log TEXT NOT NULL,
            parsed_data TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """
    )

    # Character roster used as the name to class lookup
    db.execute(
        """
        CREATE TABLE IF NOT EXISTS characters (
            character_id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            server_name TEXT NOT NULL,
            class_name TEXT NOT NULL,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(name, server_name)
        )
    """
    )

    db.execute("CREATE INDEX IF NOT EXISTS idx_log_date ON log_entries(log_date DESC)")
    db.execute("CREATE INDEX IF NOT EXISTS idx_log_server_date ON log_entries(server_name, log_date DESC)")
    db.execute("CREATE INDEX IF NOT EXISTS idx_character_server ON characters(server_name, name)")

    db.execute("INSERT OR IGNORE INTO schema_version (version) VALUES (?)", (CURRENT_SCHEMA_VERSION,))
    db.commit()

    logger.info("Database tables created")
