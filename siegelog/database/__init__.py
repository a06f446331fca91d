"""
Database module for storing parsed siege logs.
"""

from .schema import DatabaseManager, create_tables
from .storage import LogEntry, LogStorage, normalize_log_date

__all__ = ["DatabaseManager", "create_tables", "LogEntry", "LogStorage", "normalize_log_date"]
