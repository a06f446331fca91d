"""
FastAPI dependencies for the siege log API.
"""

from fastapi import Depends, Request

from siegelog.config.settings import ApplicationSettings
from siegelog.database.schema import DatabaseManager
from siegelog.database.storage import LogStorage


def get_database(request: Request) -> DatabaseManager:
    """Database manager attached to the application."""
    return request.app.state.db


def get_app_settings(request: Request) -> ApplicationSettings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_storage(db: DatabaseManager = Depends(get_database)) -> LogStorage:
    return LogStorage(db)
