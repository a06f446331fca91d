"""
HTTP API for guild siege log parsing and storage.
"""

from .app import create_app, create_app_from_settings

__all__ = ["create_app", "create_app_from_settings"]
