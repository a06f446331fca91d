"""
API routers for the siege log API.
"""

from . import characters, logs

__all__ = ["characters", "logs"]
