"""
Pydantic models for siege log API requests and responses.
"""

from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict, Field


class LogSummary(BaseModel):
    """A stored log without its contents."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Log identifier")
    log_date: str = Field(..., alias="logDate", description="Siege date (YYYY-MM-DD)")
    server_name: str = Field(..., alias="serverName", description="Game server")


class LogEntryResponse(LogSummary):
    """A stored log with its parsed result document."""

    parsed_data: Dict[str, Any] = Field(..., alias="parsedData", description="Parsed siege result")


class ServerSummary(BaseModel):
    """Number of stored logs for one server."""

    name: str
    count: int = Field(..., ge=0)


class ServerListResponse(BaseModel):
    servers: List[ServerSummary]


class CharacterRequest(BaseModel):
    """Register a character's class for a server."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Character name as it appears in logs")
    server_name: str = Field(..., alias="serverName", min_length=1)
    class_name: str = Field(..., alias="class", min_length=1)


class CharacterResponse(CharacterRequest):
    pass


class HealthResponse(BaseModel):
    status: str
    version: str
    database: str
    timestamp: float
