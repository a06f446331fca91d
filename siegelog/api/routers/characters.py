"""
Character roster endpoints.

The roster maps character names to classes per server and decorates
player results when logs are stored.
"""

from typing import List
from fastapi import APIRouter, Depends, Query

from siegelog.database.storage import LogStorage
from ..dependencies import get_storage
from ..models import CharacterRequest, CharacterResponse

router = APIRouter()


@router.get("/characters", response_model=List[CharacterResponse])
async def list_characters(
    server_name: str = Query(..., alias="serverName", description="Game server"),
    storage: LogStorage = Depends(get_storage),
) -> List[CharacterResponse]:
    """List a server's characters ordered by name."""
    return [CharacterResponse(**c) for c in storage.list_characters(server_name)]


@router.post("/characters", response_model=CharacterResponse)
async def register_character(
    character: CharacterRequest,
    storage: LogStorage = Depends(get_storage),
) -> CharacterResponse:
    """Register or update a character's class."""
    saved = storage.upsert_character(character.name, character.server_name, character.class_name)
    return CharacterResponse(**saved)
