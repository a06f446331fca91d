"""
Log upload and retrieval endpoints.

Provides one-off parsing of uploaded siege logs, storage of parsed logs
per server and date, and lookup of stored logs by id or date.
"""

import logging
from typing import Any, Dict, List, Optional, Union
from fastapi import APIRouter, Depends, File, Form, HTTPException, Path, Query, UploadFile

from siegelog.config.settings import ApplicationSettings
from siegelog.database.storage import LogStorage, normalize_log_date
from siegelog.parser.parser import parse_log
from ..dependencies import get_app_settings, get_storage
from ..models import LogEntryResponse, LogSummary, ServerListResponse

logger = logging.getLogger(__name__)

router = APIRouter()


async def read_upload(file: UploadFile, settings: ApplicationSettings) -> str:
    """Read an uploaded log as text, enforcing the configured type and size limits."""
    if not settings.upload.is_allowed(file.filename):
        allowed = ", ".join(settings.upload.allowed_extensions)
        raise HTTPException(status_code=400, detail=f"Unsupported file type (allowed: {allowed})")

    content = await file.read()
    if len(content) > settings.upload.max_file_size:
        raise HTTPException(
            status_code=413,
            detail=f"File too large (max {settings.upload.max_file_size} bytes)",
        )
    return content.decode("utf-8", errors="ignore")


@router.post("/upload")
async def upload_log(
    file: Optional[UploadFile] = File(None),
    settings: ApplicationSettings = Depends(get_app_settings),
) -> Dict[str, Any]:
    """
    Parse an uploaded siege log without storing it.

    Returns:
        Parsed result document
    """
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    text = await read_upload(file, settings)
    return parse_log(text).to_dict()


@router.post("/logs", response_model=LogEntryResponse)
async def save_log(
    file: Optional[UploadFile] = File(None),
    log_date: Optional[str] = Form(None, alias="logDate"),
    server_name: Optional[str] = Form(None, alias="serverName"),
    settings: ApplicationSettings = Depends(get_app_settings),
    storage: LogStorage = Depends(get_storage),
) -> LogEntryResponse:
    """
    Parse a siege log and store it for a server and date.

    Player classes are filled in from the server's character roster.
    """
    if file is None or not log_date or not server_name:
        raise HTTPException(status_code=400, detail="File, log date, and server name are required")

    normalized_date = normalize_log_date(log_date)
    if normalized_date is None:
        raise HTTPException(status_code=400, detail=f"Invalid log date: {log_date}")

    raw_log = await read_upload(file, settings)
    parsed = parse_log(raw_log, storage.class_lookup(server_name)).to_dict()

    try:
        entry = storage.save_log(raw_log, normalized_date, server_name, parsed)
    except Exception:
        logger.exception(f"Error saving log for {server_name} on {normalized_date}")
        raise HTTPException(status_code=500, detail="Failed to save log data")

    return LogEntryResponse(**entry.to_dict())


@router.get("/logs", response_model=Union[List[LogSummary], ServerListResponse])
async def list_logs(
    server_name: Optional[str] = Query(None, alias="serverName", description="Only logs of this server"),
    storage: LogStorage = Depends(get_storage),
):
    """
    List stored logs for a server, or per-server counts when no server is given.
    """
    if not server_name:
        return ServerListResponse(servers=storage.list_servers())
    return [LogSummary(**entry) for entry in storage.list_logs(server_name)]


@router.get("/logs/{log_id}", response_model=LogEntryResponse)
async def get_log(
    log_id: str = Path(..., description="Log ID or siege date (YYYY-MM-DD)"),
    storage: LogStorage = Depends(get_storage),
) -> LogEntryResponse:
    """
    Get a stored log by date or by ID.
    """
    if normalize_log_date(log_id) is not None:
        entry = storage.get_log_by_date(log_id)
        if entry is None:
            raise HTTPException(status_code=404, detail="No log found for the specified date")
    else:
        entry = storage.get_log(log_id)
        if entry is None:
            raise HTTPException(status_code=404, detail="No log found with the specified ID")

    return LogEntryResponse(**entry.to_dict())
