"""
Trade file import API endpoints.

An upload creates an import session that is previewed, optionally mapped,
and then confirmed or cancelled by follow-up calls.
"""

from typing import Any

from cachetools import TTLCache
from fastapi import APIRouter, Depends, File, Form, UploadFile
from loguru import logger

from tradelog.api.deps import get_import_session, get_import_sessions, get_repository, get_settings
from tradelog.api.schemas.api_models import ColumnMappingRequest
from tradelog.config import Settings
from tradelog.core.constants import DEFAULT_ACCOUNT_ID
from tradelog.infrastructure.csv_import import ImportSession, TradeFileValidator
from tradelog.infrastructure.storage import KeyValueTradeRepository

router = APIRouter()


@router.post("", status_code=201)
async def upload_trade_file(
    file: UploadFile = File(..., description="CSV or Excel trade history export"),
    account_id: str = Form(default=DEFAULT_ACCOUNT_ID),
    repository: KeyValueTradeRepository = Depends(get_repository),
    sessions: TTLCache = Depends(get_import_sessions),
    app_settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    """Upload a broker export and get a preview, or a mapping request."""
    payload = await file.read()
    session = ImportSession(
        repository,
        account_id=account_id,
        validator=TradeFileValidator(app_settings.max_import_file_bytes),
    )
    session.load_file(file.filename or "", payload)
    sessions[session.session_id] = session
    logger.info(f"Import session {session.session_id} is {session.state}")
    return session.to_dict()


@router.get("/{session_id}")
def get_import(session: ImportSession = Depends(get_import_session)) -> dict[str, Any]:
    """Get the state of a pending import."""
    return session.to_dict()


@router.post("/{session_id}/mapping")
def submit_mapping(
    request: ColumnMappingRequest,
    session: ImportSession = Depends(get_import_session),
) -> dict[str, Any]:
    """Re-parse the file with a user-confirmed column mapping."""
    session.submit_mapping(request.to_mapping())
    return session.to_dict()


@router.post("/{session_id}/confirm")
def confirm_import(session: ImportSession = Depends(get_import_session)) -> dict[str, Any]:
    """Merge the previewed trades into the journal."""
    session.confirm()
    return session.to_dict()


@router.post("/{session_id}/cancel")
def cancel_import(
    session: ImportSession = Depends(get_import_session),
    sessions: TTLCache = Depends(get_import_sessions),
) -> dict[str, Any]:
    """Abandon a pending import."""
    session.cancel()
    sessions.pop(session.session_id, None)
    return session.to_dict()
