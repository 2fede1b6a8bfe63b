"""
FastAPI dependencies.
"""

from cachetools import TTLCache
from fastapi import Depends, HTTPException

from tradelog.config import Settings, settings
from tradelog.core.constants import MAX_IMPORT_SESSIONS
from tradelog.core.services.trade_service import TradeService
from tradelog.infrastructure.csv_import import ImportSession
from tradelog.infrastructure.storage import (
    JsonFileKeyValueStore,
    KeyValueTradeRepository,
    migrate_account_ids,
)

# Uploaded files wait here between preview and confirmation
_import_sessions: TTLCache = TTLCache(
    maxsize=MAX_IMPORT_SESSIONS, ttl=settings.import_session_ttl_seconds
)


def get_settings() -> Settings:
    return settings


def get_repository(app_settings: Settings = Depends(get_settings)) -> KeyValueTradeRepository:
    """Open the JSON store; legacy trades are tagged with the default account once."""
    repository = KeyValueTradeRepository(JsonFileKeyValueStore(app_settings.data_file))
    migrate_account_ids(repository, app_settings.default_account_id)
    return repository


def get_trade_service(
    repository: KeyValueTradeRepository = Depends(get_repository),
) -> TradeService:
    return TradeService(repository)


def get_import_sessions() -> TTLCache:
    return _import_sessions


def get_import_session(
    session_id: str, sessions: TTLCache = Depends(get_import_sessions)
) -> ImportSession:
    """Look up a pending import.

    Raises:
        HTTPException: 404 when the session is unknown or expired
    """
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Import session not found or expired")
    return session
