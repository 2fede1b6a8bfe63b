"""Application configuration via environment variables."""

import sys
from pathlib import Path

from loguru import logger
from pydantic_settings import BaseSettings

from tradelog.core.constants import (
    DEFAULT_ACCOUNT_ID,
    IMPORT_SESSION_TTL_SECONDS,
    MAX_IMPORT_FILE_BYTES,
)

PROJECT_ROOT = Path(__file__).resolve().parent.parent

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


class Settings(BaseSettings):
    data_file: Path = PROJECT_ROOT / "data" / "journal.json"  # JSON key-value store
    log_level: str = "INFO"
    default_account_id: str = DEFAULT_ACCOUNT_ID
    max_import_file_bytes: int = MAX_IMPORT_FILE_BYTES
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    import_session_ttl_seconds: int = IMPORT_SESSION_TTL_SECONDS

    model_config = {"env_prefix": "TRADELOG_", "env_file": ".env"}


def configure_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """
    Replace the default loguru sink.

    Args:
        level: Minimum level for the console sink
        log_file: Optional file receiving DEBUG and above, rotated daily
    """
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper(), colorize=True)

    if log_file is not None:
        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
            level="DEBUG",
            rotation="00:00",
            retention="7 days",
            encoding="utf-8",
        )


settings = Settings()
