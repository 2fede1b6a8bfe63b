"""
Import file validation.

This module checks uploaded broker files before any parsing happens and
turns them into CSV text. Excel workbooks are flattened from their first
sheet.
"""

import io
import zipfile
from pathlib import Path

import pandas as pd
from loguru import logger

from tradelog.core.constants import (
    ALLOWED_IMPORT_EXTENSIONS,
    EXCEL_EXTENSIONS,
    MAX_IMPORT_FILE_BYTES,
)
from tradelog.core.exceptions.journal import FileValidationError

TEXT_ENCODINGS = ("utf-8-sig", "cp1252")


class TradeFileValidator:
    """Handles validation of uploaded trade history files."""

    def __init__(self, max_file_bytes: int = MAX_IMPORT_FILE_BYTES) -> None:
        self.max_file_bytes = max_file_bytes

    def validate_file(self, filename: str, payload: bytes) -> str:
        """
        Validate an uploaded file and return its content as CSV text.

        Args:
            filename: Original file name, used for the type check
            payload: Raw file bytes

        Returns:
            CSV text content

        Raises:
            FileValidationError: If the type, size or content is unacceptable
        """
        extension = self.validate_extension(filename)
        self.validate_size(filename, len(payload))

        if extension in EXCEL_EXTENSIONS:
            content = self._excel_to_csv(filename, payload)
        else:
            content = self._decode_text(filename, payload)

        if not content.strip():
            raise FileValidationError("The selected file is empty", filename)

        logger.debug(f"Validated import file {filename} ({len(payload)} bytes)")
        return content

    def validate_path(self, file_path: str | Path) -> str:
        """Read a file from disk and validate it.

        Raises:
            FileValidationError: If the file is missing, unreadable or invalid
        """
        path = Path(file_path)
        if not path.is_file():
            raise FileValidationError(f"File not found: {path.name}", path.name)
        try:
            payload = path.read_bytes()
        except OSError as e:
            logger.error(f"File system error reading {path.name}: {e}")
            raise FileValidationError(f"Failed to read the file: {path.name}", path.name) from e
        return self.validate_file(path.name, payload)

    @staticmethod
    def validate_extension(filename: str) -> str:
        """Check the file type by extension.

        Returns:
            Lowercased extension

        Raises:
            FileValidationError: If the file is not CSV or Excel
        """
        extension = Path(filename or "").suffix.lower()
        if extension not in ALLOWED_IMPORT_EXTENSIONS:
            raise FileValidationError("Please select a CSV or Excel file", filename)
        return extension

    def validate_size(self, filename: str, size: int) -> None:
        """Check the file is neither empty nor above the size limit.

        Raises:
            FileValidationError: If the size is out of bounds
        """
        if size == 0:
            raise FileValidationError("The selected file is empty", filename)
        if size > self.max_file_bytes:
            limit_mb = self.max_file_bytes // (1024 * 1024)
            raise FileValidationError(
                f"File size too large. Please select a file smaller than {limit_mb}MB", filename
            )

    @staticmethod
    def _decode_text(filename: str, payload: bytes) -> str:
        for encoding in TEXT_ENCODINGS:
            try:
                return payload.decode(encoding)
            except UnicodeDecodeError:
                logger.debug(f"{filename} is not {encoding} encoded")
        raise FileValidationError(f"Failed to read the file: {filename} is not text", filename)

    @staticmethod
    def _excel_to_csv(filename: str, payload: bytes) -> str:
        try:
            sheet = pd.read_excel(io.BytesIO(payload), sheet_name=0, header=None, dtype=str)
        except (ValueError, OSError, KeyError, zipfile.BadZipFile) as e:
            logger.error(f"Excel parsing error ({type(e).__name__}) in {filename}: {e}")
            raise FileValidationError(f"Failed to process file: {filename}", filename) from e
        except ImportError as e:
            logger.error(f"No Excel engine available for {filename}: {e}")
            raise FileValidationError(f"Excel files are not supported: {e}", filename) from e
        return sheet.to_csv(index=False, header=False, lineterminator="\n")
