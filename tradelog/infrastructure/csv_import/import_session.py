"""
Import workflow orchestration.

An ImportSession drives one broker file from upload to merge:

    idle -> validating -> preview_ready                       (columns detected)
    idle -> validating -> mapping_required -> mapping_confirmed -> preview_ready
    preview_ready -> confirmed -> merged

It may be cancelled at any point before confirmation. Once merged there is
no rollback; removing imported trades is an explicit delete.
"""

import uuid
from collections.abc import Callable
from pathlib import Path

from loguru import logger

from tradelog.core.constants import DEFAULT_ACCOUNT_ID
from tradelog.core.enums import ImportState
from tradelog.core.exceptions.journal import (
    FileValidationError,
    ImportFailedError,
    InvalidStateTransitionError,
)
from tradelog.core.interfaces.repository import ITradeRepository
from tradelog.core.models.column_mapping import ColumnMapping
from tradelog.core.models.import_result import ParseResult, ReconcileResult
from tradelog.core.models.trade import Trade
from tradelog.core.reconciliation.reconciler import DeduplicationReconciler
from tradelog.core.utils.decorators import log_operation

from .csv_parser import TradeCSVParser
from .file_validator import TradeFileValidator
from .mapping_resolver import ColumnMappingResolver


class ImportSession:
    """State machine for one trade file import."""

    def __init__(
        self,
        repository: ITradeRepository,
        account_id: str = DEFAULT_ACCOUNT_ID,
        validator: TradeFileValidator | None = None,
        parser: TradeCSVParser | None = None,
        session_id: str | None = None,
    ) -> None:
        """
        Initialize an import session.

        Args:
            repository: Trade store the import is merged into
            account_id: Account the imported trades belong to
            validator: File validator (size limit, type check)
            parser: CSV parser, carrying the normalizer and its calculator
            session_id: Identifier; generated when omitted
        """
        self.session_id = session_id or uuid.uuid4().hex
        self.account_id = account_id or DEFAULT_ACCOUNT_ID
        self.validator = validator or TradeFileValidator()
        self.parser = parser or TradeCSVParser()
        self.resolver = ColumnMappingResolver(self.parser)
        self.reconciler = DeduplicationReconciler(repository)

        self.state = ImportState.IDLE
        self.filename: str | None = None
        self.parse_result: ParseResult | None = None
        self.suggested_mapping: ColumnMapping | None = None
        self.preview: list[Trade] = []
        self.result: ReconcileResult | None = None
        self._content: str | None = None

    @log_operation
    def load_file(self, filename: str, payload: bytes) -> ParseResult:
        """
        Validate and parse an uploaded file.

        Moves to preview_ready when the columns are detected, or to
        mapping_required with a suggested mapping when they are not.

        Raises:
            FileValidationError: If the file is rejected; the session is cancelled
            ImportFailedError: If the file has no usable rows; the session is cancelled
        """
        return self._load(filename, lambda: self.validator.validate_file(filename, payload))

    @log_operation
    def load_path(self, file_path: str | Path) -> ParseResult:
        """Validate and parse a file from disk, like load_file."""
        path = Path(file_path)
        return self._load(path.name, lambda: self.validator.validate_path(path))

    def _load(self, filename: str, read: Callable[[], str]) -> ParseResult:
        self._transition(ImportState.VALIDATING)
        self.filename = filename
        try:
            self._content = read()
        except FileValidationError:
            self._transition(ImportState.CANCELLED)
            raise

        result = self.parser.parse(self._content)
        self.parse_result = result

        if result.requires_mapping:
            self.suggested_mapping = self.resolver.guess_mapping(result.headers)
            self._transition(ImportState.MAPPING_REQUIRED)
            logger.info(f"{filename}: columns {result.missing_columns} need a manual mapping")
            return result

        if not result.success:
            self._transition(ImportState.CANCELLED)
            raise ImportFailedError(result.errors)

        self._build_preview(result)
        return result

    def submit_mapping(self, mapping: ColumnMapping) -> ParseResult:
        """
        Re-parse the file with a user-confirmed mapping.

        An incomplete mapping is rejected before any parsing and the session
        stays in mapping_required. A mapping that parses no rows returns the
        session to mapping_required as well.

        Raises:
            InvalidStateTransitionError: If no mapping is expected
            MappingIncompleteError: If a required field is unmapped
        """
        if self.state != ImportState.MAPPING_REQUIRED:
            raise InvalidStateTransitionError(self.state, ImportState.MAPPING_CONFIRMED)

        headers = self.parse_result.headers if self.parse_result else None
        self.resolver.confirm_mapping(mapping, headers)
        self._transition(ImportState.MAPPING_CONFIRMED)

        result = self.resolver.resolve(self._content or "", mapping)
        self.parse_result = result
        if not result.success:
            self.suggested_mapping = mapping
            self._transition(ImportState.MAPPING_REQUIRED)
            logger.warning(f"Mapping produced no trades: {result.errors[-1:]}")
            return result

        self._build_preview(result)
        return result

    def confirm(self) -> ReconcileResult:
        """
        Merge the previewed trades into the store.

        Raises:
            InvalidStateTransitionError: If there is no preview to confirm
        """
        self._transition(ImportState.CONFIRMED)
        self.result = self.reconciler.import_trades(self.preview, self.account_id)
        self._transition(ImportState.MERGED)
        logger.success(
            f"Imported {self.filename}: {self.result.added} added, "
            f"{self.result.skipped} duplicates skipped"
        )
        return self.result

    def cancel(self) -> None:
        """Abandon the import.

        Raises:
            InvalidStateTransitionError: If the import is already confirmed
        """
        self._transition(ImportState.CANCELLED)
        logger.info(f"Import {self.session_id} cancelled")

    def to_dict(self) -> dict:
        """Convert session state to a wire-friendly dictionary."""
        result = self.parse_result
        return {
            "sessionId": self.session_id,
            "state": self.state.value,
            "accountId": self.account_id,
            "filename": self.filename,
            "headers": result.headers if result else [],
            "missingColumns": result.missing_columns if result else [],
            "suggestedMapping": (
                self.suggested_mapping.to_dict() if self.suggested_mapping else None
            ),
            "errors": result.errors if result else [],
            "summary": result.summary.to_dict() if result else None,
            "preview": [trade.to_dict() for trade in self.preview],
            "result": self.result.to_dict() if self.result else None,
        }

    def _build_preview(self, result: ParseResult) -> None:
        normalizer = self.parser.normalizer
        self.preview = [
            normalizer.to_trade(candidate, self.account_id) for candidate in result.trades
        ]
        self._transition(ImportState.PREVIEW_READY)

    def _transition(self, target: ImportState) -> None:
        if not self.state.can_transition_to(target):
            raise InvalidStateTransitionError(self.state, target)
        logger.debug(f"Import {self.session_id}: {self.state} -> {target}")
        self.state = target
