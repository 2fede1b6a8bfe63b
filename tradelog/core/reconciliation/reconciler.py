"""
Deduplicating reconciler.

Merges imported trades into the journal without creating duplicates across
repeated imports, and without touching trades owned by other accounts.

The store is read-then-write with no transactional guarantee: two imports
running at once can overwrite each other's additions.
"""

from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from loguru import logger

from tradelog.core.constants import DEFAULT_ACCOUNT_ID
from tradelog.core.exceptions.journal import DataError, ValidationError
from tradelog.core.interfaces.repository import ITradeRepository
from tradelog.core.models.import_result import ReconcileResult
from tradelog.core.models.trade import Trade, stored_account_id
from tradelog.core.utils.decorators import log_operation, validate_inputs

from .fingerprint import fingerprint


class DeduplicationReconciler:
    """Fingerprint-based merge of imported trades into an existing set."""

    def __init__(self, repository: ITradeRepository | None = None) -> None:
        """
        Initialize the reconciler.

        Args:
            repository: Store used by import_trades; the pure methods work without one
        """
        self.repository = repository

    def reconcile(self, existing: Sequence[Trade], incoming: Sequence[Trade]) -> ReconcileResult:
        """Append incoming trades whose fingerprint is not already known.

        A fingerprint counts as known if it belongs to an existing trade or
        to a trade added earlier in the same batch.

        Args:
            existing: Trades already in the journal slice
            incoming: Normalized trades from an import

        Returns:
            ReconcileResult with existing + new trades and the counters
        """
        seen = {fingerprint(trade) for trade in existing}
        additions: list[Trade] = []

        for trade in incoming:
            key = fingerprint(trade)
            if key in seen:
                logger.debug(f"Skipping duplicate trade {key}")
                continue
            seen.add(key)
            additions.append(trade)

        return ReconcileResult(
            merged=[*existing, *additions],
            added=len(additions),
            skipped=len(incoming) - len(additions),
        )

    @validate_inputs
    def merge_into_store(
        self,
        records: Sequence[Any],
        incoming: Sequence[Trade],
        account_id: str = DEFAULT_ACCOUNT_ID,
    ) -> ReconcileResult:
        """Reconcile against one account's stored records and splice the store back together.

        Records of other accounts are carried over exactly as stored, and so
        are this account's records; only the additions are encoded. A record
        of this account that cannot be decoded stays in place but takes no
        part in duplicate detection.

        Args:
            records: Raw stored records of every account
            incoming: Normalized trades from an import; tagged with the account
            account_id: Account whose slice is reconciled

        Returns:
            ReconcileResult whose merged list is the account's slice and whose
            records are the full store: other accounts, this account, additions
        """
        other_records = [r for r in records if stored_account_id(r) != account_id]
        own_records = [r for r in records if stored_account_id(r) == account_id]
        account_slice = _decode(own_records)
        tagged = [_tag_account(trade, account_id) for trade in incoming]

        result = self.reconcile(account_slice, tagged)
        additions = result.merged[len(account_slice) :]
        return ReconcileResult(
            merged=result.merged,
            added=result.added,
            skipped=result.skipped,
            records=[*other_records, *own_records, *(trade.to_dict() for trade in additions)],
        )

    @log_operation
    def import_trades(
        self, incoming: Sequence[Trade], account_id: str = DEFAULT_ACCOUNT_ID
    ) -> ReconcileResult:
        """Load the store, merge the incoming trades and write the result back.

        Raises:
            DataError: If no repository was configured
        """
        if self.repository is None:
            raise DataError("Reconciler has no repository to import into")

        result = self.merge_into_store(self.repository.load_records(), incoming, account_id)
        if result.added:
            self.repository.save_records(result.records)
        logger.info(
            f"Reconciled {len(incoming)} trades for {account_id}: "
            f"{result.added} added, {result.skipped} duplicates skipped"
        )
        return result


def _decode(records: Sequence[Any]) -> list[Trade]:
    trades: list[Trade] = []
    for record in records:
        try:
            trades.append(Trade.from_dict(record))
        except ValidationError as e:
            logger.warning(f"Stored record kept as is, not used for duplicate detection: {e}")
    return trades


def _tag_account(trade: Trade, account_id: str) -> Trade:
    if trade.account_id == account_id:
        return trade
    return replace(trade, account_id=account_id, tags=list(trade.tags))
