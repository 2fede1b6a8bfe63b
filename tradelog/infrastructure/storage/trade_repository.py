"""
Trade repository over a key-value store.

Trades live under a single key as a JSON array of camelCase records, the
same shape browser clients of the journal write. Records are written back
as they were read unless an operation targets them, so keys this model
does not know and records it cannot decode survive every write.
"""

import json
from typing import Any

from loguru import logger

from tradelog.core.constants import (
    ACCOUNT_MIGRATION_KEY,
    DEFAULT_ACCOUNT_ID,
    TRADES_STORAGE_KEY,
)
from tradelog.core.exceptions.journal import StorageError, TradeNotFoundError, ValidationError
from tradelog.core.interfaces.repository import ITradeRepository
from tradelog.core.models.trade import Trade
from tradelog.core.protocols import KeyValueStore

MIGRATION_COMPLETED = "completed"


class KeyValueTradeRepository(ITradeRepository):
    """Load and save the trade set through a KeyValueStore."""

    def __init__(self, store: KeyValueStore, key: str = TRADES_STORAGE_KEY) -> None:
        self.store = store
        self.key = key

    def load(self) -> list[Trade]:
        """Load every readable stored trade.

        Records that cannot be decoded are logged and left out of the result;
        they stay in the store.

        Raises:
            StorageError: If the stored value is not a JSON array
        """
        trades: list[Trade] = []
        for record in self.load_records():
            if not isinstance(record, dict):
                logger.warning(f"Ignoring non-object trade record: {record!r}")
                continue
            try:
                trades.append(Trade.from_dict(record))
            except ValidationError as e:
                logger.warning(f"Ignoring unreadable trade record: {e}")
        return trades

    def load_records(self) -> list[Any]:
        """Load the raw JSON records without decoding them into trades."""
        payload = self.store.get_item(self.key)
        if not payload:
            return []
        try:
            records = json.loads(payload)
        except json.JSONDecodeError as e:
            raise StorageError(f"Stored '{self.key}' is not valid JSON") from e
        if not isinstance(records, list):
            raise StorageError(f"Stored '{self.key}' is not a JSON array")
        return records

    def save_records(self, records: list[Any]) -> None:
        """Write raw JSON records."""
        self.store.set_item(self.key, json.dumps(records))
        logger.debug(f"Saved {len(records)} records under '{self.key}'")

    def add(self, trade: Trade) -> None:
        """Append a trade after every stored record."""
        records = self.load_records()
        records.append(trade.to_dict())
        self.save_records(records)

    def update(self, trade: Trade) -> None:
        """Overwrite the record with the trade's id in place.

        Keys of the stored record that the trade does not write are kept.

        Raises:
            TradeNotFoundError: If no record has this id
        """
        records = self.load_records()
        position = _find_record(records, trade.id)
        records[position] = {**records[position], **trade.to_dict()}
        self.save_records(records)

    def delete(self, trade_id: str) -> None:
        """Remove the record with this id.

        Raises:
            TradeNotFoundError: If no record has this id
        """
        records = self.load_records()
        del records[_find_record(records, trade_id)]
        self.save_records(records)


def _find_record(records: list[Any], trade_id: str) -> int:
    for position, record in enumerate(records):
        if isinstance(record, dict) and str(record.get("id")) == trade_id:
            return position
    raise TradeNotFoundError(trade_id)


def migrate_account_ids(
    repository: KeyValueTradeRepository, default_account_id: str = DEFAULT_ACCOUNT_ID
) -> tuple[int, int]:
    """Tag stored trades that predate account support with the default account.

    Runs once per store; a marker key makes later calls no-ops.

    Returns:
        (migrated, total) record counts; (0, 0) when already migrated
    """
    store = repository.store
    if store.get_item(ACCOUNT_MIGRATION_KEY) == MIGRATION_COMPLETED:
        return 0, 0

    records = repository.load_records()
    migrated = 0
    for record in records:
        if isinstance(record, dict) and not record.get("accountId"):
            record["accountId"] = default_account_id
            migrated += 1

    if migrated:
        repository.save_records(records)
        logger.info(f"Tagged {migrated} of {len(records)} trades with {default_account_id}")

    store.set_item(ACCOUNT_MIGRATION_KEY, MIGRATION_COMPLETED)
    return migrated, len(records)
