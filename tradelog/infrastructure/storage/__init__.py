"""
Trade persistence infrastructure.
"""

from .key_value_store import InMemoryKeyValueStore, JsonFileKeyValueStore
from .trade_repository import KeyValueTradeRepository, migrate_account_ids

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueTradeRepository",
    "migrate_account_ids",
]
