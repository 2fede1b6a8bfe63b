"""
Unit tests for fingerprinting and deduplicating reconciliation.
"""

import json
from datetime import datetime

import pytest

from tradelog.core.constants import DEFAULT_ACCOUNT_ID
from tradelog.core.exceptions.journal import DataError, ValidationError
from tradelog.core.reconciliation.fingerprint import fingerprint
from tradelog.core.reconciliation.reconciler import DeduplicationReconciler


class TestFingerprint:
    """Tests for the duplicate-detection key."""

    def test_should_join_identity_fields(self, make_trade) -> None:
        """Test the exact key layout."""
        trade = make_trade(pnl=483.0)

        assert fingerprint(trade) == "EURUSD|long|1.1|1.105|1|483|1756375200000|1756378800000"

    def test_should_render_tiny_values_like_browser_clients(self, make_trade) -> None:
        """Test small numbers use the exponent form a browser client writes."""
        trade = make_trade(lot_size=0.00001, pnl=1e-7)

        assert fingerprint(trade).split("|")[4:6] == ["0.00001", "1e-7"]

    def test_should_ignore_non_identity_fields(self, make_trade) -> None:
        """Test id, notes and account do not change the key."""
        first = make_trade(id="a", notes="x", account_id="acct-1")
        second = make_trade(id="b", notes="y", account_id="acct-2")

        assert fingerprint(first) == fingerprint(second)

    @pytest.mark.parametrize(
        "change",
        [
            {"exit_price": 1.1051},
            {"lot_size": 2.0},
            {"pnl": 483.01},
            {"exit_time": datetime(2025, 8, 28, 11, 0, 1)},
        ],
    )
    def test_should_have_no_tolerance(self, make_trade, change) -> None:
        """Test any field difference yields a new key."""
        assert fingerprint(make_trade()) != fingerprint(make_trade(**change))


class TestReconcile:
    """Tests for the pure merge."""

    def test_should_append_only_unknown_trades(self, make_trade) -> None:
        """Test existing order is kept and new trades follow."""
        existing = [make_trade(id="old", pnl=1.0)]
        incoming = [make_trade(id="dup", pnl=1.0), make_trade(id="new", pnl=2.0)]

        result = DeduplicationReconciler().reconcile(existing, incoming)

        assert [t.id for t in result.merged] == ["old", "new"]
        assert result.added == 1
        assert result.skipped == 1

    def test_should_deduplicate_within_one_batch(self, make_trade) -> None:
        """Test the same trade twice in a file is added once."""
        incoming = [make_trade(id="a"), make_trade(id="b")]

        result = DeduplicationReconciler().reconcile([], incoming)

        assert result.added == 1
        assert result.skipped == 1

    def test_should_be_idempotent(self, make_trade) -> None:
        """Test reconciling the merged set again adds nothing."""
        reconciler = DeduplicationReconciler()
        incoming = [make_trade(id=str(i), pnl=float(i)) for i in range(5)]

        first = reconciler.reconcile([], incoming)
        second = reconciler.reconcile(first.merged, incoming)

        assert second.added == 0
        assert second.skipped == 5
        assert second.merged == first.merged


class TestMergeIntoStore:
    """Tests for account-scoped merging."""

    def test_should_leave_other_accounts_untouched(self, make_trade) -> None:
        """Test a record of another account is neither a duplicate nor modified."""
        other = make_trade(id="other", account_id="acct-2").to_dict()
        mine = make_trade(id="mine", account_id="acct-1", pnl=5.0).to_dict()
        incoming = [make_trade(id="in")]

        result = DeduplicationReconciler().merge_into_store([other, mine], incoming, "acct-1")

        assert [t.id for t in result.merged] == ["mine", "in"]
        assert [record["id"] for record in result.records] == ["other", "mine", "in"]
        assert result.records[0] is other
        assert result.records[2]["accountId"] == "acct-1"
        assert result.added == 1

    def test_should_splice_other_accounts_first(self, make_trade) -> None:
        """Test store order after a merge into an account stored first."""
        mine = make_trade(id="mine", account_id="acct-1", pnl=5.0).to_dict()
        other = make_trade(id="other", account_id="acct-2").to_dict()

        result = DeduplicationReconciler().merge_into_store(
            [mine, other], [make_trade(id="in")], "acct-1"
        )

        assert [record["id"] for record in result.records] == ["other", "mine", "in"]

    def test_should_keep_unreadable_record_of_own_account(self, make_trade) -> None:
        """Test an undecodable record stays in place without blocking the import."""
        broken = {"id": "broken", "accountId": "acct-1", "symbol": "EURUSD"}

        result = DeduplicationReconciler().merge_into_store([broken], [make_trade()], "acct-1")

        assert result.records[0] is broken
        assert result.added == 1
        assert result.merged[0].id == "trade-1"

    def test_should_treat_untagged_records_as_default_account(self, make_trade) -> None:
        """Test legacy records without accountId count as the default account."""
        legacy = make_trade(pnl=483.0).to_dict()
        del legacy["accountId"]

        result = DeduplicationReconciler().merge_into_store(
            [legacy], [make_trade(pnl=483.0)], DEFAULT_ACCOUNT_ID
        )

        assert result.added == 0
        assert result.skipped == 1

    def test_should_validate_account_id(self, make_trade) -> None:
        """Test an empty account is rejected."""
        with pytest.raises(ValidationError, match="account_id"):
            DeduplicationReconciler().merge_into_store([], [make_trade()], "  ")


class TestImportTrades:
    """Tests for the store-backed import."""

    def test_should_write_store_only_when_trades_were_added(
        self, repository, store, make_trade
    ) -> None:
        """Test a fully duplicate import leaves the store untouched."""
        reconciler = DeduplicationReconciler(repository)
        trades = [make_trade(id="a")]

        reconciler.import_trades(trades, "acct-1")
        payload = store.get_item("trades")
        result = reconciler.import_trades(trades, "acct-1")

        assert result.added == 0
        assert store.get_item("trades") == payload

    def test_should_preserve_other_account_records_exactly(
        self, repository, store, make_trade
    ) -> None:
        """Test foreign records keep unknown keys, timestamps and unreadable values."""
        # Arrange
        foreign = [
            {
                "id": "b-1",
                "accountId": "acct-2",
                "symbol": "GBPUSD",
                "market": "forex",
                "side": "short",
                "entryPrice": 1.27,
                "exitPrice": 1.26,
                "lotSize": 1,
                "entryTime": "2025-08-28T10:00:00.000Z",
                "exitTime": "2025-08-28T11:00:00.000Z",
                "pnl": 1000,
                "emotions": ["calm"],
                "screenshot": "data:image/png;base64,AAAA",
            },
            {"id": "b-2", "accountId": "acct-2", "symbol": "BTCUSD", "market": "crypto"},
        ]
        store.set_item("trades", json.dumps(foreign))

        # Act
        result = DeduplicationReconciler(repository).import_trades([make_trade()], "acct-1")

        # Assert
        records = repository.load_records()
        assert result.added == 1
        assert records[:2] == foreign
        assert records[2]["accountId"] == "acct-1"
        assert records[2]["entryTime"] == "2025-08-28T10:00:00.000Z"

    def test_should_require_repository(self, make_trade) -> None:
        """Test import without a store."""
        with pytest.raises(DataError):
            DeduplicationReconciler().import_trades([make_trade()])
