"""
Unit tests for the import command line script.
"""

from unittest.mock import patch

import pytest

from scripts.import_trades import main, parse_mapping_args
from tradelog.infrastructure.storage import JsonFileKeyValueStore, KeyValueTradeRepository

UNKNOWN_HEADERS_CSV = "Ticker,Dir,In,Out,Qty,Result\nEURUSD,Buy,1.1,1.105,1,10\n"


def run_cli(*argv: str) -> int:
    with patch("sys.argv", ["import_trades.py", *argv]):
        return main()


def stored_trades(store_path):
    return KeyValueTradeRepository(JsonFileKeyValueStore(store_path)).load()


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "journal.json"


@pytest.fixture
def export_file(tmp_path, broker_csv):
    path = tmp_path / "history.csv"
    path.write_text(broker_csv, encoding="utf-8")
    return path


class TestParseMappingArgs:
    """Tests for --map parsing."""

    def test_should_parse_field_assignments(self) -> None:
        """Test field=column pairs, keeping spaces inside header names."""
        parsed = parse_mapping_args(["openPrice=Entry Px", " pnl = Result "])

        assert parsed == {"openPrice": "Entry Px", "pnl": "Result"}

    @pytest.mark.parametrize("assignment", ["openPrice", "openPrice=", "price=In"])
    def test_should_reject_malformed_assignment(self, assignment) -> None:
        """Test missing separators, empty headers and unknown fields."""
        with pytest.raises(ValueError):
            parse_mapping_args([assignment])


class TestImportCommand:
    """Test suite for the import script."""

    def test_should_import_and_skip_duplicates_on_rerun(self, export_file, store_path) -> None:
        """Test a repeated import leaves the journal unchanged."""
        # Act
        first = run_cli("--file", str(export_file), "--store", str(store_path))
        second = run_cli("--file", str(export_file), "--store", str(store_path))

        # Assert
        assert first == 0
        assert second == 0
        trades = stored_trades(store_path)
        assert len(trades) == 3
        assert {trade.account_id for trade in trades} == {"default-main-account"}

    def test_should_write_nothing_on_dry_run(self, export_file, store_path) -> None:
        """Test --dry-run parses without merging."""
        exit_code = run_cli("--file", str(export_file), "--store", str(store_path), "--dry-run")

        assert exit_code == 0
        assert stored_trades(store_path) == []

    def test_should_stop_when_mapping_is_required(self, tmp_path, store_path) -> None:
        """Test unknown headers without --map exit with code 2."""
        path = tmp_path / "custom.csv"
        path.write_text(UNKNOWN_HEADERS_CSV, encoding="utf-8")

        exit_code = run_cli("--file", str(path), "--store", str(store_path))

        assert exit_code == 2
        assert stored_trades(store_path) == []

    def test_should_import_with_manual_mapping(self, tmp_path, store_path) -> None:
        """Test --map completes the detected mapping."""
        path = tmp_path / "custom.csv"
        path.write_text(UNKNOWN_HEADERS_CSV, encoding="utf-8")

        exit_code = run_cli(
            "--file",
            str(path),
            "--store",
            str(store_path),
            "--map",
            "symbol=Ticker",
            "side=Dir",
            "openPrice=In",
            "closePrice=Out",
            "quantity=Qty",
            "pnl=Result",
        )

        trades = stored_trades(store_path)
        assert exit_code == 0
        assert len(trades) == 1
        assert trades[0].symbol == "EURUSD"
        assert trades[0].pnl == 10.0

    def test_should_fail_for_unknown_mapped_header(self, tmp_path, store_path) -> None:
        """Test a --map header absent from the file."""
        path = tmp_path / "custom.csv"
        path.write_text(UNKNOWN_HEADERS_CSV, encoding="utf-8")

        exit_code = run_cli(
            "--file", str(path), "--store", str(store_path), "--map", "openPrice=Entry"
        )

        assert exit_code == 1

    def test_should_fail_for_missing_file(self, tmp_path, store_path) -> None:
        """Test file validation errors become exit code 1."""
        exit_code = run_cli("--file", str(tmp_path / "nope.csv"), "--store", str(store_path))

        assert exit_code == 1

    def test_should_export_account_trades(self, export_file, store_path, tmp_path) -> None:
        """Test --export writes the imported account."""
        output = tmp_path / "trades.csv"

        run_cli("--file", str(export_file), "--store", str(store_path), "--export", str(output))

        lines = output.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 4
        assert lines[0].startswith("symbol,side,entryPrice")

    def test_should_write_custom_report(self, export_file, store_path, tmp_path) -> None:
        """Test --report with an explicit date range."""
        output = tmp_path / "report.csv"

        exit_code = run_cli(
            "--file",
            str(export_file),
            "--store",
            str(store_path),
            "--report",
            "custom",
            "--start",
            "2025-08-01",
            "--end",
            "2025-08-31",
            "--report-output",
            str(output),
        )

        text = output.read_text(encoding="utf-8")
        assert exit_code == 0
        assert text.startswith("Trading Report\nPeriod: 08/01/2025 - 08/31/2025")
        assert "Total Trades,3" in text
