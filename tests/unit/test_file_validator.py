"""
Unit tests for import file validation.
"""

import io

import pandas as pd
import pytest

from tradelog.core.exceptions.journal import FileValidationError
from tradelog.infrastructure.csv_import.file_validator import TradeFileValidator


@pytest.fixture
def validator() -> TradeFileValidator:
    return TradeFileValidator()


class TestFileChecks:
    """Tests for type and size checks."""

    @pytest.mark.parametrize("filename", ["trades.pdf", "trades", "trades.txt", ""])
    def test_should_reject_unsupported_extension(self, validator, filename) -> None:
        """Test only CSV and Excel files pass."""
        with pytest.raises(FileValidationError, match="Please select a CSV or Excel file"):
            validator.validate_file(filename, b"a,b\n1,2\n")

    def test_should_accept_uppercase_extension(self, validator) -> None:
        """Test extension check ignores case."""
        assert validator.validate_extension("TRADES.CSV") == ".csv"

    def test_should_reject_empty_file(self, validator) -> None:
        """Test zero-byte uploads."""
        with pytest.raises(FileValidationError, match="empty"):
            validator.validate_file("trades.csv", b"")

    def test_should_reject_whitespace_only_file(self, validator) -> None:
        """Test blank content."""
        with pytest.raises(FileValidationError, match="empty"):
            validator.validate_file("trades.csv", b"  \n\n")

    def test_should_reject_oversized_file(self) -> None:
        """Test the size limit."""
        validator = TradeFileValidator(max_file_bytes=8)

        with pytest.raises(FileValidationError, match="File size too large") as exc_info:
            validator.validate_file("trades.csv", b"Symbol,Side\n")

        assert exc_info.value.filename == "trades.csv"


class TestTextDecoding:
    """Tests for CSV text decoding."""

    def test_should_strip_utf8_byte_order_mark(self, validator) -> None:
        """Test BOM removal so the first header matches."""
        content = validator.validate_file("trades.csv", b"\xef\xbb\xbfSymbol,Side\n")
        assert content.startswith("Symbol")

    def test_should_fall_back_to_cp1252(self, validator) -> None:
        """Test legacy Windows exports."""
        content = validator.validate_file("trades.csv", b"Symbol,Note\nEURUSD,Caf\xe9\n")
        assert "Café" in content


class TestExcelConversion:
    """Tests for Excel flattening."""

    def test_should_convert_first_sheet_to_csv(self, validator) -> None:
        """Test an xlsx workbook becomes CSV text."""
        buffer = io.BytesIO()
        pd.DataFrame([["EURUSD", "Buy", "1.1"]], columns=["Symbol", "Side", "Open"]).to_excel(
            buffer, index=False
        )

        content = validator.validate_file("trades.xlsx", buffer.getvalue())

        assert content.splitlines() == ["Symbol,Side,Open", "EURUSD,Buy,1.1"]

    def test_should_reject_corrupt_workbook(self, validator) -> None:
        """Test unreadable Excel content."""
        with pytest.raises(FileValidationError, match="Failed to process file"):
            validator.validate_file("trades.xlsx", b"definitely not a workbook")


class TestValidatePath:
    """Tests for reading files from disk."""

    def test_should_read_and_validate_file(self, validator, tmp_path) -> None:
        """Test a CSV on disk."""
        path = tmp_path / "trades.csv"
        path.write_bytes(b"Symbol,Side\nEURUSD,Buy\n")

        assert validator.validate_path(path) == "Symbol,Side\nEURUSD,Buy\n"

    def test_should_raise_for_missing_file(self, validator, tmp_path) -> None:
        """Test missing paths."""
        with pytest.raises(FileValidationError, match="File not found"):
            validator.validate_path(tmp_path / "missing.csv")
