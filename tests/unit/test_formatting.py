"""Tests for currency and date display helpers."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from condo_reports.formatting import MISSING_DATE, format_cents, format_date, format_datetime, to_cents


class TestFormatCents:
    @pytest.mark.parametrize(
        ("cents", "expected"),
        [
            (0, "$0.00"),
            (5, "$0.05"),
            (150000, "$1,500.00"),
            (123456789, "$1,234,567.89"),
            (-2550, "-$25.50"),
            (None, "$0.00"),
            ("oops", "$0.00"),
            (True, "$0.00"),
        ],
    )
    def test_values(self, cents: object, expected: str) -> None:
        assert format_cents(cents) == expected

    def test_custom_symbol(self) -> None:
        assert format_cents(100, symbol="MX$") == "MX$1.00"

    def test_to_cents_accepts_numeric_strings(self) -> None:
        assert to_cents("1200") == 1200


class TestFormatDates:
    def test_format_date(self) -> None:
        assert format_date("2024-03-09") == "09/03/2024"
        assert format_date(date(2024, 12, 1)) == "01/12/2024"

    def test_missing_date(self) -> None:
        assert format_date(None) == MISSING_DATE
        assert format_date("garbage") == MISSING_DATE

    def test_format_datetime(self) -> None:
        assert format_datetime(datetime(2024, 4, 2, 9, 30, 15)) == "02/04/2024 09:30:15"
