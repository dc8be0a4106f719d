#!/usr/bin/env python3
"""Tests for currency conversion helpers."""

import pytest

from budgetme.core.currency import (
    cents_to_dollars,
    cents_to_dollars_str,
    dollars_to_cents,
    format_cents,
    scale_cents,
)


@pytest.mark.currency
class TestDollarsToCents:
    """Test conversion from the various dollar representations."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("$45.99", 4599),
            ("45.99", 4599),
            ("-$5", -500),
            ("12.5", 1250),
            (7, 700),
            (19.99, 1999),
            ("0.005", 0),  # half rounds to even
            ("0.015", 2),
        ],
    )
    def test_conversion(self, value, expected):
        assert dollars_to_cents(value) == expected

    def test_boolean_is_not_money(self):
        with pytest.raises(ValueError):
            dollars_to_cents(True)

    def test_infinity_rejected(self):
        with pytest.raises(ValueError):
            dollars_to_cents("inf")


@pytest.mark.currency
class TestCentsFormatting:
    """Test display and serialization of cent amounts."""

    def test_cents_to_dollars_str(self):
        assert cents_to_dollars_str(4599) == "45.99"
        assert cents_to_dollars_str(-5) == "-0.05"

    def test_format_cents_puts_sign_before_symbol(self):
        assert format_cents(-4599) == "-$45.99"
        assert format_cents(100) == "$1.00"

    def test_cents_to_dollars(self):
        assert cents_to_dollars(1234) == 12.34
        assert cents_to_dollars(-1) == -0.01

    def test_scale_cents(self):
        assert scale_cents(1000, 2) == 2000
        assert scale_cents(999, 1.1) == 1099  # 1098.9
