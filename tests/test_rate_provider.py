"""Unit tests for the hourly rate provider."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from decimal import Decimal
from parkease.config import settings
from parkease.errors import InvalidRate
from parkease.services import rate_provider


class TestRateProvider:
    def test_default_rate_when_never_set(self, db):
        assert rate_provider.current(db) == settings.DEFAULT_HOURLY_RATE

    def test_set_then_read(self, db):
        rate_provider.set_rate(db, Decimal("4.00"))
        assert rate_provider.current(db) == Decimal("4.00")

    def test_set_overwrites_single_row(self, db):
        rate_provider.set_rate(db, "3.00")
        rate_provider.set_rate(db, "7.25")
        db.commit()
        assert rate_provider.current(db) == Decimal("7.25")

    def test_rate_is_quantized_to_cents(self, db):
        assert rate_provider.set_rate(db, "3.456") == Decimal("3.46")
        assert rate_provider.current(db) == Decimal("3.46")

    @pytest.mark.parametrize("bad", [0, -1, "-0.50", "0.001", "abc", None, float("nan"), "Infinity"])
    def test_invalid_rate_rejected(self, db, bad):
        rate_provider.set_rate(db, "2.00")
        with pytest.raises(InvalidRate):
            rate_provider.set_rate(db, bad)
        assert rate_provider.current(db) == Decimal("2.00")
