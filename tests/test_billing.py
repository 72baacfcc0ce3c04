"""Unit tests for the parking fee calculation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime, timedelta
from decimal import Decimal
from parkease.services.billing import compute_cost, duration_hours, to_money

T0 = datetime(2026, 3, 2, 8, 0, 0)


class TestComputeCost:
    def test_two_hours_at_2_50(self):
        assert compute_cost(T0, T0 + timedelta(hours=2), Decimal("2.50")) == Decimal("5.00")

    def test_ninety_minutes_at_10(self):
        assert compute_cost(T0, T0 + timedelta(minutes=90), Decimal("10.00")) == Decimal("15.00")

    def test_one_second_is_nearly_free(self):
        cost = compute_cost(T0, T0 + timedelta(seconds=1), Decimal("2.50"))
        assert cost == Decimal("0.00")

    def test_duration_is_not_rounded_to_whole_hours(self):
        # 61 minutes at 60/h bills 61, not 60 or 120
        assert compute_cost(T0, T0 + timedelta(minutes=61), Decimal("60.00")) == Decimal("61.00")

    def test_half_cent_rounds_up(self):
        assert compute_cost(T0, T0 + timedelta(minutes=30), Decimal("0.05")) == Decimal("0.03")

    def test_float_rate_accepted(self):
        assert compute_cost(T0, T0 + timedelta(hours=1), 2.5) == Decimal("2.50")

    def test_result_has_cent_precision(self):
        cost = compute_cost(T0, T0 + timedelta(minutes=20), Decimal("1.00"))
        assert cost == Decimal("0.33")
        assert cost.as_tuple().exponent == -2


class TestHelpers:
    def test_duration_hours_fractional(self):
        assert duration_hours(T0, T0 + timedelta(minutes=90)) == Decimal("1.5")

    def test_duration_hours_counts_days(self):
        assert duration_hours(T0, T0 + timedelta(days=1, hours=1)) == Decimal(25)

    def test_to_money_rounds_half_up(self):
        assert to_money("2.555") == Decimal("2.56")
        assert to_money(3) == Decimal("3.00")
