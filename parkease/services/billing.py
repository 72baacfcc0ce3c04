# parkease/services/billing.py
"""
Parking fee calculation.

cost = (exit - entry) in fractional hours × hourly rate, rounded half-up to
cents. No rounding of the duration and no minimum charge: a one-second stay
costs (almost) nothing.
"""

from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")
MICROSECONDS_PER_HOUR = Decimal(3600 * 1_000_000)


def to_money(amount) -> Decimal:
    """Coerce Decimal/str/int/float to a Decimal with cent precision."""
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def duration_hours(entry_time: datetime, exit_time: datetime) -> Decimal:
    """Exact fractional hours between two timestamps."""
    microseconds = (exit_time - entry_time) // timedelta(microseconds=1)
    return Decimal(microseconds) / MICROSECONDS_PER_HOUR


def compute_cost(entry_time: datetime, exit_time: datetime, hourly_rate) -> Decimal:
    rate = hourly_rate if isinstance(hourly_rate, Decimal) else Decimal(str(hourly_rate))
    return (duration_hours(entry_time, exit_time) * rate).quantize(CENT, rounding=ROUND_HALF_UP)
