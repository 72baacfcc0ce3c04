# parkease/services/rate_provider.py
"""
Current hourly billing rate.
Read by check-out; written by the admin layer. A new rate applies to every
later check-out and never rewrites closed records.
"""

from decimal import Decimal, InvalidOperation

from sqlalchemy.orm import Session

from parkease.config import settings
from parkease.errors import InvalidRate
from parkease.models.rate_setting import CURRENT_RATE_ID, RateSetting
from parkease.services.billing import to_money
from parkease.utils.logger import get_logger

logger = get_logger(__name__)


def current(db: Session) -> Decimal:
    """Rate in effect right now. Falls back to the configured default if never set."""
    row = db.get(RateSetting, CURRENT_RATE_ID)
    if row is None:
        return to_money(settings.DEFAULT_HOURLY_RATE)
    return to_money(row.hourly_rate)


def set_rate(db: Session, rate) -> Decimal:
    try:
        amount = to_money(rate)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidRate(rate)
    if not amount.is_finite() or amount <= 0:
        raise InvalidRate(rate)

    row = db.get(RateSetting, CURRENT_RATE_ID)
    previous = row.hourly_rate if row else None
    if row is None:
        db.add(RateSetting(id=CURRENT_RATE_ID, hourly_rate=amount))
    else:
        row.hourly_rate = amount
    db.flush()
    logger.info(f"[RATE] Hourly rate changed {previous} -> {amount}")
    return amount
