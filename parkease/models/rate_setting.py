# parkease/models/rate_setting.py
"""
Billing settings table. A single row (id=1) holds the current hourly rate.
No history is kept; check-out always bills at the rate stored here.
"""

from sqlalchemy import Column, Integer, Numeric
from parkease.database import Base

CURRENT_RATE_ID = 1


class RateSetting(Base):
    __tablename__ = "rate_settings"

    id = Column(Integer, primary_key=True, default=CURRENT_RATE_ID)
    hourly_rate = Column(Numeric(10, 2), nullable=False)

    def __repr__(self):
        return f"<RateSetting hourly_rate={self.hourly_rate}>"
