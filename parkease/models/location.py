# parkease/models/location.py
"""
Parking locations table.
Holds the total and live available slot counters per site.
available_slots is moved ±1 only by the occupancy engine; admin edits of
total_slots shift it by the same delta.
"""

from sqlalchemy import CheckConstraint, Column, Float, Integer, String
from parkease.database import Base


class Location(Base):
    __tablename__ = "parking_locations"
    __table_args__ = (
        CheckConstraint("total_slots > 0", name="ck_location_total_slots_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    latitude = Column(Float)
    longitude = Column(Float)
    total_slots = Column(Integer, nullable=False)
    available_slots = Column(Integer, nullable=False)

    def __repr__(self):
        return f"<Location {self.id} {self.name!r} available={self.available_slots}/{self.total_slots}>"
