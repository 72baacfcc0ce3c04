# parkease/models/occupancy_record.py
"""
Occupancy ledger table.
One row per physical check-in. exit_time and cost stay NULL while the vehicle
is parked and are written together, once, at check-out.
"""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String
from parkease.database import Base

MAX_PLATE_LENGTH = 20


class OccupancyRecord(Base):
    __tablename__ = "occupancy_records"
    __table_args__ = (
        CheckConstraint(
            "(exit_time IS NULL AND cost IS NULL) OR (exit_time IS NOT NULL AND cost IS NOT NULL)",
            name="ck_occupancy_exit_cost_paired",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    location_id = Column(Integer, ForeignKey("parking_locations.id"), nullable=False, index=True)
    employee_id = Column(Integer, nullable=False)        # who checked the vehicle in
    license_plate = Column(String(MAX_PLATE_LENGTH), nullable=False, index=True)  # not unique
    entry_time = Column(DateTime, nullable=False, index=True)
    exit_time = Column(DateTime)                          # NULL while parked
    cost = Column(Numeric(10, 2))                         # set at check-out

    @property
    def is_open(self) -> bool:
        return self.exit_time is None

    def __repr__(self):
        state = "open" if self.is_open else f"closed cost={self.cost}"
        return f"<OccupancyRecord {self.id} plate={self.license_plate} location={self.location_id} {state}>"
