# parkease/schemas/occupancy_record.py
from pydantic import BaseModel
from datetime import datetime
from decimal import Decimal
from typing import Optional


class OccupancyRecordOut(BaseModel):
    id: int
    location_id: int
    employee_id: int
    license_plate: str
    entry_time: datetime
    exit_time: Optional[datetime] = None
    cost: Optional[Decimal] = None

    @property
    def is_open(self) -> bool:
        return self.exit_time is None

    class Config:
        from_attributes = True


class CheckOutResult(BaseModel):
    record_id: int
    location_id: int
    exit_time: datetime
    cost: Decimal
