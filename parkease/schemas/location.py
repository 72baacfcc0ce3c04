# parkease/schemas/location.py
from pydantic import BaseModel
from typing import Optional


class LocationOut(BaseModel):
    id: int
    name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    total_slots: int
    available_slots: int

    @property
    def occupied_slots(self) -> int:
        return self.total_slots - self.available_slots

    class Config:
        from_attributes = True
