# parkease/services/occupancy_ledger.py
"""
Vehicle stay ledger: insert at check-in, close once at check-out, never delete.
Used by the occupancy engine; the read helpers also back the current/recent
vehicle views.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterator, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from parkease.errors import RecordNotFoundOrClosed
from parkease.models.occupancy_record import OccupancyRecord
from parkease.utils.logger import get_logger

logger = get_logger(__name__)

OPEN_RECORDS_BATCH_SIZE = 100


def insert(db: Session, location_id: int, employee_id: int, license_plate: str,
           entry_time: datetime) -> OccupancyRecord:
    record = OccupancyRecord(
        location_id=location_id,
        employee_id=employee_id,
        license_plate=license_plate,
        entry_time=entry_time,
    )
    db.add(record)
    db.flush()  # assigns record.id
    return record


def get_open(db: Session, record_id: int, location_id: int,
             for_update: bool = False) -> Optional[OccupancyRecord]:
    """The open record with this id at this location, else None."""
    stmt = select(OccupancyRecord).where(
        OccupancyRecord.id == record_id,
        OccupancyRecord.location_id == location_id,
        OccupancyRecord.exit_time.is_(None),
    )
    if for_update:
        stmt = stmt.with_for_update()
    return db.scalars(stmt.execution_options(populate_existing=True)).first()


def close(db: Session, record_id: int, exit_time: datetime, cost: Decimal) -> None:
    """Set exit_time and cost together. Only an open record can be closed."""
    result = db.execute(
        update(OccupancyRecord)
        .where(OccupancyRecord.id == record_id, OccupancyRecord.exit_time.is_(None))
        .values(exit_time=exit_time, cost=cost)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise RecordNotFoundOrClosed(record_id)


def find_open_by_location(db: Session, location_id: int) -> Iterator[OccupancyRecord]:
    """Vehicles currently parked at a location, in check-in order. Lazy."""
    stmt = (
        select(OccupancyRecord)
        .where(OccupancyRecord.location_id == location_id, OccupancyRecord.exit_time.is_(None))
        .order_by(OccupancyRecord.id)
        .execution_options(yield_per=OPEN_RECORDS_BATCH_SIZE, populate_existing=True)
    )
    for record in db.scalars(stmt):
        yield record


def find_recent(db: Session, location_id: int, limit: int) -> list[OccupancyRecord]:
    """Latest check-ins at a location, newest first, open and closed alike."""
    stmt = (
        select(OccupancyRecord)
        .where(OccupancyRecord.location_id == location_id)
        .order_by(OccupancyRecord.entry_time.desc(), OccupancyRecord.id.desc())
        .limit(limit)
        .execution_options(populate_existing=True)
    )
    return list(db.scalars(stmt))
