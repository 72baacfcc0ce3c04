# parkease/services/capacity_store.py
"""
Per-location slot counters.

adjust_available() is the only way the engine moves available_slots. The
bounds check and the write are one conditional UPDATE, so two callers can
never both act on the same stale count.
"""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from parkease.errors import CapacityExceeded, ConsistencyViolation, InvalidCapacity, LocationNotFound
from parkease.models.location import Location
from parkease.utils.logger import get_logger

logger = get_logger(__name__)


def get_location(db: Session, location_id: int) -> Location:
    location = db.get(Location, location_id, populate_existing=True)
    if location is None:
        raise LocationNotFound(location_id)
    return location


def get_available(db: Session, location_id: int) -> int:
    return get_location(db, location_id).available_slots


def list_locations(db: Session) -> list[Location]:
    return list(db.scalars(select(Location).order_by(Location.id)))


def adjust_available(db: Session, location_id: int, delta: int) -> None:
    """
    Move available_slots by delta. A decrement may not go below 0 and nothing
    may go above total_slots. An increment is allowed from below 0 so a lot
    shrunk under its parked vehicles can still let them out.
    """
    new_available = Location.available_slots + delta
    bounds = [new_available <= Location.total_slots]
    if delta < 0:
        bounds.append(new_available >= 0)
    stmt = (
        update(Location)
        .where(Location.id == location_id, *bounds)
        .values(available_slots=new_available)
        .execution_options(synchronize_session=False)
    )
    if db.execute(stmt).rowcount == 1:
        return

    # Nothing matched: work out why
    location = get_location(db, location_id)
    if delta < 0 and location.available_slots <= 0:
        raise CapacityExceeded(location_id)

    raise ConsistencyViolation(
        f"Location {location_id}: cannot apply {delta:+d} to "
        f"{location.available_slots}/{location.total_slots} available slots"
    )


def _check_total_slots(total_slots) -> int:
    if isinstance(total_slots, bool) or not isinstance(total_slots, int) or total_slots <= 0:
        raise InvalidCapacity(total_slots)
    return total_slots


def create_location(
    db: Session,
    name: str,
    total_slots: int,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
) -> Location:
    """New locations start empty: available_slots == total_slots."""
    total_slots = _check_total_slots(total_slots)
    location = Location(
        name=name,
        latitude=latitude,
        longitude=longitude,
        total_slots=total_slots,
        available_slots=total_slots,
    )
    db.add(location)
    db.flush()
    logger.info(f"[CAPACITY] Created location {location.id} '{name}' with {total_slots} slots")
    return location


UNCHANGED = object()   # update_location: leave this field as it is


def update_location(
    db: Session,
    location_id: int,
    total_slots: Optional[int] = None,
    name: Optional[str] = None,
    latitude=UNCHANGED,
    longitude=UNCHANGED,
) -> Location:
    """
    Admin edit. Changing total_slots from T to T' shifts available_slots by
    T' - T in the same statement. The result may leave [0, T'] (e.g. shrinking a
    busy lot); that policy belongs to the admin layer, so it is only logged.

    name and total_slots are required columns, so None leaves them alone.
    latitude/longitude are optional: None clears them, UNCHANGED keeps them.
    """
    location = get_location(db, location_id)

    values = {}
    if name is not None:
        values["name"] = name
    if latitude is not UNCHANGED:
        values["latitude"] = latitude
    if longitude is not UNCHANGED:
        values["longitude"] = longitude
    if total_slots is not None:
        total_slots = _check_total_slots(total_slots)
        values["total_slots"] = total_slots
        values["available_slots"] = Location.available_slots + (total_slots - Location.total_slots)

    if values:
        db.execute(
            update(Location)
            .where(Location.id == location_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        db.refresh(location)

    if not 0 <= location.available_slots <= location.total_slots:
        logger.warning(
            f"[CAPACITY] Location {location_id} edited to "
            f"{location.available_slots}/{location.total_slots} available slots"
        )
    return location
