# parkease/services/occupancy_engine.py
"""
Occupancy engine: vehicle check-in / check-out for a parking location.

How it works:
  - check_in  → one transaction: take a slot (conditional UPDATE, fails with
                CapacityExceeded at 0) + insert an open occupancy record
  - check_out → one transaction: lock the open record, bill it at the current
                hourly rate, close it, give the slot back
  - Any error inside the transaction rolls back both halves. Storage faults
    surface as Unavailable and are safe to retry as a fresh attempt.

Callers are the (already authenticated) HTTP/admin layer. Each call opens its
own session, so one engine instance can be shared across request threads.
"""

from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import (
    DisconnectionError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)

from parkease.config import settings
from parkease.database import SessionLocal, session_scope
from parkease.errors import (
    ConsistencyViolation,
    InvalidLicensePlate,
    InvalidLimit,
    ParkingError,
    RecordNotFoundOrClosed,
    Unavailable,
)
from parkease.models.occupancy_record import MAX_PLATE_LENGTH
from parkease.schemas.location import LocationOut
from parkease.schemas.occupancy_record import CheckOutResult, OccupancyRecordOut
from parkease.services import billing, capacity_store, occupancy_ledger, rate_provider
from parkease.utils.logger import get_logger

logger = get_logger(__name__)

TRANSIENT_ERRORS = (OperationalError, InterfaceError, DisconnectionError, PoolTimeoutError)


def _is_transient(exc: SQLAlchemyError) -> bool:
    return isinstance(exc, TRANSIENT_ERRORS) or getattr(exc, "connection_invalidated", False)


def normalize_plate(license_plate) -> str:
    if not isinstance(license_plate, str) or not license_plate.strip():
        raise InvalidLicensePlate(license_plate)
    plate = license_plate.strip()
    if len(plate) > MAX_PLATE_LENGTH:
        raise InvalidLicensePlate(license_plate, f"is longer than {MAX_PLATE_LENGTH} characters")
    return plate


class OccupancyEngine:
    """The only writer of occupancy records and available-slot counters."""

    def __init__(self, session_factory=None, clock=datetime.utcnow):
        """
        Args:
            session_factory: sessionmaker bound to the parking database.
            clock: returns the current naive-UTC datetime; injectable for tests.
        """
        self._session_factory = session_factory or SessionLocal
        self._clock = clock

    @contextmanager
    def _unit_of_work(self, operation: str):
        try:
            with session_scope(self._session_factory) as db:
                yield db
        except ParkingError as exc:
            if exc.fatal:
                logger.critical(f"[{operation}] {exc.message}")
            else:
                logger.warning(f"[{operation}] {exc.message}")
            raise
        except SQLAlchemyError as exc:
            if not _is_transient(exc):
                raise
            logger.error(f"[{operation}] Storage unavailable, rolled back: {exc}")
            raise Unavailable(f"{operation} failed: storage unavailable") from exc

    # ── Check-in / check-out ──────────────────────────────────────────────

    def check_in(self, location_id: int, employee_id: int, license_plate: str) -> OccupancyRecordOut:
        try:
            plate = normalize_plate(license_plate)
        except InvalidLicensePlate as exc:
            logger.warning(f"[CHECK-IN] {exc.message}")
            raise

        with self._unit_of_work("CHECK-IN") as db:
            capacity_store.adjust_available(db, location_id, -1)
            record = occupancy_ledger.insert(db, location_id, employee_id, plate, self._clock())
            result = OccupancyRecordOut.model_validate(record)

        logger.info(f"[CHECK-IN] Location={location_id} | Plate={plate} | Record={result.id} | Employee={employee_id}")
        return result

    def check_out(self, record_id: int, location_id: int) -> CheckOutResult:
        with self._unit_of_work("CHECK-OUT") as db:
            record = occupancy_ledger.get_open(db, record_id, location_id, for_update=True)
            if record is None:
                raise RecordNotFoundOrClosed(record_id)

            exit_time = self._clock()
            if exit_time <= record.entry_time:
                raise ConsistencyViolation(
                    f"Record {record_id}: exit time {exit_time} is not after entry time {record.entry_time}"
                )

            rate = rate_provider.current(db)
            cost = billing.compute_cost(record.entry_time, exit_time, rate)
            occupancy_ledger.close(db, record.id, exit_time, cost)
            capacity_store.adjust_available(db, location_id, +1)
            plate = record.license_plate
            entry_time = record.entry_time

        logger.info(
            f"[CHECK-OUT] Location={location_id} | Plate={plate} | Record={record_id} | "
            f"Parked {exit_time - entry_time} at {rate}/h | Cost={cost}"
        )
        return CheckOutResult(record_id=record_id, location_id=location_id, exit_time=exit_time, cost=cost)

    # ── Occupancy reads ───────────────────────────────────────────────────

    def get_available(self, location_id: int) -> int:
        with self._unit_of_work("AVAILABLE") as db:
            return capacity_store.get_available(db, location_id)

    def find_recent(self, location_id: int, limit: Optional[int] = None) -> list[OccupancyRecordOut]:
        """Latest check-ins at a location, newest first."""
        limit = settings.RECENT_VEHICLES_LIMIT if limit is None else limit
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise InvalidLimit(limit)
        with self._unit_of_work("RECENT") as db:
            capacity_store.get_location(db, location_id)
            return [OccupancyRecordOut.model_validate(r)
                    for r in occupancy_ledger.find_recent(db, location_id, limit)]

    def current_vehicles(self, location_id: int) -> list[OccupancyRecordOut]:
        """Vehicles parked at a location right now, in check-in order."""
        with self._unit_of_work("CURRENT") as db:
            capacity_store.get_location(db, location_id)
            return [OccupancyRecordOut.model_validate(r)
                    for r in occupancy_ledger.find_open_by_location(db, location_id)]

    # ── Locations (admin + public browsing) ───────────────────────────────

    def get_location(self, location_id: int) -> LocationOut:
        with self._unit_of_work("LOCATION") as db:
            return LocationOut.model_validate(capacity_store.get_location(db, location_id))

    def list_locations(self) -> list[LocationOut]:
        with self._unit_of_work("LOCATIONS") as db:
            return [LocationOut.model_validate(loc) for loc in capacity_store.list_locations(db)]

    def create_location(self, name: str, total_slots: int, latitude: Optional[float] = None,
                        longitude: Optional[float] = None) -> LocationOut:
        with self._unit_of_work("LOCATION-CREATE") as db:
            location = capacity_store.create_location(db, name, total_slots, latitude, longitude)
            return LocationOut.model_validate(location)

    def update_location(self, location_id: int, total_slots: Optional[int] = None, name: Optional[str] = None,
                        latitude=capacity_store.UNCHANGED, longitude=capacity_store.UNCHANGED) -> LocationOut:
        with self._unit_of_work("LOCATION-UPDATE") as db:
            location = capacity_store.update_location(db, location_id, total_slots, name, latitude, longitude)
            return LocationOut.model_validate(location)

    # ── Billing rate ──────────────────────────────────────────────────────

    def current_rate(self) -> Decimal:
        with self._unit_of_work("RATE") as db:
            return rate_provider.current(db)

    def set_rate(self, rate) -> Decimal:
        with self._unit_of_work("RATE-SET") as db:
            return rate_provider.set_rate(db, rate)
