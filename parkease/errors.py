# parkease/errors.py
"""
Error kinds raised by the occupancy engine.

Callers (the HTTP/admin layer) catch ParkingError and switch on `kind` to pick
a user-facing response. Only Unavailable is worth retrying, and only as a
fresh attempt with the same inputs.
"""

from enum import Enum


class ErrorKind(str, Enum):
    LOCATION_NOT_FOUND = "location_not_found"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    RECORD_NOT_FOUND_OR_CLOSED = "record_not_found_or_closed"
    INVALID_RATE = "invalid_rate"
    INVALID_LICENSE_PLATE = "invalid_license_plate"
    INVALID_CAPACITY = "invalid_capacity"
    INVALID_LIMIT = "invalid_limit"
    CONSISTENCY_VIOLATION = "consistency_violation"
    UNAVAILABLE = "unavailable"


class ParkingError(Exception):
    kind: ErrorKind
    fatal = False
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LocationNotFound(ParkingError):
    kind = ErrorKind.LOCATION_NOT_FOUND

    def __init__(self, location_id):
        super().__init__(f"Parking location {location_id} not found")
        self.location_id = location_id


class CapacityExceeded(ParkingError):
    kind = ErrorKind.CAPACITY_EXCEEDED

    def __init__(self, location_id):
        super().__init__(f"No available parking slots at location {location_id}")
        self.location_id = location_id


class RecordNotFoundOrClosed(ParkingError):
    """Covers unknown id, wrong location and already checked out alike."""

    kind = ErrorKind.RECORD_NOT_FOUND_OR_CLOSED

    def __init__(self, record_id):
        super().__init__(f"Vehicle {record_id} not found or already checked out")
        self.record_id = record_id


class InvalidRate(ParkingError):
    kind = ErrorKind.INVALID_RATE

    def __init__(self, rate):
        super().__init__(f"Hourly rate must be a positive amount, got {rate!r}")
        self.rate = rate


class InvalidLicensePlate(ParkingError):
    kind = ErrorKind.INVALID_LICENSE_PLATE

    def __init__(self, license_plate, reason="must not be blank"):
        super().__init__(f"License plate {license_plate!r} {reason}")
        self.license_plate = license_plate


class InvalidCapacity(ParkingError):
    kind = ErrorKind.INVALID_CAPACITY

    def __init__(self, total_slots):
        super().__init__(f"Total slots must be a positive integer, got {total_slots!r}")
        self.total_slots = total_slots


class InvalidLimit(ParkingError):
    """A listing was asked for zero or fewer rows."""

    kind = ErrorKind.INVALID_LIMIT

    def __init__(self, limit):
        super().__init__(f"Limit must be a positive integer, got {limit!r}")
        self.limit = limit


class ConsistencyViolation(ParkingError):
    """The stored state already broke an invariant. Never clamped, never retried."""

    kind = ErrorKind.CONSISTENCY_VIOLATION
    fatal = True


class Unavailable(ParkingError):
    """Storage failed mid-operation; the transaction was rolled back in full."""

    kind = ErrorKind.UNAVAILABLE
    retryable = True
