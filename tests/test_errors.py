"""Unit tests for the error taxonomy callers dispatch on."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from parkease.errors import (
    CapacityExceeded,
    ConsistencyViolation,
    ErrorKind,
    InvalidLimit,
    LocationNotFound,
    ParkingError,
    RecordNotFoundOrClosed,
    Unavailable,
)


class TestErrorKinds:
    def test_every_error_is_a_parking_error_with_a_kind(self):
        for error in (LocationNotFound(1), CapacityExceeded(1), RecordNotFoundOrClosed(9),
                      ConsistencyViolation("broken"), Unavailable("down"), InvalidLimit(0)):
            assert isinstance(error, ParkingError)
            assert isinstance(error.kind, ErrorKind)

    def test_only_unavailable_is_retryable(self):
        assert Unavailable("down").retryable
        assert not CapacityExceeded(1).retryable
        assert not RecordNotFoundOrClosed(1).retryable

    def test_only_consistency_violation_is_fatal(self):
        assert ConsistencyViolation("broken").fatal
        assert not LocationNotFound(1).fatal

    def test_record_message_does_not_say_which_case(self):
        assert str(RecordNotFoundOrClosed(5)) == "Vehicle 5 not found or already checked out"

    def test_invalid_limit_keeps_the_value(self):
        error = InvalidLimit(-1)
        assert error.kind == ErrorKind.INVALID_LIMIT
        assert error.limit == -1
        assert not error.retryable and not error.fatal
