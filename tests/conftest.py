"""Shared fixtures: a throwaway SQLite database per test and a controllable clock."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime, timedelta
from sqlalchemy import update
from sqlalchemy.orm import sessionmaker
from parkease.database import build_engine, create_tables
from parkease.models.location import Location
from parkease.services.occupancy_engine import OccupancyEngine

T0 = datetime(2026, 3, 2, 8, 0, 0)


class FakeClock:
    def __init__(self, start=T0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def db_engine(tmp_path):
    # File-backed so separate threads get separate connections
    eng = build_engine(f"sqlite:///{tmp_path / 'parkease_test.db'}")
    create_tables(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=db_engine)


@pytest.fixture
def db(session_factory):
    """A raw session for store-level tests. Don't mix with `engine` in one test."""
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(session_factory, clock):
    return OccupancyEngine(session_factory=session_factory, clock=clock)


@pytest.fixture
def tamper(session_factory):
    """Write location counters behind the engine's back."""
    def _tamper(location_id, **values):
        session = session_factory()
        try:
            session.execute(update(Location).where(Location.id == location_id).values(**values))
            session.commit()
        finally:
            session.close()
    return _tamper
