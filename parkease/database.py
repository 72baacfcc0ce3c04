# parkease/database.py
"""
Database connection, session management, and table creation.
Uses SQLAlchemy; SQLite by default, PostgreSQL in production. All models are
auto-imported in create_tables() so every table is created in one call.

Every engine operation runs inside one session_scope(): the unit of work that
commits the counter change and the ledger change together, or neither.
"""

from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from parkease.config import settings


def _use_immediate_transactions(db_engine):
    """
    SQLite: take the write lock at BEGIN. Writers then queue on the busy timeout
    instead of failing when two readers both try to upgrade to a write lock.
    """

    @event.listens_for(db_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Stop pysqlite from emitting its own BEGIN; we emit ours below
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(db_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str):
    """Create an engine with the pool/locking options that suit its backend."""
    if make_url(url).get_backend_name() == "sqlite":
        db_engine = create_engine(
            url,
            connect_args={
                "check_same_thread": False,
                "timeout": settings.SQLITE_BUSY_TIMEOUT_SECONDS,
            },
            echo=False,
        )
        _use_immediate_transactions(db_engine)
        return db_engine

    return create_engine(
        url,
        pool_pre_ping=True,          # Auto-reconnect if DB connection drops
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        echo=False,                  # Set True to log all SQL queries (debug only)
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

Base = declarative_base()


@contextmanager
def session_scope(session_factory=None):
    """Yield a session; commit if the block succeeds, roll back if it raises."""
    db = (session_factory or SessionLocal)()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def create_tables(bind=None):
    """
    Creates all DB tables. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from parkease.models.location import Location                 # noqa
    from parkease.models.occupancy_record import OccupancyRecord  # noqa
    from parkease.models.rate_setting import RateSetting          # noqa

    Base.metadata.create_all(bind=bind or engine)
