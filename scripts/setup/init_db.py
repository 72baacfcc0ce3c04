"""
Initialize database: creates all tables and seeds defaults.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py
       python scripts/setup/init_db.py --no-sample-location
"""

import sys
import os
import argparse
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy import inspect, select, text
from parkease.config import settings
from parkease.database import create_tables, engine, session_scope
from parkease.models.location import Location
from parkease.services import capacity_store, rate_provider

SAMPLE_LOCATION = {
    "name": "Downtown Parking",
    "latitude": 40.7128,
    "longitude": -74.0060,
    "total_slots": 100,
}


def seed(with_sample_location: bool):
    with session_scope() as db:
        rate = rate_provider.current(db)
        rate_provider.set_rate(db, rate)   # persist the default so admins see a real row
        print(f"✅ Hourly rate: {rate}")

        if with_sample_location and db.scalars(select(Location).limit(1)).first() is None:
            location = capacity_store.create_location(db, **SAMPLE_LOCATION)
            print(f"✅ Sample location created: #{location.id} {location.name} ({location.total_slots} slots)")


def main():
    parser = argparse.ArgumentParser(description="Create ParkEase tables and seed defaults")
    parser.add_argument("--no-sample-location", action="store_true",
                        help="Do not create the sample 'Downtown Parking' location")
    args = parser.parse_args()

    print("🗄️  ParkEase DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    # Test connection
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        sys.exit(1)

    # Create all tables
    print("\n📋 Creating tables...")
    create_tables()
    seed(with_sample_location=not args.no_sample_location)

    tables = sorted(inspect(engine).get_table_names())
    print(f"\n📊 Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    print("\n🎉 Database ready!")


if __name__ == "__main__":
    main()
