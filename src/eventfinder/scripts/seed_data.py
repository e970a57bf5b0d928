"""
Seed script to populate the SQL database with the sample catalog and demo user

Usage:
    python -m eventfinder.scripts.seed_data [--reset]
"""
import argparse
import asyncio

from eventfinder.core.config import settings
from eventfinder.core.database import dispose_engine, drop_db, get_engine, get_session_factory, init_db
from eventfinder.data.seed_events import DEMO_USER_EMAIL, DEMO_USER_PASSWORD, seed_stores
from eventfinder.stores import build_sql_stores


async def seed_database(reset: bool = False) -> int:
    """Main seeding function"""
    print(f"Starting database seeding ({settings.DATABASE_URL})...")

    engine = get_engine()
    try:
        if reset:
            print("\n=== Dropping Tables ===")
            await drop_db(engine)
        await init_db(engine)

        stores = build_sql_stores(get_session_factory())
        print("\n=== Creating Events and Demo User ===")
        added = await seed_stores(stores.events, stores.users)

        print("\n=== Seeding Complete! ===")
        print(f"Created {added} events")
        for event in await stores.events.list_events():
            print(f"  - {event.title}: {event.registered}/{event.capacity} registered")
        print(f"\nDemo login: {DEMO_USER_EMAIL} / {DEMO_USER_PASSWORD}")
        return added
    finally:
        await dispose_engine()


def main():
    parser = argparse.ArgumentParser(description="Seed the EventFinder database")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate all tables first")
    args = parser.parse_args()
    asyncio.run(seed_database(reset=args.reset))


if __name__ == "__main__":
    main()
