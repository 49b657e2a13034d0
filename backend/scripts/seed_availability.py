"""
Seed (or reset) the availability window in the configured database.

Normally the API seeds itself on start-up; this script does the same pass
from the command line, for example after restoring a backup.

Usage:
    python -m scripts.seed_availability              # create missing slots
    python -m scripts.seed_availability --reset --execute
"""

from pathlib import Path
import sys
from typing import Optional

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from forest_reservation.core.config import Settings, get_settings
from forest_reservation.core.enums import StorageBackend
from forest_reservation.core.slot_lock import KeyedLock
from forest_reservation.database import Base, build_engine, build_session_factory
from forest_reservation.repositories.factory import RepositoryFactory
from forest_reservation.services.availability_service import AvailabilityService
from forest_reservation.services.seeding_service import SeedingService, SeedResult, SeedStatus


def seed_availability(settings: Settings, reset: bool = False) -> SeedResult:
    """
    Run one seeding pass against ``settings.database_url``.

    Args:
        settings: Application settings (the SQL backend is always used)
        reset: Delete every reservation and slot first

    Returns:
        SeedResult of the pass
    """
    engine = build_engine(settings.database_url, echo=settings.sql_echo)
    Base.metadata.create_all(bind=engine)
    db = build_session_factory(engine)()
    try:
        factory = RepositoryFactory(StorageBackend.SQL)
        seeding_service = SeedingService(
            db, factory.create_availability_repository(db), settings, SeedStatus()
        )
        if not reset:
            return seeding_service.seed()

        availability_service = AvailabilityService(
            db,
            seeding_service.availability_repository,
            factory.create_reservation_repository(db),
            settings,
            KeyedLock("script"),
            seeding_service=seeding_service,
        )
        return availability_service.reset_all()
    finally:
        db.close()
        engine.dispose()


def main(argv: Optional[list[str]] = None) -> None:
    import argparse

    parser = argparse.ArgumentParser(description="Seed the availability window")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete ALL reservations and slots before seeding",
    )
    parser.add_argument(
        "--execute", action="store_true", help="Required together with --reset"
    )
    args = parser.parse_args(argv)

    if args.reset and not args.execute:
        print("Refusing to reset without --execute (this deletes every reservation)")
        sys.exit(1)

    settings = get_settings()
    print(f"Database: {settings.database_url}")
    result = seed_availability(settings, reset=args.reset)
    print(
        f"Created {result.created} slots for "
        f"{result.window_start.isoformat()} .. {result.window_end.isoformat()}"
    )


if __name__ == "__main__":
    main()
