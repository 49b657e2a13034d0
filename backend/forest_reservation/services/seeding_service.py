# backend/forest_reservation/services/seeding_service.py
"""
Seeding of the rolling availability window.

Seeding is an idempotent create-if-absent pass over the next
``seed_horizon_days`` days (business timezone), skipping the closed weekday.
It runs at every start-up, so a seed that was interrupted half-way is
completed by the next run instead of being left with holes.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
import threading
from typing import Callable, Dict, Iterator, List, Optional

from sqlalchemy.orm import Session

from ..core.config import Settings
from ..core.enums import SeedState, TimeSlot
from ..core.timezone_utils import get_business_today, iter_days
from ..domain.records import SlotState
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.interfaces import IAvailabilityRepository
from .base import BaseService


@dataclass(frozen=True)
class SeedResult:
    created: int
    window_start: date
    window_end: date


class SeedStatus:
    """
    Process-wide view of the seeding state machine.

    Lives on ``app.state`` so /health can report it; transitions are
    thread-safe because seeding runs from worker threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = SeedState.UNSEEDED
        self.last_result: Optional[SeedResult] = None
        self.last_seeded_at: Optional[datetime] = None
        self.last_error: Optional[str] = None

    @property
    def state(self) -> SeedState:
        with self._lock:
            return self._state

    def begin(self) -> None:
        with self._lock:
            self._state = SeedState.SEEDING

    def complete(self, result: SeedResult) -> None:
        with self._lock:
            self._state = SeedState.SEEDED
            self.last_result = result
            self.last_seeded_at = datetime.now(timezone.utc)
            self.last_error = None

    def fail(self, error: BaseException) -> None:
        with self._lock:
            self._state = SeedState.UNSEEDED
            self.last_error = f"{type(error).__name__}: {error}"

    def snapshot(self) -> Dict[str, object]:
        with self._lock:
            result = self.last_result
            return {
                "state": self._state.value,
                "last_seeded_at": self.last_seeded_at.isoformat() if self.last_seeded_at else None,
                "last_created": result.created if result else None,
                "window_start": result.window_start.isoformat() if result else None,
                "window_end": result.window_end.isoformat() if result else None,
                "last_error": self.last_error,
            }


class SeedingService(BaseService):
    """Creates the missing slots of the rolling availability window."""

    def __init__(
        self,
        db: Optional[Session],
        availability_repository: IAvailabilityRepository,
        settings: Settings,
        status: SeedStatus,
        today_provider: Optional[Callable[[], date]] = None,
    ):
        super().__init__(db)
        self.availability_repository = availability_repository
        self.settings = settings
        self.status = status
        self.today_provider = today_provider or (
            lambda: get_business_today(settings.business_timezone)
        )

    def window(self, start: Optional[date] = None) -> tuple[date, date]:
        first = start or self.today_provider()
        return first, first + timedelta(days=self.settings.seed_horizon_days - 1)

    def iter_window_slots(self, start: date) -> Iterator[SlotState]:
        """Every slot the window should contain, closed weekday excluded."""
        for day in iter_days(start, self.settings.seed_horizon_days):
            if day.weekday() == self.settings.closed_weekday:
                continue
            for time_slot in TimeSlot:
                yield SlotState(
                    date=day,
                    time_slot=time_slot,
                    capacity=self.settings.default_slot_capacity,
                    reserved=0,
                    available=True,
                )

    def missing_slots(self, start: date) -> List[SlotState]:
        first, last = self.window(start)
        existing = self.availability_repository.existing_keys(first, last)
        return [slot for slot in self.iter_window_slots(first) if slot.key not in existing]

    @BaseService.measure_operation("seed")
    def seed(
        self,
        start: Optional[date] = None,
        prepare: Optional[Callable[[], None]] = None,
    ) -> SeedResult:
        """
        Run one seeding pass inside a single transaction.

        Args:
            start: First day of the window (defaults to today in the business timezone)
            prepare: Optional callable run in the same transaction before the
                missing slots are computed (reset uses it to clear the store)

        Returns:
            SeedResult with the number of slots created
        """
        first, last = self.window(start)
        self.status.begin()
        try:
            with self.transaction():
                if prepare is not None:
                    prepare()
                missing = self.missing_slots(first)
                created = self.availability_repository.bulk_create(missing)
        except Exception as exc:
            self.status.fail(exc)
            self.logger.error(
                "Seeding failed",
                extra={"window_start": first.isoformat(), "error": str(exc)},
            )
            raise

        result = SeedResult(created=created, window_start=first, window_end=last)
        self.status.complete(result)
        prometheus_metrics.record_seeded_slots(created)
        self.log_operation(
            "seed",
            slots_created=created,
            window_start=first.isoformat(),
            window_end=last.isoformat(),
        )
        return result
