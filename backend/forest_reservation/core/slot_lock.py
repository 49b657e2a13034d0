from __future__ import annotations

from contextlib import contextmanager
import logging
import threading
import time
from typing import Dict, Hashable, Iterator, Optional, Tuple

from ..monitoring.prometheus_metrics import prometheus_metrics

logger = logging.getLogger(__name__)


def slot_key(slot_date, time_slot) -> Tuple[str, str]:
    """Lock key for one availability slot."""
    return (slot_date.isoformat(), str(time_slot))


class _KeyEntry:
    __slots__ = ("lock", "refs")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.refs = 0


class KeyedLock:
    """
    Process-local mutual exclusion keyed by an arbitrary hashable.

    ``hold(key)`` serializes callers that use the same key while callers with
    different keys proceed in parallel. Per-key locks are reference counted
    and dropped once nobody holds or waits for them, so the table only grows
    with the number of keys in flight.

    ``hold_all()`` is the store-wide variant used by destructive operations
    such as reset: it stops new per-key holders from entering and waits for
    the ones already inside to leave.

    Locks are not reentrant. A caller that already holds a key must not ask
    for it again.
    """

    def __init__(self, name: str = "slot") -> None:
        self.name = name
        self._guard = threading.Condition()
        self._entries: Dict[Hashable, _KeyEntry] = {}
        self._active = 0
        self._exclusive = False

    @contextmanager
    def hold(self, key: Hashable, timeout: Optional[float] = None) -> Iterator[float]:
        """
        Hold the lock for ``key``; yields the seconds spent waiting.

        Raises:
            TimeoutError: if ``timeout`` elapses before the lock is acquired
        """
        with self._guard:
            while self._exclusive:
                self._guard.wait()
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _KeyEntry()
            entry.refs += 1
            self._active += 1

        started = time.monotonic()
        acquired = entry.lock.acquire(timeout=-1 if timeout is None else timeout)
        waited = time.monotonic() - started
        if not acquired:
            self._leave(key, entry)
            logger.warning(
                "slot_lock_timeout",
                extra={"lock": self.name, "key": key, "waited": waited},
            )
            raise TimeoutError(f"Timed out waiting for {self.name} lock {key!r}")

        prometheus_metrics.observe_slot_lock_wait(self.name, waited)
        try:
            yield waited
        finally:
            entry.lock.release()
            self._leave(key, entry)

    @contextmanager
    def hold_all(self) -> Iterator[None]:
        """Hold every key at once (blocks new holders, drains current ones)."""
        started = time.monotonic()
        with self._guard:
            while self._exclusive:
                self._guard.wait()
            self._exclusive = True
            while self._active:
                self._guard.wait()
        prometheus_metrics.observe_slot_lock_wait(f"{self.name}:all", time.monotonic() - started)
        try:
            yield
        finally:
            with self._guard:
                self._exclusive = False
                self._guard.notify_all()

    def _leave(self, key: Hashable, entry: _KeyEntry) -> None:
        with self._guard:
            entry.refs -= 1
            if entry.refs == 0:
                self._entries.pop(key, None)
            self._active -= 1
            if self._active == 0:
                self._guard.notify_all()

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)
