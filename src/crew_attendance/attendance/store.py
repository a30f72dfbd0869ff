from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional

from ..storage.port import PersistencePort, SaveResult
from .model import MemberRecord, MonthRoster

logger = logging.getLogger(__name__)


def decode_document(document: Mapping[str, Any], *, strict: bool = True) -> dict[str, MonthRoster]:
    """Turn the persisted JSON object into rosters.

    Strict decoding raises on the first malformed entry. Lenient decoding
    skips bad months and members and logs each one.
    """
    months: dict[str, MonthRoster] = {}
    for key, members in document.items():
        if not isinstance(members, Mapping):
            if strict:
                raise TypeError(f"month {key!r} must be an object")
            logger.warning("Skipping month %r: not an object", key)
            continue
        months[str(key)] = decode_roster(members, strict=strict)
    return months


def decode_roster(members: Mapping[str, Any], *, strict: bool = True) -> MonthRoster:
    roster: MonthRoster = {}
    for i, (name, raw) in enumerate(members.items()):
        try:
            roster[str(name)] = MemberRecord.from_dict(raw, position=i, strict=strict)
        except TypeError as e:
            if strict:
                raise
            logger.warning("Skipping member %r: %s", name, e)
    return roster


def encode_document(months: Mapping[str, MonthRoster]) -> dict[str, Any]:
    return {key: {name: rec.to_dict() for name, rec in roster.items()} for key, roster in months.items()}


class AttendanceStore:
    """In-memory month -> member -> record mapping backed by a PersistencePort.

    Request handlers must call wait_for_initialization() before touching the
    data. Mutations happen under the lock; persisting happens outside it, so
    two interleaved writers each save their own full snapshot and the last
    save to finish wins.
    """

    def __init__(self, persistence: PersistencePort):
        self._persistence = persistence
        self._months: dict[str, MonthRoster] = {}
        self._lock = threading.RLock()
        self._ready = threading.Event()
        self.last_save: Optional[SaveResult] = None

    @property
    def is_initialized(self) -> bool:
        return self._ready.is_set()

    def initialize(self) -> None:
        """Load the persisted document once; any failure leaves an empty store."""
        logger.info("Initializing attendance data (%s backend)", self._persistence.kind.value)
        try:
            result = self._persistence.load()
            months = decode_document(result.data, strict=False)
            with self._lock:
                self._months = months
            logger.info("Attendance data ready: %d month(s) from %s", len(months), result.source)
        except Exception:
            logger.exception("Failed to initialize attendance data, starting empty")
            with self._lock:
                self._months = {}
        finally:
            self._ready.set()

    def start_background_initialization(self) -> threading.Thread:
        t = threading.Thread(target=self.initialize, name="attendance-init", daemon=True)
        t.start()
        return t

    def wait_for_initialization(self, timeout: Optional[float] = None) -> bool:
        return self._ready.wait(timeout)

    @contextmanager
    def locked(self) -> Iterator[dict[str, MonthRoster]]:
        """Direct access to the rosters for a synchronous in-memory change."""
        with self._lock:
            yield self._months

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return encode_document(self._months)

    def replace_all(self, document: Mapping[str, Any]) -> None:
        """Swap the whole store for a decoded document; raises if it is malformed."""
        months = decode_document(document)
        with self._lock:
            self._months = months

    def persist(self, message: str) -> SaveResult:
        result = self._persistence.save(self.snapshot(), message)
        self.last_save = result
        if not result.local_saved:
            logger.error("Attendance data was not saved locally: %s", result.error)
        elif result.error:
            logger.warning("Attendance data saved locally only: %s", result.error)
        return result
