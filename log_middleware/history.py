"""Bounded, newest-first history of submitted log records, kept by the caller."""

import datetime
import threading
import uuid
from collections import deque
from dataclasses import dataclass, field

from log_middleware.models import Level, Package, Stack


@dataclass(frozen=True)
class HistoryEntry:
    stack: Stack
    level: Level
    package: Package
    message: str
    success: bool
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: str = field(
        default_factory=lambda: datetime.datetime.now(datetime.timezone.utc).isoformat()
    )


class LogHistory:
    """Thread-safe ring of the most recent submissions.

    Once ``max_entries`` is reached the oldest entry is dropped.
    """

    def __init__(self, max_entries: int = 50):
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self._entries: deque[HistoryEntry] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def add(self, stack, level, package, message: str, success: bool) -> HistoryEntry:
        entry = HistoryEntry(
            stack=Stack(stack),
            level=Level(level),
            package=Package(package),
            message=message,
            success=success,
        )
        with self._lock:
            self._entries.appendleft(entry)
        return entry

    def entries(self) -> list[HistoryEntry]:
        """Return a snapshot, newest first."""
        with self._lock:
            return list(self._entries)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
