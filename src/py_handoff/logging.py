"""Channel event logging.

Every channel can report what happened to it: which value went in, which
came out, who gave up waiting.  The logger collects those events as
structured records rather than formatted lines, so tests and callers can
query them afterwards.

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source, thread).
- **Logger** — an append-only buffer with filtering and clearing.

Design choices:
    - **IntEnum for levels** so they compare naturally with ``<``.
    - **Frozen dataclass for entries**, so records cannot change later.
    - **One lock around the buffer**: producers and consumers log from
      different OS threads at the same time.
"""

import threading
from dataclasses import dataclass, field
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries.

    Using IntEnum means levels compare with ``<`` / ``>`` naturally,
    which makes minimum-level filtering trivial.
    """

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


def _current_thread_name() -> str:
    return threading.current_thread().name


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The channel (or registry) that generated the event.
        thread: Name of the OS thread that was running at the time.

    """

    level: LogLevel
    message: str
    source: str
    thread: str = field(default_factory=_current_thread_name)

    def __str__(self) -> str:
        """Format as ``[LEVEL] source (thread): message``."""
        return f"[{self.level.name}] {self.source} ({self.thread}): {self.message}"


class Logger:
    """Thread-safe append-only log buffer with filtering.

    Entries below ``min_level`` are dropped on arrival, so a logger built
    with ``LogLevel.WARNING`` only ever holds timeouts and cancellations.
    """

    def __init__(self, *, min_level: LogLevel = LogLevel.DEBUG) -> None:
        """Create an empty logger that keeps entries at or above *min_level*."""
        self._min_level = min_level
        self._entries: list[LogEntry] = []
        self._lock = threading.Lock()

    @property
    def min_level(self) -> LogLevel:
        """Return the lowest level this logger records."""
        return self._min_level

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        with self._lock:
            return list(self._entries)

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Channel or component that generated the event.

        """
        if level < self._min_level:
            return
        entry = LogEntry(level=level, message=message, source=source)
        with self._lock:
            self._entries.append(entry)

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A filtered list of log entries.

        """
        result = self.entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result

    def clear(self) -> None:
        """Remove all log entries."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        """Return the number of recorded entries."""
        with self._lock:
            return len(self._entries)
