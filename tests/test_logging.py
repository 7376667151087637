"""Tests for the channel event log.

The logger records structured entries for channel events so callers can
see which values were handed over and which waits gave up.
"""

import threading

from py_handoff.logging import LogEntry, Logger, LogLevel

NUM_THREADS = 8
ENTRIES_PER_THREAD = 100
JOIN_TIMEOUT = 5.0


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR


class TestLogEntry:
    """Verify log entry structure."""

    def test_entry_has_fields(self) -> None:
        """A log entry should store level, message, source, and thread."""
        entry = LogEntry(
            level=LogLevel.INFO,
            message="put 'x'",
            source="orders",
            thread="producer-1",
        )
        assert entry.level is LogLevel.INFO
        assert entry.message == "put 'x'"
        assert entry.source == "orders"
        assert entry.thread == "producer-1"

    def test_thread_defaults_to_current(self) -> None:
        """Without a thread name, the current thread's name is recorded."""
        entry = LogEntry(level=LogLevel.INFO, message="m", source="s")
        assert entry.thread == threading.current_thread().name

    def test_entry_str(self) -> None:
        """String representation should include level, source and message."""
        entry = LogEntry(
            level=LogLevel.WARNING,
            message="take timed out",
            source="orders",
            thread="consumer",
        )
        assert str(entry) == "[WARNING] orders (consumer): take timed out"


class TestLogger:
    """Verify the logger."""

    def test_log_stores_entries(self) -> None:
        """Logged entries should be retrievable."""
        logger = Logger()
        logger.log(LogLevel.INFO, "created", source="registry")
        assert len(logger.entries) == 1
        assert logger.entries[0].message == "created"

    def test_entries_are_ordered(self) -> None:
        """Entries should be in chronological order."""
        logger = Logger()
        logger.log(LogLevel.INFO, "first", source="test")
        logger.log(LogLevel.INFO, "second", source="test")
        assert logger.entries[0].message == "first"
        assert logger.entries[1].message == "second"

    def test_entries_is_a_copy(self) -> None:
        """Mutating the returned list should not affect the logger."""
        logger = Logger()
        logger.log(LogLevel.INFO, "kept", source="test")
        logger.entries.clear()
        assert len(logger) == 1

    def test_min_level_drops_entries(self) -> None:
        """Entries below the logger's minimum level should be discarded."""
        logger = Logger(min_level=LogLevel.WARNING)
        logger.log(LogLevel.DEBUG, "noise", source="test")
        logger.log(LogLevel.ERROR, "boom", source="test")
        assert [e.message for e in logger.entries] == ["boom"]

    def test_filter_by_level(self) -> None:
        """Filtering should return only entries at or above the level."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "debug msg", source="test")
        logger.log(LogLevel.INFO, "info msg", source="test")
        logger.log(LogLevel.ERROR, "error msg", source="test")
        warnings_and_above = logger.filter(min_level=LogLevel.WARNING)
        assert len(warnings_and_above) == 1
        assert warnings_and_above[0].level is LogLevel.ERROR

    def test_filter_by_source(self) -> None:
        """Filtering by source should return matching entries."""
        logger = Logger()
        logger.log(LogLevel.INFO, "orders event", source="orders")
        logger.log(LogLevel.INFO, "invoices event", source="invoices")
        order_logs = logger.filter(source="orders")
        assert len(order_logs) == 1
        assert order_logs[0].source == "orders"

    def test_clear(self) -> None:
        """Clearing should remove all entries."""
        logger = Logger()
        logger.log(LogLevel.INFO, "test", source="test")
        logger.clear()
        assert len(logger.entries) == 0

    def test_concurrent_logging_keeps_every_entry(self) -> None:
        """Logging from many threads at once should lose nothing."""
        logger = Logger()

        def spam() -> None:
            for i in range(ENTRIES_PER_THREAD):
                logger.log(LogLevel.DEBUG, str(i), source="test")

        threads = [threading.Thread(target=spam) for _ in range(NUM_THREADS)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(JOIN_TIMEOUT)
        assert len(logger) == NUM_THREADS * ENTRIES_PER_THREAD
