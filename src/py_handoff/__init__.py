"""py-handoff — a one-slot blocking handoff channel for threads."""

from py_handoff.config import ChannelConfig
from py_handoff.logging import LogEntry, Logger, LogLevel
from py_handoff.sync import (
    CancellationToken,
    ChannelRegistry,
    ChannelStats,
    HandoffCancelledError,
    HandoffChannel,
    HandoffError,
    HandoffTimeoutError,
    Operation,
)

__all__ = [
    "CancellationToken",
    "ChannelConfig",
    "ChannelRegistry",
    "ChannelStats",
    "HandoffCancelledError",
    "HandoffChannel",
    "HandoffError",
    "HandoffTimeoutError",
    "LogEntry",
    "LogLevel",
    "Logger",
    "Operation",
]
