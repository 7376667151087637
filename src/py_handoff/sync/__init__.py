"""Synchronization subsystem — handoff channel, cancellation, registry.

Re-exports public symbols so callers can write::

    from py_handoff.sync import HandoffChannel, CancellationToken
"""

from py_handoff.sync.cancellation import CancellationToken
from py_handoff.sync.channel import (
    ChannelStats,
    HandoffCancelledError,
    HandoffChannel,
    HandoffError,
    HandoffTimeoutError,
    Operation,
)
from py_handoff.sync.registry import ChannelRegistry

__all__ = [
    "CancellationToken",
    "ChannelRegistry",
    "ChannelStats",
    "HandoffCancelledError",
    "HandoffChannel",
    "HandoffError",
    "HandoffTimeoutError",
    "Operation",
]
