"""Handoff channel — a one-slot mailbox between threads.

The classic producer/consumer exchange, cut down to its smallest form:
a single slot that is either empty or holds exactly one value.

    **put** waits while the slot is full, then drops the value in and
    rings the "not empty" bell for one consumer.

    **take** waits while the slot is empty, then lifts the value out
    and rings the "not full" bell for one producer.

Think of a restaurant pass: the cook puts one plate on the counter and
cannot put another until a waiter has carried it away.  A waiter who
arrives at an empty counter stands there until a plate appears.

Under the hood there is one lock and two condition variables built on
it.  Every waiter re-checks its predicate in a ``while`` loop after
waking: a notification only means "something changed", not "it is your
turn".  Another thread may have grabbed the slot first, or the wake-up
may be spurious.

Blocking calls can be bounded by a timeout or interrupted through a
:class:`~py_handoff.sync.cancellation.CancellationToken`.  Either way the
call fails without touching the slot.  Before failing, the waiter looks
at the slot one last time: if it became usable in the meantime, the
call goes ahead instead, so a wake-up it absorbed is never wasted.
"""

import math
import threading
from dataclasses import dataclass
from enum import Enum, StrEnum, auto
from time import monotonic
from typing import Generic, TypeVar, cast

from py_handoff.config import ChannelConfig
from py_handoff.logging import Logger, LogLevel
from py_handoff.sync.cancellation import CancellationToken

T = TypeVar("T")


class HandoffError(Exception):
    """Base class for failed channel operations."""

    def __init__(self, message: str, *, channel: str, operation: "Operation") -> None:
        """Record which channel and operation failed."""
        super().__init__(message)
        self.channel = channel
        self.operation = operation


class HandoffTimeoutError(HandoffError, TimeoutError):
    """Raised when a ``put`` or ``take`` runs past its deadline."""


class HandoffCancelledError(HandoffError):
    """Raised when a ``put`` or ``take`` is cancelled through its token."""


class Operation(StrEnum):
    """The two blocking operations a channel offers."""

    PUT = "put"
    TAKE = "take"


class _Unset(Enum):
    UNSET = auto()


_UNSET = _Unset.UNSET


@dataclass(frozen=True)
class ChannelStats:
    """Point-in-time counters for one channel.

    Attributes:
        puts: Values successfully placed in the slot.
        takes: Values successfully removed from the slot.
        timeouts: Operations that gave up after their deadline.
        cancellations: Operations abandoned through a cancellation token.

    """

    puts: int = 0
    takes: int = 0
    timeouts: int = 0
    cancellations: int = 0


class HandoffChannel(Generic[T]):
    """A single-slot blocking channel.

    Any number of producers and consumers may share one channel; each
    value put is taken exactly once.  ``None`` is an ordinary payload.
    """

    def __init__(
        self,
        *,
        name: str,
        config: ChannelConfig | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create an empty channel.

        Args:
            name: Human-readable name, used in logs and errors.
            config: Settings such as the default timeout.
            logger: Where to record puts, takes, timeouts and cancellations.

        """
        self._name = name
        self._config = config if config is not None else ChannelConfig()
        self._logger = logger
        self._lock = threading.Lock()
        self._not_full = threading.Condition(self._lock)
        self._not_empty = threading.Condition(self._lock)
        self._occupied = False
        self._value: T | None = None
        self._waiting_producers = 0
        self._waiting_consumers = 0
        self._puts = 0
        self._takes = 0
        self._timeouts = 0
        self._cancellations = 0

    @property
    def name(self) -> str:
        """Return the channel name."""
        return self._name

    @property
    def config(self) -> ChannelConfig:
        """Return the channel configuration."""
        return self._config

    @property
    def is_full(self) -> bool:
        """Return whether the slot holds a value awaiting a ``take``."""
        with self._lock:
            return self._occupied

    @property
    def waiting_producers(self) -> int:
        """Return the number of threads blocked in ``put``."""
        with self._lock:
            return self._waiting_producers

    @property
    def waiting_consumers(self) -> int:
        """Return the number of threads blocked in ``take``."""
        with self._lock:
            return self._waiting_consumers

    @property
    def stats(self) -> ChannelStats:
        """Return a snapshot of the channel's counters."""
        with self._lock:
            return ChannelStats(
                puts=self._puts,
                takes=self._takes,
                timeouts=self._timeouts,
                cancellations=self._cancellations,
            )

    def put(
        self,
        value: T,
        *,
        timeout: float | None | _Unset = _UNSET,
        cancel: CancellationToken | None = None,
    ) -> None:
        """Place *value* in the slot, waiting while it is full.

        Args:
            value: The payload to hand over.
            timeout: Seconds to wait at most; ``None`` or ``math.inf`` waits
                forever and ``0`` never blocks.  Defaults to
                ``config.default_timeout``.
            cancel: Token that aborts the wait when cancelled.

        Raises:
            HandoffTimeoutError: If the slot stayed full past the deadline.
            HandoffCancelledError: If *cancel* was cancelled first.
            ValueError: If *timeout* is negative.

        """
        deadline = self._deadline(timeout)
        try:
            with self._lock:
                self._wait_until(Operation.PUT, deadline, cancel)
                self._value = value
                self._occupied = True
                self._puts += 1
                self._not_empty.notify()
        except HandoffError as exc:
            self._log(LogLevel.WARNING, str(exc))
            raise
        self._log(LogLevel.DEBUG, f"put {value!r}")

    def take(
        self,
        *,
        timeout: float | None | _Unset = _UNSET,
        cancel: CancellationToken | None = None,
    ) -> T:
        """Remove and return the value in the slot, waiting while it is empty.

        Args:
            timeout: Seconds to wait at most; ``None`` or ``math.inf`` waits
                forever and ``0`` never blocks.  Defaults to
                ``config.default_timeout``.
            cancel: Token that aborts the wait when cancelled.

        Returns:
            The value handed over by a producer.

        Raises:
            HandoffTimeoutError: If the slot stayed empty past the deadline.
            HandoffCancelledError: If *cancel* was cancelled first.
            ValueError: If *timeout* is negative.

        """
        deadline = self._deadline(timeout)
        try:
            with self._lock:
                self._wait_until(Operation.TAKE, deadline, cancel)
                value = cast("T", self._value)
                self._value = None
                self._occupied = False
                self._takes += 1
                self._not_full.notify()
        except HandoffError as exc:
            self._log(LogLevel.WARNING, str(exc))
            raise
        self._log(LogLevel.DEBUG, f"take {value!r}")
        return value

    # -- Waiting -------------------------------------------------------------

    def _deadline(self, timeout: float | None | _Unset) -> float | None:
        """Turn a relative timeout into an absolute monotonic deadline."""
        if timeout is _UNSET:
            timeout = self._config.default_timeout
        if timeout is None:
            return None
        if math.isnan(timeout) or timeout < 0:
            msg = f"timeout must be non-negative, got {timeout}"
            raise ValueError(msg)
        if math.isinf(timeout):
            return None
        return monotonic() + timeout

    def _ready(self, operation: Operation) -> bool:
        if operation is Operation.PUT:
            return not self._occupied
        return self._occupied

    def _wait_until(
        self,
        operation: Operation,
        deadline: float | None,
        cancel: CancellationToken | None,
    ) -> None:
        """Block until *operation* can proceed.  Caller holds the lock.

        On return the predicate for *operation* holds.  On timeout or
        cancellation an exception is raised with the slot untouched and
        this thread no longer counted as a waiter.
        """
        if cancel is not None and cancel.is_cancelled:
            raise self._cancelled(operation)
        if self._ready(operation):
            return

        condition = self._not_full if operation is Operation.PUT else self._not_empty
        handle = cancel.register(self._wake_all) if cancel is not None else None
        self._adjust_waiters(operation, 1)
        try:
            while not self._ready(operation):
                if cancel is not None and cancel.is_cancelled:
                    raise self._cancelled(operation)
                if deadline is None:
                    condition.wait()
                    continue
                remaining = deadline - monotonic()
                if remaining <= 0:
                    raise self._timed_out(operation)
                condition.wait(min(remaining, threading.TIMEOUT_MAX))
        finally:
            self._adjust_waiters(operation, -1)
            if cancel is not None and handle is not None:
                cancel.unregister(handle)

    def _adjust_waiters(self, operation: Operation, delta: int) -> None:
        if operation is Operation.PUT:
            self._waiting_producers += delta
        else:
            self._waiting_consumers += delta

    def _wake_all(self) -> None:
        """Wake every waiter so it re-checks its cancellation token."""
        with self._lock:
            self._not_full.notify_all()
            self._not_empty.notify_all()

    def _timed_out(self, operation: Operation) -> HandoffTimeoutError:
        self._timeouts += 1
        state = "full" if self._occupied else "empty"
        msg = f"{operation} on channel '{self._name}' timed out (slot {state})"
        return HandoffTimeoutError(msg, channel=self._name, operation=operation)

    def _cancelled(self, operation: Operation) -> HandoffCancelledError:
        self._cancellations += 1
        msg = f"{operation} on channel '{self._name}' was cancelled"
        return HandoffCancelledError(msg, channel=self._name, operation=operation)

    def _log(self, level: LogLevel, message: str) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source=self._name)

    def __repr__(self) -> str:
        """Return a developer-friendly representation."""
        with self._lock:
            state = "full" if self._occupied else "empty"
            waiting = self._waiting_producers + self._waiting_consumers
        waiter_word = "waiter" if waiting == 1 else "waiters"
        return f"HandoffChannel('{self._name}', {state}, {waiting} {waiter_word})"
