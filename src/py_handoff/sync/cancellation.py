"""Cancellation tokens — asking a blocked thread to give up.

A thread stuck in ``take`` on an empty channel cannot notice anything
by itself; it is asleep on a condition variable.  A cancellation token
is the doorbell: another thread calls ``cancel()``, and every channel
that a token-holding caller is waiting on gets poked awake so the
waiter can see the flag and bail out.

The token never holds its own lock while ringing the callbacks.  A
callback re-enters a channel (it takes the channel lock to notify its
conditions), and channels take the token lock while registering, so
holding both at once in the opposite order would deadlock.
"""

import threading
from collections.abc import Callable
from itertools import count


class CancellationToken:
    """A one-shot, thread-safe cancellation flag with wake-up callbacks."""

    def __init__(self) -> None:
        """Create a token that has not been cancelled."""
        self._lock = threading.Lock()
        self._cancelled = False
        self._callbacks: dict[int, Callable[[], None]] = {}
        self._handles = count(1)

    @property
    def is_cancelled(self) -> bool:
        """Return whether ``cancel`` has been called."""
        with self._lock:
            return self._cancelled

    @property
    def registered_callbacks(self) -> int:
        """Return the number of wake-up callbacks still registered."""
        with self._lock:
            return len(self._callbacks)

    def cancel(self) -> None:
        """Mark the token cancelled and wake every registered waiter.

        Calling ``cancel`` more than once is harmless; only the first
        call runs the callbacks.
        """
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            callbacks = list(self._callbacks.values())
            self._callbacks.clear()
        for callback in callbacks:
            callback()

    def register(self, callback: Callable[[], None]) -> int:
        """Register *callback* to run when the token is cancelled.

        If the token is already cancelled the callback is not run; the
        caller is expected to check ``is_cancelled`` itself.

        Returns:
            A handle for ``unregister``.

        """
        with self._lock:
            handle = next(self._handles)
            if not self._cancelled:
                self._callbacks[handle] = callback
            return handle

    def unregister(self, handle: int) -> None:
        """Forget the callback registered under *handle* (no-op if gone)."""
        with self._lock:
            self._callbacks.pop(handle, None)

    def __repr__(self) -> str:
        """Return a developer-friendly representation."""
        state = "cancelled" if self.is_cancelled else "active"
        return f"CancellationToken({state})"
