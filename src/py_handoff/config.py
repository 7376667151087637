"""Channel configuration.

A handful of knobs apply to every channel: how long a blocking call may
wait when the caller does not say, and how chatty the event log is.
They can be given directly or read from environment variables, which
are plain ``KEY=VALUE`` strings::

    PY_HANDOFF_DEFAULT_TIMEOUT=2.5   # seconds; empty or "none" = wait forever
    PY_HANDOFF_LOG_LEVEL=warning     # debug | info | warning | error
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass

from py_handoff.logging import LogLevel

DEFAULT_TIMEOUT: float | None = None
DEFAULT_LOG_LEVEL = LogLevel.INFO

ENV_DEFAULT_TIMEOUT = "PY_HANDOFF_DEFAULT_TIMEOUT"
ENV_LOG_LEVEL = "PY_HANDOFF_LOG_LEVEL"

_NO_TIMEOUT_WORDS = frozenset({"", "none", "inf", "forever"})


@dataclass(frozen=True)
class ChannelConfig:
    """Settings shared by one or more channels.

    Attributes:
        default_timeout: Seconds a ``put``/``take`` waits when the caller
            passes no timeout.  ``None`` means wait indefinitely.
        log_level: Lowest level a registry-owned logger records.

    """

    default_timeout: float | None = DEFAULT_TIMEOUT
    log_level: LogLevel = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        """Reject negative or NaN timeouts."""
        timeout = self.default_timeout
        if timeout is not None and (math.isnan(timeout) or timeout < 0):
            msg = f"default_timeout must be non-negative, got {self.default_timeout}"
            raise ValueError(msg)

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "ChannelConfig":
        """Build a config from a string mapping such as ``os.environ``.

        Unset variables fall back to the module defaults.

        Raises:
            ValueError: If a variable is set to something unparsable.

        """
        timeout = DEFAULT_TIMEOUT
        raw_timeout = environ.get(ENV_DEFAULT_TIMEOUT)
        if raw_timeout is not None:
            timeout = _parse_timeout(raw_timeout)

        level = DEFAULT_LOG_LEVEL
        raw_level = environ.get(ENV_LOG_LEVEL)
        if raw_level is not None:
            level = _parse_level(raw_level)

        return cls(default_timeout=timeout, log_level=level)


def _parse_timeout(raw: str) -> float | None:
    text = raw.strip().lower()
    if text in _NO_TIMEOUT_WORDS:
        return None
    try:
        return float(text)
    except ValueError:
        msg = f"{ENV_DEFAULT_TIMEOUT} must be a number of seconds, got {raw!r}"
        raise ValueError(msg) from None


def _parse_level(raw: str) -> LogLevel:
    try:
        return LogLevel[raw.strip().upper()]
    except KeyError:
        names = ", ".join(level.name.lower() for level in LogLevel)
        msg = f"{ENV_LOG_LEVEL} must be one of {names}, got {raw!r}"
        raise ValueError(msg) from None
