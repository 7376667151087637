"""Channel registry — look channels up by name.

Threads that were started independently need a way to meet at the same
channel.  The registry owns channels by name and enforces uniqueness:
you cannot create two channels with the same name.  Every channel it
creates shares the registry's configuration and logger, so one place
controls the default timeout and one buffer collects all the events.
"""

import threading
from typing import Any

from py_handoff.config import ChannelConfig
from py_handoff.logging import Logger, LogLevel
from py_handoff.sync.channel import HandoffChannel

REGISTRY_SOURCE = "registry"


class ChannelRegistry:
    """Thread-safe registry of named handoff channels."""

    def __init__(
        self,
        *,
        config: ChannelConfig | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create an empty registry.

        Args:
            config: Settings handed to every channel created here.
            logger: Shared event log.  When omitted, a logger recording
                at ``config.log_level`` and above is created.

        """
        self._config = config if config is not None else ChannelConfig()
        self._logger = logger if logger is not None else Logger(min_level=self._config.log_level)
        self._channels: dict[str, HandoffChannel[Any]] = {}
        self._lock = threading.Lock()

    @property
    def config(self) -> ChannelConfig:
        """Return the configuration shared by this registry's channels."""
        return self._config

    @property
    def logger(self) -> Logger:
        """Return the shared event log."""
        return self._logger

    def create(self, name: str) -> HandoffChannel[Any]:
        """Create and register a new channel.

        Args:
            name: Unique name for the channel.

        Returns:
            The newly created, empty channel.

        Raises:
            ValueError: If a channel with the same name already exists.

        """
        with self._lock:
            if name in self._channels:
                msg = f"Channel '{name}' already exists"
                raise ValueError(msg)
            channel: HandoffChannel[Any] = HandoffChannel(
                name=name,
                config=self._config,
                logger=self._logger,
            )
            self._channels[name] = channel
        self._logger.log(LogLevel.INFO, f"created channel '{name}'", source=REGISTRY_SOURCE)
        return channel

    def get(self, name: str) -> HandoffChannel[Any]:
        """Return a channel by name.

        Raises:
            KeyError: If no channel with the given name exists.

        """
        with self._lock:
            if name not in self._channels:
                msg = f"Channel '{name}' not found"
                raise KeyError(msg)
            return self._channels[name]

    def destroy(self, name: str) -> None:
        """Remove a channel from the registry.

        Threads already holding a reference keep using the channel; it
        simply can no longer be found by name.

        Raises:
            KeyError: If no channel with the given name exists.

        """
        with self._lock:
            if name not in self._channels:
                msg = f"Channel '{name}' not found"
                raise KeyError(msg)
            del self._channels[name]
        self._logger.log(LogLevel.INFO, f"destroyed channel '{name}'", source=REGISTRY_SOURCE)

    def list_channels(self) -> list[str]:
        """Return names of all registered channels."""
        with self._lock:
            return list(self._channels)

    def __contains__(self, name: object) -> bool:
        """Return whether a channel called *name* is registered."""
        with self._lock:
            return name in self._channels

    def __len__(self) -> int:
        """Return the number of registered channels."""
        with self._lock:
            return len(self._channels)
