"""Registry mapping source keys to headline sources."""

from threading import Lock

import structlog

from carbon_relay.collectors.base import HeadlineSource
from carbon_relay.collectors.errors import UnknownSourceError
from carbon_relay.config.constants import COMPONENT_COLLECTORS


logger = structlog.get_logger()


class SourceRegistry:
    """Thread-safe registry of headline sources.

    Populated once at startup; lookups of unregistered keys raise
    UnknownSourceError instead of being skipped silently.
    """

    def __init__(self) -> None:
        """Initialize the registry."""
        self._sources: dict[str, HeadlineSource] = {}
        self._lock = Lock()
        self._log = logger.bind(component=COMPONENT_COLLECTORS)

    def register(self, key: str, source: HeadlineSource) -> None:
        """Register a source under key.

        Args:
            key: Source key (e.g. "carbonpulse").
            source: Source implementation.

        Raises:
            ValueError: If key is blank or already registered.
        """
        if not key.strip():
            msg = "Source key must be a non-empty string"
            raise ValueError(msg)
        with self._lock:
            if key in self._sources:
                msg = f"Source key '{key}' is already registered"
                raise ValueError(msg)
            self._sources[key] = source
            self._log.debug(
                "source_registered", source_key=key, kind=type(source).__name__
            )

    def unregister(self, key: str) -> bool:
        """Unregister a source.

        Args:
            key: The key to unregister.

        Returns:
            True if the source was unregistered, False if not found.
        """
        with self._lock:
            if key in self._sources:
                del self._sources[key]
                self._log.debug("source_unregistered", source_key=key)
                return True
            return False

    def get(self, key: str) -> HeadlineSource:
        """Look up a source.

        Args:
            key: Source key.

        Returns:
            The registered source.

        Raises:
            UnknownSourceError: If key is not registered.
        """
        with self._lock:
            source = self._sources.get(key)
        if source is None:
            raise UnknownSourceError(key, self.keys())
        return source

    def keys(self) -> list[str]:
        """Get registered keys in sorted order."""
        with self._lock:
            return sorted(self._sources)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._sources

    def __len__(self) -> int:
        with self._lock:
            return len(self._sources)
