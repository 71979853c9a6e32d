"""Persistence adapter: load/save hooks backing a key with external storage."""

import logging
from typing import Callable, Generic, Optional, TypeVar

from .base import StorageBackend
from .codecs import Codec

logger = logging.getLogger(__name__)

T = TypeVar('T')


class PersistenceAdapter(Generic[T]):
    """Pair of hooks connecting store keys to a StorageBackend.

    - load(key, fallback): used as the store loader when a key is first
      initialized. Corrupt data never raises; the fallback is returned.
    - save(key, value): best-effort write, registered as a change listener
      through on_change so it runs once per committed change.
    """

    def __init__(
        self,
        storage: StorageBackend,
        codec: Codec[T],
        on_fallback: Optional[Callable[[str, str], None]] = None,
    ):
        self.storage = storage
        self.codec = codec
        self._on_fallback = on_fallback

    def load(self, key: str, fallback: T) -> T:
        """Read key from storage, writing the fallback when absent."""
        try:
            raw = self.storage.get_item(key)
        except Exception as e:
            self._fallback(key, f"read failed: {e}")
            return fallback

        if raw is None:
            self.save(key, fallback)
            return fallback

        try:
            return self.codec.deserialize(raw)
        except Exception as e:
            self._fallback(key, f"corrupt value {raw!r}: {e}")
            return fallback

    def save(self, key: str, value: T) -> None:
        """Write serialized value to storage. Failures are logged, not raised."""
        try:
            raw = self.codec.serialize(value)
        except Exception as e:
            logger.warning(f"Cannot serialize value for '{key}': {e}")
            return
        try:
            self.storage.set_item(key, raw)
        except Exception as e:
            logger.warning(f"Persisting '{key}' failed: {e}")

    def on_change(self, new_value: T, old_value: T, key: str) -> None:
        """Listener form of save()."""
        self.save(key, new_value)

    def _fallback(self, key: str, reason: str) -> None:
        logger.warning(f"Using default value for '{key}': {reason}")
        if self._on_fallback is not None:
            self._on_fallback(key, reason)
