"""Process-wide shared value store.

GlobalStore ties together:
- ValueStore: key -> Entry(value, initialized)
- SubscriberRegistry: wake-up callbacks, no payload
- ListenerRegistry: (new, old, key) spies, per key and global
- the update pipeline in set(), the only path that changes committed values

Within one set() call the value is committed before any callback runs,
subscribers are woken before listeners are called, and an updater function
is evaluated exactly once.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, Optional, Tuple

from ..config import StoreConfig
from ..logs.ndjson import NDJSONLogger, create_logger
from .base import Loader, UpdateSpy, Unsubscribe, WakeUp, same_value
from .registry import ListenerRegistry, SubscriberRegistry
from .values import ValueStore

if TYPE_CHECKING:
    from ..persistence.adapter import PersistenceAdapter
    from ..persistence.base import StorageBackend
    from .derived import DerivedValue

logger = logging.getLogger(__name__)


class GlobalStore:
    """Shared keyed values with change notification."""

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        storage: Optional[StorageBackend] = None,
        event_log: Optional[NDJSONLogger] = None,
    ):
        self.config = config or StoreConfig()
        self.values = ValueStore()
        self.subscribers = SubscriberRegistry()
        self.listeners = ListenerRegistry()
        self._storage = storage
        self._owns_storage = storage is None
        self._persistence: Dict[str, PersistenceAdapter] = {}
        if event_log is None and self.config.log_dir:
            event_log = create_logger(self.config.namespace, self.config.log_dir)
        self.event_log = event_log

    @property
    def storage(self) -> StorageBackend:
        """Default persistence backend, created from config on first use."""
        if self._storage is None:
            self._storage = self.config.create_storage()
        return self._storage

    # Reads

    def get(self, key: str) -> Tuple[Any, bool]:
        """Return (value, initialized) for key."""
        return self.values.get(key)

    def get_value(self, key: str, default: Any = None) -> Any:
        """Return the current value, or default when the key is uninitialized."""
        value, initialized = self.values.get(key)
        return value if initialized else default

    def has(self, key: str) -> bool:
        return self.values.has(key)

    def snapshot(self) -> Dict[str, Any]:
        """Return frozen copy of all initialized values."""
        return self.values.snapshot()

    def ensure(self, key: str, default: Any, loader: Optional[Loader] = None) -> Any:
        """Initialize key if needed and return its value.

        The initial value comes from ``loader(key, default)``, falling back to
        the loader of a bound persistence adapter, then to default. On first
        initialization subscribers are woken and listeners are replayed with
        (initial, initial, key).
        """
        if loader is None and key in self._persistence:
            loader = self._persistence[key].load
        value, created = self.values.ensure(key, default, loader)
        if created:
            logger.debug(f"Initialized '{key}'")
            if self.event_log:
                self.event_log.state_init(key, value)
            self.subscribers.notify(key)
            self.listeners.notify(value, value, key)
        return value

    # Update pipeline

    def set(self, key: str, value_or_updater: Any) -> Any:
        """Update key with a literal value or an ``old -> new`` function.

        Returns the new value, or the old one when nothing changed. Because
        callables are treated as updaters, use replace() to store a function.
        """
        old, _ = self.values.get(key)
        if callable(value_or_updater):
            new = value_or_updater(old)
        else:
            new = value_or_updater
        return self._publish(key, old, new)

    def replace(self, key: str, value: Any) -> Any:
        """Update key with a literal value, never calling it as an updater."""
        old, _ = self.values.get(key)
        return self._publish(key, old, value)

    def setter(self, key: str) -> Callable[[Any], Any]:
        """Return a function that updates key, see set()."""
        def set_value(value_or_updater: Any) -> Any:
            return self.set(key, value_or_updater)
        set_value.key = key
        return set_value

    def _publish(self, key: str, old: Any, new: Any) -> Any:
        if same_value(new, old):
            return old

        self.values._commit(key, new)
        logger.debug(f"Committed '{key}'")
        if self.event_log:
            self.event_log.state_change(key, old, new)

        self.subscribers.notify(key)
        self.listeners.notify(new, old, key)
        return new

    # Subscribers

    def subscribe(self, key: str, wake_up: WakeUp) -> Unsubscribe:
        """Register a wake-up callback for key. Returns the unsubscribe function."""
        return self.subscribers.subscribe(key, wake_up)

    def unsubscribe(self, key: str, wake_up: WakeUp) -> None:
        self.subscribers.unsubscribe(key, wake_up)

    # Listeners

    def listen(self, key: str, spy: UpdateSpy) -> None:
        """Register a change listener for key.

        If key already holds a value the spy is called once right away with
        (value, value, key).
        """
        self.listeners.listen(key, spy)
        value, initialized = self.values.get(key)
        if initialized:
            spy(value, value, key)

    def unlisten(self, key: str, spy: UpdateSpy) -> None:
        self.listeners.unlisten(key, spy)

    def listen_all(self, spy: UpdateSpy) -> None:
        """Register a listener for every key, replaying each current value."""
        self.listeners.listen_all(spy)
        for key, value in self.values.items():
            spy(value, value, key)

    def unlisten_all(self, spy: UpdateSpy) -> None:
        self.listeners.unlisten_all(spy)

    def clear_listeners(self, key: str) -> None:
        self.listeners.clear(key)

    def clear_all_listeners(self) -> None:
        self.listeners.clear_all()

    # Persistence

    def bind_persistence(self, key: str, adapter: PersistenceAdapter) -> None:
        """Back key with adapter: its load() initializes, its save() listens.

        Binding a key again replaces the previous adapter.
        """
        previous = self._persistence.get(key)
        if previous is not None:
            self.listeners.unlisten(key, previous.on_change)
        self._persistence[key] = adapter
        self.listen(key, adapter.on_change)

    def unbind_persistence(self, key: str) -> None:
        adapter = self._persistence.pop(key, None)
        if adapter is not None:
            self.listeners.unlisten(key, adapter.on_change)

    def persistence_fallback(self, key: str, reason: str) -> None:
        """Record that a persisted value for key was replaced by its default."""
        if self.event_log:
            self.event_log.persist_fallback(key, reason)

    # Derived values

    def derive(
        self,
        compute: Callable[..., Any],
        sources: Iterable[Any],
        key: Optional[str] = None,
    ) -> DerivedValue:
        """Create a value computed from source keys, optionally published as key."""
        from .derived import DerivedValue
        return DerivedValue(compute, sources, store=self, key=key)

    # Lifecycle

    def clear(self, key: str) -> None:
        """Remove key's value. Registered callbacks are kept."""
        self.values.clear(key)
        if self.event_log:
            self.event_log.state_clear(key)

    def clear_all(self) -> None:
        """Remove every value. Registered callbacks are kept."""
        self.values.clear_all()
        if self.event_log:
            self.event_log.state_clear()

    def reset(self) -> None:
        """Remove every value, subscriber, listener and persistence binding."""
        self.values.clear_all()
        self.subscribers.clear()
        self.listeners.clear_all()
        self._persistence.clear()

    def close(self) -> None:
        """Release the event log and the configured backend."""
        if self.event_log:
            self.event_log.close()
            self.event_log = None
        if self._owns_storage and self._storage is not None:
            close = getattr(self._storage, "close", None)
            if close is not None:
                close()
            self._storage = None


_global_store: Optional[GlobalStore] = None


def get_store() -> GlobalStore:
    """
    Get or create the global store instance.

    Created on first access from StoreConfig.from_env(), reused thereafter.
    Tests reset it with reset_store().
    """
    global _global_store
    if _global_store is None:
        _global_store = GlobalStore(StoreConfig.from_env())
    return _global_store


def reset_store() -> None:
    """Drop the global store so the next get_store() builds a fresh one."""
    global _global_store
    if _global_store is not None:
        _global_store.close()
    _global_store = None
