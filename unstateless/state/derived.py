"""Derived values computed from several store keys.

A DerivedValue subscribes to its sources only while it has observers:
- the first subscribe() attaches to every source and computes the value
- any source change recomputes and wakes every observer
- the last unsubscribe releases every source subscription

Observers are woken on every source change, even when the computed value is
unchanged; consumers that need to skip redundant work compare values
themselves. A published DerivedValue also commits each result under its own
key, where the usual equality gate applies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, Iterable, List, Optional, TypeVar

from .base import Unsubscribe, WakeUp

if TYPE_CHECKING:
    from .store import GlobalStore


T = TypeVar('T')


def source_key(source: Any) -> str:
    """Key of a source given as a string or an object with a ``key`` attribute."""
    if isinstance(source, str):
        return source
    key = getattr(source, "key", None)
    if not isinstance(key, str):
        raise TypeError(f"Derived value source must be a key or expose .key, got {source!r}")
    return key


class DerivedValue(Generic[T]):
    """Value recomputed from source keys whenever one of them changes."""

    def __init__(
        self,
        compute: Callable[..., T],
        sources: Iterable[Any],
        store: Optional[GlobalStore] = None,
        key: Optional[str] = None,
    ):
        self._compute = compute
        self.sources: List[str] = [source_key(s) for s in sources]
        self.key = key
        self._store = store
        self._observers: Dict[WakeUp, None] = {}
        self._source_unsubscribes: List[Unsubscribe] = []
        self._value: Optional[T] = None

    @property
    def store(self) -> GlobalStore:
        if self._store is None:
            from .store import get_store
            return get_store()
        return self._store

    @property
    def observed(self) -> bool:
        return bool(self._observers)

    def get(self) -> T:
        """Current derived value.

        While observed this is the snapshot from the last recomputation;
        otherwise it is computed from the current source values.
        """
        if self.observed:
            return self._value  # type: ignore
        return self._evaluate()

    def subscribe(self, wake_up: WakeUp) -> Unsubscribe:
        """Observe the derived value. Returns the unsubscribe function."""
        first = not self._observers
        self._observers[wake_up] = None
        if first:
            try:
                self._attach()
            except Exception:
                del self._observers[wake_up]
                self._detach()
                raise

        def unsubscribe() -> None:
            self.unsubscribe(wake_up)

        return unsubscribe

    def unsubscribe(self, wake_up: WakeUp) -> None:
        if wake_up not in self._observers:
            return
        del self._observers[wake_up]
        if not self._observers:
            self._detach()

    def close(self) -> None:
        """Drop every observer and release the source subscriptions."""
        if self._observers:
            self._observers.clear()
            self._detach()

    def _attach(self) -> None:
        store = self.store
        for key in self.sources:
            self._source_unsubscribes.append(store.subscribe(key, self._on_source_change))
        self._recompute()

    def _detach(self) -> None:
        unsubscribes = self._source_unsubscribes
        self._source_unsubscribes = []
        for unsubscribe in unsubscribes:
            unsubscribe()

    def _evaluate(self) -> T:
        store = self.store
        return self._compute(*(store.get_value(key) for key in self.sources))

    def _recompute(self) -> None:
        self._value = self._evaluate()
        if self.key is not None:
            self.store.replace(self.key, self._value)

    def _on_source_change(self) -> None:
        self._recompute()
        for wake_up in list(self._observers):
            wake_up()
