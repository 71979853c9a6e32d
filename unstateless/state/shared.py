"""Key-bound handles to shared values."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any, Callable, Generic, Optional, Tuple, TypeVar

from ..errors import InvalidIdentityError
from ..render import is_render_phase
from .base import Loader, UpdateSpy, Unsubscribe, WakeUp

if TYPE_CHECKING:
    from .store import GlobalStore


T = TypeVar('T')


class SharedState(Generic[T]):
    """Handle to one key of a GlobalStore.

    Calling the handle initializes the key if needed and returns
    ``(value, setter)``:

        count = shared_state(0, key="count")
        value, set_count = count()
        set_count(lambda old: old + 1)

    Without an explicit store the handle uses get_store() on every call, so
    it follows reset_store().
    """

    def __init__(
        self,
        key: str,
        initial: T,
        store: Optional[GlobalStore] = None,
        loader: Optional[Loader] = None,
    ):
        self._key = key
        self.initial = initial
        self._store = store
        self._loader = loader

    @property
    def key(self) -> str:
        return self._key

    @property
    def store(self) -> GlobalStore:
        if self._store is None:
            from .store import get_store
            return get_store()
        return self._store

    def __call__(self) -> Tuple[T, Callable[[Any], T]]:
        return self.ensure(), self.set

    def ensure(self) -> T:
        """Initialize the key from the loader or initial value if needed."""
        return self.store.ensure(self._key, self.initial, self._loader)

    def get_value(self) -> T:
        """Current value, initializing the key on first read."""
        value, initialized = self.store.get(self._key)
        if initialized:
            return value
        return self.ensure()

    def set(self, value_or_updater: Any) -> T:
        """Update the value; updaters see the initial value on a fresh key."""
        self.ensure()
        return self.store.set(self._key, value_or_updater)

    def subscribe(self, wake_up: WakeUp) -> Unsubscribe:
        return self.store.subscribe(self._key, wake_up)

    def on_change(self, spy: UpdateSpy) -> None:
        self.store.listen(self._key, spy)

    def off_change(self, spy: UpdateSpy) -> None:
        self.store.unlisten(self._key, spy)

    def clear_listeners(self) -> None:
        self.store.clear_listeners(self._key)

    def clear(self) -> None:
        self.store.clear(self._key)

    def __repr__(self) -> str:
        return f"SharedState(key={self._key!r}, initial={self.initial!r})"


def resolve_key(key: Optional[str]) -> str:
    """Return key, or a generated one when none was given.

    Inside a render phase a generated key would differ on every render, so
    a missing key raises InvalidIdentityError there.
    """
    if key is not None:
        return key
    if is_render_phase():
        raise InvalidIdentityError()
    return str(uuid.uuid4())


def shared_state(
    initial: T,
    key: Optional[str] = None,
    store: Optional[GlobalStore] = None,
) -> SharedState[T]:
    """Create a handle to shared state, generating a key when none is given."""
    return SharedState(resolve_key(key), initial, store=store)
