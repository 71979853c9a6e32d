"""Shared state backed by a persistence adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, TypeVar

from ..state.shared import SharedState, resolve_key
from .adapter import PersistenceAdapter
from .codecs import BooleanCodec, Codec, JsonCodec, NumberCodec, StringCodec

if TYPE_CHECKING:
    from ..state.store import GlobalStore
    from .base import StorageBackend


T = TypeVar('T')


def persistent_state(
    codec: Codec[T],
    initial: T,
    key: Optional[str] = None,
    storage: Optional[StorageBackend] = None,
    store: Optional[GlobalStore] = None,
) -> SharedState[T]:
    """Create shared state whose value is loaded from and saved to storage.

    Args:
        codec: Serialization strategy for the stored text
        initial: Default used when storage has no value or a corrupt one
        key: Store and storage key; generated outside render phases if omitted
        storage: Backing storage, defaults to the store's configured storage
        store: Target store, defaults to get_store()
    """
    key = resolve_key(key)
    if store is None:
        from ..state.store import get_store
        store = get_store()
    adapter = PersistenceAdapter(
        storage if storage is not None else store.storage,
        codec,
        on_fallback=store.persistence_fallback,
    )
    store.bind_persistence(key, adapter)
    return SharedState(key, initial, store=store, loader=adapter.load)


def persistent_string(initial: str, key: Optional[str] = None, **kwargs: Any) -> SharedState[str]:
    return persistent_state(StringCodec(), initial, key, **kwargs)


def persistent_number(initial: float, key: Optional[str] = None, **kwargs: Any) -> SharedState[float]:
    return persistent_state(NumberCodec(), initial, key, **kwargs)


def persistent_boolean(initial: bool, key: Optional[str] = None, **kwargs: Any) -> SharedState[bool]:
    return persistent_state(BooleanCodec(), initial, key, **kwargs)


def persistent_json(
    initial: T,
    key: Optional[str] = None,
    model: Optional[Any] = None,
    **kwargs: Any,
) -> SharedState[T]:
    """Persist a structured value as JSON, validated against model when given."""
    return persistent_state(JsonCodec(model), initial, key, **kwargs)
