"""Shared value store, registries and derived values."""

from .base import Entry, UpdateSpy, WakeUp, Unsubscribe, Loader, same_value
from .values import ValueStore
from .registry import SubscriberRegistry, ListenerRegistry
from .store import GlobalStore, get_store, reset_store
from .derived import DerivedValue
from .shared import SharedState, shared_state

__all__ = [
    # Base types
    "Entry",
    "UpdateSpy",
    "WakeUp",
    "Unsubscribe",
    "Loader",
    "same_value",
    # Components
    "ValueStore",
    "SubscriberRegistry",
    "ListenerRegistry",
    # Store
    "GlobalStore",
    "get_store",
    "reset_store",
    # Derived values and handles
    "DerivedValue",
    "SharedState",
    "shared_state",
]
