"""In-memory value store keyed by string."""

import copy
from typing import Any, Dict, Optional, Tuple

from .base import Entry, Loader


class ValueStore:
    """Mapping from key to Entry.

    Missing keys are a legitimate state: nothing here raises for them.
    Values are committed only through ensure() and the update pipeline.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Entry] = {}

    def get(self, key: str) -> Tuple[Any, bool]:
        """Return (value, initialized). Missing keys give (None, False)."""
        entry = self._entries.get(key)
        if entry is None:
            return None, False
        return entry.value, entry.initialized

    def has(self, key: str) -> bool:
        """Check whether the key holds an initialized value."""
        entry = self._entries.get(key)
        return entry is not None and entry.initialized

    def ensure(
        self,
        key: str,
        default: Any,
        loader: Optional[Loader] = None,
    ) -> Tuple[Any, bool]:
        """Initialize the key if needed.

        Returns (value, created). The loader, when given, is called as
        ``loader(key, default)`` only if the key is not yet initialized.
        """
        entry = self._entries.get(key)
        if entry is not None and entry.initialized:
            return entry.value, False

        initial = loader(key, default) if loader is not None else default
        self._commit(key, initial)
        return initial, True

    def _commit(self, key: str, value: Any) -> None:
        entry = self._entries.get(key)
        if entry is None:
            self._entries[key] = Entry(value=value, initialized=True)
        else:
            entry.value = value
            entry.initialized = True

    def clear(self, key: str) -> None:
        """Remove the entry, returning the key to uninitialized."""
        self._entries.pop(key, None)

    def clear_all(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    def snapshot(self) -> Dict[str, Any]:
        """Return frozen copy of all initialized values."""
        return copy.deepcopy({
            key: entry.value
            for key, entry in self._entries.items()
            if entry.initialized
        })

    def items(self):
        """Return (key, value) pairs of initialized entries in creation order."""
        return [
            (key, entry.value)
            for key, entry in self._entries.items()
            if entry.initialized
        ]

    def keys(self):
        """Return keys of initialized entries."""
        return [key for key, _ in self.items()]

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __len__(self) -> int:
        """Return number of initialized keys."""
        return len(self.items())
