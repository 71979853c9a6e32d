"""In-memory storage backend."""

from typing import Dict, Optional


class MemoryStorage:
    """Process-local string storage, the default persistence backend."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        """Get raw value for key."""
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        """Write raw value for key."""
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        """Remove key if present."""
        self._data.pop(key, None)

    def clear(self) -> None:
        """Remove every key."""
        self._data.clear()

    def __len__(self) -> int:
        """Return number of keys in storage."""
        return len(self._data)

    def keys(self):
        """Return keys in storage."""
        return self._data.keys()

    def items(self):
        """Return items in storage."""
        return self._data.items()
