"""Backing storage protocol for persisted values."""

from typing import Optional, Protocol


class StorageBackend(Protocol):
    """External string key/value service, shaped like browser localStorage.

    Implementations raise StorageError when the backing store fails.
    """

    def get_item(self, key: str) -> Optional[str]:
        """Get raw value for key. Returns None if not found."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Write raw value for key."""
        ...

    def remove_item(self, key: str) -> None:
        """Remove key. Missing keys are ignored."""
        ...

    def clear(self) -> None:
        """Remove every key."""
        ...
