"""Base types for the shared value store."""

from dataclasses import dataclass
from typing import Any, Callable


# (new_value, old_value, key)
UpdateSpy = Callable[[Any, Any, str], None]
WakeUp = Callable[[], None]
Unsubscribe = Callable[[], None]
# (key, default) -> initial value
Loader = Callable[[str, Any], Any]

_SCALAR_TYPES = (type(None), bool, int, float, complex, str, bytes)


@dataclass
class Entry:
    """Stored value plus its initialization flag.

    ``initialized`` is tracked separately so that falsy values such as
    ``0``, ``False`` and ``""`` are never mistaken for "never set".
    """
    value: Any = None
    initialized: bool = False


def same_value(a: Any, b: Any) -> bool:
    """Equality gate used before committing an update.

    Identity for containers and objects; value equality only for immutable
    scalars of the exact same type (so ``True`` and ``1`` differ).
    """
    if a is b:
        return True
    if type(a) is not type(b) or not isinstance(a, _SCALAR_TYPES):
        return False
    return a == b
