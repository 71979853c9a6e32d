"""Subscriber and listener registries.

Both registries store callbacks in insertion-ordered sets (dicts with
``None`` values) so delivery follows registration order. Delivery iterates
over a copy, so callbacks may register or unregister while being notified.
"""

from typing import Any, Dict, List

from .base import UpdateSpy, Unsubscribe, WakeUp


class SubscriberRegistry:
    """Per-key wake-up callbacks with no payload.

    A woken subscriber re-reads the store to get the new snapshot.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, Dict[WakeUp, None]] = {}

    def subscribe(self, key: str, wake_up: WakeUp) -> Unsubscribe:
        self._subscribers.setdefault(key, {})[wake_up] = None

        def unsubscribe() -> None:
            self.unsubscribe(key, wake_up)

        return unsubscribe

    def unsubscribe(self, key: str, wake_up: WakeUp) -> None:
        subs = self._subscribers.get(key)
        if subs is None:
            return
        subs.pop(wake_up, None)
        if not subs:
            del self._subscribers[key]

    def subscribers(self, key: str) -> List[WakeUp]:
        return list(self._subscribers.get(key, ()))

    def notify(self, key: str) -> None:
        for wake_up in self.subscribers(key):
            wake_up()

    def count(self, key: str) -> int:
        return len(self._subscribers.get(key, ()))

    def clear(self) -> None:
        self._subscribers.clear()


class ListenerRegistry:
    """Per-key and global change listeners ("spies").

    Spies receive ``(new_value, old_value, key)``. Per-key spies run before
    global ones.
    """

    def __init__(self) -> None:
        self._spies: Dict[str, Dict[UpdateSpy, None]] = {}
        self._global: Dict[UpdateSpy, None] = {}

    def listen(self, key: str, spy: UpdateSpy) -> None:
        self._spies.setdefault(key, {})[spy] = None

    def unlisten(self, key: str, spy: UpdateSpy) -> None:
        spies = self._spies.get(key)
        if spies is not None:
            spies.pop(spy, None)

    def listen_all(self, spy: UpdateSpy) -> None:
        self._global[spy] = None

    def unlisten_all(self, spy: UpdateSpy) -> None:
        self._global.pop(spy, None)

    def clear(self, key: str) -> None:
        self._spies.pop(key, None)

    def clear_all(self) -> None:
        self._spies.clear()
        self._global.clear()

    def listeners(self, key: str) -> List[UpdateSpy]:
        return list(self._spies.get(key, ()))

    def global_listeners(self) -> List[UpdateSpy]:
        return list(self._global)

    def notify(self, new_value: Any, old_value: Any, key: str) -> None:
        for spy in self.listeners(key):
            spy(new_value, old_value, key)
        for spy in self.global_listeners():
            spy(new_value, old_value, key)
