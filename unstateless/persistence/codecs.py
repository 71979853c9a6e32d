"""Serialization strategies for persisted values.

Each codec turns a value into the string kept by a StorageBackend and back.
deserialize() raises ValueError (or a subclass such as pydantic's
ValidationError) on text it cannot read; the adapter turns that into a
fallback to the caller's default.
"""

from typing import Any, Generic, Optional, Protocol, TypeVar

from pydantic import TypeAdapter


T = TypeVar('T')


class Codec(Protocol[T]):
    """Protocol for value <-> string conversion."""

    def serialize(self, value: T) -> str:
        ...

    def deserialize(self, raw: str) -> T:
        ...


class StringCodec:
    """Stores strings as-is."""

    def serialize(self, value: str) -> str:
        return value

    def deserialize(self, raw: str) -> str:
        return raw


class NumberCodec:
    """Stores numbers as decimal text.

    Integral text loads as int, anything else float() accepts loads as float.
    """

    def serialize(self, value: float) -> str:
        return str(value)

    def deserialize(self, raw: str) -> float:
        text = raw.strip()
        try:
            return int(text)
        except ValueError:
            return float(text)


class BooleanCodec:
    """Stores booleans as "1" / "".

    Any non-empty text loads as True.
    """

    def serialize(self, value: bool) -> str:
        return "1" if value else ""

    def deserialize(self, raw: str) -> bool:
        return bool(raw)


class JsonCodec(Generic[T]):
    """Stores structured values as compact JSON.

    Validation goes through a pydantic TypeAdapter, so passing a model or a
    typed container (e.g. ``dict[str, int]``) rejects persisted data of the
    wrong shape as well as malformed JSON.
    """

    def __init__(self, type_: Optional[Any] = None) -> None:
        self.type_ = Any if type_ is None else type_
        self._adapter = TypeAdapter(self.type_)

    def serialize(self, value: T) -> str:
        return self._adapter.dump_json(value).decode('utf-8')

    def deserialize(self, raw: str) -> T:
        return self._adapter.validate_json(raw)
