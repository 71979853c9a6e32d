"""Persistence adapters, codecs and storage backends."""

from .base import StorageBackend
from .memory import MemoryStorage
from .sqlite import SqliteStorage
from .codecs import Codec, StringCodec, NumberCodec, BooleanCodec, JsonCodec
from .adapter import PersistenceAdapter
from .shared import (
    persistent_state,
    persistent_string,
    persistent_number,
    persistent_boolean,
    persistent_json,
)

__all__ = [
    # Backends
    "StorageBackend",
    "MemoryStorage",
    "SqliteStorage",
    # Codecs
    "Codec",
    "StringCodec",
    "NumberCodec",
    "BooleanCodec",
    "JsonCodec",
    # Adapter
    "PersistenceAdapter",
    # Shared state helpers
    "persistent_state",
    "persistent_string",
    "persistent_number",
    "persistent_boolean",
    "persistent_json",
]
