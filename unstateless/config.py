"""Store configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Literal, Optional

from pydantic import BaseModel, field_validator

if TYPE_CHECKING:
    from .persistence.base import StorageBackend


ENV_PREFIX = "UNSTATELESS_"


class StoreConfig(BaseModel):
    """Configuration for a GlobalStore.

    storage selects the default persistence backend, namespace scopes both
    the SQLite table rows and the event log directory, and log_dir (when
    set) turns on the NDJSON event log.
    """

    model_config = {
        "extra": "forbid",
        "frozen": True,
    }

    storage: Literal["memory", "sqlite"] = "memory"
    db_path: str = ":memory:"
    namespace: str = "default"
    log_dir: Optional[str] = None

    @field_validator('namespace')
    @classmethod
    def validate_namespace(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("namespace must not be empty")
        return v

    @classmethod
    def from_env(cls) -> StoreConfig:
        """Build config from UNSTATELESS_* environment variables."""
        values = {}
        for field_name in ("storage", "db_path", "namespace", "log_dir"):
            raw = os.getenv(ENV_PREFIX + field_name.upper())
            if raw:
                values[field_name] = raw
        return cls(**values)

    def create_storage(self) -> StorageBackend:
        """Create the configured persistence backend."""
        from .persistence.memory import MemoryStorage
        from .persistence.sqlite import SqliteStorage

        if self.storage == "sqlite":
            return SqliteStorage(self.db_path, self.namespace)
        return MemoryStorage()
