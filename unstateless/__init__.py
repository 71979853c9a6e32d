"""
unstateless

A process-wide reactive value store: shared keyed values with synchronous
change notification, derived values and pluggable persistence.
"""

# Errors
from .errors import (
    UnstatelessError,
    InvalidIdentityError,
    StorageError,
    INDEX_ERROR_MESSAGE,
)

# Configuration
from .config import StoreConfig

# Render phase
from .render import render_phase, is_render_phase, component

# Store
from .state import (
    Entry,
    ValueStore,
    SubscriberRegistry,
    ListenerRegistry,
    GlobalStore,
    get_store,
    reset_store,
    DerivedValue,
    SharedState,
    shared_state,
)

# Persistence
from .persistence import (
    StorageBackend,
    MemoryStorage,
    SqliteStorage,
    StringCodec,
    NumberCodec,
    BooleanCodec,
    JsonCodec,
    PersistenceAdapter,
    persistent_state,
    persistent_string,
    persistent_number,
    persistent_boolean,
    persistent_json,
)

# Logging
from .logs import NDJSONLogger, EventType, create_logger

__all__ = [
    # Errors
    'UnstatelessError',
    'InvalidIdentityError',
    'StorageError',
    'INDEX_ERROR_MESSAGE',
    # Configuration
    'StoreConfig',
    # Render phase
    'render_phase',
    'is_render_phase',
    'component',
    # Store
    'Entry',
    'ValueStore',
    'SubscriberRegistry',
    'ListenerRegistry',
    'GlobalStore',
    'get_store',
    'reset_store',
    'DerivedValue',
    'SharedState',
    'shared_state',
    # Persistence
    'StorageBackend',
    'MemoryStorage',
    'SqliteStorage',
    'StringCodec',
    'NumberCodec',
    'BooleanCodec',
    'JsonCodec',
    'PersistenceAdapter',
    'persistent_state',
    'persistent_string',
    'persistent_number',
    'persistent_boolean',
    'persistent_json',
    # Logging
    'NDJSONLogger',
    'EventType',
    'create_logger',
]

__version__ = "0.1.0"
