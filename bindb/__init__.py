"""Embedded key-value store persisted to a single MessagePack file.

Values are addressed by dot/bracket paths: the first segment names a root
key, the rest descends into the stored value.

Quick Start:
    from bindb import Store, StoreConfig

    db = Store(StoreConfig(file_path="data/app.bdb"))

    db.set("settings.theme", "dark")
    db.get("settings")                  # {'theme': 'dark'}
    db.push("history", "login")         # ['login']
    db.get("history[0]")                # 'login'
    db.add("counters.visits", 1)        # 1
    db.delete("settings.theme")         # True

Operating modes (StoreConfig):
    - cache_data=True   Document loaded once and kept in memory (default)
    - cache_data=False  Document re-read from the file on every operation
    - auto_save=True    Every mutation rewrites the file (default)
    - auto_save=False   Call save() (or close()) to persist

Key Classes:
    - Store: Main interface with path operations and dict-like access
    - connect(): Create a Store from a URL (bdb:///path.bdb, memory://)
    - StoreConfig: File location and mode flags

Backend Classes:
    - FileBackend: Filesystem storage with atomic replace
    - MemoryBackend: In-memory storage for testing
"""

from .core import Store, connect
from .config import StoreConfig
from .codec import Codec
from .backends import PersistenceBackend, FileBackend, MemoryBackend
from .providers import DocumentProvider, ResidentProvider, ReadThroughProvider
from .paths import Key, Index, parse_path
from .exceptions import (
    StoreError,
    NotFoundError,
    TypeMismatchError,
    SerializationError,
    EncodeError,
    DecodeError,
    InvalidConfigError,
)

__all__ = [
    # Main API
    "Store",
    "connect",
    "StoreConfig",
    # Codec
    "Codec",
    # Backends
    "PersistenceBackend",
    "FileBackend",
    "MemoryBackend",
    # Providers
    "DocumentProvider",
    "ResidentProvider",
    "ReadThroughProvider",
    # Paths
    "Key",
    "Index",
    "parse_path",
    # Exceptions
    "StoreError",
    "NotFoundError",
    "TypeMismatchError",
    "SerializationError",
    "EncodeError",
    "DecodeError",
    "InvalidConfigError",
]

__version__ = "0.1.0"
