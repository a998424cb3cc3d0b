"""Core Store class for path-addressed key-value persistence."""

import logging
import threading
from typing import Any, Callable, Dict, Iterator, List, Optional
from urllib.parse import parse_qs, urlparse

from .backends.base import PersistenceBackend
from .backends.file import FileBackend
from .backends.memory import MemoryBackend
from .codec import Codec
from .config import DEFAULT_FILE_PATH, StoreConfig
from .exceptions import EncodeError, NotFoundError, TypeMismatchError
from .paths import get_path, has_path, set_path, unset_path
from .providers import DocumentProvider, ReadThroughProvider, ResidentProvider


logger = logging.getLogger(__name__)

_MISSING = object()

# Integers outside this range are stored as floats
_INT_MIN = -(2**63)
_INT_MAX = 2**64 - 1


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class Store:
    """Embedded key-value store persisted to a single MessagePack file.

    Keys are paths: the first segment names a root key and the rest
    descends into the stored value with ``.`` for mappings and ``[n]`` for
    lists.

    Example:
        from bindb import Store, StoreConfig

        db = Store(StoreConfig(file_path="data/app.bdb"))

        db.set("user.profile.name", "ada")
        db.get("user")                    # {'profile': {'name': 'ada'}}
        db.add("user.visits", 1)          # 1
        db.push("user.tags", "admin")     # ['admin']
        db.get("user.tags[0]")            # 'admin'

        for entry in db.all():
            print(entry["ID"], entry["data"])

    Values returned by get() are the stored objects themselves in cached
    mode; mutate them only through Store operations.
    """

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        backend: Optional[PersistenceBackend] = None,
        codec: Optional[Codec] = None,
    ):
        """Create a Store.

        Use connect() for convenient URL-based construction.

        Args:
            config: Store settings; defaults to StoreConfig()
            backend: Persistence backend; defaults to FileBackend()
            codec: Document codec; defaults to Codec()
        """
        self.config = config if config is not None else StoreConfig()
        self._backend = backend if backend is not None else FileBackend()
        self._codec = codec if codec is not None else Codec()
        self._lock = threading.RLock()
        self._dirty = False

        try:
            self._backend.ensure_directory(self.config.file_path)
        except OSError as e:
            logger.warning(
                "Could not create directory for %s: %s", self.config.file_path, e
            )

        provider_cls = (
            ResidentProvider if self.config.cache_data else ReadThroughProvider
        )
        self._provider: DocumentProvider = provider_cls(
            self._backend,
            self._codec,
            self.config.file_path,
            auto_save=self.config.auto_save,
        )

    def __repr__(self) -> str:
        return (
            f"Store({self.config.file_path!r}, "
            f"auto_save={self.config.auto_save}, "
            f"cache_data={self.config.cache_data})"
        )

    # Internal helpers

    def _commit(self, document: Dict[str, Any]) -> None:
        self._provider.commit(document)
        if not self.config.auto_save and self.config.cache_data:
            self._dirty = True

    def _assign(self, document: Dict[str, Any], key: str, value: Any) -> None:
        try:
            self._codec.validate(value)
        except EncodeError as e:
            logger.warning("Cannot set %r: %s", key, e)
            return
        if set_path(document, key, value):
            self._commit(document)
        else:
            logger.warning(
                "Cannot set %r: path indexes a list with a non-integer key", key
            )

    def _sequence_at(self, document: Dict[str, Any], key: str) -> List[Any]:
        current = get_path(document, key, _MISSING)
        if current is _MISSING:
            return []
        if not isinstance(current, list):
            raise TypeMismatchError(key, list, type(current))
        return current

    # Operations

    def set(self, key: str, value: Any) -> Any:
        """Store value at key.

        Missing containers along the path are created. A value the codec
        cannot encode, or a path that would index an existing list with a
        non-integer key, is logged and ignored.

        Args:
            key: Path (e.g., "user.profile.name")
            value: Value to store

        Returns:
            The value that was set
        """
        with self._lock:
            self._assign(self._provider.document(), key, value)
            return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get the value at key.

        Args:
            key: Path (e.g., "users[1].profile.role")
            default: Value to return if the path does not resolve

        Returns:
            Stored value or default
        """
        with self._lock:
            return get_path(self._provider.document(), key, default)

    def has(self, key: str) -> bool:
        """Check whether a value exists at key."""
        with self._lock:
            return has_path(self._provider.document(), key)

    def delete(self, key: str) -> bool:
        """Delete the value at key.

        Returns:
            True if something was removed, False if key did not exist
        """
        with self._lock:
            document = self._provider.document()
            if not unset_path(document, key):
                return False
            self._commit(document)
            return True

    def add(self, key: str, amount: float) -> float:
        """Add amount to the number at key.

        A missing or non-numeric value counts as 0. Integer results outside
        the 64-bit range are stored as floats.

        Returns:
            The new value
        """
        with self._lock:
            document = self._provider.document()
            current = get_path(document, key, 0)
            if not _is_number(current):
                current = 0
            value = current + amount
            if isinstance(value, int) and not _INT_MIN <= value <= _INT_MAX:
                value = float(value)
            self._assign(document, key, value)
            return value

    def subtract(self, key: str, amount: float) -> float:
        """Subtract amount from the number at key. See add()."""
        return self.add(key, -amount)

    def push(self, key: str, value: Any) -> List[Any]:
        """Append value to the list at key, creating it if missing.

        Returns:
            The new list

        Raises:
            TypeMismatchError: If key holds something other than a list
        """
        with self._lock:
            document = self._provider.document()
            items = self._sequence_at(document, key) + [value]
            self._assign(document, key, items)
            return items

    def pull(self, key: str, predicate: Callable[[Any], bool]) -> List[Any]:
        """Remove elements of the list at key for which predicate is true.

        Remaining elements keep their order.

        Returns:
            The new list

        Raises:
            TypeMismatchError: If key holds something other than a list
        """
        with self._lock:
            document = self._provider.document()
            items = [
                item
                for item in self._sequence_at(document, key)
                if not predicate(item)
            ]
            self._assign(document, key, items)
            return items

    def all(self) -> List[Dict[str, Any]]:
        """List every root key with its value.

        Returns:
            [{"ID": root_key, "data": value}, ...] in insertion order
        """
        with self._lock:
            return [
                {"ID": key, "data": value}
                for key, value in self._provider.document().items()
            ]

    def clear(self) -> None:
        """Remove every key.

        In uncached mode the file is overwritten with an empty document
        regardless of auto_save.
        """
        with self._lock:
            self._provider.reset()
            if not self.config.auto_save and self.config.cache_data:
                self._dirty = True

    def save(self) -> bool:
        """Write the current state to the backend.

        Failures are logged, not raised.

        Returns:
            True if the write succeeded
        """
        with self._lock:
            saved = self._provider.flush()
            if saved:
                self._dirty = False
            return saved

    # Dict-like interface

    def __getitem__(self, key: str) -> Any:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise NotFoundError(key)
        return value

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        if not self.delete(key):
            raise NotFoundError(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._provider.document())

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def keys(self) -> List[str]:
        """Root keys in insertion order."""
        with self._lock:
            return list(self._provider.document())

    # Lifecycle

    def close(self) -> None:
        """Write unsaved changes when auto_save is off."""
        with self._lock:
            if self._dirty:
                self.save()

    def __enter__(self) -> "Store":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


def connect(url: str, **options: Any) -> Store:
    """Open a store using a URL.

    Supported URL schemes:
        - memory://              In-memory storage (testing)
        - bdb:///path/db.bdb     File relative to the working directory
        - bdb:////abs/db.bdb     Absolute file path

    Query parameters auto_save and cache_data accept 1/0, true/false,
    yes/no and on/off. Keyword options override the URL.

    Args:
        url: Connection URL
        **options: StoreConfig fields

    Returns:
        Store instance

    Example:
        db = connect("bdb:///data/app.bdb?auto_save=false")
        db = connect("memory://", cache_data=False)
    """
    parsed = urlparse(url)
    scheme = parsed.scheme

    if scheme == "memory":
        backend = MemoryBackend()
    elif scheme == "bdb":
        backend = FileBackend()
    else:
        raise ValueError(f"Unknown storage scheme: {scheme}")

    # Handle bdb:///relative and bdb:////absolute
    path = parsed.netloc + parsed.path
    if path.startswith("/"):
        path = path[1:]

    params = {name: values[-1] for name, values in parse_qs(parsed.query).items()}
    config = StoreConfig(file_path=path or DEFAULT_FILE_PATH).replace(
        **{**params, **options}
    )
    return Store(config, backend=backend)
