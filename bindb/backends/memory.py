"""In-memory persistence backend for testing."""

import errno
import os
from typing import Dict

from .base import PersistenceBackend


class MemoryBackend(PersistenceBackend):
    """In-memory persistence backend.

    Useful for testing and temporary stores. Files live in a dict and are
    lost when the backend is garbage collected.

    Example:
        backend = MemoryBackend()
        backend.write_all("db.bdb", b"\\x80")
        backend.read_all("db.bdb")  # b'\\x80'

    Attributes:
        fail_writes: When True, write_all raises OSError without touching
            stored contents
        writes: Number of successful write_all calls
    """

    def __init__(self):
        self._files: Dict[str, bytes] = {}
        self.fail_writes = False
        self.writes = 0

    def exists(self, path: str) -> bool:
        """Check if a file exists at path."""
        return path in self._files

    def ensure_directory(self, path: str) -> None:
        """Directories are implicit in memory."""
        pass

    def read_all(self, path: str) -> bytes:
        """Read the whole file."""
        try:
            return self._files[path]
        except KeyError:
            raise FileNotFoundError(
                errno.ENOENT, os.strerror(errno.ENOENT), path
            ) from None

    def write_all(self, path: str, data: bytes) -> None:
        """Create or replace the whole file."""
        if self.fail_writes:
            raise OSError(errno.EIO, os.strerror(errno.EIO), path)
        self._files[path] = bytes(data)
        self.writes += 1
