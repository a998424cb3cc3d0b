"""Abstract base class for persistence backends."""

from abc import ABC, abstractmethod


class PersistenceBackend(ABC):
    """Abstract base class for persistence backends.

    A backend moves whole files of bytes; it knows nothing about the
    document inside them. The Store and its document provider handle
    encoding, caching and the public API.
    """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if a file exists at path.

        Args:
            path: File location

        Returns:
            True if the file exists
        """
        pass

    @abstractmethod
    def ensure_directory(self, path: str) -> None:
        """Create any missing parent directories of path.

        Args:
            path: File location whose parents should exist
        """
        pass

    @abstractmethod
    def read_all(self, path: str) -> bytes:
        """Read the whole file.

        Args:
            path: File location

        Returns:
            File contents

        Raises:
            FileNotFoundError: If no file exists at path
            OSError: On other read failures
        """
        pass

    @abstractmethod
    def write_all(self, path: str, data: bytes) -> None:
        """Create or replace the whole file.

        Callers either see the previous contents or the new contents,
        never a partial write.

        Args:
            path: File location
            data: New contents

        Raises:
            OSError: On write failures (permission denied, disk full, ...)
        """
        pass
