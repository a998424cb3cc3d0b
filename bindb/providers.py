"""Document providers: where the Store gets its document from.

The Store engine is the same in both operating modes; only the provider
differs.

    ResidentProvider      cached mode, document loaded once and kept in memory
    ReadThroughProvider   uncached mode, document re-read from the file on
                          every operation
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict

from .backends.base import PersistenceBackend
from .codec import Codec
from .exceptions import DecodeError, EncodeError


logger = logging.getLogger(__name__)

Document = Dict[str, Any]


class DocumentProvider(ABC):
    """Sources and persists the document for a Store.

    Args:
        backend: Persistence backend holding the file
        codec: Document codec
        path: File location within the backend
        auto_save: Whether commit() writes to the backend
    """

    def __init__(
        self,
        backend: PersistenceBackend,
        codec: Codec,
        path: str,
        auto_save: bool = True,
    ):
        self.backend = backend
        self.codec = codec
        self.path = path
        self.auto_save = auto_save

    @abstractmethod
    def document(self) -> Document:
        """Return the document an operation should act on."""
        pass

    @abstractmethod
    def commit(self, document: Document) -> None:
        """Record a mutated document, persisting it if auto_save is on."""
        pass

    @abstractmethod
    def flush(self) -> bool:
        """Persist the current state unconditionally.

        Returns:
            True if the write succeeded
        """
        pass

    @abstractmethod
    def reset(self) -> None:
        """Replace the document with an empty one."""
        pass

    def _read(self) -> Document:
        """Read and decode the file. A missing file is an empty document.

        Raises:
            OSError: If the file cannot be read
            DecodeError: If the file contents are not a valid document
        """
        if not self.backend.exists(self.path):
            return {}
        return self.codec.decode(self.backend.read_all(self.path))

    def _write(self, document: Document) -> bool:
        """Encode and write the document, logging instead of raising."""
        try:
            data = self.codec.encode(document)
            self.backend.write_all(self.path, data)
        except (OSError, EncodeError) as e:
            logger.warning("Error saving database %s: %s", self.path, e)
            return False
        return True


class ResidentProvider(DocumentProvider):
    """Keeps the document in memory for the provider's lifetime.

    The file is read once at construction. A missing, empty, unreadable or
    undecodable file yields an empty document that is written back
    immediately, replacing whatever was there.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._document = self._load()

    def _load(self) -> Document:
        try:
            if self.backend.exists(self.path):
                data = self.backend.read_all(self.path)
                if data:
                    document = self.codec.decode(data)
                    logger.debug(
                        "Loaded %d keys from %s", len(document), self.path
                    )
                    return document
        except (OSError, DecodeError) as e:
            logger.warning(
                "Error loading database %s, starting empty: %s", self.path, e
            )

        document = {}
        self._write(document)
        return document

    def document(self) -> Document:
        return self._document

    def commit(self, document: Document) -> None:
        self._document = document
        if self.auto_save:
            self._write(document)

    def flush(self) -> bool:
        return self._write(self._document)

    def reset(self) -> None:
        self.commit({})


class ReadThroughProvider(DocumentProvider):
    """Re-reads the whole file for every operation.

    Each operation sees the latest persisted state, including writes made
    by other processes. The file is created with an empty document at
    construction if it does not exist yet.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if not self.backend.exists(self.path):
            self._write({})

    def document(self) -> Document:
        try:
            return self._read()
        except (OSError, DecodeError) as e:
            logger.warning(
                "Error reading database %s, using empty document: %s",
                self.path,
                e,
            )
            return {}

    def commit(self, document: Document) -> None:
        if self.auto_save:
            self._write(document)

    def flush(self) -> bool:
        try:
            document = self._read()
        except (OSError, DecodeError) as e:
            logger.warning("Error reading database %s: %s", self.path, e)
            return False
        return self._write(document)

    def reset(self) -> None:
        self._write({})


__all__ = [
    "DocumentProvider",
    "ResidentProvider",
    "ReadThroughProvider",
]
