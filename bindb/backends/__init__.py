"""Persistence backends for bindb."""

from .base import PersistenceBackend
from .file import FileBackend
from .memory import MemoryBackend

__all__ = [
    "PersistenceBackend",
    "FileBackend",
    "MemoryBackend",
]
