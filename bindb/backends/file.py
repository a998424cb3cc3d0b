"""Filesystem persistence backend."""

import logging
import os
import stat
import tempfile

from .base import PersistenceBackend


logger = logging.getLogger(__name__)


class FileBackend(PersistenceBackend):
    """Filesystem persistence backend.

    Writes go to a temporary file in the target's directory, are flushed
    to disk, and then moved over the target with os.replace(). A crash
    mid-write leaves the previous file intact.

    Example:
        backend = FileBackend()
        backend.ensure_directory("data/app.bdb")
        backend.write_all("data/app.bdb", payload)
    """

    def __init__(self, fsync: bool = True):
        """Create a file backend.

        Args:
            fsync: Flush written data to disk before replacing the target
        """
        self.fsync = fsync

    def exists(self, path: str) -> bool:
        """Check if a file exists at path."""
        return os.path.isfile(path)

    def ensure_directory(self, path: str) -> None:
        """Create any missing parent directories of path."""
        directory = os.path.dirname(os.path.abspath(path))
        os.makedirs(directory, exist_ok=True)

    def read_all(self, path: str) -> bytes:
        """Read the whole file."""
        with open(path, "rb") as f:
            return f.read()

    def write_all(self, path: str, data: bytes) -> None:
        """Atomically replace the file with data."""
        directory = os.path.dirname(os.path.abspath(path))
        fd, tmp_path = tempfile.mkstemp(
            prefix=os.path.basename(path) + ".", suffix=".tmp", dir=directory
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                if self.fsync:
                    f.flush()
                    os.fsync(f.fileno())
            # mkstemp creates 0600 files; keep the target's mode
            if os.path.exists(path):
                os.chmod(tmp_path, stat.S_IMODE(os.stat(path).st_mode))
            os.replace(tmp_path, path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                logger.debug("Could not remove temp file %s", tmp_path)
            raise
        logger.debug("Wrote %d bytes to %s", len(data), path)
