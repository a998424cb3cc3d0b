"""Configuration for bindb stores."""

import dataclasses
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .exceptions import InvalidConfigError


DEFAULT_FILE_PATH = "database.bdb"
ENV_PREFIX = "BINDB_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_bool(value: Any, name: str = "value") -> bool:
    """Interpret a flag given as a bool or as a string like "yes"/"off".

    Raises:
        InvalidConfigError: If the value is not a recognised flag
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise InvalidConfigError(f"Invalid boolean for {name}: {value!r}")


@dataclass(frozen=True)
class StoreConfig:
    """Settings for a Store.

    Attributes:
        file_path: Location of the persisted document
        auto_save: Persist after every mutating operation
        cache_data: Keep the document resident in memory; when False every
            operation re-reads the file
    """

    file_path: str = DEFAULT_FILE_PATH
    auto_save: bool = True
    cache_data: bool = True

    def __post_init__(self):
        if not self.file_path:
            raise InvalidConfigError("file_path must not be empty")

    def replace(self, **changes: Any) -> "StoreConfig":
        """Return a copy with the given fields changed.

        Flag fields accept the same string forms as from_env().
        """
        for name in ("auto_save", "cache_data"):
            if name in changes:
                changes[name] = parse_bool(changes[name], name)
        if "file_path" in changes:
            changes["file_path"] = os.fspath(changes["file_path"])
        try:
            return dataclasses.replace(self, **changes)
        except TypeError as e:
            raise InvalidConfigError(str(e)) from e

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        prefix: str = ENV_PREFIX,
    ) -> "StoreConfig":
        """Load settings from environment variables.

        Reads {prefix}FILE_PATH, {prefix}AUTO_SAVE and {prefix}CACHE_DATA;
        unset variables keep their defaults.
        """
        if environ is None:
            environ = os.environ

        changes = {}
        for field in dataclasses.fields(cls):
            raw = environ.get(prefix + field.name.upper())
            if raw is not None:
                changes[field.name] = raw
        return cls().replace(**changes)


__all__ = ["StoreConfig", "DEFAULT_FILE_PATH", "parse_bool"]
