"""Tests for StoreConfig and connect()."""

import os

import pytest

from bindb import (
    FileBackend,
    InvalidConfigError,
    MemoryBackend,
    ReadThroughProvider,
    ResidentProvider,
    StoreConfig,
    connect,
)
from bindb.config import parse_bool


class TestStoreConfig:
    """Tests for StoreConfig."""

    def test_defaults(self):
        """Defaults match the documented behaviour."""
        config = StoreConfig()
        assert config.file_path == "database.bdb"
        assert config.auto_save is True
        assert config.cache_data is True

    def test_replace(self):
        """replace() returns a modified copy."""
        config = StoreConfig()
        changed = config.replace(auto_save="off", file_path="x.bdb")
        assert changed.auto_save is False
        assert changed.file_path == "x.bdb"
        assert config.auto_save is True

    def test_replace_unknown_field(self):
        """Unknown fields are rejected."""
        with pytest.raises(InvalidConfigError):
            StoreConfig().replace(compression=True)

    def test_empty_path_rejected(self):
        """file_path must not be empty."""
        with pytest.raises(InvalidConfigError):
            StoreConfig(file_path="")

    def test_from_env(self):
        """Environment variables override defaults."""
        config = StoreConfig.from_env(
            {
                "BINDB_FILE_PATH": "/data/app.bdb",
                "BINDB_AUTO_SAVE": "false",
                "UNRELATED": "1",
            }
        )
        assert config.file_path == "/data/app.bdb"
        assert config.auto_save is False
        assert config.cache_data is True

    def test_from_env_invalid(self):
        """Unparseable flags raise InvalidConfigError."""
        with pytest.raises(InvalidConfigError):
            StoreConfig.from_env({"BINDB_CACHE_DATA": "maybe"})

    def test_invalid_config_is_value_error(self):
        """InvalidConfigError is a ValueError."""
        with pytest.raises(ValueError):
            parse_bool("sometimes")

    @pytest.mark.parametrize(
        "raw,expected",
        [("1", True), ("Yes", True), ("ON", True), ("0", False), (" no ", False), (False, False)],
    )
    def test_parse_bool(self, raw, expected):
        """Flag strings are case-insensitive."""
        assert parse_bool(raw) is expected


class TestConnect:
    """Tests for connect() function."""

    def test_memory_url(self):
        """memory:// uses an in-memory backend."""
        db = connect("memory://")
        assert isinstance(db._backend, MemoryBackend)
        assert db.config.file_path == "database.bdb"
        db.set("a", 1)
        assert db.get("a") == 1

    def test_relative_file_url(self, tmp_path, monkeypatch):
        """bdb:///name is relative to the working directory."""
        monkeypatch.chdir(tmp_path)
        db = connect("bdb:///data/app.bdb")
        assert isinstance(db._backend, FileBackend)
        assert db.config.file_path == "data/app.bdb"
        assert (tmp_path / "data" / "app.bdb").exists()

    def test_absolute_file_url(self, tmp_path):
        """bdb:////abs/path keeps the absolute path."""
        path = os.path.join(str(tmp_path), "abs.bdb")
        db = connect(f"bdb:///{path}")
        assert db.config.file_path == path
        assert os.path.exists(path)

    def test_query_options(self):
        """Query parameters set mode flags."""
        db = connect("memory://?auto_save=false&cache_data=0")
        assert db.config.auto_save is False
        assert db.config.cache_data is False
        assert isinstance(db._provider, ReadThroughProvider)

    def test_keyword_overrides(self):
        """Keyword options win over the URL."""
        db = connect("memory://?cache_data=false", cache_data=True)
        assert isinstance(db._provider, ResidentProvider)

    def test_unknown_scheme(self):
        """Unknown scheme raises ValueError."""
        with pytest.raises(ValueError):
            connect("unknown://localhost")

    def test_invalid_option(self):
        """Bad option values raise InvalidConfigError."""
        with pytest.raises(InvalidConfigError):
            connect("memory://?auto_save=perhaps")
