"""ABOUTME: Tests for the config module.
ABOUTME: Verifies connection config construction from settings and YAML profiles."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from clibdb.config import ConnectionConfig, build_connection_config, load_connection_config
from clibdb.settings import Settings


class TestConnectionConfig:
    """Tests for ConnectionConfig class."""

    def test_defaults(self, tmp_path: Path) -> None:
        """Defaults match the engine's stock installation."""
        config = ConnectionConfig(database_path=tmp_path / "db.fdb")

        assert config.host == "127.0.0.1"
        assert config.port == 3050
        assert config.user == "SYSDBA"
        assert config.password == "masterkey"
        assert config.page_size == 4096
        assert config.case_sensitive_keys is True
        assert config.role is None

    def test_immutable(self, tmp_path: Path) -> None:
        """Config can't be changed after construction."""
        config = ConnectionConfig(database_path=tmp_path / "db.fdb")

        with pytest.raises(ValidationError):
            config.port = 1234  # type: ignore[misc]


class TestBuildConnectionConfig:
    """Tests for build_connection_config function."""

    def test_uses_settings(self, tmp_path: Path) -> None:
        """Settings values and the resolved path flow into the config."""
        db_path = tmp_path / "db.fdb"
        db_path.write_bytes(b"")
        config = build_connection_config(Settings(HOST="erp-server", PORT=3051, USER="reader", DATABASE_PATH=db_path))

        assert config.host == "erp-server"
        assert config.port == 3051
        assert config.user == "reader"
        assert config.database_path == db_path

    def test_settings_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """CLIB_* environment variables override the defaults."""
        monkeypatch.setenv("CLIB_PORT", "3052")
        monkeypatch.setenv("CLIB_COMPANY", "02")

        config = Settings()

        assert config.PORT == 3052
        assert config.purchases_table == "COMPC02"


class TestLoadConnectionConfig:
    """Tests for load_connection_config function."""

    def test_load_missing_file(self, tmp_path: Path) -> None:
        """Missing profile raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_connection_config(tmp_path / "nonexistent.yml")

    def test_load_valid_profile(self, tmp_path: Path) -> None:
        """Valid YAML profile is parsed correctly."""
        profile = tmp_path / "connection.yml"
        profile.write_text("""
host: "10.0.0.5"
port: 3050
database_path: "/data/SAE90EMPRE01.FDB"
user: "SYSDBA"
password: "secret"
role: "READER"
""")

        config = load_connection_config(profile)

        assert config.host == "10.0.0.5"
        assert config.database_path == Path("/data/SAE90EMPRE01.FDB")
        assert config.role == "READER"
