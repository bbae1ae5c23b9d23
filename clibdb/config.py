"""ABOUTME: Connection configuration for the Firebird database.
ABOUTME: Builds an immutable ConnectionConfig from settings or from a YAML profile."""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict

from clibdb.gateway.locator import resolve_database_path
from clibdb.settings import Settings, settings


class ConnectionConfig(BaseModel):
    """Everything needed to open a session against the database."""

    model_config = ConfigDict(frozen=True)

    host: str = "127.0.0.1"
    port: int = 3050
    database_path: Path
    user: str = "SYSDBA"
    password: str = "masterkey"
    case_sensitive_keys: bool = True
    role: str | None = None
    page_size: int = 4096
    charset: str | None = None

    @property
    def dsn(self) -> str:
        """Remote connection string in the ``host/port:path`` form."""
        return f"{self.host}/{self.port}:{self.database_path}"


def build_connection_config(config: Settings | None = None) -> ConnectionConfig:
    """Build the connection config from project settings.

    The database path is resolved through the installation locator.

    Args:
        config: Settings to read. Defaults to the global settings.

    Returns:
        Immutable connection config.
    """
    if config is None:
        config = settings

    return ConnectionConfig(
        host=config.HOST,
        port=config.PORT,
        database_path=resolve_database_path(config),
        user=config.USER,
        password=config.PASSWORD,
        role=config.ROLE,
        page_size=config.PAGE_SIZE,
        charset=config.CHARSET,
    )


def load_connection_config(config_path: Path) -> ConnectionConfig:
    """Load a connection profile from a YAML file.

    Args:
        config_path: Path to the YAML profile.

    Returns:
        Parsed ConnectionConfig object.

    Raises:
        FileNotFoundError: If the profile doesn't exist.
        ValueError: If the profile is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Connection profile not found: {config_path}")

    with config_path.open() as f:
        raw_config = yaml.safe_load(f)

    return ConnectionConfig.model_validate(raw_config)
