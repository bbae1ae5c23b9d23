"""ABOUTME: Configuration logic and path settings for the project.
ABOUTME: Reads connection defaults and installation paths from CLIB_* environment variables."""

from pathlib import Path

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from clibdb import __version__


def _get_project_root() -> Path:
    """Find project root by looking for pyproject.toml."""
    current = Path(__file__).resolve().parent
    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    return Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Contains settings for this project."""

    model_config = SettingsConfigDict(env_prefix="CLIB_", env_file=".env", extra="ignore")

    VERSION: str = __version__
    """Project version."""

    PROJECT_ROOT: Path = _get_project_root()
    """Root directory of the project."""

    HOST: str = "127.0.0.1"
    """Firebird server host."""

    PORT: int = 3050
    """Firebird server port."""

    USER: str = "SYSDBA"
    """Database user."""

    PASSWORD: str = "masterkey"
    """Database password."""

    ROLE: str | None = None
    """Optional SQL role for the session."""

    PAGE_SIZE: int = 4096
    """Database page size."""

    CHARSET: str | None = None
    """Connection character set, engine default when unset."""

    DATABASE_PATH: Path | None = None
    """Explicit database file. Takes priority over the installation scan when it exists."""

    INSTALL_ROOT: Path = Path(r"C:\Program Files (x86)\Common Files\Aspel\Sistemas Aspel")
    """Directory holding one folder per installed ERP version (e.g. SAE8.00, SAE9.00)."""

    VERSION_PREFIX: str = "SAE"
    """Prefix of the version folder names and of the database file names."""

    REFERENCE_VERSION: str = "8.0"
    """Oldest supported version. Also used to build the fallback database path."""

    COMPANY: str = "01"
    """Company number, part of both the database file name and the table names."""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def purchases_table(self) -> str:
        """Name of the purchase-ledger relation for the configured company."""
        return f"COMPC{self.COMPANY}"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def configs_dir(self) -> Path:
        """Directory containing configuration files."""
        return self.PROJECT_ROOT / "configs"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def log_config_path(self) -> Path:
        """Path to the logging.yml configuration file."""
        return self.configs_dir / "logging.yml"


settings = Settings()
