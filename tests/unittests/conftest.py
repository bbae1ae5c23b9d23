"""Contains configurations for the test run."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from clibdb.config import ConnectionConfig
from tests._ledger_factory import RecordingConnector, create_ledger


@pytest.fixture
def ledger_db(tmp_path: Path) -> Path:
    """A populated ledger database file."""
    return create_ledger(tmp_path / "SAE90EMPRE01.FDB")


@pytest.fixture
def connection_config(ledger_db: Path) -> ConnectionConfig:
    """Connection config pointing at the ledger database."""
    return ConnectionConfig(database_path=ledger_db)


@pytest.fixture
def connector() -> RecordingConnector:
    """Recording SQLite connector."""
    return RecordingConnector()


@pytest.fixture
def make_ledger(tmp_path: Path) -> Callable[..., ConnectionConfig]:
    """Factory building ledger databases with custom catalog and purchase rows."""

    def _make(
        catalog: list[tuple[Any, ...]] | None = None,
        purchases: list[tuple[Any, ...]] | None = None,
        name: str = "custom.FDB",
    ) -> ConnectionConfig:
        return ConnectionConfig(database_path=create_ledger(tmp_path / name, catalog, purchases))

    return _make
