"""ABOUTME: Tests for the logs module.
ABOUTME: Verifies the YAML logging configuration is applied."""

import logging
from pathlib import Path

from clibdb.logs import init_logging
from clibdb.settings import settings


class TestInitLogging:
    """Tests for init_logging function."""

    def test_bundled_config(self) -> None:
        """The bundled configuration sets the package logger to INFO."""
        config = init_logging(settings.log_config_path)

        assert config["loggers"]["clibdb"]["level"] == "INFO"
        assert logging.getLogger("clibdb").level == logging.INFO

    def test_verbose(self, tmp_path: Path) -> None:
        """Verbose mode lowers the package logger to DEBUG."""
        path = tmp_path / "logging.yml"
        path.write_text("version: 1\ndisable_existing_loggers: false\n")

        config = init_logging(path, verbose=True)

        assert config["loggers"]["clibdb"]["level"] == "DEBUG"
        assert logging.getLogger("clibdb").level == logging.DEBUG
