# ABOUTME: Tests for schema.py catalog lookups.
# ABOUTME: Verifies trimmed, case-insensitive relation matching and system relation filtering.

import pytest

from clibdb.config import ConnectionConfig
from clibdb.gateway.errors import SchemaMissingError
from clibdb.gateway.schema import require_table, table_exists
from clibdb.gateway.session import session_scope
from tests._ledger_factory import RecordingConnector


class TestTableExists:
    """Tests for table_exists function."""

    @pytest.mark.parametrize("name", ["COMPC01", "compc01", "  Compc01 "])
    def test_matches_case_insensitive(
        self, connection_config: ConnectionConfig, connector: RecordingConnector, name: str
    ) -> None:
        """Padded catalog names match trimmed, uppercased input."""
        with session_scope(connection_config, connector) as session:
            assert table_exists(session, name) is True

    def test_null_system_flag_is_user_relation(self, connection_config: ConnectionConfig, connector: RecordingConnector) -> None:
        """Relations with a null system flag count as user relations."""
        with session_scope(connection_config, connector) as session:
            assert table_exists(session, "INVE01") is True

    def test_system_relations_ignored(self, connection_config: ConnectionConfig, connector: RecordingConnector) -> None:
        """System relations are filtered out."""
        with session_scope(connection_config, connector) as session:
            assert table_exists(session, "RDB$PAGES") is False

    def test_unknown_relation(self, connection_config: ConnectionConfig, connector: RecordingConnector) -> None:
        """Unknown relations are reported missing."""
        with session_scope(connection_config, connector) as session:
            assert table_exists(session, "COMPC02") is False


class TestRequireTable:
    """Tests for require_table function."""

    def test_raises_for_missing(self, connection_config: ConnectionConfig, connector: RecordingConnector) -> None:
        """Missing relations raise SchemaMissingError naming the table."""
        with session_scope(connection_config, connector) as session:
            with pytest.raises(SchemaMissingError) as exc_info:
                require_table(session, "compc02")

        assert exc_info.value.table == "COMPC02"
        assert "COMPC02" in str(exc_info.value)
