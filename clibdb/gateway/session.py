"""ABOUTME: Short-lived sessions against the Firebird engine.
ABOUTME: Every logical operation opens its own session and closes it on every exit path."""

import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from clibdb.config import ConnectionConfig
from clibdb.gateway.errors import DatabaseConnectionError, QueryError

logger = logging.getLogger(__name__)

Connector = Callable[[ConnectionConfig], Any]
"""Callable returning a DB-API connection for a config."""


def connect_firebird(config: ConnectionConfig) -> Any:
    """Open a Firebird connection with firebird-driver."""
    # Deferred so the fbclient bindings only load when a real engine is used
    from firebird.driver import connect  # noqa: PLC0415

    return connect(
        config.dsn,
        user=config.user,
        password=config.password,
        role=config.role,
        charset=config.charset,
    )


class Session:
    """One open connection, scoped to a single logical operation."""

    def __init__(self, connection: Any) -> None:
        self._connection = connection

    @property
    def closed(self) -> bool:
        """Whether the session has released its connection."""
        return self._connection is None

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        """Run one statement and return its rows.

        Args:
            sql: Statement with ``?`` placeholders.
            params: Placeholder values.

        Returns:
            List of dicts, one per row, keyed by column name as reported by the engine.

        Raises:
            QueryError: If the session is closed or the engine rejects the statement.
        """
        if self._connection is None:
            raise QueryError("Session is closed")

        cursor = self._connection.cursor()
        try:
            cursor.execute(sql, tuple(params))
            if cursor.description is None:
                return []
            column_names = [desc[0] for desc in cursor.description]
            rows = cursor.fetchall()
        except Exception as e:
            raise QueryError(str(e)) from e
        finally:
            cursor.close()

        return [dict(zip(column_names, row, strict=True)) for row in rows]

    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        if self._connection is None:
            return
        connection, self._connection = self._connection, None
        try:
            connection.close()
        except Exception:
            logger.warning("Error while closing database connection", exc_info=True)


def open_session(config: ConnectionConfig, connector: Connector | None = None) -> Session:
    """Open a session against the configured database.

    Args:
        config: Connection config.
        connector: Optional connection factory. Defaults to firebird-driver.

    Returns:
        An open Session. The caller owns it and must close it.

    Raises:
        DatabaseConnectionError: If the database file is missing or the engine refuses the connection.
    """
    if not config.database_path.exists():
        raise DatabaseConnectionError(f"Database not found: {config.database_path}")

    if connector is None:
        connector = connect_firebird

    try:
        connection = connector(config)
    except Exception as e:
        raise DatabaseConnectionError(f"Could not connect to {config.dsn}: {e}") from e

    logger.debug("Opened session on %s", config.database_path)
    return Session(connection)


@contextmanager
def session_scope(config: ConnectionConfig, connector: Connector | None = None) -> Iterator[Session]:
    """Open a session for the duration of a ``with`` block.

    The session is closed however the block exits.
    """
    session = open_session(config, connector)
    try:
        yield session
    finally:
        session.close()
        logger.debug("Closed session on %s", config.database_path)
