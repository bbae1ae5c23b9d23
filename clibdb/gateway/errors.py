"""ABOUTME: Exception types raised by the database gateway.
ABOUTME: All of them derive from GatewayError so callers can collapse them into one message."""


class GatewayError(Exception):
    """Base class for failures while reading the ERP database."""


class DatabaseConnectionError(GatewayError):
    """The database file is missing, the engine is unreachable or credentials were rejected."""


class QueryError(GatewayError):
    """The engine reported a failure while running a statement."""


class SchemaMissingError(GatewayError):
    """An expected relation does not exist in the database."""

    def __init__(self, table: str) -> None:
        self.table = table
        super().__init__(f"Table {table} not found in database. Check that the company database is the right one.")
