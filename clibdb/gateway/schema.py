"""ABOUTME: Checks that expected relations exist before business queries run.
ABOUTME: Looks names up in the engine's RDB$RELATIONS catalog, ignoring system relations."""

from clibdb.gateway.errors import SchemaMissingError
from clibdb.gateway.session import Session

_TABLE_EXISTS_SQL = """
SELECT 1
FROM RDB$RELATIONS
WHERE COALESCE(RDB$SYSTEM_FLAG, 0) = 0
  AND TRIM(RDB$RELATION_NAME) = ?
"""


def table_exists(session: Session, table: str) -> bool:
    """Check whether a user relation exists.

    Args:
        session: Open session.
        table: Relation name, compared trimmed and uppercased.

    Returns:
        True if the catalog lists the relation.

    Raises:
        QueryError: If the catalog query fails.
    """
    rows = session.query(_TABLE_EXISTS_SQL, (table.strip().upper(),))
    return len(rows) > 0


def require_table(session: Session, table: str) -> None:
    """Raise SchemaMissingError unless the relation exists."""
    if not table_exists(session, table):
        raise SchemaMissingError(table.strip().upper())
