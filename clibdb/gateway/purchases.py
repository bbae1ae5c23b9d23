"""ABOUTME: Purchase-ledger queries and the mapping of their rows to normalized records.
ABOUTME: Runs pending, summary and per-series statistics queries against COMPC<NN>."""

import logging
import re
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, TypedDict

from clibdb.config import ConnectionConfig
from clibdb.gateway.normalize import normalize_date, normalize_text, parse_count, parse_int
from clibdb.gateway.schema import require_table
from clibdb.gateway.session import Connector, Session, session_scope
from clibdb.settings import settings

logger = logging.getLogger(__name__)

CANCELLED_STATUS = "C"

_TABLE_NAME = re.compile(r"^[A-Z][A-Z0-9_$]*$")

# Status may carry padding or lowercase, so compare trimmed and uppercased
_NOT_CANCELLED = f"(STATUS IS NULL OR UPPER(TRIM(STATUS)) <> '{CANCELLED_STATUS}')"

_RECORD_COLUMNS = "CVE_DOC, SERIE, ESCFD, FECHA_DOC, FECHAELAB"


class RawPurchaseRow(TypedDict):
    """Row shape of the pending and summary queries."""

    CVE_DOC: str | None
    SERIE: str | None
    ESCFD: str | None
    FECHA_DOC: date | str | None
    FECHAELAB: date | str | None


class RawStatisticsRow(TypedDict, total=False):
    """Row shape of the statistics query. TOTAL may be absent."""

    SERIE: str | None
    CON_DOCUMENTO: Any
    SIN_DOCUMENTO: Any
    TOTAL: Any


@dataclass(frozen=True)
class PurchaseRecord:
    """A normalized purchase document.

    Attributes:
        key: Document key.
        series: Document series.
        has_linked_document: Raw linked-document indicator, kept as the engine reports it.
        document_date: ISO-8601 document date, None when missing or unparsable.
        preparation_date: ISO-8601 preparation date, None when missing or unparsable.
    """

    key: str
    series: str
    has_linked_document: str
    document_date: str | None
    preparation_date: str | None


@dataclass(frozen=True)
class SeriesStatistics:
    """Linked/unlinked document counts for one series."""

    series: str
    with_document: int
    without_document: int
    total: int


@dataclass(frozen=True)
class QueryResultSet:
    """Everything one fetch returns to the caller."""

    records: tuple[PurchaseRecord, ...]
    summary: tuple[PurchaseRecord, ...]
    statistics: tuple[SeriesStatistics, ...]

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """JSON-ready payload with ``records``, ``summary`` and ``statistics`` keys."""
        return {
            "records": [asdict(r) for r in self.records],
            "summary": [asdict(r) for r in self.summary],
            "statistics": [asdict(s) for s in self.statistics],
        }


def pending_sql(table: str) -> str:
    """Rows without a linked document that aren't cancelled."""
    return f"SELECT {_RECORD_COLUMNS} FROM {table} WHERE ESCFD IS NULL AND {_NOT_CANCELLED} ORDER BY CVE_DOC"  # noqa: S608


def summary_sql(table: str) -> str:
    """All rows that aren't cancelled."""
    return f"SELECT {_RECORD_COLUMNS} FROM {table} WHERE {_NOT_CANCELLED} ORDER BY CVE_DOC"  # noqa: S608


def statistics_sql(table: str) -> str:
    """Per-series linked/unlinked counts over rows that aren't cancelled."""
    return (
        "SELECT SERIE, "
        "SUM(CASE WHEN ESCFD IS NOT NULL THEN 1 ELSE 0 END) AS CON_DOCUMENTO, "
        "SUM(CASE WHEN ESCFD IS NULL THEN 1 ELSE 0 END) AS SIN_DOCUMENTO, "
        "COUNT(*) AS TOTAL "
        f"FROM {table} WHERE {_NOT_CANCELLED} "  # noqa: S608
        "GROUP BY SERIE ORDER BY SERIE"
    )


def to_purchase_record(row: RawPurchaseRow) -> PurchaseRecord:
    """Map a pending/summary row to a PurchaseRecord."""
    return PurchaseRecord(
        key=normalize_text(row.get("CVE_DOC")),
        series=normalize_text(row.get("SERIE")),
        has_linked_document=normalize_text(row.get("ESCFD")),
        document_date=normalize_date(row.get("FECHA_DOC")),
        preparation_date=normalize_date(row.get("FECHAELAB")),
    )


def to_series_statistics(row: RawStatisticsRow) -> SeriesStatistics:
    """Map a statistics row to SeriesStatistics.

    The engine-supplied TOTAL wins when it parses; otherwise the total is the
    sum of the two counts.

    Examples:
        >>> to_series_statistics({"SERIE": "A", "CON_DOCUMENTO": "3", "SIN_DOCUMENTO": "2"})
        SeriesStatistics(series='A', with_document=3, without_document=2, total=5)
    """
    with_document = parse_count(row.get("CON_DOCUMENTO"))
    without_document = parse_count(row.get("SIN_DOCUMENTO"))
    total = parse_int(row.get("TOTAL"))
    if total is None or total < 0:
        total = with_document + without_document
    return SeriesStatistics(
        series=normalize_text(row.get("SERIE")),
        with_document=with_document,
        without_document=without_document,
        total=total,
    )


def _check_table_name(table: str) -> str:
    name = table.strip().upper()
    # Table names are interpolated into SQL, so only plain identifiers pass
    if not _TABLE_NAME.match(name):
        raise ValueError(f"Invalid table name: {table!r}")
    return name


def fetch_purchases(session: Session, table: str | None = None) -> QueryResultSet:
    """Run the purchase-ledger queries on an open session.

    The table is checked first; the three queries then run in order and the
    first failure aborts the rest.

    Args:
        session: Open session.
        table: Purchase-ledger relation name. Defaults to the configured company's table.

    Returns:
        Normalized pending records, summary records and per-series statistics.

    Raises:
        SchemaMissingError: If the table doesn't exist.
        QueryError: If any query fails.
    """
    table = _check_table_name(table or settings.purchases_table)
    require_table(session, table)

    pending = session.query(pending_sql(table))
    summary = session.query(summary_sql(table))
    statistics = session.query(statistics_sql(table))

    logger.info(
        "Fetched %d pending, %d summary and %d series rows from %s",
        len(pending),
        len(summary),
        len(statistics),
        table,
    )

    return QueryResultSet(
        records=tuple(to_purchase_record(row) for row in pending),  # type: ignore[arg-type]
        summary=tuple(to_purchase_record(row) for row in summary),  # type: ignore[arg-type]
        statistics=tuple(to_series_statistics(row) for row in statistics),  # type: ignore[arg-type]
    )


def load_purchases(
    config: ConnectionConfig,
    table: str | None = None,
    connector: Connector | None = None,
) -> QueryResultSet:
    """Open a session, fetch the purchase ledger and close the session.

    Args:
        config: Connection config.
        table: Purchase-ledger relation name. Defaults to the configured company's table.
        connector: Optional connection factory, see ``open_session``.

    Returns:
        The fetched result set.
    """
    with session_scope(config, connector) as session:
        return fetch_purchases(session, table)
