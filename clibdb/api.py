"""ABOUTME: The "get purchases" operation exposed to the UI layer.
ABOUTME: Returns the normalized payload, or a single error message on any failure."""

import logging
from typing import Any

from clibdb.config import ConnectionConfig, build_connection_config
from clibdb.gateway.errors import GatewayError
from clibdb.gateway.purchases import load_purchases
from clibdb.gateway.session import Connector

logger = logging.getLogger(__name__)


def get_purchases(
    config: ConnectionConfig | None = None,
    table: str | None = None,
    connector: Connector | None = None,
) -> dict[str, Any]:
    """Fetch the purchase ledger for the UI.

    Args:
        config: Connection config. Built from settings when omitted.
        table: Purchase-ledger relation. Defaults to the configured company's table.
        connector: Optional connection factory.

    Returns:
        ``{"records", "summary", "statistics"}`` on success, ``{"error": message}`` otherwise.
    """
    try:
        if config is None:
            config = build_connection_config()
        result = load_purchases(config, table, connector)
    except GatewayError as e:
        logger.error("Could not load purchases: %s", e)
        return {"error": str(e)}
    except Exception as e:
        logger.exception("Unexpected error while loading purchases")
        return {"error": str(e)}

    return result.to_dict()
