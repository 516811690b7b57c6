from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from ..common.logging import get_logger
from .connection import DatabaseConnection

logger = get_logger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, snapshot: bool = False):
    """Yield (connection, cursor) inside one transaction.

    With ``snapshot`` every statement reads the same consistent view, so a
    COUNT and the page it describes cannot disagree.
    """
    conn = conn_factory.connect()
    try:
        if snapshot:
            conn.start_transaction(consistent_snapshot=True, readonly=True)
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception as exc:
        logger.warning("db_transaction_rolled_back", error=type(exc).__name__)
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])
