"""Database schema DDL definitions and initialization utilities.

Tables:
  - kv_store: JSON documents addressed by namespaced string keys (preferences,
    rates, expenses, budgets, cash wallet, quick conversions, trip settings)
  - metadata: key/value bookkeeping (schema version)
"""

from __future__ import annotations
import sqlite3
from typing import Sequence
from pathlib import Path

BASIC_UTC_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"

KV_STORE_DDL = f"""
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL, -- JSON document
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

METADATA_DDL = f"""
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

DDL_ORDER: Sequence[str] = (
    KV_STORE_DDL,
    METADATA_DDL,
)


def init_db(path: Path) -> None:
    """Create all tables idempotently.

    Parameters
    ----------
    path: Path to SQLite database file.
    """
    conn = sqlite3.connect(path)
    try:
        cur = conn.cursor()
        for ddl in DDL_ORDER:
            cur.execute(ddl)
        conn.commit()
    finally:
        conn.close()
