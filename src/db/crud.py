from __future__ import annotations

import sqlite3
from typing import List, Optional

import aiosqlite

from db.database import connect
from shop.errors import StorageUnavailable

# ---------------------------
# Key/value entries
# ---------------------------

_STORAGE_ERRORS = (aiosqlite.Error, sqlite3.Error, OSError)


async def get_entry(key: str) -> Optional[str]:
    """Return the stored string for key, or None if nothing is stored."""
    try:
        async with connect() as conn:
            cur = await conn.execute("SELECT value FROM kv_store WHERE key = ?;", (key,))
            row = await cur.fetchone()
            await cur.close()
    except _STORAGE_ERRORS as e:
        raise StorageUnavailable(f"cannot read '{key}': {e}") from e
    return row[0] if row else None


async def put_entry(key: str, value: str) -> None:
    """Insert or replace the string stored under key."""
    try:
        async with connect() as conn:
            await conn.execute(
                """
                INSERT INTO kv_store(key, value) VALUES(?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value;
                """,
                (key, value),
            )
            await conn.commit()
    except _STORAGE_ERRORS as e:
        raise StorageUnavailable(f"cannot write '{key}': {e}") from e


async def delete_entry(key: str) -> bool:
    """Remove key. True if something was deleted."""
    try:
        async with connect() as conn:
            cur = await conn.execute("DELETE FROM kv_store WHERE key = ?;", (key,))
            deleted = cur.rowcount
            await cur.close()
            await conn.commit()
    except _STORAGE_ERRORS as e:
        raise StorageUnavailable(f"cannot delete '{key}': {e}") from e
    return deleted > 0


async def list_keys() -> List[str]:
    try:
        async with connect() as conn:
            cur = await conn.execute("SELECT key FROM kv_store ORDER BY key;")
            rows = await cur.fetchall()
            await cur.close()
    except _STORAGE_ERRORS as e:
        raise StorageUnavailable(f"cannot list keys: {e}") from e
    return [row[0] for row in rows]
