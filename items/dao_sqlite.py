import asyncio
import json
import logging
import sqlite3
from typing import Any, List, Optional

from database.errors import MalformedRecord, StoreError
from database.utils import ConnectionProvider
from items.dao import ItemsDao
from items.models import Item
from items.utils import format_item

logger = logging.getLogger(__name__)


def row_to_document(row: sqlite3.Row) -> dict:
    try:
        document = json.loads(row["extra"]) if row["extra"] else {}
    except json.JSONDecodeError as e:
        logger.error(f"Malformed extra fields for item {row['id']}: {e}")
        raise MalformedRecord(f"Item {row['id']} has unreadable extra fields") from e
    if not isinstance(document, dict):
        logger.error(f"Extra fields for item {row['id']} are not an object")
        raise MalformedRecord(f"Item {row['id']} extra fields must be a JSON object")
    document.update({"_id": row["id"], "itemDescription": row["itemDescription"], "upc": row["upc"]})
    return document


class SqliteItemsDao(ItemsDao):
    """Items stored in an ``items`` table; extra catalog fields live in a JSON ``extra`` column."""

    def __init__(self, provider: ConnectionProvider):
        self.provider = provider
        # one sqlite3 connection is shared, so statements run one at a time
        self._lock = asyncio.Lock()

    async def _fetch(self, sql: str, params: tuple) -> List[sqlite3.Row]:
        conn = await self.provider.get_handle()
        async with self._lock:
            try:
                return await asyncio.to_thread(lambda: conn.execute(sql, params).fetchall())
            except sqlite3.Error as e:
                logger.error(f"Error querying SQLite: {e}", exc_info=True)
                raise StoreError(str(e)) from e

    async def get_by_id(self, item_id: str) -> Optional[Item]:
        rows = await self._fetch("SELECT * FROM items WHERE id = ?", (str(item_id),))
        return format_item(row_to_document(rows[0])) if rows else None

    async def search_by_description(self, partial_text: str) -> List[Item]:
        rows = await self._fetch(
            "SELECT * FROM items WHERE instr(casefold(itemDescription), casefold(?)) > 0",
            (str(partial_text),),
        )
        logger.info(f"Retrieved {len(rows)} items matching description {partial_text!r}.")
        return [format_item(row_to_document(row)) for row in rows]

    async def get_by_upc(self, code: Any) -> Optional[Item]:
        rows = await self._fetch("SELECT * FROM items WHERE upc = ? LIMIT 1", (str(code),))
        return format_item(row_to_document(rows[0])) if rows else None
