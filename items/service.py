import logging
from typing import Any

from database.errors import NotFound
from database.utils import ConnectionProvider
from items.dao import ItemsDao
from items.dao_mongodb import MongoItemsDao
from items.dao_sqlite import SqliteItemsDao
from items.models import Envelope
from items.utils import serialize

logger = logging.getLogger(__name__)


class ItemLookupService:
    """Turns ``ItemsDao`` results into ``{data, statusCode}`` envelopes.

    A miss is reported two ways on purpose. ``find_by_id`` is a lookup of a
    record that should exist, so a miss raises ``NotFound``. The description
    and UPC lookups are searches, so a miss is a normal envelope with status
    404. ``StoreError``, ``NotReady`` and ``MalformedRecord`` propagate from
    all three.
    """

    def __init__(self, dao: ItemsDao):
        self.dao = dao

    async def find_by_id(self, item_id: str) -> Envelope:
        item = await self.dao.get_by_id(item_id)
        if item is None:
            message = f"No document matching id: {item_id} could be found!"
            logger.error(message)
            raise NotFound(message)
        return Envelope(data=serialize(item), statusCode=200)

    async def find_by_description(self, partial_text: str) -> Envelope:
        items = await self.dao.search_by_description(partial_text)
        return Envelope(data=serialize(items), statusCode=200 if items else 404)

    async def find_by_upc(self, code: Any) -> Envelope:
        item = await self.dao.get_by_upc(code)
        return Envelope(data=serialize(item), statusCode=200 if item is not None else 404)


def get_items_dao(provider: ConnectionProvider, backend: str, collection_name: str = "items") -> ItemsDao:
    if backend == "mongodb":
        return MongoItemsDao(provider, collection_name)
    if backend == "sqlite":
        return SqliteItemsDao(provider)
    raise ValueError(f"Unsupported items backend: {backend}")
