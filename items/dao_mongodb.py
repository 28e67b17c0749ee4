import logging
import re
from typing import Any, List, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError

from database.errors import StoreError
from database.utils import ConnectionProvider
from items.dao import ItemsDao
from items.models import Item
from items.utils import format_item

logger = logging.getLogger(__name__)


class MongoItemsDao(ItemsDao):
    def __init__(self, provider: ConnectionProvider, collection_name: str = "items"):
        self.provider = provider
        self.collection_name = collection_name

    async def get_collection(self):
        db = await self.provider.get_handle()
        return db[self.collection_name]

    async def get_by_id(self, item_id: str) -> Optional[Item]:
        collection = await self.get_collection()
        # hex ids may be stored as ObjectIds or as plain strings
        key = {"$in": [ObjectId(item_id), item_id]} if ObjectId.is_valid(item_id) else item_id
        try:
            document = await collection.find_one({"_id": key})
        except PyMongoError as e:
            logger.error(f"Error querying MongoDB for id {item_id}: {e}", exc_info=True)
            raise StoreError(str(e)) from e
        return format_item(document) if document else None

    async def search_by_description(self, partial_text: str) -> List[Item]:
        collection = await self.get_collection()
        query = {"itemDescription": {"$regex": re.escape(partial_text), "$options": "i"}}
        try:
            documents = await collection.find(query).to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Error querying MongoDB for description {partial_text!r}: {e}", exc_info=True)
            raise StoreError(str(e)) from e
        logger.info(f"Retrieved {len(documents)} items matching description {partial_text!r}.")
        return [format_item(document) for document in documents]

    async def get_by_upc(self, code: Any) -> Optional[Item]:
        collection = await self.get_collection()
        try:
            document = await collection.find_one({"upc": str(code)})
        except PyMongoError as e:
            logger.error(f"Error querying MongoDB for upc {code}: {e}", exc_info=True)
            raise StoreError(str(e)) from e
        return format_item(document) if document else None
