import json
import logging
from typing import Any, List, Union

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError

from database.errors import MalformedRecord
from items.models import Item

logger = logging.getLogger(__name__)


# ------------------- Helpers -------------------
def to_plain(document: dict) -> dict:
    """Convert ObjectIds, datetimes and other BSON values to JSON-native ones."""
    return jsonable_encoder(document, custom_encoder={ObjectId: str})


def format_item(document: dict) -> Item:
    """Build an ``Item`` from a raw store document, mapping ``_id`` to ``id``."""
    data = to_plain(document)
    if "_id" in data:
        data["id"] = data.pop("_id")
    try:
        return Item(**data)
    except ValidationError as e:
        logger.error(f"Malformed item document {data.get('id')}: {e}")
        raise MalformedRecord(f"Item document {data.get('id')} does not match the item shape") from e


def serialize(payload: Union[Item, List[Item], None]) -> str:
    if payload is None:
        return json.dumps(None)
    if isinstance(payload, list):
        return json.dumps([item.model_dump() for item in payload])
    return json.dumps(payload.model_dump())
