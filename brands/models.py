from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ValidationError
from typing import Optional

from database.errors import MalformedRecord


class Brand(BaseModel):
    id: str
    description: str
    manufacturer: Optional[str] = None
    address: Optional[str] = None
    website: Optional[str] = None

    @classmethod
    def from_document(cls, document: dict) -> "Brand":
        """Build a Brand from a store document. ``_id`` stands in for a missing ``id``."""
        data = jsonable_encoder(document, custom_encoder={ObjectId: str})
        store_id = data.pop("_id", None)
        if data.get("id") is None and store_id is not None:
            data["id"] = store_id
        try:
            return cls(**data)
        except ValidationError as e:
            raise MalformedRecord(f"Brand document {data.get('id')} does not match the brand shape") from e
