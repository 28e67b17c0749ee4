from pydantic import BaseModel, ConfigDict
from typing import Optional


class Item(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    itemDescription: str
    upc: Optional[str] = None


class Envelope(BaseModel):
    data: str
    statusCode: int
