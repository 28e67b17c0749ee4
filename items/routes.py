import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, Response

from config import settings
from database.errors import MalformedRecord, NotFound, NotReady, StoreError
from database.utils import get_provider
from items.models import Envelope
from items.service import ItemLookupService, get_items_dao

router = APIRouter(tags=["Items"])

logger = logging.getLogger(__name__)


@lru_cache
def get_lookup_service() -> ItemLookupService:
    dao = get_items_dao(get_provider(), settings.items_backend, settings.items_collection)
    return ItemLookupService(dao)


# ------------------- HELPERS -------------------
def to_response(envelope: Envelope) -> Response:
    return Response(content=envelope.data, status_code=envelope.statusCode, media_type="application/json")


def to_http_error(e: Exception) -> HTTPException:
    if isinstance(e, NotFound):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, NotReady):
        logger.error(f"Store not ready: {e}")
        return HTTPException(status_code=503, detail="Database not ready")
    logger.error(f"Lookup failed: {e}", exc_info=True)
    return HTTPException(status_code=500, detail="Internal Server Error")


# ------------------- ROUTES -------------------
@router.get("/id/{item_id}")
async def get_item_by_id(item_id: str, service: ItemLookupService = Depends(get_lookup_service)):
    try:
        return to_response(await service.find_by_id(item_id))
    except (NotFound, NotReady, StoreError, MalformedRecord) as e:
        raise to_http_error(e)


@router.get("/description/{partial_description:path}")
async def get_items_by_description(partial_description: str, service: ItemLookupService = Depends(get_lookup_service)):
    try:
        return to_response(await service.find_by_description(partial_description))
    except (NotReady, StoreError, MalformedRecord) as e:
        raise to_http_error(e)


@router.get("/upc/{upc}")
async def get_item_by_upc(upc: str, service: ItemLookupService = Depends(get_lookup_service)):
    try:
        return to_response(await service.find_by_upc(upc))
    except (NotReady, StoreError, MalformedRecord) as e:
        raise to_http_error(e)
