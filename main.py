import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import settings
from database.errors import ConnectionInitError
from database.utils import get_provider
from items.routes import router as items_router

logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    provider = get_provider()
    try:
        await provider.connect()
    except ConnectionInitError:
        # already logged; lookups answer 503 until restart
        logger.warning("Starting without a database connection.")
    yield
    await provider.close()


app = FastAPI(title="Item Catalog", lifespan=lifespan)
app.include_router(items_router, prefix="/items")


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000)
