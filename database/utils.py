import asyncio
import logging
import sqlite3
from functools import partial
from typing import Any, Awaitable, Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from config import settings
from database.errors import ConnectionInitError, NotReady

logger = logging.getLogger(__name__)

CREATE_ITEMS_TABLE = """
CREATE TABLE IF NOT EXISTS items (
    id TEXT PRIMARY KEY,
    itemDescription TEXT NOT NULL,
    upc TEXT,
    extra TEXT
)
"""


class ConnectionProvider:
    """Holds the single shared store handle for the process.

    ``connect()`` is awaited once at startup. Readers call ``get_handle()``,
    which waits on a one-shot gate until the connection attempt completes and
    raises ``NotReady`` instead of ever handing out a missing handle.
    """

    def __init__(
        self,
        opener: Callable[[], Awaitable[Any]],
        closer: Optional[Callable[[Any], Awaitable[None]]] = None,
        name: str = "database",
        wait_timeout: Optional[float] = None,
    ):
        self.name = name
        self.wait_timeout = wait_timeout
        self._opener = opener
        self._closer = closer
        self._handle = None
        self._error: Optional[ConnectionInitError] = None
        self._ready = asyncio.Event()
        self._connecting = asyncio.Lock()

    @property
    def is_ready(self) -> bool:
        return self._handle is not None

    async def connect(self):
        # concurrent callers share one opener run
        async with self._connecting:
            if self._handle is not None:
                return self._handle

            logger.info(f"Initializing {self.name} connection...")
            try:
                handle = await self._opener()
            except Exception as e:
                logger.error(f"Error while initializing {self.name}: {e}", exc_info=True)
                self._error = ConnectionInitError(f"Could not initialize {self.name} connection: {e}")
                self._ready.set()
                raise self._error from e

            self._handle = handle
            self._error = None
            self._ready.set()
            logger.info(f"{self.name} connection initialized.")
            return handle

    async def get_handle(self):
        if not self._ready.is_set():
            try:
                await asyncio.wait_for(self._ready.wait(), timeout=self.wait_timeout)
            except asyncio.TimeoutError:
                raise NotReady(f"{self.name} connection not ready after {self.wait_timeout}s")

        if self._handle is None:
            raise NotReady(f"{self.name} connection is not available") from self._error
        return self._handle

    async def close(self):
        handle = self._handle
        self._handle = None
        self._error = None
        self._ready = asyncio.Event()
        if handle is not None and self._closer is not None:
            await self._closer(handle)
            logger.info(f"{self.name} connection closed.")


# ------------------- MongoDB -------------------
async def open_mongo_database(url: str, db_name: str) -> AsyncIOMotorDatabase:
    client = AsyncIOMotorClient(url)
    try:
        # Motor connects lazily; ping so a dead server fails at startup
        await client.admin.command("ping")
    except Exception:
        client.close()
        raise
    return client[db_name]


async def close_mongo_database(db: AsyncIOMotorDatabase):
    db.client.close()


# ------------------- SQLite -------------------
def _connect_sqlite(path: str) -> sqlite3.Connection:
    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    # Unicode-aware case folding for description search
    conn.create_function("casefold", 1, str.casefold, deterministic=True)
    conn.execute(CREATE_ITEMS_TABLE)
    conn.commit()
    return conn


async def open_sqlite_database(path: str) -> sqlite3.Connection:
    return await asyncio.to_thread(_connect_sqlite, path)


async def close_sqlite_database(conn: sqlite3.Connection):
    await asyncio.to_thread(conn.close)


def build_provider(backend: str) -> ConnectionProvider:
    if backend == "mongodb":
        return ConnectionProvider(
            partial(open_mongo_database, settings.mongo_url, settings.db_name),
            close_mongo_database,
            name="MongoDB",
            wait_timeout=settings.db_ready_timeout,
        )
    if backend == "sqlite":
        return ConnectionProvider(
            partial(open_sqlite_database, settings.sqlite_path),
            close_sqlite_database,
            name="SQLite",
            wait_timeout=settings.db_ready_timeout,
        )
    raise ValueError(f"Unsupported items backend: {backend}")


# Single provider for all requests
_provider: Optional[ConnectionProvider] = None


def get_provider() -> ConnectionProvider:
    global _provider
    if _provider is None:
        _provider = build_provider(settings.items_backend)
    return _provider
