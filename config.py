import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Settings read from environment variables."""

    items_backend: str = "mongodb"
    mongo_url: str = "mongodb://localhost:27017"
    db_name: str = "catalog"
    items_collection: str = "items"
    sqlite_path: str = "catalog.db"
    db_ready_timeout: float = 10.0
    log_level: str = "INFO"


def load_settings() -> Settings:
    return Settings(
        items_backend=os.getenv("ITEMS_BACKEND", "mongodb").lower(),
        mongo_url=os.getenv("MONGO_URL", "mongodb://localhost:27017"),
        db_name=os.getenv("DB_NAME", "catalog"),
        items_collection=os.getenv("ITEMS_COLLECTION", "items"),
        sqlite_path=os.getenv("SQLITE_PATH", "catalog.db"),
        db_ready_timeout=float(os.getenv("DB_READY_TIMEOUT", "10")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


settings = load_settings()
