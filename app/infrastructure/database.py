"""MongoDB store handle — one client per process, opened and closed by the app lifespan."""

from typing import Optional

import structlog
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from app.config import get_settings

logger = structlog.get_logger(__name__)


class MongoStore:
    """Owns the MongoClient and hands out collections.

    A pre-built client can be passed in (tests use mongomock).
    """

    def __init__(self, uri: Optional[str] = None, db_name: Optional[str] = None, client: Optional[MongoClient] = None):
        settings = get_settings()
        self.uri = uri or settings.MONGO_URI
        self.db_name = db_name or settings.MONGO_DB_NAME
        self._client = client
        self._db: Optional[Database] = None

    @property
    def db(self) -> Database:
        if self._db is None:
            raise RuntimeError("MongoStore is not connected")
        return self._db

    def connect(self) -> "MongoStore":
        if self._client is None:
            settings = get_settings()
            self._client = MongoClient(
                self.uri,
                serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
                tz_aware=True,
            )
        self._db = self._client[self.db_name]
        logger.info("MongoDB connected", database=self.db_name)
        return self

    def ensure_indexes(self) -> None:
        self.collection("users").create_index([("phone", ASCENDING)], unique=True, name="phone_unique")

    def collection(self, name: str) -> Collection:
        return self.db[name]

    def ping(self) -> bool:
        self.db.command("ping")
        return True

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            logger.info("MongoDB connection closed")
        self._client = None
        self._db = None
