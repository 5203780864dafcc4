"""MongoDB connection management for the profiling server.

This module owns the Motor client used by the repositories and creates the
collection indexes at startup.
"""

import asyncio
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo import ASCENDING, DESCENDING, IndexModel

from src.core.config import get_settings
from src.utils.exceptions import DatabaseConnectionError
from src.utils.logger import get_database_logger

logger = get_database_logger()


COLLECTION_INDEXES: Dict[str, List[IndexModel]] = {
    "profiles": [
        IndexModel([("user_id", ASCENDING), ("created_at", DESCENDING)]),
    ],
    "psychometric_sessions": [
        IndexModel([("status", ASCENDING)]),
        IndexModel([("user_info.email", ASCENDING)]),
    ],
    "saved_psychometric_reports": [
        IndexModel([("user_id", ASCENDING), ("saved_at", DESCENDING)]),
        IndexModel([("session_id", ASCENDING)]),
        IndexModel(
            [("user_id", ASCENDING), ("session_id", ASCENDING)],
            unique=True,
            name="user_session_unique",
        ),
    ],
    "proctoring_violations": [
        IndexModel([("session_id", ASCENDING), ("timestamp", DESCENDING)]),
        IndexModel([("user_id", ASCENDING), ("timestamp", DESCENDING)]),
    ],
}


class MongoDB:
    """MongoDB connection manager."""

    _client: Optional[AsyncIOMotorClient] = None
    _database: Optional[AsyncIOMotorDatabase] = None
    _initialized: bool = False
    _lock: Optional[asyncio.Lock] = None

    @classmethod
    def _get_lock(cls) -> asyncio.Lock:
        if cls._lock is None:
            cls._lock = asyncio.Lock()
        return cls._lock

    @classmethod
    async def connect(
        cls,
        url: Optional[str] = None,
        db_name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """Connect to MongoDB with connection pooling.

        Args:
            url: MongoDB connection URL
            db_name: Database name
            **kwargs: Additional connection parameters

        Raises:
            DatabaseConnectionError: If the server cannot be reached
        """
        settings = get_settings()

        async with cls._get_lock():
            if cls._initialized:
                logger.warning("MongoDB already connected")
                return

            connection_url = url or settings.get_database_url()
            database_name = db_name or settings.MONGODB_DB_NAME

            connection_params = {
                "maxPoolSize": kwargs.get("max_pool_size", settings.MONGODB_MAX_POOL_SIZE),
                "minPoolSize": kwargs.get("min_pool_size", settings.MONGODB_MIN_POOL_SIZE),
                "connectTimeoutMS": kwargs.get("connect_timeout_ms", settings.MONGODB_CONNECT_TIMEOUT_MS),
                "serverSelectionTimeoutMS": kwargs.get(
                    "server_selection_timeout_ms",
                    settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
                ),
                "retryWrites": kwargs.get("retry_writes", True),
                "tz_aware": True,
            }

            try:
                cls._client = AsyncIOMotorClient(connection_url, **connection_params)
                cls._database = cls._client[database_name]

                await cls._client.admin.command("ping")
            except Exception as e:
                if cls._client is not None:
                    cls._client.close()
                cls._client = None
                cls._database = None
                cls._initialized = False
                logger.error(f"MongoDB connection failed: {str(e)}", exc_info=True)
                raise DatabaseConnectionError(
                    "Could not connect to MongoDB", operation="connect", cause=e
                ) from e

            cls._initialized = True
            logger.info(
                "MongoDB connected successfully",
                extra={
                    "database": database_name,
                    "pool_size": connection_params["maxPoolSize"],
                }
            )

    @classmethod
    async def disconnect(cls) -> None:
        """Disconnect from MongoDB."""
        async with cls._get_lock():
            if cls._client is not None:
                cls._client.close()
                logger.info("MongoDB disconnected successfully")
            cls._client = None
            cls._database = None
            cls._initialized = False

    @classmethod
    async def ping(cls) -> bool:
        """Check if MongoDB connection is alive.

        Returns:
            bool: True if connection is alive
        """
        if not cls._initialized or cls._client is None:
            return False

        try:
            await cls._client.admin.command("ping")
            return True
        except Exception as e:
            logger.error(f"MongoDB ping failed: {str(e)}")
            return False

    @classmethod
    def get_database(cls) -> AsyncIOMotorDatabase:
        """Get the current database instance.

        Raises:
            DatabaseConnectionError: If not connected
        """
        if cls._database is None:
            raise DatabaseConnectionError("MongoDB not connected")
        return cls._database

    @classmethod
    def get_collection(cls, name: str) -> AsyncIOMotorCollection:
        """Get a collection by name.

        Raises:
            DatabaseConnectionError: If not connected
        """
        return cls.get_database()[name]

    @classmethod
    async def create_indexes(
        cls, indexes: Optional[Dict[str, List[IndexModel]]] = None
    ) -> Dict[str, List[str]]:
        """Create indexes for every known collection.

        Args:
            indexes: Index models per collection, defaults to ``COLLECTION_INDEXES``

        Returns:
            Dict[str, List[str]]: Created index names per collection
        """
        created: Dict[str, List[str]] = {}
        for collection_name, models in (indexes or COLLECTION_INDEXES).items():
            names = await cls.get_collection(collection_name).create_indexes(models)
            created[collection_name] = names
            logger.info(
                f"Ensured {len(names)} indexes on {collection_name}",
                extra={"indexes": names}
            )
        return created


__all__ = ["MongoDB", "COLLECTION_INDEXES"]
