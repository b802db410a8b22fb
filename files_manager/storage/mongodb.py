import logging
from typing import Any, Dict, List, Mapping, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from files_manager.config import MongoDBConfig
from files_manager.exceptions import DocumentStoreConnectionError

logger = logging.getLogger(__name__)

USERS_COLLECTION = 'users'
FILES_COLLECTION = 'files'


class DocumentCollection:
    """
    Narrow handle over a single MongoDB collection.

    Only the operations the application actually uses are exposed; the
    wrapped motor collection is not reachable from callers.
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        self._collection = collection

    @property
    def name(self) -> str:
        return self._collection.name

    @property
    def full_name(self) -> str:
        return self._collection.full_name

    def __eq__(self, other):
        if not isinstance(other, DocumentCollection):
            return NotImplemented
        return self.full_name == other.full_name

    def __hash__(self):
        return hash(self.full_name)

    def __repr__(self):
        return f"DocumentCollection({self.full_name!r})"

    async def count_documents(self, filter: Optional[Mapping[str, Any]] = None) -> int:
        return await self._collection.count_documents(dict(filter or {}))

    async def find_one(self, filter: Optional[Mapping[str, Any]] = None) -> Optional[Dict[str, Any]]:
        return await self._collection.find_one(dict(filter or {}))

    async def find(self, filter: Optional[Mapping[str, Any]] = None, skip: int = 0, limit: int = 0) -> List[Dict[str, Any]]:
        """Return matching documents; ``limit=0`` means no limit."""
        cursor = self._collection.find(dict(filter or {}))
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return await cursor.to_list(length=None)

    async def insert_one(self, document: Dict[str, Any]) -> Any:
        result = await self._collection.insert_one(document)
        return result.inserted_id

    async def update_one(self, filter: Mapping[str, Any], update: Mapping[str, Any]) -> int:
        result = await self._collection.update_one(dict(filter), dict(update))
        return result.modified_count

    async def delete_one(self, filter: Mapping[str, Any]) -> int:
        result = await self._collection.delete_one(dict(filter))
        return result.deleted_count

    async def aggregate(self, pipeline: List[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        cursor = self._collection.aggregate(list(pipeline))
        return await cursor.to_list(length=None)


class DBClient:
    """MongoDB client exposing connection status, counts and the users/files collections"""

    def __init__(self, host: Optional[str] = None, port: Optional[int] = None, database: Optional[str] = None):
        self.config = MongoDBConfig.from_env(host=host, port=port, database=database)
        self.client = AsyncIOMotorClient(self.config.url)
        self.db = self.client[self.config.database]
        self._connected = False

    async def connect(self):
        """Ping the server; raise DocumentStoreConnectionError if it cannot be reached"""
        try:
            await self.client.admin.command('ping')
        except PyMongoError as e:
            self._connected = False
            logger.error(f"Failed connecting to MongoDB at {self.config.url}: {e}")
            raise DocumentStoreConnectionError(f"Cannot connect to MongoDB: {e}", url=self.config.url) from e
        self._connected = True
        logger.info(f"Connected to MongoDB at {self.config.url}")

    def is_alive(self) -> bool:
        """True while the driver's topology still has a server it can read from"""
        return self._connected and self.client.topology_description.has_readable_server()

    async def count_documents(self, collection_name: str) -> int:
        return await self.db[collection_name].count_documents({})

    async def nb_users(self) -> int:
        return await self.count_documents(USERS_COLLECTION)

    async def nb_files(self) -> int:
        return await self.count_documents(FILES_COLLECTION)

    async def get_collection(self, collection_name: str) -> DocumentCollection:
        return DocumentCollection(self.db[collection_name])

    async def users_collection(self) -> DocumentCollection:
        return await self.get_collection(USERS_COLLECTION)

    async def files_collection(self) -> DocumentCollection:
        return await self.get_collection(FILES_COLLECTION)

    def close(self):
        """Close MongoDB connection"""
        self.client.close()
        self._connected = False
        logger.info("MongoDB connection closed")
