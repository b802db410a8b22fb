"""
Shared fixtures and in-memory stand-ins for the MongoDB and Redis servers.
"""

import time
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio
from bson import ObjectId
from redis.exceptions import ConnectionError as RedisConnectionError

from files_manager.storage import DBClient, RedisClient, StorageClients

ENV_VARS = [
    'DB_HOST', 'DB_PORT', 'DB_DATABASE',
    'REDIS_HOST', 'REDIS_PORT', 'REDIS_DB', 'REDIS_PASSWORD',
    'ENV_FILE', 'FILES_MANAGER_ENV',
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run every test without connection settings and away from any .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _matches(document, filter):
    return all(document.get(key) == value for key, value in filter.items())


class FakeCursor:
    def __init__(self, documents):
        self.documents = list(documents)

    def skip(self, count):
        self.documents = self.documents[count:]
        return self

    def limit(self, count):
        self.documents = self.documents[:count]
        return self

    async def to_list(self, length=None):
        if length is None:
            return list(self.documents)
        return self.documents[:length]


class FakeCollection:
    def __init__(self, database_name, name):
        self.name = name
        self.full_name = f"{database_name}.{name}"
        self.documents = []

    async def count_documents(self, filter):
        return sum(1 for document in self.documents if _matches(document, filter))

    async def find_one(self, filter):
        return next((document for document in self.documents if _matches(document, filter)), None)

    def find(self, filter):
        return FakeCursor(document for document in self.documents if _matches(document, filter))

    async def insert_one(self, document):
        document.setdefault('_id', ObjectId())
        self.documents.append(document)
        return SimpleNamespace(inserted_id=document['_id'])

    async def update_one(self, filter, update):
        document = await self.find_one(filter)
        if document is None:
            return SimpleNamespace(modified_count=0)
        document.update(update.get('$set', {}))
        return SimpleNamespace(modified_count=1)

    async def delete_one(self, filter):
        document = await self.find_one(filter)
        if document is None:
            return SimpleNamespace(deleted_count=0)
        self.documents.remove(document)
        return SimpleNamespace(deleted_count=1)

    def aggregate(self, pipeline):
        documents = self.documents
        for stage in pipeline:
            documents = [document for document in documents if _matches(document, stage.get('$match', {}))]
        return FakeCursor(documents)


class FakeDatabase:
    def __init__(self, name):
        self.name = name
        self.collections = {}

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(self.name, name)
        return self.collections[name]


class FakeMotorClient:
    def __init__(self, url, **kwargs):
        self.url = url
        self.databases = {}
        self.admin = MagicMock()
        self.admin.command = AsyncMock(return_value={'ok': 1.0})
        self.close = MagicMock()
        self.topology_description = MagicMock()
        self.topology_description.has_readable_server.return_value = True

    def __getitem__(self, name):
        if name not in self.databases:
            self.databases[name] = FakeDatabase(name)
        return self.databases[name]


class FakeRedis:
    """Dict-backed Redis speaking the handful of commands RedisClient sends."""

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.connect_func = kwargs.get('redis_connect_func')
        self.store = {}
        self.fail = False
        self.closed = False
        self.connections = []

    async def _check(self):
        if self.fail:
            raise RedisConnectionError("Error 111 connecting to localhost:6379. Connection refused.")
        # Like the real pool, the first command opens a connection.
        if not self.connections:
            await self.open_connection()

    async def open_connection(self):
        connection = MagicMock()
        connection.on_connect = AsyncMock()
        await self.connect_func(connection)
        self.connections.append(connection)
        return connection

    async def ping(self):
        await self._check()
        return True

    async def get(self, key):
        await self._check()
        entry = self.store.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if time.monotonic() >= expires_at:
            del self.store[key]
            return None
        return value

    async def set(self, key, value, ex=None):
        await self._check()
        expires_at = time.monotonic() + ex if ex is not None else float('inf')
        self.store[key] = (str(value), expires_at)
        return True

    async def setex(self, key, seconds, value):
        raise AssertionError("setex is deprecated in redis-py, use set(..., ex=)")

    async def delete(self, key):
        await self._check()
        return 1 if self.store.pop(key, None) is not None else 0

    async def aclose(self):
        self.closed = True


@pytest.fixture
def motor_factory():
    with patch('files_manager.storage.mongodb.AsyncIOMotorClient', side_effect=FakeMotorClient) as factory:
        yield factory


@pytest.fixture
def redis_factory():
    with patch('files_manager.storage.redis_cache.Redis', side_effect=FakeRedis) as factory:
        yield factory


@pytest.fixture
def db_client(motor_factory):
    return DBClient()


@pytest.fixture
def redis_client(redis_factory):
    return RedisClient()


@pytest_asyncio.fixture
async def connected_redis(redis_client):
    await redis_client.connect()
    return redis_client


@pytest.fixture
def storage_clients(db_client, redis_client):
    return StorageClients(db=db_client, redis=redis_client)
