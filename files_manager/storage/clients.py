import logging
from typing import Optional

from .mongodb import DBClient
from .redis_cache import RedisClient

logger = logging.getLogger(__name__)


class StorageClients:
    """
    Holds the single DBClient and RedisClient of a process.

    Build it once at startup, await ``connect()`` (or use it as an async
    context manager) and pass it to whatever needs storage. ``close()`` is
    the shutdown path.
    """

    def __init__(self, db: Optional[DBClient] = None, redis: Optional[RedisClient] = None):
        self.db = db if db is not None else DBClient()
        self.redis = redis if redis is not None else RedisClient()

    async def connect(self):
        await self.db.connect()
        await self.redis.connect()
        logger.info("Storage clients connected")

    async def close(self):
        self.db.close()
        await self.redis.close()

    async def __aenter__(self):
        try:
            await self.connect()
        except Exception:
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
