"""
Redis cache client for files_manager.

Connectivity is tracked from events rather than probed: redis-py calls
``_on_connect`` every time it opens a new connection, and any connection or
timeout error raised by a command flips the flag back to False.
"""
import logging
from contextlib import contextmanager
from typing import Optional, Union

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from files_manager.config import RedisConfig
from files_manager.exceptions import CacheConnectionError

logger = logging.getLogger(__name__)

CONNECTION_ERRORS = (RedisConnectionError, RedisTimeoutError)


class RedisClient:
    """Redis client for string keys with expiry"""

    def __init__(self, host: Optional[str] = None, port: Optional[int] = None,
                 db: Optional[int] = None, password: Optional[str] = None):
        self.config = RedisConfig.from_env(host=host, port=port, db=db, password=password)
        self.is_client_connected = False
        self.client = Redis(
            host=self.config.host,
            port=self.config.port,
            db=self.config.db,
            password=self.config.password,
            decode_responses=True,
            redis_connect_func=self._on_connect,
        )

    async def _on_connect(self, connection):
        # Replaces redis-py's default handshake, so it has to be run here.
        await connection.on_connect()
        self.is_client_connected = True

    def _on_error(self, error: Exception):
        logger.error(f"Redis client failed to connect: {error}")
        self.is_client_connected = False

    @contextmanager
    def _track_errors(self):
        try:
            yield
        except CONNECTION_ERRORS as e:
            self._on_error(e)
            raise

    async def connect(self):
        """Ping the server; raise CacheConnectionError if it cannot be reached"""
        address = f"{self.config.host}:{self.config.port}"
        try:
            with self._track_errors():
                await self.client.ping()
        except CONNECTION_ERRORS as e:
            raise CacheConnectionError(f"Cannot connect to Redis: {e}", url=address) from e
        self.is_client_connected = True
        logger.info(f"Connected to Redis at {address}")

    def is_alive(self) -> bool:
        return self.is_client_connected

    async def ping(self) -> bool:
        """Actively check the server and refresh the connectivity flag"""
        try:
            with self._track_errors():
                await self.client.ping()
        except CONNECTION_ERRORS:
            return False
        self.is_client_connected = True
        return True

    async def get(self, key: str) -> Optional[str]:
        with self._track_errors():
            return await self.client.get(key)

    async def set(self, key: str, value: Union[str, int, float, bool], duration: int):
        """Store value under key for duration seconds"""
        if isinstance(value, bool):
            value = str(value)
        with self._track_errors():
            await self.client.set(key, value, ex=duration)

    async def delete(self, key: str):
        with self._track_errors():
            await self.client.delete(key)

    async def close(self):
        """Close Redis connection"""
        await self.client.aclose()
        self.is_client_connected = False
        logger.info("Redis connection closed")
