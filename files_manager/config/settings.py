import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from files_manager.exceptions import ConfigurationError


def load_env(env_file: Optional[str] = None) -> bool:
    """
    Load environment variables from a dotenv file.

    ``ENV_FILE`` wins when set; otherwise ``.env.test`` is used while running
    under tests (``FILES_MANAGER_ENV=test``) and ``.env`` for everything else.
    Variables already present in the environment are left untouched.
    """
    if not env_file:
        env_file = os.environ.get("ENV_FILE")
    if not env_file:
        env_file = ".env.test" if os.environ.get("FILES_MANAGER_ENV") == "test" else ".env"
    return load_dotenv(env_file, override=False)


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}", config_key=name) from None


@dataclass(frozen=True)
class MongoDBConfig:
    """MongoDB database configuration"""
    host: str = "localhost"
    port: int = 27017
    database: str = "files_manager"

    @property
    def url(self) -> str:
        return f"mongodb://{self.host}:{self.port}/{self.database}"

    @classmethod
    def from_env(cls, host: Optional[str] = None, port: Optional[int] = None,
                 database: Optional[str] = None) -> "MongoDBConfig":
        """Build the config; only arguments left as None are read from the environment."""
        if None in (host, port, database):
            load_env()
        return cls(
            host=host if host is not None else os.environ.get("DB_HOST") or cls.host,
            port=port if port is not None else _int_env("DB_PORT", cls.port),
            database=database if database is not None else os.environ.get("DB_DATABASE") or cls.database,
        )


@dataclass(frozen=True)
class RedisConfig:
    """Redis cache configuration"""
    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: Optional[str] = None

    @classmethod
    def from_env(cls, host: Optional[str] = None, port: Optional[int] = None,
                 db: Optional[int] = None, password: Optional[str] = None) -> "RedisConfig":
        """Build the config; only arguments left as None are read from the environment."""
        if None in (host, port, db, password):
            load_env()
        return cls(
            host=host if host is not None else os.environ.get("REDIS_HOST") or cls.host,
            port=port if port is not None else _int_env("REDIS_PORT", cls.port),
            db=db if db is not None else _int_env("REDIS_DB", cls.db),
            password=password if password is not None else os.environ.get("REDIS_PASSWORD") or None,
        )


if __name__ == "__main__":
    mongo = MongoDBConfig.from_env()
    redis_config = RedisConfig.from_env()
    print("Configuration:")
    print(f"  MongoDB: {mongo.url}")
    print(f"  Redis: {redis_config.host}:{redis_config.port}/{redis_config.db}")
