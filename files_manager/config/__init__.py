from .settings import MongoDBConfig, RedisConfig, load_env

__all__ = [
    'MongoDBConfig',
    'RedisConfig',
    'load_env',
]
