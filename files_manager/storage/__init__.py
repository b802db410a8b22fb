"""
Storage layer - Database and Cache modules
"""

from .mongodb import DBClient, DocumentCollection
from .redis_cache import RedisClient
from .clients import StorageClients

__all__ = [
    'DBClient',
    'DocumentCollection',
    'RedisClient',
    'StorageClients',
]
