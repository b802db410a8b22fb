"""
Files Manager storage adapters
MongoDB and Redis clients used by the files manager API
"""

__version__ = "1.0.0"
__author__ = "Files Manager Team"

from files_manager.storage import DBClient, DocumentCollection, RedisClient, StorageClients
from files_manager.status import get_stats, get_status

__all__ = [
    'DBClient',
    'DocumentCollection',
    'RedisClient',
    'StorageClients',
    'get_stats',
    'get_status',
]
