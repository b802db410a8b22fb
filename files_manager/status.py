from typing import Dict

from files_manager.storage import StorageClients


def get_status(clients: StorageClients) -> Dict[str, bool]:
    """Liveness of both backends, as reported by the clients themselves"""
    return {
        'redis': clients.redis.is_alive(),
        'db': clients.db.is_alive(),
    }


async def get_stats(clients: StorageClients) -> Dict[str, int]:
    """Number of users and files stored in MongoDB"""
    return {
        'users': await clients.db.nb_users(),
        'files': await clients.db.nb_files(),
    }
