import sys
import asyncio
import logging

from files_manager.exceptions import StorageConnectionError
from files_manager.status import get_stats, get_status
from files_manager.storage import StorageClients

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def main() -> int:
    try:
        async with StorageClients() as clients:
            print(f"Status: {get_status(clients)}")
            print(f"Stats: {await get_stats(clients)}")
    except StorageConnectionError as e:
        logger.error("Storage is not accessible: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
