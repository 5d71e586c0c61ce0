import asyncio
import logging

from mongolink.core.connection import ConnectionManager, get_connection_manager

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def init(manager: ConnectionManager) -> None:
    try:
        await manager.acquire_connection()
    except Exception as e:
        logger.error(e)
        raise e


async def run(manager: ConnectionManager) -> None:
    try:
        await init(manager)
    finally:
        await manager.disconnect()


def main() -> None:
    logger.info("Initializing service")
    asyncio.run(run(get_connection_manager()))
    logger.info("Service finished initializing")


if __name__ == "__main__":
    main()
