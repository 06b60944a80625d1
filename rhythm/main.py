"""
Daily Rhythm - process entry point.

Runs the rollover scheduler against the local SQLite store until
interrupted:

    python -m rhythm.main
"""

import asyncio

from rhythm.container import Container
from rhythm.core.config import get_settings
from rhythm.core.logger import logger


async def run() -> None:
    settings = get_settings()
    logger.info(f"Starting Daily Rhythm in {settings.ENVIRONMENT} mode...")
    container = Container(settings)
    await container.scheduler.start()
    try:
        await asyncio.Event().wait()
    finally:
        logger.info("Shutting down Daily Rhythm...")
        await container.scheduler.stop()


def main() -> None:
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
