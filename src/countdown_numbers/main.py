import asyncio
import logging

import discord
from dotenv import load_dotenv

from .bot import SolverBot
from .config.config import Config

logger = logging.getLogger(__name__)


async def main():
    # Load environment variables
    load_dotenv()

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    try:
        logger.info("Discord.py Version: %s", discord.__version__)
        config = Config()
        bot = SolverBot(config)
        logger.info("Starting bot...")
        await bot.start(config.discord_token)
    except Exception:
        logger.exception("Error starting bot")
        raise


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
