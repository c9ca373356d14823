"""
Telegram Bot Main Entry Point
"""

import asyncio
import logging
from aiogram import Bot, Dispatcher

from shared.config import settings, validate_config
from shared.constants import STANDARD_CATEGORIES
from shared.logger import setup_logging
from database.connection import init_database, close_database, run_migrations
from database.interface import StorageProvider
from database.memory import MemoryStorageProvider
from database.models import CategoryType
from database.storage import PostgresStorageProvider
from finance.categories import CategoryService
from finance.commands import build_command_handlers
from finance.dispatcher import CommandDispatcher
from telegram_bot.handlers.commands import router as commands_router
from telegram_bot.webhook import serve_webhook

logger = logging.getLogger(__name__)


async def seed_standard_categories(storage_provider: StorageProvider) -> None:
    """
    Create the built-in standard categories that are missing
    """
    async with storage_provider.unit_of_work() as storage:
        service = CategoryService(storage)
        for type_name, names in STANDARD_CATEGORIES.items():
            created = await service.seed_standard_categories(CategoryType(type_name), names)
            logger.info(f"Standard {type_name} categories seeded: {created} new")


async def init_app() -> CommandDispatcher:
    """
    Initialize storage and the command dispatcher
    """
    logger.info("=" * 60)
    logger.info("Finance Bot Starting...")
    logger.info("=" * 60)

    logger.info("Validating configuration...")
    validate_config()
    logger.info("✓ Configuration valid")

    if settings.STORAGE_BACKEND == "memory":
        logger.warning("Using in-memory storage, data is lost on restart")
        storage_provider: StorageProvider = MemoryStorageProvider()
    else:
        logger.info("Initializing database...")
        await init_database()
        if settings.RUN_MIGRATIONS:
            await run_migrations()
        storage_provider = PostgresStorageProvider()
        logger.info("✓ Database initialized")

    await seed_standard_categories(storage_provider)

    dispatcher = CommandDispatcher(build_command_handlers(), storage_provider)
    logger.info(f"✓ {len(dispatcher.commands)} commands registered")

    return dispatcher


async def main():
    """
    Main function to start the bot
    """
    setup_logging()
    bot = None

    try:
        commands = await init_app()

        bot = Bot(token=settings.TELEGRAM_BOT_TOKEN)
        dp = Dispatcher(commands=commands)
        dp.include_router(commands_router)

        logger.info(f"Environment: {settings.ENVIRONMENT}")

        if settings.WEBHOOK_URL:
            await serve_webhook(bot, dp, commands)
        else:
            logger.info("Starting long polling...")
            await dp.start_polling(bot)

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        raise
    finally:
        logger.info("Cleaning up...")
        if bot is not None:
            await bot.session.close()
        if settings.STORAGE_BACKEND != "memory":
            await close_database()
        logger.info("Cleanup completed")


def run():
    """Console entry point"""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Application stopped by user")


if __name__ == "__main__":
    run()
