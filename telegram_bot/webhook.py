"""
Webhook transport

Serves Telegram updates through aiohttp when WEBHOOK_URL is set. The
webhook is registered on dispatcher startup and removed on shutdown.
"""

import asyncio
import logging
from aiohttp import web
from aiogram import Bot, Dispatcher
from aiogram.webhook.aiohttp_server import SimpleRequestHandler, setup_application

from finance.dispatcher import CommandDispatcher
from shared.config import Settings, settings

logger = logging.getLogger(__name__)

COMMANDS_KEY = web.AppKey("commands", CommandDispatcher)
STORAGE_BACKEND_KEY = web.AppKey("storage_backend", str)


def build_webhook_url(config: Settings) -> str:
    """Public URL Telegram posts updates to"""
    return f"{config.WEBHOOK_URL.rstrip('/')}/{config.WEBHOOK_PATH.lstrip('/')}"


async def on_startup(bot: Bot, webhook_url: str):
    await bot.set_webhook(webhook_url)
    logger.info(f"Webhook set to: {webhook_url}")


async def on_shutdown(bot: Bot):
    await bot.delete_webhook()
    logger.info("Webhook deleted")


async def health_check(request: web.Request) -> web.Response:
    """Liveness endpoint with the command table size and storage backend"""
    commands = request.app[COMMANDS_KEY]
    return web.json_response({
        'status': 'ok',
        'storage': request.app[STORAGE_BACKEND_KEY],
        'commands': len(commands.commands),
    })


def setup_webhook_app(
    bot: Bot,
    dp: Dispatcher,
    commands: CommandDispatcher,
    config: Settings = settings
) -> web.Application:
    """
    Build the aiohttp application serving the webhook and /health

    Args:
        bot: Bot instance
        dp: Dispatcher with the command router included
        commands: Command dispatcher reported by /health
        config: Settings with WEBHOOK_URL, WEBHOOK_PATH and STORAGE_BACKEND

    Returns:
        aiohttp web application
    """
    dp["webhook_url"] = build_webhook_url(config)
    dp.startup.register(on_startup)
    dp.shutdown.register(on_shutdown)

    app = web.Application()
    app[COMMANDS_KEY] = commands
    app[STORAGE_BACKEND_KEY] = config.STORAGE_BACKEND

    SimpleRequestHandler(dispatcher=dp, bot=bot).register(app, path=config.WEBHOOK_PATH)
    app.router.add_get('/health', health_check)

    setup_application(app, dp, bot=bot)
    return app


async def serve_webhook(
    bot: Bot,
    dp: Dispatcher,
    commands: CommandDispatcher,
    config: Settings = settings
) -> None:
    """
    Serve the webhook application until cancelled
    """
    app = setup_webhook_app(bot, dp, commands, config)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, '0.0.0.0', config.PORT)
    await site.start()

    logger.info(f"✅ Server started on port {config.PORT}, webhook: {build_webhook_url(config)}")

    try:
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()
