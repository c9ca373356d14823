"""
Command dispatcher

Routes a command to its handler inside one unit of work and always
answers with exactly one text.
"""

import logging
from types import MappingProxyType
from typing import List, Mapping, Sequence

from database.interface import DuplicateRecordError, StorageProvider
from database.models import User
from finance.commands import CommandContext, CommandHandler
from finance.errors import EmptyResult, FinanceError
from finance.messages import Messages

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Routing table from command names to handlers"""

    def __init__(self, handlers: Mapping[str, CommandHandler], storage: StorageProvider):
        self._handlers = MappingProxyType({name.lower(): handler for name, handler in handlers.items()})
        self._storage = storage

    @property
    def commands(self) -> List[str]:
        return list(self._handlers)

    async def ensure_user(self, telegram_user_id: int) -> None:
        """
        Create the user on first contact, in its own unit of work
        """
        try:
            async with self._storage.unit_of_work() as storage:
                if await storage.get_user_by_telegram_id(telegram_user_id) is None:
                    await storage.save_user(User(id=None, telegram_user_id=telegram_user_id))
                    logger.info(f"New user created: {telegram_user_id}")
        except DuplicateRecordError:
            logger.debug(f"User {telegram_user_id} was created concurrently")

    async def handle_command(self, telegram_user_id: int, command: str, args: Sequence[str]) -> str:
        """
        Handle one command

        Args:
            telegram_user_id: Chat identifier of the sender
            command: Command name without the leading slash
            args: Command arguments

        Returns:
            Response text
        """
        handler = self._handlers.get(command.lower())
        if handler is None:
            logger.info(f"Unknown command '{command}' from {telegram_user_id}")
            return Messages.COMMAND_NOT_FOUND

        try:
            await self.ensure_user(telegram_user_id)

            async with self._storage.unit_of_work() as storage:
                user = await storage.get_user_by_telegram_id(telegram_user_id)
                ctx = CommandContext(storage=storage, user=user, command=command.lower(), args=list(args))
                return await handler.handle(ctx)

        except EmptyResult as e:
            logger.info(f"/{command} from {telegram_user_id}: no data ({e})")
            return handler.describe_error(e)

        except FinanceError as e:
            logger.info(f"/{command} from {telegram_user_id} rejected: {type(e).__name__}: {e}")
            return handler.describe_error(e)

        except Exception as e:
            logger.error(f"Error handling /{command} from {telegram_user_id}: {e}", exc_info=True)
            return Messages.ERROR
