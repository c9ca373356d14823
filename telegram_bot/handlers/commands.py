"""
Command message handler
"""

import logging
from typing import List, Tuple
from aiogram import Router, F
from aiogram.types import Message

from finance.dispatcher import CommandDispatcher
from finance.messages import Messages

logger = logging.getLogger(__name__)
router = Router()


def parse_command_text(text: str) -> Tuple[str, List[str]]:
    """
    Split "/command@bot arg1 arg2" into the command name and its arguments

    Args:
        text: Message text starting with '/'

    Returns:
        (command name without slash and bot mention, arguments)
    """
    parts = text.split()
    command = parts[0][1:].split("@", 1)[0] if parts else ""
    return command, parts[1:]


@router.message(F.text.startswith("/"))
async def handle_command_message(message: Message, commands: CommandDispatcher):
    """
    Forward a command to the dispatcher and send its single response
    """
    if message.from_user is None:
        return

    command, args = parse_command_text(message.text)
    if not command:
        await message.answer(Messages.COMMAND_NOT_FOUND)
        return

    response = await commands.handle_command(message.chat.id, command, args)
    await message.answer(response)


@router.message(F.text)
async def handle_plain_text(message: Message):
    """
    Plain text is not a command
    """
    await message.answer(Messages.COMMAND_NOT_FOUND)
