"""Commands module."""

from .commands import ADMIN_COMMANDS, GENERAL_COMMANDS, CommandHandler, ICommandHandler
from .parser import ParsedCommand, parse_command

__all__ = [
    "CommandHandler",
    "ICommandHandler",
    "GENERAL_COMMANDS",
    "ADMIN_COMMANDS",
    "ParsedCommand",
    "parse_command",
]
