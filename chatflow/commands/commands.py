"""Slash commands, including the administrator-only override."""

import random
from dataclasses import dataclass
from html import escape
from typing import Awaitable, Callable, Protocol

from ..dialogue import keyboards, texts
from ..dialogue.locks import ConversationLocks
from ..errors import CommandError
from ..gateway import IRenderGateway
from ..logging_config import get_logger
from ..models import TextMessage
from ..storage import IStateStore
from .parser import ParsedCommand, parse_command

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandSpec:
    """Help entry for one command."""

    name: str
    usage: str
    description: str


GENERAL_COMMANDS = (
    CommandSpec("help", "/help", "display this message."),
    CommandSpec("mode", "/mode", "select mode."),
    CommandSpec("username", "/username <name>", "handle a username."),
    CommandSpec(
        "usernameandage",
        "/usernameandage <name> <age>",
        "handle a username and an age.",
    ),
)

ADMIN_COMMANDS = (
    CommandSpec("rand", "/rand <from> <to>", "generate a number within range."),
    CommandSpec("reset", "/reset [conversation_id]", "reset dialogue state."),
)

_USAGE = {spec.name: spec.usage for spec in GENERAL_COMMANDS + ADMIN_COMMANDS}


def describe_commands(include_admin: bool) -> str:
    lines = ["These commands are supported:"]
    lines += [f"{spec.usage} - {spec.description}" for spec in GENERAL_COMMANDS]
    if include_admin:
        lines.append("")
        lines.append("Maintainer commands:")
        lines += [f"{spec.usage} - {spec.description}" for spec in ADMIN_COMMANDS]
    return escape("\n".join(lines))


def _int_arg(command: ParsedCommand, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise CommandError(command.name, _USAGE[command.name]) from None


class ICommandHandler(Protocol):
    """Handles slash commands ahead of the dialogue."""

    async def handle(self, event: TextMessage) -> bool:
        """Run the command in ``event``. Return False if it is not ours to handle."""
        ...


CommandFunc = Callable[[TextMessage, ParsedCommand], Awaitable[None]]


class CommandHandler:
    """General commands for everyone, override commands for the administrator."""

    def __init__(
        self,
        gateway: IRenderGateway,
        store: IStateStore,
        locks: ConversationLocks,
        admin_id: int,
        bot_username: str | None = None,
        rng: random.Random | None = None,
    ):
        self._gateway = gateway
        self._store = store
        self._locks = locks
        self._admin_id = admin_id
        self._bot_username = bot_username
        self._rng = rng or random.SystemRandom()

        self._general: dict[str, CommandFunc] = {
            "help": self._help,
            "mode": self._mode,
            "username": self._username,
            "usernameandage": self._username_and_age,
        }
        self._admin: dict[str, CommandFunc] = {
            "rand": self._rand,
            "reset": self._reset,
        }

    def is_admin(self, sender_id: int | None) -> bool:
        return sender_id is not None and sender_id == self._admin_id

    async def handle(self, event: TextMessage) -> bool:
        """Run the command in ``event``. Return False if it is not ours to handle.

        Unknown words and admin commands from anyone else are left to the
        dialogue as ordinary text.
        """
        command = parse_command(event.text, self._bot_username)
        if command is None:
            return False

        func = self._general.get(command.name)
        if func is None and self.is_admin(event.sender_id):
            func = self._admin.get(command.name)
        if func is None:
            if command.name in self._admin:
                logger.debug(
                    f"/{command.name} from non-admin {event.sender_id} passed to dialogue"
                )
            return False

        logger.info(f"/{command.name} in {event.conversation_id} from {event.sender_id}")
        try:
            await func(event, command)
        except CommandError as e:
            logger.info(f"Rejected /{command.name} in {event.conversation_id}: {e}")
            await self._gateway.send_text(
                event.conversation_id, escape(f"Usage: {e.usage}")
            )
        return True

    async def _help(self, event: TextMessage, command: ParsedCommand) -> None:
        text = describe_commands(include_admin=self.is_admin(event.sender_id))
        await self._gateway.send_text(event.conversation_id, text)

    async def _mode(self, event: TextMessage, command: ParsedCommand) -> None:
        await self._gateway.send_text(
            event.conversation_id, texts.MODE_COMMAND_PROMPT, keyboards.modes_keyboard()
        )

    async def _username(self, event: TextMessage, command: ParsedCommand) -> None:
        if not command.args:
            raise CommandError(command.name, _USAGE[command.name])
        await self._gateway.send_text(
            event.conversation_id, texts.greet_username(command.args)
        )

    async def _username_and_age(
        self, event: TextMessage, command: ParsedCommand
    ) -> None:
        argv = command.argv
        if len(argv) != 2:
            raise CommandError(command.name, _USAGE[command.name])
        username, age = argv[0], _int_arg(command, argv[1])
        if not 0 <= age <= 255:
            raise CommandError(command.name, _USAGE[command.name])
        await self._gateway.send_text(
            event.conversation_id, texts.greet_username_and_age(username, age)
        )

    async def _rand(self, event: TextMessage, command: ParsedCommand) -> None:
        argv = command.argv
        if len(argv) != 2:
            raise CommandError(command.name, _USAGE[command.name])
        low, high = _int_arg(command, argv[0]), _int_arg(command, argv[1])
        if low > high:
            raise CommandError(command.name, _USAGE[command.name])
        value = self._rng.randint(low, high)
        await self._gateway.send_text(event.conversation_id, texts.rand_value(value))

    async def _reset(self, event: TextMessage, command: ParsedCommand) -> None:
        argv = command.argv
        if len(argv) > 1:
            raise CommandError(command.name, _USAGE[command.name])
        target = _int_arg(command, argv[0]) if argv else event.conversation_id

        async with self._locks.hold(target):
            await self._store.reset(target)
        logger.info(f"Conversation {target} reset by {event.sender_id}")

        await self._gateway.send_text(event.conversation_id, texts.reset_done(target))
