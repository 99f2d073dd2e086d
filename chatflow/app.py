"""Application bootstrap and lifecycle management."""

import asyncio
from typing import TYPE_CHECKING, Protocol

from .commands import CommandHandler
from .config import Settings, resolve_db_path
from .errors import NotStartedError
from .dialogue import ConversationLocks, DialogueRouter, StepHandlers
from .gateway import IRenderGateway, LoggingGateway
from .logging_config import get_logger
from .processor import UpdateProcessor
from .storage import IStateStore, StateStore

if TYPE_CHECKING:
    from aiogram import Bot, Dispatcher

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    @property
    def storage(self) -> IStateStore:
        ...

    @property
    def processor(self) -> UpdateProcessor:
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        settings: Settings | None = None,
        db_path: str | None = None,
        gateway: IRenderGateway | None = None,
    ):
        self._settings = settings or Settings.from_env()
        env_db_path = self._settings.database_url if db_path is None else db_path
        self._db_path = resolve_db_path(env_db_path)
        self._gateway_override = gateway

        # Components (will be initialized in start())
        self._storage: IStateStore | None = None
        self._gateway: IRenderGateway | None = None
        self._locks: ConversationLocks | None = None
        self._router: DialogueRouter | None = None
        self._commands: CommandHandler | None = None
        self._processor: UpdateProcessor | None = None
        self._bot: "Bot | None" = None
        self._dispatcher: "Dispatcher | None" = None
        self._polling_task: asyncio.Task | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Storage (no dependencies)
        self._storage = StateStore(self._db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. Gateway (Telegram when a token is configured)
        if self._gateway_override is not None:
            self._gateway = self._gateway_override
        elif self._settings.telegram_token:
            from .gateway.telegram import TelegramGateway, create_bot

            self._bot = create_bot(self._settings.telegram_token)
            self._gateway = TelegramGateway(self._bot)
            logger.info("Telegram gateway initialized")
        else:
            self._gateway = LoggingGateway()
            logger.info("No bot token configured, rendering to the log")

        # 3. Dialogue router and commands (share the per-conversation locks)
        self._locks = ConversationLocks()
        handlers = StepHandlers(self._gateway, bot_username=self._settings.bot_username)
        self._router = DialogueRouter(self._storage, handlers, self._locks)
        self._commands = CommandHandler(
            gateway=self._gateway,
            store=self._storage,
            locks=self._locks,
            admin_id=self._settings.admin_id,
            bot_username=self._settings.bot_username,
        )

        # 4. UpdateProcessor (depends on router + commands)
        self._processor = UpdateProcessor(self._router, self._commands)
        await self._processor.start()
        logger.info("UpdateProcessor started")

        # 5. Polling (only with a real bot)
        if self._bot is not None:
            from .gateway.telegram import create_dispatcher

            self._dispatcher = create_dispatcher(self._processor)
            self._polling_task = asyncio.create_task(
                self._dispatcher.start_polling(self._bot, handle_signals=False)
            )
            logger.info("Telegram polling started")

        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order.

        Polling stops first so no new updates arrive, then in-flight updates
        finish before the store is closed.
        """
        if self._polling_task and self._dispatcher:
            if not self._polling_task.done():
                try:
                    await self._dispatcher.stop_polling()
                except RuntimeError:
                    # Polling task has not entered its loop yet
                    self._polling_task.cancel()
            await asyncio.gather(self._polling_task, return_exceptions=True)
            self._polling_task = None
            logger.info("Telegram polling stopped")
        if self._processor:
            await self._processor.stop()
        if self._bot:
            await self._bot.session.close()
            self._bot = None
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def storage(self) -> IStateStore:
        """Get storage instance."""
        if not self._storage:
            raise NotStartedError("Application not started")
        return self._storage

    @property
    def processor(self) -> UpdateProcessor:
        """Get update processor instance."""
        if not self._processor:
            raise NotStartedError("Application not started")
        return self._processor
