"""Telegram adapter built on aiogram.

``TelegramGateway`` renders prompts through the Bot API. ``create_router``
turns aiogram updates into inbound events for the update processor.
"""

from aiogram import Bot, Dispatcher, Router, types
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramAPIError, TelegramBadRequest

from ..errors import TransportError
from ..logging_config import get_logger
from ..models import CallbackQuery, Keyboard, TextMessage
from ..processor import IUpdateProcessor

logger = get_logger(__name__)


def create_bot(token: str) -> Bot:
    """Create a bot that renders HTML markup."""
    return Bot(token=token, default=DefaultBotProperties(parse_mode=ParseMode.HTML))


def to_markup(keyboard: Keyboard | None) -> types.InlineKeyboardMarkup | None:
    """Convert a button layout into Telegram's inline keyboard."""
    if keyboard is None:
        return None
    return types.InlineKeyboardMarkup(
        inline_keyboard=[
            [
                types.InlineKeyboardButton(text=button.text, callback_data=button.payload)
                for button in row
            ]
            for row in keyboard
        ]
    )


class TelegramGateway:
    """Render gateway backed by the Telegram Bot API."""

    def __init__(self, bot: Bot):
        self._bot = bot

    async def send_text(
        self, conversation_id: int, text: str, keyboard: Keyboard | None = None
    ) -> int:
        try:
            sent = await self._bot.send_message(
                chat_id=conversation_id,
                text=text,
                reply_markup=to_markup(keyboard),
            )
        except TelegramAPIError as e:
            raise TransportError(f"send to {conversation_id} failed: {e}") from e
        return sent.message_id

    async def edit_text(
        self,
        conversation_id: int,
        message_id: int,
        text: str,
        keyboard: Keyboard | None = None,
    ) -> int:
        try:
            await self._bot.edit_message_text(
                text=text,
                chat_id=conversation_id,
                message_id=message_id,
                reply_markup=to_markup(keyboard),
            )
        except TelegramBadRequest as e:
            # Same text and buttons as already shown
            if "message is not modified" not in str(e).lower():
                raise TransportError(
                    f"edit of #{message_id} in {conversation_id} failed: {e}"
                ) from e
        except TelegramAPIError as e:
            raise TransportError(
                f"edit of #{message_id} in {conversation_id} failed: {e}"
            ) from e
        return message_id

    async def delete_message(self, conversation_id: int, message_id: int) -> None:
        try:
            await self._bot.delete_message(chat_id=conversation_id, message_id=message_id)
        except TelegramAPIError as e:
            raise TransportError(
                f"delete of #{message_id} in {conversation_id} failed: {e}"
            ) from e


def text_event(message: types.Message) -> TextMessage:
    """Build an inbound text event from an aiogram message."""
    return TextMessage(
        conversation_id=message.chat.id,
        sender_id=message.from_user.id if message.from_user else None,
        text=message.text,
    )


def callback_event(query: types.CallbackQuery) -> CallbackQuery | None:
    """Build an inbound callback event, None if the pressed message is gone."""
    origin = query.message
    if origin is None or isinstance(origin, types.InaccessibleMessage):
        return None
    return CallbackQuery(
        conversation_id=origin.chat.id,
        sender_id=query.from_user.id,
        origin_message_id=origin.message_id,
        payload=query.data,
    )


def create_router(processor: IUpdateProcessor) -> Router:
    """Create an aiogram router feeding every update into the processor."""
    router = Router(name="chatflow")

    @router.message()
    async def on_message(message: types.Message) -> None:
        await processor.handle(text_event(message))

    @router.callback_query()
    async def on_callback(query: types.CallbackQuery) -> None:
        event = callback_event(query)
        try:
            if event is None:
                logger.warning(f"Dropping callback {query.id}: origin message unavailable")
            else:
                await processor.handle(event)
        finally:
            # Stops the client spinner even when the update failed
            try:
                await query.answer()
            except TelegramAPIError as e:
                logger.warning(f"Could not answer callback {query.id}: {e}")

    return router


def create_dispatcher(processor: IUpdateProcessor) -> Dispatcher:
    """Create a dispatcher with the chatflow router attached."""
    dispatcher = Dispatcher()
    dispatcher.include_router(create_router(processor))
    return dispatcher
