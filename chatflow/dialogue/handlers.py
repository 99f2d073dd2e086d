"""Step handlers: one transition function per (state, input channel).

Every handler renders first and returns the next state afterwards, so a
failed render never reaches the store. ``None`` means the state stays as is.
"""

from dataclasses import replace

from ..commands.parser import parse_command
from ..gateway import IRenderGateway
from ..logging_config import get_logger
from ..models import (
    AwaitingLanguage,
    AwaitingMode,
    AwaitingName,
    CallbackQuery,
    ConfirmingName,
    DialogueState,
    Language,
    Mode,
    ModeSelected,
    NameAction,
    Profile,
    Start,
    TextMessage,
)
from . import keyboards, texts
from .freshness import replace_prompt, resend_prompt

logger = get_logger(__name__)

RESEND_COMMAND = "resend"


class StepHandlers:
    """Transition logic for every dialogue step."""

    def __init__(self, gateway: IRenderGateway, bot_username: str | None = None):
        self._gateway = gateway
        self._bot_username = bot_username

    def _asks_resend(self, event: TextMessage) -> bool:
        command = parse_command(event.text, self._bot_username)
        return command is not None and command.name == RESEND_COMMAND

    async def _request_plain_text(self, conversation_id: int) -> None:
        await self._gateway.send_text(conversation_id, texts.PLAIN_TEXT_REQUEST)

    # Start
    async def start_text(self, state: Start, event: TextMessage) -> DialogueState:
        await self._gateway.send_text(
            event.conversation_id, texts.LANGUAGE_PROMPT, keyboards.languages_keyboard()
        )
        return AwaitingLanguage(fresh=True)

    # AwaitingLanguage
    async def language_text(
        self, state: AwaitingLanguage, event: TextMessage
    ) -> DialogueState:
        """The user typed while the language keyboard waits for a press."""
        text = texts.LANGUAGE_PROMPT if self._asks_resend(event) else texts.LANGUAGE_REMINDER
        fresh = await resend_prompt(
            self._gateway, event.conversation_id, text, keyboards.languages_keyboard()
        )
        return AwaitingLanguage(fresh=fresh)

    async def language_callback(
        self, state: AwaitingLanguage, event: CallbackQuery
    ) -> DialogueState:
        language = Language.from_callback(event.payload)
        logger.info(f"Selected language {language.value} in {event.conversation_id}")

        prompt_id = await replace_prompt(
            self._gateway,
            event.conversation_id,
            event.origin_message_id,
            texts.name_prompt(language),
            None,
            fresh=state.fresh,
        )
        return AwaitingName(language=language, prompt_message_id=prompt_id)

    # AwaitingName
    async def name_text(
        self, state: AwaitingName, event: TextMessage
    ) -> DialogueState | None:
        name = (event.text or "").strip()
        if not name:
            await self._request_plain_text(event.conversation_id)
            return None

        await self._gateway.edit_text(
            event.conversation_id,
            state.prompt_message_id,
            texts.confirm_name(state.language, name),
            keyboards.name_keyboard(),
        )
        return ConfirmingName(
            language=state.language,
            candidate_name=name,
            prompt_message_id=state.prompt_message_id,
        )

    # ConfirmingName
    async def confirm_text(
        self, state: ConfirmingName, event: TextMessage
    ) -> DialogueState | None:
        """A new message while confirming replaces the candidate name."""
        name = (event.text or "").strip()
        if not name:
            await self._request_plain_text(event.conversation_id)
            return None

        await self._gateway.edit_text(
            event.conversation_id,
            state.prompt_message_id,
            texts.confirm_name(state.language, name, previous=state.candidate_name),
            keyboards.name_keyboard(),
        )
        return replace(state, candidate_name=name)

    async def confirm_callback(
        self, state: ConfirmingName, event: CallbackQuery
    ) -> DialogueState:
        NameAction.from_callback(event.payload)
        user = Profile(name=state.candidate_name, language=state.language)

        await self._gateway.edit_text(
            event.conversation_id,
            state.prompt_message_id,
            texts.describe(user),
            keyboards.modes_keyboard(),
        )
        return AwaitingMode(user=user, fresh=True)

    # AwaitingMode
    async def mode_text(self, state: AwaitingMode, event: TextMessage) -> DialogueState:
        if self._asks_resend(event):
            text = texts.describe(state.user)
        else:
            text = texts.mode_reminder(state.user.language)
        fresh = await resend_prompt(
            self._gateway, event.conversation_id, text, keyboards.modes_keyboard()
        )
        return AwaitingMode(user=state.user, fresh=fresh)

    async def mode_callback(
        self, state: AwaitingMode, event: CallbackQuery
    ) -> DialogueState:
        mode = Mode.from_callback(event.payload)
        user = replace(state.user, mode=mode)
        logger.info(f"Selected mode {mode.value} in {event.conversation_id}")

        await replace_prompt(
            self._gateway,
            event.conversation_id,
            event.origin_message_id,
            texts.describe(user),
            None,
            fresh=state.fresh,
        )
        return ModeSelected(user=user)

    # ModeSelected
    async def selected_text(self, state: ModeSelected, event: TextMessage) -> None:
        await resend_prompt(
            self._gateway,
            event.conversation_id,
            texts.mode_reminder(state.user.language),
            keyboards.modes_keyboard(),
        )
        return None
