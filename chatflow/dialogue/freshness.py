"""Edit-in-place vs delete-and-resend for button prompts.

A prompt is fresh while the bot message holding it is still the latest thing
in the chat. A fresh prompt is edited where it stands. Once the user has typed
something underneath it, the prompt is deleted and sent again so it ends up
at the bottom of the chat.
"""

from ..gateway import IRenderGateway
from ..models import Keyboard


async def replace_prompt(
    gateway: IRenderGateway,
    conversation_id: int,
    message_id: int,
    text: str,
    keyboard: Keyboard | None,
    fresh: bool,
) -> int:
    """Render ``text`` in place of the prompt at ``message_id``.

    Returns the id of the message now holding the prompt.
    """
    if fresh:
        return await gateway.edit_text(conversation_id, message_id, text, keyboard)

    await gateway.delete_message(conversation_id, message_id)
    return await gateway.send_text(conversation_id, text, keyboard)


async def resend_prompt(
    gateway: IRenderGateway,
    conversation_id: int,
    text: str,
    keyboard: Keyboard | None,
) -> bool:
    """Send a new copy of a prompt after the user typed instead of pressing a button.

    Returns the freshness the pending prompt has from now on.
    """
    await gateway.send_text(conversation_id, text, keyboard)
    return False
