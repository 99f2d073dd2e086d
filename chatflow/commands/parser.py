"""Slash command parsing."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParsedCommand:
    """A ``/word args`` message split into its parts."""

    name: str
    args: str = ""

    @property
    def argv(self) -> list[str]:
        return self.args.split()


def parse_command(text: str | None, bot_username: str | None = None) -> ParsedCommand | None:
    """
    Split a slash command into a lowercase command word and its argument text.

    Args:
        text: Message text.
        bot_username: When set, ``/word@other_bot`` is not treated as ours.

    Returns:
        The parsed command, or None if the text is not a command for this bot.
    """
    if not text or not text.startswith("/"):
        return None

    parts = text.split(maxsplit=1)
    word, _, mention = parts[0][1:].partition("@")
    if not word:
        return None
    if mention and bot_username and mention.lower() != bot_username.lstrip("@").lower():
        return None

    args = parts[1].strip() if len(parts) > 1 else ""
    return ParsedCommand(name=word.lower(), args=args)
