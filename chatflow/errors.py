"""Error types raised across the dialogue engine."""


class ChatflowError(Exception):
    """Base class for chatflow errors."""


class TransportError(ChatflowError):
    """A send, edit or delete call to the chat platform failed."""


class StoreError(ChatflowError):
    """The state store could not be read or written."""


class UnrecognizedCallbackPayload(ChatflowError, ValueError):
    """A button callback carried a tag that matches no known option."""

    def __init__(self, kind: str, payload: str | None):
        super().__init__(f"Unrecognized {kind} callback payload: {payload!r}")
        self.kind = kind
        self.payload = payload


class CommandError(ChatflowError, ValueError):
    """A slash command was recognized but its arguments are malformed."""

    def __init__(self, command: str, usage: str):
        super().__init__(f"Bad arguments for /{command}. Usage: {usage}")
        self.command = command
        self.usage = usage


class NotStartedError(ChatflowError, RuntimeError):
    """A component was used before start() or after stop()."""
