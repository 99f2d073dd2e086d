"""Profile-related data models."""

from dataclasses import dataclass
from enum import Enum

from ..errors import UnrecognizedCallbackPayload


class Language(str, Enum):
    """Interface languages offered at the first step."""

    EN = "EN"
    UA = "UA"

    @property
    def label(self) -> str:
        return _LANGUAGE_LABELS[self]

    @classmethod
    def from_callback(cls, payload: str | None) -> "Language":
        try:
            return cls(payload)
        except ValueError:
            raise UnrecognizedCallbackPayload("language", payload) from None


_LANGUAGE_LABELS = {
    Language.EN: "EN 🇬🇧",
    Language.UA: "UA 🇺🇦",
}


class Mode(str, Enum):
    """Operating modes offered at the last step."""

    OBIMY = "obimy"
    SPOTIFY = "spotify"
    DUNGEONS = "dnd"

    @property
    def label(self) -> str:
        return _MODE_LABELS[self]

    @classmethod
    def from_callback(cls, payload: str | None) -> "Mode":
        try:
            return cls(payload)
        except ValueError:
            raise UnrecognizedCallbackPayload("mode", payload) from None


_MODE_LABELS = {
    Mode.OBIMY: "Obimy",
    Mode.SPOTIFY: "Spotify",
    Mode.DUNGEONS: "D&D",
}


class NameAction(str, Enum):
    """Buttons under the name confirmation prompt."""

    OK = "ok"

    @property
    def label(self) -> str:
        return "Ok"

    @classmethod
    def from_callback(cls, payload: str | None) -> "NameAction":
        try:
            return cls(payload)
        except ValueError:
            raise UnrecognizedCallbackPayload("name action", payload) from None


@dataclass(frozen=True)
class Profile:
    """Data gathered from the user across the dialogue."""

    name: str
    language: Language
    mode: Mode | None = None
