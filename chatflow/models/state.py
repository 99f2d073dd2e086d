"""Dialogue state variants and their persisted form.

Each conversation holds exactly one of the variants below. They are plain
frozen dataclasses with no common base; ``DialogueState`` is their union and
code that needs to tell them apart looks them up by class.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Union

from ..errors import StoreError
from .profile import Language, Mode, Profile


@dataclass(frozen=True)
class Start:
    """No interaction begun."""


@dataclass(frozen=True)
class AwaitingLanguage:
    """Language keyboard shown, waiting for a button press."""

    fresh: bool = True


@dataclass(frozen=True)
class AwaitingName:
    """Language chosen, waiting for a typed name."""

    language: Language
    prompt_message_id: int


@dataclass(frozen=True)
class ConfirmingName:
    """Name typed, waiting for confirmation or a revision."""

    language: Language
    candidate_name: str
    prompt_message_id: int


@dataclass(frozen=True)
class AwaitingMode:
    """Name confirmed, mode keyboard shown."""

    user: Profile
    fresh: bool = True


@dataclass(frozen=True)
class ModeSelected:
    """Terminal: the full profile is captured."""

    user: Profile


DialogueState = Union[
    Start,
    AwaitingLanguage,
    AwaitingName,
    ConfirmingName,
    AwaitingMode,
    ModeSelected,
]

STATE_TAGS: dict[type, str] = {
    Start: "start",
    AwaitingLanguage: "awaiting_language",
    AwaitingName: "awaiting_name",
    ConfirmingName: "confirming_name",
    AwaitingMode: "awaiting_mode",
    ModeSelected: "mode_selected",
}


def state_tag(state: DialogueState) -> str:
    """Return the discriminator of a state value."""
    return STATE_TAGS[type(state)]


def _profile_to_dict(user: Profile) -> dict[str, Any]:
    return {
        "name": user.name,
        "language": user.language.value,
        "mode": user.mode.value if user.mode else None,
    }


def _profile_from_dict(data: dict[str, Any]) -> Profile:
    mode = data.get("mode")
    return Profile(
        name=data["name"],
        language=Language(data["language"]),
        mode=Mode(mode) if mode is not None else None,
    )


def state_to_dict(state: DialogueState) -> dict[str, Any]:
    """Convert a state into a JSON-compatible dict tagged with its variant."""
    data: dict[str, Any] = {"tag": state_tag(state)}

    if isinstance(state, AwaitingLanguage):
        data["fresh"] = state.fresh
    elif isinstance(state, AwaitingName):
        data["language"] = state.language.value
        data["prompt_message_id"] = state.prompt_message_id
    elif isinstance(state, ConfirmingName):
        data["language"] = state.language.value
        data["candidate_name"] = state.candidate_name
        data["prompt_message_id"] = state.prompt_message_id
    elif isinstance(state, AwaitingMode):
        data["user"] = _profile_to_dict(state.user)
        data["fresh"] = state.fresh
    elif isinstance(state, ModeSelected):
        data["user"] = _profile_to_dict(state.user)

    return data


_LOADERS: dict[str, Callable[[dict[str, Any]], DialogueState]] = {
    "start": lambda data: Start(),
    "awaiting_language": lambda data: AwaitingLanguage(fresh=bool(data["fresh"])),
    "awaiting_name": lambda data: AwaitingName(
        language=Language(data["language"]),
        prompt_message_id=int(data["prompt_message_id"]),
    ),
    "confirming_name": lambda data: ConfirmingName(
        language=Language(data["language"]),
        candidate_name=data["candidate_name"],
        prompt_message_id=int(data["prompt_message_id"]),
    ),
    "awaiting_mode": lambda data: AwaitingMode(
        user=_profile_from_dict(data["user"]),
        fresh=bool(data["fresh"]),
    ),
    "mode_selected": lambda data: ModeSelected(user=_profile_from_dict(data["user"])),
}


def state_from_dict(data: dict[str, Any]) -> DialogueState:
    """
    Rebuild a state from its tagged dict form.

    Raises:
        StoreError: if the tag is unknown or a field is missing or invalid.
    """
    tag = data.get("tag")
    loader = _LOADERS.get(tag)  # type: ignore[arg-type]
    if loader is None:
        raise StoreError(f"Unknown dialogue state tag: {tag!r}")
    try:
        return loader(data)
    except (KeyError, TypeError, ValueError) as e:
        raise StoreError(f"Malformed {tag} state record: {e}") from e


def dump_state(state: DialogueState) -> str:
    """Serialize a state for the store."""
    return json.dumps(state_to_dict(state), ensure_ascii=False)


def load_state(raw: str) -> DialogueState:
    """Deserialize a state written by dump_state()."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise StoreError(f"Dialogue state record is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise StoreError("Dialogue state record is not an object")
    return state_from_dict(data)
