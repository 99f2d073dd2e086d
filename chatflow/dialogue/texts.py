"""User-facing copy. Anything the user typed is escaped, messages use HTML."""

from html import escape

from ..models import Language, Profile

LANGUAGE_PROMPT = "Let's start! What's your language?"
LANGUAGE_REMINDER = "Please, select your language."
PLAIN_TEXT_REQUEST = "Send me plain text."
MODE_COMMAND_PROMPT = "Select mode:"

_NAME_PROMPTS = {
    Language.EN: "What's your name?",
    Language.UA: "Як тебе звати?",
}

_GREETINGS = {
    Language.EN: "Hello",
    Language.UA: "Привіт",
}

_MODE_REMINDERS = {
    Language.EN: "Please, select the mode.",
    Language.UA: "Будь ласка, оберіть режим.",
}

_UNSELECTED = {
    Language.EN: "unselected",
    Language.UA: "не вибрано",
}


def name_prompt(language: Language) -> str:
    return _NAME_PROMPTS[language]


def confirm_name(language: Language, name: str, previous: str | None = None) -> str:
    """Greeting with the candidate name; a replaced name is shown struck through."""
    greet = _GREETINGS[language]
    if previous is None:
        return f"{greet}, {escape(name)}"
    return f"{greet}, <s>{escape(previous)}</s> {escape(name)}"


def describe(user: Profile) -> str:
    mode = user.mode.label if user.mode else _UNSELECTED[user.language]
    return f"{escape(user.name)} ⫶ {escape(mode)}"


def mode_reminder(language: Language) -> str:
    return _MODE_REMINDERS[language]


def greet_username(username: str) -> str:
    return f"Your name is @{escape(username)}"


def greet_username_and_age(username: str, age: int) -> str:
    return f"Your username is @{escape(username)} and age is {age}"


def rand_value(value: int) -> str:
    return f"Hello maintainer! Your rand value: {value}"


def reset_done(conversation_id: int) -> str:
    return f"Conversation {conversation_id} reset."
