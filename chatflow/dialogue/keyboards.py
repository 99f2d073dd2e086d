"""Button layouts for each prompt."""

from ..models import Button, Keyboard, Language, Mode, NameAction


def languages_keyboard() -> Keyboard:
    """All languages on a single row."""
    return (tuple(Button(lang.label, lang.value) for lang in Language),)


def modes_keyboard() -> Keyboard:
    """One mode per row."""
    return tuple((Button(mode.label, mode.value),) for mode in Mode)


def name_keyboard() -> Keyboard:
    ok = NameAction.OK
    return ((Button(ok.label, ok.value),),)
