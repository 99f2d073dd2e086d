"""Outbound rendering data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Button:
    """An inline button: display text plus the callback tag it sends back."""

    text: str
    payload: str


# Rows of buttons, top to bottom
Keyboard = tuple[tuple[Button, ...], ...]
