"""Built-in capsule definitions."""

from .button import BUTTON
from .card import CARD
from .image import IMAGE
from .input import INPUT
from .lists import LIST
from .stack import STACK
from .switch import SWITCH
from .text import TEXT

ALL_CAPSULES = (BUTTON, TEXT, INPUT, IMAGE, SWITCH, CARD, STACK, LIST)

__all__ = [
    # Content
    "BUTTON",
    "TEXT",
    "INPUT",
    "IMAGE",
    "SWITCH",
    "LIST",
    # Containers
    "CARD",
    "STACK",
    # Collection
    "ALL_CAPSULES",
]
