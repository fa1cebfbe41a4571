"""The closed TAML tag vocabulary."""

from __future__ import annotations

from enum import Enum, auto


class TagCategory(Enum):
    STANDARD_COLOR = auto()
    BRIGHT_COLOR = auto()
    BACKGROUND_COLOR = auto()  # includes bright backgrounds
    TEXT_STYLE = auto()


STANDARD_COLORS: tuple[str, ...] = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
)

BRIGHT_COLORS: tuple[str, ...] = (
    "brightBlack",
    "brightRed",
    "brightGreen",
    "brightYellow",
    "brightBlue",
    "brightMagenta",
    "brightCyan",
    "brightWhite",
)

BACKGROUND_COLORS: tuple[str, ...] = (
    "bgBlack",
    "bgRed",
    "bgGreen",
    "bgYellow",
    "bgBlue",
    "bgMagenta",
    "bgCyan",
    "bgWhite",
    "bgBrightBlack",
    "bgBrightRed",
    "bgBrightGreen",
    "bgBrightYellow",
    "bgBrightBlue",
    "bgBrightMagenta",
    "bgBrightCyan",
    "bgBrightWhite",
)

TEXT_STYLES: tuple[str, ...] = (
    "bold",
    "dim",
    "italic",
    "underline",
    "strikethrough",
)

_CATEGORIES: dict[str, TagCategory] = {
    **{name: TagCategory.STANDARD_COLOR for name in STANDARD_COLORS},
    **{name: TagCategory.BRIGHT_COLOR for name in BRIGHT_COLORS},
    **{name: TagCategory.BACKGROUND_COLOR for name in BACKGROUND_COLORS},
    **{name: TagCategory.TEXT_STYLE for name in TEXT_STYLES},
}

TAML_TAGS: frozenset[str] = frozenset(_CATEGORIES)


def is_valid_tag(name: str) -> bool:
    """Return True if name is one of the 37 TAML tags (case-sensitive)."""
    return name in TAML_TAGS


def tag_category(name: str) -> TagCategory | None:
    return _CATEGORIES.get(name)
