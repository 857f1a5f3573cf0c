"""Presentation settings: fonts, colours, layout, input bindings and image filters."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import Iterable, Union

MAX_FONTS = 10
MAX_FONT_STR_LEN = 128
FONT_FALLBACKS: tuple[str, ...] = ("dejavu sans", "roboto", "ubuntu")
NUM_FONT_SCALES = 42

FOREGROUND = "#000000"
BACKGROUND = "#FFFFFF"
COLORS: tuple[str, str] = (FOREGROUND, BACKGROUND)

LINESPACING = 1.4

# share of the window that content may occupy at most
USABLE_WIDTH = 0.75
USABLE_HEIGHT = 0.75

# height of the presentation progress bar
PROGRESS_HEIGHT = 5


def _f32(value: float) -> float:
    """Round a double to the nearest single-precision value."""
    return struct.unpack("f", struct.pack("f", value))[0]


def font_size(scale: int) -> int:
    """Return the point size of font scale step *scale* (0 .. NUM_FONT_SCALES-1)."""
    if not 0 <= scale < NUM_FONT_SCALES:
        raise ValueError(
            f"font scale {scale} out of range 0..{NUM_FONT_SCALES - 1}"
        )
    return int(10.0 * _f32(_f32(1.1288) ** scale))


def font_specs(fallbacks: Iterable[str], scale: int) -> list[str]:
    """Build the font pattern strings for every fallback at scale step *scale*."""
    size = font_size(scale)
    specs = []
    for name in fallbacks:
        spec = f"{name}:size={size}"
        if len(spec) >= MAX_FONT_STR_LEN:
            raise ValueError("Font string too long")
        specs.append(spec)
    return specs


def parse_fallbacks(value: str) -> tuple[str, ...]:
    """Parse a comma separated font list, laid over the default fallbacks.

    Empty entries are ignored and at most MAX_FONTS names are taken; default
    fallbacks beyond the number of given names stay in place.
    """
    names = [token for token in value.split(",") if token][:MAX_FONTS]
    return tuple(names) + FONT_FALLBACKS[len(names):]


class Action(enum.Enum):
    """What an input binding does."""

    QUIT = "quit"
    ADVANCE = "advance"
    RELOAD = "reload"


@dataclass(frozen=True)
class Binding:
    """Associates a key name or mouse button number with an action."""

    trigger: Union[str, int]
    action: Action
    step: int = 0


@dataclass(frozen=True)
class Filter:
    """A command that turns files matching *pattern* into farbfeld on stdout."""

    pattern: str
    command: str


MOUSE_BINDINGS: tuple[Binding, ...] = (
    Binding(1, Action.ADVANCE, +1),
    Binding(3, Action.ADVANCE, -1),
    Binding(4, Action.ADVANCE, -1),
    Binding(5, Action.ADVANCE, +1),
)

KEY_BINDINGS: tuple[Binding, ...] = (
    Binding("Escape", Action.QUIT),
    Binding("q", Action.QUIT),
    Binding("Right", Action.ADVANCE, +1),
    Binding("Left", Action.ADVANCE, -1),
    Binding("Return", Action.ADVANCE, +1),
    Binding("space", Action.ADVANCE, +1),
    Binding("BackSpace", Action.ADVANCE, -1),
    Binding("l", Action.ADVANCE, +1),
    Binding("h", Action.ADVANCE, -1),
    Binding("j", Action.ADVANCE, +1),
    Binding("k", Action.ADVANCE, -1),
    Binding("Down", Action.ADVANCE, +1),
    Binding("Up", Action.ADVANCE, -1),
    Binding("Next", Action.ADVANCE, +1),
    Binding("Prior", Action.ADVANCE, -1),
    Binding("n", Action.ADVANCE, +1),
    Binding("p", Action.ADVANCE, -1),
    Binding("r", Action.RELOAD),
)

FILTERS: tuple[Filter, ...] = (
    Filter(r"\.ff$", "cat"),
    Filter(r"\.ff.bz2$", "bunzip2"),
    Filter(r"\.[a-z0-9]+$", "2ff"),
)