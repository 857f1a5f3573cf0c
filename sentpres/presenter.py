"""Slide navigation, window geometry and font size selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .config import LINESPACING, PROGRESS_HEIGHT, USABLE_HEIGHT, USABLE_WIDTH
from .slides import NoSlidesError, Slide, load

log = logging.getLogger(__name__)


def fit_font(
    lines: Sequence[str],
    fontsets: Sequence,
    usable_width: int,
    usable_height: int,
    linespacing: float = LINESPACING,
) -> tuple[int, int, int]:
    """Pick the largest font set the lines fit into.

    *fontsets* are ordered from smallest to largest. Returns the chosen index
    and the width and height of the text block.
    """
    if not fontsets:
        raise ValueError("no font sets to choose from")
    factor = linespacing * (len(lines) - 1) + 1
    top = len(fontsets) - 1
    index = next(
        (
            candidate
            for candidate in range(top, -1, -1)
            if fontsets[candidate].height() * factor <= usable_height
        ),
        0,
    )
    width = 0
    for line in lines:
        current = fontsets[index].width(line)
        widest = current >= width
        while index > 0 and current > usable_width:
            index -= 1
            current = fontsets[index].width(line)
        if widest:
            width = current
    return index, width, int(fontsets[index].height() * factor)


@dataclass
class Geometry:
    """Window size and the part of it content may use."""

    width: int = 0
    height: int = 0
    usable_width: int = 0
    usable_height: int = 0

    def resize(self, width: int, height: int) -> None:
        """Set the window size and derive the usable area."""
        self.width = width
        self.height = height
        self.usable_width = int(USABLE_WIDTH * width)
        self.usable_height = int(USABLE_HEIGHT * height)


class Presentation:
    """A list of slides with a current position."""

    def __init__(
        self, slides: Sequence[Slide], filename: Optional[str] = None, index: int = 0
    ) -> None:
        if not slides:
            raise NoSlidesError("No slides in file")
        self.slides = list(slides)
        self.filename = filename
        self.index = self._clamp(index)

    def __len__(self) -> int:
        return len(self.slides)

    def _clamp(self, index: int) -> int:
        return max(0, min(index, len(self.slides) - 1))

    @property
    def current(self) -> Slide:
        """The slide shown now."""
        return self.slides[self.index]

    def advance(self, step: int) -> bool:
        """Move by *step* slides within bounds; report whether the slide changed."""
        new_index = self._clamp(self.index + step)
        if new_index == self.index:
            return False
        self.index = new_index
        return True

    def reload(self) -> bool:
        """Read the slides again from the file; False when read from stdin."""
        if self.filename is None:
            log.warning("Cannot reload from stdin. Use a file!")
            return False
        with open(self.filename, encoding="utf-8") as stream:
            self.slides = load(stream)
        self.index = self._clamp(self.index)
        return True

    def progress_width(self, width: int) -> int:
        """Length of the progress bar in a window *width* pixels wide."""
        if self.index == 0 or PROGRESS_HEIGHT == 0:
            return 0
        return width * self.index // (len(self.slides) - 1)