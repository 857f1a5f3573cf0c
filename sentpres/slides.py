"""Parsing of the plain text slide format."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, TextIO


class NoSlidesError(ValueError):
    """Raised when the input holds no slides at all."""


@dataclass
class Slide:
    """One slide: its text lines and the image file it embeds, if any."""

    lines: list[str] = field(default_factory=list)
    embed_target: str = ""

    @property
    def embed(self) -> Optional[str]:
        """The embedded image file name, or None for a text slide."""
        return self.embed_target or None


def _is_separator(line: str) -> bool:
    return line == "\n"


def _read_slide(first: str, rest: Iterator[str]) -> tuple[Slide, bool]:
    """Read one slide starting at *first*; report whether input remains."""
    slide = Slide()
    line: Optional[str] = first
    while True:
        if line and not line.startswith("#"):
            text = line[:-1] if line.endswith("\n") else line
            if not slide.lines and text.startswith("@"):
                slide.embed_target = text[1:]
            if text.startswith("\\"):
                text = text[1:]
            slide.lines.append(text)
        line = next(rest, None)
        if line is None:
            return slide, False
        if _is_separator(line):
            return slide, True


def parse_slides(lines: Iterable[str]) -> list[Slide]:
    """Split text lines into slides.

    Slides are separated by empty lines; lines starting with '#' are comments;
    a leading backslash escapes the next character; a slide whose first line
    starts with '@' embeds the named image.
    """
    source = iter(lines)
    slides: list[Slide] = []
    while True:
        first = next(
            (
                line
                for line in source
                if not _is_separator(line) and not line.startswith("#")
            ),
            None,
        )
        if first is None:
            break
        slide, more = _read_slide(first, source)
        slides.append(slide)
        if not more:
            break
    if not slides:
        raise NoSlidesError("No slides in file")
    return slides


def load(stream: TextIO) -> list[Slide]:
    """Read slides from an open text stream."""
    return parse_slides(stream)