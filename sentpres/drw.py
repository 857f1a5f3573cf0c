"""Drawing surface and fallback font sets used to render slides."""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional

import pygame

# the longest run of text drawn in one piece
MAX_TEXT_LEN = 1023

Color = tuple[int, int, int]


def fit_text(
    text: str, max_width: int, measure: Callable[[str], int]
) -> tuple[str, int]:
    """Shorten *text* until *measure* says it fits into *max_width*.

    Returns the text to draw and its measured width. Shortened text of at
    least three characters ends in "..."; nothing fits gives ("", 0).
    """
    length = min(len(text), MAX_TEXT_LEN)
    width = measure(text[:length]) if length else 0
    while length and width > max_width:
        length -= 1
        width = measure(text[:length]) if length else 0
    if not length:
        return "", 0
    shown = text[:length]
    if length < len(text) and length >= 3:
        shown = shown[:-3] + "..."
    return shown, width


def parse_color(name: str) -> Color:
    """Turn a colour name or "#rgb"-style hex spec into an (r, g, b) tuple."""
    if name.startswith("#"):
        digits = name[1:]
        per_channel, rest = divmod(len(digits), 3)
        if rest or not 1 <= per_channel <= 4 or not all(
            ch in string.hexdigits for ch in digits
        ):
            raise ValueError(f"cannot allocate color '{name}'")
        channels = [
            int(digits[pos:pos + per_channel], 16)
            for pos in range(0, 3 * per_channel, per_channel)
        ]
        # widen to 16 bits as the X server does, then keep the top 8 bits
        r, g, b = ((value << (16 - 4 * per_channel)) >> 8 for value in channels)
        return r, g, b
    try:
        color = pygame.Color(name)
    except ValueError as exc:
        raise ValueError(f"cannot allocate color '{name}'") from exc
    return color.r, color.g, color.b


def _has_glyph(font: Any, char: str) -> bool:
    try:
        metrics = font.metrics(char)
    except (pygame.error, UnicodeError):
        return False
    return bool(metrics) and metrics[0] is not None


@dataclass
class FontSet:
    """An ordered list of fonts; each character uses the first one that has it."""

    fonts: list

    def __post_init__(self) -> None:
        if not self.fonts:
            raise ValueError("a font set needs at least one font")

    @classmethod
    def load(cls, names: Iterable[str], size: int) -> "FontSet":
        """Load the named system fonts at *size*, skipping names not found."""
        if not pygame.font.get_init():
            pygame.font.init()
        fonts = []
        for name in names:
            path = pygame.font.match_font(name)
            if path is None:
                continue
            try:
                fonts.append(pygame.font.Font(path, size))
            except (OSError, pygame.error):
                continue
        if not fonts:
            fonts.append(pygame.font.Font(None, size))
        return cls(fonts)

    def height(self) -> int:
        """Line height of the primary font."""
        return self.fonts[0].get_height()

    def _font_for(self, char: str) -> Any:
        return next(
            (font for font in self.fonts if _has_glyph(font, char)), self.fonts[0]
        )

    def _runs(self, text: str) -> Iterator[tuple[Any, str]]:
        """Split *text* into consecutive runs drawn with the same font."""
        current: Optional[Any] = None
        run: list[str] = []
        for char in text:
            font = self._font_for(char)
            if font is not current and run:
                yield current, "".join(run)
                run = []
            current = font
            run.append(char)
        if run:
            yield current, "".join(run)

    def width(self, text: str) -> int:
        """Rendered width of *text*, using fallback fonts where needed."""
        return sum(font.size(run)[0] for font, run in self._runs(text))


class Canvas:
    """An off-screen surface with a two-colour scheme and a font set."""

    def __init__(
        self,
        width: int,
        height: int,
        foreground: Color,
        background: Color,
        fonts: Optional[FontSet] = None,
    ) -> None:
        self.foreground = foreground
        self.background = background
        self.fonts = fonts
        self.width = width
        self.height = height
        self.surface = pygame.Surface((width, height))

    def resize(self, width: int, height: int) -> None:
        """Replace the surface with a fresh one of the new size."""
        self.width = width
        self.height = height
        self.surface = pygame.Surface((width, height))

    def rect(
        self, x: int, y: int, w: int, h: int, filled: bool = True, invert: bool = False
    ) -> None:
        """Draw a rectangle in the foreground colour, or background if *invert*."""
        color = self.background if invert else self.foreground
        area = pygame.Rect(x, y, w, h)
        if filled:
            self.surface.fill(color, area)
        else:
            pygame.draw.rect(self.surface, color, area, 1)

    def text(
        self,
        x: int,
        y: int,
        w: int,
        h: int,
        lpad: int,
        text: str,
        invert: bool = False,
    ) -> int:
        """Fill the box and draw *text* in it, left padded and vertically centred.

        Text that does not fit is shortened. Returns the right edge of the box,
        or 0 when no fonts are set.
        """
        if self.fonts is None:
            return 0
        fill = self.foreground if invert else self.background
        ink = self.background if invert else self.foreground
        self.surface.fill(fill, pygame.Rect(x, y, w, h))
        end = x + w
        x += lpad
        w -= lpad
        for font, run in self.fonts._runs(text):
            shown, used = fit_text(run, max(w, 0), lambda s, f=font: f.size(s)[0])
            if not shown:
                continue
            top = y + (h - font.get_height()) // 2
            self.surface.blit(font.render(shown, True, ink), (x, top))
            x += used
            w -= used
        return end