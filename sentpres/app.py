"""Command line entry point and the interactive slide viewer window."""

from __future__ import annotations

import os
import sys
from typing import Mapping, Optional, Sequence

import pygame

from .config import (
    COLORS,
    FILTERS,
    FONT_FALLBACKS,
    KEY_BINDINGS,
    LINESPACING,
    MOUSE_BINDINGS,
    NUM_FONT_SCALES,
    PROGRESS_HEIGHT,
    Action,
    Binding,
    Filter,
    font_size,
    parse_fallbacks,
)
from .drw import Canvas, FontSet, parse_color
from .farbfeld import FarbfeldError, Image, fit_size, load_image, scale
from .presenter import Geometry, Presentation, fit_font
from .slides import NoSlidesError, load

PROG = "sentpres"
VERSION = "1"

_KEY_NAMES: dict[int, str] = {
    pygame.K_ESCAPE: "Escape",
    pygame.K_q: "q",
    pygame.K_RIGHT: "Right",
    pygame.K_LEFT: "Left",
    pygame.K_RETURN: "Return",
    pygame.K_SPACE: "space",
    pygame.K_BACKSPACE: "BackSpace",
    pygame.K_l: "l",
    pygame.K_h: "h",
    pygame.K_j: "j",
    pygame.K_k: "k",
    pygame.K_DOWN: "Down",
    pygame.K_UP: "Up",
    pygame.K_PAGEDOWN: "Next",
    pygame.K_PAGEUP: "Prior",
    pygame.K_n: "n",
    pygame.K_p: "p",
    pygame.K_r: "r",
}

_EXPOSE_EVENTS = (
    pygame.VIDEOEXPOSE,
    getattr(pygame, "WINDOWEXPOSED", pygame.VIDEOEXPOSE),
)


class UsageError(Exception):
    """Raised when the command line holds an unknown option."""


def parse_args(argv: Sequence[str]) -> tuple[bool, Optional[str]]:
    """Parse the arguments after the program name.

    Returns whether the version was asked for and the slide file name, which
    is None when slides come from standard input.
    """
    args = list(argv)
    while args:
        arg = args[0]
        if not arg.startswith("-") or arg == "-":
            break
        args.pop(0)
        if arg == "--":
            break
        for flag in arg[1:]:
            if flag == "v":
                return True, None
            raise UsageError(f"unknown option '-{flag}'")
    if not args or args[0] == "-":
        return False, None
    return False, args[0]


class Viewer:
    """Shows a presentation in a window and reacts to keys and mouse buttons."""

    def __init__(
        self,
        presentation: Presentation,
        *,
        size: tuple[int, int] = (0, 0),
        fontsets: Optional[Sequence[FontSet]] = None,
        fallbacks: Sequence[str] = FONT_FALLBACKS,
        colors: Sequence[str] = COLORS,
        filters: Sequence[Filter] = FILTERS,
    ) -> None:
        self.presentation = presentation
        self.foreground = parse_color(colors[0])
        self.background = parse_color(colors[1])
        self.fallbacks = tuple(fallbacks)
        self.filters = tuple(filters)
        self._fontsets = list(fontsets) if fontsets is not None else None
        self.geometry = Geometry()
        self.geometry.resize(*size)
        self.canvas = Canvas(size[0], size[1], self.foreground, self.background)
        self.running = True
        self.dirty = True
        self._images: dict[int, Image] = {}
        self._scaled: dict[int, Image] = {}
        self._load_images()

    @property
    def fontsets(self) -> list[FontSet]:
        """Font sets for every scale step, smallest first."""
        if self._fontsets is None:
            self._fontsets = [
                FontSet.load(self.fallbacks, font_size(step))
                for step in range(NUM_FONT_SCALES)
            ]
        return self._fontsets

    def _load_images(self) -> None:
        self._images = {
            index: load_image(slide.embed, self.background, self.filters)
            for index, slide in enumerate(self.presentation.slides)
            if slide.embed
        }
        self._scaled.clear()

    def _resize(self, width: int, height: int) -> None:
        self.geometry.resize(width, height)
        self.canvas.resize(width, height)

    def _advance(self, step: int) -> None:
        previous = self.presentation.index
        if self.presentation.advance(step):
            self._scaled.pop(previous, None)
            self.dirty = True

    def _reload(self) -> None:
        if self.presentation.reload():
            self._load_images()
            self.dirty = True

    def _dispatch(self, binding: Binding) -> None:
        if binding.action is Action.QUIT:
            self.running = False
        elif binding.action is Action.ADVANCE:
            self._advance(binding.step)
        elif binding.action is Action.RELOAD:
            self._reload()

    def handle_key(self, key: str) -> None:
        """Run every action bound to the key named *key*."""
        for binding in KEY_BINDINGS:
            if binding.trigger == key:
                self._dispatch(binding)

    def handle_button(self, button: int) -> None:
        """Run every action bound to mouse button *button*."""
        for binding in MOUSE_BINDINGS:
            if binding.trigger == button:
                self._dispatch(binding)

    def _draw_text(self) -> None:
        geo = self.geometry
        lines = self.presentation.current.lines
        index, width, height = fit_font(
            lines, self.fontsets, geo.usable_width, geo.usable_height, LINESPACING
        )
        fonts = self.fontsets[index]
        self.canvas.fonts = fonts
        self.canvas.rect(0, 0, geo.width, geo.height, True, True)
        line_height = fonts.height()
        left = (geo.width - width) // 2
        top = (geo.height - height) // 2
        for number, line in enumerate(lines):
            self.canvas.text(
                left,
                int(top + number * LINESPACING * line_height),
                width,
                line_height,
                0,
                line,
                False,
            )
        progress = self.presentation.progress_width(geo.width)
        if progress:
            self.canvas.rect(
                0, geo.height - PROGRESS_HEIGHT, progress, PROGRESS_HEIGHT, True, False
            )

    def _draw_image(self, index: int) -> None:
        geo = self.geometry
        scaled = self._scaled.get(index)
        if scaled is None:
            image = self._images[index]
            width, height = fit_size(
                image.width, image.height, geo.usable_width, geo.usable_height
            )
            scaled = scale(image, width, height)
            self._scaled[index] = scaled
        self.canvas.surface.fill(self.background)
        if scaled.width and scaled.height:
            picture = pygame.image.frombuffer(
                scaled.data, (scaled.width, scaled.height), "RGB"
            )
            self.canvas.surface.blit(
                picture,
                ((geo.width - scaled.width) // 2, (geo.height - scaled.height) // 2),
            )

    def draw(self) -> pygame.Surface:
        """Render the current slide and return the surface holding it."""
        index = self.presentation.index
        if index in self._images:
            self._draw_image(index)
        else:
            self._draw_text()
        self.dirty = False
        return self.canvas.surface

    def _handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            name = _KEY_NAMES.get(event.key)
            if name is not None:
                self.handle_key(name)
        elif event.type == pygame.MOUSEBUTTONDOWN:
            self.handle_button(event.button)
        elif event.type == pygame.VIDEORESIZE:
            self._resize(event.w, event.h)
            self._scaled.pop(self.presentation.index, None)
            self.dirty = True
        elif event.type in _EXPOSE_EVENTS:
            self.dirty = True

    def run(self) -> None:
        """Open the window and process events until asked to quit."""
        pygame.init()
        try:
            info = pygame.display.Info()
            self._resize(info.current_w, info.current_h)
            pygame.display.set_mode(
                (self.geometry.width, self.geometry.height), pygame.RESIZABLE
            )
            pygame.display.set_caption(PROG)
            self.running = True
            self.dirty = True
            while self.running:
                if self.dirty:
                    window = pygame.display.get_surface()
                    window.blit(self.draw(), (0, 0))
                    pygame.display.flip()
                self._handle_event(pygame.event.wait())
                for event in pygame.event.get():
                    if not self.running:
                        break
                    self._handle_event(event)
        finally:
            pygame.quit()


def _resources(environ: Mapping[str, str]) -> tuple[tuple[str, ...], tuple[str, str]]:
    """Font fallbacks and colours, overridden from the environment."""
    fallbacks = FONT_FALLBACKS
    foreground, background = COLORS
    if font := environ.get("SENTPRES_FONT"):
        fallbacks = parse_fallbacks(font)
    foreground = environ.get("SENTPRES_FOREGROUND") or foreground
    background = environ.get("SENTPRES_BACKGROUND") or background
    return fallbacks, (foreground, background)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the presenter; return the process exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        show_version, filename = parse_args(args)
    except UsageError:
        print(f"usage: {PROG} [file]", file=sys.stderr)
        return 1
    if show_version:
        print(f"{PROG}-{VERSION}", file=sys.stderr)
        return 0

    try:
        if filename is None:
            slides = load(sys.stdin)
        else:
            with open(filename, encoding="utf-8") as stream:
                slides = load(stream)
    except OSError as exc:
        print(
            f"{PROG}: Unable to open '{filename}' for reading: {exc.strerror}",
            file=sys.stderr,
        )
        return 1
    except NoSlidesError as exc:
        print(f"{PROG}: {exc}", file=sys.stderr)
        return 1

    fallbacks, colors = _resources(os.environ)
    try:
        viewer = Viewer(
            Presentation(slides, filename), fallbacks=fallbacks, colors=colors
        )
        viewer.run()
    except (FarbfeldError, ValueError, OSError) as exc:
        print(f"{PROG}: {exc}", file=sys.stderr)
        return 1
    return 0