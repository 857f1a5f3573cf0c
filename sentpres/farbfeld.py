"""Loading, blending and scaling of farbfeld images produced by filters."""

from __future__ import annotations

import logging
import math
import re
import struct
import subprocess
import sys
from array import array
from contextlib import contextmanager
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Iterable, Sequence

from .config import FILTERS, Filter

log = logging.getLogger(__name__)

MAGIC = b"farbfeld"
HEADER_SIZE = 16


class FarbfeldError(Exception):
    """Raised when an image cannot be filtered or decoded."""


@dataclass(frozen=True)
class Image:
    """An RGB image with 8 bits per channel, stored row by row."""

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("image dimensions must not be negative")
        if len(self.data) != self.width * self.height * 3:
            raise ValueError("image data does not match its dimensions")


def find_filter(filename: str, filters: Iterable[Filter] = FILTERS) -> str:
    """Return the command of the first filter whose pattern matches *filename*."""
    for flt in filters:
        try:
            pattern = re.compile(flt.pattern, re.IGNORECASE)
        except re.error:
            log.warning("Invalid regex '%s'", flt.pattern)
            continue
        if pattern.search(filename):
            return flt.command
    raise FarbfeldError(f"Unable to find matching filter for '{filename}'")


@contextmanager
def open_filtered(
    filename: str, filters: Iterable[Filter] = FILTERS
) -> Iterator[BinaryIO]:
    """Run the matching filter on *filename* and yield its output stream."""
    command = find_filter(filename, filters)
    try:
        source = open(filename, "rb")
    except OSError as exc:
        raise FarbfeldError(f"Unable to open '{filename}': {exc.strerror}") from exc
    with source:
        try:
            proc = subprocess.Popen(
                ["sh", "-c", command], stdin=source, stdout=subprocess.PIPE
            )
        except OSError as exc:
            raise FarbfeldError(f"Unable to filter '{filename}': {exc}") from exc
    try:
        yield proc.stdout
    finally:
        proc.stdout.close()
        proc.wait()


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def decode(stream: BinaryIO, background: Sequence[int]) -> Image:
    """Decode farbfeld data, blending transparency onto *background* (r, g, b)."""
    header = _read_exact(stream, HEADER_SIZE)
    if len(header) != HEADER_SIZE:
        raise FarbfeldError("Unable to read farbfeld header")
    if header[:8] != MAGIC:
        raise FarbfeldError("No valid farbfeld header")
    width, height = struct.unpack(">II", header[8:])

    rowlen = width * 8
    samples = array("H")
    for _ in range(height):
        row = _read_exact(stream, rowlen)
        if len(row) != rowlen:
            raise FarbfeldError("Truncated farbfeld data")
        samples.frombytes(row)
    if sys.byteorder == "little":
        samples.byteswap()

    opacity = [a // 257 for a in samples[3::4]]
    out = bytearray(width * height * 3)
    for channel, bg in enumerate(background[:3]):
        out[channel::3] = bytes(
            ((v // 257) * o + bg * (255 - o)) // 255
            for v, o in zip(samples[channel::4], opacity)
        )
    return Image(width, height, bytes(out))


def fit_size(
    bufwidth: int, bufheight: int, usable_width: int, usable_height: int
) -> tuple[int, int]:
    """Largest size with the image's aspect ratio inside the usable area."""
    if usable_width * bufheight > usable_height * bufwidth:
        return bufwidth * usable_height // bufheight, usable_height
    return usable_width, bufheight * usable_width // bufwidth


def _clamp(value: int, upper: int) -> int:
    if value < 0:
        return 0
    if value >= upper:
        return upper - 1
    return value


def _to_byte(value: float) -> int:
    rounded = math.floor(value + 0.5)
    return 0 if rounded < 0 else 255 if rounded > 255 else rounded


def _axis(size: int, source_size: int) -> list[tuple[float, int, int]]:
    step = source_size / size
    axis = []
    for pos in range(size):
        old = pos * step
        axis.append(
            (
                math.ceil(old) - old,
                _clamp(math.floor(old), source_size),
                _clamp(math.ceil(old), source_size),
            )
        )
    return axis


def _scaled_samples(image: Image, width: int, height: int) -> Iterator[int]:
    src = image.data
    stride = image.width
    columns = [(f, 3 * a, 3 * b) for f, a, b in _axis(width, image.width)]
    for yf, y0, y1 in _axis(height, image.height):
        row0 = 3 * y0 * stride
        row1 = 3 * y1 * stride
        for xf, x0, x1 in columns:
            for ch in range(3):
                c00 = src[row0 + x0 + ch]
                c01 = src[row1 + x0 + ch]
                c10 = src[row0 + x1 + ch]
                c11 = src[row1 + x1 + ch]
                top = c00 * xf + c10 * (1.0 - xf)
                bottom = c01 * xf + c11 * (1.0 - xf)
                yield _to_byte(top * yf + bottom * (1.0 - yf))


def scale(image: Image, width: int, height: int) -> Image:
    """Resample *image* to *width* x *height* with bilinear interpolation."""
    if width < 0 or height < 0:
        raise ValueError("target dimensions must not be negative")
    if width == 0 or height == 0:
        return Image(width, height, b"")
    if image.width == 0 or image.height == 0:
        raise ValueError("cannot scale an empty image")
    return Image(width, height, bytes(_scaled_samples(image, width, height)))


def load_image(
    filename: str, background: Sequence[int], filters: Iterable[Filter] = FILTERS
) -> Image:
    """Filter *filename* to farbfeld and decode it onto *background*."""
    with open_filtered(filename, filters) as stream:
        try:
            return decode(stream, background)
        except FarbfeldError as exc:
            raise FarbfeldError(f"'{filename}': {exc}") from exc