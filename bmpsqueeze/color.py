"""Colour space conversion between RGB and YCbCr."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from bmpsqueeze.blocks import c_round


@dataclass
class Channels:
    """The Y, Cb and Cr planes of an image, each a flat row-major list."""

    y: list[int] = field(default_factory=list)
    cb: list[int] = field(default_factory=list)
    cr: list[int] = field(default_factory=list)


def rgb_to_ycbcr(pixels: Iterable[Iterable[int]]) -> Channels:
    """Convert pixels that unpack as ``(r, g, b)`` into YCbCr planes.

    Cb and Cr are offset by 128; every component is truncated toward zero.
    """
    channels = Channels()
    for pixel in pixels:
        r, g, b = pixel
        channels.y.append(int(0.299000 * r + 0.587000 * g + 0.114000 * b))
        channels.cb.append(int(-0.168736 * r - 0.331264 * g + 0.500000 * b + 128))
        channels.cr.append(int(0.500000 * r - 0.418688 * g - 0.081312 * b + 128))
    return channels


def _clamp(value: int) -> int:
    return max(0, min(255, value))


def ycbcr_to_bgr(y: float, cb: float, cr: float) -> tuple[int, int, int]:
    """Convert one YCbCr sample back to a clamped ``(b, g, r)`` byte triple."""
    b = c_round(y + 1.772 * (cb - 128))
    g = c_round(y - 0.344136 * (cb - 128) - 0.714136 * (cr - 128))
    r = c_round(y + 1.402 * (cr - 128))
    return _clamp(b), _clamp(g), _clamp(r)