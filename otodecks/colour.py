"""ARGB colours used by the deck widgets."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass


@dataclass(frozen=True)
class Colour:
    """An 8-bit-per-channel colour with alpha."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "alpha"):
            component = getattr(self, name)
            if not 0 <= component <= 255:
                raise ValueError(f"{name} must be between 0 and 255, got {component}")

    @classmethod
    def from_argb(cls, value: int) -> Colour:
        """Build a colour from a packed 0xAARRGGBB integer."""
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"ARGB value out of range: {value:#x}")
        return cls(
            red=(value >> 16) & 0xFF,
            green=(value >> 8) & 0xFF,
            blue=value & 0xFF,
            alpha=(value >> 24) & 0xFF,
        )

    @classmethod
    def random(cls, rng: _random.Random | None = None) -> Colour:
        """Return an opaque colour with random red, green and blue."""
        source = rng if rng is not None else _random
        return cls(source.randrange(256), source.randrange(256), source.randrange(256))

    def to_argb(self) -> int:
        """Pack the colour as a 0xAARRGGBB integer."""
        return (self.alpha << 24) | (self.red << 16) | (self.green << 8) | self.blue


BACKGROUND = Colour.from_argb(0xFF211939)
BUTTON = Colour.from_argb(0xFF4D4364)
HIGHLIGHT = Colour.from_argb(0xFFE72BE8)
TRACK = Colour.from_argb(0xFFA8ADAF)
LAVENDER = Colour.from_argb(0xFFCDC1FF)
WAVEFORM_DEFAULT = Colour.from_argb(0xFF4D3BB7)
LOOP_ACTIVE = Colour.from_argb(0xFF5FA5E3)