"""Waveform overview with a clickable playhead."""

from __future__ import annotations

from typing import Callable

import numpy as np

from otodecks.colour import WAVEFORM_DEFAULT, Colour
from otodecks.player import AudioFileError, read_wav


class WaveformDisplay:
    """Holds a track's waveform, the playhead position and its colour."""

    def __init__(self) -> None:
        self.file_loaded = False
        self.position = 0.0
        self.waveform_colour: Colour = WAVEFORM_DEFAULT
        self._channel: np.ndarray | None = None
        self._on_position_change: Callable[[float], None] | None = None

    def load(self, path) -> None:
        """Load the waveform of a WAV file; on failure the display is left empty."""
        self.file_loaded = False
        self._channel = None
        try:
            samples, _ = read_wav(path)
        except AudioFileError:
            raise
        self._channel = samples[0]
        self.file_loaded = True

    def set_position_relative(self, pos: float) -> None:
        if pos != self.position:
            self.position = pos

    def set_position_change_callback(self, callback: Callable[[float], None] | None) -> None:
        self._on_position_change = callback

    def _seek(self, x: float, width: float) -> None:
        if not self.file_loaded:
            return
        if width <= 0:
            raise ValueError("width must be positive")
        pos = x / width
        self.set_position_relative(pos)
        if self._on_position_change is not None:
            self._on_position_change(pos)

    def mouse_down(self, x: float, width: float) -> None:
        """Jump the playhead to the clicked point and report it."""
        self._seek(x, width)

    def mouse_drag(self, x: float, width: float) -> None:
        """Follow a drag with the playhead and report each position."""
        self._seek(x, width)

    def set_waveform_colour(self, colour: Colour) -> None:
        self.waveform_colour = colour

    def peaks(self, width: int) -> list[tuple[float, float]]:
        """Return (min, max) of the first channel for each of ``width`` columns."""
        if width <= 0:
            raise ValueError("width must be positive")
        if self._channel is None:
            return []
        return [
            (float(chunk.min()), float(chunk.max())) if chunk.size else (0.0, 0.0)
            for chunk in np.array_split(self._channel, width)
        ]