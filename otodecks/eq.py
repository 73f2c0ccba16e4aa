"""Slider model and the three-band EQ control set."""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable

EQ_MINIMUM = 0.1
EQ_MAXIMUM = 5.0
EQ_INTERVAL = 0.1


class EQBand(Enum):
    """The three EQ bands, valued by their display label."""

    LOW = "Low"
    MID = "Mid"
    HIGH = "High"


# Slider bounds (x, y, width, height); labels sit 35 px lower, 20 px tall.
SLIDER_BOUNDS = {
    EQBand.LOW: (20, 30, 100, 100),
    EQBand.MID: (110, 30, 100, 100),
    EQBand.HIGH: (200, 30, 100, 100),
}
LABEL_BOUNDS = {band: (x, y + 35, w, 20) for band, (x, y, w, _) in SLIDER_BOUNDS.items()}


class Slider:
    """A ranged value, optionally snapped to an interval, that reports changes."""

    def __init__(
        self,
        minimum: float,
        maximum: float,
        interval: float = 0.0,
        value: float = 0.0,
        on_change: Callable[[float], None] | None = None,
    ) -> None:
        if maximum < minimum:
            raise ValueError("maximum must not be below minimum")
        if interval < 0:
            raise ValueError("interval must not be negative")
        self.minimum = float(minimum)
        self.maximum = float(maximum)
        self.interval = float(interval)
        self.on_change = on_change
        self._value = self._constrain(value)

    @property
    def value(self) -> float:
        return self._value

    def _constrain(self, value: float) -> float:
        if self.interval > 0:
            steps = math.floor((value - self.minimum) / self.interval + 0.5)
            value = round(self.minimum + self.interval * steps, 10)
        return min(max(value, self.minimum), self.maximum)

    def set_value(self, value: float) -> None:
        """Set the value, clamped and snapped; notify on_change if it moved."""
        new_value = self._constrain(value)
        if new_value != self._value:
            self._value = new_value
            if self.on_change is not None:
                self.on_change(new_value)


class EQControls:
    """Three rotary gain sliders, one per band, ranging 0.1 to 5.0."""

    def __init__(self) -> None:
        self.sliders = {
            band: Slider(EQ_MINIMUM, EQ_MAXIMUM, EQ_INTERVAL) for band in EQBand
        }

    def slider(self, band: EQBand) -> Slider:
        return self.sliders[band]

    def set_value(self, band: EQBand, value: float) -> None:
        self.sliders[band].set_value(value)