"""One deck: transport buttons, volume/speed/position sliders, EQ and waveform."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Sequence

from otodecks.colour import BUTTON, LOOP_ACTIVE, Colour
from otodecks.eq import EQBand, EQControls, Slider
from otodecks.player import AudioPlayer
from otodecks.waveform import WaveformDisplay

if TYPE_CHECKING:
    from otodecks.beats import BeatsComponent

GREEN = Colour.from_argb(0xFF008000)
DARK_GREY = Colour.from_argb(0xFF555555)
RED = Colour.from_argb(0xFFFF0000)

NO_TRACK = "No track loaded"
TIMER_INTERVAL_MS = 500


@contextmanager
def _silenced(slider: Slider) -> Iterator[Slider]:
    callback = slider.on_change
    slider.on_change = None
    try:
        yield slider
    finally:
        slider.on_change = callback


class Deck:
    """Controls for one audio player, wired to its waveform and EQ."""

    def __init__(self, player: AudioPlayer, deck_id: int) -> None:
        self.player = player
        self.deck_id = deck_id
        self.track_title = NO_TRACK
        self.is_playing = False
        self.is_looping = False
        self.beats: BeatsComponent | None = None

        self.play_button_colour = BUTTON
        self.stop_button_colour = BUTTON
        self.loop_button_colour = BUTTON

        self.volume_slider = Slider(0.0, 1.0, on_change=player.set_gain)
        self.speed_slider = Slider(0.0, 10.0, on_change=player.set_speed)
        self.position_slider = Slider(0.0, 1.0, on_change=self._position_slider_moved)

        self.eq = EQControls()
        handlers = {
            EQBand.LOW: player.set_low_shelf,
            EQBand.MID: player.set_peak_filter,
            EQBand.HIGH: player.set_high_shelf,
        }
        for band, handler in handlers.items():
            self.eq.slider(band).on_change = handler

        self.waveform = WaveformDisplay()
        self.waveform.set_position_change_callback(self.position_changed_by_waveform)

    def _position_slider_moved(self, value: float) -> None:
        self.player.set_position_relative(value)
        self.waveform.set_position_relative(value)

    def play(self) -> None:
        """Start playback, rewinding first if the track had reached its end."""
        if not self.is_playing:
            if self.player.position_relative() >= 1.0:
                self.player.set_position_relative(0.0)
            self.player.start()
            self.is_playing = True
            if self.beats is not None:
                self.beats.update_bpm(self.deck_id, self.player.bpm)
        self.play_button_colour = GREEN if self.is_playing else DARK_GREY
        self.stop_button_colour = DARK_GREY

    def stop(self) -> None:
        self.is_playing = False
        self.player.stop()
        self.stop_button_colour = RED
        self.play_button_colour = DARK_GREY

    def toggle_loop(self) -> bool:
        """Switch looping on or off and return the new state."""
        self.is_looping = not self.is_looping
        self.loop_button_colour = LOOP_ACTIVE if self.is_looping else BUTTON
        return self.is_looping

    def set_volume(self, value: float) -> None:
        self.volume_slider.set_value(value)

    def set_speed(self, value: float) -> None:
        self.speed_slider.set_value(value)

    def set_position(self, value: float) -> None:
        self.position_slider.set_value(value)

    def set_eq(self, band: EQBand, value: float) -> None:
        self.eq.set_value(band, value)

    def files_dropped(self, files: Sequence[str | Path]) -> None:
        """Load a dropped file into the player; several files at once are ignored."""
        if len(files) == 1:
            self.player.load(files[0])

    def tick(self) -> None:
        """Periodic update: follow the playhead and handle the end of the track."""
        pos = self.player.position_relative()
        self.waveform.set_position_relative(pos)
        if pos >= 1.0:
            if self.is_looping:
                self.player.set_position_relative(0.0)
                self.player.start()
            else:
                self._handle_track_completion()

    def _handle_track_completion(self) -> None:
        if self.is_looping:
            return
        self.is_playing = False
        self.player.stop()
        if self.player.position_relative() >= 1.0:
            self.player.set_position_relative(0.0)
        self.play_button_colour = DARK_GREY
        self.stop_button_colour = RED

    def load_track(self, path: str | Path) -> None:
        """Load a file into the player and the waveform, and show its title and BPM."""
        self.player.load(path)
        self.waveform.load(path)
        self.track_title = Path(path).name
        if self.beats is not None:
            self.beats.update_bpm(self.deck_id, self.player.bpm)

    def position_changed_by_waveform(self, pos: float) -> None:
        """Seek to a position chosen on the waveform and move the slider to match."""
        self.player.set_position_relative(pos)
        with _silenced(self.position_slider) as slider:
            slider.set_value(pos)

    def set_beats_component(self, beats: BeatsComponent | None) -> None:
        self.beats = beats