import wave

import numpy as np
import pytest

from otodecks.colour import WAVEFORM_DEFAULT, Colour
from otodecks.player import AudioFileError
from otodecks.waveform import WaveformDisplay


@pytest.fixture
def wav_path(tmp_path):
    frames = (np.sin(np.linspace(0, 20, 400)) * 16384).astype("<i2")
    path = tmp_path / "tone.wav"
    with wave.open(str(path), "wb") as writer:
        writer.setnchannels(1)
        writer.setsampwidth(2)
        writer.setframerate(8000)
        writer.writeframes(frames.tobytes())
    return path


def test_defaults():
    display = WaveformDisplay()
    assert display.file_loaded is False
    assert display.position == 0.0
    assert display.waveform_colour == WAVEFORM_DEFAULT
    assert display.peaks(10) == []


def test_click_ignored_without_file():
    display = WaveformDisplay()
    received = []
    display.set_position_change_callback(received.append)
    display.mouse_down(50, 200)
    assert received == []
    assert display.position == 0.0


def test_click_moves_playhead_and_notifies(wav_path):
    display = WaveformDisplay()
    display.load(wav_path)
    received = []
    display.set_position_change_callback(received.append)
    display.mouse_down(50, 200)
    assert display.position == 50 / 200
    assert received == [50 / 200]


def test_drag_reports_each_position(wav_path):
    display = WaveformDisplay()
    display.load(wav_path)
    received = []
    display.set_position_change_callback(received.append)
    display.mouse_drag(10, 100)
    display.mouse_drag(20, 100)
    assert received == [10 / 100, 20 / 100]


def test_peaks_cover_signal(wav_path):
    display = WaveformDisplay()
    display.load(wav_path)
    columns = display.peaks(40)
    assert len(columns) == 40
    assert all(low <= high for low, high in columns)
    assert max(high for _, high in columns) == pytest.approx(0.5, abs=1e-3)


def test_peaks_rejects_zero_width(wav_path):
    display = WaveformDisplay()
    display.load(wav_path)
    with pytest.raises(ValueError):
        display.peaks(0)


def test_failed_load_leaves_display_empty(tmp_path, wav_path):
    display = WaveformDisplay()
    display.load(wav_path)
    bad = tmp_path / "bad.wav"
    bad.write_bytes(b"junk")
    with pytest.raises(AudioFileError):
        display.load(bad)
    assert display.file_loaded is False
    assert display.peaks(5) == []


def test_set_position_and_colour():
    display = WaveformDisplay()
    display.set_position_relative(0.75)
    colour = Colour(1, 2, 3)
    display.set_waveform_colour(colour)
    assert display.position == 0.75
    assert display.waveform_colour == colour