import random
import wave

import numpy as np
import pytest

from otodecks.app import Mixer, OtoDecks, main


def _write_wav(path, seconds=0.5, rate=8000):
    t = np.arange(int(seconds * rate)) / rate
    data = (0.5 * np.sin(2 * np.pi * 220 * t) * 32767).astype("<i2")
    with wave.open(str(path), "wb") as writer:
        writer.setnchannels(1)
        writer.setsampwidth(2)
        writer.setframerate(rate)
        writer.writeframes(data.tobytes())
    return path


class _Source:
    def __init__(self, level):
        self.level = level
        self.prepared = []
        self.released = False

    def prepare_to_play(self, samples_per_block, sample_rate):
        self.prepared.append((samples_per_block, sample_rate))

    def next_audio_block(self, num_samples):
        return np.full((2, num_samples), self.level)

    def release_resources(self):
        self.released = True


def test_mixer_sums_inputs():
    mixer = Mixer()
    mixer.add_input(_Source(0.25))
    mixer.add_input(_Source(0.5))
    block = mixer.next_audio_block(16)
    assert block.shape == (2, 16)
    assert np.allclose(block, 0.75)


def test_mixer_ignores_duplicate_input():
    mixer = Mixer()
    source = _Source(0.1)
    mixer.add_input(source)
    mixer.add_input(source)
    assert len(mixer.inputs) == 1


def test_mixer_prepares_late_inputs_and_releases():
    mixer = Mixer()
    mixer.prepare_to_play(256, 48000.0)
    source = _Source(0.0)
    mixer.add_input(source)
    assert source.prepared == [(256, 48000.0)]
    mixer.release_resources()
    assert source.released is True


def test_layout_partitions_window():
    app = OtoDecks()
    width, height = 800, 600
    bounds = app.layout(width, height)
    d1, beats, d2, pl = bounds["deck1"], bounds["beats"], bounds["deck2"], bounds["playlist"]
    assert d1[2] + beats[2] + d2[2] == width
    assert beats[0] == d1[2]
    assert d2[0] == d1[2] + beats[2]
    assert pl[1] == d1[3]
    assert pl[1] + pl[3] == height
    assert pl[2] == width


def test_silence_without_tracks():
    app = OtoDecks()
    app.prepare_to_play(64, 8000)
    block = app.next_audio_block(64)
    assert block.shape == (2, 64)
    assert not block.any()


def test_prepare_twice_does_not_duplicate_players():
    app = OtoDecks()
    app.prepare_to_play(64, 8000)
    app.prepare_to_play(64, 8000)
    assert len(app.mixer.inputs) == 2


def test_colour_change_reaches_both_waveforms():
    app = OtoDecks(rng=random.Random(7))
    colour = app.beats.change_colours()
    assert app.deck1.waveform.waveform_colour == colour
    assert app.deck2.waveform.waveform_colour == colour


def test_decks_linked_to_beats():
    app = OtoDecks()
    assert app.beats.decks == (app.deck1, app.deck2)
    assert app.deck1.beats is app.beats
    assert app.playlist.decks[2] is app.deck2


def test_main_prints_deck_titles(tmp_path, capsys):
    track = _write_wav(tmp_path / "tone.wav")
    assert main(["--deck1", str(track), str(track)]) == 0
    out = capsys.readouterr().out
    assert "Deck 1: tone.wav" in out
    assert "Deck 2: No track loaded" in out


def test_main_renders_mix(tmp_path):
    track = _write_wav(tmp_path / "tone.wav")
    output = tmp_path / "mix.wav"
    rate = 8000
    seconds = 0.25
    assert main(["--deck1", str(track), "--render", str(output),
                 "--seconds", str(seconds), "--sample-rate", str(rate)]) == 0
    with wave.open(str(output), "rb") as reader:
        assert reader.getnchannels() == 2
        assert reader.getframerate() == rate
        assert reader.getnframes() == int(seconds * rate)
        data = np.frombuffer(reader.readframes(reader.getnframes()), dtype="<i2")
    assert np.abs(data).max() > 0


def test_main_reports_bad_file(tmp_path, capsys):
    bad = tmp_path / "bad.wav"
    bad.write_bytes(b"nope")
    assert main(["--deck1", str(bad)]) == 1
    assert "otodecks:" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [["--seconds", "0"]])
def test_main_without_tracks_succeeds(argv, capsys):
    assert main(argv) == 0
    assert "No BPM" in capsys.readouterr().out