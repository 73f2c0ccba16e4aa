"""Two decks, a beat-sync panel and a playlist, mixed into one stereo output."""

from __future__ import annotations

import argparse
import random
import sys
import wave
from pathlib import Path

import numpy as np

from otodecks.beats import BeatsComponent
from otodecks.colour import Colour
from otodecks.deck import Deck
from otodecks.player import AudioPlayer
from otodecks.playlist import Playlist

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600


class Mixer:
    """Sums the stereo output of its input sources."""

    def __init__(self) -> None:
        self.inputs: list = []
        self._prepared: tuple[int, float] | None = None

    def add_input(self, source) -> None:
        """Add a source once; it is prepared at once if the mixer already is."""
        if source is None or any(existing is source for existing in self.inputs):
            return
        if self._prepared is not None:
            source.prepare_to_play(*self._prepared)
        self.inputs.append(source)

    def prepare_to_play(self, samples_per_block: int, sample_rate: float) -> None:
        self._prepared = (samples_per_block, sample_rate)
        for source in self.inputs:
            source.prepare_to_play(samples_per_block, sample_rate)

    def next_audio_block(self, num_samples: int) -> np.ndarray:
        out = np.zeros((2, num_samples))
        for source in self.inputs:
            out += source.next_audio_block(num_samples)
        return out

    def release_resources(self) -> None:
        self._prepared = None
        for source in self.inputs:
            source.release_resources()


class OtoDecks:
    """The whole application: players, decks, mixer, playlist and beat panel."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.player1 = AudioPlayer()
        self.player2 = AudioPlayer()
        self.deck1 = Deck(self.player1, 1)
        self.deck2 = Deck(self.player2, 2)
        self.mixer = Mixer()
        self.playlist = Playlist(self.deck1, self.deck2)
        self.beats = BeatsComponent(rng)
        self.beats.on_colour_change = self._apply_colour
        for deck in (self.deck1, self.deck2):
            deck.set_beats_component(self.beats)
        self.beats.set_decks(self.deck1, self.deck2)

    def _apply_colour(self, colour: Colour) -> None:
        for deck in (self.deck1, self.deck2):
            deck.waveform.set_waveform_colour(colour)

    def layout(self, width: int, height: int) -> dict[str, tuple[int, int, int, int]]:
        """Bounds (x, y, w, h): decks 40% each, beats 20% between, playlist below."""
        deck_width = width * 0.4
        beats_width = width * 0.2
        deck_height = height * 0.65
        playlist_height = height - deck_height
        return {
            "deck1": (0, 0, int(deck_width), int(deck_height)),
            "beats": (int(deck_width), 0, int(beats_width), int(deck_height)),
            "deck2": (int(deck_width + beats_width), 0, int(deck_width), int(deck_height)),
            "playlist": (0, int(deck_height), width, int(playlist_height)),
        }

    def prepare_to_play(self, samples_per_block: int, sample_rate: float) -> None:
        self.player1.prepare_to_play(samples_per_block, sample_rate)
        self.player2.prepare_to_play(samples_per_block, sample_rate)
        self.mixer.prepare_to_play(samples_per_block, sample_rate)
        self.mixer.add_input(self.player1)
        self.mixer.add_input(self.player2)

    def next_audio_block(self, num_samples: int) -> np.ndarray:
        return self.mixer.next_audio_block(num_samples)

    def release_resources(self) -> None:
        self.player1.release_resources()
        self.player2.release_resources()
        self.mixer.release_resources()


def _render(app: OtoDecks, output: Path, seconds: float, rate: int, block: int) -> None:
    app.prepare_to_play(block, rate)
    for deck in (app.deck1, app.deck2):
        if deck.player.loaded:
            deck.play()
    blocks = []
    remaining = int(seconds * rate)
    while remaining > 0:
        count = min(block, remaining)
        blocks.append(app.next_audio_block(count))
        for deck in (app.deck1, app.deck2):
            deck.tick()
        remaining -= count
    app.release_resources()
    mix = np.concatenate(blocks, axis=1) if blocks else np.zeros((2, 0))
    pcm = (np.clip(mix, -1.0, 1.0) * 32767).astype("<i2").T.tobytes()
    with wave.open(str(output), "wb") as writer:
        writer.setnchannels(2)
        writer.setsampwidth(2)
        writer.setframerate(rate)
        writer.writeframes(pcm)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="otodecks", description="Two-deck DJ mixer.")
    parser.add_argument("tracks", nargs="*", help="files to import into the playlist")
    parser.add_argument("--deck1", help="WAV file to load into deck 1")
    parser.add_argument("--deck2", help="WAV file to load into deck 2")
    parser.add_argument("--sync", action="store_true", help="match both decks' tempo")
    parser.add_argument("--render", type=Path, help="write the mixed output to this WAV file")
    parser.add_argument("--seconds", type=float, default=10.0)
    parser.add_argument("--sample-rate", type=int, default=44100)
    parser.add_argument("--block-size", type=int, default=512)
    args = parser.parse_args(argv)

    app = OtoDecks()
    try:
        for deck, path in ((app.deck1, args.deck1), (app.deck2, args.deck2)):
            if path:
                deck.load_track(path)
        if args.sync:
            app.beats.sync_beats()
        app.playlist.import_tracks(args.tracks)
        for deck, bpm_text in (
            (app.deck1, app.beats.left_deck_bpm),
            (app.deck2, app.beats.right_deck_bpm),
        ):
            print(f"Deck {deck.deck_id}: {deck.track_title} ({bpm_text})")
        for index, track in app.playlist.visible_tracks():
            print(f"{index}: {track.title} {track.duration_text}")
        if args.render is not None:
            _render(app, args.render, args.seconds, args.sample_rate, args.block_size)
    except (OSError, ValueError) as exc:
        print(f"otodecks: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())