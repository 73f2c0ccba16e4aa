"""Track library: import, prefix search, deletion and loading into decks."""

from __future__ import annotations

import wave
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from otodecks.deck import Deck

COLUMNS = ("Deck 1", "Deck 2", "Track Title", "Duration", "Delete")


@dataclass(frozen=True)
class Track:
    """One playlist entry."""

    title: str
    path: Path
    duration: float

    @property
    def duration_text(self) -> str:
        return f"{self.duration:.2f} s"


def audio_file_duration(path) -> float:
    """Length of an audio file in seconds, or 0.0 if it cannot be read."""
    try:
        with wave.open(str(Path(path)), "rb") as reader:
            rate = reader.getframerate()
            frames = reader.getnframes()
    except (OSError, EOFError, wave.Error):
        return 0.0
    return frames / rate if rate > 0 else 0.0


class Playlist:
    """The list of imported tracks and the buttons that send them to a deck."""

    def __init__(self, deck1: Deck | None, deck2: Deck | None) -> None:
        self.decks = {1: deck1, 2: deck2}
        self.tracks: list[Track] = []
        self.search_text = ""
        self._filtered: list[int] = []

    def import_tracks(self, paths: Iterable) -> list[Track]:
        """Add every path that names an existing file; return the tracks added."""
        added = []
        for path in map(Path, paths):
            if path.is_file():
                track = Track(path.name, path.absolute(), audio_file_duration(path))
                self.tracks.append(track)
                added.append(track)
        return added

    def filter_tracks(self, text: str) -> None:
        """Keep only tracks whose title starts with ``text``."""
        self.search_text = text
        self._filtered = [
            index for index, track in enumerate(self.tracks) if track.title.startswith(text)
        ]

    def visible_tracks(self) -> list[tuple[int, Track]]:
        """(index, track) pairs shown; every track when the filter matched nothing."""
        indices = self._filtered or range(len(self.tracks))
        return [(index, self.tracks[index]) for index in indices]

    def row_count(self) -> int:
        return len(self.visible_tracks())

    def delete_track(self, index: int) -> Track | None:
        """Remove the track at ``index`` and reapply the search; out-of-range is ignored."""
        if not 0 <= index < len(self.tracks):
            return None
        removed = self.tracks.pop(index)
        self.filter_tracks(self.search_text)
        return removed

    def load_track_to_deck(self, deck: int, index: int) -> None:
        """Load track ``index`` into deck 1 or 2; out-of-range indices are ignored."""
        if not 0 <= index < len(self.tracks):
            return
        track = self.tracks[index]
        if not track.path.is_file():
            raise FileNotFoundError(f"file not found: {track.path}")
        if deck not in self.decks:
            raise ValueError(f"invalid deck number {deck}")
        target = self.decks[deck]
        if target is not None:
            target.load_track(track.path)