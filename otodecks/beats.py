"""Beat display and tempo synchronisation between two decks."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Callable

from otodecks.colour import Colour

if TYPE_CHECKING:
    from otodecks.deck import Deck

NO_BPM = "No BPM"


def _bpm_text(bpm: float) -> str:
    return f"BPM: {float(bpm)}"


class BeatsComponent:
    """Shows each deck's tempo and can match the two decks to their average BPM."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.left_deck_bpm = NO_BPM
        self.right_deck_bpm = NO_BPM
        self.on_colour_change: Callable[[Colour], None] | None = None
        self._rng = rng
        self._deck1: Deck | None = None
        self._deck2: Deck | None = None

    @property
    def decks(self) -> tuple[Deck | None, Deck | None]:
        return self._deck1, self._deck2

    def update_bpm(self, deck: int, bpm: float) -> None:
        """Show ``bpm`` for deck 1 (left) or deck 2 (right); other deck numbers are ignored."""
        if deck == 1:
            self.left_deck_bpm = _bpm_text(bpm)
        elif deck == 2:
            self.right_deck_bpm = _bpm_text(bpm)

    def set_decks(self, deck1: Deck | None, deck2: Deck | None) -> None:
        """Attach the two decks whose tempos are synchronised."""
        self._deck1 = deck1
        self._deck2 = deck2

    def sync_beats(self) -> None:
        """Set both decks' speed so each plays at the average of their BPMs."""
        if self._deck1 is None or self._deck2 is None:
            return
        player1 = self._deck1.player
        player2 = self._deck2.player
        bpm1 = player1.bpm
        bpm2 = player2.bpm
        if bpm1 <= 0 or bpm2 <= 0:
            return
        average = (bpm1 + bpm2) / 2.0
        player1.set_speed(average / bpm1)
        player2.set_speed(average / bpm2)
        self.left_deck_bpm = _bpm_text(average)
        self.right_deck_bpm = _bpm_text(average)

    def change_colours(self) -> Colour:
        """Pick a random colour, pass it to ``on_colour_change`` and return it."""
        colour = Colour.random(self._rng)
        if self.on_colour_change is not None:
            self.on_colour_change(colour)
        return colour