import random

import pytest

from otodecks.colour import WAVEFORM_DEFAULT, Colour


def test_argb_round_trip():
    assert Colour.from_argb(0xFF4D3BB7).to_argb() == 0xFF4D3BB7


def test_from_argb_components():
    colour = Colour.from_argb(0xFF4D3BB7)
    assert (colour.alpha, colour.red, colour.green, colour.blue) == (0xFF, 0x4D, 0x3B, 0xB7)


def test_default_waveform_colour():
    assert WAVEFORM_DEFAULT.to_argb() == 0xFF4D3BB7


def test_random_is_opaque_and_in_range():
    rng = random.Random(7)
    for _ in range(50):
        colour = Colour.random(rng)
        assert colour.alpha == 255
        assert all(0 <= c <= 255 for c in (colour.red, colour.green, colour.blue))


def test_random_is_reproducible_with_seed():
    first = Colour.random(random.Random(3))
    second = Colour.random(random.Random(3))
    assert first.to_argb() == second.to_argb()
    assert (first.red, first.green, first.blue) == (second.red, second.green, second.blue)


def test_invalid_component_rejected():
    with pytest.raises(ValueError):
        Colour(256, 0, 0)


def test_invalid_argb_rejected():
    with pytest.raises(ValueError):
        Colour.from_argb(-1)