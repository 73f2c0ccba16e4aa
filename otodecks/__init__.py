"""Two-deck DJ player model: playback, EQ, waveform, BPM detection, beat sync and playlist."""

__version__ = "0.1.0"
__all__ = ["__version__"]