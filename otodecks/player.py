"""Audio playback with speed, gain, three-band EQ and BPM detection."""

from __future__ import annotations

import math
import wave
from dataclasses import dataclass
from pathlib import Path

import numpy as np

EQ_SAMPLE_RATE = 44100.0
EQ_Q = 1.0 / math.sqrt(2.0)
LOW_SHELF_FREQUENCY = 300.0
PEAK_FREQUENCY = 3000.0
HIGH_SHELF_FREQUENCY = 4500.0


class AudioFileError(ValueError):
    """Raised when an audio file cannot be read."""


@dataclass(frozen=True)
class BiquadCoefficients:
    """Second-order filter coefficients, normalised so that a0 is 1."""

    b0: float
    b1: float
    b2: float
    a1: float
    a2: float


def _normalised(b0, b1, b2, a0, a1, a2) -> BiquadCoefficients:
    return BiquadCoefficients(b0 / a0, b1 / a0, b2 / a0, a1 / a0, a2 / a0)


def _amplitude(gain_factor: float) -> float:
    if gain_factor <= 0:
        raise ValueError("gain factor must be positive")
    return math.sqrt(gain_factor)


def _omega(sample_rate: float, frequency: float) -> float:
    if sample_rate <= 0:
        raise ValueError("sample rate must be positive")
    return 2.0 * math.pi * max(frequency, 2.0) / sample_rate


def low_shelf(sample_rate, frequency, q, gain_factor) -> BiquadCoefficients:
    """Low-shelf filter boosting or cutting below ``frequency``."""
    a = _amplitude(gain_factor)
    omega = _omega(sample_rate, frequency)
    cos_o = math.cos(omega)
    beta = math.sin(omega) * math.sqrt(a) / q
    aminus1, aplus1 = a - 1.0, a + 1.0
    am1_cos = aminus1 * cos_o
    return _normalised(
        a * (aplus1 - am1_cos + beta),
        a * 2.0 * (aminus1 - aplus1 * cos_o),
        a * (aplus1 - am1_cos - beta),
        aplus1 + am1_cos + beta,
        -2.0 * (aminus1 + aplus1 * cos_o),
        aplus1 + am1_cos - beta,
    )


def high_shelf(sample_rate, frequency, q, gain_factor) -> BiquadCoefficients:
    """High-shelf filter boosting or cutting above ``frequency``."""
    a = _amplitude(gain_factor)
    omega = _omega(sample_rate, frequency)
    cos_o = math.cos(omega)
    beta = math.sin(omega) * math.sqrt(a) / q
    aminus1, aplus1 = a - 1.0, a + 1.0
    am1_cos = aminus1 * cos_o
    return _normalised(
        a * (aplus1 + am1_cos + beta),
        a * -2.0 * (aminus1 + aplus1 * cos_o),
        a * (aplus1 + am1_cos - beta),
        aplus1 - am1_cos + beta,
        2.0 * (aminus1 - aplus1 * cos_o),
        aplus1 - am1_cos - beta,
    )


def peak_filter(sample_rate, frequency, q, gain_factor) -> BiquadCoefficients:
    """Peaking filter centred on ``frequency``."""
    a = _amplitude(gain_factor)
    omega = _omega(sample_rate, frequency)
    alpha = 0.5 * math.sin(omega) / q
    c2 = -2.0 * math.cos(omega)
    return _normalised(
        1.0 + alpha * a, c2, 1.0 - alpha * a,
        1.0 + alpha / a, c2, 1.0 - alpha / a,
    )


class BiquadFilter:
    """Stateful biquad filter; passes audio through until coefficients are set."""

    def __init__(self, coefficients: BiquadCoefficients | None = None) -> None:
        self.coefficients = coefficients
        self._state: list[tuple[float, float]] = []

    def process(self, samples) -> np.ndarray:
        """Filter a 1-D block or a (channels, frames) block, keeping state per channel."""
        data = np.asarray(samples, dtype=np.float64)
        if self.coefficients is None:
            return data.copy()
        rows = np.atleast_2d(data)
        if len(self._state) != rows.shape[0]:
            self._state = [(0.0, 0.0)] * rows.shape[0]
        c = self.coefficients
        out = np.empty_like(rows)
        for channel, (row, (z1, z2)) in enumerate(zip(rows, self._state)):
            result = out[channel]
            for i, x in enumerate(row):
                y = c.b0 * x + z1
                z1 = c.b1 * x - c.a1 * y + z2
                z2 = c.b2 * x - c.a2 * y
                result[i] = y
            self._state[channel] = (z1, z2)
        return out[0] if data.ndim == 1 else out

    def reset(self) -> None:
        """Clear the filter's memory."""
        self._state = []


def read_wav(path) -> tuple[np.ndarray, int]:
    """Read a PCM WAV file as floats in [-1, 1], shaped (channels, frames)."""
    try:
        with wave.open(str(Path(path)), "rb") as reader:
            channels = reader.getnchannels()
            width = reader.getsampwidth()
            rate = reader.getframerate()
            raw = reader.readframes(reader.getnframes())
    except (OSError, EOFError, wave.Error) as exc:
        raise AudioFileError(f"cannot read audio file {path}: {exc}") from exc

    if width == 1:
        values = (np.frombuffer(raw, dtype=np.uint8).astype(np.float64) - 128.0) / 128.0
    elif width == 2:
        values = np.frombuffer(raw, dtype="<i2").astype(np.float64) / 32768.0
    elif width == 3:
        bytes3 = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
        ints = bytes3[:, 0] | (bytes3[:, 1] << 8) | (bytes3[:, 2] << 16)
        ints = np.where(ints & 0x800000, ints - 0x1000000, ints)
        values = ints.astype(np.float64) / 8388608.0
    elif width == 4:
        values = np.frombuffer(raw, dtype="<i4").astype(np.float64) / 2147483648.0
    else:
        raise AudioFileError(f"unsupported sample width: {width} bytes")
    return values.reshape(-1, channels).T.copy(), rate


def detect_bpm(samples, sample_rate) -> float:
    """Estimate tempo from peaks in 10 ms energy windows; 0.0 if no beat is found."""
    if sample_rate < 100:
        raise ValueError("sample rate must be at least 100 Hz")
    data = np.asarray(samples, dtype=np.float64)
    if data.size == 0:
        return 0.0
    if data.ndim == 1:
        mono = data
    elif data.ndim == 2:
        mono = (data[0] + data[1]) * 0.5 if data.shape[0] > 1 else data[0]
    else:
        raise ValueError("samples must be 1-D or (channels, frames)")

    rate = int(sample_rate)
    window = rate // 100
    count = len(range(0, mono.size - window, window))
    if count < 3:
        return 0.0
    energy = (mono[: count * window].reshape(count, window) ** 2).sum(axis=1)
    inner = energy[1:-1]
    peaks = np.flatnonzero((inner > energy[:-2]) & (inner > energy[2:])) + 1
    if peaks.size < 2:
        return 0.0
    average_interval = float(np.mean(np.diff(peaks))) * window / rate
    return 60.0 / average_interval


class AudioPlayer:
    """One deck's playback chain: transport, resampler, then low/mid/high EQ."""

    def __init__(self) -> None:
        self.bpm = 0.0
        self.low_filter = BiquadFilter()
        self.mid_filter = BiquadFilter()
        self.high_filter = BiquadFilter()
        self._samples: np.ndarray | None = None
        self._source_rate = 0
        self._sample_rate = EQ_SAMPLE_RATE
        self._position = 0.0
        self._playing = False
        self._gain = 1.0
        self._speed = 1.0

    @property
    def loaded(self) -> bool:
        return self._samples is not None

    @property
    def playing(self) -> bool:
        return self._playing

    @property
    def gain(self) -> float:
        return self._gain

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def length_seconds(self) -> float:
        if self._samples is None:
            return 0.0
        return self._samples.shape[1] / self._source_rate

    @property
    def position_seconds(self) -> float:
        if self._samples is None:
            return 0.0
        return self._position / self._source_rate

    def prepare_to_play(self, samples_per_block: int, sample_rate: float) -> None:
        """Set the output sample rate the player renders at."""
        if sample_rate <= 0:
            raise ValueError("sample rate must be positive")
        self._sample_rate = float(sample_rate)

    def next_audio_block(self, num_samples: int) -> np.ndarray:
        """Render the next block as a (2, num_samples) array."""
        out = np.zeros((2, num_samples))
        if self._playing and self._samples is not None:
            frames = self._samples.shape[1]
            step = self._speed * self._source_rate / self._sample_rate
            positions = self._position + step * np.arange(num_samples)
            indices = np.arange(frames)
            for target, source in zip(out, self._stereo_source()):
                target[:] = np.interp(positions, indices, source, right=0.0)
            out *= self._gain
            self._position += step * num_samples
            if self._position >= frames:
                self._playing = False
        for stage in (self.low_filter, self.mid_filter, self.high_filter):
            out = stage.process(out)
        return out

    def _stereo_source(self) -> tuple[np.ndarray, np.ndarray]:
        channels = self._samples
        if channels.shape[0] == 1:
            return channels[0], channels[0]
        return channels[0], channels[1]

    def release_resources(self) -> None:
        """Drop filter state held between blocks."""
        for stage in (self.low_filter, self.mid_filter, self.high_filter):
            stage.reset()

    def load(self, path) -> None:
        """Load a WAV file, rewind, stop, and detect its tempo."""
        samples, rate = read_wav(path)
        self._samples = samples
        self._source_rate = rate
        self._position = 0.0
        self._playing = False
        self.bpm = self.calculate_bpm()

    def set_gain(self, gain: float) -> None:
        if gain < 0 or gain > 1.0:
            raise ValueError("gain should be between 0 and 1")
        self._gain = float(gain)

    def set_speed(self, ratio: float) -> None:
        if ratio < 0 or ratio > 100.0:
            raise ValueError("speed ratio should be between 0 and 100")
        self._speed = float(ratio)

    def set_position(self, seconds: float) -> None:
        """Move the playhead to ``seconds`` from the start."""
        if self._samples is not None:
            self._position = max(0.0, seconds) * self._source_rate

    def set_position_relative(self, pos: float) -> None:
        """Move the playhead to a fraction (0..1) of the track."""
        if pos < 0 or pos > 1.0:
            raise ValueError("relative position should be between 0 and 1")
        self.set_position(self.length_seconds * pos)

    def start(self) -> None:
        if self._samples is not None:
            self._playing = True

    def stop(self) -> None:
        self._playing = False

    def position_relative(self) -> float:
        """Playhead position as a fraction of the track length."""
        length = self.length_seconds
        return self.position_seconds / length if length > 0 else 0.0

    def is_track_finished(self) -> bool:
        return self.position_seconds >= self.length_seconds

    def set_low_shelf(self, gain_factor: float) -> None:
        self.low_filter.coefficients = low_shelf(
            EQ_SAMPLE_RATE, LOW_SHELF_FREQUENCY, EQ_Q, gain_factor
        )

    def set_peak_filter(self, gain_factor: float) -> None:
        self.mid_filter.coefficients = peak_filter(
            EQ_SAMPLE_RATE, PEAK_FREQUENCY, EQ_Q, gain_factor
        )

    def set_high_shelf(self, gain_factor: float) -> None:
        self.high_filter.coefficients = high_shelf(
            EQ_SAMPLE_RATE, HIGH_SHELF_FREQUENCY, EQ_Q, gain_factor
        )

    def calculate_bpm(self) -> float:
        """Detect the loaded track's tempo; 0.0 when nothing is loaded or no beat found."""
        if self._samples is None:
            return 0.0
        result = detect_bpm(self._samples, self._source_rate)
        if result > 0:
            self.bpm = result
        return result