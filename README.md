# otodecks

A two-deck DJ player model. Each deck plays a WAV track through a resampler
and a three-band EQ (low shelf at 300 Hz, mid peak at 3 kHz, high shelf at
4.5 kHz), keeps a waveform overview with a movable playhead, and can loop.
A beats panel shows each deck's detected BPM and can sync both decks to their
average tempo. A playlist keeps imported tracks, filters them by title prefix
and loads them into either deck. The two decks are summed by a mixer into one
stereo signal.

## Install

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command

```
otodecks [TRACK ...] [--deck1 FILE] [--deck2 FILE] [--sync]
         [--render OUT.wav] [--seconds S] [--sample-rate HZ] [--block-size N]
```

- `TRACK ...` – files to import into the playlist (files that do not exist are
  skipped).
- `--deck1`, `--deck2` – WAV files to load into deck 1 and deck 2.
- `--sync` – set both decks' speed so they play at the average of their BPMs.
- `--render OUT.wav` – play every loaded deck and write the mixed output to a
  16-bit stereo WAV file.
- `--seconds` – length to render (default 10).
- `--sample-rate` – output sample rate (default 44100).
- `--block-size` – samples per rendered block (default 512).

The command prints each deck's track title and BPM text, then one line per
playlist entry (`index: title duration`). On a file or value error it prints
the message to standard error and exits with status 1.

## Library use

```python
from otodecks.app import OtoDecks

app = OtoDecks()
app.prepare_to_play(512, 44100.0)

app.playlist.import_tracks(["kick.wav", "loop.wav"])
app.playlist.load_track_to_deck(1, 0)
app.playlist.load_track_to_deck(2, 1)

app.deck1.play()
app.deck2.play()
app.beats.sync_beats()

block = app.next_audio_block(512)   # (2, 512) array: mixed output of both decks
```

The main pieces:

- `otodecks.player.AudioPlayer` – loading (`load`), gain (0 to 1), speed
  ratio (0 to 100), absolute and relative position, `start`/`stop`, the EQ
  setters `set_low_shelf`, `set_peak_filter`, `set_high_shelf`, and
  `calculate_bpm`. Out-of-range gain, speed or relative position raise
  `ValueError`.
- `otodecks.player.detect_bpm(samples, sample_rate)` – the tempo estimate on
  its own: energy over 10 ms windows, local peaks, 60 divided by the mean peak
  interval; 0.0 when fewer than two peaks are found.
- `otodecks.player.read_wav(path)` – reads 8, 16, 24 or 32-bit PCM WAV as
  floats shaped `(channels, frames)`; unreadable files raise `AudioFileError`.
- `otodecks.player.low_shelf`, `peak_filter`, `high_shelf` and `BiquadFilter`
  – the filter design and the stateful filter used by the EQ.
- `otodecks.eq.EQControls` – Low, Mid and High sliders (`EQBand`), each from
  0.1 to 5.0 in steps of 0.1; `otodecks.eq.Slider` clamps and snaps values and
  calls `on_change` when the value moves.
- `otodecks.waveform.WaveformDisplay` – playhead position, waveform colour,
  `mouse_down`/`mouse_drag` turning an x coordinate into a relative position,
  and `peaks(width)` giving (min, max) per column of the first channel.
- `otodecks.beats.BeatsComponent` – BPM labels (`update_bpm`), `sync_beats`,
  and `change_colours`, which picks a random `Colour` and passes it to
  `on_colour_change`.
- `otodecks.deck.Deck` – `play`, `stop`, `toggle_loop`, volume (0 to 1), speed
  (0 to 10) and position sliders, `set_eq`, `files_dropped`, `load_track`, and
  the periodic `tick`, which follows the playhead and either loops or stops at
  the end of the track.
- `otodecks.playlist.Playlist` – `import_tracks`, prefix search
  (`filter_tracks`), `visible_tracks`, `row_count`, `delete_track` and
  `load_track_to_deck`. When the search matches no title, every track is shown.
- `otodecks.app.Mixer` and `otodecks.app.OtoDecks` – the mixer and the whole
  application, with `layout(width, height)` giving the bounds of both decks,
  the beats panel and the playlist.
- `otodecks.colour.Colour` – ARGB colours, with `from_argb`, `to_argb` and
  `random`.

## What it does not do

- There is no graphical window: the decks, sliders, waveform and playlist are
  models driven from code or from the `otodecks` command.
- There is no live output to a sound device; audio is produced block by block
  with `next_audio_block`, or written to a WAV file with `--render`.
- Only WAV files are read. Other formats can be imported into the playlist but
  show a duration of 0.00 s and cannot be loaded into a deck.