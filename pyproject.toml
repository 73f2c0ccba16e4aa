[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "otodecks"
version = "0.1.0"
description = "A two-deck DJ player model with EQ, waveform overview, BPM detection, beat sync and a playlist"
requires-python = ">=3.10"
keywords = ["dj", "audio", "bpm", "mixer", "equalizer", "playlist", "wav"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Environment :: Console",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Players",
    "Topic :: Multimedia :: Sound/Audio :: Mixers",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
otodecks = "otodecks.app:main"

[tool.hatch.build.targets.wheel]
packages = ["otodecks"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
