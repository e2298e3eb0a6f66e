[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "handymidi"
version = "0.1.0"
description = "Standard MIDI file reading, timing conversion, playback sequencing and audio effect parameter models for karaoke players"
requires-python = ">=3.10"
dependencies = []
keywords = ["midi", "smf", "karaoke", "sequencer", "equalizer", "reverb", "chorus"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["handymidi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
