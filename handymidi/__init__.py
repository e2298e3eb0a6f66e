"""MIDI file reading, playback sequencing and audio effect models."""

__version__ = "0.1.0"

__all__ = [
    "chorus",
    "effects",
    "equalizer",
    "event",
    "instruments",
    "midi_file",
    "midi_out",
    "player",
]