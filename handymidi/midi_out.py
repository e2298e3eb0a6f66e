"""MIDI output that encodes channel and system messages into raw bytes."""

from __future__ import annotations

from typing import Callable, Optional

__all__ = ["MidiOut"]

Sink = Callable[[bytes], None]

_CHANNELS = range(16)


def _discard(message: bytes) -> None:
    """Default sink: drop the message."""


class MidiOut:
    """Encodes MIDI messages and hands each one, as bytes, to a sink callable."""

    def __init__(self, sink: Optional[Sink] = None) -> None:
        self._sink: Sink = sink if sink is not None else _discard
        self._volume = 1.0

    @property
    def volume(self) -> float:
        """Master volume in the range 0.0 to 1.0."""
        return self._volume

    def send_message(self, message: bytes | list[int]) -> None:
        """Send one raw message; every byte is truncated to eight bits."""
        self._sink(bytes(b & 0xFF for b in message))

    def set_volume(self, vol: float) -> None:
        """Clamp the volume to 0..1 and send a universal master volume SysEx."""
        self._volume = min(max(float(vol), 0.0), 1.0)
        value = int(self._volume * 16383)
        self.send_message(
            [0xF0, 0x7F, 0x7F, 0x04, 0x01, value & 0x7F, value >> 7, 0xF7]
        )

    def _send_note(self, status: int, ch: int, note: int, value: int) -> None:
        if not 0 <= note <= 127:
            return
        self.send_message([status + ch, note, value])

    def send_note_off(self, ch: int, note: int, velocity: int) -> None:
        """Send a note off; notes outside 0..127 are ignored."""
        self._send_note(0x80, ch, note, velocity)

    def send_note_on(self, ch: int, note: int, velocity: int) -> None:
        """Send a note on; notes outside 0..127 are ignored."""
        self._send_note(0x90, ch, note, velocity)

    def send_note_aftertouch(self, ch: int, note: int, value: int) -> None:
        """Send polyphonic aftertouch; notes outside 0..127 are ignored."""
        self._send_note(0xA0, ch, note, value)

    def send_controller(self, ch: int, number: int, value: int) -> None:
        """Send a control change."""
        self.send_message([0xB0 + ch, number, value])

    def send_program_change(self, ch: int, number: int) -> None:
        """Send a program change."""
        self.send_message([0xC0 + ch, number])

    def send_channel_aftertouch(self, ch: int, value: int) -> None:
        """Send channel pressure."""
        self.send_message([0xD0 + ch, value])

    def send_pitch_bend(self, ch: int, value: int) -> None:
        """Send a 14-bit pitch bend value as LSB, MSB."""
        self.send_message([0xE0 + ch, value & 0x7F, int(value / 128)])

    def _each_channel(self, ch: Optional[int], number: int) -> None:
        for channel in (_CHANNELS if ch is None else (ch,)):
            self.send_controller(channel, number, 0)

    def send_all_notes_off(self, ch: Optional[int] = None) -> None:
        """All notes off on one channel, or on all sixteen when ch is None."""
        self._each_channel(ch, 123)

    def send_all_sound_off(self, ch: Optional[int] = None) -> None:
        """All sound off on one channel, or on all sixteen when ch is None."""
        self._each_channel(ch, 120)

    def send_reset_all_controllers(self, ch: Optional[int] = None) -> None:
        """Reset all controllers on one channel, or on all sixteen when ch is None."""
        self._each_channel(ch, 121)