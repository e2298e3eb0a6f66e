"""Standard MIDI file reader with tempo-aware tick and time conversion."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Union

from .event import MidiEvent, MidiEventType, MidiMetaType, meta_type_from_number

__all__ = ["DivisionType", "MidiFileError", "MidiFile", "first_bpm"]

Source = Union[str, os.PathLike, bytes, bytearray, memoryview, BinaryIO]


class DivisionType(Enum):
    """Time division of a MIDI file: pulses per quarter note or SMPTE frames."""

    Invalid = -1
    PPQ = 0
    SMPTE24 = -24
    SMPTE25 = -25
    SMPTE30DROP = -29
    SMPTE30 = -30


_FRAME_RATES = {
    DivisionType.SMPTE24: 24.0,
    DivisionType.SMPTE25: 25.0,
    DivisionType.SMPTE30DROP: 29.97,
    DivisionType.SMPTE30: 30.0,
}

_SMPTE_BY_BYTE = {
    division.value: division for division in _FRAME_RATES
}


class MidiFileError(ValueError):
    """Raised when data is not a readable standard MIDI file."""


class _Cursor:
    """Sequential reader over a byte string; short reads yield zeros."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.data)

    def read(self, count: int) -> bytes:
        chunk = self.data[self.pos:self.pos + max(count, 0)]
        self.pos += len(chunk)
        return chunk

    def byte(self) -> int | None:
        if self.at_end:
            return None
        value = self.data[self.pos]
        self.pos += 1
        return value

    def data_byte(self) -> int:
        value = self.byte()
        return 0 if value is None else value

    def uint(self, size: int) -> int:
        return int.from_bytes(self.read(size).ljust(size, b"\0"), "big")

    def vlq(self) -> int:
        value = 0
        while True:
            b = self.byte()
            if b is None:
                break
            value = ((value << 7) | (b & 0x7F)) & 0xFFFFFFFF
            if not b & 0x80 or self.at_end:
                break
        return value


def _load_bytes(source: Source) -> bytes:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    if hasattr(source, "read"):
        return bytes(source.read())
    return Path(source).read_bytes()


def _by_tick(events: list[MidiEvent]) -> list[MidiEvent]:
    return sorted(events, key=lambda e: e.tick)


class MidiFile:
    """Events of a standard MIDI file, merged across tracks and sorted by tick."""

    def __init__(self) -> None:
        self.clear()

    def clear(self) -> None:
        """Forget all events and reset the header fields."""
        self.format_type = 1
        self.number_of_tracks = 0
        self.resolution = 0
        self.division = DivisionType.PPQ
        self.events: list[MidiEvent] = []
        self.tempo_events: list[MidiEvent] = []
        self.controller_events: list[MidiEvent] = []
        self.program_change_events: list[MidiEvent] = []
        self.time_signature_events: list[MidiEvent] = []

    def controller_and_program_events(self) -> list[MidiEvent]:
        """Controller and program change events together, sorted by tick."""
        return _by_tick(self.controller_events + self.program_change_events)

    def read(self, source: Source, seek_file_chunk_id: bool = False) -> None:
        """Parse a MIDI file from a path, a byte string or a binary file object.

        With ``seek_file_chunk_id`` the "MThd" identifier is not checked.
        Raises MidiFileError when the data is not a MIDI file.
        """
        data = _load_bytes(source)
        self.clear()
        cur = _Cursor(data)

        chunk_id = cur.read(4)
        if not seek_file_chunk_id and chunk_id != b"MThd":
            raise MidiFileError("missing MThd header chunk")
        if cur.uint(4) != 6:
            raise MidiFileError("header chunk size is not 6")

        self.format_type = cur.uint(2)
        self.number_of_tracks = cur.uint(2)
        div = cur.read(2).ljust(2, b"\0")
        signed = div[0] - 256 if div[0] >= 128 else div[0]
        smpte = _SMPTE_BY_BYTE.get(signed)
        if smpte is not None:
            self.division = smpte
            self.resolution = div[1]
        else:
            self.division = DivisionType.PPQ
            self.resolution = div[1] | (div[0] << 8)

        for track in range(self.number_of_tracks):
            try:
                self._read_track(cur, track)
            except MidiFileError:
                self.clear()
                raise

        self.events = _by_tick(self.events)
        self.tempo_events = _by_tick(self.tempo_events)
        self.controller_events = _by_tick(self.controller_events)
        self.program_change_events = _by_tick(self.program_change_events)
        self.time_signature_events = _by_tick(self.time_signature_events)

    def _read_track(self, cur: _Cursor, track: int) -> None:
        chunk_id = cur.read(4)
        size = cur.uint(4)
        start = cur.pos
        end = start + size
        if chunk_id != b"MTrk":
            raise MidiFileError(f"track {track} does not start with MTrk")

        tick = 0
        running = 0
        while cur.pos < end and not cur.at_end:
            delta = cur.vlq()
            tick += delta
            status = cur.byte()
            if status is None:
                break
            if not status & 0x80:
                status = running
                cur.pos -= 1
            else:
                running = status

            kind = status & 0xF0
            ch = status & 0x0F
            if kind == 0x80:
                d1, d2 = cur.data_byte(), cur.data_byte()
                self.create_midi_event(track, tick, delta, MidiEventType.NoteOff, ch, d1, d2)
            elif kind == 0x90:
                d1, d2 = cur.data_byte(), cur.data_byte()
                if d2:
                    self.create_midi_event(track, tick, delta, MidiEventType.NoteOn, ch, d1, d2)
                else:
                    self.create_midi_event(track, tick, delta, MidiEventType.NoteOff, ch, d1, 0)
            elif kind == 0xA0:
                d1, d2 = cur.data_byte(), cur.data_byte()
                self.create_midi_event(
                    track, tick, delta, MidiEventType.NoteAftertouch, ch, d1, d2
                )
            elif kind == 0xB0:
                d1, d2 = cur.data_byte(), cur.data_byte()
                event = self.create_midi_event(
                    track, tick, delta, MidiEventType.Controller, ch, d1, d2
                )
                self.controller_events.append(event)
            elif kind == 0xC0:
                d1 = cur.data_byte()
                event = self.create_midi_event(
                    track, tick, delta, MidiEventType.ProgramChange, ch, d1, 0
                )
                self.program_change_events.append(event)
            elif kind == 0xD0:
                d1 = cur.data_byte()
                self.create_midi_event(
                    track, tick, delta, MidiEventType.ChannelAftertouch, ch, d1, 0
                )
            elif kind == 0xE0:
                d1, d2 = cur.data_byte(), cur.data_byte()
                pitch = ((d2 & 0x7F) << 7) | (d1 & 0x7F)
                self.create_midi_event(track, tick, delta, MidiEventType.PitchBend, ch, pitch, 0)
            elif kind == 0xF0:
                if status in (0xF0, 0xF7):
                    length = cur.vlq()
                    payload = bytes([status]) + cur.read(length)
                    self.create_sysex_event(track, tick, delta, payload)
                elif status == 0xFF:
                    number = cur.data_byte()
                    length = cur.vlq()
                    payload = cur.read(length)
                    if number == 0x2F and cur.pos < end and not cur.at_end:
                        cur.read(1)
                    self.create_meta_event(track, tick, delta, number, payload)

    def create_midi_event(
        self,
        track: int,
        tick: int,
        delta: int,
        event_type: MidiEventType,
        channel: int,
        data1: int,
        data2: int,
    ) -> MidiEvent:
        """Append a channel event and return it."""
        event = MidiEvent(
            tick=tick,
            delta=delta,
            track=track,
            channel=channel,
            data1=data1,
            data2=data2,
            event_type=event_type,
        )
        self.events.append(event)
        return event

    def create_meta_event(
        self, track: int, tick: int, delta: int, number: int, data: bytes
    ) -> MidiEvent:
        """Append a meta event, indexing tempo and time signature events."""
        event = MidiEvent(
            tick=tick,
            delta=delta,
            track=track,
            event_type=MidiEventType.Meta,
            meta_type=meta_type_from_number(number),
            data=bytes(data),
        )
        self.events.append(event)
        if event.meta_type is MidiMetaType.SetTempo:
            self.tempo_events.append(event)
        if event.meta_type is MidiMetaType.TimeSignature:
            self.time_signature_events.append(event)
        return event

    def create_sysex_event(
        self, track: int, tick: int, delta: int, data: bytes
    ) -> MidiEvent:
        """Append a system-exclusive event and return it."""
        event = MidiEvent(
            tick=tick,
            delta=delta,
            track=track,
            event_type=MidiEventType.SysEx,
            data=bytes(data),
        )
        self.events.append(event)
        return event

    def beat_from_tick(self, tick: int) -> float:
        """Number of beats elapsed at a tick."""
        if self.division is DivisionType.PPQ:
            return tick / self.resolution
        rate = _FRAME_RATES.get(self.division)
        return tick / rate if rate else 0.0

    def _tempo_segments(self, bpm_speed: int, divisor: float):
        """Yield (segment end time, tempo event) pairs walking the tempo map."""
        elapsed = 0.0
        last_tick = 0
        tempo = 120.0 + bpm_speed
        for event in self.tempo_events:
            next_time = elapsed + (event.tick - last_tick) / self.resolution / (tempo / divisor)
            yield elapsed, last_tick, tempo, next_time, event
            elapsed = next_time
            last_tick = event.tick
            tempo = event.bpm() + bpm_speed

    def time_from_tick(self, tick: int, bpm_speed: int = 0) -> float:
        """Seconds from the start of the song to a tick."""
        if self.division is DivisionType.PPQ:
            elapsed = 0.0
            last_tick = 0
            tempo = 120.0 + bpm_speed
            for event in self.tempo_events:
                if event.tick >= tick:
                    break
                elapsed += (event.tick - last_tick) / self.resolution / (tempo / 60)
                last_tick = event.tick
                tempo = event.bpm() + bpm_speed
            return elapsed + (tick - last_tick) / self.resolution / (tempo / 60)
        rate = _FRAME_RATES.get(self.division)
        return tick / (self.resolution * rate) if rate else 0.0

    def _tick_at(self, when: float, divisor: float, bpm_speed: int) -> int:
        elapsed = 0.0
        last_tick = 0
        tempo = 120.0 + bpm_speed
        for event in self.tempo_events:
            next_time = elapsed + (event.tick - last_tick) / self.resolution / (tempo / divisor)
            if next_time >= when:
                break
            elapsed = next_time
            last_tick = event.tick
            tempo = event.bpm() + bpm_speed
        return last_tick + int((when - elapsed) * (tempo / divisor) * self.resolution)

    def tick_from_time(self, time: float, bpm_speed: int = 0) -> int:
        """Tick reached after a number of seconds."""
        if self.division is DivisionType.PPQ:
            return self._tick_at(time, 60, bpm_speed)
        rate = _FRAME_RATES.get(self.division)
        return int(time * self.resolution * rate) if rate else 0

    def tick_from_time_ms(self, ms_time: float, bpm_speed: int = 0) -> int:
        """Tick reached after a number of milliseconds."""
        if self.division is DivisionType.PPQ:
            return self._tick_at(ms_time, 60000, bpm_speed)
        rate = _FRAME_RATES.get(self.division)
        return int(ms_time * self.resolution * rate) * 1000 if rate else 0


def first_bpm(source: Source) -> int:
    """Tempo of the first SetTempo event of a file.

    Returns 0 for a missing or malformed file or a format 2 file, and 120
    when the file has no usable tempo event.
    """
    if isinstance(source, (str, os.PathLike)) and not Path(source).exists():
        return 0
    data = _load_bytes(source)
    cur = _Cursor(data)

    cur.read(4)
    if cur.uint(4) != 6:
        return 0
    format_type = cur.uint(2)
    tracks = cur.uint(2)
    if format_type == 2:
        return 0
    cur.read(2)

    for _ in range(tracks):
        chunk_id = cur.read(4)
        size = cur.uint(4)
        if chunk_id != b"MTrk":
            return 0
        cur.pos += size

    index = data.find(b"\xff\x51")
    if index == -1:
        return 120
    cur.pos = index + 1
    number = cur.data_byte()
    length = cur.vlq()
    if number != 0x51 or length != 3:
        return 120
    tempo = cur.uint(3)
    if tempo == 0:
        return 120
    return 60000000 // tempo