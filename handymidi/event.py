"""MIDI event model: channel, meta and system-exclusive events."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = ["MidiEventType", "MidiMetaType", "MidiEvent", "meta_type_from_number"]


class MidiEventType(Enum):
    """Kinds of MIDI events, valued by their status nibble or marker byte."""

    NoteOff = 0x80
    NoteOn = 0x90
    NoteAftertouch = 0xA0
    Controller = 0xB0
    ProgramChange = 0xC0
    ChannelAftertouch = 0xD0
    PitchBend = 0xE0
    Meta = 0xFF
    SysEx = 0xF7
    Invalid = 0


class MidiMetaType(Enum):
    """Meta event kinds, valued by their meta number."""

    SequenceNumber = 0x00
    TextEvent = 0x01
    CopyrightNotice = 0x02
    SequenceTrackName = 0x03
    InstrumentName = 0x04
    Lyrics = 0x05
    Marker = 0x06
    CuePoint = 0x07
    MIDIChannelPrefix = 0x20
    EndOfTrack = 0x2F
    SetTempo = 0x51
    SMPTEOffset = 0x54
    TimeSignature = 0x58
    KeySignature = 0x59
    SequencerSpecific = 0x7F
    Invalid = 0xFF


_NOT_CHANNEL = (MidiEventType.Invalid, MidiEventType.Meta, MidiEventType.SysEx)


def meta_type_from_number(number: int) -> MidiMetaType:
    """Map a meta event number to its type; unknown numbers are Invalid."""
    try:
        return MidiMetaType(number)
    except ValueError:
        return MidiMetaType.Invalid


@dataclass
class MidiEvent:
    """A single event of a MIDI file, placed on a track at a tick."""

    tick: int = 0
    delta: int = 0
    track: int = 0
    channel: int = -1
    data1: int = 0
    data2: int = 0
    event_type: MidiEventType = MidiEventType.Invalid
    meta_type: MidiMetaType = MidiMetaType.Invalid
    data: bytes = b""

    def message(self) -> int:
        """Packed short message (status | data1 << 8 | data2 << 16), 0 for non-channel events."""
        if self.event_type in _NOT_CHANNEL:
            return 0
        status = self.event_type.value + self.channel
        return status | (self.data1 << 8) | (self.data2 << 16)

    def bpm(self) -> float:
        """Tempo in beats per minute of a SetTempo meta event, else 0."""
        if (
            self.event_type is not MidiEventType.Meta
            or self.meta_type is not MidiMetaType.SetTempo
        ):
            return 0.0
        if len(self.data) < 3:
            raise ValueError("SetTempo event needs three data bytes")
        tempo = int.from_bytes(self.data[:3], "big")
        if tempo == 0:
            raise ValueError("SetTempo event has a zero tempo")
        return 60000000.0 / tempo