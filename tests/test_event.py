import dataclasses

import pytest

from handymidi.event import MidiEvent, MidiEventType, MidiMetaType, meta_type_from_number


@pytest.mark.parametrize(
    "number, expected",
    [
        (0, MidiMetaType.SequenceNumber),
        (5, MidiMetaType.Lyrics),
        (32, MidiMetaType.MIDIChannelPrefix),
        (47, MidiMetaType.EndOfTrack),
        (81, MidiMetaType.SetTempo),
        (88, MidiMetaType.TimeSignature),
        (127, MidiMetaType.SequencerSpecific),
        (8, MidiMetaType.Invalid),
        (200, MidiMetaType.Invalid),
    ],
)
def test_meta_type_from_number(number, expected):
    assert meta_type_from_number(number) is expected


def test_meta_type_roundtrip():
    for kind in MidiMetaType:
        assert meta_type_from_number(kind.value) is kind


def test_default_event():
    event = MidiEvent()
    assert event.channel == -1
    assert event.event_type is MidiEventType.Invalid
    assert event.meta_type is MidiMetaType.Invalid
    assert event.data == b""
    assert event.message() == 0


def test_note_on_message_bytes():
    event = MidiEvent(event_type=MidiEventType.NoteOn, channel=1, data1=60, data2=100)
    assert event.message().to_bytes(3, "little") == bytes([0x91, 60, 100])


def test_program_change_message_bytes():
    event = MidiEvent(event_type=MidiEventType.ProgramChange, channel=9, data1=25)
    assert event.message().to_bytes(3, "little") == bytes([0xC9, 25, 0])


@pytest.mark.parametrize(
    "kind", [MidiEventType.Meta, MidiEventType.SysEx, MidiEventType.Invalid]
)
def test_non_channel_message_is_zero(kind):
    event = MidiEvent(event_type=kind, channel=3, data1=1, data2=2)
    assert event.message() == 0


def test_bpm_of_tempo_event():
    event = MidiEvent(
        event_type=MidiEventType.Meta,
        meta_type=MidiMetaType.SetTempo,
        data=bytes([0x07, 0xA1, 0x20]),
    )
    assert event.bpm() == pytest.approx(120.0)


def test_bpm_times_tempo_is_constant():
    for tempo in (250000, 400000, 600000, 1000000):
        event = MidiEvent(
            event_type=MidiEventType.Meta,
            meta_type=MidiMetaType.SetTempo,
            data=tempo.to_bytes(3, "big"),
        )
        assert event.bpm() * tempo == pytest.approx(60000000.0)


def test_bpm_zero_for_other_events():
    lyric = MidiEvent(event_type=MidiEventType.Meta, meta_type=MidiMetaType.Lyrics, data=b"abc")
    note = MidiEvent(event_type=MidiEventType.NoteOn, meta_type=MidiMetaType.SetTempo)
    assert lyric.bpm() == 0.0
    assert note.bpm() == 0.0


def test_bpm_short_data_raises():
    event = MidiEvent(
        event_type=MidiEventType.Meta, meta_type=MidiMetaType.SetTempo, data=b"\x07"
    )
    with pytest.raises(ValueError):
        event.bpm()


def test_bpm_zero_tempo_raises():
    event = MidiEvent(
        event_type=MidiEventType.Meta, meta_type=MidiMetaType.SetTempo, data=b"\x00\x00\x00"
    )
    with pytest.raises(ValueError):
        event.bpm()


def test_copy_is_independent():
    original = MidiEvent(tick=10, channel=2, event_type=MidiEventType.NoteOn, data1=64)
    copy = dataclasses.replace(original, data1=70)
    assert original.data1 == 64
    assert copy.data1 == 70
    assert copy.tick == original.tick
    assert copy == dataclasses.replace(original, data1=70)