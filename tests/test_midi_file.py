import pytest

from handymidi.event import MidiEventType, MidiMetaType
from handymidi.midi_file import DivisionType, MidiFile, MidiFileError, first_bpm

TEMPO_120 = b"\x00\xff\x51\x03\x07\xa1\x20"
END = b"\x00\xff\x2f\x00"


def header(tracks=1, fmt=1, division=b"\x01\xe0", magic=b"MThd", size=6):
    return (
        magic
        + size.to_bytes(4, "big")
        + fmt.to_bytes(2, "big")
        + tracks.to_bytes(2, "big")
        + division
    )


def track(body, magic=b"MTrk"):
    return magic + len(body).to_bytes(4, "big") + body


def midi(*bodies, **kw):
    return header(tracks=len(bodies), **kw) + b"".join(track(b) for b in bodies)


def load(data, seek=False):
    f = MidiFile()
    f.read(data, seek)
    return f


def test_header_fields():
    f = load(midi(END, END, fmt=1))
    assert f.format_type == 1
    assert f.number_of_tracks == 2
    assert f.division is DivisionType.PPQ
    assert f.resolution == 0x01E0


def test_smpte_division():
    f = load(midi(END, division=bytes([0xE8, 40])))
    assert f.division is DivisionType.SMPTE24
    assert f.resolution == 40


def test_note_events_and_running_status():
    body = b"\x00\x90\x3c\x64" + b"\x10\x3e\x50" + b"\x10\x3c\x00" + END
    f = load(midi(body))
    notes = [e for e in f.events if e.event_type is not MidiEventType.Meta]
    assert [e.event_type for e in notes] == [
        MidiEventType.NoteOn,
        MidiEventType.NoteOn,
        MidiEventType.NoteOff,
    ]
    assert [e.data1 for e in notes] == [0x3C, 0x3E, 0x3C]
    assert notes[2].data2 == 0
    assert [e.tick for e in notes] == [0, 0x10, 0x20]
    assert [e.delta for e in notes] == [0, 0x10, 0x10]


def test_tempo_event_indexed():
    f = load(midi(TEMPO_120 + END))
    assert len(f.tempo_events) == 1
    assert f.tempo_events[0].meta_type is MidiMetaType.SetTempo
    assert f.tempo_events[0].bpm() == pytest.approx(120.0)
    assert f.events[-1].meta_type is MidiMetaType.EndOfTrack


def test_time_signature_indexed():
    f = load(midi(b"\x00\xff\x58\x04\x04\x02\x18\x08" + END))
    assert len(f.time_signature_events) == 1
    assert f.time_signature_events[0].data == b"\x04\x02\x18\x08"


def test_sysex_keeps_status_byte():
    f = load(midi(b"\x00\xf0\x03\x7e\x7f\xf7" + END))
    sysex = [e for e in f.events if e.event_type is MidiEventType.SysEx]
    assert sysex[0].data == b"\xf0\x7e\x7f\xf7"


def test_pitch_bend_combined():
    f = load(midi(b"\x00\xe1\x00\x40" + END))
    bend = f.events[0]
    assert bend.event_type is MidiEventType.PitchBend
    assert bend.channel == 1
    assert bend.data1 == 8192


def test_controller_and_program_lists_sorted():
    t1 = b"\x10\xb0\x07\x64" + END
    t2 = b"\x05\xc0\x05" + b"\x10\xb1\x0a\x40" + END
    f = load(midi(t1, t2))
    assert len(f.controller_events) == 2
    assert len(f.program_change_events) == 1
    combined = f.controller_and_program_events()
    assert combined[0].event_type is MidiEventType.ProgramChange
    ticks = [e.tick for e in combined]
    assert ticks == sorted(ticks)


def test_events_merged_in_tick_order():
    t1 = b"\x20\x90\x3c\x64" + END
    t2 = b"\x10\x91\x40\x64" + END
    f = load(midi(t1, t2))
    ticks = [e.tick for e in f.events]
    assert ticks == sorted(ticks)
    assert {e.track for e in f.events} == {0, 1}


def test_bad_magic_raises_unless_seek():
    data = midi(END, magic=b"RIFF")
    with pytest.raises(MidiFileError):
        load(data)
    assert len(load(data, seek=True).events) == 1


def test_bad_header_size_raises():
    with pytest.raises(MidiFileError):
        load(midi(END, size=7))


def test_bad_track_magic_clears():
    data = header(tracks=2) + track(END) + track(END, magic=b"XTrk")
    f = MidiFile()
    with pytest.raises(MidiFileError):
        f.read(data)
    assert f.events == []
    assert f.number_of_tracks == 0


def test_read_from_path(tmp_path):
    path = tmp_path / "song.mid"
    path.write_bytes(midi(TEMPO_120 + b"\x00\x90\x3c\x64" + END))
    f = MidiFile()
    f.read(str(path))
    assert len(f.events) == 3


def test_missing_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        MidiFile().read(tmp_path / "none.mid")


def test_beat_from_tick():
    f = load(midi(END))
    assert f.beat_from_tick(f.resolution * 3) == pytest.approx(3.0)


def test_time_scales_linearly_without_tempo():
    f = load(midi(END))
    r = f.resolution
    assert f.time_from_tick(2 * r) == pytest.approx(2 * f.time_from_tick(r))
    assert f.time_from_tick(r) == pytest.approx(0.5)


def test_faster_speed_shortens_time():
    f = load(midi(TEMPO_120 + END))
    assert f.time_from_tick(4000, 20) < f.time_from_tick(4000)


def test_tick_time_round_trip_with_tempo_change():
    slow = b"\x00\xff\x51\x03\x0f\x42\x40"  # 60 bpm
    body = TEMPO_120 + b"\x83\x60\xff\x51\x03\x0f\x42\x40" + END
    f = load(midi(body))
    assert len(f.tempo_events) == 2
    assert slow[-3:] == f.tempo_events[1].data
    for tick in (100, 480, 900, 2000):
        t = f.time_from_tick(tick)
        assert f.tick_from_time(t) == pytest.approx(tick, abs=1)
        assert f.tick_from_time_ms(t * 1000) == pytest.approx(tick, abs=1)


def test_smpte_time_round_trip():
    f = load(midi(END, division=bytes([0xE7, 10])))
    assert f.division is DivisionType.SMPTE25
    t = f.time_from_tick(500)
    assert f.tick_from_time(t) == pytest.approx(500, abs=1)


def test_create_meta_event_indexes_tempo():
    f = MidiFile()
    e = f.create_meta_event(0, 10, 10, 0x51, b"\x07\xa1\x20")
    assert f.tempo_events == [e]
    assert f.events == [e]
    f.clear()
    assert f.tempo_events == []


def test_first_bpm_values(tmp_path):
    assert first_bpm(midi(TEMPO_120 + END)) == 120
    assert first_bpm(midi(b"\x00\xff\x51\x03\x09\x27\xc0" + END)) == 100
    assert first_bpm(midi(END)) == 120


def test_first_bpm_rejects(tmp_path):
    assert first_bpm(tmp_path / "missing.mid") == 0
    assert first_bpm(midi(TEMPO_120 + END, fmt=2)) == 0
    assert first_bpm(midi(TEMPO_120 + END, size=8)) == 0
    bad = header() + track(TEMPO_120 + END, magic=b"ABCD")
    assert first_bpm(bad) == 0