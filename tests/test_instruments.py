import pytest

from handymidi.instruments import (
    Beat,
    InstrumentType,
    drum_kit_names,
    drum_kit_number_names,
    gm_instrument_names,
    gm_instrument_number_names,
    instrument_drum_type,
    instrument_group_names,
    instrument_type,
    snare_names,
    snare_number_names,
)

DRUM_KINDS = {
    InstrumentType.BassDrum, InstrumentType.Snare, InstrumentType.SideStick,
    InstrumentType.HighTom, InstrumentType.MidTom, InstrumentType.LowTom,
    InstrumentType.Hihat, InstrumentType.Cowbell, InstrumentType.CrashCymbal,
    InstrumentType.RideCymbal, InstrumentType.Bongo, InstrumentType.Conga,
    InstrumentType.Timbale, InstrumentType.SmallCupShapedCymbals,
    InstrumentType.ChineseCymbal, InstrumentType.PercussionEtc,
}


def test_gm_instrument_names():
    names = gm_instrument_names()
    assert len(names) == 128
    assert names[0] == "Acoustic Grand Piano"
    assert names[127] == "Gunshot"
    assert len(set(names)) == 128


def test_gm_number_names_match_names():
    names = gm_instrument_names()
    numbered = gm_instrument_number_names()
    assert len(numbered) == len(names)
    assert numbered[0] == "000 - Acoustic Grand Piano"
    for entry, name in zip(numbered, names):
        prefix, _, rest = entry.partition(" - ")
        assert rest == name
        assert len(prefix) == 3 and prefix.isdigit()
    assert [int(e.split(" - ")[0]) for e in numbered] == list(range(128))


def test_drum_kit_names():
    kits = drum_kit_names()
    assert len(kits) == 128
    assert kits[0] == "Standard"
    assert kits[25] == "TR-808"
    assert kits[56] == "Sound FX"
    assert kits[1] == "Drum Kit"
    assert kits[127] == "Drum Kit"


def test_drum_kit_number_names():
    numbered = drum_kit_number_names()
    assert len(numbered) == 128
    assert [e.split(" - ", 1)[1] for e in numbered] == drum_kit_names()


def test_snares():
    assert snare_names() == ["Acoustic Snare", "Electric Snare"]
    assert snare_number_names() == ["38 - Acoustic Snare", "40 - Electric Snare"]


def test_group_names():
    groups = instrument_group_names()
    assert len(groups) == 16
    assert groups[0] == "Piano"
    assert groups[-1] == "Sound effects"


@pytest.mark.parametrize(
    "note, expected",
    [
        (35, InstrumentType.BassDrum),
        (36, InstrumentType.BassDrum),
        (38, InstrumentType.Snare),
        (40, InstrumentType.Snare),
        (37, InstrumentType.SideStick),
        (41, InstrumentType.LowTom),
        (47, InstrumentType.MidTom),
        (50, InstrumentType.HighTom),
        (44, InstrumentType.Hihat),
        (56, InstrumentType.Cowbell),
        (55, InstrumentType.CrashCymbal),
        (59, InstrumentType.RideCymbal),
        (61, InstrumentType.Bongo),
        (64, InstrumentType.Conga),
        (65, InstrumentType.Timbale),
        (80, InstrumentType.SmallCupShapedCymbals),
        (83, InstrumentType.ChineseCymbal),
        (39, InstrumentType.PercussionEtc),
        (0, InstrumentType.PercussionEtc),
    ],
)
def test_instrument_drum_type(note, expected):
    assert instrument_drum_type(note) is expected


@pytest.mark.parametrize(
    "program, expected",
    [
        (0, InstrumentType.Piano),
        (7, InstrumentType.Piano),
        (8, InstrumentType.ChromaticPercussion),
        (20, InstrumentType.Organ),
        (21, InstrumentType.Accordion),
        (24, InstrumentType.AcousticGuitarNylon),
        (25, InstrumentType.AcousticGuitarSteel),
        (26, InstrumentType.ElectricGuitarJazz),
        (28, InstrumentType.ElectricGuitarClean),
        (29, InstrumentType.OverdrivenGuitar),
        (30, InstrumentType.DistortionGuitar),
        (31, InstrumentType.HarmonicsGuitar),
        (32, InstrumentType.Bass),
        (47, InstrumentType.Strings),
        (55, InstrumentType.Ensemble),
        (56, InstrumentType.Trumpet),
        (61, InstrumentType.Brass),
        (63, InstrumentType.SynthBrass),
        (64, InstrumentType.Saxophone),
        (71, InstrumentType.Reed),
        (72, InstrumentType.Pipe),
        (87, InstrumentType.SynthLead),
        (88, InstrumentType.SynthPad),
        (103, InstrumentType.SynthEffects),
        (104, InstrumentType.Ethnic),
        (119, InstrumentType.Percussive),
        (120, InstrumentType.SoundEffects),
        (127, InstrumentType.SoundEffects),
        (-1, InstrumentType.SoundEffects),
    ],
)
def test_instrument_type(program, expected):
    assert instrument_type(program) is expected


def test_programs_cover_every_melodic_kind_and_no_drums():
    kinds = {instrument_type(p) for p in range(128)}
    assert kinds == set(InstrumentType) - DRUM_KINDS
    assert kinds.isdisjoint(DRUM_KINDS)


def test_instrument_type_order():
    members = list(InstrumentType)
    assert len(members) == 42
    assert instrument_type(0) is members[0]
    assert instrument_drum_type(0) is members[-1]


def test_beat_defaults_and_text():
    assert str(Beat()) == "nBeat 0 nBeatInBar 0 currentBar 0"
    beat = Beat(n_beat=9, n_beat_in_bar=3, current_bar=2)
    assert str(beat) == "nBeat 9 nBeatInBar 3 currentBar 2"