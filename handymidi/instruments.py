"""General MIDI instrument names, drum kits and instrument grouping."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "InstrumentType",
    "Beat",
    "gm_instrument_names",
    "gm_instrument_number_names",
    "drum_kit_names",
    "drum_kit_number_names",
    "snare_names",
    "snare_number_names",
    "instrument_group_names",
    "instrument_drum_type",
    "instrument_type",
]


class InstrumentType(Enum):
    """Instrument families and drum sounds used by the synth mixer."""

    Piano = 0
    Organ = 1
    Accordion = 2
    ChromaticPercussion = 3
    Percussive = 4
    Bass = 5
    AcousticGuitarNylon = 6
    AcousticGuitarSteel = 7
    ElectricGuitarJazz = 8
    ElectricGuitarClean = 9
    OverdrivenGuitar = 10
    DistortionGuitar = 11
    HarmonicsGuitar = 12
    Trumpet = 13
    Brass = 14
    SynthBrass = 15
    Saxophone = 16
    Reed = 17
    Pipe = 18
    Strings = 19
    Ensemble = 20
    SynthLead = 21
    SynthPad = 22
    SynthEffects = 23
    Ethnic = 24
    SoundEffects = 25

    BassDrum = 26
    Snare = 27
    SideStick = 28
    HighTom = 29
    MidTom = 30
    LowTom = 31
    Hihat = 32
    Cowbell = 33
    CrashCymbal = 34
    RideCymbal = 35
    Bongo = 36
    Conga = 37
    Timbale = 38
    SmallCupShapedCymbals = 39
    ChineseCymbal = 40
    PercussionEtc = 41


@dataclass
class Beat:
    """A beat position: beat count, beats per bar and current bar."""

    n_beat: int = 0
    n_beat_in_bar: int = 0
    current_bar: int = 0

    def __str__(self) -> str:
        return (
            f"nBeat {self.n_beat} nBeatInBar {self.n_beat_in_bar} "
            f"currentBar {self.current_bar}"
        )


_GM_INSTRUMENTS = (
    "Acoustic Grand Piano", "Bright Acoustic Piano", "Electric Grand Piano",
    "Honky-tonk Piano", "Electric Piano 1", "Electric Piano 2", "Harpsichord",
    "Clavi", "Celesta", "Glockenspiel", "Music Box", "Vibraphone", "Marimba",
    "Xylophone", "Tubular Bells", "Dulcimer", "Drawbar Organ",
    "Percussive Organ", "Rock Organ", "Church Organ", "Reed Organ",
    "Accordion", "Harmonica", "Tango Accordion", "Acoustic Guitar (nylon)",
    "Acoustic Guitar (steel)", "Electric Guitar (jazz)",
    "Electric Guitar (clean)", "Electric Guitar (muted)", "Overdriven Guitar",
    "Distortion Guitar", "Guitar harmonics", "Acoustic Bass",
    "Electric Bass (finger)", "Electric Bass (pick)", "Fretless Bass",
    "Slap Bass 1", "Slap Bass 2", "Synth Bass 1", "Synth Bass 2", "Violin",
    "Viola", "Cello", "Contrabass", "Tremolo Strings", "Pizzicato Strings",
    "Orchestral Harp", "Timpani", "String Ensemble 1", "String Ensemble 2",
    "SynthStrings 1", "SynthStrings 2", "Choir Aahs", "Voice Oohs",
    "Synth Voice", "Orchestra Hit", "Trumpet", "Trombone", "Tuba",
    "Muted Trumpet", "French Horn", "Brass Section", "SynthBrass 1",
    "SynthBrass 2", "Soprano Sax", "Alto Sax", "Tenor Sax", "Baritone Sax",
    "Oboe", "English Horn", "Bassoon", "Clarinet", "Piccolo", "Flute",
    "Recorder", "Pan Flute", "Blown Bottle", "Shakuhachi", "Whistle",
    "Ocarina", "Lead 1 (square)", "Lead 2 (sawtooth)", "Lead 3 (calliope)",
    "Lead 4 (chiff)", "Lead 5 (charang)", "Lead 6 (voice)", "Lead 7 (fifths)",
    "Lead 8 (bass + lead)", "Pad 1 (new age)", "Pad 2 (warm)",
    "Pad 3 (polysynth)", "Pad 4 (choir)", "Pad 5 (bowed)", "Pad 6 (metallic)",
    "Pad 7 (halo)", "Pad 8 (sweep)", "FX 1 (rain)", "FX 2 (soundtrack)",
    "FX 3 (crystal)", "FX 4 (atmosphere)", "FX 5 (brightness)",
    "FX 6 (goblins)", "FX 7 (echoes)", "FX 8 (sci-fi)", "Sitar", "Banjo",
    "Shamisen", "Koto", "Kalimba", "Bag pipe", "Fiddle", "Shanai",
    "Tinkle Bell", "Agogo", "Steel Drums", "Woodblock", "Taiko Drum",
    "Melodic Tom", "Synth Drum", "Reverse Cymbal", "Guitar Fret Noise",
    "Breath Noise", "Seashore", "Bird Tweet", "Telephone Ring", "Helicopter",
    "Applause", "Gunshot",
)

_DRUM_KITS = {
    0: "Standard",
    8: "Room",
    16: "Power",
    24: "Electronic",
    25: "TR-808",
    32: "Jazz",
    40: "Brush",
    48: "Orchestra",
    56: "Sound FX",
}

_SNARES = ("Acoustic Snare", "Electric Snare")
_SNARE_NUMBERS = (38, 40)

_GROUP_NAMES = (
    "Piano", "Chromatic Percussion", "Organ", "Guitar", "Bass", "Strings",
    "Ensemble", "Brass", "Reed", "Pipe", "Synth Lead", "Synth Pad",
    "Synth Effects", "Ethnic", "Percussive", "Sound effects",
)

_DRUM_TYPES: dict[int, InstrumentType] = {}
for _notes, _kind in (
    ((35, 36), InstrumentType.BassDrum),
    ((38, 40), InstrumentType.Snare),
    ((37,), InstrumentType.SideStick),
    ((41, 43), InstrumentType.LowTom),
    ((45, 47), InstrumentType.MidTom),
    ((48, 50), InstrumentType.HighTom),
    ((42, 44, 46), InstrumentType.Hihat),
    ((56,), InstrumentType.Cowbell),
    ((49, 52, 55, 57), InstrumentType.CrashCymbal),
    ((51, 59), InstrumentType.RideCymbal),
    ((60, 61), InstrumentType.Bongo),
    ((62, 63, 64), InstrumentType.Conga),
    ((65, 66), InstrumentType.Timbale),
    ((80, 81), InstrumentType.SmallCupShapedCymbals),
    ((82, 83), InstrumentType.ChineseCymbal),
):
    for _note in _notes:
        _DRUM_TYPES[_note] = _kind

_PROGRAM_RANGES = (
    (range(0, 8), InstrumentType.Piano),
    (range(8, 16), InstrumentType.ChromaticPercussion),
    (range(16, 21), InstrumentType.Organ),
    (range(21, 24), InstrumentType.Accordion),
    (range(24, 25), InstrumentType.AcousticGuitarNylon),
    (range(25, 26), InstrumentType.AcousticGuitarSteel),
    (range(26, 27), InstrumentType.ElectricGuitarJazz),
    (range(27, 29), InstrumentType.ElectricGuitarClean),
    (range(29, 30), InstrumentType.OverdrivenGuitar),
    (range(30, 31), InstrumentType.DistortionGuitar),
    (range(31, 32), InstrumentType.HarmonicsGuitar),
    (range(32, 40), InstrumentType.Bass),
    (range(40, 48), InstrumentType.Strings),
    (range(48, 56), InstrumentType.Ensemble),
    (range(56, 57), InstrumentType.Trumpet),
    (range(57, 62), InstrumentType.Brass),
    (range(62, 64), InstrumentType.SynthBrass),
    (range(64, 68), InstrumentType.Saxophone),
    (range(68, 72), InstrumentType.Reed),
    (range(72, 80), InstrumentType.Pipe),
    (range(80, 88), InstrumentType.SynthLead),
    (range(88, 96), InstrumentType.SynthPad),
    (range(96, 104), InstrumentType.SynthEffects),
    (range(104, 112), InstrumentType.Ethnic),
    (range(112, 120), InstrumentType.Percussive),
)


def _numbered(names: list[str]) -> list[str]:
    return [f"{index:03d} - {name}" for index, name in enumerate(names)]


def gm_instrument_names() -> list[str]:
    """The 128 General MIDI program names."""
    return list(_GM_INSTRUMENTS)


def gm_instrument_number_names() -> list[str]:
    """Program names prefixed with their zero-padded program number."""
    return _numbered(gm_instrument_names())


def drum_kit_names() -> list[str]:
    """Names of the 128 drum kit programs."""
    return [_DRUM_KITS.get(index, "Drum Kit") for index in range(128)]


def drum_kit_number_names() -> list[str]:
    """Drum kit names prefixed with their zero-padded program number."""
    return _numbered(drum_kit_names())


def snare_names() -> list[str]:
    """Names of the two lockable snare sounds."""
    return list(_SNARES)


def snare_number_names() -> list[str]:
    """Snare names prefixed with their drum note number."""
    return [f"{number} - {name}" for number, name in zip(_SNARE_NUMBERS, _SNARES)]


def instrument_group_names() -> list[str]:
    """The sixteen General MIDI instrument families."""
    return list(_GROUP_NAMES)


def instrument_drum_type(drum_note: int) -> InstrumentType:
    """Classify a channel-10 drum note."""
    return _DRUM_TYPES.get(drum_note, InstrumentType.PercussionEtc)


def instrument_type(inst_number: int) -> InstrumentType:
    """Classify a General MIDI program number."""
    for programs, kind in _PROGRAM_RANGES:
        if inst_number in programs:
            return kind
    return InstrumentType.SoundEffects