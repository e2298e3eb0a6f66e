# handymidi

A small, dependency-free toolkit for karaoke-style MIDI playback:

- reading Standard MIDI Files into time-ordered event lists,
- converting between ticks, beats, seconds and milliseconds while following
  tempo changes (with an optional BPM offset),
- a playback sequencer with transpose, tempo adjustment, per-channel mute and
  solo, and drum, snare and bass locking,
- raw MIDI message building for an output port,
- parameter models for 15- and 31-band equalizers, reverb and chorus effects
  that can be attached to an audio stream.

## Installing

```
pip install handymidi
```

For running the test suite:

```
pip install "handymidi[test]"
pytest
```

## Reading a MIDI file

```python
from handymidi.midi_file import MidiFile, first_bpm

song = MidiFile()
song.read("song.mid", False)

print(song.format_type, song.number_of_tracks, song.resolution)
last = song.events[-1]
print("length in seconds:", song.time_from_tick(last.tick, 0))
print("tick at 30 s:", song.tick_from_time(30.0, 0))
print("first tempo:", first_bpm("song.mid"))
```

Each entry in `song.events` is a `handymidi.event.MidiEvent` with `tick`,
`delta`, `track`, `channel`, `data1`, `data2`, `event_type` and, for meta and
system-exclusive events, `meta_type` and `data`. Tempo events report their
tempo through `MidiEvent.bpm()`.

## Instruments

```python
from handymidi.instruments import instrument_type, instrument_drum_type, gm_instrument_number_names

instrument_type(33)          # InstrumentType.BASS
instrument_drum_type(38)     # InstrumentType.SNARE
gm_instrument_number_names()[0]  # "000 - Acoustic Grand Piano"
```

## Playback

`handymidi.player.MidiPlayer` loads a file with `load(path, False)`, plays it
with `start()` and halts with `stop(reset_position)`. While playing it offers
`set_transpose`, `set_bpm_speed`, `set_mute`, `set_solo`, `set_volume`,
`set_position_tick`, and the `set_lock_drum`, `set_lock_snare` and
`set_lock_bass` controls. Position is reported by `position_tick()`,
`position_ms()` and `current_beat()`.

## Effects

`handymidi.equalizer`, `handymidi.effects` and `handymidi.chorus` hold the
equalizer, reverb and chorus models. Each keeps its parameters clamped to
their valid ranges and, when switched `on()` with an `AudioStream` attached,
mirrors every change onto the stream's effect slots.