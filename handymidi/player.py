"""Real-time MIDI file player with channel mixing, transpose, tempo and locks."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, replace
from typing import Callable, Optional

from .event import MidiEvent, MidiEventType, MidiMetaType
from .instruments import InstrumentType, instrument_type
from .midi_file import MidiFile, MidiFileError
from .midi_out import MidiOut

__all__ = [
    "Channel",
    "MidiPlayer",
    "is_snare_number",
    "is_bass_instrument",
    "number_beat_in_bar",
]

_CHANNEL_COUNT = 16
_DRUM_CHANNEL = 9
_SNARE_NOTES = (38, 40)
_BASS_PROGRAMS = range(32, 40)

_CC_VOLUME = 7
_CC_PAN = 10
_CC_REVERB = 91
_CC_CHORUS = 93
_CC_RESET_ALL_CONTROLLERS = 121

_MIN_BPM = 30
_MAX_BPM = 240
_TRANSPOSE_LIMITS = (-12, 12)


def is_snare_number(num: int) -> bool:
    """True for the acoustic (38) and electric (40) snare drum notes."""
    return num in _SNARE_NOTES


def is_bass_instrument(instrument: int) -> bool:
    """True for General MIDI bass programs 32 to 39."""
    return instrument in _BASS_PROGRAMS


def number_beat_in_bar(numerator: int, denominator: int) -> int:
    """Beats per bar of a time signature; the denominator is a power of two exponent."""
    note_value = 2 ** denominator
    if note_value in (2, 4):
        return numerator
    if note_value == 8:
        return int(numerator * 0.5)
    if note_value == 16:
        return int(numerator * 0.25)
    raise ValueError(f"unsupported time signature denominator: {note_value}")


def _clamp(value: int, low: int, high: int) -> int:
    return min(max(int(value), low), high)


@dataclass
class Channel:
    """State of one MIDI channel as seen by the player."""

    number: int = 0
    port: int = 0
    volume: int = 127
    pan: int = 64
    reverb: int = 0
    chorus: int = 0
    instrument: int = 0
    mute: bool = False
    solo: bool = False
    instrument_type: InstrumentType = InstrumentType.Piano


class MidiPlayer:
    """Plays a loaded MIDI file through a MidiOut on a background thread."""

    def __init__(
        self,
        output: Optional[MidiOut] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._midi = MidiFile()
        self._output = output if output is not None else MidiOut()
        self._clock = clock
        self._channels = [Channel(number=n) for n in range(_CHANNEL_COUNT)]

        self._bpm = 120
        self._speed = 0
        self._speed_pending = 0
        self._transpose = 0
        self._beat_count = 0
        self._change_bpm_speed = False

        self._playing_event: Optional[MidiEvent] = None

        self._volume = 100
        self._duration_tick = 0
        self._position_tick = 0
        self._duration_ms = 0
        self._position_ms = 0

        self._played_index = 0
        self._start_play_time = 0
        self._start_play_index = 0
        self._finished = False
        self._stopped = True
        self._playing = False
        self._use_solo = False

        self._lock_drum = False
        self._lock_snare = False
        self._lock_bass = False
        self._lock_drum_number = 0
        self._lock_snare_number = 38
        self._lock_bass_number = 32

        self._beat_in_bar: list[tuple[int, int]] = []
        self._timer_start = clock()
        self._halt = threading.Event()
        self._thread: Optional[threading.Thread] = None

        self.loaded_listeners: list[Callable[[], None]] = []
        self.event_listeners: list[Callable[[MidiEvent], None]] = []
        self.bpm_listeners: list[Callable[[int], None]] = []
        self.finished_listeners: list[Callable[[], None]] = []

    # ------------------------------------------------------------------ state

    @property
    def midi_file(self) -> MidiFile:
        return self._midi

    @property
    def output(self) -> MidiOut:
        return self._output

    @property
    def channels(self) -> list[Channel]:
        return self._channels

    @property
    def volume(self) -> int:
        return self._volume

    @property
    def duration_tick(self) -> int:
        return self._duration_tick

    @property
    def duration_ms(self) -> int:
        return self._duration_ms

    @property
    def is_finished(self) -> bool:
        return self._finished

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def is_stopped(self) -> bool:
        return self._stopped

    @property
    def is_paused(self) -> bool:
        return not self._playing and not self._stopped

    @property
    def transpose(self) -> int:
        return self._transpose

    @property
    def bpm_speed(self) -> int:
        return self._speed

    @property
    def current_bpm(self) -> int:
        return self._bpm + self._speed

    @property
    def beat_count(self) -> int:
        return self._beat_count

    @property
    def beat_in_bar(self) -> list[tuple[int, int]]:
        """(beats per bar, number of bars) for each time signature section."""
        return list(self._beat_in_bar)

    @property
    def lock_drum_number(self) -> int:
        return self._lock_drum_number

    @property
    def lock_snare_number(self) -> int:
        return self._lock_snare_number

    @property
    def lock_bass_number(self) -> int:
        return self._lock_bass_number

    @property
    def is_lock_drum(self) -> bool:
        return self._lock_drum

    @property
    def is_lock_snare(self) -> bool:
        return self._lock_snare

    @property
    def is_lock_bass(self) -> bool:
        return self._lock_bass

    # ---------------------------------------------------------------- loading

    def load(self, path, seek_file_chunk_id: bool = False) -> None:
        """Load a MIDI file, stopping playback first.

        Raises OSError when the file cannot be read and MidiFileError when it
        is not a MIDI file or holds no events.
        """
        if not self._stopped:
            self.stop()

        self._midi.read(path, seek_file_chunk_id)
        events = self._midi.events
        if not events:
            raise MidiFileError("file holds no events")

        last = events[-1]
        self._duration_tick = last.tick
        self._duration_ms = int(self._midi.time_from_tick(last.tick) * 1000)
        self._transpose = 0
        self._speed = 0
        self._speed_pending = 0
        self._change_bpm_speed = False
        self._finished = False

        self._beat_count = int(self._midi.beat_from_tick(last.tick))
        self._beat_in_bar = self._bar_layout()

        for channel in self._channels:
            channel.instrument = 0
            channel.volume = 100
            channel.pan = 64
            channel.reverb = 0
            channel.chorus = 0
            channel.instrument_type = InstrumentType.Piano
        self._channels[_DRUM_CHANNEL].instrument_type = InstrumentType.PercussionEtc

        for listener in self.loaded_listeners:
            listener()

    def _bar_layout(self) -> list[tuple[int, int]]:
        layout: list[tuple[int, int]] = []
        counted = 0
        beats_per_bar = 0
        for event in self._midi.time_signature_events:
            if beats_per_bar > 0:
                n_beat = int(self._midi.beat_from_tick(event.tick)) - counted
                counted += n_beat
                layout.append((beats_per_bar, int(n_beat / beats_per_bar)))
            if len(event.data) >= 2:
                beats_per_bar = number_beat_in_bar(event.data[0], event.data[1])
        if beats_per_bar <= 0:
            beats_per_bar = 4
        n_beat = self._beat_count - counted
        layout.append((beats_per_bar, int(n_beat / beats_per_bar)))
        return layout

    # --------------------------------------------------------------- playback

    def start(self) -> None:
        """Start or resume playback on a background thread."""
        if self._playing:
            return
        self._halt.clear()

        if self._stopped:
            self._send_reset_all_controllers()
            prelude = MidiEvent(
                event_type=MidiEventType.ProgramChange,
                channel=_DRUM_CHANNEL,
                data1=self._lock_drum_number if self._lock_drum else 0,
            )
            self._send_event(prelude)
            self._notify_event(prelude)

        self._playing = True
        self._stopped = False
        self._finished = False

        self._thread = threading.Thread(target=self._play_events, daemon=True)
        self._thread.start()

    def stop(self, reset_position: bool = False) -> None:
        """Pause playback, or stop and rewind when reset_position is true."""
        if self._stopped:
            return

        self._playing = False
        self._stopped = False
        self._finished = False
        self._start_play_index = self._played_index
        self._halt.set()

        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

        if reset_position:
            self._stopped = True
            self._start_play_time = 0
            self._start_play_index = 0
            self._played_index = 0
            self._position_ms = 0
            self._position_tick = 0

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Wait for the playing thread to end; True when it has ended."""
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def _elapsed_ms(self) -> int:
        return int((self._clock() - self._timer_start) * 1000)

    def _play_events(self) -> None:
        events = self._midi.events
        start = self._played_index
        if 0 < start < len(events):
            self._start_play_time = int(
                self._midi.time_from_tick(events[start].tick, self._speed) * 1000
            )
        self._timer_start = self._clock()

        previous = events[start - 1] if 0 < start <= len(events) else None
        for index, event in enumerate(events[start:], start):
            if not self._playing:
                break
            self._playing_event = event

            if event.event_type is not MidiEventType.Meta:
                if self._change_bpm_speed:
                    self._change_bpm_speed = False
                    self._speed = self._speed_pending
                    anchor = previous.tick if previous is not None else event.tick
                    self._start_play_time = int(
                        self._midi.time_from_tick(anchor, self._speed) * 1000
                    )
                    self._timer_start = self._clock()

                event_time = int(self._midi.time_from_tick(event.tick, self._speed) * 1000)
                wait_ms = event_time - self._start_play_time - self._elapsed_ms()
                if wait_ms > 0 and self._halt.wait(wait_ms / 1000):
                    break

                if event.event_type is not MidiEventType.SysEx:
                    self._play_channel_event(event)
                self._position_ms = event_time
            elif event.meta_type is MidiMetaType.SetTempo:
                self._bpm = int(event.bpm())
                for listener in self.bpm_listeners:
                    listener(self._bpm + self._speed)

            self._played_index = index
            self._position_tick = event.tick
            self._notify_event(self._playing_event)
            previous = event

        self._output.send_all_notes_off()

        if events and self._played_index == len(events) - 1:
            self._finished = True
        for listener in self.finished_listeners:
            listener()

    def _play_channel_event(self, event: MidiEvent) -> None:
        if event.event_type in (MidiEventType.Controller, MidiEventType.ProgramChange):
            self._send_event(event)
            return
        channel = self._channels[event.channel]
        if channel.mute:
            return
        if self._use_solo and not channel.solo:
            return
        self._send_event(event)

    def _notify_event(self, event: Optional[MidiEvent]) -> None:
        if event is None:
            return
        for listener in self.event_listeners:
            listener(event)

    # ---------------------------------------------------------------- mixing

    def set_volume(self, value: int) -> None:
        """Master volume in percent, clamped to 0..100."""
        self._volume = _clamp(value, 0, 100)
        self._output.set_volume(self._volume / 100.0)

    def _send_controller(self, ch: int, number: int, value: int) -> None:
        if not 0 <= ch < _CHANNEL_COUNT:
            return
        self._send_event(
            MidiEvent(
                event_type=MidiEventType.Controller,
                channel=ch,
                data1=number,
                data2=_clamp(value, 0, 127),
            )
        )

    def set_channel_volume(self, ch: int, value: int) -> None:
        """Channel volume controller, clamped to 0..127; bad channels are ignored."""
        self._send_controller(ch, _CC_VOLUME, value)

    def set_pan(self, ch: int, value: int) -> None:
        """Channel pan controller, clamped to 0..127; bad channels are ignored."""
        self._send_controller(ch, _CC_PAN, value)

    def set_reverb(self, ch: int, value: int) -> None:
        """Channel reverb send, clamped to 0..127; bad channels are ignored."""
        self._send_controller(ch, _CC_REVERB, value)

    def set_chorus(self, ch: int, value: int) -> None:
        """Channel chorus send, clamped to 0..127; bad channels are ignored."""
        self._send_controller(ch, _CC_CHORUS, value)

    def set_instrument(self, ch: int, instrument: int) -> None:
        """Send a program change, clamped to 0..127; bad channels are ignored."""
        if not 0 <= ch < _CHANNEL_COUNT:
            return
        program = _clamp(instrument, 0, 127)
        self._output.send_program_change(ch, program)
        self._channels[ch].instrument = program
        self._channels[ch].instrument_type = instrument_type(program)

    def set_mute(self, ch: int, mute: bool) -> None:
        """Mute or unmute a channel, silencing its notes when muted."""
        if not 0 <= ch < _CHANNEL_COUNT:
            return
        if mute == self._channels[ch].mute:
            return
        self._channels[ch].mute = mute
        if mute:
            self._output.send_all_notes_off(ch)

    def set_solo(self, ch: int, solo: bool) -> None:
        """Solo a channel; while any channel is soloed only soloed channels sound."""
        if not 0 <= ch < _CHANNEL_COUNT:
            return
        if solo == self._channels[ch].solo:
            return
        self._channels[ch].solo = solo

        any_solo = False
        for channel in self._channels:
            if channel.solo:
                any_solo = True
            else:
                self._output.send_all_notes_off(channel.number)
        self._use_solo = any_solo

        if self._playing:
            for channel in self._channels:
                if not channel.solo:
                    self._output.send_all_notes_off(channel.number)

    # ------------------------------------------------------------- position

    def set_position_tick(self, tick: int) -> None:
        """Seek to a tick, replaying controller and program changes up to it."""
        play_after_seek = self._playing
        if self._playing:
            self.stop()

        index = 0
        for event in self._midi.events:
            if event.tick > tick:
                break
            if event.event_type in (MidiEventType.Controller, MidiEventType.ProgramChange):
                self._send_event(event)
            self._position_tick = event.tick
            index += 1

        self._played_index = index
        if play_after_seek:
            self.start()

    def set_transpose(self, transpose: int) -> None:
        """Transpose non-drum notes by semitones; no change once at ±12."""
        if self._transpose in _TRANSPOSE_LIMITS:
            return
        self._transpose = transpose
        if self._playing:
            for channel in self._channels:
                if channel.number != _DRUM_CHANNEL:
                    self._output.send_all_notes_off(channel.number)

    def set_bpm_speed(self, speed: int) -> None:
        """Offset the tempo by a number of BPM, keeping it within 30..240."""
        if speed == self._speed:
            return
        if not _MIN_BPM <= self._bpm + speed <= _MAX_BPM:
            return
        if self._playing:
            self._speed_pending = speed
            self._change_bpm_speed = True
        else:
            self._speed = speed
        for listener in self.bpm_listeners:
            listener(self._bpm + speed)

    def position_tick(self) -> int:
        """Current playback position in ticks."""
        if self._playing:
            return self._midi.tick_from_time_ms(
                self._elapsed_ms() + self._start_play_time, self._speed
            )
        return self._position_tick

    def position_ms(self) -> int:
        """Current playback position in milliseconds."""
        if self._playing:
            return int(self._midi.time_from_tick(self.position_tick()) * 1000)
        return self._position_ms

    def current_beat(self) -> int:
        """Number of beats elapsed at the current position."""
        return int(self._midi.beat_from_tick(self.position_tick()))

    # ----------------------------------------------------------------- locks

    def set_lock_drum(self, lock: bool, number: int = 0) -> None:
        """Force the drum channel to one drum kit program."""
        self._lock_drum = lock
        self._lock_drum_number = number
        if lock and not self._stopped:
            event = MidiEvent(
                event_type=MidiEventType.ProgramChange,
                channel=_DRUM_CHANNEL,
                data1=number,
            )
            self._send_event(event)
            self._notify_event(event)

    def set_lock_snare(self, lock: bool, number: int = 38) -> None:
        """Replace every snare note with one snare; other numbers are ignored."""
        if not is_snare_number(number):
            return
        self._lock_snare = lock
        self._lock_snare_number = number
        if self._playing:
            self._output.send_all_notes_off(_DRUM_CHANNEL)

    def set_lock_bass(self, lock: bool, number: int = 32) -> None:
        """Replace every bass program with one bass; non-bass numbers are ignored."""
        if not is_bass_instrument(number):
            return
        self._lock_bass = lock
        self._lock_bass_number = number
        if self._stopped or not lock:
            return
        for channel in self._channels:
            if not is_bass_instrument(channel.instrument):
                continue
            event = MidiEvent(
                event_type=MidiEventType.ProgramChange,
                channel=channel.number,
                data1=number,
            )
            self._send_event(event)
            self._notify_event(event)

    # -------------------------------------------------------------- sending

    def _note_to_play(self, ch: int, note: int) -> int:
        if ch == _DRUM_CHANNEL:
            if self._lock_snare and is_snare_number(note):
                return self._lock_snare_number
            return note
        return note + self._transpose

    def _send_event(self, event: MidiEvent) -> None:
        ch = event.channel
        kind = event.event_type
        out = self._output

        if kind is MidiEventType.NoteOff:
            out.send_note_off(ch, self._note_to_play(ch, event.data1), event.data2)
        elif kind is MidiEventType.NoteOn:
            out.send_note_on(ch, self._note_to_play(ch, event.data1), event.data2)
        elif kind is MidiEventType.NoteAftertouch:
            out.send_note_aftertouch(ch, self._note_to_play(ch, event.data1), event.data2)
        elif kind is MidiEventType.Controller:
            channel = self._channels[ch]
            if event.data1 == _CC_VOLUME:
                channel.volume = event.data2
            elif event.data1 == _CC_PAN:
                channel.pan = event.data2
            elif event.data1 == _CC_REVERB:
                channel.reverb = event.data2
            elif event.data1 == _CC_CHORUS:
                channel.chorus = event.data2
            out.send_controller(ch, event.data1, event.data2)
        elif kind is MidiEventType.ProgramChange:
            program = event.data1
            if ch == _DRUM_CHANNEL and self._lock_drum:
                program = self._lock_drum_number
                self._playing_event = replace(event, data1=program)
            if is_bass_instrument(event.data1) and self._lock_bass:
                program = self._lock_bass_number
                self._playing_event = replace(event, data1=program)
            self._channels[ch].instrument = program
            if ch != _DRUM_CHANNEL:
                self._channels[ch].instrument_type = instrument_type(program)
            out.send_program_change(ch, program)
        elif kind is MidiEventType.ChannelAftertouch:
            out.send_channel_aftertouch(ch, event.data1)
        elif kind is MidiEventType.PitchBend:
            out.send_pitch_bend(ch, event.data1)

    def _send_reset_all_controllers(self) -> None:
        for channel in range(_CHANNEL_COUNT):
            self._output.send_controller(channel, _CC_RESET_ALL_CONTROLLERS, 0)