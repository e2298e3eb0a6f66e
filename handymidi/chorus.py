"""Chorus effect attached to an audio stream."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from .effects import AudioStream

__all__ = ["WaveformType", "PhaseType", "ChorusFX"]


class WaveformType(Enum):
    """LFO waveform of the chorus."""

    Triangle = 0
    Sine = 1


class PhaseType(Enum):
    """Phase difference between the left and right LFO."""

    PhaseNeg180 = 0
    PhaseNeg90 = 1
    Phase0 = 2
    Phase90 = 3
    Phase180 = 4


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(float(value), low), high)


class ChorusFX:
    """Chorus effect whose settings persist while it is switched off or detached."""

    KIND = "chorus"

    def __init__(self, stream: Optional[AudioStream] = None) -> None:
        self._stream = stream
        self._handle: Optional[int] = None
        self._on = False
        self._wet_dry_mix = 50.0
        self._depth = 10.0
        self._feedback = 25.0
        self._frequency = 1.0
        self._delay = 16.0
        self._waveform = WaveformType.Sine
        self._phase = PhaseType.Phase90

    @property
    def stream(self) -> Optional[AudioStream]:
        return self._stream

    @property
    def is_on(self) -> bool:
        return self._on

    @property
    def wet_dry_mix(self) -> float:
        return self._wet_dry_mix

    @property
    def depth(self) -> float:
        return self._depth

    @property
    def feedback(self) -> float:
        return self._feedback

    @property
    def frequency(self) -> float:
        return self._frequency

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def waveform(self) -> WaveformType:
        return self._waveform

    @property
    def phase(self) -> PhaseType:
        return self._phase

    def _parameters(self) -> dict[str, Any]:
        return {
            "wet_dry_mix": self._wet_dry_mix,
            "depth": self._depth,
            "feedback": self._feedback,
            "frequency": self._frequency,
            "delay": self._delay,
            "waveform": self._waveform.value,
            "phase": self._phase.value,
        }

    def set_stream(self, stream: Optional[AudioStream]) -> None:
        """Attach to another stream, moving the effect over if it is on."""
        if self._on:
            self.off()
            self._stream = stream
            self.on()
        else:
            self._stream = stream

    def on(self) -> None:
        """Switch the effect on, adding it to the stream if there is one."""
        if self._on:
            return
        self._on = True
        if self._stream is None:
            return
        self._handle = self._stream.add_effect(self.KIND, self._parameters())

    def off(self) -> None:
        """Switch the effect off, removing it from the stream."""
        if not self._on:
            return
        self._on = False
        if self._stream is None or self._handle is None:
            return
        self._stream.remove_effect(self._handle)
        self._handle = None

    def _apply(self, name: str, value: Any) -> None:
        if not self._on or self._stream is None or self._handle not in self._stream:
            return
        self._stream.set_parameters(self._handle, {name: value})

    def set_wet_dry_mix(self, value: float) -> None:
        """Wet/dry mix in percent, clamped to 0..100."""
        self._wet_dry_mix = _clamp(value, 0.0, 100.0)
        self._apply("wet_dry_mix", self._wet_dry_mix)

    def set_depth(self, value: float) -> None:
        """Modulation depth in percent, clamped to 0..100."""
        self._depth = _clamp(value, 0.0, 100.0)
        self._apply("depth", self._depth)

    def set_feedback(self, value: float) -> None:
        """Feedback in percent, clamped to -99..99."""
        self._feedback = _clamp(value, -99.0, 99.0)
        self._apply("feedback", self._feedback)

    def set_frequency(self, value: float) -> None:
        """LFO frequency in Hz, clamped to 0..10."""
        self._frequency = _clamp(value, 0.0, 10.0)
        self._apply("frequency", self._frequency)

    def set_delay(self, value: float) -> None:
        """Delay in ms, clamped to 0..20."""
        self._delay = _clamp(value, 0.0, 20.0)
        self._apply("delay", self._delay)

    def set_waveform(self, waveform: WaveformType) -> None:
        """Choose the LFO waveform."""
        self._waveform = WaveformType(waveform)
        self._apply("waveform", self._waveform.value)

    def set_phase(self, phase: PhaseType) -> None:
        """Choose the LFO phase difference."""
        self._phase = PhaseType(phase)
        self._apply("phase", self._phase.value)

    def reset(self) -> None:
        """Restore the default settings."""
        self.set_wet_dry_mix(50)
        self.set_depth(10)
        self.set_feedback(25)
        self.set_frequency(1)
        self.set_delay(16)
        self.set_waveform(WaveformType.Sine)
        self.set_phase(PhaseType.Phase90)