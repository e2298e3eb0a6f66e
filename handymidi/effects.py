"""An audio stream holding effect chains, and the reverb effect."""

from __future__ import annotations

from typing import Any, Optional

__all__ = ["AudioStream", "ReverbFX"]


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(float(value), low), high)


class AudioStream:
    """An output stream with an ordered chain of parameterised effects."""

    def __init__(self) -> None:
        self._effects: dict[int, tuple[str, dict[str, Any]]] = {}
        self._next_handle = 1

    @property
    def effects(self) -> dict[int, tuple[str, dict[str, Any]]]:
        """A copy of the effect chain: handle -> (kind, parameters)."""
        return {h: (kind, dict(params)) for h, (kind, params) in self._effects.items()}

    def __contains__(self, handle: object) -> bool:
        return handle in self._effects

    def __len__(self) -> int:
        return len(self._effects)

    def add_effect(self, kind: str, params: Optional[dict[str, Any]] = None) -> int:
        """Append an effect of the given kind and return its handle."""
        handle = self._next_handle
        self._next_handle += 1
        self._effects[handle] = (kind, dict(params or {}))
        return handle

    def remove_effect(self, handle: int) -> bool:
        """Remove an effect; returns False when the handle is unknown."""
        return self._effects.pop(handle, None) is not None

    def get_parameters(self, handle: int) -> dict[str, Any]:
        """A copy of an effect's parameters; KeyError for an unknown handle."""
        return dict(self._effects[handle][1])

    def set_parameters(self, handle: int, params: dict[str, Any]) -> None:
        """Update an effect's parameters; KeyError for an unknown handle."""
        self._effects[handle][1].update(params)


class ReverbFX:
    """Reverb effect whose settings persist while it is switched off or detached."""

    KIND = "reverb"

    def __init__(self, stream: Optional[AudioStream] = None) -> None:
        self._stream = stream
        self._handle: Optional[int] = None
        self._on = False
        self._in_gain = 0.0
        self._reverb_mix = 0.0
        self._reverb_time = 1000.0
        self._high_freq_rt_ratio = 0.001

    @property
    def stream(self) -> Optional[AudioStream]:
        return self._stream

    @property
    def is_on(self) -> bool:
        return self._on

    @property
    def in_gain(self) -> float:
        return self._in_gain

    @property
    def reverb_mix(self) -> float:
        return self._reverb_mix

    @property
    def reverb_time(self) -> float:
        return self._reverb_time

    @property
    def high_freq_rt_ratio(self) -> float:
        return self._high_freq_rt_ratio

    def _parameters(self) -> dict[str, float]:
        return {
            "in_gain": self._in_gain,
            "reverb_mix": self._reverb_mix,
            "reverb_time": self._reverb_time,
            "high_freq_rt_ratio": self._high_freq_rt_ratio,
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

    def _apply(self, name: str, value: float) -> None:
        if not self._on or self._stream is None or self._handle not in self._stream:
            return
        self._stream.set_parameters(self._handle, {name: value})

    def set_in_gain(self, value: float) -> None:
        """Input gain in dB, clamped to -96..0."""
        self._in_gain = _clamp(value, -96.0, 0.0)
        self._apply("in_gain", self._in_gain)

    def set_reverb_mix(self, value: float) -> None:
        """Reverb mix in dB, clamped to -96..0."""
        self._reverb_mix = _clamp(value, -96.0, 0.0)
        self._apply("reverb_mix", self._reverb_mix)

    def set_reverb_time(self, value: float) -> None:
        """Reverb time in ms, clamped to 0.001..3000."""
        self._reverb_time = _clamp(value, 0.001, 3000.0)
        self._apply("reverb_time", self._reverb_time)

    def set_high_freq_rt_ratio(self, value: float) -> None:
        """High-frequency reverb time ratio, clamped to 0.001..0.999."""
        self._high_freq_rt_ratio = _clamp(value, 0.001, 0.999)
        self._apply("high_freq_rt_ratio", self._high_freq_rt_ratio)

    def reset(self) -> None:
        """Restore the default settings."""
        self.set_in_gain(0.0)
        self.set_reverb_mix(0.0)
        self.set_reverb_time(1000.0)
        self.set_high_freq_rt_ratio(0.001)