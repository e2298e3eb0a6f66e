"""Fifteen- and thirty-one-band graphic equalizers attached to an audio stream."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from .effects import AudioStream

__all__ = [
    "EQFrequency15Range",
    "EQFrequency31Range",
    "Equalizer15BandFX",
    "Equalizer31BandFX",
]

_CENTERS_15 = (
    25.0, 40.0, 63.0, 100.0, 160.0, 250.0, 400.0, 630.0, 1000.0, 1600.0,
    2500.0, 4000.0, 6300.0, 10000.0, 16000.0,
)

_CENTERS_31 = (
    20.0, 25.0, 31.5, 40.0, 50.0, 63.0, 80.0, 100.0, 125.0, 160.0,
    200.0, 250.0, 315.0, 400.0, 500.0, 630.0, 800.0, 1000.0, 1250.0, 1600.0,
    2000.0, 2500.0, 3150.0, 4000.0, 5000.0, 6300.0, 8000.0, 10000.0, 12500.0,
    16000.0, 20000.0,
)

MAX_GAIN = 15.0
MIN_GAIN = -15.0


class EQFrequency15Range(Enum):
    """Bands of the fifteen-band equalizer, lowest first."""

    Frequency25Hz = 0
    Frequency40Hz = 1
    Frequency63Hz = 2
    Frequency100Hz = 3
    Frequency160Hz = 4
    Frequency250Hz = 5
    Frequency400Hz = 6
    Frequency630Hz = 7
    Frequency1000Hz = 8
    Frequency1600Hz = 9
    Frequency2500Hz = 10
    Frequency4000Hz = 11
    Frequency6300Hz = 12
    Frequency10000Hz = 13
    Frequency16000Hz = 14

    @property
    def center(self) -> float:
        """Centre frequency of the band in Hz."""
        return _CENTERS_15[self.value]


class EQFrequency31Range(Enum):
    """Bands of the thirty-one-band equalizer, lowest first."""

    Frequency20Hz = 0
    Frequency25Hz = 1
    Frequency31d5Hz = 2
    Frequency40Hz = 3
    Frequency50Hz = 4
    Frequency63Hz = 5
    Frequency80Hz = 6
    Frequency100Hz = 7
    Frequency125Hz = 8
    Frequency160Hz = 9
    Frequency200Hz = 10
    Frequency250Hz = 11
    Frequency315Hz = 12
    Frequency400Hz = 13
    Frequency500Hz = 14
    Frequency630Hz = 15
    Frequency800Hz = 16
    Frequency1000Hz = 17
    Frequency1250Hz = 18
    Frequency1600Hz = 19
    Frequency2000Hz = 20
    Frequency2500Hz = 21
    Frequency3150Hz = 22
    Frequency4000Hz = 23
    Frequency5000Hz = 24
    Frequency6300Hz = 25
    Frequency8000Hz = 26
    Frequency10000Hz = 27
    Frequency12500Hz = 28
    Frequency16000Hz = 29
    Frequency20000Hz = 30

    @property
    def center(self) -> float:
        """Centre frequency of the band in Hz."""
        return _CENTERS_31[self.value]


Band = Union[EQFrequency15Range, EQFrequency31Range]


class _Equalizer:
    """A bank of peaking filters, one per band, kept in band order."""

    BANDS: type[Enum]
    KIND: str
    BASE_PARAMETERS: dict[str, Any]

    def __init__(self, stream: Optional[AudioStream] = None) -> None:
        self._stream = stream
        self._on = False
        self._gain: dict[Any, float] = {band: 0.0 for band in self.BANDS}
        self._handles: dict[Any, int] = {}

    @property
    def stream(self) -> Optional[AudioStream]:
        return self._stream

    @property
    def is_on(self) -> bool:
        return self._on

    def set_stream(self, stream: Optional[AudioStream]) -> None:
        """Attach to another stream, moving the filters over if they are on."""
        if self._on:
            self.off()
            self._stream = stream
            self.on()
        else:
            self._stream = stream

    def on(self) -> None:
        """Switch the equalizer on, adding one filter per band to the stream."""
        if self._on:
            return
        self._on = True
        if self._stream is None:
            return
        self._handles = {}
        for band, gain in self._gain.items():
            params = dict(self.BASE_PARAMETERS, center=band.center, gain=gain)
            self._handles[band] = self._stream.add_effect(self.KIND, params)

    def off(self) -> None:
        """Switch the equalizer off, removing its filters from the stream."""
        if not self._on:
            return
        self._on = False
        if self._stream is None:
            return
        for handle in self._handles.values():
            self._stream.remove_effect(handle)
        self._handles = {}

    def gain(self, freq: Optional[Band] = None) -> Union[float, dict[Any, float]]:
        """Gain of one band in dB, or a copy of all gains when freq is None."""
        if freq is None:
            return dict(self._gain)
        return self._gain[self.BANDS(freq)]

    def set_gain(self, freq: Band, gain: float) -> None:
        """Set a band's gain in dB, clamped to -15..15."""
        band = self.BANDS(freq)
        value = min(max(float(gain), MIN_GAIN), MAX_GAIN)
        self._gain[band] = value
        if not self._on or self._stream is None:
            return
        handle = self._handles.get(band)
        if handle is not None and handle in self._stream:
            self._stream.set_parameters(handle, {"gain": value})

    def reset_gain(self) -> None:
        """Set every band back to 0 dB."""
        for band in list(self._gain):
            self.set_gain(band, 0.0)


class Equalizer15BandFX(_Equalizer):
    """Fifteen-band parametric equalizer."""

    BANDS = EQFrequency15Range
    KIND = "parameq"
    BASE_PARAMETERS = {"bandwidth": 18.0}

    def set_stream(self, stream: Optional[AudioStream]) -> None:
        """Attach to another stream, moving the filters over if they are on."""
        super().set_stream(stream)

    def on(self) -> None:
        """Switch the equalizer on, adding one filter per band to the stream."""
        super().on()

    def off(self) -> None:
        """Switch the equalizer off, removing its filters from the stream."""
        super().off()

    def gain(self, freq: Optional[Band] = None) -> Union[float, dict[Any, float]]:
        """Gain of one band in dB, or a copy of all gains when freq is None."""
        return super().gain(freq)

    def set_gain(self, freq: Band, gain: float) -> None:
        """Set a band's gain in dB, clamped to -15..15."""
        super().set_gain(freq, gain)

    def reset_gain(self) -> None:
        """Set every band back to 0 dB."""
        super().reset_gain()


class Equalizer31BandFX(_Equalizer):
    """Thirty-one-band peaking equalizer acting on all channels."""

    BANDS = EQFrequency31Range
    KIND = "peakeq"
    BASE_PARAMETERS = {"bandwidth": 4.0, "q": 0.0, "band": 0, "channel": "all"}

    def set_stream(self, stream: Optional[AudioStream]) -> None:
        """Attach to another stream, moving the filters over if they are on."""
        super().set_stream(stream)

    def on(self) -> None:
        """Switch the equalizer on, adding one filter per band to the stream."""
        super().on()

    def off(self) -> None:
        """Switch the equalizer off, removing its filters from the stream."""
        super().off()

    def gain(self, freq: Optional[Band] = None) -> Union[float, dict[Any, float]]:
        """Gain of one band in dB, or a copy of all gains when freq is None."""
        return super().gain(freq)

    def set_gain(self, freq: Band, gain: float) -> None:
        """Set a band's gain in dB, clamped to -15..15."""
        super().set_gain(freq, gain)

    def reset_gain(self) -> None:
        """Set every band back to 0 dB."""
        super().reset_gain()