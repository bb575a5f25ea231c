"""Player status, volume and the small enums that go with them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum

from .errors import GenericError, ParseError, _parse_uint
from .parsing import ResponseParser


def _parse_seconds(text: str) -> timedelta:
    if text != text.strip() or "_" in text:
        raise ParseError("invalid float literal")
    try:
        seconds = float(text)
    except ValueError:
        raise ParseError("invalid float literal") from None
    if not math.isfinite(seconds) or seconds < 0:
        raise ParseError(f"cannot convert '{text}' to a duration")
    return timedelta(seconds=seconds)


class PlaybackState(Enum):
    """Whether the player is playing, stopped or paused."""

    PLAY = "play"
    STOP = "stop"
    PAUSE = "pause"

    def __str__(self) -> str:
        return _STATE_LABELS[self]

    @classmethod
    def parse(cls, text: str) -> PlaybackState:
        try:
            return cls(text)
        except ValueError:
            raise GenericError(f"Invalid State: '{text}'") from None


_STATE_LABELS = {
    PlaybackState.PLAY: "Playing",
    PlaybackState.STOP: "Stopped",
    PlaybackState.PAUSE: "Paused",
}


class OnOffOneshot(Enum):
    """The three-way setting used by ``single`` and ``consume``."""

    ON = "1"
    OFF = "0"
    ONESHOT = "oneshot"

    def __str__(self) -> str:
        return _ON_OFF_LABELS[self]

    @classmethod
    def parse(cls, text: str) -> OnOffOneshot:
        try:
            return cls(text)
        except ValueError:
            raise GenericError(f"Received unknown value for OnOffOneshot '{text}'") from None

    def cycle(self) -> OnOffOneshot:
        return {
            OnOffOneshot.ON: OnOffOneshot.OFF,
            OnOffOneshot.OFF: OnOffOneshot.ONESHOT,
            OnOffOneshot.ONESHOT: OnOffOneshot.ON,
        }[self]

    def cycle_pre_mpd_24(self) -> OnOffOneshot:
        """Cycle without the oneshot mode, which older servers lack."""
        return OnOffOneshot.ON if self is OnOffOneshot.OFF else OnOffOneshot.OFF

    def to_mpd_value(self) -> str:
        return self.value


_ON_OFF_LABELS = {
    OnOffOneshot.ON: "On",
    OnOffOneshot.OFF: "Off",
    OnOffOneshot.ONESHOT: "OS",
}


def _clamp_volume(value: int) -> int:
    return max(0, min(value, 100))


@dataclass
class Volume(ResponseParser):
    """Playback volume between 0 and 100."""

    value: int = 0

    def __post_init__(self) -> None:
        self.value = _clamp_volume(self.value)

    def set_value(self, value: int) -> Volume:
        self.value = _clamp_volume(value)
        return self

    def inc(self) -> Volume:
        if self.value < 100:
            self.value += 1
        return self

    def inc_by(self, step: int) -> Volume:
        self.value = min(self.value + step, 100)
        return self

    def dec(self) -> Volume:
        if self.value > 0:
            self.value -= 1
        return self

    def dec_by(self, step: int) -> Volume:
        self.value = max(self.value - step, 0)
        return self

    def handle(self, key: str, value: str) -> bool:
        if key != "volume":
            return False
        self.value = _parse_uint(value, 8)
        return True


def _u32(text: str) -> int:
    return _parse_uint(text, 32)


@dataclass
class Status(ResponseParser):
    """The reply to the ``status`` command."""

    partition: str = ""
    volume: Volume = field(default_factory=Volume)
    repeat: bool = False
    random: bool = False
    single: OnOffOneshot = OnOffOneshot.OFF
    consume: OnOffOneshot = OnOffOneshot.OFF
    playlist: int | None = None
    playlistlength: int = 0
    state: PlaybackState = PlaybackState.STOP
    song: int | None = None
    songid: int | None = None
    nextsong: int | None = None
    nextsongid: int | None = None
    elapsed: timedelta = field(default_factory=timedelta)
    duration: timedelta = field(default_factory=timedelta)
    bitrate: int | None = None
    xfade: int | None = None
    mixrampdb: str | None = None
    mixrampdelay: str | None = None
    audio: str | None = None
    updating_db: int | None = None
    error: str | None = None

    def handle(self, key: str, value: str) -> bool:
        if key == "partition":
            self.partition = value
        elif key == "volume":
            self.volume = Volume(_parse_uint(value, 8))
        elif key == "repeat":
            self.repeat = value != "0"
        elif key == "random":
            self.random = value != "0"
        elif key == "single":
            self.single = OnOffOneshot.parse(value)
        elif key == "consume":
            self.consume = OnOffOneshot.parse(value)
        elif key == "playlistlength":
            self.playlistlength = _u32(value)
        elif key == "state":
            self.state = PlaybackState.parse(value)
        elif key in ("playlist", "song", "songid", "nextsong", "nextsongid", "xfade", "updating_db"):
            setattr(self, key, _u32(value))
        elif key == "elapsed":
            self.elapsed = _parse_seconds(value)
        elif key == "duration":
            self.duration = _parse_seconds(value)
        elif key == "bitrate":
            self.bitrate = None if value == "0" else _u32(value)
        elif key in ("mixrampdb", "mixrampdelay", "audio", "error"):
            setattr(self, key, value)
        elif key == "time":
            pass
        else:
            return False
        return True