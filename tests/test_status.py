from datetime import timedelta

import pytest

from mpdproto.errors import GenericError, ParseError
from mpdproto.status import OnOffOneshot, PlaybackState, Status, Volume

STATUS_LINES = [
    "volume: 50",
    "repeat: 0",
    "random: 1",
    "single: 0",
    "consume: oneshot",
    "playlist: 12",
    "playlistlength: 3",
    "state: play",
    "song: 1",
    "songid: 2",
    "nextsong: 2",
    "nextsongid: 3",
    "time: 1:200",
    "elapsed: 1.5",
    "bitrate: 320",
    "duration: 200.25",
    "audio: 44100:24:2",
    "updating_db: 7",
]


def parse_status(lines):
    status = Status()
    for line in lines:
        status.feed(line)
    return status


def test_parses_full_status():
    status = parse_status(STATUS_LINES)
    assert status.volume == Volume(50)
    assert status.repeat is False
    assert status.random is True
    assert status.single is OnOffOneshot.OFF
    assert status.consume is OnOffOneshot.ONESHOT
    assert status.playlist == 12
    assert status.playlistlength == 3
    assert status.state is PlaybackState.PLAY
    assert (status.song, status.songid, status.nextsong, status.nextsongid) == (1, 2, 2, 3)
    assert status.elapsed == timedelta(seconds=1.5)
    assert status.duration == timedelta(seconds=200.25)
    assert status.bitrate == 320
    assert status.audio == "44100:24:2"
    assert status.updating_db == 7


def test_default_status():
    status = Status()
    assert status.state is PlaybackState.STOP
    assert status.volume.value == 0
    assert status.song is None
    assert status.elapsed == timedelta()


def test_zero_bitrate_clears_value():
    status = parse_status(["bitrate: 320", "bitrate: 0"])
    assert status.bitrate is None


def test_unknown_key_is_not_handled():
    status = Status()
    assert status.handle("mystery", "x") is False
    assert status.handle("time", "1:2") is True


def test_invalid_state():
    with pytest.raises(GenericError) as info:
        Status().handle("state", "rewind")
    assert info.value.message == "Invalid State: 'rewind'"


@pytest.mark.parametrize(
    "key, value",
    [("playlist", "abc"), ("volume", "-1"), ("elapsed", "-1.0"), ("duration", "x")],
)
def test_invalid_numbers(key, value):
    with pytest.raises(ParseError):
        Status().handle(key, value)


def test_status_volume_is_clamped():
    status = Status()
    status.handle("volume", "150")
    assert status.volume.value == 100


def test_state_parse_and_labels():
    assert PlaybackState.parse("pause") is PlaybackState.PAUSE
    assert [str(s) for s in PlaybackState] == ["Playing", "Stopped", "Paused"]


def test_on_off_oneshot_parse_and_values():
    for mode in OnOffOneshot:
        assert OnOffOneshot.parse(mode.to_mpd_value()) is mode
    assert OnOffOneshot.ONESHOT.to_mpd_value() == "oneshot"
    assert [str(m) for m in OnOffOneshot] == ["On", "Off", "OS"]


def test_on_off_oneshot_unknown():
    with pytest.raises(GenericError) as info:
        OnOffOneshot.parse("2")
    assert info.value.message == "Received unknown value for OnOffOneshot '2'"


def test_cycle():
    assert OnOffOneshot.ON.cycle() is OnOffOneshot.OFF
    assert OnOffOneshot.OFF.cycle() is OnOffOneshot.ONESHOT
    assert OnOffOneshot.ONESHOT.cycle() is OnOffOneshot.ON


def test_cycle_pre_mpd_24():
    assert OnOffOneshot.ON.cycle_pre_mpd_24() is OnOffOneshot.OFF
    assert OnOffOneshot.OFF.cycle_pre_mpd_24() is OnOffOneshot.ON
    assert OnOffOneshot.ONESHOT.cycle_pre_mpd_24() is OnOffOneshot.OFF


def test_volume_constructor_clamps():
    assert Volume(250).value == 100


def test_volume_bounds():
    assert Volume(100).inc().value == 100
    assert Volume(0).dec().value == 0
    assert Volume(90).inc_by(50).value == 100
    assert Volume(10).dec_by(50).value == 0


def test_volume_inc_dec_are_inverse():
    volume = Volume(40)
    assert volume.inc().dec().value == 40
    assert volume.inc_by(7).dec_by(7).value == 40


def test_volume_set_value_clamps():
    assert Volume().set_value(120).value == 100


def test_volume_handle():
    volume = Volume()
    assert volume.handle("volume", "42") is True
    assert volume.value == 42
    assert volume.handle("other", "1") is False
    assert volume.value == 42