import logging
from dataclasses import dataclass, field

import pytest

from mpdproto.errors import GenericError, ValueExpectedError
from mpdproto.parsing import ResponseParser, split_line


@dataclass
class Recorder(ResponseParser):
    seen: list = field(default_factory=list)

    def handle(self, key, value):
        if key == "fail":
            raise GenericError("intentional fail")
        if key.startswith("known"):
            self.seen.append((key, value))
            return True
        return False


def test_split_simple_line():
    assert split_line("file: song.flac") == ("file", "song.flac")


def test_split_keeps_later_colons_in_value():
    assert split_line("Last-Modified: 2022-12-24T13:02:09Z") == (
        "Last-Modified",
        "2022-12-24T13:02:09Z",
    )


def test_split_without_colon():
    with pytest.raises(ValueExpectedError) as info:
        split_line("idc")
    assert info.value.line == "idc"


def test_split_key_with_nothing_after_colon():
    assert split_line("key:") == ("key", "")


def test_feed_lower_cases_key():
    parser = Recorder()
    ResponseParser.feed(parser, "KnownA: Value")
    ResponseParser.feed(parser, "known_b: other")
    assert parser.seen == [("knowna", "Value"), ("known_b", "other")]


def test_feed_logs_unhandled_pair(caplog):
    parser = Recorder()
    with caplog.at_level(logging.WARNING, logger="mpdproto.parsing"):
        ResponseParser.feed(parser, "Mystery: thing")
    assert parser.seen == []
    assert "Mystery" in caplog.text
    assert "thing" in caplog.text


def test_feed_propagates_handler_errors():
    with pytest.raises(GenericError) as info:
        ResponseParser.feed(Recorder(), "fail: lol")
    assert info.value.message == "intentional fail"


def test_feed_rejects_line_without_value():
    with pytest.raises(ValueExpectedError) as info:
        ResponseParser.feed(Recorder(), "no separator here")
    assert info.value.line == "no separator here"