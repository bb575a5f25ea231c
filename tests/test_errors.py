import pytest

from mpdproto.errors import (
    ClientClosedError,
    ErrorCode,
    GenericError,
    MpdCommandError,
    MpdFailureResponse,
    ParseError,
    UnknownCodeError,
    UnsupportedMpdVersionError,
    ValueExpectedError,
)

ACK_LINE = "ACK [55@2] {some_cmd} error message boi"


def test_parses_ack_line():
    result = MpdFailureResponse.parse(ACK_LINE)
    assert result == MpdFailureResponse(
        code=ErrorCode.PLAYER_SYNC,
        command_list_index=2,
        command="some_cmd",
        message="error message boi",
    )


def test_trailing_newline_is_trimmed_from_message():
    result = MpdFailureResponse.parse(ACK_LINE + "\n")
    assert result.message == "error message boi"


@pytest.mark.parametrize("code", list(ErrorCode))
def test_error_code_round_trip(code):
    assert ErrorCode.parse(str(code.value)) is code


def test_unknown_code():
    with pytest.raises(UnknownCodeError) as info:
        ErrorCode.parse("6")
    assert info.value.code == 6


@pytest.mark.parametrize("text", ["abc", "", "300", "-1"])
def test_unparsable_code(text):
    with pytest.raises(ParseError) as info:
        ErrorCode.parse(text)
    assert info.value.message == text


def test_error_code_description():
    assert str(ErrorCode.parse("50")) == "resource does not exist"
    assert ErrorCode.parse("55").description == "player is in an inconsistent state"


@pytest.mark.parametrize(
    "line, detail",
    [
        ("OK", "No Ack"),
        ("ACK [55 2] {c} m", "No error code"),
        ("ACK [55@2 {c} m", "No command index"),
        ("ACK [55@x] {c} m", "Invalid command index"),
        ("ACK [55@2]{c} m", "No current command"),
        ("ACK [55@2] {c}m", "No current command"),
    ],
)
def test_malformed_ack(line, detail):
    with pytest.raises(ParseError) as info:
        MpdFailureResponse.parse(line)
    assert info.value.message == f"Invalid error format. {detail}."


def test_ack_with_unknown_code():
    with pytest.raises(UnknownCodeError):
        MpdFailureResponse.parse("ACK [7@0] {cmd} msg")


def test_failure_response_str_mentions_all_parts():
    text = str(MpdFailureResponse.parse(ACK_LINE))
    assert text.startswith("Cannot execute command: 'some_cmd'.")
    assert "Detail: 'error message boi'" in text
    assert "Reason: 'player is in an inconsistent state'" in text
    assert text.endswith("Index in command list: '2'")


def test_command_error_wraps_response():
    response = MpdFailureResponse.parse(ACK_LINE)
    err = MpdCommandError(response)
    assert err.code is ErrorCode.PLAYER_SYNC
    assert str(err) == f"MpdError: '{response}'"


def test_error_messages():
    assert str(ParseError("x")) == "ParseError: 'x'"
    assert str(GenericError("boom")) == "GenericError: 'boom'"
    assert str(ClientClosedError()) == "Client has been already closed."
    assert str(ValueExpectedError("line")) == "Expected value from mpd but got 'line'"
    assert str(UnknownCodeError(9)) == "UnknownCodeError: '9'"
    assert str(UnsupportedMpdVersionError("v")) == "Unsupported mpd version: 'v'"


def test_errors_compare_by_type_and_content():
    assert GenericError("a") == GenericError("a")
    assert GenericError("a") != GenericError("b")
    assert GenericError("a") != ParseError("a")
    assert ClientClosedError() == ClientClosedError()