"""Errors raised while talking to an MPD server and parsing its replies."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

_UINT_RE = re.compile(r"\+?[0-9]+")


def _parse_uint(text: str, bits: int) -> int:
    """Parse an unsigned integer that must fit in ``bits`` bits."""
    if not text:
        raise ParseError("cannot parse integer from empty string")
    if not _UINT_RE.fullmatch(text):
        raise ParseError("invalid digit found in string")
    value = int(text.lstrip("+"))
    if value >= 1 << bits:
        raise ParseError("number too large to fit in target type")
    return value


class MpdError(Exception):
    """Base class of every error raised by this package."""

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.args == other.args  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class ParseError(MpdError):
    """A value received from the server could not be parsed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"ParseError: '{self.message}'"


class UnknownCodeError(MpdError):
    """The server answered with an error code this package does not know."""

    def __init__(self, code: int) -> None:
        super().__init__(code)
        self.code = code

    def __str__(self) -> str:
        return f"UnknownCodeError: '{self.code}'"


class GenericError(MpdError):
    """Any other failure, described by a message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"GenericError: '{self.message}'"


class ClientClosedError(MpdError):
    """The connection to the server has been closed."""

    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return "Client has been already closed."


class ValueExpectedError(MpdError):
    """A line that should hold a ``key: value`` pair held none."""

    def __init__(self, line: str) -> None:
        super().__init__(line)
        self.line = line

    def __str__(self) -> str:
        return f"Expected value from mpd but got '{self.line}'"


class UnsupportedMpdVersionError(MpdError):
    """The feature requested needs a newer server."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"Unsupported mpd version: '{self.detail}'"


class MpdCommandError(MpdError):
    """The server refused a command with an ``ACK`` response."""

    def __init__(self, response: MpdFailureResponse) -> None:
        super().__init__(response)
        self.response = response

    @property
    def code(self) -> ErrorCode:
        return self.response.code

    def __str__(self) -> str:
        return f"MpdError: '{self.response}'"


class ErrorCode(IntEnum):
    """Error codes the server sends in ``ACK`` lines."""

    NOT_LIST = 1
    ARGUMENT = 2
    BAD_PASSWORD = 3
    PERMISSION = 4
    UNKNOWN_CMD = 5
    NO_EXIST = 50
    PLAYLIST_MAX = 51
    SYSTEM = 52
    PLAYLIST_LOAD = 53
    UPDATE_ALREADY = 54
    PLAYER_SYNC = 55
    EXIST = 56

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    def __str__(self) -> str:
        return self.description

    @classmethod
    def parse(cls, text: str) -> ErrorCode:
        """Parse a numeric error code as sent by the server."""
        try:
            number = _parse_uint(text, 8)
        except ParseError:
            raise ParseError(text) from None
        try:
            return cls(number)
        except ValueError:
            raise UnknownCodeError(number) from None


_DESCRIPTIONS = {
    ErrorCode.NOT_LIST: "not a list",
    ErrorCode.ARGUMENT: "bad argument",
    ErrorCode.BAD_PASSWORD: "invalid password",
    ErrorCode.PERMISSION: "no permission",
    ErrorCode.UNKNOWN_CMD: "unknown command",
    ErrorCode.NO_EXIST: "resource does not exist",
    ErrorCode.PLAYLIST_MAX: "maximum playlist size",
    ErrorCode.SYSTEM: "system error",
    ErrorCode.PLAYLIST_LOAD: "unable to load playlist",
    ErrorCode.UPDATE_ALREADY: "database update already in progress",
    ErrorCode.PLAYER_SYNC: "player is in an inconsistent state",
    ErrorCode.EXIST: "resource already exists",
}


def _format_error(detail: str) -> ParseError:
    return ParseError(f"Invalid error format. {detail}.")


@dataclass(frozen=True)
class MpdFailureResponse:
    """A parsed ``ACK [error@command_listNum] {current_command} message_text`` line."""

    code: ErrorCode
    command_list_index: int
    command: str
    message: str

    def __str__(self) -> str:
        return (
            f"Cannot execute command: '{self.command}'. Detail: '{self.message}'. "
            f"Reason: '{self.code!s}'. Index in command list: '{self.command_list_index}'"
        )

    @classmethod
    def parse(cls, line: str) -> MpdFailureResponse:
        """Parse an ``ACK`` line; raise :class:`ParseError` when it is malformed."""
        prefix = "ACK ["
        if not line.startswith(prefix):
            raise _format_error("No Ack")
        rest = line[len(prefix):]

        code_text, sep, rest = rest.partition("@")
        if not sep:
            raise _format_error("No error code")
        code = ErrorCode.parse(code_text)

        index_text, sep, rest = rest.partition("]")
        if not sep:
            raise _format_error("No command index")
        try:
            index = _parse_uint(index_text, 8)
        except ParseError:
            raise _format_error("Invalid command index") from None

        if not rest.startswith(" {"):
            raise _format_error("No current command")
        command, sep, rest = rest[2:].partition("} ")
        if not sep:
            raise _format_error("No current command")

        return cls(code=code, command_list_index=index, command=command, message=rest.strip())