"""Sending commands to the server and reading its replies."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import suppress
from dataclasses import dataclass
from typing import BinaryIO, Callable, TypeVar

from .errors import ClientClosedError, GenericError, MpdCommandError, MpdError, MpdFailureResponse, _parse_uint
from .parsing import ResponseParser, split_line

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=ResponseParser)


class SocketClient(ABC):
    """A connection that commands can be written to and replies read from."""

    @abstractmethod
    def reconnect(self) -> SocketClient:
        """Open the connection again after it was lost."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Write all of ``data``; raise :class:`OSError` on failure."""

    @abstractmethod
    def reader(self) -> BinaryIO:
        """The buffered binary stream replies are read from."""


@dataclass(frozen=True)
class MpdLine:
    """One line of a reply: ``OK`` when ``value`` is None, else a value line."""

    value: str | None = None

    @property
    def is_ok(self) -> bool:
        return self.value is None


@dataclass
class BinaryResponse:
    """Header of one chunk of a binary reply."""

    bytes_read: int = 0
    size_total: int = 0
    mime_type: str | None = None


def read_line(reader: BinaryIO) -> MpdLine:
    """Read one reply line; raise on ``ACK`` lines and closed connections."""
    try:
        raw = reader.readline()
        line = raw.decode("utf-8")
    except (OSError, UnicodeDecodeError):
        raise ClientClosedError() from None
    if not line:
        raise ClientClosedError()
    if line.startswith("OK") or line.startswith("list_OK"):
        return MpdLine()
    if line.startswith("ACK"):
        raise MpdCommandError(MpdFailureResponse.parse(line))
    return MpdLine(line[:-1])


class Command:
    """A command that has been sent and whose reply is still to be read."""

    def __init__(self, command: str, client: SocketClient) -> None:
        self._command = command
        self._client = client
        self._execute(command)

    def __repr__(self) -> str:
        return repr(self._command)

    def _execute(self, command: str) -> None:
        data = f"{command}\n".encode("utf-8")
        try:
            self._client.write(data)
        except BrokenPipeError:
            self._client.reconnect()
            try:
                self._client.write(data)
            except OSError as err:
                raise GenericError(str(err)) from err
        except OSError as err:
            raise GenericError(str(err)) from err

    def _restart(self) -> None:
        self._client.reconnect()
        self._execute(self._command)

    def read_ok(self) -> None:
        """Expect a bare ``OK``."""
        logger.debug("Reading command %r", self._command)
        try:
            line = read_line(self._client.reader())
        except ClientClosedError:
            self._restart()
            return self.read_ok()
        if not line.is_ok:
            raise GenericError(f"Expected 'OK' but got '{line.value}'")
        return None

    def read_response(self, factory: Callable[[], P]) -> P:
        """Feed every value line into a new ``factory()`` object and return it."""
        logger.debug("Reading command %r", self._command)
        result = factory()
        reader = self._client.reader()
        while True:
            try:
                line = read_line(reader)
            except ClientClosedError:
                self._restart()
                return self.read_response(factory)
            if line.is_ok:
                return result
            result.feed(line.value)

    def read_opt_response(self, factory: Callable[[], P]) -> P | None:
        """Like :meth:`read_response`, but None when the reply holds no values."""
        logger.debug("Reading command %r", self._command)
        result = factory()
        found_any = False
        reader = self._client.reader()
        while True:
            try:
                line = read_line(reader)
            except ClientClosedError:
                self._restart()
                return self.read_opt_response(factory)
            if line.is_ok:
                return result if found_any else None
            found_any = True
            result.feed(line.value)

    def read_bin(self) -> bytes | None:
        """Read a binary reply, asking for further chunks until it is complete."""
        buffer = bytearray()
        try:
            first = self.read_bin_chunk(buffer)
        except ClientClosedError:
            self._client.reconnect()
            self._execute(f"{self._command} {len(buffer)}")
            with suppress(MpdError):
                self.read_bin_chunk(buffer)
        except MpdError:
            pass
        else:
            if first is None:
                return None

        while True:
            self._execute(f"{self._command} {len(buffer)}")
            response = self.read_bin_chunk(buffer)
            if response is None:
                return None
            if len(buffer) >= response.size_total or response.bytes_read == 0:
                logger.debug("Finished reading binary response of %d bytes", len(buffer))
                break
        return bytes(buffer)

    def read_bin_chunk(self, buffer: bytearray) -> BinaryResponse | None:
        """Read one chunk into ``buffer``; None when the server sent no data."""
        result = BinaryResponse()
        reader = self._client.reader()
        while True:
            line = read_line(reader)
            if line.is_ok:
                logger.warning("Expected binary data but got 'OK'")
                return None
            key, value = split_line(line.value)
            key = key.lower()
            if key == "size":
                result.size_total = _parse_uint(value, 32)
            elif key == "type":
                result.mime_type = value
            elif key == "binary":
                result.bytes_read = _parse_uint(value, 64)
                break
            else:
                raise GenericError(f"Unexpected key when parsing binary response: '{key}'")

        try:
            buffer += reader.read(result.bytes_read)
        except OSError as err:
            raise GenericError(str(err)) from err
        # The server ends binary data with an empty line.
        with suppress(OSError):
            reader.readline()
        line = read_line(reader)
        if not line.is_ok:
            raise GenericError(f"Expected 'OK' but got '{line.value}'")
        return result