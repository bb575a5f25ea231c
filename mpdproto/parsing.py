"""Line-oriented parsing of ``key: value`` responses."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .errors import ValueExpectedError

logger = logging.getLogger(__name__)


def split_line(line: str) -> tuple[str, str]:
    """Split ``key: value`` at the first colon, dropping the separator."""
    index = line.find(":")
    if index < 0:
        raise ValueExpectedError(line)
    return line[:index], line[index + 2:]


class ResponseParser(ABC):
    """Something built up from the lines of a server response."""

    @abstractmethod
    def handle(self, key: str, value: str) -> bool:
        """Take one pair with a lower-cased key; return whether it was used."""

    def feed(self, line: str) -> None:
        """Parse one response line and hand it to :meth:`handle`."""
        key, value = split_line(line)
        if not self.handle(key.lower(), value):
            logger.warning("Encountered unknown key/value pair %s: %s", key, value)