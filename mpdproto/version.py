"""Protocol versions announced by the server."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ParseError, _parse_uint


@dataclass(frozen=True, order=True)
class Version:
    """A ``major.minor.patch`` protocol version, ordered field by field."""

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for part in (self.major, self.minor, self.patch):
            if not 0 <= part <= 255:
                raise ValueError(f"version component out of range: {part}")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version such as ``0.23.5``; parts beyond the third are ignored."""
        parts = text.strip().split(".")
        names = ("major", "minor", "patch")
        if len(parts) < len(names):
            missing = names[len(parts)]
            raise ParseError(f"Cannot parse {missing} version from '{text}'")
        major, minor, patch = (_parse_uint(part, 8) for part in parts[:3])
        return cls(major, minor, patch)