"""Arguments for server commands: value changes, ranges and search filters."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from .errors import _parse_uint


class SaveMode(Enum):
    """How ``save`` treats an existing stored playlist."""

    CREATE = "create"
    APPEND = "append"
    REPLACE = "replace"

    def __str__(self) -> str:
        return self.value


class ChangeKind(Enum):
    INCREASE = "+"
    DECREASE = "-"
    SET = ""


@dataclass(frozen=True)
class ValueChange:
    """A value to raise or lower by an amount, or to set outright."""

    kind: ChangeKind
    amount: int

    @classmethod
    def increase(cls, amount: int) -> ValueChange:
        return cls(ChangeKind.INCREASE, amount)

    @classmethod
    def decrease(cls, amount: int) -> ValueChange:
        return cls(ChangeKind.DECREASE, amount)

    @classmethod
    def set_to(cls, amount: int) -> ValueChange:
        return cls(ChangeKind.SET, amount)

    @classmethod
    def parse(cls, text: str) -> ValueChange:
        """Parse ``+N``, ``-N`` or ``N``; raise :class:`ParseError` otherwise."""
        if text.startswith("-"):
            return cls.decrease(_parse_uint(text.lstrip("-"), 32))
        if text.startswith("+"):
            return cls.increase(_parse_uint(text.lstrip("+"), 32))
        return cls.set_to(_parse_uint(text, 32))

    def to_mpd_str(self) -> str:
        return f"{self.kind.value}{self.amount}"


class MoveKind(Enum):
    RELATIVE_ADD = "+"
    RELATIVE_SUB = "-"
    ABSOLUTE = ""


@dataclass(frozen=True)
class QueueMoveTarget:
    """Where to move a queue entry: relative to the current song or absolute."""

    kind: MoveKind
    position: int

    @classmethod
    def relative_add(cls, position: int) -> QueueMoveTarget:
        return cls(MoveKind.RELATIVE_ADD, position)

    @classmethod
    def relative_sub(cls, position: int) -> QueueMoveTarget:
        return cls(MoveKind.RELATIVE_SUB, position)

    @classmethod
    def absolute(cls, position: int) -> QueueMoveTarget:
        return cls(MoveKind.ABSOLUTE, position)

    def as_mpd_str(self) -> str:
        return f"{self.kind.value}{self.position}"


@dataclass(frozen=True)
class SingleOrRange:
    """One position, or the half-open range ``start:end``."""

    start: int
    end: int | None = None

    @classmethod
    def single(cls, idx: int) -> SingleOrRange:
        return cls(idx)

    @classmethod
    def range(cls, start: int, end: int) -> SingleOrRange:
        return cls(start, end)

    def as_mpd_range(self) -> str:
        if self.end is None:
            return f'"{self.start}"'
        return f'"{self.start}:{self.end}"'

    def __str__(self) -> str:
        if self.end is None:
            return f"[{self.start}]"
        return f"[{self.start}:{self.end}]"


class Ranges(list):
    """A list of :class:`SingleOrRange` covering a set of positions."""

    @classmethod
    def from_indices(cls, indices: Iterable[int]) -> Ranges:
        """Group positions into runs of consecutive values, in ascending order."""
        runs: list[list[int]] = []
        for idx in sorted(set(indices)):
            if runs and runs[-1][1] == idx - 1:
                runs[-1][1] = idx
            else:
                runs.append([idx, idx])
        return cls(
            SingleOrRange(start) if start == last else SingleOrRange(start, last + 1)
            for start, last in runs
        )

    def __str__(self) -> str:
        return ", ".join(str(item) for item in self)


def escape(text: str) -> str:
    """Escape a value for use inside a quoted filter expression."""
    return (
        text.replace("\\", r"\\\\")
        .replace("(", r"\(")
        .replace(")", r"\)")
        .replace("'", r"\\'")
        .replace('"', r"\"")
    )


class Tag(Enum):
    """Song tags that filters and ``list`` can refer to."""

    ANY = "Any"
    ARTIST = "Artist"
    ALBUM_ARTIST = "AlbumArtist"
    ALBUM = "Album"
    TITLE = "Title"
    FILE = "File"
    GENRE = "Genre"

    def __str__(self) -> str:
        return self.value


class FilterKind(Enum):
    """How a filter value is matched."""

    EXACT = "exact"
    STARTS_WITH = "starts_with"
    CONTAINS = "contains"
    REGEX = "regex"


@dataclass(frozen=True)
class Filter:
    """A single tag condition in a search expression."""

    tag: Tag
    value: str
    kind: FilterKind = FilterKind.EXACT

    def with_kind(self, kind: FilterKind) -> Filter:
        return dataclasses.replace(self, kind=kind)

    def to_query_str(self) -> str:
        value = escape(self.value)
        if self.kind is FilterKind.EXACT:
            return f"{self.tag} == '{value}'"
        if self.kind is FilterKind.STARTS_WITH:
            return f"{self.tag} =~ '^{value}'"
        if self.kind is FilterKind.CONTAINS:
            return f"{self.tag} =~ '.*{value}.*'"
        return f"{self.tag} =~ '{value}'"


def filters_to_query(filters: Sequence[Filter]) -> str:
    """Join filters into one expression, each in parentheses, joined by ``AND``."""
    return " AND ".join(f"({item.to_query_str()})" for item in filters)