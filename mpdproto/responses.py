"""Objects built from the replies to the server's query commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Union

from .errors import GenericError, _parse_uint
from .parsing import ResponseParser
from .status import _parse_seconds


def _u32(text: str) -> int:
    return _parse_uint(text, 32)


def _no_element(what: str) -> GenericError:
    return GenericError(f"No element in accumulator while parsing {what}")


@dataclass
class Song(ResponseParser):
    """One song as described by ``currentsong``, ``playlistinfo`` and the like."""

    id: int = 0
    file: str = ""
    title: str | None = None
    artist: str | None = None
    album: str | None = None
    duration: timedelta | None = None
    others: dict[str, str] = field(default_factory=dict)

    def handle(self, key: str, value: str) -> bool:
        if key == "file":
            self.file = value
        elif key == "artist":
            self.artist = value
        elif key == "album":
            self.album = value
        elif key == "title":
            self.title = value
        elif key == "id":
            self.id = _u32(value)
        elif key == "duration":
            self.duration = _parse_seconds(value)
        elif key in ("time", "format"):
            pass
        else:
            self.others[key] = value
        return True


class SongList(list, ResponseParser):
    """A list of songs; each ``file`` line starts a new one."""

    def handle(self, key: str, value: str) -> bool:
        if key == "file":
            self.append(Song())
        if not self:
            raise _no_element("PlayListInfo")
        return self[-1].handle(key, value)


class IdleEvent(Enum):
    """Subsystems the ``idle`` command reports as changed."""

    PLAYER = "player"
    MIXER = "mixer"
    PLAYLIST = "playlist"
    OPTIONS = "options"
    DATABASE = "database"
    UPDATE = "update"
    STORED_PLAYLIST = "stored_playlist"
    OUTPUT = "output"
    PARTITION = "partition"
    STICKER = "sticker"
    SUBSCRIPTION = "subscription"
    MESSAGE = "message"
    NEIGHBOR = "neighbor"
    MOUNT = "mount"


class IdleEvents(list, ResponseParser):
    """The events named in the reply to ``idle``."""

    def handle(self, key: str, value: str) -> bool:
        try:
            self.append(IdleEvent(value))
        except ValueError:
            return False
        return True


class MpdList(list, ResponseParser):
    """Plain list of values, as returned by ``list``."""

    def handle(self, key: str, value: str) -> bool:
        self.append(value)
        return True


class ListingType(Enum):
    FILE = "file"
    DIR = "directory"


@dataclass
class Listed(ResponseParser):
    """One entry in the reply to ``listfiles``."""

    kind: ListingType = ListingType.FILE
    name: str = ""
    size: int = 0
    last_modified: str = ""

    def handle(self, key: str, value: str) -> bool:
        if key == "file":
            self.kind = ListingType.FILE
            self.name = value
        elif key == "directory":
            self.kind = ListingType.DIR
            self.name = value
        elif key == "size":
            self.size = _parse_uint(value, 64)
        elif key == "last-modified":
            self.last_modified = value
        else:
            return False
        return True


class ListFiles(list, ResponseParser):
    """The reply to ``listfiles``."""

    def handle(self, key: str, value: str) -> bool:
        if key in ("file", "directory"):
            self.append(Listed())
        if not self:
            raise _no_element("ListFiles")
        return self[-1].handle(key, value)


@dataclass
class Mount(ResponseParser):
    mount: str = ""
    storage: str = ""

    def handle(self, key: str, value: str) -> bool:
        if key == "mount":
            self.mount = value
        elif key == "storage":
            self.storage = value
        else:
            return False
        return True


class Mounts(list, ResponseParser):
    """The reply to ``listmounts``."""

    def handle(self, key: str, value: str) -> bool:
        if key == "mount":
            self.append(Mount())
        if not self:
            raise _no_element("Mounts")
        return self[-1].handle(key, value)


class FileList(list, ResponseParser):
    """File names in a stored playlist, from ``listplaylist``."""

    def handle(self, key: str, value: str) -> bool:
        if key != "file":
            return False
        self.append(value)
        return True


@dataclass
class Playlist(ResponseParser):
    name: str = ""
    last_modified: str = ""

    def handle(self, key: str, value: str) -> bool:
        if key == "playlist":
            self.name = value
        elif key == "last-modified":
            self.last_modified = value
        else:
            return False
        return True


class Playlists(list, ResponseParser):
    """The reply to ``listplaylists``."""

    def handle(self, key: str, value: str) -> bool:
        if key == "playlist":
            self.append(Playlist())
        if not self:
            raise _no_element("Playlists")
        return self[-1].handle(key, value)


@dataclass
class Dir(ResponseParser):
    """A directory entry; ``path`` is its last segment, ``full_path`` the whole path."""

    path: str = ""
    full_path: str = ""
    last_modified: str = ""

    def handle(self, key: str, value: str) -> bool:
        if key == "directory":
            self.path = value.split("/")[-1]
            self.full_path = value
        elif key == "last-modified":
            self.last_modified = value
        elif key == "playlist":
            pass
        else:
            return False
        return True


FileOrDir = Union[Dir, Song]


class LsInfo(list, ResponseParser):
    """The reply to ``lsinfo``: directories and songs in order."""

    def handle(self, key: str, value: str) -> bool:
        if key == "file":
            self.append(Song())
        if key == "directory":
            self.append(Dir())
        if not self:
            raise _no_element("LsInfo")
        return self[-1].handle(key, value)


@dataclass
class Output(ResponseParser):
    id: int = 0
    name: str = ""
    enabled: bool = False

    def handle(self, key: str, value: str) -> bool:
        if key == "outputid":
            self.id = _u32(value)
        elif key == "outputname":
            self.name = value
        elif key == "outputenabled":
            if value == "0":
                self.enabled = False
            elif value == "1":
                self.enabled = True
            else:
                return False
        else:
            return False
        return True


class Outputs(list, ResponseParser):
    """The reply to ``outputs``."""

    def handle(self, key: str, value: str) -> bool:
        if key == "outputid":
            self.append(Output())
        if not self:
            raise _no_element("Outputs")
        return self[-1].handle(key, value)


@dataclass
class Update(ResponseParser):
    job_id: int = 0

    def handle(self, key: str, value: str) -> bool:
        if value != "updating_db":
            return False
        self.job_id = _u32(value)
        return True