"""A blocking connection to an MPD server and the commands it understands."""

from __future__ import annotations

import logging
import socket
from collections.abc import Sequence
from typing import BinaryIO

from .errors import ErrorCode, GenericError, MpdCommandError, MpdError, UnsupportedMpdVersionError
from .protocol import Command, SocketClient
from .query import Filter, QueueMoveTarget, SaveMode, SingleOrRange, Tag, ValueChange, filters_to_query
from .responses import (
    FileList,
    IdleEvents,
    ListFiles,
    LsInfo,
    Mounts,
    MpdList,
    Outputs,
    Playlists,
    Song,
    SongList,
)
from .status import OnOffOneshot, Status, Volume
from .version import Version

logger = logging.getLogger(__name__)

MAX_SUPPORTED_VERSION = Version(0, 23, 5)
_MPD_0_24 = Version(0, 24, 0)

DEFAULT_WRITE_TIMEOUT = 1.0
DEFAULT_READ_TIMEOUT = 10.0


def _open_socket(addr: str) -> socket.socket:
    """Connect to ``host:port`` over TCP, or to a Unix socket path otherwise."""
    try:
        if ":" in addr:
            host, _, port = addr.rpartition(":")
            host = host.strip("[]")
            return socket.create_connection((host, int(port)))
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(addr)
        except OSError:
            sock.close()
            raise
        return sock
    except (OSError, ValueError) as err:
        raise GenericError(str(err)) from err


class Client(SocketClient):
    """A connection to one MPD server."""

    def __init__(self, addr: str, name: str = "", reconnect: bool = False) -> None:
        self.addr = addr
        self.name = name
        self.auto_reconnect = reconnect
        self._read_timeout: float | None = DEFAULT_READ_TIMEOUT
        self._write_timeout: float | None = DEFAULT_WRITE_TIMEOUT
        self._sock, self._rx, self.version = self._connect()
        if self.version > MAX_SUPPORTED_VERSION:
            logger.warning(
                "MPD version '%s' is higher than supported. Maximum supported protocol version is '%s'. "
                "Some features may work incorrectly.",
                self.version,
                MAX_SUPPORTED_VERSION,
            )

    def __repr__(self) -> str:
        return f"Client {{ name: {self.name!r}, reconnect: {self.auto_reconnect}, addr: {self.addr} }}"

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _connect(self) -> tuple[socket.socket, BinaryIO, Version]:
        sock = _open_socket(self.addr)
        try:
            sock.settimeout(self._read_timeout)
            rx = sock.makefile("rb")
            try:
                greeting = rx.readline().decode("utf-8")
            except (OSError, UnicodeDecodeError) as err:
                raise GenericError(str(err)) from err
            if not greeting.startswith("OK"):
                raise GenericError(f"Handshake validation failed. '{greeting}'")
            prefix = "OK MPD "
            try:
                if not greeting.startswith(prefix):
                    raise ValueError(greeting)
                version = Version.parse(greeting[len(prefix):])
            except (MpdError, ValueError):
                raise GenericError(
                    f"Handshake validation failed. Cannot parse version from '{greeting}'"
                ) from None
        except BaseException:
            sock.close()
            raise
        logger.debug("MPD client %r initialized, version %s, handshake %r", self.name, version, greeting.strip())
        return sock, rx, version

    def close(self) -> None:
        """Close the connection."""
        self._rx.close()
        self._sock.close()

    # Connection

    def reconnect(self) -> Client:
        sock, rx, version = self._connect()
        self.close()
        self._sock, self._rx, self.version = sock, rx, version
        return self

    def write(self, data: bytes) -> None:
        self._sock.settimeout(self._write_timeout)
        try:
            self._sock.sendall(data)
        finally:
            self._sock.settimeout(self._read_timeout)

    def reader(self) -> BinaryIO:
        return self._rx

    @property
    def read_timeout(self) -> float | None:
        return self._read_timeout

    @property
    def write_timeout(self) -> float | None:
        return self._write_timeout

    def set_read_timeout(self, timeout: float | None) -> None:
        """Seconds to wait for a reply, or None to wait forever."""
        self._read_timeout = timeout
        self._sock.settimeout(timeout)

    def set_write_timeout(self, timeout: float | None) -> None:
        """Seconds to wait while sending, or None to wait forever."""
        self._write_timeout = timeout

    def send(self, command: str) -> Command:
        return Command(command, self)

    # Queries

    def idle(self) -> IdleEvents:
        return self.send("idle").read_response(IdleEvents)

    def noidle(self) -> None:
        self.send("noidle").read_ok()

    def get_volume(self) -> Volume:
        return self.send("getvol").read_response(Volume)

    def set_volume(self, volume: Volume) -> None:
        self.send(f"setvol {volume.value}").read_ok()

    def volume(self, change: ValueChange) -> None:
        """Set the volume, or change it relative to the current one."""
        if change.amount is not None and change.to_mpd_str()[:1] in ("+", "-"):
            self.send(f"volume {change.to_mpd_str()}").read_ok()
        else:
            self.send(f"setvol {change.amount}").read_ok()

    def get_current_song(self) -> Song | None:
        return self.send("currentsong").read_opt_response(Song)

    def get_status(self) -> Status:
        return self.send("status").read_response(Status)

    # Playback control

    def pause_toggle(self) -> None:
        self.send("pause").read_ok()

    def pause(self) -> None:
        self.send("pause 1").read_ok()

    def unpause(self) -> None:
        self.send("pause 0").read_ok()

    def next(self) -> None:
        self.send("next").read_ok()

    def prev(self) -> None:
        self.send("previous").read_ok()

    def play_pos(self, pos: int) -> None:
        self.send(f"play {pos}").read_ok()

    def play(self) -> None:
        self.send("play").read_ok()

    def play_id(self, song_id: int) -> None:
        self.send(f"playid {song_id}").read_ok()

    def stop(self) -> None:
        self.send("stop").read_ok()

    def seek_current(self, value: ValueChange) -> None:
        self.send(f"seekcur {value.to_mpd_str()}").read_ok()

    def repeat(self, enabled: bool) -> None:
        self.send(f"repeat {int(enabled)}").read_ok()

    def random(self, enabled: bool) -> None:
        self.send(f"random {int(enabled)}").read_ok()

    def single(self, single: OnOffOneshot) -> None:
        self.send(f"single {single.to_mpd_value()}").read_ok()

    def consume(self, consume: OnOffOneshot) -> None:
        if self.version < _MPD_0_24 and consume is OnOffOneshot.ONESHOT:
            raise UnsupportedMpdVersionError("consume oneshot can be used since MPD 0.24.0")
        self.send(f"consume {consume.to_mpd_value()}").read_ok()

    # Mounts

    def mount(self, name: str, path: str) -> None:
        self.send(f'mount "{name}" "{path}"').read_ok()

    def unmount(self, name: str) -> None:
        self.send(f'unmount "{name}"').read_ok()

    def list_mounts(self) -> Mounts:
        return self.send("listmounts").read_response(Mounts)

    # Current queue

    def add(self, path: str) -> None:
        self.send(f'add "{path}"').read_ok()

    def clear(self) -> None:
        self.send("clear").read_ok()

    def delete_id(self, song_id: int) -> None:
        self.send(f'deleteid "{song_id}"').read_ok()

    def move_id(self, song_id: int, to: QueueMoveTarget) -> None:
        self.send(f'moveid "{song_id}" "{to.as_mpd_str()}"').read_ok()

    def playlist_info(self) -> SongList | None:
        return self.send("playlistinfo").read_opt_response(SongList)

    def find(self, filters: Sequence[Filter]) -> SongList:
        """Search the database for songs matching all filters."""
        return self.send(f'find "({filters_to_query(filters)})"').read_response(SongList)

    def search(self, filters: Sequence[Filter]) -> SongList:
        """Like :meth:`find`, but case insensitive."""
        query = filters_to_query(filters)
        logger.debug("Searching for songs: %s", query)
        return self.send(f'search "({query})"').read_response(SongList)

    def find_one(self, filters: Sequence[Filter]) -> Song | None:
        songs = self.send(f'find "({filters_to_query(filters)})"').read_response(SongList)
        return songs.pop() if songs else None

    def find_add(self, filters: Sequence[Filter]) -> None:
        self.send(f'findadd "({filters_to_query(filters)})"').read_ok()

    def list_tag(self, tag: Tag, filters: Sequence[Filter] | None = None) -> MpdList:
        if filters is not None:
            command = f'list {tag} "({filters_to_query(filters)})"'
        else:
            command = f"list {tag}"
        return self.send(command).read_response(MpdList)

    # Database

    def lsinfo(self, path: str | None = None) -> LsInfo:
        command = "lsinfo" if path is None else f'lsinfo "{path}"'
        return self.send(command).read_opt_response(LsInfo) or LsInfo()

    def list_files(self, path: str | None = None) -> ListFiles:
        command = "listfiles" if path is None else f'listfiles "{path}"'
        return self.send(command).read_opt_response(ListFiles) or ListFiles()

    # Stored playlists

    def list_playlists(self) -> Playlists:
        return self.send("listplaylists").read_response(Playlists)

    def list_playlist(self, name: str) -> FileList:
        return self.send(f'listplaylist "{name}"').read_response(FileList)

    def list_playlist_info(self, playlist: str, songs: SingleOrRange | None = None) -> SongList:
        if songs is not None:
            if self.version < _MPD_0_24:
                raise UnsupportedMpdVersionError(
                    "listplaylistinfo with range can only be used since MPD 0.24.0"
                )
            command = f'listplaylistinfo "{playlist}" {songs.as_mpd_range()}'
        else:
            command = f'listplaylistinfo "{playlist}"'
        return self.send(command).read_response(SongList)

    def load_playlist(self, name: str) -> None:
        self.send(f'load "{name}"').read_ok()

    def rename_playlist(self, name: str, new_name: str) -> None:
        self.send(f'rename "{name}" "{new_name}"').read_ok()

    def delete_playlist(self, name: str) -> None:
        self.send(f'rm "{name}"').read_ok()

    def delete_from_playlist(self, playlist_name: str, songs: SingleOrRange) -> None:
        self.send(f'playlistdelete "{playlist_name}" {songs.as_mpd_range()}').read_ok()

    def move_in_playlist(self, playlist_name: str, songs: SingleOrRange, target_position: int) -> None:
        self.send(f'playlistmove "{playlist_name}" {songs.as_mpd_range()} {target_position}').read_ok()

    def add_to_playlist(self, playlist_name: str, uri: str, target_position: int | None = None) -> None:
        if target_position is None:
            self.send(f'playlistadd "{playlist_name}" "{uri}"').read_ok()
        else:
            self.send(f'playlistadd "{playlist_name}" "{uri}" {target_position}').read_ok()

    def save_queue_as_playlist(self, name: str, mode: SaveMode | None = None) -> None:
        if mode is not None:
            if self.version < _MPD_0_24:
                raise UnsupportedMpdVersionError("save mode can be used since MPD 0.24.0")
            self.send(f'save "{name}" "{mode.value}"').read_ok()
        else:
            self.send(f'save "{name}"').read_ok()

    def read_picture(self, path: str) -> bytes | None:
        return self.send(f'readpicture "{path}"').read_bin()

    def albumart(self, path: str) -> bytes | None:
        return self.send(f'albumart "{path}"').read_bin()

    def find_album_art(self, path: str) -> bytes | None:
        """Try ``albumart``, then ``readpicture``; None when neither finds art."""
        try:
            art = self.albumart(path)
        except MpdCommandError as err:
            if err.code is not ErrorCode.NO_EXIST:
                logger.error("Failed to read picture: %s", err)
                return None
            art = None
        except MpdError as err:
            logger.error("Failed to read picture: %s", err)
            return None
        if art is not None:
            return art

        try:
            picture = self.read_picture(path)
        except MpdCommandError as err:
            if err.code is ErrorCode.NO_EXIST:
                logger.debug("No album art found, falling back to placeholder image")
            else:
                logger.error("Failed to read picture: %s", err)
            return None
        except MpdError as err:
            logger.error("Failed to read picture: %s", err)
            return None
        if picture is None:
            logger.debug("No album art found, falling back to placeholder image")
        return picture

    # Outputs

    def outputs(self) -> Outputs:
        return self.send("outputs").read_response(Outputs)

    def toggle_output(self, output_id: int) -> None:
        self.send(f"toggleoutput {output_id}").read_ok()

    def enable_output(self, output_id: int) -> None:
        self.send(f"enableoutput {output_id}").read_ok()

    def disable_output(self, output_id: int) -> None:
        self.send(f"disableoutput {output_id}").read_ok()