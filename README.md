# mpdproto

A small client library for the Music Player Daemon (MPD) protocol. It has no
dependencies outside the standard library.

`mpdproto.client.Client` connects over TCP when the address has the form
`host:port`, and otherwise treats the address as a Unix socket path. It checks
the server's `OK MPD x.y.z` greeting and records the version as
`client.version`. It sends commands and parses the replies into Python
objects. An `ACK` reply from the server is raised as an exception.

## Installation

```
pip install mpdproto
```

## Usage

```python
from mpdproto.client import Client
from mpdproto.query import Filter, FilterKind, Tag, ValueChange
from mpdproto.status import OnOffOneshot

with Client("localhost:6600", "example") as client:
    status = client.get_status()
    print(status.state, status.volume.value, status.elapsed)

    song = client.get_current_song()  # None when nothing is queued
    if song is not None:
        print(song.artist, "-", song.title)

    client.volume(ValueChange.parse("+5"))  # "volume +5"; a bare number uses "setvol"
    client.single(OnOffOneshot.ON)

    songs = client.search([Filter(Tag.ARTIST, "singer", FilterKind.CONTAINS)])
    for found in songs:
        print(found.file)

    art = client.find_album_art(songs[0].file) if songs else None
```

`Client` has methods for these areas:

- playback: `play`, `pause`, `stop`, `next`, `prev` and `seek_current`.
- options: `repeat`, `random`, `single` and `consume`.
- the queue: `add`, `clear`, `delete_id`, `move_id`, `playlist_info`, `find`,
  `search`, `find_one`, `find_add` and `list_tag`.
- the database: `lsinfo`, `list_files`, `albumart`, `read_picture` and
  `find_album_art`.
- stored playlists: `list_playlists`, `list_playlist`, `list_playlist_info`,
  `load_playlist`, `rename_playlist`, `delete_playlist`,
  `delete_from_playlist`, `move_in_playlist`, `add_to_playlist` and
  `save_queue_as_playlist`.
- mounts: `mount`, `unmount` and `list_mounts`.
- outputs: `outputs`, `toggle_output`, `enable_output` and `disable_output`.
- events: `idle` and `noidle`.

Reads time out after 10 seconds and writes after 1 second. Change these with
`set_read_timeout` and `set_write_timeout`, or pass `None` to wait without a
limit.

When the connection turns out to be closed while a reply is being read, the
client reconnects and sends the command again.

`find_album_art` tries `albumart` first and then `readpicture`. It returns
`None` when neither finds any art. It also returns `None` after logging an
error, rather than raising one. Binary replies are fetched in chunks until the
announced size has been read.

### Parsing replies without a connection

Every reply type in `mpdproto.status` and `mpdproto.responses` is a
`mpdproto.parsing.ResponseParser`. Feed it reply lines one at a time:

```python
from mpdproto.status import PlaybackState, Status

status = Status()
for line in ["state: play", "volume: 42", "elapsed: 12.5"]:
    status.feed(line)

assert status.state is PlaybackState.PLAY
assert status.volume.value == 42
```

`mpdproto.protocol.Command` sends a command and reads the reply from any
`SocketClient`. Such a client provides `write`, `reader` and `reconnect`. It
can read plain `OK` replies, parsed replies and binary replies.

### Building queries

`mpdproto.query` builds filter expressions and ranges:

```python
from mpdproto.query import Filter, Ranges, Tag, filters_to_query

filters_to_query([Filter(Tag.ALBUM, "the greatest"), Filter(Tag.ARTIST, "mrs singer")])
# "(Album == 'the greatest') AND (Artist == 'mrs singer')"

str(Ranges.from_indices({1, 2, 3, 10}))
# "[1:4], [10]"
```

### Errors

Every failure derives from `mpdproto.errors.MpdError`. An `ACK` reply is raised
as `MpdCommandError`. It carries a parsed `MpdFailureResponse`, and its
`ErrorCode` is available as `err.code`.

Some features need MPD 0.24 or newer: consume oneshot, save modes and ranged
`listplaylistinfo`. On older servers these raise `UnsupportedMpdVersionError`.
When the server reports a version above 0.23.5, the client logs a warning.

## What this package does not do

This is a protocol library only. It plays no audio itself and has no
user interface or command-line program. It does not read configuration
files. It does not send passwords, so servers that require authentication are
not supported.

## Running the tests

```
pip install -e ".[test]"
pytest
```