# xengine_apps

A few small tools. You can run them from the command line or import them as a library.

- `xengine_apps.filesort` renames the files of a directory to consecutive numbers and keeps their extensions.
- `xengine_apps.sockettest` runs a TCP or UDP server or client and logs what passes through it.
- `xengine_apps.json_tool` and `xengine_apps.member_iterator` are helpers for JSON text and for member iteration.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## File renaming: `xengine-filesort`

```
xengine-filesort DIRECTORY [--start N] [--dry-run]
```

Listing:

- The command lists the regular files in `DIRECTORY`.
- It skips hidden files and reports how many it skipped. A file counts as hidden if its name starts with `.` or it has the Windows hidden attribute.

Sorting:

- Files are sorted first by the integer at the start of the name. The command reads this integer from the part of the name before the first `.`. If there is no integer there, it uses 0.
- Files with the same integer are sorted by their full path.

Naming:

- Each file gets a target name in the same directory: `<number>.<extension>`.
- Numbering starts at `--start`, which defaults to 1.
- The extension is the text after the last `.` of the name. A file with no `.` in its name gets a target ending in `.`.

Output:

- `--dry-run` prints the plan and does not rename anything.
- Without `--dry-run`, the command prints one line per file with its outcome.

| Outcome | Meaning |
| --- | --- |
| `same` | The source already matches the target, ignoring case. |
| `file exists` | The target already exists, so the file is left alone. |
| `success` | The file was renamed. |
| `failed` | The rename raised an error. |

The command never overwrites an existing file. It also chooses the order of the renames so that an old name is cleared before a new one reuses it:

- If the numbers go down, it works from first to last.
- Otherwise it works from last to first.

Library use:

```python
from xengine_apps.filesort import list_files, plan_renames, apply_renames

listing = list_files("photos")          # Listing(files=[...], hidden_count=...)
entries = plan_renames(listing.files, 1)
for entry in apply_renames(entries):
    print(entry.source, "->", entry.target, entry.status)
```

Other functions in the module:

- `numeric_prefix`, `sort_key` and `sort_files` expose the ordering rules.
- `RenameEntry` and `RenameStatus` describe a planned rename and its outcome.

## Socket tester: `xengine-sockettest`

```
xengine-sockettest server  [--protocol tcp|udp] [--port 5000]
xengine-sockettest connect [--protocol tcp|udp] [--address 127.0.0.1] [--port 5000]
```

`server` listens on the given port on all interfaces. `connect` connects to a server.

Each non-empty line read from standard input is sent:

- A TCP server sends it to the client that logged in last.
- A UDP server sends it to `--address` and `--port`.
- A client sends it to its server.

Events are printed as they happen, for example `Event=user:127.0.0.1:50000 logged in`. The events are:

- logins
- received data, with its size in bytes
- departures
- client connections
- closes

Library use:

```python
from xengine_apps.sockettest import EventLog, SocketSession, Protocol

with SocketSession(EventLog()) as server:
    server.start_server(Protocol.TCP, 0)   # port 0 picks a free port
    with SocketSession() as client:
        client.connect(Protocol.TCP, "127.0.0.1", server.port)
        client.send("hello")
    print(server.log.text())
```

Details of the library classes:

- `SocketSession.send` returns the number of bytes sent.
- `SocketSession.send` raises `SessionError` when there is nothing to send, no session is running, or the socket fails.
- `format_event` renders a single log line.
- `EventKind` and `Role` name the event kinds and session roles.

## JSON helpers

`xengine_apps.json_tool` has these functions:

- `code_point_to_utf8` returns UTF-8 bytes. It returns an empty result above U+10FFFF.
- `uint_to_string`
- `fix_numeric_locale`, which changes `,` to `.`.
- `fix_numeric_locale_input`, which changes `.` to the locale's decimal point.
- `get_decimal_point`
- `fix_zeros_in_the_end`, which trims trailing zeros from a number's text.

```python
from xengine_apps.json_tool import code_point_to_utf8, fix_zeros_in_the_end

code_point_to_utf8(0x20AC)          # b"\xe2\x82\xac"
fix_zeros_in_the_end("1.500", 0)    # "1.5"
```

`xengine_apps.member_iterator.MemberIterator` is a position among the members of a Python mapping or sequence. It supports `key`, `name`, `index`, `value`, `advance`, `retreat`, `distance_to` and `copy`. `iterate_members` yields an iterator at each position in order.

## What this package does not do

- Both tools run on the command line only. There is no graphical window.
- The JSON helpers are only the pieces listed above. The package has no JSON parser or writer of its own.