"""Rename the files of a directory to consecutive numbers, keeping their extensions."""

from __future__ import annotations

import argparse
import enum
import os
import re
import stat
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class RenameStatus(enum.Enum):
    """Outcome of renaming one file."""

    SAME = "same"
    EXISTS = "file exists"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class RenameEntry:
    """One planned rename: the list position, source and target paths, and its outcome."""

    index: int
    source: str
    target: str
    status: RenameStatus | None = None


@dataclass(frozen=True)
class Listing:
    """The visible files of a directory in rename order, and how many hidden ones were left out."""

    files: list[str]
    hidden_count: int


def _split_path(path: str | os.PathLike) -> tuple[str, str]:
    """Split a path into its directory part (with trailing separator) and file name."""
    text = os.fspath(path)
    cut = max(text.rfind("/"), text.rfind("\\"))
    return text[: cut + 1], text[cut + 1 :]


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def numeric_prefix(path: str | os.PathLike) -> int:
    """Return the integer that leads the file name up to its first '.', or 0."""
    _, name = _split_path(path)
    stem, _, _ = name.partition(".")
    return _atoi(stem)


def sort_key(path: str | os.PathLike) -> tuple[int, str]:
    """Order by the numeric prefix of the file name, then by the whole path."""
    return numeric_prefix(path), os.fspath(path)


def sort_files(paths: Iterable[str | os.PathLike]) -> list[str]:
    """Return the paths in rename order."""
    return sorted((os.fspath(p) for p in paths), key=sort_key)


def _is_hidden(entry: os.DirEntry) -> bool:
    if entry.name.startswith("."):
        return True
    attributes = getattr(entry.stat(), "st_file_attributes", 0)
    return bool(attributes & getattr(stat, "FILE_ATTRIBUTE_HIDDEN", 0))


def list_files(directory: str | os.PathLike) -> Listing:
    """List the visible regular files of a directory, sorted for renaming."""
    visible: list[str] = []
    hidden = 0
    with os.scandir(directory) as entries:
        for entry in entries:
            if not entry.is_file():
                continue
            if _is_hidden(entry):
                hidden += 1
            else:
                visible.append(os.path.join(os.fspath(directory), entry.name))
    return Listing(files=sort_files(visible), hidden_count=hidden)


def plan_renames(paths: Iterable[str | os.PathLike], start: int = 1) -> list[RenameEntry]:
    """Pair each path with a target named by a running number from start.

    The target keeps the directory and the text after the last '.' of the name.
    """
    plan = []
    for index, (number, path) in enumerate(zip(_count(start), paths)):
        source = os.fspath(path)
        folder, name = _split_path(source)
        extension = name.rpartition(".")[2] if "." in name else ""
        plan.append(RenameEntry(index, source, f"{folder}{number}.{extension}"))
    return plan


def _count(start: int):
    number = start
    while True:
        yield number
        number += 1


def _same_name(source: str, target: str) -> bool:
    return source.casefold() == target[: len(source)].casefold()


def _rename_one(entry: RenameEntry) -> RenameEntry:
    if _same_name(entry.source, entry.target):
        status = RenameStatus.SAME
    elif os.path.exists(entry.target):
        status = RenameStatus.EXISTS
    else:
        try:
            os.rename(entry.source, entry.target)
            status = RenameStatus.SUCCESS
        except OSError:
            status = RenameStatus.FAILED
    return replace(entry, status=status)


def apply_renames(entries: Sequence[RenameEntry]) -> list[RenameEntry]:
    """Carry out the planned renames and return the entries with their outcomes.

    When the numbers go down the list is worked front to back, otherwise back
    to front, so that a file is moved out of the way before its name is reused.
    """
    if not entries:
        return []
    last = entries[-1]
    forward = numeric_prefix(last.source) > numeric_prefix(last.target)
    order = range(len(entries)) if forward else range(len(entries) - 1, -1, -1)
    results: list[RenameEntry | None] = [None] * len(entries)
    for position in order:
        results[position] = _rename_one(entries[position])
    return [entry for entry in results if entry is not None]


def main(argv: Sequence[str] | None = None) -> int:
    """List a directory's files, number them from a start value and rename them."""
    parser = argparse.ArgumentParser(
        prog="filesort",
        description="Rename files to consecutive numbers in numeric-name order.",
    )
    parser.add_argument("directory", help="directory whose files are renamed")
    parser.add_argument("--start", type=int, default=1, help="first number (default: 1)")
    parser.add_argument(
        "--dry-run", action="store_true", help="show the plan without renaming"
    )
    args = parser.parse_args(argv)

    try:
        listing = list_files(args.directory)
    except OSError as exc:
        print(f"error: cannot list {args.directory}: {exc}", file=sys.stderr)
        return 1

    plan = plan_renames(listing.files, args.start)
    print(f"Found {len(plan)} files, {listing.hidden_count} hidden files ignored")
    entries = plan if args.dry_run else apply_renames(plan)
    for entry in entries:
        outcome = entry.status.value if entry.status else "planned"
        print(f"{entry.index}\t{entry.source}\t{entry.target}\t{outcome}")
    if not args.dry_run:
        print(f"Renamed files, total: {len(entries)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())