"""Directory traversal and path classification."""

import os
from pathlib import Path
from typing import Iterator

from .types import DirectoryEntry, EntryType


def classify_dir_entry(entry: os.DirEntry) -> DirectoryEntry:
    """Convert an os.scandir entry into a DirectoryEntry without following symlinks."""
    path = Path(entry.path)
    try:
        if entry.is_symlink():
            return DirectoryEntry(path, EntryType.SYMLINK)
        if entry.is_dir(follow_symlinks=False):
            return DirectoryEntry(path, EntryType.DIRECTORY)
        if entry.is_file(follow_symlinks=False):
            return DirectoryEntry(path, EntryType.FILE)
    except OSError as e:
        return DirectoryEntry(path, EntryType.UNREADABLE, error=str(e))
    return DirectoryEntry(path, EntryType.OTHER)


def walk_entries(root: str | Path) -> Iterator[DirectoryEntry]:
    """
    Depth-first walk of everything below root.

    Every node is yielded exactly once, directories included. Symlinks are
    reported but never followed. A directory that cannot be listed is
    yielded a second time as an UNREADABLE entry carrying the error, and
    the walk carries on with its siblings.

    Args:
        root: Directory to walk. It is not itself yielded.

    Yields:
        DirectoryEntry for each node, in name order within a directory.
    """
    stack = [Path(root)]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as e:
            yield DirectoryEntry(current, EntryType.UNREADABLE, error=str(e))
            continue

        # Sort for stable traversal order
        entries.sort(key=lambda e: e.name)

        subdirectories = []
        for dir_entry in entries:
            entry = classify_dir_entry(dir_entry)
            yield entry
            if entry.entry_type is EntryType.DIRECTORY:
                subdirectories.append(entry.path)

        # Push reversed so "a" is walked before "z"
        stack.extend(reversed(subdirectories))


def is_processable(entry: DirectoryEntry) -> bool:
    """Return True only for entries that are regular files."""
    return entry.entry_type is EntryType.FILE
