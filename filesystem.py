"""
Elfcode No Space Left On Device
================================
Day 7: rebuild a directory tree from a terminal transcript of `cd` and
`ls` commands, then look for directories worth deleting.

Entries are a tagged variant: every Entry carries a kind (FILE or DIR)
and code that walks the tree dispatches on that tag.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass, field
from typing import Iterator

from loader import ParseError, iter_lines
from solutions import Solution

DISK_SIZE = 70_000_000
UPDATE_SIZE = 30_000_000
SMALL_DIR_LIMIT = 100_000


class EntryKind(enum.Enum):
    FILE = "file"
    DIR = "dir"


@dataclass
class Entry:
    kind: EntryKind
    name: str
    size: int = 0                                  # files only
    children: dict[str, "Entry"] = field(default_factory=dict)

    @classmethod
    def file(cls, name: str, size: int) -> "Entry":
        return cls(EntryKind.FILE, name, size)

    @classmethod
    def folder(cls, name: str) -> "Entry":
        return cls(EntryKind.DIR, name)


def disk_usage(entry: Entry) -> int:
    """Total size of *entry*, including everything below it."""
    total = 0
    stack = [entry]
    while stack:
        top = stack.pop()
        if top.kind is EntryKind.FILE:
            total += top.size
        elif top.kind is EntryKind.DIR:
            stack.extend(top.children.values())
        else:
            raise ValueError(f"Unknown entry kind {top.kind!r}")
    return total

def walk_dirs(root: Entry, path: str = "/") -> Iterator[tuple[str, Entry]]:
    """Yield (path, entry) for every directory, pre-order."""
    yield path, root
    for child in root.children.values():
        if child.kind is EntryKind.DIR:
            yield from walk_dirs(child, f"{path.rstrip('/')}/{child.name}")

def dir_sizes(root: Entry) -> dict[str, int]:
    """Map every directory path to its size."""
    return {path: disk_usage(entry) for path, entry in walk_dirs(root)}


class FileSystem:
    """Directory tree plus a working-directory cursor."""

    def __init__(self):
        self.root = Entry.folder("/")
        self.cwd = self.root
        self._parents: list[Entry] = []

    def change_directory(self, dest: str) -> Entry:
        if dest == "/":
            self.cwd = self.root
            self._parents = []
        elif dest == "..":
            if self._parents:
                self.cwd = self._parents.pop()
        else:
            target = self.cwd.children.get(dest)
            if target is None or target.kind is not EntryKind.DIR:
                raise KeyError(dest)
            self._parents.append(self.cwd)
            self.cwd = target
        return self.cwd

    def add(self, entry: Entry) -> bool:
        """Add to the working directory.  False if the name is taken."""
        if entry.name in self.cwd.children:
            return False
        self.cwd.children[entry.name] = entry
        return True

    def load(self, text: str):
        """Replay a terminal transcript."""
        listing = False
        for lineno, line in iter_lines(text):
            if line.startswith("$ "):
                parts = line[2:].split(maxsplit=1)
                cmd = parts[0] if parts else ""
                if cmd == "cd":
                    if len(parts) < 2:
                        raise ParseError(lineno, "Expected destination for cd")
                    try:
                        self.change_directory(parts[1])
                    except KeyError:
                        raise ParseError(lineno, f"No such directory {parts[1]!r}") from None
                    listing = False
                elif cmd == "ls":
                    listing = True
                else:
                    raise ParseError(lineno, f"Unsupported command {cmd!r} from line {line!r}")
            elif listing:
                size, _, name = line.partition(" ")
                if not name:
                    raise ParseError(lineno, f"Malformed listing {line!r}")
                if size == "dir":
                    entry = Entry.folder(name)
                elif size.isdigit():
                    entry = Entry.file(name, int(size))
                else:
                    raise ParseError(lineno, f"Malformed listing {line!r}")
                if not self.add(entry):
                    raise ParseError(lineno, f"Duplicate entry {name!r}")
            else:
                raise ParseError(lineno, f"Output outside of a listing: {line!r}")
        self.change_directory("/")

    def render(self) -> str:
        """Tree view in the style of the puzzle text."""
        lines = []

        def visit(entry: Entry, depth: int):
            pad = "  " * depth
            if entry.kind is EntryKind.FILE:
                lines.append(f"{pad}- {entry.name} (file, size={entry.size})")
            else:
                lines.append(f"{pad}- {entry.name} (dir)")
                for child in entry.children.values():
                    visit(child, depth + 1)

        visit(self.root, 0)
        return "\n".join(lines)


def smallest_dir_to_free(root: Entry, disk: int = DISK_SIZE,
                         needed: int = UPDATE_SIZE) -> int:
    sizes = dir_sizes(root)
    free = disk - sizes["/"]
    missing = needed - free
    if missing <= 0:
        return 0
    return min(s for s in sizes.values() if s >= missing)


class ElfNoSpaceOnDevice(Solution):
    title = "No Space Left On Device"
    labels = ("Total size of all folders with size <= 100,000",
              "Size of smallest folder that frees up enough space if deleted")

    def __init__(self, text: str):
        super().__init__(text)
        self.filesystem = FileSystem()
        self.filesystem.load(text)

    def part1(self):
        return sum(s for s in dir_sizes(self.filesystem.root).values()
                   if s <= SMALL_DIR_LIMIT)

    def part2(self):
        return smallest_dir_to_free(self.filesystem.root)

    def render(self):
        return self.filesystem.render()


SOLUTION = ElfNoSpaceOnDevice
