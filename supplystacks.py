"""
Elfcode Supply Stacks
======================
Day 5: a drawing of crate stacks, a blank line, then crane moves.

        [D]
    [N] [C]
    [Z] [M] [P]
     1   2   3

    move 1 from 2 to 1

Stacks are 1-indexed, as in the drawing.  Leading spaces in the drawing
are significant, so this solution parses the raw input text.
"""

from __future__ import annotations
import enum
import re
from dataclasses import dataclass

from loader import ParseError
from solutions import Solution

_RE_MOVE = re.compile(r"^move (\d+) from (\d+) to (\d+)$")

COLUMN_PITCH = 4   # "[A] "


class CraneModel(enum.Enum):
    CRATE_MOVER_9000 = 9000   # one crate at a time
    CRATE_MOVER_9001 = 9001   # several crates at once, order kept


@dataclass(frozen=True)
class Move:
    quantity: int
    source: int
    destination: int


class CrateStacks:
    """Stacks of single-letter crates, bottom first."""

    def __init__(self, stacks: dict[int, list[str]]):
        self.stacks = stacks

    @classmethod
    def from_drawing(cls, lines: list[str], first_lineno: int = 1) -> "CrateStacks":
        if not lines:
            raise ParseError(first_lineno, "Missing crate drawing")
        offset = first_lineno - 1
        labels = lines[-1].split()
        try:
            numbers = [int(n) for n in labels]
        except ValueError:
            raise ParseError(offset + len(lines), f"Bad stack label line {lines[-1]!r}") from None
        stacks: dict[int, list[str]] = {n: [] for n in numbers}
        # Walk the drawing bottom-up so each list ends with the top crate.
        for lineno in range(len(lines) - 1, 0, -1):
            line = lines[lineno - 1]
            for col, n in enumerate(numbers):
                pos = col * COLUMN_PITCH + 1
                if pos < len(line) and line[pos] != " ":
                    if line[pos - 1] != "[":
                        raise ParseError(offset + lineno, f"Malformed crate in {line!r}")
                    stacks[n].append(line[pos])
        return cls(stacks)

    def apply(self, move: Move, crane: CraneModel):
        """Carry out one move.  Unknown stacks are ignored and at most the
        crates available are moved."""
        if move.source not in self.stacks or move.destination not in self.stacks:
            return
        src = self.stacks[move.source]
        dest = self.stacks[move.destination]
        qty = min(move.quantity, len(src))
        if qty == 0:
            return
        lifted = src[-qty:]
        del src[-qty:]
        if crane is CraneModel.CRATE_MOVER_9000:
            lifted.reverse()
        elif crane is not CraneModel.CRATE_MOVER_9001:
            raise ValueError(f"Unsupported crane version: {crane}")
        dest.extend(lifted)

    def top_crates(self) -> str:
        return "".join(s[-1] if s else " " for s in self.stacks.values())

    def render(self) -> str:
        height = max((len(s) for s in self.stacks.values()), default=0)
        rows = []
        for level in range(height - 1, -1, -1):
            rows.append("".join(f"[{s[level]}] " if len(s) > level else "    "
                                for s in self.stacks.values()).rstrip())
        rows.append("".join(f" {n:<2} " for n in self.stacks).rstrip())
        return "\n".join(rows)


def parse_moves(lines: list[str], first_lineno: int) -> list[Move]:
    moves = []
    for i, line in enumerate(lines):
        if not line.strip():
            continue
        m = _RE_MOVE.match(line.strip())
        if not m:
            raise ParseError(first_lineno + i, f"Unexpected move {line!r}")
        moves.append(Move(*(int(g) for g in m.groups())))
    return moves

def parse(text: str) -> tuple[CrateStacks, list[Move]]:
    lines = text.rstrip("\n").split("\n")
    # Leading blank lines still count toward line numbers.
    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    try:
        split = next(i for i in range(start, len(lines)) if not lines[i].strip())
    except StopIteration:
        raise ParseError(len(lines), "Missing blank line between drawing and moves") from None
    stacks = CrateStacks.from_drawing(lines[start:split], start + 1)
    return stacks, parse_moves(lines[split + 1:], split + 2)

def rearrange(text: str, crane: CraneModel) -> CrateStacks:
    stacks, moves = parse(text)
    for move in moves:
        stacks.apply(move, crane)
    return stacks


class ElfSupplyStacks(Solution):
    title = "Supply Stacks"
    labels = ("Top crates (CrateMover 9000)", "Top crates (CrateMover 9001)")
    normalize_input = False

    def part1(self):
        return rearrange(self.text, CraneModel.CRATE_MOVER_9000).top_crates()

    def part2(self):
        return rearrange(self.text, CraneModel.CRATE_MOVER_9001).top_crates()

    def render(self):
        """Starting arrangement, before any moves."""
        stacks, _ = parse(self.text)
        return stacks.render()


SOLUTION = ElfSupplyStacks
