"""
Elfcode Rope Bridge
====================
Day 9: drag the head of a rope around a grid and track where the knots
behind it go.

A knot stays put while it touches its leader (including diagonally);
otherwise it steps one square toward the leader on each axis.  The head is
moved one square at a time so every intermediate position counts.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass

from loader import ParseError, iter_lines
from solutions import Solution


class Direction(enum.Enum):
    UP = (0, 1)
    DOWN = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)


DIRECTION_CHARS = {"U": Direction.UP, "D": Direction.DOWN,
                   "L": Direction.LEFT, "R": Direction.RIGHT}

Position = tuple[int, int]
START: Position = (0, 0)


@dataclass(frozen=True)
class Motion:
    direction: Direction
    steps: int


def parse_motions(text: str) -> list[Motion]:
    motions = []
    for lineno, line in iter_lines(text):
        parts = line.split()
        if len(parts) != 2 or parts[0] not in DIRECTION_CHARS:
            raise ParseError(lineno, f"Expected '<U|D|L|R> <steps>', got {line!r}")
        if not parts[1].isdigit():
            raise ParseError(lineno, f"Expected step count, got {parts[1]!r}")
        motions.append(Motion(DIRECTION_CHARS[parts[0]], int(parts[1])))
    return motions

def _sign(v: int) -> int:
    return (v > 0) - (v < 0)

def follow(leader: Position, knot: Position) -> Position:
    dx = leader[0] - knot[0]
    dy = leader[1] - knot[1]
    if max(abs(dx), abs(dy)) <= 1:
        return knot
    return (knot[0] + _sign(dx), knot[1] + _sign(dy))


class Rope:
    """A head plus *knots* trailing knots, all starting at the origin."""

    def __init__(self, knots: int = 1):
        if knots < 1:
            raise ValueError("A rope needs at least one trailing knot")
        self.head: Position = START
        self.knots: list[Position] = [START] * knots
        self.visits: list[set[Position]] = [{START} for _ in range(knots)]

    @property
    def tail(self) -> Position:
        return self.knots[-1]

    def step(self, direction: Direction):
        dx, dy = direction.value
        self.head = (self.head[0] + dx, self.head[1] + dy)
        leader = self.head
        for i, knot in enumerate(self.knots):
            knot = follow(leader, knot)
            self.knots[i] = knot
            self.visits[i].add(knot)
            leader = knot

    def move(self, motion: Motion):
        for _ in range(motion.steps):
            self.step(motion.direction)

    def tail_visits(self) -> int:
        return len(self.visits[-1])

    def render(self) -> str:
        """Draw head (H), knots (1..n, tail as T), start (s), tail trail (#)."""
        marks: dict[Position, str] = {p: "#" for p in self.visits[-1]}
        marks[START] = "s"
        for i in range(len(self.knots) - 1, -1, -1):
            marks[self.knots[i]] = "T" if i == len(self.knots) - 1 else str(i + 1)
        marks[self.head] = "H"
        xs = [p[0] for p in marks]
        ys = [p[1] for p in marks]
        rows = []
        for y in range(max(ys), min(ys) - 1, -1):
            rows.append("".join(marks.get((x, y), ".")
                                for x in range(min(xs), max(xs) + 1)))
        return "\n".join(rows)


def simulate(motions: list[Motion], knots: int) -> Rope:
    rope = Rope(knots)
    for motion in motions:
        rope.move(motion)
    return rope


class ElfRopeBridge(Solution):
    title = "Rope Bridge"
    labels = ("Total number of tail-visited positions (2 knots)",
              "Total number of tail-visited positions (10 knots)")

    def __init__(self, text: str):
        super().__init__(text)
        self.motions = parse_motions(text)

    def part1(self):
        return simulate(self.motions, 1).tail_visits()

    def part2(self):
        return simulate(self.motions, 9).tail_visits()

    def render(self):
        return simulate(self.motions, 9).render()


SOLUTION = ElfRopeBridge
