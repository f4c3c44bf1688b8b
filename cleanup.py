"""
Elfcode Camp Cleanup
=====================
Day 4: each line is a pair of inclusive section ranges, e.g. "2-4,6-8".
"""

from __future__ import annotations
import re

from loader import ParseError, iter_lines
from solutions import Solution

_RE_PAIR = re.compile(r"^(\d+)-(\d+),(\d+)-(\d+)$")

Range = tuple[int, int]


def parse_pairs(text: str) -> list[tuple[Range, Range]]:
    pairs = []
    for lineno, line in iter_lines(text):
        m = _RE_PAIR.match(line.strip())
        if not m:
            raise ParseError(lineno, f"Failed to parse range pair {line!r}")
        a0, a1, b0, b1 = (int(g) for g in m.groups())
        pairs.append(((a0, a1), (b0, b1)))
    return pairs

def contains(a: Range, b: Range) -> bool:
    """True if either range fully includes the other."""
    return (a[0] <= b[0] and b[1] <= a[1]) or (b[0] <= a[0] and a[1] <= b[1])

def overlaps(a: Range, b: Range) -> bool:
    return a[0] <= b[1] and b[0] <= a[1]


class ElfCampCleanup(Solution):
    title = "Camp Cleanup"
    labels = ("Total pairs with encapsulations", "Total pairs with overlaps")

    def part1(self):
        return sum(1 for a, b in parse_pairs(self.text) if contains(a, b))

    def part2(self):
        return sum(1 for a, b in parse_pairs(self.text) if overlaps(a, b))


SOLUTION = ElfCampCleanup
