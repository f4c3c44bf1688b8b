"""
Elfcode Rucksack Reorganization
================================
Day 3: item types a-z have priorities 1-26, A-Z have 27-52.
"""

from __future__ import annotations
import string

from loader import ParseError, iter_lines
from solutions import Solution

GROUP_SIZE = 3

PRIORITIES = {ch: i for i, ch in
              enumerate(string.ascii_lowercase + string.ascii_uppercase, 1)}


def priority(item_type: str) -> int:
    if len(item_type) != 1:
        raise ValueError(f"Expected one character, got {len(item_type)}")
    if item_type not in PRIORITIES:
        raise ValueError(f"Invalid character {item_type!r}")
    return PRIORITIES[item_type]

def check_items(lineno: int, rucksack: str):
    bad = sorted(set(rucksack).difference(PRIORITIES))
    if bad:
        raise ParseError(lineno, f"Invalid item types {''.join(bad)!r} in {rucksack!r}")

def misplaced_item(lineno: int, rucksack: str) -> str:
    """The one item type present in both compartments."""
    check_items(lineno, rucksack)
    if len(rucksack) % 2:
        raise ParseError(lineno, f"Rucksack has an odd number of items: {rucksack!r}")
    half = len(rucksack) // 2
    common = set(rucksack[:half]) & set(rucksack[half:])
    if len(common) != 1:
        raise ParseError(lineno, f"Expected one repeated item type, found {sorted(common)}")
    return common.pop()

def group_badge(lineno: int, group: list[str]) -> str:
    for i, rucksack in enumerate(group):
        check_items(lineno + i, rucksack)
    common = set(group[0]).intersection(*group[1:])
    if len(common) != 1:
        raise ParseError(lineno, f"No common group badge found for group in lines "
                                 f"{lineno}-{lineno + len(group) - 1}")
    return common.pop()


class ElfRucksackReorganization(Solution):
    title = "Rucksack Reorganization"
    labels = ("Total priority value of all misorganized items",
              "Total priority value for all group badges")

    def part1(self):
        return sum(priority(misplaced_item(n, line))
                   for n, line in iter_lines(self.text))

    def part2(self):
        lines = list(iter_lines(self.text))
        if len(lines) % GROUP_SIZE:
            raise ParseError(len(lines), f"Line count is not a multiple of {GROUP_SIZE}")
        total = 0
        for i in range(0, len(lines), GROUP_SIZE):
            chunk = lines[i:i + GROUP_SIZE]
            total += priority(group_badge(chunk[0][0], [ln for _, ln in chunk]))
        return total


SOLUTION = ElfRucksackReorganization
