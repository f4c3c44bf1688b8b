"""
Elfcode Calorie Counting
=========================
Day 1: each elf's inventory is a block of calorie counts separated from the
next elf by a blank line.
"""

from __future__ import annotations

from loader import parse_int, split_blocks
from solutions import Solution


def elf_totals(text: str) -> list[int]:
    """Total calories carried by each elf, in input order."""
    totals = []
    for start, lines in split_blocks(text):
        totals.append(sum(parse_int(start + i, ln) for i, ln in enumerate(lines)))
    return totals

def top_totals(text: str, n: int = 3) -> list[int]:
    return sorted(elf_totals(text), reverse=True)[:n]


class ElfCalories(Solution):
    title = "Calorie Counting"
    labels = ("Largest", "Sum of the three largest")

    def part1(self):
        return max(elf_totals(self.text), default=0)

    def part2(self):
        return sum(top_totals(self.text, 3))


SOLUTION = ElfCalories
