"""
Elfcode Tuning Trouble
=======================
Day 6: find the end of the first window of distinct characters in the
datastream.
"""

from __future__ import annotations
from collections import Counter, deque

from solutions import Solution

PACKET_MARKER = 4
MESSAGE_MARKER = 14


def find_marker(stream: str, size: int) -> int:
    """Number of characters read when the last *size* are all distinct.

    Returns -1 when the stream holds no such window.
    """
    window: deque[str] = deque()
    seen: Counter[str] = Counter()
    for i, ch in enumerate(stream.strip(), 1):
        window.append(ch)
        seen[ch] += 1
        if len(window) > size:
            old = window.popleft()
            seen[old] -= 1
            if not seen[old]:
                del seen[old]
        if len(seen) == size:
            return i
    return -1


class ElfTuningTrouble(Solution):
    title = "Tuning Trouble"
    labels = ("Index of start packet tail", "Index of message packet tail")

    def part1(self):
        return find_marker(self.text, PACKET_MARKER)

    def part2(self):
        return find_marker(self.text, MESSAGE_MARKER)


SOLUTION = ElfTuningTrouble
