"""
Elfcode Cathode-Ray Tube
=========================
Observers that watch the CPU clock (day 10).

Both observers are called with the CPU *before* each tick, so they see
the register value that is live during the upcoming cycle.  Neither one
writes back into the CPU.

  SignalSampler  sums x * cycle over a set of interesting cycles
  CRTRenderer    draws one pixel per cycle into a Screen; the sprite is
                 three pixels wide and centred on X
"""

from __future__ import annotations
from typing import Callable, Iterable, Optional, Union

from cpu import CPU
from solutions import Solution

SCREEN_WIDTH = 40
SCREEN_HEIGHT = 6
SIGNAL_CYCLES = (20, 60, 100, 140, 180, 220)

PIXEL_LIT = "#"
PIXEL_DARK = "."


# ── Aggregate sampler ─────────────────────────────────────────────────


class SignalSampler:
    """Accumulate weight(x, cycle) over the cycles matching a predicate.

    Cycles are numbered from 1 here, matching the puzzle text ("during the
    20th cycle").
    """

    def __init__(self, cycles: Union[Iterable[int], Callable[[int], bool]] = SIGNAL_CYCLES,
                 weight: Optional[Callable[[int, int], int]] = None):
        if callable(cycles):
            self.predicate = cycles
        else:
            wanted = frozenset(cycles)
            self.predicate = wanted.__contains__
        self.weight = weight or (lambda x, cycle: x * cycle)
        self.total = 0
        self.samples: list[tuple[int, int]] = []   # (cycle, x) that matched

    def __call__(self, cpu: CPU):
        cycle = cpu.cycle + 1
        if self.predicate(cycle):
            x = cpu.x
            self.samples.append((cycle, x))
            self.total += self.weight(x, cycle)


# ── Screen ────────────────────────────────────────────────────────────


class Screen:
    """Fixed-size character grid, blank until drawn."""

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self.width = width
        self.height = height
        self.pixels: list[list[str]] = [
            [' '] * width for _ in range(height)
        ]

    def set_pixel(self, row: int, column: int, char: str):
        """Set one pixel.  Only the first character of *char* is used."""
        if not 0 <= row < self.height:
            raise IndexError(f"Screen does not have row {row}")
        if not 0 <= column < self.width:
            raise IndexError(f"Screen does not have column {column}")
        self.pixels[row][column] = char[0]

    def lit(self) -> list[tuple[int, int]]:
        return [(r, c) for r, row in enumerate(self.pixels)
                for c, ch in enumerate(row) if ch == PIXEL_LIT]

    def render(self) -> str:
        return "\n".join("".join(row) for row in self.pixels)

    def __str__(self) -> str:
        return self.render()


class CRTRenderer:
    """Draw the beam position for each cycle into *screen*."""

    def __init__(self, screen: Screen):
        self.screen = screen
        self.row = -1

    def __call__(self, cpu: CPU):
        column = cpu.cycle % self.screen.width
        if column == 0:
            self.row += 1
        x = cpu.x
        pixel = PIXEL_LIT if x - 1 <= column <= x + 1 else PIXEL_DARK
        self.screen.set_pixel(self.row, column, pixel)


# ── Solution ──────────────────────────────────────────────────────────


def signal_strength(text: str) -> int:
    cpu = CPU()
    cpu.load(text)
    sampler = SignalSampler()
    cpu.run(observer=sampler)
    return sampler.total

def draw(text: str, screen: Optional[Screen] = None) -> Screen:
    screen = screen or Screen()
    cpu = CPU()
    cpu.load(text)
    cpu.run(observer=CRTRenderer(screen))
    return screen


class ElfCathodeRayTube(Solution):
    title = "Cathode-Ray Tube"
    labels = ("Total signal strength sum", "CRT image")

    def part1(self):
        return signal_strength(self.text)

    def part2(self):
        return draw(self.text).render()


SOLUTION = ElfCathodeRayTube
