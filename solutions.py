"""
Elfcode Solution Registry
==========================
Every puzzle module defines one Solution subclass and exposes it as the
module-level name SOLUTION.  The registry maps YYYY-MM-DD keys to those
modules and imports them on demand.

Inputs live under the inputs directory with the same layout as the
puzzle calendar:

    inputs/2022/Dec01/input.txt      # personal puzzle input
    inputs/2022/Dec01/test.txt       # worked example from the puzzle text

The inputs directory is taken from (first match wins) the inputs_dir
argument, the ELFCODE_INPUTS environment variable, or ./inputs next to
this file.
"""

from __future__ import annotations
import importlib
import os
from typing import Optional, Sequence

from loader import normalize, read_input

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
INPUTS_ENV = "ELFCODE_INPUTS"

MONTH_NAMES = {12: "Dec"}

SOLUTION_MAP = {
    "2022-12-01": "calories",
    "2022-12-02": "rockpaperscissors",
    "2022-12-03": "rucksack",
    "2022-12-04": "cleanup",
    "2022-12-05": "supplystacks",
    "2022-12-06": "tuning",
    "2022-12-07": "filesystem",
    "2022-12-08": "treehouse",
    "2022-12-09": "rope",
    "2022-12-10": "crt",
    "2022-12-11": "monkeys",
}


class SolutionError(Exception):
    pass


class Solution:
    """Base class for one day's puzzle.

    Subclasses get the raw input text, parse it in __init__ if they like,
    and implement part1()/part2() returning the answers.
    """

    title = ""
    parts = 2
    labels: tuple[str, ...] = ("Part 1", "Part 2")
    # Strip surrounding blank space before parsing.  Layouts where leading
    # spaces are significant turn this off.
    normalize_input = True

    def __init__(self, text: str):
        self.text = text

    def part1(self):
        raise NotImplementedError

    def part2(self):
        raise NotImplementedError

    def label(self, part: int) -> str:
        return self.labels[part - 1] if part <= len(self.labels) else f"Part {part}"

    def solve(self, part: int = 1):
        if part < 1 or part > self.parts:
            raise SolutionError(f"This solution has no part {part}")
        return getattr(self, f"part{part}")()

    def render(self) -> Optional[str]:
        """Picture of the puzzle state, or None if the day has none."""
        return None


# ---------------------------------------------------------------------------
#  Lookup
# ---------------------------------------------------------------------------

def get_solution(key: str) -> type[Solution]:
    if key not in SOLUTION_MAP:
        raise SolutionError(f"No known solution for date {key!r}. "
                            "Use the \"list\" command to see all known solution keys.")
    module = importlib.import_module(SOLUTION_MAP[key])
    return module.SOLUTION

def inputs_root(inputs_dir: Optional[str] = None) -> str:
    if inputs_dir:
        return inputs_dir
    return os.environ.get(INPUTS_ENV) or os.path.join(PROJECT_ROOT, "inputs")

def input_path(key: str, example: bool = False,
               inputs_dir: Optional[str] = None) -> str:
    """Resolve the input file for a YYYY-MM-DD key."""
    try:
        year, month, day = (int(p) for p in key.split("-"))
    except ValueError:
        raise SolutionError(f"Malformed date key {key!r}, expected YYYY-MM-DD") from None
    if month not in MONTH_NAMES:
        raise SolutionError(f"No puzzles outside December: {key!r}")
    filename = "test.txt" if example else "input.txt"
    return os.path.join(inputs_root(inputs_dir), str(year),
                        f"{MONTH_NAMES[month]}{day:02d}", filename)


# ---------------------------------------------------------------------------
#  Run
# ---------------------------------------------------------------------------

def load_solution(key: str, path: Optional[str] = None,
                  inputs_dir: Optional[str] = None,
                  example: bool = False) -> Solution:
    """Read the input for one day and build its Solution."""
    cls = get_solution(key)
    if path is None:
        path = input_path(key, example=example, inputs_dir=inputs_dir)
    try:
        text = read_input(path)
    except OSError as e:
        raise SolutionError(f"Cannot read input for {key}: {e}") from e
    return cls(normalize(text) if cls.normalize_input else text)

def run(key: str, parts: Optional[Sequence[int]] = None,
        path: Optional[str] = None, inputs_dir: Optional[str] = None,
        example: bool = False) -> list[tuple[str, object]]:
    """Solve the requested parts of one day.  Returns [(label, answer)]."""
    solution = load_solution(key, path=path, inputs_dir=inputs_dir,
                             example=example)
    if parts is None:
        parts = range(1, solution.parts + 1)
    return [(solution.label(p), solution.solve(p)) for p in parts]
