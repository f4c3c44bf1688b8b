"""
Elfcode Treetop Tree House
===========================
Day 8: a grid of single-digit tree heights.
"""

from __future__ import annotations

from loader import ParseError, iter_lines
from solutions import Solution

# (drow, dcol) for up, down, left, right
DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class TreeGrid:
    def __init__(self, rows: list[list[int]]):
        self.rows = rows
        self.height = len(rows)
        self.width = len(rows[0]) if rows else 0

    @classmethod
    def parse(cls, text: str) -> "TreeGrid":
        rows = []
        for lineno, line in iter_lines(text):
            line = line.strip()
            if not line.isdigit():
                raise ParseError(lineno, f"Tree heights must be digits: {line!r}")
            if rows and len(line) != len(rows[0]):
                raise ParseError(lineno, f"Row width {len(line)} != {len(rows[0])}")
            rows.append([int(ch) for ch in line])
        return cls(rows)

    def _ray(self, row: int, col: int, dr: int, dc: int):
        r, c = row + dr, col + dc
        while 0 <= r < self.height and 0 <= c < self.width:
            yield self.rows[r][c]
            r += dr
            c += dc

    def is_visible(self, row: int, col: int) -> bool:
        """Visible from outside the grid along at least one direction."""
        h = self.rows[row][col]
        return any(all(t < h for t in self._ray(row, col, dr, dc))
                   for dr, dc in DIRECTIONS)

    def viewing_distance(self, row: int, col: int, dr: int, dc: int) -> int:
        h = self.rows[row][col]
        dist = 0
        for t in self._ray(row, col, dr, dc):
            dist += 1
            if t >= h:
                break
        return dist

    def scenic_score(self, row: int, col: int) -> int:
        score = 1
        for dr, dc in DIRECTIONS:
            score *= self.viewing_distance(row, col, dr, dc)
        return score

    def visible_count(self) -> int:
        return sum(1 for r in range(self.height) for c in range(self.width)
                   if self.is_visible(r, c))

    def best_scenic_score(self) -> int:
        return max((self.scenic_score(r, c) for r in range(self.height)
                    for c in range(self.width)), default=0)

    def render(self) -> str:
        lines = [f"Grid Dimensions (W x H): {self.width} x {self.height}"]
        for row in self.rows:
            lines.append(" ".join(str(h) for h in row))
        return "\n".join(lines)


class ElfTreetopTreeHouse(Solution):
    title = "Treetop Tree House"
    labels = ("Total number of visible trees", "Largest possible view score")

    def __init__(self, text: str):
        super().__init__(text)
        self.grid = TreeGrid.parse(text)

    def part1(self):
        return self.grid.visible_count()

    def part2(self):
        return self.grid.best_scenic_score()

    def render(self):
        return self.grid.render()


SOLUTION = ElfTreetopTreeHouse
