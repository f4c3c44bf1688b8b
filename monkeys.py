"""
Elfcode Monkey in the Middle
=============================
Item-passing simulation (day 11).

Every monkey runs the same tiny program on each item it holds, in order:

  examine  take the head of the queue in hand, apply the worry operation
  relieve  (part 1 only) worry //= 3
  throw    test divisibility and hand the item to one of two monkeys

Worry values are kept small when relief is off by reducing them modulo the
least common multiple of every monkey's divisor; divisibility by any of
those divisors is unaffected.
"""

from __future__ import annotations
import math
import operator
import re
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Optional

from loader import ParseError, parse_int, split_blocks
from solutions import Solution

RELIEF_DIVISOR = 3

OPERATORS: dict[str, Callable[[int, int], int]] = {
    "+": operator.add,
    "*": operator.mul,
}

_RE_NAME      = re.compile(r"^Monkey (\d+):$")
_RE_ITEMS     = re.compile(r"^Starting items:(.*)$")
_RE_OPERATION = re.compile(r"^Operation: new = old ([+*]) (old|-?\d+)$")
_RE_TEST      = re.compile(r"^Test: divisible by (\d+)$")
_RE_TRUE      = re.compile(r"^If true: throw to monkey (\d+)$")
_RE_FALSE     = re.compile(r"^If false: throw to monkey (\d+)$")


@dataclass
class Item:
    name: str
    worry: int


@dataclass(frozen=True)
class Operation:
    """new = old <op> rhs, where rhs is an integer or None for 'old'."""
    op: str
    rhs: Optional[int]

    def __call__(self, old: int) -> int:
        return OPERATORS[self.op](old, old if self.rhs is None else self.rhs)

    def __str__(self) -> str:
        rhs = "old" if self.rhs is None else self.rhs
        return f"new = old {self.op} {rhs}"


@dataclass
class Monkey:
    name: str
    operation: Operation
    divisor: int
    if_true: int
    if_false: int
    items: deque = field(default_factory=deque)
    inspections: int = 0
    in_hand: Optional[Item] = None
    line: int = 0

    def has_items(self) -> bool:
        return bool(self.items) or self.in_hand is not None

    def examine(self, modulus: Optional[int] = None):
        """Take the next item in hand and apply the worry operation."""
        if not self.items:
            return
        self.in_hand = self.items.popleft()
        worry = self.operation(self.in_hand.worry)
        if modulus:
            worry %= modulus
        self.in_hand.worry = worry
        self.inspections += 1

    def relieve(self):
        if self.in_hand is not None:
            self.in_hand.worry //= RELIEF_DIVISOR

    def throw(self) -> tuple[Item, int]:
        """Release the item in hand.  Returns (item, destination index)."""
        if self.in_hand is None:
            raise RuntimeError(f"No item at hand for {self.name}")
        item = self.in_hand
        self.in_hand = None
        dest = self.if_true if item.worry % self.divisor == 0 else self.if_false
        return item, dest

    def describe(self) -> str:
        worries = ", ".join(str(i.worry) for i in self.items)
        return (f"{self.name} ({self.inspections} inspections):\n"
                f"  Starting items: {worries}\n"
                f"  Operation: {self.operation}\n"
                f"  Test: divisible by {self.divisor}\n"
                f"    If true: throw to monkey {self.if_true}\n"
                f"    If false: throw to monkey {self.if_false}")


class Troop:
    """All the monkeys of one game, played round by round."""

    def __init__(self, monkeys: list[Monkey]):
        self.monkeys = monkeys
        self.rounds = 0
        self.modulus = math.lcm(*(m.divisor for m in monkeys)) if monkeys else 1

    def play_round(self, relief: bool = True):
        # Relief division does not commute with the modulo reduction.
        modulus = None if relief else self.modulus
        for monkey in self.monkeys:
            while monkey.has_items():
                monkey.examine(modulus)
                if relief:
                    monkey.relieve()
                item, dest = monkey.throw()
                self.monkeys[dest].items.append(item)
        self.rounds += 1

    def play(self, rounds: int, relief: bool = True):
        for _ in range(rounds):
            self.play_round(relief)

    def inspections(self) -> list[int]:
        return [m.inspections for m in self.monkeys]

    def monkey_business(self) -> int:
        top = sorted(self.inspections(), reverse=True)[:2]
        return math.prod(top) if len(top) == 2 else 0

    def describe(self) -> str:
        return "\n".join(m.describe() for m in self.monkeys)


# ---------------------------------------------------------------------------
#  Parser
# ---------------------------------------------------------------------------

def _match(pattern: re.Pattern, lineno: int, line: str) -> re.Match:
    m = pattern.match(line.strip())
    if not m:
        raise ParseError(lineno, f"Unexpected line {line.strip()!r}")
    return m

def parse_monkey(start: int, lines: list[str]) -> Monkey:
    if len(lines) != 6:
        raise ParseError(start, f"Monkey definition needs 6 lines, got {len(lines)}")
    name = f"Monkey {_match(_RE_NAME, start, lines[0]).group(1)}"

    raw_items = _match(_RE_ITEMS, start + 1, lines[1]).group(1)
    items: deque[Item] = deque()
    for tok in raw_items.split(","):
        if tok.strip():
            worry = parse_int(start + 1, tok)
            items.append(Item(f"Item {worry}", worry))

    op_m = _match(_RE_OPERATION, start + 2, lines[2])
    rhs = None if op_m.group(2) == "old" else int(op_m.group(2))
    divisor = int(_match(_RE_TEST, start + 3, lines[3]).group(1))
    if divisor == 0:
        raise ParseError(start + 3, "Divisor must be non-zero")
    if_true = int(_match(_RE_TRUE, start + 4, lines[4]).group(1))
    if_false = int(_match(_RE_FALSE, start + 5, lines[5]).group(1))

    return Monkey(name, Operation(op_m.group(1), rhs), divisor,
                  if_true, if_false, items, line=start)

def parse_troop(text: str) -> Troop:
    monkeys = []
    for start, lines in split_blocks(text):
        monkeys.append(parse_monkey(start, lines))
    for m in monkeys:
        for dest in (m.if_true, m.if_false):
            if dest >= len(monkeys):
                raise ParseError(m.line, f"{m.name} throws to unknown monkey {dest}")
    return Troop(monkeys)


# ---------------------------------------------------------------------------
#  Solution
# ---------------------------------------------------------------------------

class ElfMonkeyInTheMiddle(Solution):
    title = "Monkey in the Middle"
    labels = ("Monkey business after 20 rounds",
              "Monkey business after 10000 rounds without relief")

    def part1(self):
        troop = parse_troop(self.text)
        troop.play(20, relief=True)
        return troop.monkey_business()

    def part2(self):
        troop = parse_troop(self.text)
        troop.play(10_000, relief=False)
        return troop.monkey_business()

    def render(self):
        """The troop after the 20 rounds of part 1."""
        troop = parse_troop(self.text)
        troop.play(20, relief=True)
        return troop.describe()


SOLUTION = ElfMonkeyInTheMiddle
