"""
Elfcode Rock Paper Scissors
============================
Day 2: score a strategy guide.  Each line holds the rival's play (A/B/C)
and a second column that part 1 reads as your play (X/Y/Z) and part 2
reads as the outcome you need (X=lose, Y=draw, Z=win).
"""

from __future__ import annotations
import enum

from loader import ParseError, iter_lines
from solutions import Solution


class Play(enum.Enum):
    ROCK = 1
    PAPER = 2
    SCISSORS = 3


class Outcome(enum.Enum):
    LOSS = 0
    DRAW = 3
    WIN = 6


# Play -> the play it beats
BEATS = {
    Play.ROCK: Play.SCISSORS,
    Play.PAPER: Play.ROCK,
    Play.SCISSORS: Play.PAPER,
}
LOSES_TO = {beaten: winner for winner, beaten in BEATS.items()}

RIVAL_PLAYS = {"A": Play.ROCK, "B": Play.PAPER, "C": Play.SCISSORS}
YOUR_PLAYS = {"X": Play.ROCK, "Y": Play.PAPER, "Z": Play.SCISSORS}
DESIRED_OUTCOMES = {"X": Outcome.LOSS, "Y": Outcome.DRAW, "Z": Outcome.WIN}


def outcome(yours: Play, rival: Play) -> Outcome:
    if yours == rival:
        return Outcome.DRAW
    if BEATS[yours] == rival:
        return Outcome.WIN
    return Outcome.LOSS

def play_for(rival: Play, wanted: Outcome) -> Play:
    """The play that gives *wanted* against *rival*."""
    if wanted is Outcome.WIN:
        return LOSES_TO[rival]
    if wanted is Outcome.LOSS:
        return BEATS[rival]
    return rival

def score(yours: Play, rival: Play) -> int:
    return yours.value + outcome(yours, rival).value


def parse_rounds(text: str) -> list[tuple[int, str, str]]:
    rounds = []
    for lineno, line in iter_lines(text):
        cols = line.split()
        if len(cols) != 2:
            raise ParseError(lineno, f"Expected two columns, got {line!r}")
        if cols[0] not in RIVAL_PLAYS:
            raise ParseError(lineno, f"Encountered unknown rival play type {cols[0]!r}")
        if cols[1] not in YOUR_PLAYS:
            raise ParseError(lineno, f"Encountered unknown play type {cols[1]!r}")
        rounds.append((lineno, cols[0], cols[1]))
    return rounds


class ElfRockPaperScissors(Solution):
    title = "Rock Paper Scissors"
    labels = ("Your score", "Your score following the outcomes")

    def part1(self):
        return sum(score(YOUR_PLAYS[mine], RIVAL_PLAYS[theirs])
                   for _, theirs, mine in parse_rounds(self.text))

    def part2(self):
        total = 0
        for _, theirs, wanted in parse_rounds(self.text):
            rival = RIVAL_PLAYS[theirs]
            total += score(play_for(rival, DESIRED_OUTCOMES[wanted]), rival)
        return total


SOLUTION = ElfRockPaperScissors
