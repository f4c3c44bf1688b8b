"""
Elfcode Input Loader
=====================
Helpers shared by every puzzle for turning input text into lines and
blocks, plus the CPU program loader.

Program text is line oriented:

    noop
    addx 3
    addx -5

One instruction per line, newline terminated.  Blank lines are not allowed;
callers normalize raw file contents with normalize() first.

Usage:
  from loader import load_program
  program = load_program("noop\\naddx 3\\n")
"""

from __future__ import annotations
from typing import Iterator, Mapping

from isa import ISA, Instruction, Opcode, OpSpec, lookup


class ParseError(Exception):
    def __init__(self, line: int, msg: str):
        self.line = line
        super().__init__(f"Line {line}: {msg}")


# ---------------------------------------------------------------------------
#  Text helpers
# ---------------------------------------------------------------------------

def normalize(text: str) -> str:
    """Strip surrounding blank space and guarantee one trailing newline."""
    return text.strip() + "\n"

def read_input(path: str) -> str:
    with open(path, "r") as f:
        return f.read()

def iter_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield (lineno, line) for each line, 1-based."""
    yield from enumerate(text.splitlines(), 1)

def split_blocks(text: str) -> list[tuple[int, list[str]]]:
    """Split text on blank lines.

    Returns (first_lineno, lines) for every non-empty block.
    """
    blocks: list[tuple[int, list[str]]] = []
    current: list[str] = []
    start = 1
    for lineno, line in enumerate(text.split("\n"), 1):
        if line.strip():
            if not current:
                start = lineno
            current.append(line)
        elif current:
            blocks.append((start, current))
            current = []
    if current:
        blocks.append((start, current))
    return blocks

def parse_int(lineno: int, tok: str) -> int:
    try:
        return int(tok.strip(), 10)
    except ValueError:
        raise ParseError(lineno, f"Expected integer, got {tok!r}") from None


# ---------------------------------------------------------------------------
#  Program loader
# ---------------------------------------------------------------------------

def load_program(text: str,
                 isa: Mapping[Opcode, OpSpec] = ISA) -> list[Instruction]:
    """Parse program text into a list of Instructions.

    Raises ParseError on the first malformed line.  Nothing is returned
    unless the whole text loads.
    """
    lines = text.split("\n")
    if lines[-1] != "":
        raise ParseError(len(lines), f"Missing trailing newline after {lines[-1]!r}")

    program: list[Instruction] = []
    for lineno, line in enumerate(lines[:-1], 1):
        tokens = line.split()
        if not tokens:
            raise ParseError(lineno, "Empty line")
        mnem = tokens[0]
        opcode = lookup(mnem, isa)
        if opcode is None:
            raise ParseError(lineno, f"Unknown opcode {mnem!r} in {line!r}")
        spec = isa[opcode]
        if spec.takes_operand:
            if len(tokens) != 2:
                raise ParseError(lineno, f"{mnem} takes exactly one operand: {line!r}")
            program.append(Instruction(opcode, parse_int(lineno, tokens[1])))
        else:
            if len(tokens) != 1:
                raise ParseError(lineno, f"{mnem} takes no operand: {line!r}")
            program.append(Instruction(opcode))
    return program
