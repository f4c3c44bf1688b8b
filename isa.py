"""
Elfcode CPU Instruction Set
============================
The closed set of opcodes understood by the communication device CPU.

Each opcode is described by an OpSpec: its mnemonic, whether it carries an
integer operand, how many busy cycles it needs before its effect commits,
and the effect itself as a pure function of (registers, operand).

The table is built once at import and exposed read-only.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional

Registers = Mapping[str, int]
Effect = Callable[[Registers, Optional[int]], dict]

# ---------------------------------------------------------------------------
#  Opcodes
# ---------------------------------------------------------------------------

class Opcode(enum.Enum):
    NOOP = 0
    ADDX = 1


@dataclass(frozen=True)
class Instruction:
    opcode: Opcode
    operand: Optional[int] = None

    def __str__(self) -> str:
        name = self.opcode.name.lower()
        if self.operand is None:
            return name
        return f"{name} {self.operand}"


@dataclass(frozen=True)
class OpSpec:
    mnemonic: str
    takes_operand: bool
    latency: int
    effect: Effect


# ---------------------------------------------------------------------------
#  Effects
# ---------------------------------------------------------------------------

def _noop(regs: Registers, operand: Optional[int]) -> dict:
    return dict(regs)

def _addx(regs: Registers, operand: Optional[int]) -> dict:
    out = dict(regs)
    out["X"] = regs["X"] + operand
    return out


# ---------------------------------------------------------------------------
#  Instruction table
# ---------------------------------------------------------------------------

ISA: Mapping[Opcode, OpSpec] = MappingProxyType({
    Opcode.NOOP: OpSpec("noop", takes_operand=False, latency=0, effect=_noop),
    Opcode.ADDX: OpSpec("addx", takes_operand=True,  latency=1, effect=_addx),
})


def lookup(mnemonic: str,
           isa: Mapping[Opcode, OpSpec] = ISA) -> Optional[Opcode]:
    """Map a text token to its opcode, or None if *isa* has no such mnemonic."""
    for opcode, spec in isa.items():
        if spec.mnemonic == mnemonic:
            return opcode
    return None
