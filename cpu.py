"""
Elfcode CPU
============
A cycle-step emulator for the communication device's processor: a
single-issue, non-pipelined CPU with one accumulator register (X).

Each call to tick() advances the clock by exactly one cycle.  An
instruction with latency 0 commits on the cycle it is fetched; one with
latency N holds the CPU busy for N further cycles and only then commits.
While busy nothing new is fetched, so anything sampling the registers
during those cycles sees the value from before the instruction.

Typical driver (sample, then tick, until the program is done):

    cpu = CPU()
    cpu.load(program_text)
    cpu.run(observer=lambda c: print(c.cycle + 1, c.x))
"""

from __future__ import annotations
from collections import deque
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional

from isa import ISA, Instruction, Opcode, OpSpec
from loader import load_program

# ---------------------------------------------------------------------------
#  Constants
# ---------------------------------------------------------------------------

REG_X = "X"
RESET_REGISTERS = MappingProxyType({REG_X: 1})

# ---------------------------------------------------------------------------
#  Errors
# ---------------------------------------------------------------------------

class CPUError(Exception):
    """Base for emulator-generated failures."""
    pass

class InvariantViolation(CPUError):
    def __init__(self, instruction: Instruction, message: str = ""):
        self.instruction = instruction
        super().__init__(message or f"Unsupported opcode in {instruction}")


# ---------------------------------------------------------------------------
#  CPU
# ---------------------------------------------------------------------------

class CPU:
    """Communication device CPU, cycle-step level."""

    def __init__(self, registers: Optional[Mapping[str, int]] = None,
                 isa: Mapping[Opcode, OpSpec] = ISA):
        self.isa = isa
        self._regs: dict[str, int] = dict(RESET_REGISTERS if registers is None
                                          else registers)

        # Instruction memory, not yet fetched
        self._queue: deque[Instruction] = deque()

        # Busy pipeline slot
        self._in_flight: Optional[Instruction] = None
        self._remaining: int = 0

        self._cycle: int = 0

        # Callbacks
        self.on_commit: Optional[Callable[[Instruction, "CPU"], None]] = None

    # -- Loading --

    def load(self, text: str) -> int:
        """Parse program text and append it to instruction memory.

        Returns the number of instructions loaded.
        """
        program = load_program(text, self.isa)
        self._queue.extend(program)
        return len(program)

    def load_instructions(self, program: Iterable[Instruction]):
        self._queue.extend(program)

    # -- Queries --

    @property
    def cycle(self) -> int:
        """Cycles completed since startup (0-based index of the next cycle)."""
        return self._cycle

    @property
    def x(self) -> int:
        return self._regs[REG_X]

    def register(self, name: str) -> int:
        return self._regs[name]

    @property
    def registers(self) -> Mapping[str, int]:
        return MappingProxyType(self._regs)

    @property
    def busy(self) -> bool:
        return self._in_flight is not None

    @property
    def in_flight(self) -> Optional[Instruction]:
        return self._in_flight

    @property
    def remaining(self) -> int:
        """Busy cycles left before the in-flight instruction commits."""
        return self._remaining

    @property
    def pending(self) -> tuple[Instruction, ...]:
        return tuple(self._queue)

    def has_additional_work(self) -> bool:
        return bool(self._queue) or self.busy

    # =====================================================================
    #  TICK: one clock cycle
    # =====================================================================

    def _spec(self, ins: Instruction) -> OpSpec:
        spec = self.isa.get(ins.opcode)
        if spec is None:
            raise InvariantViolation(ins)
        return spec

    def _commit(self, ins: Instruction, spec: OpSpec):
        self._regs = dict(spec.effect(self._regs, ins.operand))
        if self.on_commit:
            self.on_commit(ins, self)

    def tick(self):
        """Advance the clock by one cycle."""
        if self._in_flight is None:
            if self._queue:
                ins = self._queue.popleft()
                spec = self._spec(ins)
                if spec.latency == 0:
                    self._commit(ins, spec)
                else:
                    self._in_flight = ins
                    self._remaining = spec.latency
        else:
            self._remaining -= 1
            if self._remaining == 0:
                ins = self._in_flight
                self._in_flight = None
                self._commit(ins, self._spec(ins))

        self._cycle += 1

    # -- Run loop --

    def run(self, observer: Optional[Callable[["CPU"], None]] = None,
            max_ticks: Optional[int] = None) -> int:
        """Tick until no work remains.  Returns ticks executed.

        *observer* is called with the CPU before every tick, i.e. it sees
        the state during the upcoming cycle.  At least one tick always runs.
        """
        ticks = 0
        while True:
            if max_ticks is not None and ticks >= max_ticks:
                break
            if observer:
                observer(self)
            self.tick()
            ticks += 1
            if not self.has_additional_work():
                break
        return ticks

    # -- Debug / introspection --

    def dump_regs(self) -> str:
        regs = "  ".join(f"{name}={val}" for name, val in self._regs.items())
        state = f"BUSY({self._in_flight}, {self._remaining} left)" if self.busy else "IDLE"
        return (f"  cycle={self._cycle:<6d} {regs}\n"
                f"  state={state}  queued={len(self._queue)}")
