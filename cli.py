#!/usr/bin/env python3
"""
Elfcode Command Line
=====================
Dispatcher for the puzzle solutions plus an interactive monitor for the
day-10 CPU.

Commands:
  run DATE      Solve one day, e.g. "run 2022-12-01" runs the solution for
                inputs/2022/Dec01.
  list          List the known solution keys.
  crt PROGRAM   Run a CPU program, print its signal strength and screen.
  monitor       Interactive CPU monitor (load / step / regs / screen).
  help          Print this help.

Usage:
  python cli.py run 2022-12-10 [--part N] [--input FILE] [--example] [--show]
  python cli.py crt program.txt [--trace] [--display] [--scale N]
  python cli.py monitor [program.txt]
"""

from __future__ import annotations
import argparse
import cmd
import shlex
import sys
from typing import Optional

from cpu import CPU, CPUError
from crt import CRTRenderer, Screen, SignalSampler
from loader import ParseError, normalize, read_input
from solutions import (SOLUTION_MAP, SolutionError, get_solution,
                       load_solution)


def _print_trace(ins, cpu: CPU):
    print(f"  commit {ins}")
    print(cpu.dump_regs())


# ---------------------------------------------------------------------------
#  Interactive monitor
# ---------------------------------------------------------------------------

class CPUMonitor(cmd.Cmd):
    """Interactive monitor for the communication device CPU."""

    intro = (
        "\n"
        "╔══════════════════════════════════════════════════════════╗\n"
        "║          Elfcode CPU Monitor                             ║\n"
        "║   Type 'help' for commands.  'quit' to exit.             ║\n"
        "╚══════════════════════════════════════════════════════════╝\n"
    )
    prompt = "CRT> "

    def __init__(self, cpu: Optional[CPU] = None, stdout=None):
        super().__init__(stdout=stdout)
        self.cpu = cpu or CPU()
        self.sampler = SignalSampler()
        self.screen = Screen()
        self.renderer = CRTRenderer(self.screen)
        self._screen_full = False

    def _out(self, text: str = ""):
        print(text, file=self.stdout)

    def _parse_count(self, arg: str, default: int, usage: str) -> Optional[int]:
        """Integer argument, or None after printing *usage* if it is not one."""
        if not arg.strip():
            return default
        try:
            return int(arg.strip(), 0)
        except ValueError:
            self._out(f"Usage: {usage}")
            return None

    def _observe(self):
        # Same ordering as CPU.run(): sample, then tick.
        self.sampler(self.cpu)
        if not self._screen_full:
            try:
                self.renderer(self.cpu)
            except IndexError:
                self._screen_full = True
                self._out("  (screen full, no longer drawing)")

    def _tick(self):
        self._observe()
        self.cpu.tick()

    # ================================================================
    #  Commands
    # ================================================================

    # -- Loading --

    def do_load(self, arg):
        """Load a program file: load <file>"""
        parts = shlex.split(arg)
        if not parts:
            self._out("Usage: load <file>")
            return
        try:
            count = self.cpu.load(normalize(read_input(parts[0])))
            self._out(f"Loaded {count} instructions from '{parts[0]}'")
        except ParseError as e:
            self._out(f"Parse error: {e}")
        except OSError as e:
            self._out(f"Error: {e}")

    def do_asm(self, arg):
        """Load inline instructions: asm -e "noop; addx 3" """
        parts = shlex.split(arg)
        if len(parts) < 2 or parts[0] != "-e":
            self._out('Usage: asm -e "noop; addx 3"')
            return
        source = "\n".join(s.strip() for s in parts[1].split(";") if s.strip()) + "\n"
        try:
            count = self.cpu.load(source)
            self._out(f"Loaded {count} instructions")
        except ParseError as e:
            self._out(f"Parse error: {e}")

    def do_reset(self, arg):
        """Discard the CPU, screen and signal samples."""
        on_commit = self.cpu.on_commit
        self.cpu = CPU()
        self.cpu.on_commit = on_commit
        self.sampler = SignalSampler()
        self.screen = Screen()
        self.renderer = CRTRenderer(self.screen)
        self._screen_full = False
        self._out("CPU reset.")

    # -- Execution --

    def do_step(self, arg):
        """Tick N cycles: step [count]"""
        count = self._parse_count(arg, 1, "step [count]")
        if count is None:
            return
        for _ in range(count):
            cycle, x = self.cpu.cycle + 1, self.cpu.x
            try:
                self._tick()
            except CPUError as e:
                self._out(f"CPU error: {e}")
                break
            state = "BUSY" if self.cpu.busy else "IDLE"
            self._out(f"  cycle {cycle:>4d}: X={x:<5d} -> X={self.cpu.x:<5d} {state}")

    def do_run(self, arg):
        """Tick until the program is done: run [max_ticks]"""
        max_ticks = self._parse_count(arg, 1_000_000, "run [max_ticks]")
        if max_ticks is None:
            return
        if not self.cpu.has_additional_work():
            self._out("Nothing to run.")
            return
        total = 0
        try:
            while self.cpu.has_additional_work() and total < max_ticks:
                self._tick()
                total += 1
        except CPUError as e:
            self._out(f"CPU error: {e}")
        self._out(f"Ran {total} cycles.")

    # -- Inspection --

    def do_regs(self, arg):
        """Show registers and pipeline state."""
        self._out(self.cpu.dump_regs())

    def do_queue(self, arg):
        """List instructions not yet fetched: queue [count]"""
        limit = self._parse_count(arg, 10, "queue [count]")
        if limit is None:
            return
        pending = self.cpu.pending
        if self.cpu.in_flight is not None:
            self._out(f"  >> {self.cpu.in_flight}  ({self.cpu.remaining} left)")
        for i, ins in enumerate(pending[:limit]):
            self._out(f"  {i:>4d}: {ins}")
        if len(pending) > limit:
            self._out(f"  ... {len(pending) - limit} more")

    def do_screen(self, arg):
        """Show the CRT screen drawn so far."""
        self._out(self.screen.render())

    def do_signal(self, arg):
        """Show signal-strength samples taken so far."""
        for cycle, x in self.sampler.samples:
            self._out(f"  cycle {cycle:>4d}: X={x:<5d} strength={cycle * x}")
        self._out(f"  total = {self.sampler.total}")

    def do_cycles(self, arg):
        """Show the cycle counter."""
        self._out(f"  {self.cpu.cycle} cycles")

    def do_trace(self, arg):
        """Print every commit: trace on|off"""
        if arg.strip().lower() == "off":
            self.cpu.on_commit = None
        else:
            self.cpu.on_commit = _print_trace
        self._out(f"Trace {'off' if self.cpu.on_commit is None else 'on'}.")

    def do_quit(self, arg):
        """Exit the monitor."""
        self._out("Goodbye.")
        return True
    do_exit = do_quit

    def do_EOF(self, arg):
        self._out()
        return True

    def default(self, line):
        self._out(f"Unknown command: {line}. Type 'help' for commands.")

    def emptyline(self):
        pass


# ---------------------------------------------------------------------------
#  Subcommands
# ---------------------------------------------------------------------------

def cmd_run(args) -> int:
    solution = load_solution(args.date, path=args.input,
                             inputs_dir=args.inputs, example=args.example)
    if args.part is not None:
        parts = [args.part]
    else:
        parts = range(1, solution.parts + 1)
    for part in parts:
        answer = solution.solve(part)
        print(f"{solution.label(part)}:\n{answer}")
    if args.show:
        picture = solution.render()
        if picture is not None:
            print(picture)
    return 0

def cmd_list(args) -> int:
    print("Known solutions:")
    for key in SOLUTION_MAP:
        print(f"\t{key}  {get_solution(key).title}")
    return 0

def cmd_crt(args) -> int:
    cpu = CPU()
    if args.trace:
        cpu.on_commit = _print_trace
    cpu.load(normalize(read_input(args.program)))

    sampler = SignalSampler()
    screen = Screen()
    renderer = CRTRenderer(screen)

    def observe(c: CPU):
        sampler(c)
        renderer(c)

    ticks = cpu.run(observer=observe)
    print(f"Ran {ticks} cycles.")
    print(f"Total signal strength sum:\n{sampler.total}")
    print(screen.render())

    if args.display:
        try:
            from display import CRTDisplay
        except ImportError as e:
            print(f"[display] pygame not available: {e}", file=sys.stderr)
            print("[display] Install with: pip install pygame", file=sys.stderr)
            return 1
        disp = CRTDisplay(screen, scale=args.scale)
        disp.start()
        disp.wait()
    return 0

def cmd_monitor(args) -> int:
    mon = CPUMonitor()
    if args.program:
        mon.do_load(shlex.quote(args.program))
    try:
        mon.cmdloop()
    except KeyboardInterrupt:
        print("\nInterrupted. Goodbye.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="elfcode",
        description="Advent of Code 2022 solutions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Examples:\n"
               "  python cli.py list\n"
               "  python cli.py run 2022-12-01\n"
               "  python cli.py run 2022-12-11 --part 2 --example\n"
               "  python cli.py run 2022-12-09 --show\n"
               "  python cli.py crt inputs/2022/Dec10/input.txt --display\n"
               "  python cli.py monitor inputs/2022/Dec10/test.txt\n"
               "\n"
               "Inputs are read from inputs/YYYY/DecDD/input.txt; set\n"
               "ELFCODE_INPUTS or pass --inputs to look elsewhere.\n"
    )
    sub = parser.add_subparsers(dest="command")

    p_run = sub.add_parser("run", help="Execute the solution for a YYYY-MM-DD date")
    p_run.add_argument("date", help="Solution key, e.g. 2022-12-01")
    p_run.add_argument("--part", type=int, default=None,
                       help="Only run this part (default: all parts)")
    p_run.add_argument("--input", type=str, default=None, metavar="FILE",
                       help="Read this input file instead of the default location")
    p_run.add_argument("--inputs", type=str, default=None, metavar="DIR",
                       help="Inputs directory (default: $ELFCODE_INPUTS or ./inputs)")
    p_run.add_argument("--example", action="store_true",
                       help="Use test.txt (the puzzle's worked example)")
    p_run.add_argument("--show", action="store_true",
                       help="Also print a picture of the puzzle state, where the day has one")
    p_run.set_defaults(func=cmd_run)

    p_list = sub.add_parser("list", help="List the known solution keys")
    p_list.set_defaults(func=cmd_list)

    p_crt = sub.add_parser("crt", help="Run a CPU program and draw the CRT")
    p_crt.add_argument("program", help="Program text file")
    p_crt.add_argument("--trace", action="store_true",
                       help="Print the registers after every commit")
    p_crt.add_argument("--display", action="store_true",
                       help="Open a pygame window showing the screen")
    p_crt.add_argument("--scale", type=int, default=12, metavar="N",
                       help="Pixel scale factor for the display window (default: 12)")
    p_crt.set_defaults(func=cmd_crt)

    p_mon = sub.add_parser("monitor", help="Interactive CPU monitor")
    p_mon.add_argument("program", nargs="?", default=None,
                       help="Program text file to load first")
    p_mon.set_defaults(func=cmd_monitor)

    sub.add_parser("help", help="Print this help")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "func", None) is None:
        parser.print_help()
        return 0
    try:
        return args.func(args)
    except (ParseError, SolutionError, CPUError, OSError, IndexError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
