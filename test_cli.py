#!/usr/bin/env python3
"""
Tests for the solution registry, the command line and the CPU monitor.
"""
import io
import os
import tempfile
import unittest

import pytest

import solutions
from cli import CPUMonitor, main
from solutions import (SOLUTION_MAP, Solution, SolutionError, get_solution,
                       input_path, run)


# ---------------------------------------------------------------------------
#  Registry
# ---------------------------------------------------------------------------

class TestRegistry(unittest.TestCase):
    def test_every_key_resolves(self):
        for key in SOLUTION_MAP:
            with self.subTest(key=key):
                cls = get_solution(key)
                self.assertTrue(issubclass(cls, Solution))
                self.assertTrue(cls.title)

    def test_unknown_key(self):
        with self.assertRaises(SolutionError) as cm:
            get_solution("2022-12-25")
        self.assertIn("2022-12-25", str(cm.exception))

    def test_bad_part(self):
        sol = get_solution("2022-12-01")("1\n")
        with self.assertRaises(SolutionError):
            sol.solve(3)
        with self.assertRaises(SolutionError):
            sol.solve(0)

    def test_base_parts_unimplemented(self):
        with self.assertRaises(NotImplementedError):
            Solution("").solve(1)

    def test_input_path(self):
        self.assertEqual(input_path("2022-12-01", inputs_dir="/data"),
                         os.path.join("/data", "2022", "Dec01", "input.txt"))
        self.assertEqual(input_path("2022-12-10", example=True, inputs_dir="/data"),
                         os.path.join("/data", "2022", "Dec10", "test.txt"))

    def test_input_path_default_root(self):
        self.assertEqual(input_path("2022-12-07"),
                         os.path.join(solutions.PROJECT_ROOT, "inputs", "2022",
                                      "Dec07", "input.txt"))

    def test_input_path_bad_key(self):
        with self.assertRaises(SolutionError):
            input_path("yesterday")
        with self.assertRaises(SolutionError):
            input_path("2022-11-30")

    def test_run_with_explicit_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "calories.txt")
            with open(path, "w") as f:
                f.write("\n\n1\n2\n\n5\n\n\n")
            self.assertEqual(run("2022-12-01", path=path),
                             [("Largest", 5), ("Sum of the three largest", 8)])
            self.assertEqual(run("2022-12-01", parts=[2], path=path),
                             [("Sum of the three largest", 8)])

    def test_run_missing_input(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(SolutionError):
                run("2022-12-01", inputs_dir=tmp)


# ---------------------------------------------------------------------------
#  Command line
# ---------------------------------------------------------------------------

def test_env_selects_inputs(example_inputs, monkeypatch, capsys):
    monkeypatch.setenv(solutions.INPUTS_ENV, example_inputs)
    assert main(["run", "2022-12-06", "--example"]) == 0
    out = capsys.readouterr().out
    assert "Index of start packet tail:\n7\n" in out
    assert "Index of message packet tail:\n19\n" in out


def test_run_command(example_inputs, capsys):
    assert main(["run", "2022-12-01", "--inputs", example_inputs, "--example"]) == 0
    out = capsys.readouterr().out
    assert out == "Largest:\n24000\nSum of the three largest:\n45000\n"


def test_run_single_part(example_inputs, capsys):
    assert main(["run", "2022-12-05", "--part", "2",
                 "--inputs", example_inputs, "--example"]) == 0
    assert capsys.readouterr().out == "Top crates (CrateMover 9001):\nMCD\n"


def test_run_crt_day(example_inputs, capsys):
    assert main(["run", "2022-12-10", "--inputs", example_inputs, "--example"]) == 0
    out = capsys.readouterr().out
    assert "Total signal strength sum:\n720\n" in out
    assert ("###" + "." * 37 + "\n") * 5 in out


def test_run_unknown_date(capsys):
    assert main(["run", "2022-12-25"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: No known solution for date")


def test_run_missing_input(tmp_path, capsys):
    assert main(["run", "2022-12-02", "--inputs", str(tmp_path)]) == 1
    assert capsys.readouterr().err.startswith("Error: Cannot read input")


def test_run_parse_error(tmp_path, capsys):
    bad = tmp_path / "bad.txt"
    bad.write_text("A Y\nQ Q\n")
    assert main(["run", "2022-12-02", "--input", str(bad)]) == 1
    assert capsys.readouterr().err.startswith("Error: Line 2:")


def test_run_part_zero(example_inputs, capsys):
    assert main(["run", "2022-12-01", "--part", "0",
                 "--inputs", example_inputs, "--example"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error: This solution has no part 0")


def test_run_bad_rucksack_item(tmp_path, capsys):
    bad = tmp_path / "rucksacks.txt"
    bad.write_text("1a1b\n")
    assert main(["run", "2022-12-03", "--part", "1", "--input", str(bad)]) == 1
    assert capsys.readouterr().err.startswith("Error: Line 1: Invalid item types '1'")


def test_run_show(example_inputs, capsys):
    assert main(["run", "2022-12-05", "--show",
                 "--inputs", example_inputs, "--example"]) == 0
    out = capsys.readouterr().out
    assert out.endswith("MCD\n    [D]\n[N] [C]\n[Z] [M] [P]\n 1   2   3\n")


def test_run_show_without_picture(example_inputs, capsys):
    assert main(["run", "2022-12-01", "--show",
                 "--inputs", example_inputs, "--example"]) == 0
    assert capsys.readouterr().out == "Largest:\n24000\nSum of the three largest:\n45000\n"


def test_list_command(capsys):
    assert main(["list"]) == 0
    out = capsys.readouterr().out
    for key in SOLUTION_MAP:
        assert key in out
    assert "Monkey in the Middle" in out


@pytest.mark.parametrize("argv", [[], ["help"]])
def test_help(argv, capsys):
    assert main(argv) == 0
    assert "usage: elfcode" in capsys.readouterr().out


def test_crt_command(tmp_path, capsys):
    program = tmp_path / "program.txt"
    program.write_text("addx 5\n" + "noop\n" * 218)
    assert main(["crt", str(program)]) == 0
    out = capsys.readouterr().out
    assert "Ran 220 cycles." in out
    assert "Total signal strength sum:\n4320\n" in out


def test_crt_trace(tmp_path, capsys):
    program = tmp_path / "program.txt"
    program.write_text("noop\naddx 3\naddx -5\n")
    assert main(["crt", str(program), "--trace"]) == 0
    out = capsys.readouterr().out
    assert "  commit addx 3\n" in out
    assert "X=-1" in out


def test_crt_bad_program(tmp_path, capsys):
    program = tmp_path / "program.txt"
    program.write_text("noop\nfoo 3\n")
    assert main(["crt", str(program)]) == 1
    assert "Unknown opcode 'foo'" in capsys.readouterr().err


# ---------------------------------------------------------------------------
#  Monitor
# ---------------------------------------------------------------------------

class TestMonitor(unittest.TestCase):
    def setUp(self):
        self.out = io.StringIO()
        self.mon = CPUMonitor(stdout=self.out)

    def cmd(self, line: str) -> str:
        self.out.seek(0)
        self.out.truncate()
        self.mon.onecmd(line)
        return self.out.getvalue()

    def test_asm_and_step(self):
        self.assertIn("Loaded 3 instructions",
                      self.cmd('asm -e "noop; addx 3; addx -5"'))
        out = self.cmd("step 3")
        self.assertIn("cycle    3: X=1     -> X=4", out)
        self.assertEqual(self.mon.cpu.cycle, 3)

    def test_run_and_regs(self):
        self.cmd('asm -e "noop; addx 3; addx -5"')
        self.assertIn("Ran 5 cycles.", self.cmd("run"))
        self.assertIn("X=-1", self.cmd("regs"))
        self.assertIn("Nothing to run.", self.cmd("run"))

    def test_queue(self):
        self.cmd('asm -e "addx 1; noop; noop"')
        self.cmd("step")
        out = self.cmd("queue")
        self.assertIn(">> addx 1  (1 left)", out)
        self.assertIn("0: noop", out)

    def test_screen_and_signal(self):
        self.mon.cpu.load("noop\n" * 20)
        self.cmd("run")
        self.assertTrue(self.cmd("screen").startswith("###" + "." * 17))
        self.assertIn("total = 20", self.cmd("signal"))

    def test_bad_asm(self):
        self.assertIn("Parse error: Line 1:", self.cmd('asm -e "jmp 4"'))
        self.assertIn("Usage", self.cmd("asm noop"))

    def test_load_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "prog.txt")
            with open(path, "w") as f:
                f.write("noop\naddx 2\n\n")
            self.assertIn("Loaded 2 instructions", self.cmd(f"load {path}"))
            self.assertIn("Error:", self.cmd(f"load {path}.missing"))

    def test_reset(self):
        self.cmd('asm -e "addx 4"')
        self.cmd("run")
        self.cmd("reset")
        self.assertEqual(self.mon.cpu.x, 1)
        self.assertIn("0 cycles", self.cmd("cycles"))

    def test_quit(self):
        self.assertTrue(self.mon.onecmd("quit"))
        self.assertTrue(self.mon.onecmd("EOF"))

    def test_bad_counts(self):
        self.cmd('asm -e "noop; noop"')
        self.assertIn("Usage: step [count]", self.cmd("step abc"))
        self.assertIn("Usage: run [max_ticks]", self.cmd("run 1.5"))
        self.assertIn("Usage: queue [count]", self.cmd("queue x"))
        self.assertEqual(self.mon.cpu.cycle, 0)
        self.assertIn("Ran 2 cycles.", self.cmd("run"))

    def test_unknown_command(self):
        self.assertIn("Unknown command", self.cmd("frobnicate"))


if __name__ == "__main__":
    unittest.main()
