"""
Pytest configuration for the Elfcode test suite.

    python -m pytest                 # everything
    python -m pytest -m "not display"

Tests marked `display` need pygame and are skipped when it is missing.
The `example_inputs` fixture lays out the worked examples from the puzzle
text as an inputs directory (inputs/2022/DecDD/test.txt).
"""

import importlib.util
import os

import pytest

EXAMPLES = {
    "2022-12-01": "1000\n2000\n3000\n\n4000\n\n5000\n6000\n\n7000\n8000\n9000\n\n10000\n",
    "2022-12-02": "A Y\nB X\nC Z\n",
    "2022-12-04": "2-4,6-8\n2-3,4-5\n5-7,7-9\n2-8,3-7\n6-6,4-6\n2-6,4-8\n",
    "2022-12-05": ("    [D]    \n"
                   "[N] [C]    \n"
                   "[Z] [M] [P]\n"
                   " 1   2   3 \n"
                   "\n"
                   "move 1 from 2 to 1\n"
                   "move 3 from 1 to 3\n"
                   "move 2 from 2 to 1\n"
                   "move 1 from 1 to 2\n"),
    "2022-12-06": "mjqjpqmgbljsphdztnvjfqwrcgsmlb\n",
    "2022-12-10": "noop\n" * 240,
}


def pytest_configure(config):
    config.addinivalue_line("markers",
        "display: tests requiring pygame (skipped when it is not installed)")


def pytest_collection_modifyitems(config, items):
    if importlib.util.find_spec("pygame") is not None:
        return
    skip = pytest.mark.skip(reason="pygame not installed")
    for item in items:
        if "display" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def example_inputs(tmp_path):
    """An inputs directory holding test.txt for a handful of days."""
    for key, text in EXAMPLES.items():
        year, _, day = key.split("-")
        folder = tmp_path / year / f"Dec{day}"
        folder.mkdir(parents=True)
        (folder / "test.txt").write_text(text)
    return str(tmp_path)


@pytest.fixture(autouse=True)
def _no_inputs_env(monkeypatch):
    """Keep a developer's ELFCODE_INPUTS from leaking into tests."""
    monkeypatch.delenv("ELFCODE_INPUTS", raising=False)
