from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from quiz_engine import QuestionBank  # noqa: E402


ARITHMETIC = [f"{i}+{i}|{i + i}" for i in range(1, 11)]


class ScriptedRng:
    """Stand-in for random.Random whose choice() returns a fixed sequence."""

    def __init__(self, picks):
        self.picks = list(picks)
        self.calls = 0

    def choice(self, seq):
        pick = self.picks[self.calls]
        self.calls += 1
        assert pick in seq
        return pick


@pytest.fixture
def write_quiz(tmp_path):
    def _write(lines, name="quiz.txt"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write


@pytest.fixture
def arithmetic_bank():
    bank = QuestionBank()
    bank.load_lines(ARITHMETIC)
    return bank


@pytest.fixture
def scripted_rng():
    return ScriptedRng
