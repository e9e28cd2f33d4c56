"""QuizApp widget-state rules, driven with stand-in widgets (no display needed)."""

import random

import pytest

pytest.importorskip("tkinter")

import app  # noqa: E402
from config import QuizConfig  # noqa: E402
from controller import QuizController  # noqa: E402
from quiz_engine import SessionState  # noqa: E402

ARITHMETIC = [f"{i}+{i}|{i + i}" for i in range(1, 11)]


class FakeWidget:
    def __init__(self, state="normal"):
        self.state = state
        self.text = ""

    def config(self, **kw):
        self.state = kw.get("state", self.state)

    def __getitem__(self, key):
        assert key == "state"
        return self.state

    def get(self):
        return self.text

    def delete(self, *_args):
        self.text = ""

    def insert(self, _index, text):
        self.text = text

    def focus_set(self):
        pass


class FakeVar:
    def __init__(self, value=""):
        self.value = value

    def set(self, value):
        self.value = value

    def get(self):
        return self.value


class FakeMessagebox:
    def __init__(self):
        self.calls = []

    def showerror(self, *args):
        self.calls.append(("error",) + args)

    def showwarning(self, *args):
        self.calls.append(("warning",) + args)

    def showinfo(self, *args):
        self.calls.append(("info",) + args)


@pytest.fixture
def dialogs(monkeypatch):
    fake = FakeMessagebox()
    monkeypatch.setattr(app, "messagebox", fake)
    return fake


@pytest.fixture
def make_ui(tmp_path, dialogs):
    def _make(rng, questions=2):
        ui = object.__new__(app.QuizApp)
        ui.settings = QuizConfig(questions_per_quiz=questions, log_dir=str(tmp_path))
        ui.finished_at = None
        ui.controller = QuizController(ui, questions, rng=rng)
        ui.btn_load = FakeWidget()
        ui.btn_start = FakeWidget()
        ui.btn_csv = FakeWidget("disabled")
        ui.btn_pdf = FakeWidget("disabled")
        ui.btn_submit = FakeWidget("disabled")
        ui.answer_entry = FakeWidget("disabled")
        ui.summary = FakeWidget("disabled")
        ui.question_var = FakeVar()
        ui.score_var = FakeVar()
        ui.status = FakeVar()
        return ui
    return _make


def _answer(ui, text):
    ui.answer_entry.text = text
    ui.submit_answer()


def test_start_disabled_until_enough_questions(make_ui, write_quiz):
    ui = make_ui(random.Random(1))
    ui.load_quiz_file(write_quiz(["Q1|A1"]))
    assert ui.btn_start.state == "disabled"
    ui.load_quiz_file(write_quiz(ARITHMETIC, name="full.txt"))
    assert ui.btn_start.state == "normal"


def test_start_and_load_disabled_while_in_progress(make_ui, write_quiz, scripted_rng):
    ui = make_ui(scripted_rng(["3+3", "1+1"]))
    ui.load_quiz_file(write_quiz(ARITHMETIC))
    ui.start_quiz()
    assert ui.controller.session.state is SessionState.IN_PROGRESS
    assert ui.btn_start.state == "disabled"
    assert ui.btn_load.state == "disabled"
    assert ui.btn_submit.state == "normal"
    assert ui.question_var.get() == "Question 1/2: 3+3"

    _answer(ui, "6")
    assert ui.btn_start.state == "disabled"
    assert ui.question_var.get() == "Question 2/2: 1+1"


def test_start_and_load_enabled_after_final_report(make_ui, write_quiz, scripted_rng):
    ui = make_ui(scripted_rng(["3+3", "1+1"]))
    ui.load_quiz_file(write_quiz(ARITHMETIC))
    ui.start_quiz()
    _answer(ui, "6")
    _answer(ui, "3")
    assert ui.controller.session.state is SessionState.FINISHED
    assert ui.btn_start.state == "normal"
    assert ui.btn_load.state == "normal"
    assert ui.btn_csv.state == "normal" and ui.btn_pdf.state == "normal"
    assert ui.btn_submit.state == "disabled"
    assert ui.answer_entry.state == "disabled"
    assert "Q: 1+1\nCorrect: 2" in ui.summary.text


def test_submit_ignored_while_input_disabled(make_ui, write_quiz, scripted_rng):
    ui = make_ui(scripted_rng(["3+3", "1+1"]))
    ui.load_quiz_file(write_quiz(ARITHMETIC))
    ui.start_quiz()
    calls = []
    forward = ui.controller.submit_answer

    def submit_and_press_again(text):
        calls.append(text)
        # input must already be locked while the answer is being handled
        assert ui.btn_submit.state == "disabled"
        ui.submit_answer()
        return forward(text)

    ui.controller.submit_answer = submit_and_press_again
    _answer(ui, "6")
    assert calls == ["6"]
    assert ui.controller.session.current_index == 1
    assert ui.controller.session.score == 1


def test_submit_after_finish_is_ignored(make_ui, write_quiz, scripted_rng):
    ui = make_ui(scripted_rng(["3+3", "1+1"]))
    ui.load_quiz_file(write_quiz(ARITHMETIC))
    ui.start_quiz()
    _answer(ui, "6")
    _answer(ui, "2")
    status = ui.status.get()
    _answer(ui, "2")
    assert ui.status.get() == status
    assert ui.controller.report().final_score == 2


def test_empty_answer_keeps_input_enabled(make_ui, write_quiz, scripted_rng):
    ui = make_ui(scripted_rng(["3+3", "1+1"]))
    ui.load_quiz_file(write_quiz(ARITHMETIC))
    ui.start_quiz()
    _answer(ui, "   ")
    assert ui.status.get() == "Please enter an answer."
    assert ui.btn_submit.state == "normal"
    assert ui.answer_entry.state == "normal"
    assert ui.controller.session.current_index == 0


@pytest.mark.parametrize("reload_lines", [None, ["Q1|A1"], ARITHMETIC[:5] + ["X|Y"] * 20])
def test_reload_during_quiz_leaves_quiz_alone(make_ui, write_quiz, scripted_rng, dialogs, tmp_path, reload_lines):
    ui = make_ui(scripted_rng(["3+3", "1+1"]))
    ui.load_quiz_file(write_quiz(ARITHMETIC))
    ui.start_quiz()
    question = ui.question_var.get()

    if reload_lines is None:
        ui.load_quiz_file(tmp_path / "missing.txt")
    else:
        ui.load_quiz_file(write_quiz(reload_lines, name="other.txt"))

    assert ui.controller.session.state is SessionState.IN_PROGRESS
    assert ui.question_var.get() == question
    assert ui.btn_start.state == "disabled"
    assert ui.btn_submit.state == "normal"
    assert ui.answer_entry.state == "normal"
    assert ui.controller.bank.size() == 10
    assert dialogs.calls == []

    _answer(ui, "6")
    assert ui.question_var.get() == "Question 2/2: 1+1"


def test_load_failure_between_quizzes_disables_start(make_ui, write_quiz, dialogs, tmp_path):
    ui = make_ui(random.Random(3))
    ui.load_quiz_file(write_quiz(ARITHMETIC))
    assert ui.btn_start.state == "normal"
    ui.load_quiz_file(tmp_path / "missing.txt")
    assert ui.btn_start.state == "disabled"
    assert ui.question_var.get() == "Error loading quiz file."
    assert dialogs.calls and dialogs.calls[0][0] == "error"
