#!/usr/bin/env python3
# app.py - Quiz (GUI): loads question|answer pairs, asks N random questions,
# scores typed answers and shows the missed questions at the end.
# Requires: reportlab (PDF results sheet)

import argparse
import logging
import os
import random
import tkinter as tk
from datetime import datetime
from tkinter import ttk, messagebox, filedialog

from config import APP_TITLE, QuizConfig, setup_logging
from controller import QuizController
from quiz_engine import AnswerStatus, SessionState
from results_export import generate_results_pdf, write_results_csv

logger = logging.getLogger(__name__)


class QuizApp(ttk.Frame):
    """tkinter view: renders what the controller tells it and forwards input."""

    def __init__(self, master, config: QuizConfig):
        super().__init__(master)
        self.pack(fill="both", expand=True)
        self.settings = config
        self.finished_at = None
        self.controller = QuizController(self, config.questions_per_quiz, rng=random.Random(config.seed))
        n = config.questions_per_quiz

        ttk.Label(self, text=APP_TITLE, font=("Segoe UI", 16, "bold")).pack(anchor="w", padx=10, pady=(10,6))

        toolbar = ttk.Frame(self); toolbar.pack(fill="x", padx=6, pady=(6,2))
        self.btn_load = ttk.Button(toolbar, text="Load Quiz File…", command=self.choose_quiz_file); self.btn_load.pack(side="left", padx=4)
        self.btn_start = ttk.Button(toolbar, text="Start Quiz", command=self.start_quiz); self.btn_start.pack(side="left", padx=4)
        self.btn_csv = ttk.Button(toolbar, text="Save Results CSV", command=self.save_results_csv, state="disabled")
        self.btn_csv.pack(side="left", padx=4)
        self.btn_pdf = ttk.Button(toolbar, text="Save Results PDF", command=self.save_results_pdf, state="disabled")
        self.btn_pdf.pack(side="left", padx=4)

        self.question_var = tk.StringVar(value="Press 'Start Quiz' to begin.")
        ttk.Label(self, textvariable=self.question_var, wraplength=560, font=("Segoe UI", 12)).pack(anchor="w", padx=10, pady=(10,4))
        self.score_var = tk.StringVar(value=f"Score: 0 / {n}")
        ttk.Label(self, textvariable=self.score_var).pack(anchor="w", padx=10)
        self.status = tk.StringVar(value="")
        ttk.Label(self, textvariable=self.status).pack(anchor="w", padx=10, pady=(0,6))

        row = ttk.Frame(self); row.pack(fill="x", padx=10, pady=4)
        self.answer_entry = ttk.Entry(row, state="disabled"); self.answer_entry.pack(side="left", fill="x", expand=True)
        self.answer_entry.bind("<Return>", lambda _e: self.submit_answer())
        self.btn_submit = ttk.Button(row, text="Submit", command=self.submit_answer, state="disabled")
        self.btn_submit.pack(side="left", padx=(6,0))

        self.summary = tk.Text(self, height=12, wrap="word", state="disabled", bg="#f9fff6")
        self.summary.pack(fill="both", expand=True, padx=10, pady=(6,10))

        self.load_quiz_file(config.quiz_file)

    # ---------------- Adapter -> controller ----------------
    def choose_quiz_file(self):
        path = filedialog.askopenfilename(filetypes=[("Text", "*.txt"), ("All files", "*")])
        if not path: return
        self.load_quiz_file(path)

    def load_quiz_file(self, path):
        # the running quiz keeps its own answers; reload only between quizzes
        if self.controller.session.state is SessionState.IN_PROGRESS:
            return
        self.btn_start.config(state="disabled")
        if self.controller.load(path):
            self.btn_start.config(state="normal")
            self.status.set(f"Loaded {self.controller.bank.size()} questions from {os.path.basename(path)}.")

    def start_quiz(self):
        self.btn_start.config(state="disabled")
        self.btn_csv.config(state="disabled"); self.btn_pdf.config(state="disabled")
        self.summary_set(""); self.status.set("")
        self.score_var.set(f"Score: 0 / {self.controller.questions_per_quiz}")
        if not self.controller.request_start():
            return
        self.btn_load.config(state="disabled")
        self._set_input_enabled(True)

    def submit_answer(self):
        # Enter and the button both land here; ignore input until the next render
        if str(self.btn_submit["state"]) == "disabled":
            return
        self._set_input_enabled(False)
        outcome = self.controller.submit_answer(self.answer_entry.get())
        if outcome.status is AnswerStatus.EMPTY:
            self._set_input_enabled(True)

    # ---------------- QuizView callbacks ----------------
    def on_load_failure(self, reason):
        self.question_var.set("Error loading quiz file.")
        self.status.set("Check the quiz file path.")
        self._set_input_enabled(False)
        self.btn_start.config(state="disabled")
        messagebox.showerror("Load error", reason)

    def on_insufficient_questions(self, available, required):
        self.question_var.set("Not enough questions in the quiz file.")
        self.status.set(f"Found {available}, need at least {required}.")
        self._set_input_enabled(False)
        self.btn_start.config(state="disabled")

    def render_question(self, index, total, text):
        self.question_var.set(f"Question {index + 1}/{total}: {text}")
        self._set_input_enabled(True)
        self.answer_entry.delete(0, "end")
        self.answer_entry.focus_set()

    def render_feedback(self, outcome):
        if outcome.status is AnswerStatus.EMPTY:
            self.status.set("Please enter an answer.")
        elif outcome.status is AnswerStatus.CORRECT:
            self.status.set("Correct!")
        elif outcome.status is AnswerStatus.INCORRECT:
            self.status.set(f"Incorrect. Correct answer: {outcome.correct_answer}")
        self.score_var.set(f"Score: {self.controller.session.score} / {self.controller.session.total}")

    def render_final_report(self, report):
        self.finished_at = datetime.now()
        self._set_input_enabled(False)
        self.btn_start.config(state="normal")
        self.btn_load.config(state="normal")
        self.btn_csv.config(state="normal"); self.btn_pdf.config(state="normal")
        self.question_var.set(f"Quiz finished! Final score: {report.final_score} / {report.total_questions}")
        self.summary_set(report.summary())

    # ---------------- Helpers ----------------
    def _set_input_enabled(self, enabled):
        state = "normal" if enabled else "disabled"
        self.answer_entry.config(state=state); self.btn_submit.config(state=state)

    def summary_set(self, text):
        self.summary.config(state="normal"); self.summary.delete("1.0", "end")
        self.summary.insert("1.0", text); self.summary.config(state="disabled")

    # ---------------- Results export ----------------
    def save_results_csv(self):
        report = self.controller.report()
        if not report:
            messagebox.showwarning("No results", "Finish a quiz first."); return
        path = filedialog.asksaveasfilename(defaultextension=".csv", filetypes=[("CSV","*.csv")],
                                            initialdir=self.settings.log_dir, initialfile="quiz_results.csv")
        if not path: return
        try:
            write_results_csv(report, path, self.finished_at)
        except OSError as e:
            logger.error("Could not save %s: %s", path, e)
            messagebox.showerror("Save error", str(e)); return
        messagebox.showinfo("Saved", f"Results saved to {path}")

    def save_results_pdf(self):
        report = self.controller.report()
        if not report:
            messagebox.showwarning("No results", "Finish a quiz first."); return
        path = filedialog.asksaveasfilename(defaultextension=".pdf", filetypes=[("PDF","*.pdf")],
                                            initialdir=self.settings.log_dir, initialfile="quiz_results.pdf")
        if not path: return
        try:
            generate_results_pdf(report, path, self.finished_at)
        except OSError as e:
            logger.error("Could not save %s: %s", path, e)
            messagebox.showerror("Save error", str(e)); return
        messagebox.showinfo("Saved", f"Results saved to {path}")


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Desktop quiz from a question|answer text file.")
    p.add_argument("--file", help="quiz file (default: quiz.txt or $QUIZ_FILE)")
    p.add_argument("--questions", type=int, help="questions per quiz (default: 10 or $QUIZ_QUESTIONS)")
    p.add_argument("--seed", type=int, help="random seed for reproducible question order")
    p.add_argument("--log-level", help="logging level (default: INFO)")
    return p.parse_args(argv)


def build_config(args) -> QuizConfig:
    overrides = {
        "quiz_file": args.file,
        "questions_per_quiz": args.questions,
        "seed": args.seed,
        "log_level": args.log_level,
    }
    return QuizConfig(**{k: v for k, v in overrides.items() if v is not None})


def main(argv=None):
    args = parse_args(argv)
    try:
        config = build_config(args)
    except ValueError as e:
        raise SystemExit(f"error: {e}")
    setup_logging(config.log_dir, config.log_level)
    root = tk.Tk()
    root.title(APP_TITLE)
    QuizApp(root, config)
    root.minsize(600, 450)
    root.mainloop()

if __name__ == "__main__":
    main()
