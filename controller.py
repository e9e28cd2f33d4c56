#!/usr/bin/env python3
# controller.py - forwards UI events into the quiz session and drives the view

import logging
import random
from typing import Optional, Protocol

from quiz_engine import (
    QUESTIONS_PER_QUIZ, AnswerOutcome, InsufficientDataError, LoadError,
    QuestionBank, QuizReport, QuizSession,
)

logger = logging.getLogger(__name__)


class QuizView(Protocol):
    def on_load_failure(self, reason: str) -> None: ...
    def on_insufficient_questions(self, available: int, required: int) -> None: ...
    def render_question(self, index: int, total: int, text: str) -> None: ...
    def render_feedback(self, outcome: AnswerOutcome) -> None: ...
    def render_final_report(self, report: QuizReport) -> None: ...


class QuizController:
    """Owns the bank and the session; the only thing the view talks to.

    Load and data-sufficiency errors are turned into view callbacks here and
    never reach the UI as exceptions.
    """

    def __init__(self, view: QuizView, questions_per_quiz: int = QUESTIONS_PER_QUIZ,
                 rng: Optional[random.Random] = None, bank: Optional[QuestionBank] = None):
        self.view = view
        self.questions_per_quiz = questions_per_quiz
        self.rng = rng or random.Random()
        self.bank = bank or QuestionBank()
        self.session = QuizSession()

    def load(self, path) -> bool:
        try:
            self.bank.load(path)
        except LoadError as e:
            self.view.on_load_failure(str(e))
            return False
        if self.bank.size() < self.questions_per_quiz:
            logger.warning("Only %d questions available, %d needed",
                           self.bank.size(), self.questions_per_quiz)
            self.view.on_insufficient_questions(self.bank.size(), self.questions_per_quiz)
            return False
        return True

    def can_start(self) -> bool:
        return self.bank.size() >= self.questions_per_quiz

    def request_start(self) -> bool:
        try:
            self.session.start(self.bank, self.questions_per_quiz, self.rng)
        except InsufficientDataError as e:
            self.view.on_insufficient_questions(e.available, e.required)
            return False
        self.view.render_question(0, self.session.total, self.session.current_question())
        return True

    def submit_answer(self, text: str) -> AnswerOutcome:
        outcome = self.session.submit_answer(text)
        self.view.render_feedback(outcome)
        if outcome.finished:
            self.view.render_final_report(self.session.report())
        elif outcome.graded:
            self.view.render_question(self.session.current_index, self.session.total,
                                      self.session.current_question())
        return outcome

    def report(self) -> Optional[QuizReport]:
        return self.session.report()
