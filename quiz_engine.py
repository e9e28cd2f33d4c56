#!/usr/bin/env python3
# quiz_engine.py - question bank, quiz session and outcome types

import enum
import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

QUESTIONS_PER_QUIZ = 10
SEPARATOR = "|"


class QuizError(Exception):
    """Base class for quiz errors."""


class LoadError(QuizError):
    """The question file could not be opened or read."""


class InsufficientDataError(QuizError):
    def __init__(self, available: int, required: int):
        super().__init__(f"Need {required} questions, only {available} loaded.")
        self.available = available
        self.required = required


class SessionState(enum.Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class AnswerStatus(enum.Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    EMPTY = "empty"
    NOT_ACCEPTING = "not_accepting"


@dataclass(frozen=True)
class QuestionEntry:
    question: str
    answer: str

    @staticmethod
    def parse(line: str) -> Optional["QuestionEntry"]:
        """Parse one `question|answer` line; None for blank or malformed lines."""
        question, sep, answer = line.strip().partition(SEPARATOR)
        question, answer = question.strip(), answer.strip()
        if not sep or not question or not answer:
            return None
        return QuestionEntry(question, answer)


@dataclass(frozen=True)
class MissedQuestion:
    question: str
    correct_answer: str


@dataclass(frozen=True)
class AnswerOutcome:
    status: AnswerStatus
    correct_answer: Optional[str] = None
    finished: bool = False

    @property
    def graded(self) -> bool:
        return self.status in (AnswerStatus.CORRECT, AnswerStatus.INCORRECT)


@dataclass(frozen=True)
class QuizReport:
    final_score: int
    total_questions: int
    missed: List[MissedQuestion] = field(default_factory=list)

    @property
    def percent(self) -> int:
        return int(100 * self.final_score / max(1, self.total_questions))

    def summary(self) -> str:
        s = [f"Quiz finished! Final score: {self.final_score} / {self.total_questions}", ""]
        if not self.missed:
            s.append("Perfect! You did not miss any questions.")
            return "\n".join(s)
        s.append("Missed questions:\n")
        for m in self.missed:
            s.append(f"Q: {m.question}")
            s.append(f"Correct: {m.correct_answer}")
            s.append("")
        return "\n".join(s)


class QuestionBank:
    def __init__(self):
        self._answers: Dict[str, str] = {}

    def __len__(self):
        return len(self._answers)

    def __contains__(self, question):
        return question in self._answers

    def size(self) -> int:
        return len(self._answers)

    def questions(self) -> List[str]:
        return list(self._answers)

    def answer_for(self, question: str) -> Optional[str]:
        return self._answers.get(question)

    def load(self, path) -> None:
        """Replace the bank with the entries read from `path`.

        Raises LoadError if the file cannot be opened, read or decoded; the
        current contents are kept in that case.
        """
        try:
            with open(path, "r", encoding="utf-8-sig") as f:
                lines = f.readlines()
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Could not read quiz file %s: %s", path, e)
            raise LoadError(f"Could not read {path}: {e}") from e
        self.load_lines(lines)
        logger.info("Loaded %d questions from %s", len(self._answers), path)

    def load_lines(self, lines: Iterable[str]) -> None:
        answers: Dict[str, str] = {}
        for lineno, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            entry = QuestionEntry.parse(line)
            if entry is None:
                logger.warning("Skipping malformed line %d: %r", lineno, line.rstrip("\n"))
                continue
            if entry.question in answers:
                logger.warning("Duplicate question on line %d overrides earlier answer: %r",
                               lineno, entry.question)
            answers[entry.question] = entry.answer
        self._answers = answers

    def sample(self, n: int, rng: Optional[random.Random] = None) -> List[str]:
        """Draw `n` questions uniformly at random, with replacement.

        The same question may be drawn more than once. Requires at least `n`
        distinct questions in the bank.
        """
        if n < 1:
            raise ValueError(f"n must be at least 1, got {n}")
        if len(self._answers) < n:
            raise InsufficientDataError(len(self._answers), n)
        rng = rng or random.Random()
        keys = list(self._answers)
        return [rng.choice(keys) for _ in range(n)]


class QuizSession:
    def __init__(self):
        self.state = SessionState.NOT_STARTED
        self.selected_questions: List[str] = []
        self.current_index = 0
        self.score = 0
        self.missed: List[MissedQuestion] = []
        self._answers: Dict[str, str] = {}

    @property
    def total(self) -> int:
        return len(self.selected_questions)

    def start(self, bank: QuestionBank, n: int = QUESTIONS_PER_QUIZ,
              rng: Optional[random.Random] = None) -> None:
        selected = bank.sample(n, rng)
        # snapshot the answers so a later reload can't change grading mid-quiz
        self._answers = {q: bank.answer_for(q) for q in selected}
        self.selected_questions = selected
        self.current_index = 0
        self.score = 0
        self.missed = []
        self.state = SessionState.IN_PROGRESS
        logger.info("Quiz started with %d questions", n)

    def current_question(self) -> Optional[str]:
        if self.state is not SessionState.IN_PROGRESS:
            return None
        if self.current_index >= len(self.selected_questions):
            return None
        return self.selected_questions[self.current_index]

    def submit_answer(self, text: Optional[str]) -> AnswerOutcome:
        question = self.current_question()
        if question is None:
            return AnswerOutcome(AnswerStatus.NOT_ACCEPTING)
        answer = (text or "").strip()
        if not answer:
            return AnswerOutcome(AnswerStatus.EMPTY)

        correct_answer = self._answers[question]
        if answer.casefold() == correct_answer.casefold():
            self.score += 1
            status = AnswerStatus.CORRECT
        else:
            self.missed.append(MissedQuestion(question, correct_answer))
            status = AnswerStatus.INCORRECT

        self.current_index += 1
        finished = self.current_index >= len(self.selected_questions)
        if finished:
            self.state = SessionState.FINISHED
            logger.info("Quiz finished: %d/%d", self.score, self.total)
        return AnswerOutcome(
            status,
            correct_answer=correct_answer if status is AnswerStatus.INCORRECT else None,
            finished=finished,
        )

    def report(self) -> Optional[QuizReport]:
        if self.state is not SessionState.FINISHED:
            return None
        return QuizReport(self.score, self.total, list(self.missed))
