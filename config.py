#!/usr/bin/env python3
# config.py - runtime settings (env defaults, CLI overrides) and logging setup

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from quiz_engine import QUESTIONS_PER_QUIZ

APP_TITLE = "Quiz - Test Time"
LOG_FILENAME = "quiz.log"


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    val = os.getenv(name, "").strip()
    if not val:
        return default
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {val!r}") from None


@dataclass
class QuizConfig:
    quiz_file: str = field(default_factory=lambda: os.getenv("QUIZ_FILE", "quiz.txt"))
    questions_per_quiz: int = field(default_factory=lambda: _env_int("QUIZ_QUESTIONS", QUESTIONS_PER_QUIZ))
    seed: Optional[int] = field(default_factory=lambda: _env_int("QUIZ_SEED", None))
    log_level: str = field(default_factory=lambda: os.getenv("QUIZ_LOG_LEVEL", "INFO"))
    log_dir: str = field(default_factory=lambda: os.getenv("QUIZ_LOG_DIR", "outputs"))

    def __post_init__(self):
        if self.questions_per_quiz < 1:
            raise ValueError(f"questions_per_quiz must be at least 1, got {self.questions_per_quiz}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level}")


def setup_logging(log_dir: str = "outputs", level: str = "INFO") -> logging.Logger:
    """Console + file logging on the root logger. Safe to call more than once."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if getattr(root, "_quiz_configured", False):
        return root

    Path(log_dir).mkdir(parents=True, exist_ok=True)
    fmt = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ch = logging.StreamHandler(); ch.setFormatter(fmt); root.addHandler(ch)
    fh = logging.FileHandler(str(Path(log_dir) / LOG_FILENAME), encoding="utf-8")
    fh.setFormatter(fmt); root.addHandler(fh)

    root._quiz_configured = True  # type: ignore[attr-defined]
    return root
