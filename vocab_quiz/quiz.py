"""Quiz flow: step through a question set, score answers, grade the run."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from vocab_quiz.models import AnswerRecord, AnswerResult, Question, QuizResult, VocabularyTable
from vocab_quiz.question_generator import build_quiz

_log = logging.getLogger("vocab_quiz.quiz")

# (minimum percentage, message, celebrate), checked top-down
FEEDBACK_TIERS = [
    (100, "Perfect! You are a genius! 🌟", True),
    (80, "Great Job! Keep it up! 👍", False),
    (50, "Good try! Let's practice more! 💪", False),
    (0, "Don't give up! Try again! 🔥", False),
]

CONFETTI_COLORS = [
    "#f44336", "#e91e63", "#9c27b0", "#673ab7", "#3f51b5", "#2196f3",
    "#03a9f4", "#00bcd4", "#009688", "#4CAF50", "#8BC34A", "#CDDC39",
    "#FFEB3B", "#FFC107", "#FF9800", "#FF5722",
]
CONFETTI_COUNT = 50


class QuizFinishedError(RuntimeError):
    """Raised when an answer arrives after the last question."""


def feedback_for(percentage: int) -> tuple[str, bool]:
    """Map a percentage score to its (message, celebrate) tier."""
    for threshold, message, celebrate in FEEDBACK_TIERS:
        if percentage >= threshold:
            return message, celebrate
    return FEEDBACK_TIERS[-1][1], False


def confetti_burst(count: int = CONFETTI_COUNT, rng: random.Random | None = None) -> list[dict]:
    """Particle parameters for the perfect-score animation.

    Each particle gets a horizontal position in viewport-width units, a
    palette colour, and an animation duration (2-4s) and delay (0-2s).
    """
    r = rng or random
    return [
        {
            "left_vw": round(r.random() * 100, 2),
            "color": r.choice(CONFETTI_COLORS),
            "duration_s": round(r.random() * 2 + 2, 2),
            "delay_s": round(r.random() * 2, 2),
        }
        for _ in range(count)
    ]


@dataclass
class QuizSession:
    group: str
    questions: list[Question]
    current_index: int = 0
    score: int = 0
    answers: list[AnswerRecord] = field(default_factory=list)

    @classmethod
    def start(
        cls,
        vocabulary: VocabularyTable,
        group: str,
        rng: random.Random | None = None,
    ) -> QuizSession:
        """Create a session for *group*; raises GroupNotFoundError."""
        return cls(group=group, questions=build_quiz(vocabulary, group, rng))

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def finished(self) -> bool:
        return self.current_index >= self.total

    @property
    def current_question(self) -> Question | None:
        if self.finished:
            return None
        return self.questions[self.current_index]

    @property
    def progress(self) -> float:
        """Share of questions already answered, as a percentage."""
        if not self.total:
            return 0.0
        return self.current_index / self.total * 100

    def answer(self, selected: str) -> AnswerResult:
        question = self.current_question
        if question is None:
            raise QuizFinishedError(f"Quiz for '{self.group}' is already finished")

        correct = selected == question.correct_meaning
        if correct:
            self.score += 1
        self.answers.append(AnswerRecord(
            word=question.word,
            selected=selected,
            correct_meaning=question.correct_meaning,
            correct=correct,
        ))
        self.current_index += 1

        _log.debug("%s: '%s' -> %s", self.group, question.word, "correct" if correct else "wrong")
        return AnswerResult(
            correct=correct,
            selected=selected,
            correct_meaning=question.correct_meaning,
            finished=self.finished,
        )

    def result(self) -> QuizResult:
        percentage = round(self.score / self.total * 100) if self.total else 0
        message, celebrate = feedback_for(percentage)
        _log.info("Quiz '%s' finished: %d/%d (%d%%)", self.group, self.score, self.total, percentage)
        return QuizResult(
            score=self.score,
            total=self.total,
            percentage=percentage,
            message=message,
            celebrate=celebrate,
        )
