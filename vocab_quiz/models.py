from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class VocabularyEntry:
    word: str
    meaning: str


# group label (e.g. "day1") -> entries, in file order
VocabularyTable = dict[str, list[VocabularyEntry]]


@dataclass
class Question:
    word: str
    correct_meaning: str
    options: list[str] = field(default_factory=list)


@dataclass
class AnswerRecord:
    word: str
    selected: str
    correct_meaning: str
    correct: bool


@dataclass
class AnswerResult:
    correct: bool
    selected: str
    correct_meaning: str
    finished: bool


@dataclass
class QuizResult:
    score: int
    total: int
    percentage: int
    message: str
    celebrate: bool = False

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "total": self.total,
            "percentage": self.percentage,
            "message": self.message,
            "celebrate": self.celebrate,
        }
