"""Build randomized multiple-choice questions from a vocabulary table."""
from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence
from typing import TypeVar

from vocab_quiz.models import Question, VocabularyEntry, VocabularyTable

_log = logging.getLogger("vocab_quiz.qgen")

DISTRACTOR_COUNT = 3

T = TypeVar("T")


class GroupNotFoundError(LookupError):
    """Raised when a quiz is requested for a group with no vocabulary."""

    def __init__(self, group: str):
        super().__init__(f"Vocabulary not found for group '{group}'")
        self.group = group


def shuffle(items: list[T], rng: random.Random | None = None) -> list[T]:
    """Fisher-Yates shuffle of *items* in place; returns the same list.

    Walks i from the last index down to 1 and swaps element i with a
    uniformly chosen element in [0, i].
    """
    r = rng or random
    for i in range(len(items) - 1, 0, -1):
        j = r.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def all_entries(vocabulary: VocabularyTable) -> list[VocabularyEntry]:
    """Flatten every group of the table, in table order."""
    return [entry for entries in vocabulary.values() for entry in entries]


def _meaning_pool(pool: Iterable[VocabularyEntry]) -> list[str]:
    # Distinct meanings in first-seen order so the three picks never repeat
    return list(dict.fromkeys(entry.meaning for entry in pool))


def generate_questions(
    targets: Sequence[VocabularyEntry],
    pool: Iterable[VocabularyEntry],
    rng: random.Random | None = None,
) -> list[Question]:
    """Generate one question per target entry, in random order.

    Distractors come from every meaning in *pool* except those equal to the
    target's own meaning (all entries sharing that text are dropped, not just
    the target).  Neither *targets* nor *pool* is modified.
    """
    meanings = _meaning_pool(pool)

    questions: list[Question] = []
    for target in targets:
        candidates = [m for m in meanings if m != target.meaning]
        distractors = shuffle(candidates, rng)[:DISTRACTOR_COUNT]
        if len(distractors) < DISTRACTOR_COUNT:
            _log.warning(
                "Only %d distractor(s) available for '%s'", len(distractors), target.word,
            )
        options = shuffle([target.meaning, *distractors], rng)
        questions.append(Question(
            word=target.word,
            correct_meaning=target.meaning,
            options=options,
        ))

    return shuffle(questions, rng)


def build_quiz(
    vocabulary: VocabularyTable,
    group: str,
    rng: random.Random | None = None,
) -> list[Question]:
    """Generate the question set for *group*, drawing distractors from all groups."""
    entries = vocabulary.get(group)
    if not entries:
        raise GroupNotFoundError(group)

    questions = generate_questions(entries, all_entries(vocabulary), rng)
    _log.info("Built %d questions for '%s'", len(questions), group)
    return questions
