"""Shared test fixtures."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from vocab_quiz.models import VocabularyEntry


@pytest.fixture
def day1_entries():
    """The five day-1 words."""
    return [
        VocabularyEntry("dog", "개"),
        VocabularyEntry("cat", "고양이"),
        VocabularyEntry("bird", "새"),
        VocabularyEntry("fish", "물고기"),
        VocabularyEntry("tree", "나무"),
    ]


@pytest.fixture
def vocabulary(day1_entries):
    """Four groups, 20 entries, 20 distinct meanings."""
    return {
        "day1": list(day1_entries),
        "day2": [
            VocabularyEntry("apple", "사과"),
            VocabularyEntry("water", "물"),
            VocabularyEntry("bread", "빵"),
            VocabularyEntry("milk", "우유"),
            VocabularyEntry("rice", "쌀"),
        ],
        "day3": [
            VocabularyEntry("school", "학교"),
            VocabularyEntry("teacher", "선생님"),
            VocabularyEntry("book", "책"),
            VocabularyEntry("pencil", "연필"),
            VocabularyEntry("desk", "책상"),
        ],
        "day4": [
            VocabularyEntry("happy", "행복한"),
            VocabularyEntry("sad", "슬픈"),
            VocabularyEntry("big", "큰"),
            VocabularyEntry("small", "작은"),
            VocabularyEntry("fast", "빠른"),
        ],
    }


@pytest.fixture
def vocab_json_file(tmp_path, vocabulary):
    """The ``vocabulary`` fixture written out as a JSON vocabulary file."""
    raw = {
        group: [{"word": e.word, "meaning": e.meaning} for e in entries]
        for group, entries in vocabulary.items()
    }
    path = tmp_path / "vocabulary.json"
    path.write_text(json.dumps(raw, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def vocab_md_content():
    """Minimal Markdown vocabulary for parser testing."""
    return """\
# Daily Words

Intro text that is not a table.

## day1

| Word | Meaning | Example |
|------|---------|---------|
| **dog** | 개 | *The dog barks.* |
| **cat** | 고양이 | *The cat sleeps.* |

---

## day2

| Word | Meaning |
|------|---------|
| **apple** | 사과 |
| **water** | 물 |
| **bread** | 빵 |
"""
