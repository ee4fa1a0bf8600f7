"""Load the group -> entries vocabulary table from JSON or Markdown.

JSON layout:
  {"day1": [{"word": "dog", "meaning": "개"}, ...], "day2": [...]}

Markdown layout:
  ## day1
  | Word | Meaning |
  |------|---------|
  | **dog** | 개 |

Group headers are ``## <label>``; rows need a bold word, further columns
(examples, notes) are ignored.
"""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from vocab_quiz.models import VocabularyEntry, VocabularyTable

_log = logging.getLogger("vocab_quiz.vocab")


def parse_markdown_vocabulary(path: Path) -> VocabularyTable:
    text = path.read_text(encoding="utf-8")
    table: VocabularyTable = {}
    current_group: str | None = None

    for line in text.splitlines():
        m = re.match(r"^## (.+)", line)
        if m:
            current_group = m.group(1).strip()
            table.setdefault(current_group, [])
            continue

        if current_group is None or not line.startswith("|"):
            continue

        # | **word** | meaning | ...
        m = re.match(r"\|\s*\*\*(.+?)\*\*\s*\|\s*(.+?)\s*\|", line)
        if m:
            table[current_group].append(VocabularyEntry(
                word=m.group(1).strip(),
                meaning=m.group(2).strip(),
            ))

    return table


def parse_json_vocabulary(path: Path) -> VocabularyTable:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"{path.name}: expected an object of groups, got {type(raw).__name__}")

    table: VocabularyTable = {}
    for group, rows in raw.items():
        if not isinstance(rows, list):
            raise ValueError(f"{path.name}: group '{group}' must be a list")
        entries = []
        for i, row in enumerate(rows):
            try:
                entries.append(VocabularyEntry(word=str(row["word"]), meaning=str(row["meaning"])))
            except (KeyError, TypeError) as e:
                raise ValueError(f"{path.name}: {group}[{i}] is not a word/meaning pair") from e
        table[str(group)] = entries
    return table


def load_vocabulary(path: Path) -> VocabularyTable:
    """Load a vocabulary file, picking the format from its suffix."""
    if path.suffix.lower() in (".md", ".markdown"):
        table = parse_markdown_vocabulary(path)
    else:
        table = parse_json_vocabulary(path)
    _log.info(
        "Loaded %d groups, %d entries from %s",
        len(table), sum(len(v) for v in table.values()), path.name,
    )
    return table
