"""Lesson payloads as a tagged union keyed by `type`.

Each variant knows which words it teaches. Completing a lesson marks
those words as seen for the first time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Union

logger = logging.getLogger(__name__)


@dataclass
class MatchingPairsLesson:
    translations: list[str] = field(default_factory=list)
    type: str = "matching_pairs"


@dataclass
class TranslationLesson:
    correct_answer: str = ""
    type: str = "translation"


@dataclass
class WordListLesson:
    """sequencing / fill_in_the_blank: lista de palabras o una sola."""

    words: list[str] = field(default_factory=list)
    type: str = "sequencing"


@dataclass
class ConversationLesson:
    sentences: list[str] = field(default_factory=list)
    type: str = "conversation"


@dataclass
class UnknownLesson:
    words: list[str] = field(default_factory=list)
    type: str = ""


Lesson = Union[MatchingPairsLesson, TranslationLesson, WordListLesson,
               ConversationLesson, UnknownLesson]


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _entry_word(entry: Any, *keys: str) -> str | None:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, dict):
        for key in keys:
            value = _str_or_none(entry.get(key))
            if value is not None:
                return value
    return None


def _list_words(data: Any, *keys: str) -> list[str]:
    if isinstance(data, list):
        words = [_entry_word(e, *keys) for e in data]
        return [w for w in words if w is not None]
    if isinstance(data, dict):
        word = _str_or_none(data.get("word"))
        return [word] if word is not None else []
    return []


def parse_lesson(raw: dict[str, Any]) -> Lesson:
    """Build the lesson variant for a raw `{"type": ..., "data": ...}` payload."""
    kind = str(raw.get("type", ""))
    data = raw.get("data")

    if kind == "matching_pairs":
        items = data.get("items") if isinstance(data, dict) else None
        translations = []
        if isinstance(items, list):
            translations = [t for t in (_entry_word(i, "translation") for i in items
                                        if isinstance(i, dict)) if t is not None]
        return MatchingPairsLesson(translations=translations)

    if kind == "translation":
        answer = data.get("correctAnswer") if isinstance(data, dict) else None
        return TranslationLesson(correct_answer=_str_or_none(answer) or "")

    if kind in ("sequencing", "fill_in_the_blank"):
        return WordListLesson(words=_list_words(data, "word"), type=kind)

    if kind == "conversation":
        return ConversationLesson(sentences=_list_words(data, "englishSentence", "word"))

    logger.warning("Unknown lesson type %r; falling back to generic extraction", kind)
    words = _list_words(data, "word") if isinstance(data, list) else []
    return UnknownLesson(words=words, type=kind)


def _raw_ids(lesson: Lesson) -> list[str]:
    if isinstance(lesson, MatchingPairsLesson):
        return lesson.translations
    if isinstance(lesson, TranslationLesson):
        return [lesson.correct_answer]
    if isinstance(lesson, ConversationLesson):
        return lesson.sentences
    return lesson.words


def extract_item_ids(lesson: Lesson | dict[str, Any]) -> list[str]:
    """Unique, trimmed, non-empty identifiers in first-seen order."""
    if isinstance(lesson, dict):
        lesson = parse_lesson(lesson)
    seen: dict[str, None] = {}
    for word in _raw_ids(lesson):
        word = word.strip()
        if word:
            seen.setdefault(word, None)
    return list(seen)
