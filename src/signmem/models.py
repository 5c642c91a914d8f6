"""Core data models. Un MemoryRecord por palabra. El catálogo es de solo lectura."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class Rating(str, Enum):
    BADLY = "Badly"     # no la recordaba
    PARTLY = "Partly"   # a medias, neutro
    WELL = "Well"       # la recordaba bien


@dataclass
class MemoryRecord:
    """Estado de memoria de una palabra. Score bajo = menos conocida = más prioridad."""

    item_id: str
    score: int = 0
    last_seen: int = 0          # ms desde epoch

    def to_json(self) -> dict[str, int]:
        return {"score": self.score, "lastSeen": self.last_seen}


@dataclass
class VocabularyItem:
    """Entrada del catálogo. Para el motor solo importa item_id."""

    item_id: str
    sign_video: str = ""
    category: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any], category: str = "") -> VocabularyItem:
        rest = {k: v for k, v in data.items() if k not in ("word", "signVideo")}
        return cls(
            item_id=str(data.get("word", "")).strip(),
            sign_video=str(data.get("signVideo", "")),
            category=category,
            extra=rest,
        )


@dataclass
class Shortage:
    """Not enough items to run an activity. A signal, not an error."""

    required: int
    available: int

    @property
    def missing(self) -> int:
        return max(0, self.required - self.available)

    @property
    def message(self) -> str:
        return (
            f"Only {self.available} item(s) available; "
            f"{self.required} are required."
        )


@dataclass
class TranslationChallenge:
    """Una seña, cuatro opciones. Se corrige por identificador, no por posición."""

    item: VocabularyItem
    correct_answer: str
    options: list[str]
    instructions: str = "Translate the sign to the correct word."
    type: str = "translation"


@dataclass
class PairEntry:
    id: str
    item_id: str
    sign_video: str = ""


@dataclass
class MatchingPairsChallenge:
    """Emparejar cada seña con su palabra."""

    entries: list[PairEntry]
    instructions: str = ""
    type: str = "matching_pairs"


Challenge = Union[TranslationChallenge, MatchingPairsChallenge]


@dataclass
class Practice:
    """Resultado de arrancar una práctica (flashcards o quiz)."""

    kind: str
    items: list[VocabularyItem] = field(default_factory=list)
    shortage: Shortage | None = None
    quiz: list[Challenge] | Shortage | None = None

    @property
    def ready(self) -> bool:
        if not self.items:
            return False
        return not isinstance(self.quiz, Shortage)
