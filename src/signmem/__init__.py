"""signmem: spaced-repetition memory scores + session selection for vocabulary learning."""

from signmem.models import (
    MatchingPairsChallenge, MemoryRecord, PairEntry, Practice, Rating,
    Shortage, TranslationChallenge, VocabularyItem,
)
from signmem.engine import FLASHCARD_COUNT, Recall
from signmem.quiz import QUIZ_SIZE, check_match, check_translation, generate_quiz
from signmem.session import select_session
from signmem.storage import InMemoryKV, KeyValueStore, SQLiteKV, SignmemError, StorageError

__version__ = "0.1.0"
__all__ = [
    "Recall", "MemoryRecord", "VocabularyItem", "Rating", "Shortage", "Practice",
    "TranslationChallenge", "MatchingPairsChallenge", "PairEntry",
    "generate_quiz", "check_translation", "check_match", "select_session",
    "KeyValueStore", "InMemoryKV", "SQLiteKV", "SignmemError", "StorageError",
    "FLASHCARD_COUNT", "QUIZ_SIZE",
]
