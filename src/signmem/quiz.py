"""Quiz generation: 3 translation challenges + 3 matching pairs from 7 words."""

from __future__ import annotations

import random

from signmem.models import (
    Challenge, MatchingPairsChallenge, PairEntry, Shortage,
    TranslationChallenge, VocabularyItem,
)

QUIZ_SIZE = 7

# (target, decoys) por posición en el pool
_TRANSLATIONS = [
    (0, (1, 2, 3), "Translate the sign to the correct word."),
    (3, (4, 5, 6), "What is being signed?"),
    (6, (0, 1, 4), "Guess the correct translation."),
]
# 7 es impar: w0 y w6 aparecen dos veces
_PAIRS = [(1, 2), (4, 5), (0, 6)]


def _shuffled(values: list, rng: random.Random) -> list:
    out = list(values)
    rng.shuffle(out)
    return out


def _translation(words: list[VocabularyItem], target: int,
                 decoys: tuple[int, ...], instructions: str,
                 rng: random.Random) -> TranslationChallenge:
    item = words[target]
    options = [item.item_id] + [words[i].item_id for i in decoys]
    return TranslationChallenge(
        item=item,
        correct_answer=item.item_id,
        options=_shuffled(options, rng),
        instructions=instructions,
    )


def _pair(words: list[VocabularyItem], pair: tuple[int, int], first_id: int,
          rng: random.Random) -> MatchingPairsChallenge:
    a, b = words[pair[0]], words[pair[1]]
    entries = [
        PairEntry(id=str(first_id + n), item_id=w.item_id, sign_video=w.sign_video)
        for n, w in enumerate((a, b))
    ]
    return MatchingPairsChallenge(
        entries=_shuffled(entries, rng),
        instructions=f"Tap the matching pair ({a.item_id} & {b.item_id})",
    )


def generate_quiz(pool: list[VocabularyItem],
                  rng: random.Random | None = None) -> list[Challenge] | Shortage:
    """Build six challenges from the first QUIZ_SIZE items of the pool.

    Returns a Shortage instead when the pool is too small. Partitioning is
    fixed by position; only the option order within a challenge is random.
    Repeated identifiers count once (first occurrence wins).
    """
    unique: dict[str, VocabularyItem] = {}
    for item in pool:
        unique.setdefault(item.item_id, item)
    if len(unique) < QUIZ_SIZE:
        return Shortage(required=QUIZ_SIZE, available=len(unique))
    rng = rng or random.Random()
    words = list(unique.values())[:QUIZ_SIZE]

    challenges: list[Challenge] = []
    for n, (target, decoys, instructions) in enumerate(_TRANSLATIONS):
        challenges.append(_translation(words, target, decoys, instructions, rng))
        challenges.append(_pair(words, _PAIRS[n], 2 * n + 1, rng))
    return challenges


def check_translation(challenge: TranslationChallenge, answer: str) -> bool:
    return answer == challenge.correct_answer


def check_match(challenge: MatchingPairsChallenge, sign_id: str, text_id: str) -> bool:
    """Una seña y una palabra casan si son la misma entrada."""
    ids = {e.id for e in challenge.entries}
    return sign_id in ids and sign_id == text_id


def covered_ids(challenges: list[Challenge]) -> set[str]:
    seen: set[str] = set()
    for ch in challenges:
        if isinstance(ch, TranslationChallenge):
            seen.update(ch.options)
        else:
            seen.update(e.item_id for e in ch.entries)
    return seen
