"""Memory scoring. Funciones puras: el engine se encarga de leer y escribir."""

from __future__ import annotations

import time

from signmem.models import MemoryRecord, Rating

BADLY_PENALTY = 2
WELL_BONUS = 1


def now_ms() -> int:
    return int(time.time() * 1000)


def coerce_rating(rating: Rating | str) -> Rating:
    """Acepta Rating o su valor ("Badly", "Partly", "Well"). ValueError si no."""
    if isinstance(rating, Rating):
        return rating
    return Rating(rating)


def next_score(score: int, rating: Rating | str) -> int:
    """Nuevo score tras una valoración.

    Badly  -> max(0, s - 2)
    Partly -> s
    Well   -> s + 1
    """
    rating = coerce_rating(rating)
    if rating is Rating.BADLY:
        return max(0, score - BADLY_PENALTY)
    if rating is Rating.WELL:
        return score + WELL_BONUS
    return score


def effective_record(records: dict[str, MemoryRecord], item_id: str) -> MemoryRecord:
    """Registro de una palabra; las desconocidas valen score=0, last_seen=0."""
    rec = records.get(item_id)
    if rec is None:
        return MemoryRecord(item_id=item_id)
    return rec


def effective_score(records: dict[str, MemoryRecord], item_id: str) -> int:
    return effective_record(records, item_id).score


def apply_rating(records: dict[str, MemoryRecord], item_id: str,
                 rating: Rating | str, now: int) -> MemoryRecord:
    """Replace the record for item_id in place and return the new one."""
    current = effective_score(records, item_id)
    rec = MemoryRecord(item_id, next_score(current, rating), now)
    records[item_id] = rec
    return rec


def apply_first_exposure(records: dict[str, MemoryRecord], item_id: str,
                         now: int) -> MemoryRecord | None:
    """Create a score-0 record unless one exists. None means nothing changed."""
    if item_id in records:
        return None
    rec = MemoryRecord(item_id, 0, now)
    records[item_id] = rec
    return rec
