"""Session selection. Least-known first, then longest-unseen first."""

from __future__ import annotations

from typing import Iterable

from signmem.models import MemoryRecord, VocabularyItem
from signmem.scoring import effective_record


def rank(candidates: list[VocabularyItem],
         records: dict[str, MemoryRecord]) -> list[VocabularyItem]:
    """Total order: score asc, last_seen asc, then input order.

    Items without a record rank as score=0, last_seen=0.
    """
    import numpy as np

    if not candidates:
        return []
    effective = [effective_record(records, item.item_id) for item in candidates]
    bounds = np.iinfo(np.int64)
    if any(not bounds.min <= v <= bounds.max
           for r in effective for v in (r.score, r.last_seen)):
        # scores are unbounded; Python ints sort where int64 cannot hold them
        order = sorted(range(len(effective)),
                       key=lambda i: (effective[i].score, effective[i].last_seen))
        return [candidates[i] for i in order]
    scores = np.array([r.score for r in effective], dtype=np.int64)
    last_seen = np.array([r.last_seen for r in effective], dtype=np.int64)
    # lexsort: last key is primary; stable on ties
    order = np.lexsort((last_seen, scores))
    return [candidates[i] for i in order]


def select_session(candidates: list[VocabularyItem], count: int,
                   records: dict[str, MemoryRecord]) -> list[VocabularyItem]:
    """Elige `count` palabras para una sesión.

    Si hay `count` o menos candidatas se devuelven todas, en su orden
    original y sin ordenar. Si no, las `count` primeras de rank().
    """
    count = max(0, count)
    if not candidates:
        return []
    if len(candidates) <= count:
        return list(candidates)
    return rank(candidates, records)[:count]


def learned_pool(catalog: Iterable[VocabularyItem],
                 learned_ids: Iterable[str]) -> list[VocabularyItem]:
    """Catalog items the learner has already met, in catalog order."""
    learned = set(learned_ids)
    return [item for item in catalog if item.item_id in learned]
