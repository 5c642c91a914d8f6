"""Catalog payloads -> VocabularyItem lists."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from signmem.models import VocabularyItem

logger = logging.getLogger(__name__)


def _items(entries: Iterable[Any], category: str = "") -> Iterable[VocabularyItem]:
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        item = VocabularyItem.from_dict(entry, category=category)
        if item.item_id:
            yield item


def items_from_payload(payload: list[dict[str, Any]] | dict[str, Any]) -> list[VocabularyItem]:
    """Accepts a flat word list or a `{category: [word, ...]}` dictionary.

    Entries without a usable `word` are skipped; the first occurrence of a
    word wins.
    """
    if isinstance(payload, list):
        found = list(_items(payload))
    elif isinstance(payload, dict):
        found = []
        for category, entries in payload.items():
            if isinstance(entries, list):
                found.extend(_items(entries, category=str(category)))
    else:
        raise TypeError(f"unsupported catalog payload: {type(payload).__name__}")

    unique: dict[str, VocabularyItem] = {}
    for item in found:
        if item.item_id in unique:
            logger.debug("Duplicate catalog word %r ignored", item.item_id)
            continue
        unique[item.item_id] = item
    return list(unique.values())
