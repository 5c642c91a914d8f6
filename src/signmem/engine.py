"""Recall: the core class. Scores, sessions and quizzes over one key-value store."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import random
from pathlib import Path
from typing import Any, Callable

from signmem.lessons import Lesson, extract_item_ids
from signmem.models import MemoryRecord, Practice, Rating, Shortage, VocabularyItem
from signmem.progress import ProgressTracker
from signmem.quiz import QUIZ_SIZE, generate_quiz
from signmem.scoring import (
    apply_first_exposure, apply_rating, coerce_rating, effective_record, now_ms,
)
from signmem.session import learned_pool, select_session
from signmem.storage import KeyValueStore, ScoreStore, SQLiteKV, StorageError

logger = logging.getLogger(__name__)

FLASHCARD_COUNT = 10

Clock = Callable[[], int]


class Recall:
    """La memoria del alumno. Un KV store = un alumno.

    API:
        await recall.initialize_item(id)    : primera exposición, score 0
        await recall.rate_item(id, rating)  : Badly / Partly / Well
        await recall.select_session(items, n): las n menos conocidas
        await recall.complete_lesson(lesson): registra las palabras de una lección
        await recall.start_practice(kind, catalog): flashcards o quiz

    Nada de esto lanza por fallos de almacenamiento: se registra en el log
    y la operación queda sin efecto.
    """

    def __init__(self, kv: KeyValueStore | str | Path | None = None,
                 clock: Clock = now_ms,
                 serialize_writes: bool = True,
                 rng: random.Random | None = None) -> None:
        if isinstance(kv, (str, Path)):
            kv = SQLiteKV(kv)
        self._kv = kv
        self._scores = ScoreStore(kv)
        self._clock = clock
        self._rng = rng or random.Random()
        self._serialize_writes = serialize_writes
        self._write_lock: tuple[asyncio.AbstractEventLoop, asyncio.Lock] | None = None
        self.progress = ProgressTracker(kv)

    # ── helpers ────────────────────────────────────────────────────────

    @staticmethod
    def _clean_id(item_id: Any, operation: str) -> str | None:
        if not isinstance(item_id, str) or not item_id.strip():
            logger.warning("Invalid item id %r provided to %s", item_id, operation)
            return None
        return item_id.strip()

    def _writing(self) -> contextlib.AbstractAsyncContextManager:
        """Single-writer lock for the running loop; rebuilt when the loop changes."""
        if not self._serialize_writes:
            return contextlib.nullcontext()
        loop = asyncio.get_running_loop()
        if self._write_lock is None or self._write_lock[0] is not loop:
            self._write_lock = (loop, asyncio.Lock())
        return self._write_lock[1]

    async def _modify(self, operation: str,
                      change: Callable[[dict[str, MemoryRecord]], MemoryRecord | None]
                      ) -> MemoryRecord | None:
        """Read the full mapping, apply `change`, write it back.

        A failed read aborts before writing so existing scores are never
        replaced by an empty mapping.
        """
        if not self._scores.available:
            logger.warning("No key-value store provisioned; %s skipped.", operation)
            return None
        async with self._writing():
            try:
                records = await self._scores.read()
                rec = change(records)
                if rec is None:
                    return None
                await self._scores.write(records)
            except StorageError:
                logger.exception("Failed to %s", operation)
                return None
        return rec

    # ── scoring ────────────────────────────────────────────────────────

    async def initialize_item(self, item_id: str) -> None:
        """Primera exposición. Idempotente: nunca pisa un score existente."""
        clean = self._clean_id(item_id, "initialize_item")
        if clean is None:
            return
        rec = await self._modify(
            "initialize item",
            lambda records: apply_first_exposure(records, clean, self._clock()),
        )
        if rec is None:
            logger.debug("Item %r already in memory or not saved", clean)
        else:
            logger.debug("Item %r added to memory", clean)

    async def rate_item(self, item_id: str, rating: Rating | str) -> None:
        """Aplica una valoración y guarda el mapa completo."""
        clean = self._clean_id(item_id, "rate_item")
        if clean is None:
            return
        try:
            rating = coerce_rating(rating)
        except ValueError:
            logger.warning("Invalid rating %r for item %r", rating, clean)
            return
        rec = await self._modify(
            "save item rating",
            lambda records: apply_rating(records, clean, rating, self._clock()),
        )
        if rec is not None:
            logger.debug("Item %r rated %s -> score %d", clean, rating.value, rec.score)

    # ── reads ──────────────────────────────────────────────────────────

    async def records(self) -> dict[str, MemoryRecord]:
        return await self._scores.load()

    async def record(self, item_id: str) -> MemoryRecord:
        """Registro efectivo: score 0 y last_seen 0 si no existe."""
        clean = self._clean_id(item_id, "record")
        if clean is None:
            return MemoryRecord(item_id="")
        return effective_record(await self._scores.load(), clean)

    async def learned_item_ids(self) -> list[str]:
        return list(await self._scores.load())

    # ── sessions ───────────────────────────────────────────────────────

    async def select_session(self, candidates: list[VocabularyItem],
                             count: int) -> list[VocabularyItem]:
        """Las `count` candidatas menos conocidas. No modifica el store."""
        if not candidates:
            return []
        if len(candidates) <= count:
            return list(candidates)
        return select_session(candidates, count, await self._scores.load())

    async def complete_lesson(self, lesson: Lesson | dict[str, Any]) -> list[str]:
        """Marca como vistas las palabras que enseña una lección."""
        item_ids = extract_item_ids(lesson)
        for item_id in item_ids:
            await self.initialize_item(item_id)
        logger.info("Lesson completed; %d item(s) registered", len(item_ids))
        return item_ids

    async def start_practice(self, kind: str,
                             catalog: list[VocabularyItem]) -> Practice:
        """Arranca flashcards o quiz con las palabras ya aprendidas.

        Flashcards siguen adelante con menos palabras (avisando con
        `shortage`); un quiz necesita QUIZ_SIZE y si no, `quiz` es un Shortage.
        """
        if kind == "flashcards":
            required = FLASHCARD_COUNT
        elif kind == "quiz":
            required = QUIZ_SIZE
        else:
            raise ValueError(f"unknown practice kind: {kind!r}")

        pool = learned_pool(catalog, await self.learned_item_ids())
        items = await self.select_session(pool, required)
        practice = Practice(kind=kind, items=items)
        if len(items) < required:
            practice.shortage = Shortage(required=required, available=len(items))
            logger.info("Not enough items for %s: %s", kind, practice.shortage.message)
        if kind == "quiz":
            practice.quiz = generate_quiz(items, rng=self._rng)
        return practice

    # ── utilidades ─────────────────────────────────────────────────────

    def close(self) -> None:
        close = getattr(self._kv, "close", None)
        if close is not None:
            close()

    async def __aenter__(self) -> Recall:
        return self

    async def __aexit__(self, *args) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Recall(kv={type(self._kv).__name__})"
