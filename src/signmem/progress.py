"""Lesson progress per module. Mismo KV que las puntuaciones, otra clave."""

from __future__ import annotations

import json
import logging
from typing import Any

from signmem.storage import KeyValueStore

logger = logging.getLogger(__name__)

PROGRESS_KEY = "userProgress"


class ProgressTracker:
    """`{module_key: {"lessonsCompleted": n, "totalLessons": m}}` in one blob."""

    def __init__(self, kv: KeyValueStore | None, key: str = PROGRESS_KEY) -> None:
        self.kv = kv
        self.key = key

    async def load(self) -> dict[str, dict[str, Any]]:
        if self.kv is None:
            logger.warning("No key-value store provisioned; progress is empty.")
            return {}
        try:
            raw = await self.kv.get(self.key)
            data = json.loads(raw) if raw else {}
        except Exception:
            logger.exception("Failed to load progress from storage")
            return {}
        if not isinstance(data, dict):
            logger.error("Progress blob is not an object; ignoring it")
            return {}
        return data

    async def save(self, progress: dict[str, dict[str, Any]]) -> bool:
        if self.kv is None:
            logger.warning("No key-value store provisioned; progress not saved.")
            return False
        try:
            await self.kv.set(self.key, json.dumps(progress))
        except Exception:
            logger.exception("Failed to save progress to storage")
            return False
        return True

    async def record_lesson(self, module_key: str, lessons_completed: int,
                            total_lessons: int) -> None:
        progress = await self.load()
        progress[module_key] = {
            "lessonsCompleted": lessons_completed,
            "totalLessons": total_lessons,
        }
        if await self.save(progress):
            logger.info("Progress for module %s saved: %d/%d",
                        module_key, lessons_completed, total_lessons)

    async def is_complete(self, module_key: str) -> bool:
        entry = (await self.load()).get(module_key)
        if not isinstance(entry, dict):
            return False
        total = entry.get("totalLessons")
        if not isinstance(total, int):
            return False
        done = entry.get("lessonsCompleted", 0)
        if not isinstance(done, int):
            return False
        return done >= total

    async def reset_for_retake(self, module_key: str, total_lessons: int) -> bool:
        """Reset a completed module to zero. Unfinished modules are left alone."""
        if not await self.is_complete(module_key):
            return False
        progress = await self.load()
        progress[module_key] = {"lessonsCompleted": 0, "totalLessons": total_lessons}
        if not await self.save(progress):
            return False
        logger.info("Progress for module %s has been reset for retake.", module_key)
        return True
