#!/usr/bin/env python3
"""
signmem demo: a learner's first week.

No server. No UI. Just run it.
"""

import asyncio
import os
import tempfile

from signmem import Rating, Recall, TranslationChallenge, VocabularyItem, check_translation

CATALOG = [
    VocabularyItem(item_id=w, sign_video=f"videos/{w.lower()}.mp4")
    for w in ["Hello", "Thank you", "Please", "Sorry", "Yes", "No",
              "Friend", "Family", "Water", "Food"]
]

LESSONS = [
    {"type": "translation", "data": {"correctAnswer": "Hello"}},
    {"type": "matching_pairs", "data": {"items": [
        {"translation": "Yes", "id": "1"}, {"translation": "No", "id": "2"}]}},
    {"type": "sequencing", "data": [{"word": "Please"}, {"word": "Thank you"}, "Sorry"]},
    {"type": "conversation", "data": [{"englishSentence": "Friend"},
                                      {"englishSentence": "Family"}]},
]


def header(text):
    print(f"\n{'='*64}")
    print(f"  {text}")
    print(f"{'='*64}\n")


async def show(recall, label=""):
    records = await recall.records()
    if label:
        print(f"  [{label}] {len(records)} words:")
    for rec in sorted(records.values(), key=lambda r: (r.score, r.last_seen)):
        bar = "█" * rec.score + "░" * max(0, 10 - rec.score)
        print(f"    {bar} {rec.score:>2} | {rec.item_id}")
    print()


async def main():
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    async with Recall(db_path) as recall:
        header("DAY 1: Lessons")
        for lesson in LESSONS:
            words = await recall.complete_lesson(lesson)
            print(f"  {lesson['type']:<16} -> {', '.join(words)}")
        print()
        await show(recall, "After lessons, everything at 0")

        header("DAY 2: Flashcards")
        practice = await recall.start_practice("flashcards", CATALOG)
        if practice.shortage:
            print(f"  Note: {practice.shortage.message}\n")
        ratings = [Rating.WELL, Rating.BADLY, Rating.PARTLY]
        for n, item in enumerate(practice.items):
            rating = ratings[n % len(ratings)]
            await recall.rate_item(item.item_id, rating)
            print(f"  {item.item_id:<10} rated {rating.value}")
        print()
        await show(recall, "Weak words float to the top")

        header("DAY 3: Quiz")
        practice = await recall.start_practice("quiz", CATALOG)
        if not practice.ready:
            print(f"  Cannot start quiz: {practice.shortage.message}")
        else:
            for ch in practice.quiz:
                if isinstance(ch, TranslationChallenge):
                    ok = check_translation(ch, ch.correct_answer)
                    print(f"  {ch.instructions:<42} {ch.options} -> {ok}")
                else:
                    print(f"  {ch.instructions}")

    os.unlink(db_path)


if __name__ == "__main__":
    asyncio.run(main())
