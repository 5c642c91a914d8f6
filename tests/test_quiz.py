"""Tests for quiz generation."""

import random

import pytest

from signmem.models import (
    MatchingPairsChallenge, Shortage, TranslationChallenge, VocabularyItem,
)
from signmem.quiz import QUIZ_SIZE, check_match, check_translation, covered_ids, generate_quiz


@pytest.fixture
def pool():
    return [VocabularyItem(item_id=w, sign_video=f"{w}.mp4")
            for w in ["hello", "thanks", "please", "sorry", "yes", "no", "friend"]]


class TestPrecondition:
    def test_six_items_is_a_shortage(self, pool):
        result = generate_quiz(pool[:6])
        assert isinstance(result, Shortage)
        assert result.required == QUIZ_SIZE
        assert result.available == 6
        assert result.missing == 1
        assert "7" in result.message

    def test_empty_pool(self):
        result = generate_quiz([])
        assert isinstance(result, Shortage)
        assert result.available == 0


    def test_repeated_ids_count_once(self):
        pool = [VocabularyItem(item_id=w) for w in ["a", "a", "b", "c", "d", "e", "f"]]
        result = generate_quiz(pool)
        assert isinstance(result, Shortage)
        assert result.available == 6

    def test_repeated_ids_with_enough_distinct(self, pool):
        doubled = [pool[0]] + pool
        for ch in generate_quiz(doubled, rng=random.Random(9)):
            if isinstance(ch, TranslationChallenge):
                assert len(set(ch.options)) == 4
        assert covered_ids(generate_quiz(doubled)) == {w.item_id for w in pool}


class TestGeneration:
    def test_six_challenges_cover_everything(self, pool):
        challenges = generate_quiz(pool, rng=random.Random(1))
        assert len(challenges) == 6
        assert covered_ids(challenges) == {w.item_id for w in pool}

    def test_alternating_shape(self, pool):
        challenges = generate_quiz(pool, rng=random.Random(2))
        kinds = [c.type for c in challenges]
        assert kinds == ["translation", "matching_pairs"] * 3

    def test_option_counts(self, pool):
        for ch in generate_quiz(pool, rng=random.Random(3)):
            if isinstance(ch, TranslationChallenge):
                assert len(ch.options) == 4
                assert len(set(ch.options)) == 4
                assert ch.correct_answer in ch.options
                assert ch.item.item_id == ch.correct_answer
            else:
                assert isinstance(ch, MatchingPairsChallenge)
                assert len(ch.entries) == 2

    def test_targets_fixed_by_position(self, pool):
        challenges = generate_quiz(pool, rng=random.Random(4))
        targets = [c.correct_answer for c in challenges if c.type == "translation"]
        assert targets == ["hello", "sorry", "friend"]
        pairs = [{e.item_id for e in c.entries} for c in challenges
                 if c.type == "matching_pairs"]
        assert pairs == [{"thanks", "please"}, {"yes", "no"}, {"hello", "friend"}]

    def test_decoys_come_from_pool(self, pool):
        first = generate_quiz(pool, rng=random.Random(5))[0]
        assert sorted(first.options) == sorted(["hello", "thanks", "please", "sorry"])

    def test_larger_pool_uses_first_seven(self, pool):
        extra = pool + [VocabularyItem(item_id="water")]
        assert "water" not in covered_ids(generate_quiz(extra))

    def test_every_item_covered_by_its_own_challenge(self, pool):
        challenges = generate_quiz(pool)
        own = set()
        for ch in challenges:
            if isinstance(ch, TranslationChallenge):
                own.add(ch.correct_answer)
            else:
                own.update(e.item_id for e in ch.entries)
        assert own == {w.item_id for w in pool}

    def test_pair_entries_keep_media(self, pool):
        pair = generate_quiz(pool)[1]
        for entry in pair.entries:
            assert entry.sign_video == f"{entry.item_id}.mp4"


class TestChecks:
    def test_translation_by_identifier(self, pool):
        ch = generate_quiz(pool, rng=random.Random(6))[0]
        assert check_translation(ch, "hello")
        wrong = [o for o in ch.options if o != "hello"]
        assert not any(check_translation(ch, o) for o in wrong)

    def test_translation_ignores_position(self, pool):
        a = generate_quiz(pool, rng=random.Random(7))[0]
        b = generate_quiz(pool, rng=random.Random(8))[0]
        assert check_translation(a, "hello") and check_translation(b, "hello")

    def test_match(self, pool):
        ch = generate_quiz(pool)[1]
        e1, e2 = ch.entries
        assert check_match(ch, e1.id, e1.id)
        assert not check_match(ch, e1.id, e2.id)
        assert not check_match(ch, "99", "99")
