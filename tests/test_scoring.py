"""Tests for the pure scoring functions."""

import pytest

from signmem.models import MemoryRecord, Rating
from signmem.scoring import (
    apply_first_exposure, apply_rating, coerce_rating, effective_record,
    effective_score, next_score,
)


class TestNextScore:
    @pytest.mark.parametrize("start", [0, 1, 2, 5, 40])
    def test_well_promotes(self, start):
        assert next_score(start, Rating.WELL) == start + 1

    @pytest.mark.parametrize("start", [0, 1, 2, 5, 40])
    def test_partly_is_neutral(self, start):
        assert next_score(start, Rating.PARTLY) == start

    @pytest.mark.parametrize("start,expected", [(0, 0), (1, 0), (2, 0), (3, 1), (10, 8)])
    def test_badly_demotes_with_floor(self, start, expected):
        assert next_score(start, Rating.BADLY) == expected

    def test_badly_never_negative(self):
        score = 0
        for _ in range(20):
            score = next_score(score, Rating.BADLY)
            assert score == 0

    def test_accepts_string_values(self):
        assert next_score(4, "Well") == 5
        assert next_score(4, "Badly") == 2

    def test_rejects_unknown_rating(self):
        with pytest.raises(ValueError):
            coerce_rating("Great")


class TestEffectiveRecord:
    def test_unknown_defaults_to_zero(self):
        rec = effective_record({}, "hello")
        assert rec == MemoryRecord("hello", 0, 0)
        assert effective_score({}, "hello") == 0

    def test_known_record(self):
        records = {"hello": MemoryRecord("hello", 3, 100)}
        assert effective_score(records, "hello") == 3


class TestApply:
    def test_apply_rating_replaces_record(self):
        records = {"hello": MemoryRecord("hello", 3, 100)}
        rec = apply_rating(records, "hello", Rating.BADLY, now=500)
        assert rec == MemoryRecord("hello", 1, 500)
        assert records["hello"] is rec

    def test_apply_rating_unknown_item(self):
        records = {}
        apply_rating(records, "new", Rating.WELL, now=10)
        assert records["new"] == MemoryRecord("new", 1, 10)

    def test_first_exposure_creates(self):
        records = {}
        rec = apply_first_exposure(records, "hello", now=42)
        assert rec == MemoryRecord("hello", 0, 42)

    def test_first_exposure_keeps_existing(self):
        records = {"hello": MemoryRecord("hello", 7, 1)}
        assert apply_first_exposure(records, "hello", now=99) is None
        assert records["hello"] == MemoryRecord("hello", 7, 1)
