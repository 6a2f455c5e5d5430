"""
Tests for leaderboard ranking and rendering.
"""

from datetime import datetime

import pytest

from emoji_leaderboard.leaderboard.engine import (
    effective_top_n,
    format_leaderboard,
    rank,
)
from emoji_leaderboard.models import Emoji


def uploads(counts: dict, created: int = 1_000) -> list[Emoji]:
    """Build emoji records: ``counts`` maps uploader -> number of uploads."""
    records = []
    for user, count in counts.items():
        for i in range(count):
            records.append(Emoji(name=f"{user.lower()}{i}", created=created, user_display_name=user))
    return records


class TestEffectiveTopN:
    """Tests for top-N resolution."""

    def test_none_means_all(self):
        assert effective_top_n(None, 5) is None

    def test_limit_within_field(self):
        assert effective_top_n(3, 5) == 3

    def test_limit_equal_to_field_kept(self):
        assert effective_top_n(5, 5) == 5

    def test_limit_beyond_field_collapses(self):
        assert effective_top_n(10, 3) is None

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            effective_top_n(-1, 3)


class TestRank:
    """Tests for the rank function."""

    def test_orders_by_count_descending(self):
        entries, _ = rank(uploads({"A": 5, "B": 9, "C": 2}), top_n=2)

        assert [(e.contributor, e.count) for e in entries] == [("B", 9), ("A", 5)]

    def test_ranks_are_one_based(self):
        entries, _ = rank(uploads({"A": 1, "B": 2}))

        assert [e.rank for e in entries] == [1, 2]

    def test_top_n_larger_than_field_shows_all(self):
        entries, _ = rank(uploads({"A": 1, "B": 2, "C": 3}), top_n=10)

        assert len(entries) == 3

    def test_top_zero_shows_nobody(self):
        entries, items = rank(uploads({"A": 1}), top_n=0)

        assert entries == []
        assert items == []

    def test_ties_keep_first_appearance(self):
        records = [
            Emoji(name="x1", created=1, user_display_name="Xavier"),
            Emoji(name="y1", created=1, user_display_name="Yara"),
            Emoji(name="z1", created=1, user_display_name="Zed"),
            Emoji(name="z2", created=1, user_display_name="Zed"),
            Emoji(name="y2", created=1, user_display_name="Yara"),
            Emoji(name="x2", created=1, user_display_name="Xavier"),
        ]

        entries, _ = rank(records)

        assert [e.contributor for e in entries] == ["Xavier", "Yara", "Zed"]

    def test_time_filter_inclusive(self):
        records = [
            Emoji(name="old", created=100, user_display_name="A"),
            Emoji(name="mid", created=200, user_display_name="A"),
            Emoji(name="new", created=300, user_display_name="B"),
        ]

        entries, items = rank(records, since=200)

        assert sum(e.count for e in entries) == 2
        assert "old" not in items

    def test_since_zero_is_all_time(self):
        entries, _ = rank(uploads({"A": 3}, created=0))

        assert entries[0].count == 3

    def test_exact_name_grouping(self):
        records = [
            Emoji(name="a", created=1, user_display_name="alice"),
            Emoji(name="b", created=1, user_display_name="Alice"),
        ]

        entries, _ = rank(records)

        assert len(entries) == 2

    def test_items_follow_ranking_order(self):
        records = [
            Emoji(name="a1", created=1, user_display_name="A"),
            Emoji(name="b1", created=1, user_display_name="B"),
            Emoji(name="b2", created=1, user_display_name="B"),
            Emoji(name="c1", created=1, user_display_name="C"),
        ]

        entries, items = rank(records, top_n=2)

        assert [e.contributor for e in entries] == ["B", "A"]
        assert items == ["b1", "b2", "a1"]
        assert entries[0].items == ("b1", "b2")

    def test_items_exclude_filtered_records(self):
        records = [
            Emoji(name="early", created=10, user_display_name="A"),
            Emoji(name="late", created=50, user_display_name="A"),
        ]

        _, items = rank(records, since=20)

        assert items == ["late"]

    def test_empty_input(self):
        assert rank([]) == ([], [])

    def test_nothing_after_cutoff(self):
        assert rank(uploads({"A": 2}, created=5), since=10) == ([], [])

    def test_input_not_mutated(self):
        records = uploads({"A": 2, "B": 1})
        snapshot = list(records)

        rank(records, top_n=1, since=0)

        assert records == snapshot


class TestFormatLeaderboard:
    """Tests for plain-text rendering."""

    def test_renders_lines_and_items(self):
        entries, items = rank(uploads({"A": 1, "B": 2}))

        text = format_leaderboard(entries, items, since=0)
        lines = text.splitlines()

        since_label = datetime.fromtimestamp(0).strftime("%Y-%m-%d %H:%M:%S")
        assert lines[0] == f"Showing all emoji uploaders since {since_label}:"
        assert "1) @B: 2" in lines
        assert "2) @A: 1" in lines
        assert lines[-1] == ":b0: :b1: :a0:"

    def test_header_mentions_top_n(self):
        entries, items = rank(uploads({"A": 1, "B": 2, "C": 3}), top_n=2)

        text = format_leaderboard(entries, items, top_n=2)

        assert text.startswith("Showing the top 2 emoji uploaders since ")

    def test_header_says_all_when_limit_collapses(self):
        entries, items = rank(uploads({"A": 1}), top_n=5)

        text = format_leaderboard(entries, items, top_n=5)

        assert text.startswith("Showing all emoji uploaders since ")
