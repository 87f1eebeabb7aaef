"""Engagement and trend score formulas."""

from datetime import datetime, timedelta

import pytest

from gamification.scoring import (
    author_rank,
    author_score,
    engagement_rate,
    featured_score,
    is_recent,
    trend_score,
)


class TestFeaturedScore:
    @pytest.mark.parametrize("likes,views,comments,expected", [
        (0, 0, 0, 0),
        (1, 0, 0, 3),
        (0, 1, 0, 1),
        (0, 0, 1, 5),
        (3, 100, 1, 114),
        (10, 250, 4, 300),
    ])
    def test_formula(self, likes, views, comments, expected):
        assert featured_score(likes, views, comments) == expected

    def test_missing_counters_count_as_zero(self):
        assert featured_score(None, None, None) == 0
        assert featured_score(2, None, 1) == 11

    def test_monotonic_in_each_argument(self):
        base = featured_score(2, 10, 1)
        assert featured_score(3, 10, 1) > base
        assert featured_score(2, 11, 1) > base
        assert featured_score(2, 10, 2) > base


class TestTrendScore:
    def test_recent_bonus(self):
        assert trend_score(3, 100, 1, recent=True) == 175
        assert trend_score(3, 100, 1, recent=False) == 125

    @pytest.mark.parametrize("likes,views,comments,expected", [
        (0, 0, 0, 0),
        (1, 0, 0, 5),
        (0, 1, 0, 1),
        (0, 0, 1, 10),
    ])
    def test_weights(self, likes, views, comments, expected):
        assert trend_score(likes, views, comments, recent=False) == expected

    def test_missing_counters_count_as_zero(self):
        assert trend_score(None, None, None, recent=True) == 50

    def test_differs_from_featured(self):
        """Comments weigh twice as much in the trend formula."""
        assert trend_score(0, 0, 1, recent=False) == 2 * featured_score(0, 0, 1)


class TestIsRecent:
    now = datetime(2026, 3, 10, 12, 0, 0)

    def test_two_days_ago(self):
        assert is_recent(self.now - timedelta(days=2), self.now)

    def test_exactly_seven_days_is_recent(self):
        assert is_recent(self.now - timedelta(days=7), self.now)

    def test_older_than_seven_days(self):
        assert not is_recent(self.now - timedelta(days=7, seconds=1), self.now)

    def test_missing_date(self):
        assert not is_recent(None, self.now)


class TestAuthorScore:
    def test_formula(self):
        # 10*2 + 5*3 + 40 + 8*1
        assert author_score(2, 3, 40, 1) == 83

    def test_missing_counters(self):
        assert author_score(1, None, None, None) == 10


class TestEngagementRate:
    def test_no_posts(self):
        assert engagement_rate(0, 10, 5) == 0

    def test_rounded_to_one_decimal(self):
        assert engagement_rate(3, 5, 2) == 2.3

    def test_whole_number(self):
        assert engagement_rate(2, 3, 1) == 2.0

    @pytest.mark.parametrize("posts,likes,comments,expected", [
        (4, 1, 0, 0.3),
        (4, 25, 0, 6.3),
        (4, 0, 3, 0.8),
        (8, 1, 0, 0.1),
    ])
    def test_halves_round_up(self, posts, likes, comments, expected):
        assert engagement_rate(posts, likes, comments) == expected


class TestAuthorRank:
    @pytest.mark.parametrize("level,rank", [
        (1, "Yeni"),
        (2, "Yeni"),
        (3, "Aktif"),
        (4, "Aktif"),
        (5, "Pro"),
        (12, "Pro"),
        (None, "Yeni"),
    ])
    def test_rank(self, level, rank):
        assert author_rank(level) == rank
