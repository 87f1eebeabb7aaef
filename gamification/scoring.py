"""Etkileşim ve trend puanları.

Öne çıkan ve trend akışları iki farklı formül kullanır; birleştirilmemeleri
gerekir. Ağırlıklar ``forum/feeds.py`` içindeki SQL ifadeleriyle paylaşılır.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta

# Öne çıkan gönderiler (son 30 gün, ilk 6)
FEATURED_LIKE_WEIGHT = 3
FEATURED_VIEW_WEIGHT = 1
FEATURED_COMMENT_WEIGHT = 5
FEATURED_WINDOW_DAYS = 30
FEATURED_LIMIT = 6

# Trend gönderiler (son 30 gün, ilk 10, son 7 güne bonus)
TREND_LIKE_WEIGHT = 5
TREND_VIEW_WEIGHT = 1
TREND_COMMENT_WEIGHT = 10
TREND_RECENT_BONUS = 50
TREND_RECENT_DAYS = 7
TREND_WINDOW_DAYS = 30
TREND_LIMIT = 10

# Öne çıkan yazarlar (son 60 günde aktif, ilk 6)
AUTHOR_POST_WEIGHT = 10
AUTHOR_LIKE_WEIGHT = 5
AUTHOR_VIEW_WEIGHT = 1
AUTHOR_COMMENT_WEIGHT = 8
AUTHOR_ACTIVE_DAYS = 60
AUTHOR_LIMIT = 6


def _n(value):
    # Değer bir SQL ifadesi de olabilir.
    return 0 if value is None else value


def featured_score(likes_count, views, comments_count) -> int:
    return (
        _n(likes_count) * FEATURED_LIKE_WEIGHT
        + _n(views) * FEATURED_VIEW_WEIGHT
        + _n(comments_count) * FEATURED_COMMENT_WEIGHT
    )


def trend_score(likes_count, views, comments_count, recent: bool) -> int:
    score = (
        _n(likes_count) * TREND_LIKE_WEIGHT
        + _n(views) * TREND_VIEW_WEIGHT
        + _n(comments_count) * TREND_COMMENT_WEIGHT
    )
    if recent:
        score += TREND_RECENT_BONUS
    return score


def is_recent(created_at: datetime | None, now: datetime, days: int = TREND_RECENT_DAYS) -> bool:
    """Gönderi son ``days`` gün içinde mi oluşturuldu?

    ``created_at`` bir sütun ise SQL koşulu döner (trend bonusu için).
    """
    if created_at is None:
        return False
    return created_at >= now - timedelta(days=days)


def author_score(total_posts, total_likes, total_views, total_comments) -> int:
    return (
        _n(total_posts) * AUTHOR_POST_WEIGHT
        + _n(total_likes) * AUTHOR_LIKE_WEIGHT
        + _n(total_views) * AUTHOR_VIEW_WEIGHT
        + _n(total_comments) * AUTHOR_COMMENT_WEIGHT
    )


def engagement_rate(total_posts, total_likes, total_comments) -> float:
    """Gönderi başına ortalama (beğeni + yorum), tek ondalık basamak."""
    posts = _n(total_posts)
    if posts <= 0:
        return 0
    ratio = (_n(total_likes) + _n(total_comments)) / posts
    # Yarım değerler yukarı yuvarlanır (0.25 -> 0.3).
    return math.floor(ratio * 10 + 0.5) / 10


def author_rank(level) -> str:
    level = _n(level)
    if level >= 5:
        return "Pro"
    if level >= 3:
        return "Aktif"
    return "Yeni"
