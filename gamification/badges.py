"""Rozet kuralları ve eşik kontrolü."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ActivityStats:
    total_posts: int = 0
    total_likes: int = 0
    total_comments: int = 0
    total_views: int = 0
    longest_streak: int = 0


@dataclass(frozen=True)
class BadgeRule:
    id: str
    name: str
    description: str
    icon: str
    predicate: Callable[[ActivityStats], bool]


@dataclass(frozen=True)
class EarnedBadge:
    id: str
    name: str
    description: str
    icon: str
    earned_at: datetime


BADGES: list[BadgeRule] = [
    BadgeRule("first_post", "İlk Adım", "İlk gönderini yayınladın!", "🌟",
              lambda s: s.total_posts >= 1),
    BadgeRule("active_writer", "Aktif Yazar", "10 gönderi yayınladın!", "✍️",
              lambda s: s.total_posts >= 10),
    BadgeRule("popular_writer", "Popüler Yazar", "50 beğeni topladın!", "❤️",
              lambda s: s.total_likes >= 50),
    BadgeRule("social_user", "Sosyal Kullanıcı", "25 yorum yaptın!", "💬",
              lambda s: s.total_comments >= 25),
    BadgeRule("streak_master", "Streak Master", "7 gün üst üste aktif oldun!", "🔥",
              lambda s: s.longest_streak >= 7),
]

BADGES_BY_ID = {rule.id: rule for rule in BADGES}


def check_badges(stats: ActivityStats, held_ids: Iterable[str], now: datetime) -> list[EarnedBadge]:
    """Yeni hak edilen rozetleri tablo sırasıyla döndürür.

    Sahip olunan rozetler atlanır; istatistikler değişmedikçe ikinci çağrı
    boş liste döner.
    """
    held = set(held_ids)
    earned = []
    for rule in BADGES:
        if rule.id in held:
            continue
        if rule.predicate(stats):
            earned.append(EarnedBadge(
                id=rule.id,
                name=rule.name,
                description=rule.description,
                icon=rule.icon,
                earned_at=now,
            ))
    return earned
