"""Kullanıcı satırına XP işleme: seviye, istatistik, seri ve rozetler."""

from __future__ import annotations

import logging

from models import UserBadge, utcnow
from gamification.badges import ActivityStats, check_badges
from gamification.levels import level_for_xp, level_progress
from gamification.streak import StreakState, advance_streak

logger = logging.getLogger(__name__)

# Her neden, ilgili istatistik sayacını tam olarak 1 artırır.
STAT_FIELDS = {
    'post': 'total_posts',
    'like': 'total_likes',
    'comment': 'total_comments',
}


def activity_stats(user) -> ActivityStats:
    return ActivityStats(
        total_posts=user.total_posts or 0,
        total_likes=user.total_likes or 0,
        total_comments=user.total_comments or 0,
        total_views=user.total_views or 0,
        longest_streak=user.streak_longest or 0,
    )


def update_streak(user, now=None):
    now = now or utcnow()
    state = advance_streak(
        StreakState(
            current=user.streak_current or 0,
            longest=user.streak_longest or 0,
            last_active=user.streak_last_active,
        ),
        now,
    )
    user.streak_current = state.current
    user.streak_longest = state.longest
    user.streak_last_active = state.last_active
    return state


def award_badges(user, now=None) -> list[UserBadge]:
    """Yeni hak edilen rozetleri ``user.badges`` listesine ekler ve döndürür."""
    now = now or utcnow()
    held_ids = [badge.badge_id for badge in user.badges]
    new_badges = []
    for earned in check_badges(activity_stats(user), held_ids, now):
        badge = UserBadge(
            badge_id=earned.id,
            name=earned.name,
            description=earned.description,
            icon=earned.icon,
            earned_at=earned.earned_at,
        )
        user.badges.append(badge)
        new_badges.append(badge)
    return new_badges


def add_xp(user, amount: int, reason: str = '', now=None) -> list[UserBadge]:
    """Tek bir etkinlik için XP verir.

    Miktarı çağıran belirler; ``reason`` yalnızca hangi sayacın artacağını
    seçer. Oturum burada commit edilmez.
    """
    now = now or utcnow()
    old_level = user.level or 1
    user.xp = (user.xp or 0) + amount
    user.level = level_for_xp(user.xp)

    field = STAT_FIELDS.get(reason)
    if field:
        setattr(user, field, (getattr(user, field) or 0) + 1)

    update_streak(user, now)
    new_badges = award_badges(user, now)

    if user.level > old_level:
        logger.info("Kullanıcı %s seviye atladı: %s -> %s", user.id, old_level, user.level)
    for badge in new_badges:
        logger.info("Kullanıcı %s yeni rozet kazandı: %s", user.id, badge.badge_id)
    return new_badges


def record_view(user):
    user.total_views = (user.total_views or 0) + 1


def badge_payload(badge) -> dict:
    return {
        "id": badge.badge_id,
        "name": badge.name,
        "description": badge.description,
        "icon": badge.icon,
        "earnedAt": badge.earned_at.isoformat() + "Z" if badge.earned_at else None,
    }


def gamification_summary(user) -> dict:
    progress = level_progress(user.xp or 0)
    return {
        "xp": progress["xp"],
        "level": progress["level"],
        "levelProgress": {
            "xpIntoLevel": progress["xp_into_level"],
            "xpForLevel": progress["xp_for_level"],
            "nextLevelXp": progress["next_level_xp"],
        },
        "badges": [badge_payload(b) for b in user.badges],
        "streak": {
            "current": user.streak_current or 0,
            "longest": user.streak_longest or 0,
            "lastActive": user.streak_last_active.isoformat() + "Z" if user.streak_last_active else None,
        },
        "stats": {
            "totalPosts": user.total_posts or 0,
            "totalLikes": user.total_likes or 0,
            "totalComments": user.total_comments or 0,
            "totalViews": user.total_views or 0,
        },
    }
