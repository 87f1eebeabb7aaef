"""Günlük etkinlik serisi."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class StreakState:
    current: int = 0
    longest: int = 0
    last_active: datetime | None = None


def days_between(last_active: datetime, now: datetime) -> int:
    """Geçen tam gün sayısı (aşağı yuvarlanır)."""
    return (now - last_active) // ONE_DAY


def advance_streak(state: StreakState, now: datetime) -> StreakState:
    """``now`` anındaki bir etkinliği seriye işler.

    Aynı gün değişmez, ertesi gün bir artar, daha sonrası 1'e döner.
    ``last_active`` her durumda ``now`` olur.
    """
    current = state.current or 0
    longest = state.longest or 0

    if state.last_active is None:
        current = 1
        longest = max(longest, current)
    else:
        diff = days_between(state.last_active, now)
        if diff == 1:
            current += 1
            if current > longest:
                longest = current
        elif diff > 1:
            current = 1

    return StreakState(current=current, longest=longest, last_active=now)
