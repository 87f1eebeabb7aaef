"""Toplam XP'den seviye hesabı.

1 -> 2 için 100 XP, 2 -> 3 için 200, 3 -> 4 için 300 XP gerekir; L seviyesinin
birikimli eşiği 50 * L * (L - 1) olur.
"""

from __future__ import annotations

XP_STEP = 100


def xp_for_level(level: int) -> int:
    """``level`` seviyesine ulaşmak için gereken toplam XP."""
    if level <= 1:
        return 0
    return XP_STEP * level * (level - 1) // 2


def level_for_xp(xp) -> int:
    """Eşiği xp'yi aşmayan en yüksek seviye.

    Her zaman toplamdan yeniden hesaplanır, artırılmaz.
    """
    xp = xp or 0
    level = 1
    while xp_for_level(level + 1) <= xp:
        level += 1
    return level


def level_progress(xp) -> dict:
    xp = xp or 0
    level = level_for_xp(xp)
    current_level_xp = xp_for_level(level)
    next_level_xp = xp_for_level(level + 1)
    return {
        "level": level,
        "xp": xp,
        "current_level_xp": current_level_xp,
        "next_level_xp": next_level_xp,
        "xp_into_level": xp - current_level_xp,
        "xp_for_level": next_level_xp - current_level_xp,
    }
