from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StreakStats:
    """연속 학습 통계."""

    current_streak: int
    longest_streak: int
    total_days: int
    average_minutes: int
