# apps/habits/domain/streaks.py
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional


@dataclass(frozen=True)
class StreakStats:
    current_streak: int
    longest_streak: int
    last_completed_date: Optional[date] = None


def calculate_streaks(completed_dates: Iterable[date], today: date) -> StreakStats:
    """
    Serie dni z wykonanym nawykiem.

    Jeśli dziś jeszcze nie zrobione, bieżąca seria liczy się od wczoraj
    (dzień się nie skończył, więc seria nie jest jeszcze przerwana).
    """
    days = sorted({d for d in completed_dates if d <= today})
    if not days:
        return StreakStats(current_streak=0, longest_streak=0)

    # Najdłuższa seria: przejście po posortowanych dniach
    longest = run = 1
    for previous, current in zip(days, days[1:]):
        if current - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)

    done = set(days)
    cursor = today if today in done else today - timedelta(days=1)
    current_streak = 0
    while cursor in done:
        current_streak += 1
        cursor -= timedelta(days=1)

    return StreakStats(
        current_streak=current_streak,
        longest_streak=longest,
        last_completed_date=days[-1],
    )
