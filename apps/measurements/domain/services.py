# apps/measurements/domain/services.py
"""
Silnik postępu względem celu (linia docelowa).

Cel to prosta od (start_date, start_value) do (goal_date, goal_value).
Ten sam kod liczy linię dla wykresu, pasek postępu i odchylenie,
żeby wszędzie wychodziły identyczne liczby.
"""
import math
from datetime import timedelta
from typing import List, Optional

from apps.core.domain.dates import parse_iso_date
from apps.core.domain.exceptions import DegenerateTarget, InvalidConfiguration
from apps.measurements.domain.entities import Deviation, ProgressPoint, TargetEntity, as_number

# Linia na wykresie: mniej więcej tygodniowe punkty, maks. 20
AUTO_STEP_DAYS = 7
MAX_AUTO_STEPS = 20


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class TargetProgressEngine:

    def _require_span(self, target: TargetEntity) -> int:
        total_span = target.total_days
        if total_span <= 0:
            # Brak rozpiętości (lub meta przed startem) -> interpolacja nieokreślona
            raise DegenerateTarget(
                f"Target goal date {target.goal_date.isoformat()} must be after "
                f"start date {target.start_date.isoformat()}"
            )
        return total_span

    def expected_value_at(self, target: TargetEntity, day) -> float:
        """Oczekiwana wartość w danym dniu (przycięta do [start, meta])."""
        total_span = self._require_span(target)
        elapsed = (parse_iso_date(day) - target.start_date).days
        progress = _clamp(elapsed / total_span, 0.0, 1.0)

        # Końce zwracamy dokładnie, bez błędów zaokrągleń float
        if progress <= 0.0:
            return target.start_value
        if progress >= 1.0:
            return target.goal_value
        return target.start_value + (target.goal_value - target.start_value) * progress

    def progress_percent(self, target: TargetEntity, observed_value) -> float:
        """
        Ile procent drogi od startu do mety (0-100).
        Wzór działa w obu kierunkach (spadek wagi, wzrost kroków).
        """
        value_range = target.start_value - target.goal_value
        if value_range == 0:
            raise DegenerateTarget("Target start value equals goal value")
        observed = as_number(observed_value)
        percent = ((target.start_value - observed) / value_range) * 100
        return _clamp(percent, 0.0, 100.0)

    def deviation(self, target: TargetEntity, day, observed_value) -> Deviation:
        """Odchylenie ze znakiem; czy "powyżej" jest dobre, decyduje wywołujący."""
        value = as_number(observed_value) - self.expected_value_at(target, day)
        return Deviation(value=value, is_above_target=value > 0)

    def sample_trajectory(self, target: TargetEntity, interval_days: Optional[int] = None) -> List[ProgressPoint]:
        """
        Punkty linii docelowej od start_date do goal_date.
        interval_days=None -> automatyczny krok (ok. tydzień, maks. 20 odcinków).
        Pierwszy i ostatni punkt zawsze dokładnie na starcie i mecie.
        """
        total_span = self._require_span(target)

        if interval_days is None:
            steps = min(math.ceil(total_span / AUTO_STEP_DAYS), MAX_AUTO_STEPS)
            offsets = [round(i * total_span / steps) for i in range(steps + 1)]
        else:
            if isinstance(interval_days, bool) or not isinstance(interval_days, int) or interval_days <= 0:
                raise InvalidConfiguration("interval_days must be a positive integer")
            offsets = list(range(0, total_span, interval_days))
            offsets.append(total_span)

        points = []
        for offset in offsets:
            day = target.start_date + timedelta(days=offset)
            points.append(ProgressPoint(date=day, expected_value=self.expected_value_at(target, day)))
        return points
