# apps/measurements/services.py
import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from apps.core.domain.dates import validate_date_range
from apps.core.domain.exceptions import DegenerateTarget
from .domain.services import TargetProgressEngine
from .models import Measurement, MeasurementEntry, MeasurementTarget

logger = logging.getLogger(__name__)


class MeasurementService:
    def __init__(self, engine: Optional[TargetProgressEngine] = None):
        self.engine = engine or TargetProgressEngine()

    def record_entry(self, measurement: Measurement, day: date, value: Decimal):
        """Upsert po dacie. Zwraca (wpis, czy_utworzony)."""
        entry, created = MeasurementEntry.objects.update_or_create(
            measurement=measurement, date=day, defaults={'value': value},
        )
        logger.info("Measurement %s entry %s %s: %s", measurement.id, day.isoformat(),
                    'created' if created else 'updated', value)
        return entry, created

    def current_target(self, measurement: Measurement) -> Optional[MeasurementTarget]:
        return measurement.targets.order_by('-created_at', '-id').first()

    def latest_entry(self, measurement: Measurement, on_or_before: Optional[date] = None):
        entries = measurement.entries.all()
        if on_or_before is not None:
            entries = entries.filter(date__lte=on_or_before)
        return entries.order_by('-date').first()

    def graph_data(self, measurement: Measurement, start: Optional[date] = None,
                   end: Optional[date] = None, interval_days: Optional[int] = 1) -> dict:
        """
        Dane do wykresu: wpisy (rosnąco) + linia docelowa bieżącego celu.

        Cel bez rozpiętości dat daje pustą linię i degenerate=True,
        żeby UI mogło pokazać "brak zakresu" zamiast błędu.
        """
        if start and end:
            validate_date_range(start, end)

        entries = measurement.entries.order_by('date')
        if start:
            entries = entries.filter(date__gte=start)
        if end:
            entries = entries.filter(date__lte=end)

        target = self.current_target(measurement)
        trajectory = []
        degenerate = False
        if target is not None:
            try:
                trajectory = self.engine.sample_trajectory(target.to_entity(), interval_days)
            except DegenerateTarget:
                degenerate = True
                logger.info("Measurement %s: target %s has no date span", measurement.id, target.id)

        return {
            'measurement': measurement,
            'entries': list(entries),
            'target': target,
            'trajectory': trajectory,
            'degenerate': degenerate,
        }

    def progress_snapshot(self, target: MeasurementTarget, day: date) -> dict:
        """
        Stan celu na dany dzień: wartość oczekiwana, ostatni wpis,
        odchylenie i procent drogi. Cel zdegenerowany -> DegenerateTarget.
        """
        entity = target.to_entity()
        expected = self.engine.expected_value_at(entity, day)
        latest = self.latest_entry(target.measurement, on_or_before=day)

        deviation = None
        percent = None
        if latest is not None:
            deviation = self.engine.deviation(entity, day, latest.value)
            percent = self.engine.progress_percent(entity, latest.value)

        return {
            'target': target,
            'date': day,
            'expected_value': expected,
            'latest_entry': latest,
            'deviation': deviation,
            'progress_percent': percent,
            'is_decreasing': entity.is_decreasing,
        }
