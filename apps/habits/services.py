# apps/habits/services.py
import logging
from datetime import date, timedelta
from typing import Iterable, Optional

from django.conf import settings
from django.db import transaction

from apps.core.domain.dates import EffectiveDateCalculator
from apps.core.services import SettingsService
from .domain.markdown_import import parse_markdown_habits
from .domain.streaks import StreakStats, calculate_streaks
from .models import Category, Habit, HabitEntry

logger = logging.getLogger(__name__)


class HabitService:
    def __init__(self, calculator: Optional[EffectiveDateCalculator] = None):
        self.calculator = calculator or SettingsService().get_calculator()

    def record_entry(self, habit: Habit, day: date, status=None, notes=None, count=None):
        """Upsert: jeden wpis na (nawyk, dzień). Zwraca (wpis, czy_utworzony)."""
        entry, created = HabitEntry.objects.get_or_create(
            habit=habit, date=day,
            defaults={
                'status': status or HabitEntry.Status.EMPTY,
                'notes': notes or '',
                'count': count or 0,
            },
        )
        if not created:
            if status is not None:
                entry.status = status
            if notes is not None:
                entry.notes = notes
            if count is not None:
                entry.count = count
            entry.save()

        logger.info("Habit %s entry %s %s: %s", habit.id, day.isoformat(),
                    'created' if created else 'updated', entry.status)
        return entry, created

    def default_auto_fill_start(self, habit: Optional[Habit], effective_today: date) -> date:
        """Późniejsza z dat: utworzenie nawyku albo N dni temu (bez nawyku: N dni temu)."""
        window_start = effective_today - timedelta(days=settings.HABITARCADE['AUTO_FILL_DEFAULT_DAYS'])
        if habit is None or habit.created_at is None:
            return window_start
        created = self.calculator.effective_date(habit.created_at)
        return max(created, window_start)

    def auto_fill_missed(self, habits: Iterable[Habit], start: date, effective_today: date,
                         status=HabitEntry.Status.MISSED) -> dict:
        """
        Uzupełnia brakujące dni w [start, dziś) podanym statusem.
        Dzisiaj nigdy nie jest uzupełniane - dzień jeszcze trwa.
        """
        days = EffectiveDateCalculator.effective_date_range(start, effective_today)
        past_days = [d for d in days if d < effective_today]

        habits = list(habits)
        filled = []
        with transaction.atomic():
            for habit in habits:
                existing = set(
                    HabitEntry.objects
                    .filter(habit=habit, date__gte=start, date__lt=effective_today)
                    .values_list('date', flat=True)
                )
                missing = [d for d in past_days if d not in existing]
                HabitEntry.objects.bulk_create(
                    [HabitEntry(habit=habit, date=d, status=status) for d in missing]
                )
                filled.extend((habit.id, d) for d in missing)

        logger.info("Auto-filled %d entries with status '%s' (%s..%s, %d habits)",
                    len(filled), status, start.isoformat(), effective_today.isoformat(), len(habits))
        return {
            'filled': len(filled),
            'habitsProcessed': len(habits),
            'start': start,
            'end': effective_today,
            'entries': filled,
        }

    def import_markdown(self, content: str, dry_run: bool = False) -> dict:
        result = parse_markdown_habits(content)
        if result.errors:
            logger.warning("Markdown import warnings: %s", '; '.join(result.errors))

        if dry_run:
            return {'result': result, 'created_categories': 0, 'created_habits': [], 'skipped_habits': []}

        created_categories = 0
        created_habits = []
        skipped_habits = []

        with transaction.atomic():
            category_ids = {}
            for parsed in result.categories:
                category = Category.objects.filter(name=parsed.name, is_deleted=False).first()
                if category is None:
                    category = Category.objects.create(name=parsed.name, sort_order=parsed.sort_order)
                    created_categories += 1
                category_ids[parsed.name] = category.id

            for parsed in result.habits:
                # Istniejące nawyki (po nazwie) pomijamy
                if Habit.objects.filter(name=parsed.name, is_deleted=False).exists():
                    skipped_habits.append(parsed.name)
                    continue
                created_habits.append(Habit.objects.create(
                    name=parsed.name,
                    category_id=category_ids.get(parsed.category_name),
                    sort_order=parsed.sort_order,
                ))

        logger.info("Markdown import: %d categories, %d habits created, %d skipped",
                    created_categories, len(created_habits), len(skipped_habits))
        return {
            'result': result,
            'created_categories': created_categories,
            'created_habits': created_habits,
            'skipped_habits': skipped_habits,
        }

    def streak(self, habit: Habit, effective_today: date) -> StreakStats:
        completed = habit.entries.filter(status=HabitEntry.Status.COMPLETE).values_list('date', flat=True)
        return calculate_streaks(completed, effective_today)

    def completion_stats(self, effective_today: date) -> dict:
        total = Habit.objects.filter(is_deleted=False).count()
        completed_today = HabitEntry.objects.filter(
            date=effective_today,
            status=HabitEntry.Status.COMPLETE,
            habit__is_deleted=False,
        ).count()
        return {
            'total': total,
            'completedToday': completed_today,
            'completionRate': round(completed_today / total * 100) if total else 0,
        }
