# apps/core/dashboard.py
import copy
import logging
from datetime import date, timedelta
from typing import Optional

from django.db import transaction
from django.db.models import Prefetch

from apps.core.domain.dates import EffectiveDateCalculator, validate_date_range
from apps.core.domain.exceptions import LayoutInUse
from apps.habits.models import Habit, HabitEntry
from apps.habits.services import HabitService
from apps.measurements.models import Measurement
from apps.tasks.domain.entities import TaskStatus
from apps.tasks.domain.services import week_window
from apps.tasks.models import Task
from .models import DashboardLayout
from .services import SettingsService

logger = logging.getLogger(__name__)

# Domyślny układ (react-grid-layout): siatka 24 kolumn
DEFAULT_LAYOUT = [
    {'i': 'habit-matrix', 'x': 0, 'y': 0, 'w': 12, 'h': 8, 'minW': 6, 'minH': 4},
    {'i': 'weekly-kanban', 'x': 12, 'y': 0, 'w': 12, 'h': 8, 'minW': 6, 'minH': 4},
    {'i': 'time-blocks', 'x': 0, 'y': 8, 'w': 8, 'h': 6, 'minW': 4, 'minH': 3},
    {'i': 'target-graph', 'x': 8, 'y': 8, 'w': 8, 'h': 6, 'minW': 4, 'minH': 3},
    {'i': 'parking-lot', 'x': 16, 'y': 8, 'w': 8, 'h': 6, 'minW': 4, 'minH': 3},
]

# Macierz nawyków bez zakresu dat: tyle ostatnich wpisów na nawyk
HABIT_MATRIX_RECENT_ENTRIES = 30


def default_layout():
    return copy.deepcopy(DEFAULT_LAYOUT)


class DashboardService:
    def __init__(self, settings_service: Optional[SettingsService] = None):
        self.settings = settings_service or SettingsService()

    # --- Układy ---

    def get_active_layout(self) -> Optional[DashboardLayout]:
        return DashboardLayout.objects.filter(is_active=True).order_by('-updated_at').first()

    def save_layout(self, layout: list, name: Optional[str] = None) -> DashboardLayout:
        """Nadpisuje aktywny układ albo tworzy pierwszy."""
        existing = self.get_active_layout()
        if existing is None:
            result = DashboardLayout.objects.create(name=name or 'default', layout=layout, is_active=True)
        else:
            existing.layout = layout
            existing.name = name or existing.name
            existing.save()
            result = existing
        logger.info("Dashboard layout %s saved (%d items)", result.id, len(layout))
        return result

    @transaction.atomic
    def reset_layout(self) -> DashboardLayout:
        DashboardLayout.objects.update(is_active=False)
        result = DashboardLayout.objects.create(name='default', layout=default_layout(), is_active=True)
        logger.info("Dashboard layout reset to default (%s)", result.id)
        return result

    @transaction.atomic
    def create_layout(self, name: str, layout: list, set_active: bool = False) -> DashboardLayout:
        if set_active:
            DashboardLayout.objects.update(is_active=False)
        result = DashboardLayout.objects.create(name=name, layout=layout, is_active=set_active)
        logger.info("Dashboard layout %s created: %s", result.id, name)
        return result

    @transaction.atomic
    def activate_layout(self, layout: DashboardLayout) -> DashboardLayout:
        DashboardLayout.objects.exclude(pk=layout.pk).update(is_active=False)
        layout.is_active = True
        layout.save()
        logger.info("Dashboard layout %s activated", layout.id)
        return layout

    def delete_layout(self, layout: DashboardLayout):
        if layout.is_active:
            raise LayoutInUse("Cannot delete active layout")
        layout_id = layout.id
        layout.delete()
        logger.info("Dashboard layout %s deleted", layout_id)

    # --- Dane ---

    def summary(self, reference_now=None) -> dict:
        """
        Podsumowanie na "dzisiaj" liczone granicą dnia (jak reszta aplikacji),
        a nie datą kalendarzową UTC.
        """
        calculator = self.settings.get_calculator()
        today = self.settings.effective_today(reference_now)

        return {
            'date': today,
            'habits': HabitService(calculator).completion_stats(today),
            'tasks': self._task_stats(calculator, today),
            'measurements': self._latest_measurements(),
        }

    def _task_stats(self, calculator: EffectiveDateCalculator, today: date) -> dict:
        day_start = calculator.day_start(today)
        day_end = calculator.day_start(today + timedelta(days=1))
        active = Task.objects.filter(is_deleted=False)
        return {
            'pending': active.filter(status=TaskStatus.PENDING.value).count(),
            'completedToday': active.filter(
                status=TaskStatus.COMPLETE.value,
                completed_at__gte=day_start,
                completed_at__lt=day_end,
            ).count(),
        }

    def _latest_measurements(self) -> list:
        summary = []
        for measurement in Measurement.objects.all():
            latest = measurement.entries.order_by('-date').first()
            summary.append({
                'measurement': measurement,
                'latest': latest,
            })
        return summary

    def habit_matrix(self, start: Optional[date] = None, end: Optional[date] = None):
        """Nawyki z wpisami: z zakresu dat, także otwartego z jednej strony (rosnąco), albo N ostatnich."""
        habits = Habit.objects.filter(is_deleted=False).select_related('category').order_by('sort_order', 'id')

        if start is None and end is None:
            return [
                (habit, list(habit.entries.order_by('-date')[:HABIT_MATRIX_RECENT_ENTRIES]))
                for habit in habits
            ]

        entries = HabitEntry.objects.order_by('date')
        if start is not None and end is not None:
            validate_date_range(start, end)
        if start is not None:
            entries = entries.filter(date__gte=start)
        if end is not None:
            entries = entries.filter(date__lte=end)
        habits = habits.prefetch_related(Prefetch('entries', queryset=entries, to_attr='matrix_entries'))
        return [(habit, habit.matrix_entries) for habit in habits]

    def weekly_kanban(self, start: Optional[date] = None, end: Optional[date] = None, reference_now=None):
        """Zadania zaplanowane w tygodniu; domyślnie bieżący tydzień wg weekStartDay."""
        if start is None:
            today = self.settings.effective_today(reference_now)
            start, _ = week_window(today, self.settings.get_week_start_day())
        if end is None:
            end = start + timedelta(days=6)
        start, end = validate_date_range(start, end)

        tasks = (
            Task.objects
            .filter(is_deleted=False, planned_date__gte=start, planned_date__lte=end)
            .select_related('project')
            .prefetch_related('tags')
            .order_by('sort_order', '-created_at')
        )
        return start, end, list(tasks)
