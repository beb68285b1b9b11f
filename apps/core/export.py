# apps/core/export.py
"""Pełny eksport danych instalacji (kopia zapasowa w JSON)."""
import logging

from django.utils import timezone

from apps.habits.models import Category, Habit, HabitEntry
from apps.habits.serializers import category_to_dict, entry_to_dict as habit_entry_to_dict, habit_to_dict
from apps.measurements.models import Measurement, MeasurementEntry, MeasurementTarget
from apps.measurements.serializers import entry_to_dict as measurement_entry_to_dict
from apps.measurements.serializers import measurement_to_dict, target_to_dict
from apps.tasks.models import Project, Tag, Task
from apps.tasks.serializers import project_to_dict, tag_to_dict, task_to_dict
from .models import DashboardLayout
from .serializers import layout_to_dict
from .services import SettingsService

logger = logging.getLogger(__name__)

EXPORT_VERSION = '1.0.0'


def build_export(now=None) -> dict:
    """Wszystko, łącznie z usuniętymi (miękko) rekordami."""
    now = now or timezone.now()
    tasks = Task.objects.select_related('project').prefetch_related('tags')

    data = {
        'exportedAt': now.isoformat(),
        'version': EXPORT_VERSION,
        'settings': SettingsService().get_all(),
        'categories': [category_to_dict(c) for c in Category.objects.all()],
        'habits': [habit_to_dict(h) for h in Habit.objects.select_related('category')],
        'habitEntries': [habit_entry_to_dict(e) for e in HabitEntry.objects.order_by('habit_id', 'date')],
        'projects': [project_to_dict(p) for p in Project.objects.all()],
        'tasks': [task_to_dict(t, include_project=False) for t in tasks],
        'tags': [tag_to_dict(t) for t in Tag.objects.all()],
        'measurements': [measurement_to_dict(m) for m in Measurement.objects.all()],
        'measurementEntries': [
            measurement_entry_to_dict(e) for e in MeasurementEntry.objects.order_by('measurement_id', 'date')
        ],
        'measurementTargets': [target_to_dict(t) for t in MeasurementTarget.objects.all()],
        'dashboardLayouts': [layout_to_dict(layout) for layout in DashboardLayout.objects.all()],
    }
    logger.info("Data export built: %d habits, %d tasks, %d measurements",
                len(data['habits']), len(data['tasks']), len(data['measurements']))
    return data
