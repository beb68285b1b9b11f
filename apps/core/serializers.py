# apps/core/serializers.py
from apps.core.domain.dates import format_iso_date
from apps.habits.serializers import habit_to_dict
from apps.measurements.serializers import measurement_to_dict
from apps.tasks.serializers import task_to_dict


def _timestamp(value):
    return value.isoformat() if value else None


def setting_to_dict(key, value, is_default=False):
    return {'key': key, 'value': value, 'isDefault': is_default}


def layout_to_dict(layout):
    return {
        'id': layout.id,
        'name': layout.name,
        'layout': layout.layout,
        'isActive': layout.is_active,
        'createdAt': _timestamp(layout.created_at),
        'updatedAt': _timestamp(layout.updated_at),
    }


def summary_to_dict(summary):
    measurements = []
    for item in summary['measurements']:
        latest = item['latest']
        data = measurement_to_dict(item['measurement'])
        data['latestValue'] = float(latest.value) if latest else None
        data['latestDate'] = format_iso_date(latest.date) if latest else None
        measurements.append(data)

    return {
        'date': format_iso_date(summary['date']),
        'habits': summary['habits'],
        'tasks': summary['tasks'],
        'measurements': measurements,
    }


def habit_matrix_to_list(rows):
    return [habit_to_dict(habit, entries=entries) for habit, entries in rows]


def kanban_to_list(tasks):
    return [task_to_dict(task) for task in tasks]
