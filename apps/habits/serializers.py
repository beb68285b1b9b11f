# apps/habits/serializers.py
# Model -> dict w formacie API (camelCase), plus mapowanie payloadu na pola formularzy.
from apps.core.domain.dates import format_iso_date

CATEGORY_FIELDS = {
    'name': 'name',
    'icon': 'icon',
    'iconColor': 'icon_color',
    'sortOrder': 'sort_order',
}

HABIT_FIELDS = {
    'name': 'name',
    'categoryId': 'category',
    'parentHabitId': 'parent_habit',
    'icon': 'icon',
    'iconColor': 'icon_color',
    'isActive': 'is_active',
    'sortOrder': 'sort_order',
    'dailyTarget': 'daily_target',
}

ENTRY_FIELDS = {
    'date': 'date',
    'status': 'status',
    'count': 'count',
    'notes': 'notes',
}


def _timestamp(value):
    return value.isoformat() if value else None


def category_to_dict(category):
    return {
        'id': category.id,
        'name': category.name,
        'icon': category.icon,
        'iconColor': category.icon_color,
        'sortOrder': category.sort_order,
        'isDeleted': category.is_deleted,
        'deletedAt': _timestamp(category.deleted_at),
        'createdAt': _timestamp(category.created_at),
        'updatedAt': _timestamp(category.updated_at),
    }


def entry_to_dict(entry):
    return {
        'id': entry.id,
        'habitId': entry.habit_id,
        'date': format_iso_date(entry.date),
        'status': entry.status,
        'count': entry.count,
        'notes': entry.notes,
        'createdAt': _timestamp(entry.created_at),
        'updatedAt': _timestamp(entry.updated_at),
    }


def habit_to_dict(habit, entries=None):
    data = {
        'id': habit.id,
        'name': habit.name,
        'categoryId': habit.category_id,
        'category': category_to_dict(habit.category) if habit.category else None,
        'parentHabitId': habit.parent_habit_id,
        'icon': habit.icon,
        'iconColor': habit.icon_color,
        'isActive': habit.is_active,
        'sortOrder': habit.sort_order,
        'dailyTarget': habit.daily_target,
        'isDeleted': habit.is_deleted,
        'deletedAt': _timestamp(habit.deleted_at),
        'createdAt': _timestamp(habit.created_at),
        'updatedAt': _timestamp(habit.updated_at),
    }
    if entries is not None:
        data['entries'] = [entry_to_dict(e) for e in entries]
    return data
