# apps/tasks/serializers.py
from apps.core.domain.dates import format_iso_date

TASK_FIELDS = {
    'title': 'title',
    'description': 'description',
    'plannedDate': 'planned_date',
    'status': 'status',
    'priority': 'priority',
    'projectId': 'project',
    'tagIds': 'tags',
    'sortOrder': 'sort_order',
}

PROJECT_FIELDS = {
    'name': 'name',
    'description': 'description',
    'icon': 'icon',
    'iconColor': 'icon_color',
    'color': 'color',
}

TAG_FIELDS = {
    'name': 'name',
    'color': 'color',
}


def _timestamp(value):
    return value.isoformat() if value else None


def tag_to_dict(tag):
    return {
        'id': tag.id,
        'name': tag.name,
        'color': tag.color,
        'isDeleted': tag.is_deleted,
        'createdAt': _timestamp(tag.created_at),
    }


def project_to_dict(project, tasks=None, stats=None):
    data = {
        'id': project.id,
        'name': project.name,
        'description': project.description,
        'icon': project.icon,
        'iconColor': project.icon_color,
        'color': project.color,
        'isDeleted': project.is_deleted,
        'deletedAt': _timestamp(project.deleted_at),
        'createdAt': _timestamp(project.created_at),
        'updatedAt': _timestamp(project.updated_at),
    }
    if tasks is not None:
        data['tasks'] = [task_to_dict(t, include_project=False) for t in tasks]
    if stats is not None:
        data['stats'] = stats
    return data


def task_to_dict(task, include_project=True):
    data = {
        'id': task.id,
        'title': task.title,
        'description': task.description,
        'plannedDate': format_iso_date(task.planned_date) if task.planned_date else None,
        'status': task.status,
        'priority': task.priority,
        'projectId': task.project_id,
        'sortOrder': task.sort_order,
        'completedAt': _timestamp(task.completed_at),
        'isDeleted': task.is_deleted,
        'deletedAt': _timestamp(task.deleted_at),
        'createdAt': _timestamp(task.created_at),
        'updatedAt': _timestamp(task.updated_at),
        'tags': [tag_to_dict(t) for t in task.tags.all()],
    }
    if include_project:
        data['project'] = project_to_dict(task.project) if task.project else None
    return data
