# apps/tasks/adapters/orm_repositories.py
from typing import Optional
from apps.tasks.domain.entities import TaskEntity, TaskStatus
from apps.tasks.ports.repositories import ITaskRepository
from apps.tasks.models import Task as TaskModel


class DjangoTaskRepository(ITaskRepository):
    def to_entity(self, model: TaskModel) -> TaskEntity:
        """Konwertuje Model Django -> Czystą Encję."""
        return TaskEntity(
            id=model.id,
            title=model.title,
            description=model.description,
            status=TaskStatus(model.status),
            planned_date=model.planned_date,
            priority=model.priority,
            sort_order=model.sort_order,
            project_id=model.project_id,
            completed_at=model.completed_at,
            is_deleted=model.is_deleted,
        )

    def get_by_id(self, task_id: int) -> Optional[TaskEntity]:
        try:
            task = TaskModel.objects.get(id=task_id)
            return self.to_entity(task)
        except TaskModel.DoesNotExist:
            return None

    def save(self, task: TaskEntity) -> TaskEntity:
        data = {
            'title': task.title,
            'description': task.description,
            'status': task.status.value,
            'planned_date': task.planned_date,
            'priority': task.priority,
            'sort_order': task.sort_order,
            'project_id': task.project_id,
            'completed_at': task.completed_at,
            'is_deleted': task.is_deleted,
        }

        if task.id:
            # .update() omija auto_now, więc updated_at ustawiamy przez save()
            obj = TaskModel.objects.get(id=task.id)
            for field, value in data.items():
                setattr(obj, field, value)
            obj.save()
        else:
            obj = TaskModel.objects.create(**data)

        return self.to_entity(obj)
