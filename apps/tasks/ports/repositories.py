# apps/tasks/ports/repositories.py
from abc import ABC, abstractmethod
from typing import Optional
from apps.tasks.domain.entities import TaskEntity


class ITaskRepository(ABC):
    @abstractmethod
    def get_by_id(self, task_id: int) -> Optional[TaskEntity]:
        pass

    @abstractmethod
    def save(self, task: TaskEntity) -> TaskEntity:
        """Zapisuje (tworzy lub aktualizuje) zadanie i zwraca zaktualizowaną encję (np. z ID)."""
        pass
