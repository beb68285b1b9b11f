# apps/tasks/domain/entities.py
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional
from enum import Enum


class TaskStatus(str, Enum):
    PENDING = 'pending'
    COMPLETE = 'complete'


@dataclass
class TaskEntity:
    id: Optional[int]  # ID może być None przed zapisem
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING

    planned_date: Optional[date] = None
    priority: Optional[int] = None
    sort_order: int = 0

    # Relacje (tylko ID, żeby nie wiązać obiektów domenowych z ORM)
    project_id: Optional[int] = None

    completed_at: Optional[datetime] = None
    is_deleted: bool = False

    @property
    def is_complete(self) -> bool:
        return self.status == TaskStatus.COMPLETE

    def complete(self, now: datetime):
        """completed_at ustawiamy tylko raz - ponowne "ukończenie" go nie przesuwa."""
        self.status = TaskStatus.COMPLETE
        if self.completed_at is None:
            self.completed_at = now

    def reopen(self):
        self.status = TaskStatus.PENDING
        self.completed_at = None
