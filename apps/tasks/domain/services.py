# apps/tasks/domain/services.py
import logging
from datetime import date, datetime, timedelta
from typing import Tuple

from dateutil.relativedelta import relativedelta, weekday

from apps.core.domain.exceptions import InvalidConfiguration
from apps.tasks.domain.entities import TaskEntity, TaskStatus
from apps.tasks.ports.repositories import ITaskRepository

logger = logging.getLogger(__name__)


def week_window(day: date, week_start_day: int = 0) -> Tuple[date, date]:
    """
    Tydzień (pierwszy i ostatni dzień) zawierający `day`.
    week_start_day: 0 = niedziela ... 6 = sobota (jak ustawienie weekStartDay).
    """
    if isinstance(week_start_day, bool) or not isinstance(week_start_day, int) or not 0 <= week_start_day <= 6:
        raise InvalidConfiguration("Week start day must be between 0 (Sunday) and 6 (Saturday)")

    # dateutil liczy od poniedziałku (MO=0), ustawienie od niedzieli
    start_weekday = weekday((week_start_day + 6) % 7)
    start = day + relativedelta(weekday=start_weekday(-1))
    return start, start + timedelta(days=6)


class TaskService:
    def __init__(self, repository: ITaskRepository):
        self.repository = repository

    def _get(self, task_id: int) -> TaskEntity:
        task = self.repository.get_by_id(task_id)
        if not task:
            raise ValueError("Task not found")
        return task

    def complete_task(self, task_id: int, now: datetime) -> TaskEntity:
        """Oznacza zadanie jako wykonane (status + completed_at)."""
        task = self._get(task_id)
        if task.is_complete and task.completed_at is not None:
            # Już wykonane: nic nie zapisujemy, completed_at zostaje
            return task
        task.complete(now)
        task = self.repository.save(task)
        logger.info("Task %s completed at %s", task.id, task.completed_at.isoformat())
        return task

    def reopen_task(self, task_id: int) -> TaskEntity:
        task = self._get(task_id)
        task.reopen()
        task = self.repository.save(task)
        logger.info("Task %s reopened", task.id)
        return task

    def set_status(self, task_id: int, status: TaskStatus, now: datetime) -> TaskEntity:
        if TaskStatus(status) == TaskStatus.COMPLETE:
            return self.complete_task(task_id, now)
        return self.reopen_task(task_id)
