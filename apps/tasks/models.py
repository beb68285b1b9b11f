# apps/tasks/models.py
from django.db import models

from apps.core.models import SoftDeleteModel
from apps.tasks.domain.entities import TaskStatus


class Project(SoftDeleteModel):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    icon = models.CharField(max_length=100, blank=True, default="")
    icon_color = models.CharField(max_length=20, blank=True, default="")
    color = models.CharField(max_length=20, blank=True, default="")  # kolor grupowania na kanbanie

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class Tag(SoftDeleteModel):
    name = models.CharField(max_length=100)
    color = models.CharField(max_length=20, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class Task(SoftDeleteModel):
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")

    # Używamy TextChoices dla wygody w Adminie, ale mapujemy to na Enum domenowy
    class StatusChoices(models.TextChoices):
        PENDING = TaskStatus.PENDING.value, 'Pending'
        COMPLETE = TaskStatus.COMPLETE.value, 'Complete'

    status = models.CharField(
        max_length=20,
        choices=StatusChoices.choices,
        default=StatusChoices.PENDING
    )

    planned_date = models.DateField(null=True, blank=True)  # brak = "parking"
    priority = models.IntegerField(null=True, blank=True)
    sort_order = models.IntegerField(default=0)

    project = models.ForeignKey(
        Project,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='tasks'
    )

    tags = models.ManyToManyField(
        Tag,
        blank=True,
        related_name='tasks'
    )

    completed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['sort_order', '-created_at']

    def __str__(self):
        return self.title
