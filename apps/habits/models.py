# apps/habits/models.py
from django.db import models

from apps.core.models import SoftDeleteModel


class Category(SoftDeleteModel):
    name = models.CharField(max_length=100)
    icon = models.CharField(max_length=100, blank=True, default="")  # np. nazwa ikony Material
    icon_color = models.CharField(max_length=20, blank=True, default="")  # HEX
    sort_order = models.IntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['sort_order', 'name']
        verbose_name_plural = 'categories'

    def __str__(self):
        return self.name


class Habit(SoftDeleteModel):
    name = models.CharField(max_length=255)
    category = models.ForeignKey(
        Category,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='habits'
    )

    # Hierarchia (nawyk nadrzędny / podnawyki)
    parent_habit = models.ForeignKey(
        'self',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='children'
    )

    icon = models.CharField(max_length=100, blank=True, default="")
    icon_color = models.CharField(max_length=20, blank=True, default="")
    is_active = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)

    # Dla nawyków "licznikowych" (np. 3 suplementy dziennie)
    daily_target = models.PositiveIntegerField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['sort_order', 'id']

    def __str__(self):
        return self.name


class HabitEntry(models.Model):
    class Status(models.TextChoices):
        EMPTY = 'empty', 'Empty'
        COMPLETE = 'complete', 'Complete'
        MISSED = 'missed', 'Missed'
        PARTIAL = 'partial', 'Partial'
        NA = 'na', 'N/A'
        EXEMPT = 'exempt', 'Exempt'
        EXTRA = 'extra', 'Extra'
        TRENDING = 'trending', 'Trending'
        PINK = 'pink', 'Pink'

    habit = models.ForeignKey(Habit, on_delete=models.CASCADE, related_name='entries')
    date = models.DateField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.EMPTY)
    count = models.PositiveIntegerField(default=0)
    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ('habit', 'date')  # Jeden wpis na dzień
        ordering = ['-date']

    def __str__(self):
        return f"{self.habit} @ {self.date}: {self.status}"
