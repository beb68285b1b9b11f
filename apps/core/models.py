# apps/core/models.py
from django.db import models
from django.utils import timezone


class SoftDeleteModel(models.Model):
    """Miękkie usuwanie: rekord zostaje w bazie, można go przywrócić."""
    is_deleted = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        abstract = True

    def soft_delete(self):
        self.is_deleted = True
        self.deleted_at = timezone.now()
        self.save(update_fields=["is_deleted", "deleted_at"])

    def restore(self):
        self.is_deleted = False
        self.deleted_at = None
        self.save(update_fields=["is_deleted", "deleted_at"])


class Setting(models.Model):
    """Ustawienie instalacji (klucz -> wartość JSON), np. dayBoundaryHour."""
    key = models.CharField(max_length=100, unique=True)
    value = models.JSONField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.key}={self.value!r}"


class DashboardLayout(models.Model):
    name = models.CharField(max_length=100, default='default')

    # Lista elementów w formacie react-grid-layout: {i, x, y, w, h, ...}
    layout = models.JSONField(default=list)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-updated_at']

    def __str__(self):
        return f"{self.name} ({'active' if self.is_active else 'inactive'})"
