# apps/measurements/models.py
from django.db import models

from .domain.entities import TargetEntity


class Measurement(models.Model):
    type = models.CharField(max_length=50)  # np. 'weight'
    name = models.CharField(max_length=255)
    unit = models.CharField(max_length=20, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.unit})" if self.unit else self.name


class MeasurementEntry(models.Model):
    measurement = models.ForeignKey(Measurement, on_delete=models.CASCADE, related_name='entries')
    date = models.DateField()
    value = models.DecimalField(max_digits=10, decimal_places=2)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('measurement', 'date')
        ordering = ['-date']

    def __str__(self):
        return f"{self.measurement.name} @ {self.date}: {self.value}"


class MeasurementTarget(models.Model):
    measurement = models.ForeignKey(Measurement, on_delete=models.CASCADE, related_name='targets')
    start_value = models.DecimalField(max_digits=10, decimal_places=2)
    goal_value = models.DecimalField(max_digits=10, decimal_places=2)
    # Opcjonalny cel "ambitny" - tylko do wyświetlenia, nie wpływa na linię
    reach_goal_value = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    start_date = models.DateField()
    goal_date = models.DateField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        # Najnowszy cel = bieżący
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.measurement.name}: {self.start_value} -> {self.goal_value} ({self.goal_date})"

    def to_entity(self) -> TargetEntity:
        return TargetEntity.from_record(
            start_value=self.start_value,
            goal_value=self.goal_value,
            start_date=self.start_date,
            goal_date=self.goal_date,
            reach_goal_value=self.reach_goal_value,
        )
