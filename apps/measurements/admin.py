# apps/measurements/admin.py
from django.contrib import admin
from .models import Measurement, MeasurementEntry, MeasurementTarget


class MeasurementTargetInline(admin.TabularInline):
    model = MeasurementTarget
    extra = 0
    fields = ('start_value', 'goal_value', 'reach_goal_value', 'start_date', 'goal_date')


@admin.register(Measurement)
class MeasurementAdmin(admin.ModelAdmin):
    list_display = ('name', 'type', 'unit')
    list_filter = ('type',)
    search_fields = ('name',)
    inlines = [MeasurementTargetInline]


@admin.register(MeasurementEntry)
class MeasurementEntryAdmin(admin.ModelAdmin):
    list_display = ('measurement', 'date', 'value')
    list_filter = ('measurement', 'date')
