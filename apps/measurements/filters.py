# apps/measurements/filters.py
import django_filters
from .models import MeasurementEntry


class MeasurementEntryFilter(django_filters.FilterSet):
    startDate = django_filters.DateFilter(field_name='date', lookup_expr='gte', label="Od")
    endDate = django_filters.DateFilter(field_name='date', lookup_expr='lte', label="Do")

    class Meta:
        model = MeasurementEntry
        fields = []
