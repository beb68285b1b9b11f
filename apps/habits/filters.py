# apps/habits/filters.py
import django_filters
from apps.core.filters import SoftDeleteFilterSet
from .models import Category, Habit, HabitEntry


class HabitFilter(SoftDeleteFilterSet):
    categoryId = django_filters.NumberFilter(field_name="category_id", label="Kategoria")
    isActive = django_filters.BooleanFilter(field_name="is_active", label="Aktywne")

    class Meta:
        model = Habit
        fields = []


class CategoryFilter(SoftDeleteFilterSet):
    class Meta:
        model = Category
        fields = []


class HabitEntryFilter(django_filters.FilterSet):
    startDate = django_filters.DateFilter(field_name='date', lookup_expr='gte', label="Od")
    endDate = django_filters.DateFilter(field_name='date', lookup_expr='lte', label="Do")
    status = django_filters.ChoiceFilter(choices=HabitEntry.Status.choices, label="Status")

    class Meta:
        model = HabitEntry
        fields = []
