import django_filters
from apps.core.filters import SoftDeleteFilterSet
from .models import Project, Tag, Task


class TaskFilter(SoftDeleteFilterSet):
    title = django_filters.CharFilter(
        lookup_expr='icontains',
        label="Tytuł zawiera",
    )
    status = django_filters.ChoiceFilter(
        choices=Task.StatusChoices.choices,
        label="Status",
    )
    projectId = django_filters.NumberFilter(field_name='project_id', label="Projekt")
    tagId = django_filters.NumberFilter(field_name='tags__id', distinct=True, label="Tag")
    startDate = django_filters.DateFilter(field_name='planned_date', lookup_expr='gte', label="Zaplanowane od")
    endDate = django_filters.DateFilter(field_name='planned_date', lookup_expr='lte', label="Zaplanowane do")

    class Meta:
        model = Task
        fields = []


class ProjectFilter(SoftDeleteFilterSet):
    class Meta:
        model = Project
        fields = []


class TagFilter(SoftDeleteFilterSet):
    class Meta:
        model = Tag
        fields = []
