# apps/core/filters.py
import django_filters


class SoftDeleteFilterSet(django_filters.FilterSet):
    """Domyślnie ukrywa usunięte; includeDeleted=true pokazuje wszystko."""
    includeDeleted = django_filters.BooleanFilter(method='filter_deleted', label="Pokaż usunięte")

    def filter_queryset(self, queryset):
        queryset = super().filter_queryset(queryset)
        # Filtr nie jest wywoływany przy braku parametru, więc domyślne ukrywanie jest tutaj
        if not self.form.cleaned_data.get('includeDeleted'):
            queryset = queryset.filter(is_deleted=False)
        return queryset

    def filter_deleted(self, queryset, name, value):
        return queryset
