from django.contrib import admin
from .models import Project, Tag, Task


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ('title', 'status', 'planned_date', 'project', 'priority', 'is_deleted')
    list_filter = ('status', 'is_deleted', 'project')
    search_fields = ('title',)
    filter_horizontal = ('tags',)


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ('name', 'color', 'is_deleted')
    search_fields = ('name',)


admin.site.register(Tag)
