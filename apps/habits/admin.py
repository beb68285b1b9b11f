# apps/habits/admin.py
from django.contrib import admin
from .models import Category, Habit, HabitEntry


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'sort_order', 'is_deleted')
    list_filter = ('is_deleted',)
    search_fields = ('name',)


class HabitEntryInline(admin.TabularInline):
    model = HabitEntry
    extra = 0
    fields = ('date', 'status', 'count', 'notes')


@admin.register(Habit)
class HabitAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'parent_habit', 'daily_target', 'is_active', 'is_deleted')
    list_filter = ('is_active', 'is_deleted', 'category')
    search_fields = ('name',)
    inlines = [HabitEntryInline]


@admin.register(HabitEntry)
class HabitEntryAdmin(admin.ModelAdmin):
    list_display = ('habit', 'date', 'status', 'count')
    list_filter = ('status', 'date', 'habit')
