# apps/habits/views.py
import logging

from django.utils import timezone

from apps.core.domain.dates import format_iso_date
from apps.core.http import (
    ApiError, api_view, bind_form, form_errors, get_object, json_body, no_content, ok, ok_list,
)
from apps.core.services import SettingsService
from .domain.markdown_import import validate_markdown_content
from .filters import CategoryFilter, HabitEntryFilter, HabitFilter
from .forms import AutoFillForm, CategoryForm, HabitEntryForm, HabitForm
from .models import Category, Habit
from .serializers import (
    CATEGORY_FIELDS, ENTRY_FIELDS, HABIT_FIELDS, category_to_dict, entry_to_dict, habit_to_dict,
)
from .services import HabitService

logger = logging.getLogger(__name__)

# Ile wpisów z auto-uzupełniania zwracamy w odpowiedzi (reszta tylko w liczniku)
AUTO_FILL_PREVIEW_LIMIT = 100


def _get_habit(pk):
    return get_object(Habit.objects.select_related('category'), 'HABIT_NOT_FOUND', 'Habit not found', pk=pk)


def _get_category(pk):
    return get_object(Category.objects.all(), 'CATEGORY_NOT_FOUND', 'Category not found', pk=pk)


def _auto_fill_form(payload):
    form = AutoFillForm({
        'startDate': payload.get('startDate'),
        'status': payload.get('status'),
        'habitIds': payload.get('habitIds'),
    })
    if not form.is_valid():
        raise form_errors(form)
    return form.cleaned_data


def _auto_fill_response(report, entries):
    return {
        'message': f"Auto-filled {report['filled']} entries with status '{report['status']}'",
        'filled': report['filled'],
        'dateRange': {
            'start': format_iso_date(report['start']),
            'end': format_iso_date(report['end']),
        },
        'habitsProcessed': report['habitsProcessed'],
        'entries': entries,
    }


# --- Nawyki ---

@api_view('GET', 'POST')
def habit_collection(request):
    if request.method == 'POST':
        form = bind_form(HabitForm, json_body(request), HABIT_FIELDS)
        if not form.is_valid():
            raise form_errors(form)
        habit = form.save()
        logger.info("Habit %s created: %s", habit.id, habit.name)
        return ok(habit_to_dict(habit), status=201)

    f = HabitFilter(request.GET, queryset=Habit.objects.select_related('category'))
    if not f.is_valid():
        raise form_errors(f.form)
    return ok_list([habit_to_dict(h) for h in f.qs])


@api_view('GET')
def habit_today(request):
    """Efektywne "dzisiaj" wg ustawionej granicy dnia."""
    service = SettingsService()
    now = timezone.now()
    return ok({
        'effectiveDate': format_iso_date(service.effective_today(now)),
        'dayBoundaryHour': service.get_day_boundary_hour(),
        'serverTime': now.isoformat(),
    })


@api_view('POST')
def habit_import(request):
    payload = json_body(request)
    content = payload.get('content')
    dry_run = bool(payload.get('dryRun', False))

    errors = validate_markdown_content(content)
    if errors:
        raise ApiError('Invalid markdown content', details=errors)

    report = HabitService().import_markdown(content, dry_run=dry_run)
    result = report['result']

    if dry_run:
        return ok({
            'dryRun': True,
            'categories': [{'name': c.name, 'sortOrder': c.sort_order} for c in result.categories],
            'habits': [
                {'name': h.name, 'categoryName': h.category_name, 'sortOrder': h.sort_order}
                for h in result.habits
            ],
            'stats': result.stats,
            'warnings': result.errors,
        })

    return ok({
        'created': {
            'categories': report['created_categories'],
            'habits': len(report['created_habits']),
        },
        'skipped': {'habits': report['skipped_habits']},
        'stats': result.stats,
        'warnings': result.errors,
    }, status=201)


@api_view('POST')
def habits_auto_fill(request):
    options = _auto_fill_form(json_body(request))
    service = HabitService()
    today = SettingsService().effective_today()

    # Brak habitIds = wszystkie aktywne (nieusunięte) nawyki
    habits = options['habitIds'] or Habit.objects.filter(is_deleted=False)

    start = options['startDate'] or service.default_auto_fill_start(None, today)
    report = service.auto_fill_missed(habits, start, today, options['status'])
    report['status'] = options['status']

    entries = [
        {'habitId': habit_id, 'date': format_iso_date(day)}
        for habit_id, day in report['entries'][:AUTO_FILL_PREVIEW_LIMIT]
    ]
    return ok(_auto_fill_response(report, entries))


@api_view('GET', 'PUT', 'DELETE')
def habit_detail(request, pk):
    habit = _get_habit(pk)

    if request.method == 'DELETE':
        habit.soft_delete()
        logger.info("Habit %s soft-deleted", habit.id)
        return no_content()

    if request.method == 'PUT':
        form = bind_form(HabitForm, json_body(request), HABIT_FIELDS, instance=habit)
        if not form.is_valid():
            raise form_errors(form)
        habit = form.save()
        logger.info("Habit %s updated", habit.id)
        return ok(habit_to_dict(habit))

    return ok(habit_to_dict(habit, entries=habit.entries.all()))


@api_view('PATCH')
def habit_restore(request, pk):
    habit = _get_habit(pk)
    habit.restore()
    logger.info("Habit %s restored", habit.id)
    return ok(habit_to_dict(habit))


@api_view('GET', 'POST')
def habit_entries(request, pk):
    habit = _get_habit(pk)

    if request.method == 'POST':
        payload = json_body(request)
        if not payload.get('date'):
            raise ApiError('Date is required')
        form = bind_form(HabitEntryForm, payload, ENTRY_FIELDS)
        if not form.is_valid():
            raise form_errors(form)
        data = form.cleaned_data

        # Aktualizujemy tylko pola, które przyszły w żądaniu
        entry, _ = HabitService().record_entry(
            habit, data['date'],
            status=data['status'] if 'status' in payload else None,
            notes=data['notes'] if 'notes' in payload else None,
            count=data['count'] if 'count' in payload else None,
        )
        return ok(entry_to_dict(entry), status=201)

    f = HabitEntryFilter(request.GET, queryset=habit.entries.all())
    if not f.is_valid():
        raise form_errors(f.form)
    return ok_list([entry_to_dict(e) for e in f.qs])


@api_view('POST')
def habit_auto_fill(request, pk):
    habit = _get_habit(pk)
    options = _auto_fill_form(json_body(request))
    service = HabitService()
    today = SettingsService().effective_today()

    start = options['startDate'] or service.default_auto_fill_start(habit, today)
    report = service.auto_fill_missed([habit], start, today, options['status'])
    report['status'] = options['status']

    filled_dates = [day for _, day in report['entries']]
    entries = habit.entries.filter(date__in=filled_dates).order_by('date')
    return ok(_auto_fill_response(report, [entry_to_dict(e) for e in entries]))


@api_view('GET')
def habit_streak(request, pk):
    habit = _get_habit(pk)
    today = SettingsService().effective_today()
    stats = HabitService().streak(habit, today)
    return ok({
        'habitId': habit.id,
        'currentStreak': stats.current_streak,
        'longestStreak': stats.longest_streak,
        'lastCompletedDate': format_iso_date(stats.last_completed_date) if stats.last_completed_date else None,
        'effectiveDate': format_iso_date(today),
    })


# --- Kategorie ---

@api_view('GET', 'POST')
def category_collection(request):
    if request.method == 'POST':
        form = bind_form(CategoryForm, json_body(request), CATEGORY_FIELDS)
        if not form.is_valid():
            raise form_errors(form)
        category = form.save()
        logger.info("Category %s created: %s", category.id, category.name)
        return ok(category_to_dict(category), status=201)

    f = CategoryFilter(request.GET, queryset=Category.objects.all())
    if not f.is_valid():
        raise form_errors(f.form)
    return ok_list([category_to_dict(c) for c in f.qs])


@api_view('GET', 'PUT', 'DELETE')
def category_detail(request, pk):
    category = _get_category(pk)

    if request.method == 'DELETE':
        category.soft_delete()
        logger.info("Category %s soft-deleted", category.id)
        return no_content()

    if request.method == 'PUT':
        form = bind_form(CategoryForm, json_body(request), CATEGORY_FIELDS, instance=category)
        if not form.is_valid():
            raise form_errors(form)
        category = form.save()
        return ok(category_to_dict(category))

    return ok(category_to_dict(category))


@api_view('PATCH')
def category_restore(request, pk):
    category = _get_category(pk)
    category.restore()
    logger.info("Category %s restored", category.id)
    return ok(category_to_dict(category))
