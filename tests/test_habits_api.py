from datetime import date, datetime

import pytest
from django.core.management import call_command

from apps.core.models import Setting
from apps.habits.models import Category, Habit, HabitEntry

pytestmark = pytest.mark.django_db


@pytest.fixture
def habit(api, freeze_now):
    freeze_now(datetime(2024, 3, 10, 12, 0))
    return api.post('/api/habits/', {'name': 'Drink water'}).json()['data']


# --- Granica dnia ---

def test_today_before_boundary_is_previous_day(api, freeze_now):
    freeze_now(datetime(2024, 3, 10, 5, 30))

    data = api.get('/api/habits/today/').json()['data']

    assert data['effectiveDate'] == '2024-03-09'
    assert data['dayBoundaryHour'] == 6


def test_today_follows_configured_boundary(api, freeze_now):
    freeze_now(datetime(2024, 3, 10, 5, 30))
    Setting.objects.create(key='dayBoundaryHour', value=0)

    assert api.get('/api/habits/today/').json()['data']['effectiveDate'] == '2024-03-10'


# --- Nawyki ---

def test_create_habit_with_category(api):
    category = api.post('/api/categories/', {'name': 'Health', 'iconColor': '#00ff00'}).json()['data']

    response = api.post('/api/habits/', {'name': ' Stretch ', 'categoryId': category['id'], 'dailyTarget': 3})

    assert response.status_code == 201
    data = response.json()['data']
    assert data['name'] == 'Stretch'
    assert data['categoryId'] == category['id']
    assert data['category']['iconColor'] == '#00ff00'
    assert data['dailyTarget'] == 3
    assert data['isActive'] is True


def test_create_habit_requires_name(api):
    response = api.post('/api/habits/', {'name': '  '})

    assert response.status_code == 400
    assert response.json()['code'] == 'VALIDATION_ERROR'
    assert 'name' in response.json()['details']


def test_update_is_partial(api, habit):
    response = api.put(f"/api/habits/{habit['id']}/", {'isActive': False})

    assert response.status_code == 200
    assert response.json()['data']['name'] == 'Drink water'
    assert response.json()['data']['isActive'] is False


def test_habit_cannot_be_its_own_parent(api, habit):
    response = api.put(f"/api/habits/{habit['id']}/", {'parentHabitId': habit['id']})

    assert response.status_code == 400
    assert 'parent_habit' in response.json()['details']


def test_soft_delete_and_restore(api, habit):
    assert api.delete(f"/api/habits/{habit['id']}/").status_code == 204
    assert api.get('/api/habits/').json()['count'] == 0
    assert api.get('/api/habits/', {'includeDeleted': 'true'}).json()['count'] == 1

    response = api.patch(f"/api/habits/{habit['id']}/restore/")
    assert response.json()['data']['isDeleted'] is False
    assert api.get('/api/habits/').json()['count'] == 1


def test_filter_by_category(api):
    health = Category.objects.create(name='Health')
    Habit.objects.create(name='Walk', category=health)
    Habit.objects.create(name='Read')

    data = api.get('/api/habits/', {'categoryId': health.id}).json()

    assert data['count'] == 1
    assert data['data'][0]['name'] == 'Walk'


def test_missing_habit(api):
    response = api.get('/api/habits/999/')

    assert response.status_code == 404
    assert response.json() == {'error': 'Habit not found', 'code': 'HABIT_NOT_FOUND'}


# --- Wpisy ---

def test_entry_upsert_keeps_one_row_per_day(api, habit):
    url = f"/api/habits/{habit['id']}/entries/"

    first = api.post(url, {'date': '2024-03-09', 'status': 'complete', 'notes': 'morning'})
    second = api.post(url, {'date': '2024-03-09', 'status': 'partial'})

    assert first.status_code == 201
    assert second.json()['data']['id'] == first.json()['data']['id']
    entry = HabitEntry.objects.get(habit_id=habit['id'], date=date(2024, 3, 9))
    assert entry.status == 'partial'
    assert entry.notes == 'morning'


def test_entry_requires_date_and_valid_status(api, habit):
    url = f"/api/habits/{habit['id']}/entries/"

    assert api.post(url, {'status': 'complete'}).json()['error'] == 'Date is required'
    response = api.post(url, {'date': '2024-03-09', 'status': 'done'})
    assert response.status_code == 400
    assert 'status' in response.json()['details']


def test_entry_without_status_is_empty(api, habit):
    response = api.post(f"/api/habits/{habit['id']}/entries/", {'date': '2024-03-09'})

    assert response.json()['data']['status'] == 'empty'


def test_entries_filtered_by_date_range(api, habit):
    for day in ('2024-03-01', '2024-03-05', '2024-03-09'):
        HabitEntry.objects.create(habit_id=habit['id'], date=day, status='complete')

    data = api.get(f"/api/habits/{habit['id']}/entries/",
                   {'startDate': '2024-03-02', 'endDate': '2024-03-09'}).json()

    assert [e['date'] for e in data['data']] == ['2024-03-09', '2024-03-05']


def test_entries_reject_bad_date_filter(api, habit):
    response = api.get(f"/api/habits/{habit['id']}/entries/", {'startDate': 'soon'})

    assert response.status_code == 400


# --- Auto-uzupełnianie ---

def test_auto_fill_defaults_to_creation_day(api, habit, freeze_now):
    HabitEntry.objects.create(habit_id=habit['id'], date=date(2024, 3, 12), status='complete')
    freeze_now(datetime(2024, 3, 15, 12, 0))

    data = api.post(f"/api/habits/{habit['id']}/auto-fill-missed/").json()['data']

    assert data['filled'] == 4
    assert data['dateRange'] == {'start': '2024-03-10', 'end': '2024-03-15'}
    assert [e['date'] for e in data['entries']] == ['2024-03-10', '2024-03-11', '2024-03-13', '2024-03-14']
    assert {e['status'] for e in data['entries']} == {'missed'}
    # Dzisiejszy dzień nie jest uzupełniany, istniejący wpis nie jest nadpisany
    assert not HabitEntry.objects.filter(habit_id=habit['id'], date=date(2024, 3, 15)).exists()
    assert HabitEntry.objects.get(habit_id=habit['id'], date=date(2024, 3, 12)).status == 'complete'


def test_auto_fill_is_idempotent(api, habit, freeze_now):
    freeze_now(datetime(2024, 3, 15, 12, 0))
    url = f"/api/habits/{habit['id']}/auto-fill-missed/"

    api.post(url)
    assert api.post(url).json()['data']['filled'] == 0


def test_auto_fill_respects_day_boundary(api, habit, freeze_now):
    # 03:00 -> efektywnie nadal 14 marca, więc 14 marca to "dziś"
    freeze_now(datetime(2024, 3, 15, 3, 0))

    data = api.post(f"/api/habits/{habit['id']}/auto-fill-missed/").json()['data']

    assert data['dateRange']['end'] == '2024-03-14'
    assert data['filled'] == 4


def test_auto_fill_all_habits_with_custom_status(api, habit, freeze_now):
    Habit.objects.create(name='Read')
    freeze_now(datetime(2024, 3, 15, 12, 0))

    data = api.post('/api/habits/auto-fill-missed/', {'startDate': '2024-03-12', 'status': 'na'}).json()['data']

    assert data['filled'] == 6
    assert data['habitsProcessed'] == 2
    assert HabitEntry.objects.filter(status='na').count() == 6


def test_auto_fill_start_after_today_is_invalid_range(api, habit, freeze_now):
    freeze_now(datetime(2024, 3, 15, 12, 0))

    response = api.post('/api/habits/auto-fill-missed/', {'startDate': '2024-04-01'})

    assert response.status_code == 400
    assert response.json()['code'] == 'INVALID_RANGE'


def test_autofill_command(habit, freeze_now):
    freeze_now(datetime(2024, 3, 15, 12, 0))

    call_command('autofill_missed', start='2024-03-13')

    assert HabitEntry.objects.filter(status='missed').count() == 2


# --- Seria ---

def test_streak_uses_effective_today(api, habit, freeze_now):
    for day in (date(2024, 3, 13), date(2024, 3, 14)):
        HabitEntry.objects.create(habit_id=habit['id'], date=day, status='complete')
    freeze_now(datetime(2024, 3, 15, 12, 0))

    data = api.get(f"/api/habits/{habit['id']}/streak/").json()['data']

    assert data['currentStreak'] == 2
    assert data['longestStreak'] == 2
    assert data['lastCompletedDate'] == '2024-03-14'
    assert data['effectiveDate'] == '2024-03-15'


# --- Import ---

MARKDOWN = "# Health\n## Morning\n- Drink water\n- Stretch\n# Mind\n- Read\n-"


def test_import_dry_run_writes_nothing(api):
    response = api.post('/api/habits/import/', {'content': MARKDOWN, 'dryRun': True})

    data = response.json()['data']
    assert response.status_code == 200
    assert data['dryRun'] is True
    assert [h['categoryName'] for h in data['habits']] == ['Health > Morning', 'Health > Morning', 'Mind']
    assert data['warnings'] == ['Line 7: Empty habit name']
    assert not Habit.objects.exists()


def test_import_creates_and_skips_existing(api):
    Habit.objects.create(name='Read')

    response = api.post('/api/habits/import/', {'content': MARKDOWN})

    data = response.json()['data']
    assert response.status_code == 201
    assert data['created'] == {'categories': 3, 'habits': 2}
    assert data['skipped'] == {'habits': ['Read']}
    assert Habit.objects.get(name='Stretch').category.name == 'Health > Morning'


def test_import_rejects_content_without_habits(api):
    response = api.post('/api/habits/import/', {'content': '# Only a header'})

    assert response.status_code == 400
    assert response.json()['details'] == ['No habits found. Habits should be on lines starting with "- "']


# --- Kategorie ---

def test_category_crud(api):
    created = api.post('/api/categories/', {'name': 'Mind', 'sortOrder': 2}).json()['data']
    assert created['sortOrder'] == 2

    updated = api.put(f"/api/categories/{created['id']}/", {'icon': 'psychology'}).json()['data']
    assert updated['name'] == 'Mind'
    assert updated['icon'] == 'psychology'

    assert api.delete(f"/api/categories/{created['id']}/").status_code == 204
    assert api.get('/api/categories/').json()['count'] == 0
    assert api.patch(f"/api/categories/{created['id']}/restore/").json()['data']['isDeleted'] is False


def test_deleted_category_cannot_be_assigned(api):
    category = Category.objects.create(name='Old', is_deleted=True)

    response = api.post('/api/habits/', {'name': 'Walk', 'categoryId': category.id})

    assert response.status_code == 400
    assert 'category' in response.json()['details']


@pytest.mark.parametrize("habit_ids", [['abc'], 'abc', [999]])
def test_auto_fill_rejects_bad_habit_ids(api, habit, freeze_now, habit_ids):
    freeze_now(datetime(2024, 3, 15, 12, 0))

    response = api.post('/api/habits/auto-fill-missed/', {'habitIds': habit_ids})

    assert response.status_code == 400
    assert 'habitIds' in response.json()['details']
    assert not HabitEntry.objects.exists()


def test_auto_fill_selected_habits_only(api, habit, freeze_now):
    other = Habit.objects.create(name='Read')
    freeze_now(datetime(2024, 3, 15, 12, 0))

    data = api.post('/api/habits/auto-fill-missed/',
                    {'startDate': '2024-03-13', 'habitIds': [habit['id']]}).json()['data']

    assert data['habitsProcessed'] == 1
    assert data['filled'] == 2
    assert not HabitEntry.objects.filter(habit=other).exists()
