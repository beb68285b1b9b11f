from datetime import date, datetime

import pytest

from apps.measurements.models import Measurement, MeasurementEntry, MeasurementTarget

pytestmark = pytest.mark.django_db


@pytest.fixture
def weight(api):
    return api.post('/api/measurements/', {'type': 'weight', 'name': 'Weight', 'unit': 'lbs'}).json()['data']


@pytest.fixture
def target(api, weight):
    return api.post(f"/api/measurements/{weight['id']}/targets/", {
        'startValue': 200, 'goalValue': 180, 'startDate': '2024-01-01', 'goalDate': '2024-01-31',
    }).json()['data']


def test_create_measurement(api, weight):
    assert weight['type'] == 'weight'
    assert weight['unit'] == 'lbs'
    assert api.get('/api/measurements/').json()['count'] == 1


def test_measurement_requires_type(api):
    response = api.post('/api/measurements/', {'name': 'Weight'})

    assert response.status_code == 400
    assert 'type' in response.json()['details']


def test_entry_upsert_by_date(api, weight):
    url = f"/api/measurements/{weight['id']}/entries/"

    assert api.post(url, {'date': '2024-01-05', 'value': 199.4}).status_code == 201
    response = api.post(url, {'date': '2024-01-05', 'value': '198.60'})

    assert response.json()['data']['value'] == 198.6
    assert MeasurementEntry.objects.filter(measurement_id=weight['id']).count() == 1


def test_entry_requires_date_and_value(api, weight):
    response = api.post(f"/api/measurements/{weight['id']}/entries/", {'date': '2024-01-05'})

    assert response.status_code == 400
    assert response.json()['error'] == 'Date and value are required'


def test_entries_newest_first_with_limit(api, weight):
    measurement = Measurement.objects.get(pk=weight['id'])
    for day, value in ((1, 200), (2, 199), (3, 198)):
        MeasurementEntry.objects.create(measurement=measurement, date=date(2024, 1, day), value=value)

    data = api.get(f"/api/measurements/{weight['id']}/entries/", {'limit': 2}).json()

    assert [e['date'] for e in data['data']] == ['2024-01-03', '2024-01-02']


def test_delete_entry(api, weight):
    entry = api.post(f"/api/measurements/{weight['id']}/entries/", {'date': '2024-01-05', 'value': 199}).json()['data']

    assert api.delete(f"/api/measurements/{weight['id']}/entries/{entry['id']}/").status_code == 204
    assert api.delete(f"/api/measurements/{weight['id']}/entries/{entry['id']}/").status_code == 404


def test_delete_measurement_cascades(api, weight, target):
    assert api.delete(f"/api/measurements/{weight['id']}/").status_code == 204
    assert not MeasurementTarget.objects.exists()
    assert api.get(f"/api/measurements/{weight['id']}/").status_code == 404


# --- Cele ---

def test_target_goal_before_start_is_rejected(api, weight):
    response = api.post(f"/api/measurements/{weight['id']}/targets/", {
        'startValue': 200, 'goalValue': 180, 'startDate': '2024-02-01', 'goalDate': '2024-01-01',
    })

    assert response.status_code == 400
    assert 'goal_date' in response.json()['details']


def test_target_update_is_partial(api, weight, target):
    response = api.put(f"/api/measurements/{weight['id']}/targets/{target['id']}/", {'goalValue': 175})

    assert response.json()['data']['goalValue'] == 175.0
    assert response.json()['data']['startDate'] == '2024-01-01'


def test_newest_target_is_current(api, weight, target):
    newer = api.post(f"/api/measurements/{weight['id']}/targets/", {
        'startValue': 190, 'goalValue': 170, 'startDate': '2024-02-01', 'goalDate': '2024-03-01',
    }).json()['data']

    data = api.get('/api/measurements/').json()['data'][0]

    assert [t['id'] for t in data['targets']] == [newer['id']]


# --- Wykres ---

def test_graph_data_daily_line(api, weight, target):
    api.post(f"/api/measurements/{weight['id']}/entries/", {'date': '2024-01-10', 'value': 195})

    data = api.get(f"/api/measurements/{weight['id']}/graph-data/").json()['data']

    line = data['target']['targetLine']
    assert len(line) == 31
    assert line[0] == {'date': '2024-01-01', 'value': 200.0}
    assert line[15] == {'date': '2024-01-16', 'value': 190.0}
    assert line[-1] == {'date': '2024-01-31', 'value': 180.0}
    assert data['target']['degenerate'] is False
    assert data['entries'] == [{'date': '2024-01-10', 'value': 195.0}]


@pytest.mark.parametrize("interval, days", [
    ('7', ['2024-01-01', '2024-01-08', '2024-01-15', '2024-01-22', '2024-01-29', '2024-01-31']),
    ('auto', ['2024-01-01', '2024-01-07', '2024-01-13', '2024-01-19', '2024-01-25', '2024-01-31']),
])
def test_graph_data_sampling(api, weight, target, interval, days):
    data = api.get(f"/api/measurements/{weight['id']}/graph-data/", {'interval': interval}).json()['data']

    assert [p['date'] for p in data['target']['targetLine']] == days


@pytest.mark.parametrize("interval", ['0', '-3', 'weekly'])
def test_graph_data_invalid_interval(api, weight, target, interval):
    response = api.get(f"/api/measurements/{weight['id']}/graph-data/", {'interval': interval})

    assert response.status_code == 400
    assert response.json()['code'] == 'INVALID_CONFIGURATION'


def test_graph_data_without_target(api, weight):
    data = api.get(f"/api/measurements/{weight['id']}/graph-data/").json()['data']

    assert data['target'] is None


def test_graph_data_entry_range(api, weight):
    for day in (1, 15, 31):
        api.post(f"/api/measurements/{weight['id']}/entries/", {'date': f'2024-01-{day:02d}', 'value': 190})

    data = api.get(f"/api/measurements/{weight['id']}/graph-data/",
                   {'startDate': '2024-01-10', 'endDate': '2024-01-20'}).json()['data']

    assert [e['date'] for e in data['entries']] == ['2024-01-15']


def test_same_day_target_is_degenerate(api, weight):
    api.post(f"/api/measurements/{weight['id']}/targets/", {
        'startValue': 200, 'goalValue': 180, 'startDate': '2024-01-01', 'goalDate': '2024-01-01',
    })

    graph = api.get(f"/api/measurements/{weight['id']}/graph-data/").json()['data']
    assert graph['target']['targetLine'] == []
    assert graph['target']['degenerate'] is True

    response = api.get(f"/api/measurements/{weight['id']}/progress/", {'date': '2024-01-01'})
    assert response.status_code == 422
    assert response.json()['code'] == 'DEGENERATE_TARGET'


# --- Postęp ---

def test_progress_snapshot(api, weight, target):
    api.post(f"/api/measurements/{weight['id']}/entries/", {'date': '2024-01-15', 'value': 191})
    api.post(f"/api/measurements/{weight['id']}/entries/", {'date': '2024-01-20', 'value': 185})

    data = api.get(f"/api/measurements/{weight['id']}/progress/", {'date': '2024-01-16'}).json()['data']

    assert data['expectedValue'] == 190.0
    # Wpis z przyszłości (20 stycznia) nie jest brany pod uwagę
    assert data['latestEntry']['date'] == '2024-01-15'
    assert data['deviation'] == {'value': 1.0, 'isAboveTarget': True}
    assert data['progressPercent'] == 45.0


def test_progress_without_entries(api, weight, target):
    data = api.get(f"/api/measurements/{weight['id']}/progress/", {'date': '2024-01-01'}).json()['data']

    assert data['expectedValue'] == 200.0
    assert data['latestEntry'] is None
    assert data['deviation'] is None
    assert data['progressPercent'] is None


def test_progress_defaults_to_effective_today(api, weight, target, freeze_now):
    freeze_now(datetime(2024, 2, 1, 5, 0))  # przed granicą: nadal 31 stycznia

    data = api.get(f"/api/measurements/{weight['id']}/progress/").json()['data']

    assert data['date'] == '2024-01-31'
    assert data['expectedValue'] == 180.0


def test_progress_without_target(api, weight):
    response = api.get(f"/api/measurements/{weight['id']}/progress/")

    assert response.status_code == 404
    assert response.json()['code'] == 'TARGET_NOT_FOUND'


def test_graph_data_rejects_inverted_range(api, weight, target):
    response = api.get(f"/api/measurements/{weight['id']}/graph-data/",
                       {'startDate': '2024-02-01', 'endDate': '2024-01-01'})

    assert response.status_code == 400
    assert response.json()['code'] == 'INVALID_RANGE'


def test_progress_reports_direction(api, weight, target):
    data = api.get(f"/api/measurements/{weight['id']}/progress/", {'date': '2024-01-10'}).json()['data']
    assert data['direction'] == 'decreasing'

    api.post(f"/api/measurements/{weight['id']}/targets/", {
        'startValue': 180, 'goalValue': 190, 'startDate': '2024-02-01', 'goalDate': '2024-03-01',
    })
    data = api.get(f"/api/measurements/{weight['id']}/progress/", {'date': '2024-02-10'}).json()['data']
    assert data['direction'] == 'increasing'
