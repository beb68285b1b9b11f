from datetime import datetime, timezone as dt_timezone

import pytest

from apps.tasks.models import Project, Tag, Task

pytestmark = pytest.mark.django_db


@pytest.fixture
def project():
    return Project.objects.create(name='Home')


@pytest.fixture
def tag():
    return Tag.objects.create(name='urgent', color='#ff0000')


def test_create_task_with_project_and_tags(api, project, tag):
    response = api.post('/api/tasks/', {
        'title': 'Fix sink', 'plannedDate': '2024-03-12', 'projectId': project.id, 'tagIds': [tag.id],
    })

    assert response.status_code == 201
    data = response.json()['data']
    assert data['status'] == 'pending'
    assert data['plannedDate'] == '2024-03-12'
    assert data['project']['name'] == 'Home'
    assert [t['name'] for t in data['tags']] == ['urgent']
    assert data['completedAt'] is None


def test_create_task_requires_title(api):
    response = api.post('/api/tasks/', {'title': ''})

    assert response.status_code == 400
    assert 'title' in response.json()['details']


def test_created_complete_task_gets_timestamp(api, freeze_now):
    now = freeze_now(datetime(2024, 3, 10, 8, 0))

    data = api.post('/api/tasks/', {'title': 'Done already', 'status': 'complete'}).json()['data']

    assert data['completedAt'] == now.isoformat()


def test_complete_and_reopen(api, freeze_now):
    task = Task.objects.create(title='Call bank')
    now = freeze_now(datetime(2024, 3, 10, 8, 0))

    completed = api.post(f'/api/tasks/{task.id}/complete/').json()['data']
    assert completed['status'] == 'complete'
    assert completed['completedAt'] == now.isoformat()

    # Ponowne ukończenie nie przesuwa znacznika
    freeze_now(datetime(2024, 3, 11, 8, 0))
    again = api.post(f'/api/tasks/{task.id}/complete/').json()['data']
    assert again['completedAt'] == now.isoformat()

    reopened = api.post(f'/api/tasks/{task.id}/reopen/').json()['data']
    assert reopened['status'] == 'pending'
    assert reopened['completedAt'] is None


def test_status_change_through_update_keeps_timestamp_consistent(api):
    task = Task.objects.create(title='Write report')

    data = api.put(f'/api/tasks/{task.id}/', {'status': 'complete'}).json()['data']
    assert data['completedAt'] is not None
    assert data['title'] == 'Write report'

    data = api.put(f'/api/tasks/{task.id}/', {'status': 'pending'}).json()['data']
    assert data['completedAt'] is None


def test_update_keeps_tags_when_not_sent(api, tag):
    task = Task.objects.create(title='Tagged')
    task.tags.add(tag)

    data = api.put(f'/api/tasks/{task.id}/', {'title': 'Renamed'}).json()['data']

    assert data['title'] == 'Renamed'
    assert [t['id'] for t in data['tags']] == [tag.id]


def test_invalid_status(api):
    task = Task.objects.create(title='Something')

    response = api.put(f'/api/tasks/{task.id}/', {'status': 'archived'})

    assert response.status_code == 400
    assert 'status' in response.json()['details']


def test_task_filters(api, project, tag):
    a = Task.objects.create(title='Buy milk', planned_date='2024-03-11', project=project)
    b = Task.objects.create(title='Buy bread', planned_date='2024-03-20', status='complete')
    b.tags.add(tag)
    Task.objects.create(title='Parking lot idea')

    def titles(**params):
        return sorted(t['title'] for t in api.get('/api/tasks/', params).json()['data'])

    assert titles(projectId=project.id) == [a.title]
    assert titles(tagId=tag.id) == [b.title]
    assert titles(status='complete') == [b.title]
    assert titles(title='buy') == ['Buy bread', 'Buy milk']
    assert titles(startDate='2024-03-10', endDate='2024-03-15') == [a.title]


def test_soft_delete_and_restore(api):
    task = Task.objects.create(title='Temporary')

    assert api.delete(f'/api/tasks/{task.id}/').status_code == 204
    assert api.get('/api/tasks/').json()['count'] == 0
    assert api.get('/api/tasks/', {'includeDeleted': 'true'}).json()['data'][0]['isDeleted'] is True

    assert api.patch(f'/api/tasks/{task.id}/restore/').json()['data']['isDeleted'] is False
    assert api.get('/api/tasks/').json()['count'] == 1


def test_missing_task(api):
    response = api.post('/api/tasks/404/complete/')

    assert response.status_code == 404
    assert response.json()['code'] == 'TASK_NOT_FOUND'


# --- Projekty i tagi ---

def test_project_detail_with_stats(api, project):
    Task.objects.create(title='One', project=project, status='complete',
                        completed_at=datetime(2024, 3, 10, tzinfo=dt_timezone.utc))
    Task.objects.create(title='Two', project=project)
    Task.objects.create(title='Gone', project=project, is_deleted=True)

    data = api.get(f'/api/projects/{project.id}/').json()['data']

    assert data['stats'] == {'totalTasks': 2, 'completedTasks': 1, 'pendingTasks': 1, 'completionRate': 50}
    assert sorted(t['title'] for t in data['tasks']) == ['One', 'Two']


def test_project_crud(api):
    created = api.post('/api/projects/', {'name': 'Garden', 'color': '#00aa00'}).json()['data']
    assert created['color'] == '#00aa00'

    updated = api.put(f"/api/projects/{created['id']}/", {'description': 'Spring work'}).json()['data']
    assert updated['name'] == 'Garden'

    assert api.delete(f"/api/projects/{created['id']}/").status_code == 204
    assert api.get('/api/projects/').json()['count'] == 0


def test_tag_crud(api):
    created = api.post('/api/tags/', {'name': 'errand'})
    assert created.status_code == 201

    tag_id = created.json()['data']['id']
    assert api.put(f'/api/tags/{tag_id}/', {'color': '#123456'}).json()['data']['name'] == 'errand'
    assert api.delete(f'/api/tags/{tag_id}/').status_code == 204
    assert api.get('/api/tags/').json()['count'] == 0


def test_deleted_tag_cannot_be_assigned(api):
    tag = Tag.objects.create(name='old', is_deleted=True)

    response = api.post('/api/tasks/', {'title': 'New', 'tagIds': [tag.id]})

    assert response.status_code == 400
    assert 'tags' in response.json()['details']
