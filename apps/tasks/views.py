# apps/tasks/views.py
import logging

from django.db.models import Count, Q
from django.utils import timezone

from apps.core.http import api_view, bind_form, form_errors, get_object, json_body, no_content, ok, ok_list
from .adapters.orm_repositories import DjangoTaskRepository
from .domain.entities import TaskStatus
from .domain.services import TaskService
from .filters import ProjectFilter, TagFilter, TaskFilter
from .forms import ProjectForm, TagForm, TaskForm
from .models import Project, Tag, Task
from .serializers import PROJECT_FIELDS, TAG_FIELDS, TASK_FIELDS, project_to_dict, tag_to_dict, task_to_dict

logger = logging.getLogger(__name__)


def _task_queryset():
    return Task.objects.select_related('project').prefetch_related('tags')


def _get_task(pk):
    return get_object(_task_queryset(), 'TASK_NOT_FOUND', 'Task not found', pk=pk)


def _get_project(pk):
    return get_object(Project.objects.all(), 'PROJECT_NOT_FOUND', 'Project not found', pk=pk)


def _get_tag(pk):
    return get_object(Tag.objects.all(), 'TAG_NOT_FOUND', 'Tag not found', pk=pk)


def _task_service():
    # Złożenie serwisu (Manual Dependency Injection)
    return TaskService(DjangoTaskRepository())


def project_stats(project):
    stats = project.tasks.filter(is_deleted=False).aggregate(
        total=Count('id'),
        done=Count('id', filter=Q(status=TaskStatus.COMPLETE.value)),
    )
    total = stats['total']
    done = stats['done']
    return {
        'totalTasks': total,
        'completedTasks': done,
        'pendingTasks': total - done,
        'completionRate': round(done / total * 100) if total > 0 else 0,
    }


# --- Zadania ---

@api_view('GET', 'POST')
def task_collection(request):
    if request.method == 'POST':
        form = bind_form(TaskForm, json_body(request), TASK_FIELDS)
        if not form.is_valid():
            raise form_errors(form)
        task = form.save()
        if task.status == TaskStatus.COMPLETE.value:
            _task_service().complete_task(task.id, timezone.now())
        logger.info("Task %s created: %s", task.id, task.title)
        return ok(task_to_dict(_get_task(task.id)), status=201)

    f = TaskFilter(request.GET, queryset=_task_queryset())
    if not f.is_valid():
        raise form_errors(f.form)
    return ok_list([task_to_dict(t) for t in f.qs])


@api_view('GET', 'PUT', 'DELETE')
def task_detail(request, pk):
    task = _get_task(pk)

    if request.method == 'DELETE':
        task.soft_delete()
        logger.info("Task %s soft-deleted", task.id)
        return no_content()

    if request.method == 'PUT':
        old_status = task.status
        form = bind_form(TaskForm, json_body(request), TASK_FIELDS, instance=task)
        if not form.is_valid():
            raise form_errors(form)
        task = form.save()

        # Zmiana statusu przez PUT -> completed_at musi się zgadzać ze statusem
        if task.status != old_status:
            _task_service().set_status(task.id, TaskStatus(task.status), timezone.now())
        return ok(task_to_dict(_get_task(task.id)))

    return ok(task_to_dict(task))


@api_view('PATCH')
def task_restore(request, pk):
    task = _get_task(pk)
    task.restore()
    logger.info("Task %s restored", task.id)
    return ok(task_to_dict(task))


@api_view('POST')
def task_complete(request, pk):
    task = _get_task(pk)
    _task_service().complete_task(task.id, timezone.now())
    return ok(task_to_dict(_get_task(pk)))


@api_view('POST')
def task_reopen(request, pk):
    task = _get_task(pk)
    _task_service().reopen_task(task.id)
    return ok(task_to_dict(_get_task(pk)))


# --- Projekty ---


@api_view('GET', 'POST')
def project_collection(request):
    if request.method == 'POST':
        form = bind_form(ProjectForm, json_body(request), PROJECT_FIELDS)
        if not form.is_valid():
            raise form_errors(form)
        project = form.save()
        logger.info("Project %s created: %s", project.id, project.name)
        return ok(project_to_dict(project), status=201)

    f = ProjectFilter(request.GET, queryset=Project.objects.all())
    if not f.is_valid():
        raise form_errors(f.form)
    return ok_list([project_to_dict(p) for p in f.qs])


@api_view('GET', 'PUT', 'DELETE')
def project_detail(request, pk):
    project = _get_project(pk)

    if request.method == 'DELETE':
        project.soft_delete()
        logger.info("Project %s soft-deleted", project.id)
        return no_content()

    if request.method == 'PUT':
        form = bind_form(ProjectForm, json_body(request), PROJECT_FIELDS, instance=project)
        if not form.is_valid():
            raise form_errors(form)
        project = form.save()
        return ok(project_to_dict(project))

    tasks = project.tasks.filter(is_deleted=False).prefetch_related('tags')
    return ok(project_to_dict(project, tasks=tasks, stats=project_stats(project)))


# --- Tagi ---

@api_view('GET', 'POST')
def tag_collection(request):
    if request.method == 'POST':
        form = bind_form(TagForm, json_body(request), TAG_FIELDS)
        if not form.is_valid():
            raise form_errors(form)
        tag = form.save()
        return ok(tag_to_dict(tag), status=201)

    f = TagFilter(request.GET, queryset=Tag.objects.all())
    if not f.is_valid():
        raise form_errors(f.form)
    return ok_list([tag_to_dict(t) for t in f.qs])


@api_view('PUT', 'DELETE')
def tag_detail(request, pk):
    tag = _get_tag(pk)

    if request.method == 'DELETE':
        tag.soft_delete()
        logger.info("Tag %s soft-deleted", tag.id)
        return no_content()

    form = bind_form(TagForm, json_body(request), TAG_FIELDS, instance=tag)
    if not form.is_valid():
        raise form_errors(form)
    return ok(tag_to_dict(form.save()))
