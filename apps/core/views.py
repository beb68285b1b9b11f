# apps/core/views.py
import logging

from apps.core.domain.dates import parse_iso_date
from apps.core.http import ApiError, api_view, form_errors, get_object, json_body, no_content, ok, ok_list
from .dashboard import DashboardService, default_layout
from .export import build_export
from .forms import LayoutForm
from .models import DashboardLayout
from .serializers import (
    habit_matrix_to_list, kanban_to_list, layout_to_dict, setting_to_dict, summary_to_dict,
)
from .services import DEFAULT_SETTINGS, SettingsService

logger = logging.getLogger(__name__)


def _layout_form(request):
    form = LayoutForm(json_body(request))
    if not form.is_valid():
        raise form_errors(form)
    return form.cleaned_data


def _optional_date(request, name):
    value = request.GET.get(name)
    return parse_iso_date(value) if value else None


# --- Ustawienia ---

@api_view('GET', 'PUT')
def settings_collection(request):
    service = SettingsService()
    if request.method == 'PUT':
        return ok(service.bulk_update(json_body(request)))
    return ok(service.get_all())


@api_view('GET')
def settings_defaults(request):
    return ok(dict(DEFAULT_SETTINGS))


@api_view('POST')
def settings_reset(request):
    SettingsService().reset_all()
    return ok(dict(DEFAULT_SETTINGS), message='All settings reset to defaults')


@api_view('GET')
def settings_export(request):
    return ok(build_export())


@api_view('GET', 'PUT', 'DELETE')
def setting_detail(request, key):
    service = SettingsService()

    if request.method == 'PUT':
        payload = json_body(request)
        if 'value' not in payload:
            raise ApiError('Value is required')
        setting = service.set(key, payload['value'])
        return ok(setting_to_dict(setting.key, setting.value))

    if request.method == 'DELETE':
        deleted = service.reset(key)
        # Klucz z wartością domyślną: zwracamy tę wartość
        if key in DEFAULT_SETTINGS:
            return ok(setting_to_dict(key, DEFAULT_SETTINGS[key], is_default=True))
        if not deleted:
            raise ApiError('Setting not found', code='SETTING_NOT_FOUND', status=404)
        return no_content()

    try:
        value, is_default = service.get(key)
    except KeyError:
        raise ApiError('Setting not found', code='SETTING_NOT_FOUND', status=404)
    return ok(setting_to_dict(key, value, is_default=is_default))


# --- Dashboard ---

@api_view('GET', 'PUT')
def dashboard_layout(request):
    service = DashboardService()

    if request.method == 'PUT':
        data = _layout_form(request)
        return ok(layout_to_dict(service.save_layout(data['layout'], data['name'] or None)))

    layout = service.get_active_layout()
    if layout is None:
        # Nic nie zapisano - układ domyślny (bez zapisu do bazy)
        return ok({'id': None, 'name': 'default', 'layout': default_layout(), 'isActive': True})
    return ok(layout_to_dict(layout))


@api_view('POST')
def dashboard_layout_reset(request):
    return ok(layout_to_dict(DashboardService().reset_layout()))


@api_view('GET', 'POST')
def dashboard_layouts(request):
    service = DashboardService()

    if request.method == 'POST':
        data = _layout_form(request)
        if not data['name']:
            raise ApiError('Name and layout are required')
        layout = service.create_layout(data['name'], data['layout'], set_active=data['setActive'])
        return ok(layout_to_dict(layout), status=201)

    return ok_list([layout_to_dict(layout) for layout in DashboardLayout.objects.order_by('-updated_at')])


@api_view('PUT')
def dashboard_layout_activate(request, pk):
    layout = get_object(DashboardLayout.objects.all(), 'LAYOUT_NOT_FOUND', 'Layout not found', pk=pk)
    return ok(layout_to_dict(DashboardService().activate_layout(layout)))


@api_view('DELETE')
def dashboard_layout_delete(request, pk):
    layout = get_object(DashboardLayout.objects.all(), 'LAYOUT_NOT_FOUND', 'Layout not found', pk=pk)
    DashboardService().delete_layout(layout)
    return no_content()


@api_view('GET')
def dashboard_summary(request):
    return ok(summary_to_dict(DashboardService().summary()))


@api_view('GET')
def dashboard_widget(request, widget_id):
    service = DashboardService()
    start = _optional_date(request, 'startDate')
    end = _optional_date(request, 'endDate')

    if widget_id == 'habit-matrix':
        return ok(habit_matrix_to_list(service.habit_matrix(start, end)))

    if widget_id == 'weekly-kanban':
        week_start, week_end, tasks = service.weekly_kanban(start, end)
        return ok(kanban_to_list(tasks), weekStart=week_start.isoformat(), weekEnd=week_end.isoformat())

    raise ApiError('Widget not found', code='WIDGET_NOT_FOUND', status=404)
