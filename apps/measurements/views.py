# apps/measurements/views.py
import logging

from django.conf import settings

from apps.core.domain.dates import parse_iso_date
from apps.core.domain.exceptions import InvalidConfiguration
from apps.core.http import (
    ApiError, api_view, bind_form, form_errors, get_object, json_body, no_content, ok, ok_list,
)
from apps.core.services import SettingsService
from .filters import MeasurementEntryFilter
from .forms import MeasurementEntryForm, MeasurementForm, MeasurementTargetForm
from .models import Measurement, MeasurementEntry
from .serializers import (
    ENTRY_FIELDS, MEASUREMENT_FIELDS, TARGET_FIELDS,
    entry_to_dict, graph_data_to_dict, measurement_to_dict, progress_to_dict, target_to_dict,
)
from .services import MeasurementService

logger = logging.getLogger(__name__)


def _get_measurement(pk):
    return get_object(Measurement.objects.all(), 'MEASUREMENT_NOT_FOUND', 'Measurement not found', pk=pk)


def _get_target(measurement, target_id):
    return get_object(measurement.targets.all(), 'TARGET_NOT_FOUND', 'Target not found', pk=target_id)


def _optional_date(request, name):
    value = request.GET.get(name)
    return parse_iso_date(value) if value else None


def _interval(request):
    """interval: brak = co dzień, 'auto' = automatyczny krok, liczba = co N dni."""
    value = request.GET.get('interval')
    if not value:
        return 1
    if value == 'auto':
        return None
    try:
        return int(value)
    except ValueError:
        raise InvalidConfiguration("interval must be a positive integer or 'auto'")


@api_view('GET', 'POST')
def measurement_collection(request):
    if request.method == 'POST':
        form = bind_form(MeasurementForm, json_body(request), MEASUREMENT_FIELDS)
        if not form.is_valid():
            raise form_errors(form)
        measurement = form.save()
        logger.info("Measurement %s created: %s", measurement.id, measurement.name)
        return ok(measurement_to_dict(measurement), status=201)

    limit = settings.HABITARCADE['MEASUREMENT_LIST_ENTRIES']
    service = MeasurementService()
    data = []
    for measurement in Measurement.objects.all():
        entries = measurement.entries.order_by('-date')[:limit]
        target = service.current_target(measurement)
        data.append(measurement_to_dict(measurement, entries=entries, targets=[target] if target else []))
    return ok_list(data)


@api_view('GET', 'PUT', 'DELETE')
def measurement_detail(request, pk):
    measurement = _get_measurement(pk)

    if request.method == 'DELETE':
        # Wpisy i cele lecą kaskadowo
        measurement.delete()
        logger.info("Measurement %s deleted", pk)
        return no_content()

    if request.method == 'PUT':
        form = bind_form(MeasurementForm, json_body(request), MEASUREMENT_FIELDS, instance=measurement)
        if not form.is_valid():
            raise form_errors(form)
        measurement = form.save()
        return ok(measurement_to_dict(measurement))

    f = MeasurementEntryFilter(request.GET, queryset=measurement.entries.order_by('-date'))
    if not f.is_valid():
        raise form_errors(f.form)
    return ok(measurement_to_dict(measurement, entries=f.qs, targets=measurement.targets.all()))


@api_view('GET', 'POST')
def measurement_entries(request, pk):
    measurement = _get_measurement(pk)

    if request.method == 'POST':
        payload = json_body(request)
        if not payload.get('date') or payload.get('value') is None:
            raise ApiError('Date and value are required')
        form = bind_form(MeasurementEntryForm, payload, ENTRY_FIELDS)
        if not form.is_valid():
            raise form_errors(form)
        entry, _ = MeasurementService().record_entry(
            measurement, form.cleaned_data['date'], form.cleaned_data['value'],
        )
        return ok(entry_to_dict(entry), status=201)

    f = MeasurementEntryFilter(request.GET, queryset=measurement.entries.order_by('-date'))
    if not f.is_valid():
        raise form_errors(f.form)
    entries = f.qs
    limit = request.GET.get('limit')
    if limit:
        if not limit.isdigit():
            raise ApiError("limit must be a non-negative integer")
        entries = entries[:int(limit)]
    return ok_list([entry_to_dict(e) for e in entries])


@api_view('DELETE')
def measurement_entry_detail(request, pk, entry_id):
    entry = get_object(MeasurementEntry.objects.all(), 'ENTRY_NOT_FOUND', 'Entry not found',
                       pk=entry_id, measurement_id=pk)
    entry.delete()
    logger.info("Measurement %s entry %s deleted", pk, entry_id)
    return no_content()


@api_view('GET', 'POST')
def measurement_targets(request, pk):
    measurement = _get_measurement(pk)

    if request.method == 'POST':
        form = bind_form(MeasurementTargetForm, json_body(request), TARGET_FIELDS)
        if not form.is_valid():
            raise form_errors(form)
        target = form.save(commit=False)
        target.measurement = measurement
        target.save()
        logger.info("Measurement %s target %s created", measurement.id, target.id)
        return ok(target_to_dict(target), status=201)

    return ok_list([target_to_dict(t) for t in measurement.targets.all()])


@api_view('PUT', 'DELETE')
def measurement_target_detail(request, pk, target_id):
    measurement = _get_measurement(pk)
    target = _get_target(measurement, target_id)

    if request.method == 'DELETE':
        target.delete()
        logger.info("Measurement %s target %s deleted", pk, target_id)
        return no_content()

    form = bind_form(MeasurementTargetForm, json_body(request), TARGET_FIELDS, instance=target)
    if not form.is_valid():
        raise form_errors(form)
    target = form.save()
    return ok(target_to_dict(target))


@api_view('GET')
def measurement_graph_data(request, pk):
    measurement = _get_measurement(pk)
    graph = MeasurementService().graph_data(
        measurement,
        start=_optional_date(request, 'startDate'),
        end=_optional_date(request, 'endDate'),
        interval_days=_interval(request),
    )
    return ok(graph_data_to_dict(graph))


@api_view('GET')
def measurement_progress(request, pk):
    measurement = _get_measurement(pk)
    service = MeasurementService()

    target = service.current_target(measurement)
    if target is None:
        raise ApiError('Measurement has no target', code='TARGET_NOT_FOUND', status=404)

    day = _optional_date(request, 'date') or SettingsService().effective_today()
    return ok(progress_to_dict(service.progress_snapshot(target, day)))
