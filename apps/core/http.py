# apps/core/http.py
"""
Wspólne klocki JSON API: koperta odpowiedzi, parsowanie body, mapowanie błędów.

Sukces: {"data": ...} (listy także "count").
Błąd:   {"error": "...", "code": "..."} (+ "details" przy walidacji).
"""
import json
import logging
from functools import wraps

from django.forms.models import model_to_dict
from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.core.domain.exceptions import DegenerateTarget, DomainError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, message, code='VALIDATION_ERROR', status=400, details=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.details = details


def ok(data, status=200, **extra):
    return JsonResponse({'data': data, **extra}, status=status)


def ok_list(items, **extra):
    return JsonResponse({'data': items, 'count': len(items), **extra})


def no_content():
    return HttpResponse(status=204)


def error_response(message, code, status, details=None):
    body = {'error': message, 'code': code}
    if details:
        body['details'] = details
    return JsonResponse(body, status=status)


def json_body(request) -> dict:
    if not request.body:
        return {}
    try:
        payload = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise ApiError('Request body must be valid JSON')
    if not isinstance(payload, dict):
        raise ApiError('Request body must be a JSON object')
    return payload


def form_errors(form) -> ApiError:
    details = {field: [str(msg) for msg in messages] for field, messages in form.errors.items()}
    return ApiError('Validation failed', details=details)


def bind_form(form_class, payload: dict, field_map: dict, instance=None):
    """
    Buduje formularz z payloadu w camelCase.

    Brakujące pola biorą wartość z instancji (PUT = częściowa aktualizacja)
    albo z domyślnych wartości modelu (POST).
    """
    target = instance if instance is not None else form_class._meta.model()
    data = model_to_dict(target, fields=form_class._meta.fields)
    for key, value in data.items():
        # M2M: model_to_dict daje obiekty, formularz oczekuje pk
        if isinstance(value, list):
            data[key] = [getattr(item, "pk", item) for item in value]
    for wire_key, field in field_map.items():
        if wire_key in payload:
            data[field] = payload[wire_key]
    return form_class(data, instance=target)


def get_object(queryset, code, message, **lookup):
    """Jak get_object_or_404, ale z kodem błędu API."""
    try:
        return queryset.get(**lookup)
    except queryset.model.DoesNotExist:
        raise ApiError(message, code=code, status=404)


def query_flag(request, name) -> bool:
    return request.GET.get(name, '').lower() == 'true'


def domain_error_status(error: DomainError) -> int:
    # "Obliczenie nieokreślone" musi być odróżnialne od złych danych
    if isinstance(error, DegenerateTarget):
        return 422
    return 400


def api_view(*methods):
    """
    Dekorator widoków JSON: dozwolone metody, brak CSRF (API bez logowania)
    i zamiana wyjątków na odpowiedzi z kodem błędu.
    """
    def decorator(view):
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            try:
                return view(request, *args, **kwargs)
            except ApiError as e:
                logger.warning("%s %s -> %s %s", request.method, request.path, e.status, e.code)
                return error_response(e.message, e.code, e.status, e.details)
            except DomainError as e:
                status = domain_error_status(e)
                logger.warning("%s %s -> %s %s: %s", request.method, request.path, status, e.code, e.message)
                return error_response(e.message, e.code, status)
            except Exception:
                logger.exception("Unhandled error in %s (%s %s)", view.__name__, request.method, request.path)
                return error_response('Internal server error', 'INTERNAL_ERROR', 500)

        return csrf_exempt(require_http_methods(list(methods))(wrapper))

    return decorator
