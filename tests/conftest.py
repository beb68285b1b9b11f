import json
from datetime import datetime, timezone as dt_timezone

import pytest
from django.utils import timezone


class JsonClient:
    """Cienka nakładka na klienta testowego Django: JSON w obie strony."""

    def __init__(self, client):
        self.client = client

    def get(self, path, params=None):
        return self.client.get(path, params or {})

    def post(self, path, data=None):
        return self.client.post(path, json.dumps(data or {}), content_type='application/json')

    def put(self, path, data=None):
        return self.client.put(path, json.dumps(data or {}), content_type='application/json')

    def patch(self, path, data=None):
        return self.client.patch(path, json.dumps(data or {}), content_type='application/json')

    def delete(self, path):
        return self.client.delete(path)


@pytest.fixture
def api(client):
    return JsonClient(client)


@pytest.fixture
def freeze_now(monkeypatch):
    """Ustawia "teraz" serwera (naiwne daty traktujemy jako UTC)."""
    def freeze(value: datetime) -> datetime:
        fixed = value if timezone.is_aware(value) else value.replace(tzinfo=dt_timezone.utc)
        monkeypatch.setattr(timezone, 'now', lambda: fixed)
        return fixed
    return freeze
