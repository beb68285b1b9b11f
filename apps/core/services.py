# apps/core/services.py
import logging
from datetime import date

from django.conf import settings
from django.utils import timezone

from apps.core.domain.dates import EffectiveDateCalculator, validate_boundary_hour
from apps.core.domain.exceptions import InvalidConfiguration
from .models import Setting

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    'dayBoundaryHour': settings.HABITARCADE['DEFAULT_DAY_BOUNDARY_HOUR'],
    'theme': 'dark',
    'defaultView': 'today',
    'weekStartDay': 0,  # 0 = niedziela
    'showCompletedTasks': True,
    'showDeletedItems': False,
    'habitMatrixWeeks': 4,
    'kanbanDays': 7,
    'autoSyncInterval': 30000,  # ms
    'notificationsEnabled': False,
}

THEMES = ('light', 'dark', 'auto')


def _as_int(value, message):
    if isinstance(value, bool):
        raise InvalidConfiguration(message)
    # 6.0 jest OK, 6.5 nie (int() po cichu by obciął)
    if isinstance(value, float) and not value.is_integer():
        raise InvalidConfiguration(message)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidConfiguration(message)


class SettingsService:
    """Ustawienia instalacji: wartości domyślne + nadpisania z bazy."""

    def validate(self, key, value):
        """Sprawdza i normalizuje wartość; zwraca to, co zapiszemy."""
        if key == 'dayBoundaryHour':
            hour = _as_int(value, "Day boundary hour must be between 0 and 23")
            return validate_boundary_hour(hour)

        if key == 'weekStartDay':
            day = _as_int(value, "Week start day must be between 0 (Sunday) and 6 (Saturday)")
            if not 0 <= day <= 6:
                raise InvalidConfiguration("Week start day must be between 0 (Sunday) and 6 (Saturday)")
            return day

        if key == 'theme' and value not in THEMES:
            raise InvalidConfiguration("Theme must be light, dark, or auto")

        return value

    def get_all(self) -> dict:
        merged = dict(DEFAULT_SETTINGS)
        for setting in Setting.objects.all():
            merged[setting.key] = setting.value
        return merged

    def get(self, key):
        """Zwraca (wartość, czy_domyślna). KeyError gdy brak klucza."""
        setting = Setting.objects.filter(key=key).first()
        if setting is not None:
            return setting.value, False
        if key in DEFAULT_SETTINGS:
            return DEFAULT_SETTINGS[key], True
        raise KeyError(key)

    def set(self, key, value) -> Setting:
        value = self.validate(key, value)
        setting, created = Setting.objects.update_or_create(key=key, defaults={'value': value})
        logger.info("Setting %s %s: %r", key, 'created' if created else 'updated', value)
        return setting

    def bulk_update(self, values: dict) -> dict:
        # Najpierw walidacja wszystkiego, żeby nie zapisać połowy
        cleaned = {key: self.validate(key, value) for key, value in values.items()}
        for key, value in cleaned.items():
            Setting.objects.update_or_create(key=key, defaults={'value': value})
        logger.info("Bulk settings update: %s", ', '.join(sorted(cleaned)))
        return self.get_all()

    def reset(self, key) -> bool:
        deleted, _ = Setting.objects.filter(key=key).delete()
        if deleted:
            logger.info("Setting %s reset to default", key)
        return bool(deleted)

    def reset_all(self):
        Setting.objects.all().delete()
        logger.info("All settings reset to defaults")

    def get_day_boundary_hour(self) -> int:
        value, _ = self.get('dayBoundaryHour')
        return validate_boundary_hour(_as_int(value, "Stored day boundary hour is invalid"))

    def get_week_start_day(self) -> int:
        value, _ = self.get('weekStartDay')
        return _as_int(value, "Stored week start day is invalid")

    def get_calculator(self) -> EffectiveDateCalculator:
        return EffectiveDateCalculator(self.get_day_boundary_hour(), tz=settings.TIME_ZONE)

    def effective_today(self, reference_now=None) -> date:
        """Dzisiejszy dzień wg granicy dnia; "teraz" = czas serwera, o ile nie podano."""
        return self.get_calculator().effective_date(reference_now or timezone.now())
