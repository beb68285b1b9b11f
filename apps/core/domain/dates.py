# apps/core/domain/dates.py
"""
Granica dnia (day boundary).

Dzień nie musi zaczynać się o północy: przy granicy 6:00 wpis o 3:00
2 stycznia należy jeszcze do 1 stycznia. "Teraz" zawsze przekazuje
wywołujący (reference_now), żeby obliczenia były deterministyczne.
"""
from datetime import date, datetime, time, timedelta, tzinfo
from typing import List, Optional, Tuple, Union

import pytz
from dateutil.parser import isoparse

from apps.core.domain.exceptions import InvalidConfiguration, InvalidDate, InvalidRange

DEFAULT_BOUNDARY_HOUR = 6

DateLike = Union[date, datetime, str]


def format_iso_date(value: date) -> str:
    """date -> 'YYYY-MM-DD'."""
    return value.isoformat()


def parse_iso_date(value: DateLike) -> date:
    """Zamienia 'YYYY-MM-DD' (lub date/datetime) na date bez czasu."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDate(f"Invalid date: {value!r}")
    try:
        return isoparse(value.strip()).date()
    except (ValueError, OverflowError):
        raise InvalidDate(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def parse_timestamp(value: DateLike) -> datetime:
    """Znacznik czasu; sama data oznacza północ tego dnia."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str) or not value.strip():
        raise InvalidDate(f"Invalid timestamp: {value!r}")
    try:
        return isoparse(value.strip())
    except (ValueError, OverflowError):
        raise InvalidDate(f"Invalid timestamp: {value!r}")


def validate_date_range(start: DateLike, end: DateLike) -> Tuple[date, date]:
    """Para (start, end) jako date; koniec przed początkiem -> InvalidRange."""
    start_day = parse_iso_date(start)
    end_day = parse_iso_date(end)
    if end_day < start_day:
        raise InvalidRange(
            f"End date {end_day.isoformat()} is before start date {start_day.isoformat()}"
        )
    return start_day, end_day


def validate_boundary_hour(boundary_hour) -> int:
    # bool to też int, ale True/False jako godzina to na pewno pomyłka
    if isinstance(boundary_hour, bool) or not isinstance(boundary_hour, int):
        raise InvalidConfiguration(
            f"Day boundary hour must be an integer, got {boundary_hour!r}"
        )
    if not 0 <= boundary_hour <= 23:
        raise InvalidConfiguration("Day boundary hour must be between 0 and 23")
    return boundary_hour


def _resolve_timezone(tz) -> Optional[tzinfo]:
    if tz is None or isinstance(tz, tzinfo):
        return tz
    try:
        return pytz.timezone(tz)
    except pytz.UnknownTimeZoneError:
        raise InvalidConfiguration(f"Unknown time zone: {tz!r}")


class EffectiveDateCalculator:
    """
    Liczy "jaki jest dzień" przy konfigurowalnej godzinie granicy.

    boundary_hour: 0-23 (0 = zwykły dzień kalendarzowy).
    tz: strefa (nazwa pytz lub tzinfo), do której przeliczamy znaczniki
        świadome strefy. Naiwne znaczniki traktujemy jako czas lokalny.
    """

    def __init__(self, boundary_hour: int = DEFAULT_BOUNDARY_HOUR, tz=None):
        self.boundary_hour = validate_boundary_hour(boundary_hour)
        self.tz = _resolve_timezone(tz)

    def local_time(self, timestamp: DateLike) -> datetime:
        ts = parse_timestamp(timestamp)
        if ts.tzinfo is not None and self.tz is not None:
            ts = ts.astimezone(self.tz)
        return ts

    def effective_date(self, timestamp: DateLike) -> date:
        ts = self.local_time(timestamp)
        day = ts.date()
        # Przed granicą -> nadal "wczoraj"
        if ts.hour < self.boundary_hour:
            day -= timedelta(days=1)
        return day

    def day_start(self, day: DateLike) -> datetime:
        """Moment rozpoczęcia efektywnego dnia (godzina granicy, w strefie kalkulatora)."""
        start = datetime.combine(parse_iso_date(day), time(hour=self.boundary_hour))
        if self.tz is None:
            return start
        if hasattr(self.tz, 'localize'):
            return self.tz.localize(start)
        return start.replace(tzinfo=self.tz)

    @staticmethod
    def effective_date_range(start: DateLike, end: DateLike) -> List[date]:
        """Wszystkie dni od start do end włącznie, rosnąco."""
        start_day, end_day = validate_date_range(start, end)
        span = (end_day - start_day).days
        return [start_day + timedelta(days=i) for i in range(span + 1)]

    def is_before(self, day: DateLike, reference_now: DateLike) -> bool:
        """Czy dzień jest przed efektywnym "dzisiaj"."""
        return parse_iso_date(day) < self.effective_date(reference_now)

    def is_today(self, day: DateLike, reference_now: DateLike) -> bool:
        return parse_iso_date(day) == self.effective_date(reference_now)


def effective_date(timestamp: DateLike, boundary_hour: int = DEFAULT_BOUNDARY_HOUR, tz=None) -> date:
    return EffectiveDateCalculator(boundary_hour, tz).effective_date(timestamp)
