# apps/measurements/domain/entities.py
import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from apps.core.domain.dates import parse_iso_date
from apps.core.domain.exceptions import InvalidValue

Number = Union[int, float, Decimal, str]


def as_number(value: Number) -> float:
    """Wartości w bazie to stringi dziesiętne ("82.50"). NaN/Infinity odrzucamy."""
    if isinstance(value, bool):
        raise InvalidValue(f"Not a number: {value!r}")
    try:
        number = float(Decimal(str(value)))
    except (InvalidOperation, ValueError):
        raise InvalidValue(f"Not a number: {value!r}")
    if not math.isfinite(number):
        raise InvalidValue(f"Value must be finite: {value!r}")
    return number


@dataclass(frozen=True)
class TargetEntity:
    start_value: float
    goal_value: float
    start_date: date
    goal_date: date
    reach_goal_value: Optional[float] = None  # opcjonalny cel "ambitny"

    @classmethod
    def from_record(cls, start_value, goal_value, start_date, goal_date, reach_goal_value=None):
        return cls(
            start_value=as_number(start_value),
            goal_value=as_number(goal_value),
            start_date=parse_iso_date(start_date),
            goal_date=parse_iso_date(goal_date),
            reach_goal_value=as_number(reach_goal_value) if reach_goal_value is not None else None,
        )

    @property
    def total_days(self) -> int:
        return (self.goal_date - self.start_date).days

    @property
    def is_decreasing(self) -> bool:
        # np. redukcja wagi
        return self.goal_value < self.start_value


@dataclass(frozen=True)
class ProgressPoint:
    date: date
    expected_value: float


@dataclass(frozen=True)
class Deviation:
    value: float
    is_above_target: bool
