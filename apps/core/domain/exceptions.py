# apps/core/domain/exceptions.py


class DomainError(Exception):
    """Bazowy błąd warstwy domenowej (kalkulatory dat i celów)."""
    code = 'DOMAIN_ERROR'

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class InvalidConfiguration(DomainError):
    """Np. godzina granicy dnia spoza zakresu 0-23."""
    code = 'INVALID_CONFIGURATION'


class InvalidRange(DomainError):
    """Zakres dat z końcem przed początkiem."""
    code = 'INVALID_RANGE'


class InvalidDate(DomainError):
    """Nie da się odczytać daty (oczekiwany format YYYY-MM-DD)."""
    code = 'INVALID_DATE'


class DegenerateTarget(DomainError):
    """Cel bez rozpiętości (ta sama data lub wartość startu i mety)."""
    code = 'DEGENERATE_TARGET'


class LayoutInUse(DomainError):
    """Aktywnego układu dashboardu nie można usunąć."""
    code = 'CANNOT_DELETE_ACTIVE'


class InvalidValue(DomainError):
    """Wartość liczbowa nieczytelna albo nieskończona (NaN, Infinity)."""
    code = 'INVALID_VALUE'
