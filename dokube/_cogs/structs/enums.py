"""
Enumerations with their own text representation on the wire.

Both enumerations are parsed strictly: an unknown value is an error,
not a silently defaulted value. The only exception is the cluster state,
where an empty value is the same as the explicit "invalid" state.
"""
import enum


class UnknownDayError(ValueError):
    pass


class InvalidDayError(ValueError):
    pass


class UnknownClusterStateError(ValueError):
    pass


class MaintenanceDay(enum.IntEnum):
    """ The day of the week of a maintenance window (or any day). """
    ANY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, text: str) -> 'MaintenanceDay':
        try:
            return {str(day): day for day in cls}[text.lower()]
        except (KeyError, AttributeError):
            raise UnknownDayError(f"unknown day: {text!r}") from None


def to_day(text: str) -> MaintenanceDay:
    """ Convert a day name (case-insensitive) to a maintenance day. """
    return MaintenanceDay.parse(text)


def day_name(day: int) -> str:
    """ Convert a day's ordinal (0 for "any", 1..7 for Monday..Sunday) to its name. """
    if isinstance(day, bool) or not MaintenanceDay.ANY <= day <= MaintenanceDay.SUNDAY:
        raise InvalidDayError(f"invalid day: {day}")
    return str(MaintenanceDay(day))


class ClusterState(str, enum.Enum):
    PROVISIONING = 'provisioning'
    RUNNING = 'running'
    DEGRADED = 'degraded'
    ERROR = 'error'
    DELETED = 'deleted'
    UPGRADING = 'upgrading'
    INVALID = 'invalid'

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str | None) -> 'ClusterState':
        if not text:
            return cls.INVALID
        try:
            return cls(text.lower())
        except (ValueError, AttributeError):
            raise UnknownClusterStateError(f"unknown cluster state {text!r}") from None
