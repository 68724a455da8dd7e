"""
Custom exceptions for storecast operations.

Every scheduling failure is raised as one of these typed errors. A run that
raises never hands back a partial timeline. Each class carries a stable
``code`` that the CLI prints alongside the message.
"""


class StorecastError(Exception):
    """Base exception for all storecast errors."""

    code = "STORECAST_ERROR"


class ValidationError(StorecastError):
    """Raised when an input value fails validation."""

    code = "VALIDATION_ERROR"


class InvalidTimeFormat(ValidationError):
    """Raised for a malformed or out-of-range HH:MM[:SS] value."""

    code = "INVALID_TIME_FORMAT"


class InvalidWindow(ValidationError):
    """Raised when a broadcast window does not end after it starts."""

    code = "INVALID_WINDOW"


class NonPositiveDuration(ValidationError):
    """Raised when a clip duration is zero or negative."""

    code = "NON_POSITIVE_DURATION"


class NonPositiveFrequency(ValidationError):
    """Raised when a normal clip asks for fewer than one occurrence."""

    code = "NON_POSITIVE_FREQUENCY"


class InvalidClipDescriptor(ValidationError):
    """Raised when a catalog entry is missing fields or carries malformed ones."""

    code = "INVALID_CLIP"


class BusinessRuleError(StorecastError):
    """Raised when business rule violation occurs."""

    code = "BUSINESS_RULE_ERROR"


class ScheduleError(BusinessRuleError):
    """Raised when a catalog cannot be turned into a broadcast day."""

    code = "SCHEDULE_ERROR"


class ScheduleOverbooked(ScheduleError):
    """Raised when committed clip time already fills the broadcast duration."""

    code = "SCHEDULE_OVERBOOKED"


class NoFillerAvailable(ScheduleError):
    """Raised when time is left to pad but the catalog has no filler clips."""

    code = "NO_FILLER_AVAILABLE"


class ScheduleOverflow(ScheduleError):
    """Raised when the finished timeline would run past midnight."""

    code = "SCHEDULE_OVERFLOW"


class WindowUnreachable(ScheduleError):
    """Raised when a fixed-window occurrence cannot start inside its window."""

    code = "WINDOW_UNREACHABLE"


class InvalidProgramId(ValidationError):
    """Raised when a program id cannot be used as an artifact file name."""

    code = "INVALID_PROGRAM_ID"
