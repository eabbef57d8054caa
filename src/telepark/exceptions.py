class TeleParkError(Exception):
    """Base exception for meter management errors."""


class MeterNotFoundError(TeleParkError):
    """Raised when a meter id is not present in the store."""


class DuplicateMeterError(TeleParkError):
    """Raised when adding a meter whose id is already stored."""


class InvalidMeterStatusError(TeleParkError):
    """Raised when a status value is not one of the known meter states."""
