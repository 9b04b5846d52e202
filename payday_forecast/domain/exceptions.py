"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidFrequencyError(DomainException):
    """Recurrence frequency cannot be used to compute a next occurrence"""

    pass


class InvalidRangeError(DomainException):
    """Date range or window length is empty or inverted"""

    pass


class DivisionUndefinedError(DomainException):
    """Health ratio requested against zero monthly income"""

    pass


class EmptyHistoryError(DomainException):
    """Summary query needs at least one payday record"""

    pass


class UnknownBillError(DomainException):
    """Bill id not present in the snapshot"""

    pass


class DuplicateBillError(DomainException):
    """Bill id already present in the snapshot"""

    pass


class BillAlreadyPaidError(DomainException):
    """One-off bill was already settled"""

    pass


class InvalidActionError(DomainException):
    """Action is unsupported or missing the payload its type requires"""

    pass
