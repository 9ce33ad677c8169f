"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class WeightTableFormatError(DomainException):
    """Stored weight document is missing required fields or holds non-numeric values"""

    pass
