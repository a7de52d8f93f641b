"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Input rejected before any calculation ran"""

    kind = "validation"


class InvalidDateError(ValidationError):
    """A purchase or reference date could not be parsed or normalized"""

    kind = "invalid_date"


class InvalidConfigurationError(ValidationError):
    """Installment count, closing/due day or amount outside the accepted range"""

    kind = "invalid_configuration"
