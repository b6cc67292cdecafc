class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigurationError(DomainError):
    """Raised when tenant configuration (business hours) cannot be used."""


class LookupFailure(DomainError):
    """Raised when a related record (tenant, profile) cannot be found."""
