class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when command arguments are invalid."""


class ConfigurationError(Exception):
    """Raised when required startup settings are missing or malformed."""
