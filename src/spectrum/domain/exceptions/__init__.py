"""Domain exceptions."""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    # Hey future me, message is kept as an attribute so callers can log it without
    # parsing str(exception). Never raise this directly, pick a subclass.
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class EntityNotFoundException(DomainException):
    """Raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(f"{entity_type} with id {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class ValidationError(DomainException):
    """Input validation failed.

    Raised when a record from the catalog source lacks a field the
    reconcilers need (missing statistics, blank title, ...).

    Example:
        raise ValidationError("Album 42 has no statistics")
    """

    pass


class ExternalServiceError(DomainException):
    """The catalog source returned an error or an undecodable response.

    Raised inside the Lidarr client and swallowed at its public methods,
    which log it and return an empty result.
    """

    pass


class ConfigurationError(DomainException):
    """Application misconfiguration.

    Example:
        raise ConfigurationError("LIDARR__API_KEY is not set")
    """

    pass


__all__ = [
    "DomainException",
    "EntityNotFoundException",
    "ValidationError",
    "ExternalServiceError",
    "ConfigurationError",
]
