"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes for API consumers.
NOT_FOUND = "NOT_FOUND"
DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
VALIDATION_ERROR = "VALIDATION_ERROR"
INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    pass


class TemplateNotFoundError(NotFoundError):
    """Raised when an order type identifier is not in the template registry."""

    def __init__(self, type_id: str):
        super().__init__(f"Order template '{type_id}' not found")
        self.type_id = type_id


class DuplicateResourceError(DomainError):
    """Raised when attempting to create or rename a resource onto a name that is already taken."""

    pass


class DomainValidationError(DomainError):
    """Raised when business rules or request validation fail (e.g. missing required fields)."""

    pass


class InternalError(DomainError):
    """Raised when a backing service (store, broker) fails. Reported to clients generically."""

    pass


class BrokerError(InternalError):
    """Raised when a message could not be published to the broker."""

    pass


class BrokerUnavailableError(BrokerError):
    """Raised when the broker is disabled or has not been connected."""

    pass


class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""

    pass
