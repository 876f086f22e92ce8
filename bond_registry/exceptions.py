"""Custom exception hierarchy for bond-registry."""


class BondRegistryError(Exception):
    """Base exception for all bond-registry errors."""


class ArgumentError(BondRegistryError):
    """Raised when an invocation has the wrong number or shape of arguments."""


class EntityNotFoundError(BondRegistryError):
    """Raised when a referenced key does not exist in the store."""


class BondNotFoundError(EntityNotFoundError):
    """Raised when no bond is stored under a real estate id."""


class CorruptRecordError(BondRegistryError):
    """Raised when stored bytes cannot be decoded into a record."""


class AlreadyExistsError(BondRegistryError):
    """Raised when a real estate id is already taken."""


class StoreTransportError(BondRegistryError):
    """Raised when the underlying key/value store fails a get or put."""


class UnknownOperationError(BondRegistryError):
    """Raised when an invocation names an operation that does not exist."""


class ConfigurationError(BondRegistryError):
    """Raised when configuration is invalid or missing."""


class SinkError(BondRegistryError):
    """Raised when an event sink operation fails."""
