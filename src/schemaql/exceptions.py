"""Exceptions raised while composing endpoint schemas."""


class SchemaQLError(Exception):
    """Base exception for schemaql."""

    pass


class EndpointConfigurationError(SchemaQLError):
    """Raised when an endpoint configuration is malformed."""

    def __init__(self, message: str, endpoint: str | None = None):
        super().__init__(message)
        self.endpoint = endpoint


class EmptySchemaConfigurationError(EndpointConfigurationError):
    """Raised when an endpoint configuration produces no schema at all."""

    pass


class UnknownEndpointError(SchemaQLError, LookupError):
    """Raised when no configuration exists for the requested endpoint."""

    def __init__(self, endpoint: str):
        super().__init__(f'No schema found for endpoint "{endpoint}"')
        self.endpoint = endpoint


class ResourceNotFoundError(SchemaQLError):
    """Raised when a type definition resource cannot be read."""

    def __init__(self, locator: str, reason: str | None = None):
        message = f'Type definition resource "{locator}" could not be read'
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.locator = locator


class ResolverInstantiationError(SchemaQLError):
    """Raised when a registered resolver cannot be constructed."""

    def __init__(self, message: str, identifier: str):
        super().__init__(message)
        self.identifier = identifier


class DirectiveInstantiationError(SchemaQLError):
    """Raised when a schema directive visitor cannot be constructed."""

    def __init__(self, message: str, identifier: str, directive: str | None = None):
        super().__init__(message)
        self.identifier = identifier
        self.directive = directive


class EnvelopeContractError(SchemaQLError):
    """Raised when a schema envelope cannot produce an executable schema."""

    def __init__(self, message: str, identifier: str):
        super().__init__(message)
        self.identifier = identifier


class SchemaBuildError(SchemaQLError):
    """Raised when type definitions cannot be turned into a schema."""

    pass


class SchemaMergeConflictError(SchemaQLError):
    """Raised when composed schemas define incompatible types or fields."""

    def __init__(self, message: str, type_name: str | None = None):
        super().__init__(message)
        self.type_name = type_name


class SerializationError(SchemaQLError):
    """Raised when serialization or deserialization fails."""

    pass
