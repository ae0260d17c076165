"""Explicit registries replacing construction of classes by name.

Configuration refers to resolvers, directive visitors and schema envelopes
by string identifiers. Each registry maps an identifier to a factory,
populated at startup and looked up while composing a schema. Unknown
identifiers and failing factories become checked errors.
"""

import inspect
import logging
import re
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from ariadne import SchemaDirectiveVisitor
from graphql import GraphQLSchema

from schemaql.core.interfaces.schema_envelope import SchemaEnvelope
from schemaql.exceptions import (
    DirectiveInstantiationError,
    EndpointConfigurationError,
    EnvelopeContractError,
    ResolverInstantiationError,
    SchemaQLError,
)

logger = logging.getLogger(__name__)

Factory = Callable[[], Any]

_TYPE_PLACEHOLDER = re.compile(r"\{[Tt]ype\}")
_TYPE_NAME_PATTERN = r"(?P<type>[_A-Za-z][_0-9A-Za-z]*)"


class Registry:
    """Mapping from identifier to a zero-argument factory."""

    kind = "object"

    def __init__(self, factories: Mapping[str, Factory] | None = None) -> None:
        """Initialize the registry.

        Args:
            factories: Optional initial identifier to factory mapping.
        """
        self._factories: dict[str, Factory] = {}
        for identifier, factory in (factories or {}).items():
            self.register(identifier, factory)

    def register(self, identifier: str, factory: Factory) -> None:
        """Register a factory under an identifier.

        Registering an identifier again replaces the previous factory.

        Args:
            identifier: The identifier used in configuration.
            factory: Zero-argument callable producing the object.
        """
        if not callable(factory):
            raise TypeError(f"Factory for {self.kind} {identifier!r} must be callable")
        self._factories[identifier] = factory

    def unregister(self, identifier: str) -> bool:
        """Remove an identifier.

        Returns:
            True if the identifier was registered, False otherwise.
        """
        return self._factories.pop(identifier, None) is not None

    def identifiers(self) -> list[str]:
        """Return registered identifiers in registration order."""
        return list(self._factories)

    def create(self, identifier: str) -> Any:
        """Create the object registered under an identifier.

        Args:
            identifier: The identifier to look up.

        Returns:
            The object produced by the factory.

        Raises:
            SchemaQLError: The registry's error type, if the identifier is
                unknown or the factory fails.
        """
        factory = self._factories.get(identifier)
        if factory is None:
            raise self._error(f"No {self.kind} registered as {identifier!r}", identifier)

        try:
            return factory()
        except Exception as e:
            raise self._error(f"Could not create {self.kind} {identifier!r}: {e}", identifier) from e

    def _error(self, message: str, identifier: str) -> SchemaQLError:
        return SchemaQLError(message)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)


class ResolverRegistry(Registry):
    """Registry of resolver objects and field resolvers.

    A factory may produce a type-level resolver object, whose attributes
    named after fields are bound as field resolvers, or a single callable
    used as a field resolver.
    """

    kind = "resolver"

    def discover(self, pattern: str) -> dict[str, str]:
        """Find type-level resolvers by naming convention.

        ``pattern`` contains a ``{type}`` placeholder standing for a GraphQL
        type name, e.g. ``"app.resolvers.{type}Resolver"``. Every registered
        identifier matching the pattern is returned under the captured type
        name. No match is not an error.

        Args:
            pattern: The resolver path pattern.

        Returns:
            Mapping of GraphQL type name to resolver identifier.

        Raises:
            EndpointConfigurationError: If the pattern has no placeholder.
        """
        regex = compile_path_pattern(pattern)
        discovered: dict[str, str] = {}
        for identifier in self._factories:
            match = regex.fullmatch(identifier)
            if match:
                discovered[match.group("type")] = identifier

        logger.debug("Discovered %d resolvers for pattern %s", len(discovered), pattern)
        return discovered

    def _error(self, message: str, identifier: str) -> SchemaQLError:
        return ResolverInstantiationError(message, identifier)


class DirectiveRegistry(Registry):
    """Registry of schema directive visitors.

    Factories return an ariadne ``SchemaDirectiveVisitor`` subclass, which
    ariadne instantiates for every schema element carrying the directive.
    """

    kind = "directive visitor"

    def register_visitor(self, identifier: str, visitor: type[SchemaDirectiveVisitor]) -> None:
        """Register a visitor class directly.

        Args:
            identifier: The identifier used in configuration.
            visitor: The SchemaDirectiveVisitor subclass.
        """
        self.register(identifier, lambda: visitor)

    def create(self, identifier: str) -> type[SchemaDirectiveVisitor]:
        visitor = super().create(identifier)
        if not (inspect.isclass(visitor) and issubclass(visitor, SchemaDirectiveVisitor)):
            raise DirectiveInstantiationError(
                f"{self.kind.capitalize()} {identifier!r} must be a SchemaDirectiveVisitor subclass",
                identifier,
            )
        return visitor

    def instantiate(self, directives: Mapping[str, str]) -> dict[str, type[SchemaDirectiveVisitor]]:
        """Create one visitor per configured directive.

        Args:
            directives: Mapping of directive name to visitor identifier.

        Returns:
            Mapping of directive name to visitor.

        Raises:
            DirectiveInstantiationError: Naming the offending directive.
        """
        visitors: dict[str, type[SchemaDirectiveVisitor]] = {}
        for directive_name, identifier in directives.items():
            try:
                visitors[directive_name] = self.create(identifier)
            except DirectiveInstantiationError as e:
                raise DirectiveInstantiationError(
                    f'Directive "@{directive_name}": {e}',
                    identifier,
                    directive=directive_name,
                ) from e
        return visitors

    def _error(self, message: str, identifier: str) -> SchemaQLError:
        return DirectiveInstantiationError(message, identifier)


class EnvelopeRegistry(Registry):
    """Registry of schema envelopes producing ready-made schemas."""

    kind = "schema envelope"

    async def get_schema(self, identifier: str) -> GraphQLSchema:
        """Ask a registered envelope for its schema.

        Args:
            identifier: The envelope identifier.

        Returns:
            The schema produced by the envelope.

        Raises:
            EnvelopeContractError: If the envelope is unknown, does not
                implement SchemaEnvelope, or returns something other than
                a GraphQLSchema.
        """
        envelope = self.create(identifier)
        if not isinstance(envelope, SchemaEnvelope):
            raise EnvelopeContractError(
                f"{type(envelope).__name__} has to implement {SchemaEnvelope.__name__}",
                identifier,
            )

        schema = envelope.get_schema()
        if inspect.isawaitable(schema):
            schema = await schema

        if not isinstance(schema, GraphQLSchema):
            raise EnvelopeContractError(
                f"Schema envelope {identifier!r} returned {type(schema).__name__}, expected GraphQLSchema",
                identifier,
            )
        return schema

    def _error(self, message: str, identifier: str) -> SchemaQLError:
        return EnvelopeContractError(message, identifier)


def compile_path_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a resolver path pattern into a regular expression.

    Args:
        pattern: Pattern with a single ``{type}`` placeholder.

    Returns:
        A regex with a named ``type`` group.
    """
    parts = _TYPE_PLACEHOLDER.split(pattern)
    if len(parts) != 2:
        raise EndpointConfigurationError(
            f"Resolver path pattern {pattern!r} must contain exactly one {{type}} placeholder"
        )
    prefix, suffix = parts
    return re.compile(re.escape(prefix) + _TYPE_NAME_PATTERN + re.escape(suffix))
