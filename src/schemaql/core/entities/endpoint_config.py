"""Endpoint configuration entities."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from schemaql.exceptions import EndpointConfigurationError

# camelCase keys accepted for compatibility with existing settings files
_KEY_ALIASES = {
    "typeDefs": "type_defs",
    "resolverPathPattern": "resolver_path_pattern",
    "schemaDirectives": "schema_directives",
    "schemaEnvelope": "schema_envelope",
}


def _normalize_keys(raw: Mapping[str, Any]) -> dict[str, Any]:
    return {_KEY_ALIASES.get(key, key): value for key, value in raw.items()}


def _frozen(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class SchemaSource:
    """One schema source of an endpoint.

    Either an envelope source (``schema_envelope`` names a registered
    envelope producing a ready-made schema) or an inline source carrying
    type definitions plus optional resolvers and directives.
    """

    type_defs: str | None = None
    resolver_path_pattern: str | None = None
    resolvers: Mapping[str, Any] = field(default_factory=lambda: _frozen(None))
    schema_directives: Mapping[str, str] = field(default_factory=lambda: _frozen(None))
    schema_envelope: str | None = None

    @property
    def is_envelope(self) -> bool:
        """Check if this source defers to a schema envelope."""
        return self.schema_envelope is not None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], endpoint: str | None = None) -> "SchemaSource":
        """Create a SchemaSource from a raw configuration mapping.

        Args:
            raw: The source configuration.
            endpoint: Endpoint name, used in error messages.

        Returns:
            A new SchemaSource instance.

        Raises:
            EndpointConfigurationError: If the mapping defines neither or
                both of ``type_defs`` and ``schema_envelope``.
        """
        if not isinstance(raw, Mapping):
            raise EndpointConfigurationError(
                f"Schema source must be a mapping, got {type(raw).__name__}",
                endpoint=endpoint,
            )

        options = _normalize_keys(raw)
        type_defs = options.get("type_defs")
        envelope = options.get("schema_envelope")

        if envelope is not None and type_defs is not None:
            raise EndpointConfigurationError(
                "Schema source cannot define both type_defs and schema_envelope",
                endpoint=endpoint,
            )
        if envelope is None and type_defs is None:
            raise EndpointConfigurationError(
                "Schema source must define either type_defs or schema_envelope",
                endpoint=endpoint,
            )

        resolvers = options.get("resolvers") or {}
        directives = options.get("schema_directives") or {}
        if not isinstance(resolvers, Mapping) or not isinstance(directives, Mapping):
            raise EndpointConfigurationError(
                "resolvers and schema_directives must be mappings",
                endpoint=endpoint,
            )

        return cls(
            type_defs=type_defs,
            resolver_path_pattern=options.get("resolver_path_pattern"),
            resolvers=_frozen(resolvers),
            schema_directives=_frozen(directives),
            schema_envelope=envelope,
        )


@dataclass(frozen=True)
class EndpointConfiguration:
    """Configuration of a named GraphQL endpoint.

    Attributes:
        name: The endpoint name.
        schemas: Schema sources, composed in order.
        schema_directives: Endpoint-level directive overrides. Applied after
            the per-source directives and win on name collision.
    """

    name: str
    schemas: tuple[SchemaSource, ...] = ()
    schema_directives: Mapping[str, str] = field(default_factory=lambda: _frozen(None))

    @classmethod
    def from_mapping(cls, name: str, raw: Mapping[str, Any]) -> "EndpointConfiguration":
        """Create an EndpointConfiguration from raw settings.

        A mapping without a ``schemas`` key is itself the single schema
        source of the endpoint.

        Args:
            name: The endpoint name.
            raw: The endpoint settings.

        Returns:
            A new EndpointConfiguration instance.
        """
        if not isinstance(raw, Mapping):
            raise EndpointConfigurationError(
                f"Endpoint configuration must be a mapping, got {type(raw).__name__}",
                endpoint=name,
            )

        options = _normalize_keys(raw)
        if "schemas" not in options:
            return cls(name=name, schemas=(SchemaSource.from_mapping(raw, endpoint=name),))

        sources = options["schemas"] or []
        if isinstance(sources, (str, bytes)) or not isinstance(sources, (list, tuple)):
            raise EndpointConfigurationError("schemas must be a list", endpoint=name)

        directives = options.get("schema_directives") or {}
        if not isinstance(directives, Mapping):
            raise EndpointConfigurationError("schema_directives must be a mapping", endpoint=name)

        return cls(
            name=name,
            schemas=tuple(SchemaSource.from_mapping(source, endpoint=name) for source in sources),
            schema_directives=_frozen(directives),
        )
