"""Domain services for schemaql."""

from schemaql.core.services.registry import (
    DirectiveRegistry,
    EnvelopeRegistry,
    Registry,
    ResolverRegistry,
)
from schemaql.core.services.resolver_map_builder import ResolverMapBuilder
from schemaql.core.services.schema_builder import ExecutableSchemaBuilder
from schemaql.core.services.schema_cache import SchemaCache, parse_type_defs
from schemaql.core.services.schema_merger import SchemaMerger
from schemaql.core.services.schema_service import SchemaService
from schemaql.core.services.type_def_loader import TypeDefLoader

__all__ = [
    "SchemaService",
    # Composition steps
    "TypeDefLoader",
    "ResolverMapBuilder",
    "ExecutableSchemaBuilder",
    "SchemaMerger",
    # AST cache
    "SchemaCache",
    "parse_type_defs",
    # Registries
    "Registry",
    "ResolverRegistry",
    "DirectiveRegistry",
    "EnvelopeRegistry",
]
