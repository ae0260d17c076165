"""Service configuration entity."""

from dataclasses import dataclass
from datetime import timedelta


@dataclass
class SchemaQLConfig:
    """Schema service configuration.

    Controls the two cache levels used while composing endpoint schemas:

    First-level cache:
        Maps an endpoint name to its composed executable schema for the
        lifetime of the process (or until invalidated).

    AST cache:
        Content-addressed store of parsed type definition documents,
        shared between endpoints that concatenate the same SDL texts.
    """

    key_prefix: str = "schemaql"

    # AST cache settings
    ast_cache_enabled: bool = True
    ast_cache_ttl: timedelta | None = None  # None = entries never expire

    # First-level (per endpoint) cache
    first_level_cache_enabled: bool = True
