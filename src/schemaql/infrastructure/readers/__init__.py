"""Resource readers for type definition locators."""

from schemaql.infrastructure.readers.resources import ResourceReader

__all__ = [
    "ResourceReader",
]
