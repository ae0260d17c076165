"""Document serializer interface."""

from typing import Protocol

from graphql import DocumentNode


class ISerializer(Protocol):
    """Contract for storing parsed type definitions in an AST cache backend.

    A serializer turns the ``DocumentNode`` parsed from concatenated SDL into
    bytes and restores it without parsing the SDL again. Whatever cannot be
    restored into a document (truncated, foreign or tampered entries) is a
    SerializationError, which SchemaCache handles as a cache miss.
    """

    def serialize(self, document: DocumentNode) -> bytes:
        """Encode a parsed document.

        Raises:
            SerializationError: If the document cannot be encoded.
        """
        ...

    def deserialize(self, data: bytes) -> DocumentNode:
        """Restore a parsed document.

        Raises:
            SerializationError: If the data does not hold a valid document.
        """
        ...
